"""Core data handling: CSV reading, normalization, transformation and the admin form."""
from core.admin_form import AdminFormController
from core.flags import YesNo, is_loose_true, parse_yes_no

__all__ = ['AdminFormController', 'YesNo', 'is_loose_true', 'parse_yes_no']

"""Directory entity models."""
from models.company import Company, Founder
from models.member import Member
from models.partner import Partner

__all__ = ['Company', 'Founder', 'Member', 'Partner']

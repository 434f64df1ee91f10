"""Admin view model for listing, adding, editing and deleting startups.

The controller holds the same state the admin page keeps client side: a
``list`` view and a ``form`` view whose ``mode`` is ``add`` or ``edit``. It
talks to the startup routes through a client object (see
``services.api_client.StartupsAPIClient``) and never touches NocoDB directly.

Delayed transitions (form reset after an add, return to the list after an
edit) are recorded in ``scheduled`` as ``(action, seconds)`` and performed by
``run_scheduled()``, so the caller owns the timer.
"""
import base64
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

BATCH_PATTERN = re.compile(r'^(WS|SS)\d{2}$')
BATCH_WARNING = 'Batch must follow format: WS23 or SS24'
MAX_IMAGE_BYTES = 5 * 1024 * 1024

ADD_RESET_DELAY = 3
EDIT_RETURN_DELAY = 2


def default_form() -> Dict[str, str]:
    """Get the empty form the 'Add New' view starts from."""
    return {
        'startupName': '',
        'companyWebsite': '',
        'shortDescription': '',
        'descriptionLong': '',
        'companyLogo': '',
        'foundingYear': str(datetime.now().year),
        'chategory': '',
        'startMunichMember': '',
        'companyRole': 'Founder',
        'batch': '',
        'memberPicture': '',
        'memberLinkedin': '',
        'investmentSize': '',
        'employees': '',
        'featuredStartup': 'no',
        'yCombinatorAlumni': 'no',
        'companyLinkedin': '',
        'lastInvestmentRound': '',
        'firstMilestones': '',
        'supportingPrograms': '',
    }


def company_to_form(company: Dict[str, Any]) -> Dict[str, str]:
    """Populate the form from a startup as returned by GET /api/startups/<id>."""
    founder = (company.get('founders') or [{}])[0]
    founding_year = company.get('foundingYear')
    employees = company.get('employees')
    return {
        'startupName': company.get('name') or '',
        'companyWebsite': company.get('website') or '',
        'shortDescription': company.get('summary') or '',
        'descriptionLong': company.get('description') or '',
        'companyLogo': company.get('logoUrl') or '',
        'foundingYear': str(founding_year) if founding_year else str(datetime.now().year),
        'chategory': ', '.join(company.get('category') or []),
        'startMunichMember': founder.get('name') or '',
        'companyRole': founder.get('role') or 'Founder',
        'batch': founder.get('batch') or '',
        'memberPicture': founder.get('imageUrl') or '',
        'memberLinkedin': founder.get('linkedinUrl') or '',
        'investmentSize': company.get('totalRaised') or '',
        'employees': str(employees) if employees is not None else '',
        'featuredStartup': 'yes' if company.get('isSpotlight') else 'no',
        'yCombinatorAlumni': 'yes' if company.get('isYCombinator') else 'no',
        'companyLinkedin': company.get('companyLinkedin') or '',
        'lastInvestmentRound': company.get('investmentRound') or '',
        'firstMilestones': company.get('milestones') or '',
        'supportingPrograms': company.get('supportingPrograms') or '',
    }


def normalize_name(name: str) -> str:
    return (name or '').strip().lower()


def check_batch(value: str) -> Optional[str]:
    """Advisory batch format check, returns a warning or None."""
    value = (value or '').strip()
    if not value or BATCH_PATTERN.match(value):
        return None
    return BATCH_WARNING


class AdminFormController:
    """State machine behind the admin page."""

    def __init__(self, client):
        """Initialize with a startups API client.

        Args:
            client: Object with list/get/add/update/delete_startup methods
        """
        self.client = client
        self.view = 'list'
        self.mode = 'add'
        self.form = default_form()
        self.companies: List[Dict[str, Any]] = []
        self.selected_id: Optional[str] = None
        self.url = '/admin'
        self.error: Optional[str] = None
        self.success = False
        self.saving = False
        self.batch_warning: Optional[str] = None
        self.pending_images: Dict[str, str] = {}
        self.scheduled: Optional[Tuple[str, int]] = None
        # Set when the record being edited could not be fetched
        self.load_failed = False

    def load_companies(self) -> List[Dict[str, Any]]:
        try:
            self.companies = self.client.list_startups()
        except Exception as e:
            logger.error(f"Error fetching startups: {e}")
            self.error = 'Failed to load startups'
        return self.companies

    def reset_form(self):
        self.form = default_form()
        self.pending_images = {}
        self.batch_warning = None
        self.error = None
        self.success = False

    def open_url(self, url: str):
        """Restore the view a deep link points at, e.g. /admin?edit=12."""
        edit_id = parse_qs(urlparse(url).query).get('edit', [None])[0]
        self.load_companies()
        if edit_id:
            self.edit(edit_id)

    def add_new(self):
        self.mode = 'add'
        self.view = 'form'
        self.selected_id = None
        self.scheduled = None
        self.reset_form()
        self.url = '/admin'

    def edit(self, startup_id: Any):
        """Switch to the edit form and populate it from the stored record."""
        self.selected_id = str(startup_id)
        self.mode = 'edit'
        self.view = 'form'
        self.scheduled = None
        self.saving = False
        self.error = None
        self.success = False
        self.pending_images = {}
        self.form = default_form()
        self.batch_warning = None
        self.load_failed = False

        try:
            company = self.client.get_startup(startup_id)
            self.form = company_to_form(company)
            self.batch_warning = check_batch(self.form['batch'])
            self.url = f"/admin?edit={startup_id}"
        except Exception as e:
            logger.error(f"Error loading startup {startup_id}: {e}")
            self.load_failed = True
            self.error = 'Failed to load startup data'

    def back_to_list(self):
        self.view = 'list'
        self.mode = 'add'
        self.selected_id = None
        self.scheduled = None
        self.reset_form()
        self.url = '/admin'
        self.load_companies()

    def change(self, field: str, value: str):
        if field == 'batch':
            self.batch_warning = check_batch(value)
        self.form[field] = value

    def attach_image(self, field: str, content: bytes, mime_type: str) -> bool:
        """Stage an image file for upload on the next submit.

        Args:
            field: 'companyLogo' or 'memberPicture'
            content: Raw file bytes
            mime_type: The file's MIME type
        """
        if not (mime_type or '').startswith('image/'):
            self.error = 'Please select an image file'
            return False
        if len(content) > MAX_IMAGE_BYTES:
            self.error = 'Image size must be less than 5MB'
            return False

        encoded = base64.b64encode(content).decode('ascii')
        self.pending_images[field] = f"data:{mime_type};base64,{encoded}"
        return True

    def find_duplicate(self, name: str) -> Optional[Dict[str, Any]]:
        """Find a loaded startup whose name matches ignoring case and outer whitespace."""
        key = normalize_name(name)
        for company in self.companies:
            if normalize_name(company.get('name')) == key:
                return company
        return None

    def submit(self) -> bool:
        """Save the form, returning True on success.

        Duplicate names are rejected locally in add mode before any request is
        made. The server does not enforce unique names.
        """
        if self.saving:
            return False
        if self.mode == 'edit' and self.load_failed:
            self.error = 'Failed to load startup data'
            return False

        self.saving = True
        self.error = None
        self.success = False

        try:
            if self.mode == 'add' and self.find_duplicate(self.form['startupName']):
                self.error = (f'A startup with the name "{self.form["startupName"]}" already exists. '
                              f'Please use a different name.')
                return False

            payload = {**self.form, **self.pending_images}
            if self.mode == 'add':
                self.client.add_startup(payload)
            else:
                self.client.update_startup(self.selected_id, payload)

            self.success = True
            self.load_companies()

            if self.mode == 'add':
                self.scheduled = ('reset_form', ADD_RESET_DELAY)
            else:
                self.scheduled = ('back_to_list', EDIT_RETURN_DELAY)
            return True

        except Exception as e:
            logger.error(f"Error saving startup: {e}")
            self.error = str(e) or 'An error occurred'
            return False
        finally:
            self.saving = False

    def delete(self, confirmed: bool = True) -> bool:
        """Delete the startup being edited and return to the list."""
        if self.saving or not self.selected_id or not confirmed:
            return False

        self.saving = True
        self.error = None
        try:
            self.client.delete_startup(self.selected_id)
            self.back_to_list()
            return True
        except Exception as e:
            logger.error(f"Error deleting startup {self.selected_id}: {e}")
            self.error = str(e) or 'Failed to delete startup'
            return False
        finally:
            self.saving = False

    def run_scheduled(self):
        """Perform the pending delayed transition, if any."""
        if not self.scheduled:
            return
        action, _delay = self.scheduled
        self.scheduled = None
        if action == 'reset_form':
            self.reset_form()
        elif action == 'back_to_list':
            self.back_to_list()

    def derived_options(self) -> Dict[str, List[str]]:
        """Get sorted suggestion lists from the loaded startups."""
        categories, programs, roles, rounds = set(), set(), set(), set()
        for company in self.companies:
            categories.update(c.strip() for c in company.get('category') or [] if c and c.strip())
            programs.update(p.strip() for p in (company.get('supportingPrograms') or '').split(',') if p.strip())
            roles.update(f['role'].strip() for f in company.get('founders') or [] if (f.get('role') or '').strip())
            if (company.get('investmentRound') or '').strip():
                rounds.add(company['investmentRound'].strip())
        return {
            'categories': sorted(categories),
            'supportingPrograms': sorted(programs),
            'companyRoles': sorted(roles),
            'investmentRounds': sorted(rounds),
        }

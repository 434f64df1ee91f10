"""Transform NocoDB rows into directory models and admin forms into NocoDB rows.

Column names are the provider's exact strings, including the misspelled
``Chategory`` (startups) and ``Categrory`` (partners) columns.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.csv_reader import split_list
from core.flags import is_loose_true, parse_yes_no
from core.images import (
    attachment_url,
    company_avatar_url,
    founder_avatar_url,
    partner_avatar_url,
    strip_scheme,
)
from models import Company, Founder, Member, Partner
from models.company import DEFAULT_CATEGORY
from models.member import PLACEHOLDER_IMAGE

NO_DESCRIPTION = 'No description available'


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer from a number or numeric string, None if impossible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        # Accept '2021.0' style values written by spreadsheets
        try:
            return int(float(str(value).strip()))
        except ValueError:
            return None


def parse_year(value: Any) -> int:
    """Parse a founding year, defaulting to the current year."""
    year = parse_int(value)
    return year if year else datetime.now().year


def text(value: Any) -> Optional[str]:
    """Normalize an optional free-text column to a stripped string or None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_categories(value: Any) -> List[str]:
    """Split a category column, falling back to ['Other']."""
    if isinstance(value, list):
        categories = [str(item).strip() for item in value if str(item).strip()]
    else:
        categories = split_list(text(value))
    return categories or [DEFAULT_CATEGORY]


def record_id(record: Dict[str, Any]) -> Optional[int]:
    return record.get('Id') or record.get('id')


def transform_startup_record(record: Dict[str, Any], base_url: str) -> Company:
    """Transform one row of the startups table into a Company."""
    founders = []
    member_name = text(record.get('STARTMunich Member'))
    if member_name:
        founders.append(Founder(
            name=member_name,
            role=text(record.get('Company Role')) or 'Founder',
            batch=text(record.get('Batch')) or text(record.get('Member Batch')) or '',
            image_url=attachment_url(record.get('Member Picture'), base_url) or founder_avatar_url(member_name),
            linkedin_url=text(record.get('Member Linkedin')),
        ))

    name = text(record.get('Startup Name'))
    summary = text(record.get('Short Description')) or NO_DESCRIPTION

    return Company(
        id=record_id(record),
        name=name or 'Unnamed Startup',
        website=strip_scheme(text(record.get('Company Website'))),
        summary=summary,
        description=text(record.get('Description Long')) or summary,
        logo_url=attachment_url(record.get('Company Logo'), base_url) or company_avatar_url(name or 'Company'),
        founding_year=parse_year(record.get('Founding Year')),
        category=parse_categories(record.get('Chategory')),
        founders=founders,
        total_raised=text(record.get('Investment Size €')),
        employees=parse_int(record.get('Employees')),
        is_spotlight=bool(parse_yes_no(record.get('Featured Startup'))),
        is_y_combinator=bool(parse_yes_no(record.get('Y Combinator Alumni'))),
        company_linkedin=text(record.get('Company Linkedin')),
        investment_round=text(record.get('Last investment round')),
        milestones=text(record.get('First milestones')),
        supporting_programs=text(record.get('Supporting Programs')),
    )


def transform_partner_record(record: Dict[str, Any], base_url: str) -> Partner:
    """Transform one row of the partners table into a Partner."""
    name = text(record.get('Name'))
    return Partner(
        id=record_id(record),
        name=name or 'Unnamed Partner',
        category=text(record.get('Categrory')) or 'Other',
        logo_url=attachment_url(record.get('Logo'), base_url) or partner_avatar_url(name or 'Partner'),
        featured=is_loose_true(record.get('Featured')),
    )


def transform_member_record(record: Dict[str, Any], base_url: str) -> Member:
    """Transform one row of the members table into a Member."""
    expertise = split_list(text(record.get('Expertise')))
    return Member(
        id=record_id(record),
        name=text(record.get('Name')) or 'Unknown',
        batch=text(record.get('Batch')) or '',
        role=text(record.get('Role')) or '',
        company=text(record.get('Company')),
        linkedin_url=text(record.get('LinkedIn')),
        image_url=attachment_url(record.get('Member Picture'), base_url) or PLACEHOLDER_IMAGE,
        bio=text(record.get('Bio')),
        expertise=expertise or None,
        achievements=text(record.get('Achievements')),
    )


def form_to_startup_record(form: Dict[str, Any], company_logo: Any = None,
                           member_picture: Any = None) -> Dict[str, Any]:
    """Map the admin form's flat JSON body to NocoDB column names.

    Args:
        form: Form fields as submitted by the admin UI
        company_logo: Resolved value for the 'Company Logo' attachment column
        member_picture: Resolved value for the 'Member Picture' attachment column
    """
    employees = form.get('employees')
    return {
        'Startup Name': form.get('startupName'),
        'Company Website': form.get('companyWebsite'),
        'Short Description': form.get('shortDescription'),
        'Description Long': form.get('descriptionLong'),
        'Company Logo': company_logo or None,
        'Founding Year': parse_year(form.get('foundingYear')),
        'Chategory': form.get('chategory'),
        'STARTMunich Member': form.get('startMunichMember'),
        'Company Role': form.get('companyRole'),
        'Batch': form.get('batch'),
        'Member Picture': member_picture or None,
        'Member Linkedin': form.get('memberLinkedin'),
        'Investment Size €': form.get('investmentSize'),
        'Employees': parse_int(employees) if employees else None,
        'Featured Startup': form.get('featuredStartup'),
        'Y Combinator Alumni': form.get('yCombinatorAlumni'),
        'Company Linkedin': form.get('companyLinkedin'),
        'Last investment round': form.get('lastInvestmentRound'),
        'First milestones': form.get('firstMilestones'),
        'Supporting Programs': form.get('supportingPrograms'),
    }


def company_to_startup_record(company: Company) -> Dict[str, Any]:
    """Map a CSV-sourced Company onto NocoDB columns for a one-time import.

    Attachment columns are left empty; CSV logos and founder pictures are
    URLs or local paths, not uploaded files.
    """
    founder = company.primary_founder
    return {
        'Startup Name': company.name,
        'Company Website': company.website,
        'Short Description': company.summary,
        'Description Long': company.description,
        'Founding Year': company.founding_year,
        'Chategory': ', '.join(company.category),
        'STARTMunich Member': founder.name if founder else None,
        'Company Role': founder.role if founder else None,
        'Batch': founder.batch if founder else None,
        'Member Linkedin': founder.linkedin_url if founder else None,
        'Investment Size €': company.total_raised,
        'Employees': company.employees,
        'Featured Startup': 'Yes' if company.is_spotlight else 'No',
        'Y Combinator Alumni': 'Yes' if company.is_y_combinator else 'No',
        'Company Linkedin': company.company_linkedin,
        'Last investment round': company.investment_round,
        'First milestones': company.milestones,
        'Supporting Programs': company.supporting_programs,
    }

"""Pytest fixtures and mock data for testing."""
import pytest
from unittest.mock import Mock
import os

# Set test environment variables before importing services
os.environ['NOCODB_API_TOKEN'] = 'test-nocodb-token'
os.environ['NOCODB_BASE_URL'] = 'https://nocodb.test'
os.environ['NOCODB_STARTUPS_TABLE_ID'] = 'tbl-startups'
os.environ['NOCODB_PARTNERS_TABLE_ID'] = 'tbl-partners'
os.environ['NOCODB_MEMBERS_TABLE_ID'] = 'tbl-members'
os.environ['LUMA_API_KEY'] = 'test-luma-key'
os.environ['LUMA_CALENDAR_ID'] = 'cal-test'


# A 1x1 PNG header is enough for upload tests
VALID_LOGO_DATA_URI = 'data:image/png;base64,iVBORw0KGgo='
MALFORMED_DATA_URI = 'data:image/png;base64,not-valid-base64!!'


# ============ CSV FIXTURES ============

STARTUPS_CSV = '''Startup Name,Member Name,Member LinkedIn,Email,Short Description,Long Description,Category,Website,Logo,Founding Year,Role,Supporting Programs,Investment,Investment Round,Investment Size,Milestones,Company LinkedIn,Featured Startup,Y Combinator Alumni
Acme,Jane Doe,https://linkedin.com/in/janedoe,jane@acme.io,Rockets for everyone,"Reusable rockets, built in Munich","AI, SaaS ,FinTech",https://acme.io,,2021,CEO,"XPRENEURS, Y Combinator",Yes,Seed,€2M,First paying customers,https://linkedin.com/company/acme,Yes,No
Startup Name,Member Name,Member LinkedIn,Email,Short Description,Long Description,Category,Website,Logo,Founding Year,Role,Supporting Programs,Investment,Investment Round,Investment Size,Milestones,Company LinkedIn,Featured Startup,Y Combinator Alumni
Beta Labs,,,,,,,http://beta.dev,https://cdn.beta.dev/logo.png,not-a-year,,,No,,€0,,,,
,Orphan Member,,,,,,,,,,,,,,,,,
Gamma,Max Mustermann,,,"Quoted ""nickname"" inside",,Hardware,gamma.de,,2019,,,,,,,,TRUE,yes
'''

MEMBERS_CSV = '''Name,Batch,Role,Company,LinkedIn,ImageUrl,Bio,Expertise,Achievements
Max Mustermann,WS23,Board,Gamma,https://linkedin.com/in/max,,Builds hardware,"Sales, Marketing ,",Won a hackathon
Erika Musterfrau,SS24,Member,,,/members/erika.jpg,,,
'''


@pytest.fixture
def data_dir(tmp_path):
    """Directory with both CSV files and a FounderPics folder."""
    (tmp_path / 'StartupsList.csv').write_text(STARTUPS_CSV, encoding='utf-8')
    (tmp_path / 'MembersList.csv').write_text(MEMBERS_CSV, encoding='utf-8')
    pics = tmp_path / 'FounderPics'
    pics.mkdir()
    (pics / 'jane doe.png').write_bytes(b'png')
    (pics / 'notes.txt').write_text('not an image')
    return tmp_path


# ============ NOCODB FIXTURES ============

@pytest.fixture
def logo_attachment():
    """Attachment column value as NocoDB returns it."""
    return [{
        'path': 'download/noco/startups/logo_1700000000000.png',
        'signedPath': 'dltemp/abc123/logo_1700000000000.png',
        'title': 'logo_1700000000000.png',
        'mimetype': 'image/png',
        'size': 1024
    }]


@pytest.fixture
def mock_startup_record(logo_attachment):
    """One row of the NocoDB startups table."""
    return {
        'Id': 7,
        'Startup Name': 'Acme',
        'Company Website': 'https://acme.io',
        'Short Description': 'Rockets for everyone',
        'Description Long': None,
        'Company Logo': logo_attachment,
        'Founding Year': 2021,
        'Chategory': 'AI, SaaS ,FinTech',
        'STARTMunich Member': 'Jane Doe',
        'Company Role': 'CEO',
        'Batch': ' WS22 ',
        'Member Picture': None,
        'Member Linkedin': 'https://linkedin.com/in/janedoe',
        'Investment Size €': '€2M',
        'Employees': '12',
        'Featured Startup': 'YES',
        'Y Combinator Alumni': 'No',
        'Company Linkedin': 'https://linkedin.com/company/acme',
        'Last investment round': 'Seed',
        'First milestones': 'First paying customers',
        'Supporting Programs': 'XPRENEURS',
    }


@pytest.fixture
def mock_partner_records():
    """Rows of the NocoDB partners table."""
    return [
        {'Id': 1, 'Name': 'BigBank', 'Categrory': 'Finance', 'Show': True, 'Featured': True,
         'Logo': [{'signedPath': 'dltemp/p1/bigbank.png'}]},
        {'Id': 2, 'Name': 'LawFirm', 'Categrory': None, 'Show': 1, 'Featured': 'TRUE', 'Logo': None},
        {'Id': 3, 'Name': 'Hidden Corp', 'Categrory': 'Tech', 'Show': False, 'Featured': True},
        {'Id': 4, 'Name': 'Cloudy', 'Categrory': 'Tech', 'Show': 'true', 'Featured': 'yes'},
        {'Id': 5, 'Name': 'NoFlag', 'Categrory': 'Tech'},
    ]


@pytest.fixture
def startup_form():
    """Admin form body as posted by the admin UI."""
    return {
        'startupName': 'Acme',
        'companyWebsite': 'https://acme.io',
        'shortDescription': 'Rockets for everyone',
        'descriptionLong': 'Reusable rockets, built in Munich',
        'companyLogo': '',
        'foundingYear': '2021',
        'chategory': 'AI, SaaS',
        'startMunichMember': 'Jane Doe',
        'companyRole': 'CEO',
        'batch': 'WS22',
        'memberPicture': '',
        'memberLinkedin': 'https://linkedin.com/in/janedoe',
        'investmentSize': '€2M',
        'employees': '12',
        'featuredStartup': 'yes',
        'yCombinatorAlumni': 'no',
        'companyLinkedin': '',
        'lastInvestmentRound': 'Seed',
        'firstMilestones': '',
        'supportingPrograms': 'XPRENEURS',
    }


# ============ SERVICE MOCKS ============

@pytest.fixture
def mock_nocodb(mock_startup_record):
    """Mock NocoDBService."""
    mock = Mock()
    mock.base_url = 'https://nocodb.test'

    mock.list_records.return_value = [mock_startup_record]
    mock.get_record.return_value = mock_startup_record
    mock.create_record.return_value = {'Id': 42}
    mock.update_record.return_value = {'Id': 7}
    mock.delete_record.return_value = None
    mock.upload_file.return_value = [{'path': 'download/new.png', 'signedPath': 'dltemp/new.png'}]

    return mock


@pytest.fixture
def mock_api_client():
    """Mock StartupsAPIClient for the admin form."""
    mock = Mock()
    mock.list_startups.return_value = [
        {'id': 1, 'name': 'acme', 'category': ['AI', 'SaaS'], 'supportingPrograms': 'XPRENEURS, TUM Venture Lab',
         'founders': [{'name': 'Jane Doe', 'role': 'CEO'}], 'investmentRound': 'Seed'},
        {'id': 2, 'name': 'Beta Labs', 'category': ['Other'], 'founders': [], 'investmentRound': ' '},
    ]
    mock.get_startup.return_value = {
        'id': 7,
        'name': 'Acme',
        'website': 'acme.io',
        'summary': 'Rockets for everyone',
        'description': 'Rockets for everyone',
        'logoUrl': 'https://nocodb.test/dltemp/abc123/logo.png',
        'foundingYear': 2021,
        'category': ['AI', 'SaaS'],
        'founders': [{'name': 'Jane Doe', 'role': 'CEO', 'batch': 'WS22',
                      'imageUrl': 'https://ui-avatars.com/api/?name=Jane%20Doe'}],
        'employees': 12,
        'isSpotlight': True,
        'isYCombinator': False,
    }
    mock.add_startup.return_value = {'success': True, 'recordId': 42}
    mock.update_startup.return_value = {'success': True}
    mock.delete_startup.return_value = {'success': True}
    return mock


def mock_response(status_code=200, json_data=None, text=''):
    """Build a requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = 'OK' if response.ok else 'Error'
    response.text = text
    response.json.return_value = json_data if json_data is not None else {}
    return response

"""Services package."""
from services.nocodb import NocoDBService, NocoDBError
from services.csv_ingest import CSVIngestService, CSVSourceError
from services.startups import StartupService
from services.partners import PartnerService
from services.members import MemberService
from services.luma import LumaService, LumaError
from services.api_client import StartupsAPIClient, APIError

__all__ = [
    # Data sources
    'NocoDBService',
    'NocoDBError',
    'CSVIngestService',
    'CSVSourceError',
    # Directory services
    'StartupService',
    'PartnerService',
    'MemberService',
    # Events
    'LumaService',
    'LumaError',
    # Admin
    'StartupsAPIClient',
    'APIError',
]

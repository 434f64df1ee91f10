"""Partner listing backed by the NocoDB partners table."""
import logging
from typing import List

from core.flags import is_loose_true
from core.transform import transform_partner_record
from models import Partner
from services.nocodb import NocoDBService

logger = logging.getLogger(__name__)


class PartnerService:
    """Service for the partners directory."""

    def __init__(self, nocodb: NocoDBService, table_id: str, base_url: str):
        self.nocodb = nocodb
        self.table_id = table_id
        self.base_url = base_url

    def list_partners(self) -> List[Partner]:
        """Get partners whose 'Show' column is checked."""
        records = self.nocodb.list_records(self.table_id)
        partners = [
            transform_partner_record(record, self.base_url)
            for record in records
            if is_loose_true(record.get('Show'))
        ]
        logger.info(f"Fetched {len(partners)} visible partners ({len(records)} total) from NocoDB")
        return partners

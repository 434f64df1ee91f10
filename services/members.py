"""Member listing backed by the NocoDB members table."""
import logging
from typing import List

from core.transform import transform_member_record
from models import Member
from services.nocodb import NocoDBService

logger = logging.getLogger(__name__)


class MemberService:
    """Service for the members directory when members live in NocoDB."""

    def __init__(self, nocodb: NocoDBService, table_id: str, base_url: str):
        self.nocodb = nocodb
        self.table_id = table_id
        self.base_url = base_url

    def list_members(self) -> List[Member]:
        records = self.nocodb.list_records(self.table_id)
        logger.info(f"Fetched {len(records)} members from NocoDB")
        return [transform_member_record(record, self.base_url) for record in records]

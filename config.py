"""Configuration management for the application."""
import os
from typing import List


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in (value or '').split(',') if item.strip()]


class Config:
    """Application configuration."""

    def __init__(self):
        self.nocodb_api_token = os.environ.get('NOCODB_API_TOKEN')
        self.nocodb_base_url = os.environ.get('NOCODB_BASE_URL', 'https://ndb.startmunich.de').rstrip('/')
        self.nocodb_startups_table_id = os.environ.get('NOCODB_STARTUPS_TABLE_ID')
        self.nocodb_partners_table_id = os.environ.get('NOCODB_PARTNERS_TABLE_ID')
        self.nocodb_members_table_id = os.environ.get('NOCODB_MEMBERS_TABLE_ID')

        self.luma_api_key = os.environ.get('LUMA_API_KEY')
        self.luma_calendar_id = os.environ.get('LUMA_CALENDAR_ID', 'cal-1MxD65bgV0Hcb0r')
        self.luma_base_url = os.environ.get('LUMA_BASE_URL', 'https://public-api.luma.com').rstrip('/')

        self.data_dir = os.environ.get('DATA_DIR', 'public')
        self.startups_source = os.environ.get('STARTUPS_SOURCE', 'nocodb').lower()
        self.members_source = os.environ.get('MEMBERS_SOURCE', 'csv').lower()

        # Name allow-lists that mark CSV startups regardless of their flag columns
        self.spotlight_startups = _split_list(os.environ.get('SPOTLIGHT_STARTUPS', ''))
        self.yc_startups = _split_list(os.environ.get('YC_STARTUPS', ''))

        self.http_timeout = float(os.environ.get('HTTP_TIMEOUT', '30'))

    def missing(self, *names: str) -> List[str]:
        """Return the environment names among `names` whose values are unset.

        Args:
            names: Environment variable names, e.g. 'NOCODB_API_TOKEN'
        """
        return [name for name in names if not getattr(self, name.lower(), None)]

    @staticmethod
    def mask(secret: str) -> str:
        """Shorten a secret for log output."""
        if not secret:
            return 'NOT SET'
        return f"{secret[:4]}... ({len(secret)} chars)"


# Global config instance
config = Config()

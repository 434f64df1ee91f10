"""Flat-file ingestion of the startups and members lists."""
import logging
import os
import re
from typing import List, Optional

from core.csv_reader import read_positional, read_with_header, split_list, value_at
from core.flags import parse_csv_flag
from core.images import company_avatar_url, founder_avatar_url, strip_scheme
from core.transform import parse_year
from models import Company, Founder, Member
from models.member import PLACEHOLDER_IMAGE

logger = logging.getLogger(__name__)


class CSVSourceError(Exception):
    """Raised when a CSV data file cannot be read."""


class CSVIngestService:
    """Reads the CSV exports that back the public directory pages."""

    STARTUPS_FILE = 'StartupsList.csv'
    MEMBERS_FILE = 'MembersList.csv'
    FOUNDER_PICS_DIR = 'FounderPics'

    # Literal header value that marks a stray header row
    STARTUP_HEADER = 'Startup Name'
    DEFAULT_PROGRAM = 'START Munich'
    NO_INVESTMENT = '€0'
    IMAGE_EXTENSIONS = re.compile(r'\.(jpg|jpeg|png)$', re.IGNORECASE)
    YC_KEYWORDS = re.compile(r'\by\s*combinator\b|\byc\b', re.IGNORECASE)

    def __init__(self, data_dir: str, spotlight_names: List[str] = None, yc_names: List[str] = None):
        """Initialize with the directory holding the CSV files and FounderPics.

        Args:
            data_dir: Directory containing StartupsList.csv, MembersList.csv and FounderPics/
            spotlight_names: Startup names always shown as spotlight
            yc_names: Startup names always marked as Y Combinator alumni
        """
        self.data_dir = data_dir
        self.spotlight_names = {name.strip().lower() for name in (spotlight_names or [])}
        self.yc_names = {name.strip().lower() for name in (yc_names or [])}

    def _read(self, filename: str) -> str:
        path = os.path.join(self.data_dir, filename)
        try:
            with open(path, encoding='utf-8', newline='') as f:
                return f.read()
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise CSVSourceError(f"Could not read {filename}") from e

    def find_founder_image(self, founder_name: str) -> str:
        """Resolve a founder picture by exact (case-insensitive) file name match."""
        normalized = founder_name.strip().lower()
        pics_dir = os.path.join(self.data_dir, self.FOUNDER_PICS_DIR)

        try:
            for filename in sorted(os.listdir(pics_dir)):
                if not self.IMAGE_EXTENSIONS.search(filename):
                    continue
                if self.IMAGE_EXTENSIONS.sub('', filename).lower() == normalized:
                    return f"/{self.FOUNDER_PICS_DIR}/{filename}"
        except OSError as e:
            logger.warning(f"Error reading founder pics directory: {e}")

        return founder_avatar_url(founder_name)

    def _is_spotlight(self, name: str, flag: Optional[str]) -> bool:
        return bool(parse_csv_flag(flag)) or name.strip().lower() in self.spotlight_names

    def _is_y_combinator(self, name: str, flag: Optional[str], programs: Optional[str]) -> bool:
        if parse_csv_flag(flag) or name.strip().lower() in self.yc_names:
            return True
        return bool(programs and self.YC_KEYWORDS.search(programs))

    def load_startups(self) -> List[Company]:
        """Parse StartupsList.csv, mapping columns by position."""
        companies = []

        for row_index, values in read_positional(self._read(self.STARTUPS_FILE)):
            name = value_at(values, 0)
            if not name or name == self.STARTUP_HEADER:
                continue

            member_name = value_at(values, 1)
            short_description = value_at(values, 4) or 'No description available'
            supporting_programs = value_at(values, 11)
            investment_size = value_at(values, 14)

            founders = []
            if member_name:
                founders.append(Founder(
                    name=member_name,
                    role=value_at(values, 10) or 'Founder',
                    batch=supporting_programs or self.DEFAULT_PROGRAM,
                    image_url=self.find_founder_image(member_name),
                    linkedin_url=value_at(values, 2),
                ))

            companies.append(Company(
                id=row_index,
                name=name,
                website=strip_scheme(value_at(values, 7)),
                summary=short_description,
                description=value_at(values, 5) or short_description,
                logo_url=value_at(values, 8) or company_avatar_url(name),
                founding_year=parse_year(value_at(values, 9)),
                category=split_list(value_at(values, 6)),
                founders=founders,
                total_raised=investment_size if investment_size and investment_size != self.NO_INVESTMENT else None,
                is_spotlight=self._is_spotlight(name, value_at(values, 17)),
                is_y_combinator=self._is_y_combinator(name, value_at(values, 18), supporting_programs),
                company_linkedin=value_at(values, 16),
                investment_round=value_at(values, 13),
                milestones=value_at(values, 15),
                supporting_programs=supporting_programs,
            ))

        logger.info(f"Loaded {len(companies)} startups from {self.STARTUPS_FILE}")
        return companies

    def load_members(self) -> List[Member]:
        """Parse MembersList.csv, mapping columns by header name."""
        members = []

        for index, row in enumerate(read_with_header(self._read(self.MEMBERS_FILE)), start=1):
            expertise = split_list(row.get('Expertise'))
            members.append(Member(
                id=index,
                name=row.get('Name', ''),
                batch=row.get('Batch', ''),
                role=row.get('Role', ''),
                company=row.get('Company') or None,
                linkedin_url=row.get('LinkedIn') or None,
                image_url=row.get('ImageUrl') or PLACEHOLDER_IMAGE,
                bio=row.get('Bio') or None,
                expertise=expertise or None,
                achievements=row.get('Achievements') or None,
            ))

        logger.info(f"Loaded {len(members)} members from {self.MEMBERS_FILE}")
        return members

"""Company (startup) model."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_CATEGORY = 'Other'


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop optional keys that carry no value."""
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Founder:
    """Primary founder shown on a startup card."""
    name: str
    image_url: str
    role: str = 'Founder'
    batch: str = ''
    linkedin_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            'name': self.name,
            'role': self.role,
            'batch': self.batch,
            'imageUrl': self.image_url,
            'linkedinUrl': self.linkedin_url,
        })


@dataclass
class Company:
    """Represents a startup in the community directory."""
    id: Optional[int]
    name: str
    website: str
    summary: str
    description: str
    logo_url: str
    founding_year: int
    category: List[str] = field(default_factory=lambda: [DEFAULT_CATEGORY])
    founders: List[Founder] = field(default_factory=list)
    total_raised: Optional[str] = None
    employees: Optional[int] = None
    is_spotlight: bool = False
    is_y_combinator: bool = False
    company_linkedin: Optional[str] = None
    investment_round: Optional[str] = None
    milestones: Optional[str] = None
    supporting_programs: Optional[str] = None

    def __post_init__(self):
        if not self.category:
            self.category = [DEFAULT_CATEGORY]

    @property
    def primary_founder(self) -> Optional[Founder]:
        """Get the single founder the directory displays, if any."""
        return self.founders[0] if self.founders else None

    @property
    def name_key(self) -> str:
        """Get the key used for duplicate-name comparisons."""
        return self.name.strip().lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape the website consumes."""
        return _compact({
            'id': self.id,
            'name': self.name,
            'website': self.website,
            'summary': self.summary,
            'description': self.description,
            'logoUrl': self.logo_url,
            'foundingYear': self.founding_year,
            'category': list(self.category),
            'founders': [founder.to_dict() for founder in self.founders],
            'totalRaised': self.total_raised,
            'employees': self.employees,
            'isSpotlight': self.is_spotlight,
            'isYCombinator': self.is_y_combinator,
            'companyLinkedin': self.company_linkedin,
            'investmentRound': self.investment_round,
            'milestones': self.milestones,
            'supportingPrograms': self.supporting_programs,
        })

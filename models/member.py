"""Member model."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models.company import _compact

PLACEHOLDER_IMAGE = '/placeholder-profile.jpg'


@dataclass
class Member:
    """Represents a community member."""
    id: Optional[int]
    name: str
    batch: str = ''
    role: str = ''
    image_url: str = PLACEHOLDER_IMAGE
    company: Optional[str] = None
    linkedin_url: Optional[str] = None
    bio: Optional[str] = None
    expertise: Optional[List[str]] = None
    achievements: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            'id': self.id,
            'name': self.name,
            'batch': self.batch,
            'role': self.role,
            'company': self.company,
            'linkedinUrl': self.linkedin_url,
            'imageUrl': self.image_url,
            'bio': self.bio,
            'expertise': self.expertise,
            'achievements': self.achievements,
        })

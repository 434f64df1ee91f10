"""Partner model."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Partner:
    """Represents a partner organization shown on the partners page."""
    id: Optional[int]
    name: str
    logo_url: str
    category: str = 'Other'
    featured: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'logoUrl': self.logo_url,
            'featured': self.featured,
        }

"""
Pipeline Enumerations

Administrative tiers produced by an extraction run.
"""

from enum import Enum


class AdminTier(str, Enum):
    """Administrative tiers in the RapidPro location hierarchy."""
    COUNTRY = "country"     # admin0
    STATE = "state"         # admin1
    DISTRICT = "district"   # admin2

    @property
    def file_tag(self) -> str:
        """Tag used in output filenames (admin0, admin1, admin2)."""
        return f"admin{list(AdminTier).index(self)}"

"""Storage module for Traveller Campaign Manager persistence.

Provides SQLite-based storage for:
- Users (with subscription tier)
- Campaigns and their memberships
- Characters
- Star systems
"""

from traveller_manager.storage.database import (
    CampaignRecord,
    Database,
    StarSystemRecord,
    UserRecord,
)

__all__ = [
    "CampaignRecord",
    "Database",
    "StarSystemRecord",
    "UserRecord",
]

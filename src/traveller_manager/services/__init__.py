"""Services that combine storage with the rules engine."""

from traveller_manager.services.access import CampaignAccessService

__all__ = [
    "CampaignAccessService",
]

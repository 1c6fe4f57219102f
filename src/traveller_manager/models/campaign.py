"""Pydantic V2 schemas for campaigns, memberships, and decisions.

These are the plain-data records the permission evaluator consumes. The
persistence layer resolves them; the evaluator never looks anything up.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from traveller_manager.models.characteristics import Characteristics
from traveller_manager.models.enums import CampaignRole, DecisionCode


class CampaignMembership(BaseModel):
    """A user's membership in a campaign.

    Attributes:
        campaign_id: Campaign identifier.
        user_id: Member's user identifier.
        role: Role held in the campaign.
        is_active: Inactive memberships grant nothing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    campaign_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    role: CampaignRole = CampaignRole.PLAYER
    is_active: bool = True


class CharacterRecord(BaseModel):
    """A stored character, as far as access control is concerned.

    Attributes:
        id: Character identifier.
        name: Character name.
        player_id: Owning user.
        campaign_id: Campaign the character belongs to.
        characteristics: Characteristic block, when loaded.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    player_id: str = Field(min_length=1)
    campaign_id: str = Field(min_length=1)
    characteristics: Characteristics | None = None


class ValidationResult(BaseModel):
    """Outcome of a rules validation.

    Attributes:
        is_valid: True when no violation was found.
        errors: Every violation found, in field order.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class Decision(BaseModel):
    """Tagged success/failure result returned by the evaluator and services.

    Attributes:
        success: Whether the operation is permitted / valid.
        data: Payload on success.
        error: Human-readable message on failure.
        code: Machine-readable failure code.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Any = None
    error: str | None = None
    code: DecisionCode | None = None

    @classmethod
    def allow(cls, data: Any = None) -> Decision:
        """Build a successful decision."""
        return cls(success=True, data=data)

    @classmethod
    def deny(cls, code: DecisionCode, error: str) -> Decision:
        """Build a failed decision with its code and message."""
        return cls(success=False, error=error, code=code)

    def __bool__(self) -> bool:
        return self.success


__all__ = [
    "CampaignMembership",
    "CharacterRecord",
    "ValidationResult",
    "Decision",
]

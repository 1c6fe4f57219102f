"""Typed request payloads for the access and validation service.

Each mutation the API layer forwards is described by one model here, so
that the service receives explicit, validated fields instead of loose
resolver arguments.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from traveller_manager.models.enums import CampaignRole, Starport


class CharacterCreateRequest(BaseModel):
    """Request to create a character in a campaign.

    Characteristics are accepted as raw integers; range checks belong to
    the rules engine so that every violation can be reported at once.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    player_id: str = Field(min_length=1)
    campaign_id: str = Field(min_length=1)
    characteristics: dict[str, int]
    homeworld: str | None = Field(default=None, max_length=100)
    age: Annotated[int, Field(ge=18, le=100)] | None = None
    gender: str | None = Field(default=None, max_length=50)
    species: str = Field(default="Human", max_length=50)


class CampaignMemberRequest(BaseModel):
    """Request to add a user to a campaign."""

    model_config = ConfigDict(extra="forbid")

    campaign_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    role: CampaignRole = CampaignRole.PLAYER


class DiceRollRequest(BaseModel):
    """Request to record a dice roll made inside a campaign."""

    model_config = ConfigDict(extra="forbid")

    notation: str = Field(min_length=1)
    roller_id: str = Field(min_length=1)
    campaign_id: str = Field(min_length=1)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool = True
    is_gm_only: bool = False
    character: str | None = Field(default=None, max_length=100)
    skill: str | None = Field(default=None, max_length=100)


class PlanetRequest(BaseModel):
    """Request to create a planet from a UWP plus its individual fields."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    uwp: str
    starport: Starport
    size: Annotated[int, Field(ge=0, le=10)]
    atmosphere: Annotated[int, Field(ge=0, le=15)]
    hydrographics: Annotated[int, Field(ge=0, le=10)]
    population: Annotated[int, Field(ge=0, le=12)]
    government: Annotated[int, Field(ge=0, le=15)]
    law_level: Annotated[int, Field(ge=0, le=18)]
    tech_level: Annotated[int, Field(ge=0, le=15)]


class StarSystemRequest(BaseModel):
    """Request to place a star system on a sector map.

    ``hex_location`` is kept as a plain string; the access service checks
    its ``XXYY`` shape so a bad location gets its own failure code.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    hex_location: str
    sector: str = Field(min_length=1, max_length=100)
    subsector: str | None = Field(default=None, max_length=10)
    allegiance: str | None = Field(default=None, max_length=50)
    star_type: str | None = Field(default=None, max_length=20)
    gas_giants: Annotated[int, Field(ge=0, le=10)] = 0


class SkillRequest(BaseModel):
    """Request to add or change a character skill."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    level: Annotated[int, Field(ge=0, le=6)]
    specialization: str | None = Field(default=None, max_length=100)


class EquipmentRequest(BaseModel):
    """Request to add an item to a character's equipment."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    weight: Annotated[float, Field(ge=0)] | None = None
    cost: Annotated[int, Field(ge=0)] | None = None
    quantity: Annotated[int, Field(ge=1)] = 1
    equipped: bool = False
    category: str | None = Field(default=None, max_length=50)


def format_validation_errors(exc: PydanticValidationError) -> str:
    """Flatten a pydantic error into ``field: message`` pairs joined by commas."""
    return ", ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


__all__ = [
    "format_validation_errors",
    "CharacterCreateRequest",
    "CampaignMemberRequest",
    "DiceRollRequest",
    "PlanetRequest",
    "StarSystemRequest",
    "SkillRequest",
    "EquipmentRequest",
]

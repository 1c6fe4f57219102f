"""Pydantic V2 schemas for star systems and worlds."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from traveller_manager.core.constants import MAX_PROFILE_VALUE
from traveller_manager.models.enums import Starport


ProfileDigit = Annotated[int, Field(ge=0, le=MAX_PROFILE_VALUE)]


class WorldProfile(BaseModel):
    """Decoded Universal World Profile.

    Every numeric field is a single base-36 digit (0-35) in the
    serialized ``A867569-C`` form.

    Attributes:
        starport: Starport class (A-E or X).
        size: World diameter code.
        atmosphere: Atmosphere type code.
        hydrographics: Surface water code.
        population: Population exponent.
        government: Government type code.
        law_level: Law level code.
        tech_level: Technology level.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    starport: Starport
    size: ProfileDigit
    atmosphere: ProfileDigit
    hydrographics: ProfileDigit
    population: ProfileDigit
    government: ProfileDigit
    law_level: ProfileDigit
    tech_level: ProfileDigit


__all__ = [
    "ProfileDigit",
    "WorldProfile",
]

"""Pydantic V2 schemas for character characteristics.

Characteristics are held as plain integers so that out-of-range values
survive construction and can be reported in full by
``engine.characteristics.validate_characteristics``. Range enforcement is a
validation concern, never a clamping one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from traveller_manager.models.enums import Characteristic


class Characteristics(BaseModel):
    """The six Traveller characteristics of a character.

    Attributes:
        strength: Physical strength (STR).
        dexterity: Coordination and agility (DEX).
        endurance: Stamina and resilience (END).
        intelligence: Reasoning ability (INT).
        education: Schooling and training (EDU).
        social_standing: Place in society (SOC).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    strength: int = Field(description="Strength")
    dexterity: int = Field(description="Dexterity")
    endurance: int = Field(description="Endurance")
    intelligence: int = Field(description="Intelligence")
    education: int = Field(description="Education")
    social_standing: int = Field(description="Social standing")

    def get(self, characteristic: Characteristic | str) -> int:
        """Return the raw value of one characteristic."""
        return getattr(self, Characteristic(characteristic).value)

    def values_in_order(self) -> tuple[int, ...]:
        """Return all six values in UPP order."""
        return tuple(self.get(c) for c in Characteristic)


class DerivedCharacteristics(BaseModel):
    """Values derived from a character's characteristics.

    Attributes:
        physical_damage: Half of STR + END, rounded down.
        mental_damage: Half of INT + EDU, rounded down.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    physical_damage: int
    mental_damage: int
    strength_dm: int
    dexterity_dm: int
    endurance_dm: int
    intelligence_dm: int
    education_dm: int
    social_standing_dm: int


__all__ = [
    "Characteristics",
    "DerivedCharacteristics",
]

"""Attribute modifiers granted by ancestries and paths."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .attributes import ATTRIBUTE_NAMES, AttributeName, Skill
from .choices import AttributeChoiceConfig, BaseChoiceConfig, ChoiceConfig


class AttributeChoice(BaseModel):
    """A bounded attribute increase the player resolves later."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = Field(default=1, ge=0, description="Number of attributes to pick")
    increase_by: int = Field(default=1, description="Increase applied to each pick")
    default_attributes: tuple[AttributeName, ...] = Field(
        default=(), description="Candidate attributes; empty means all four"
    )

    def to_config(self) -> AttributeChoiceConfig:
        """Build the descriptor offered to the player."""
        candidates = self.default_attributes or tuple(AttributeName(n) for n in ATTRIBUTE_NAMES)
        return AttributeChoiceConfig(
            count=self.count,
            increase_by=self.increase_by,
            available_attributes=list(candidates),
        )


class AttributeModifier(BaseModel):
    """Immutable bundle of attribute deltas and granted capabilities.

    Every attribute field is optional; ``None`` means the field is not part of the
    delta map. Build one from a declarative mapping::

        AttributeModifier.model_validate({"health": 5, "professions": ["Warrior"]})

    Applying the deltas is done by the owning path or ancestry.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Main attributes
    strength: int | None = None
    agility: int | None = None
    intellect: int | None = None
    will: int | None = None

    # Secondary attributes
    perception: int | None = None
    defense: int | None = None
    health: int | None = None
    healing_rate: int | None = None
    size: float | None = None
    speed: int | None = None
    power: int | None = None
    damage: int | None = None
    insanity: int | None = None
    corruption: int | None = None

    # Granted capabilities, appended to the character's lists
    languages: tuple[str, ...] | None = None
    professions: tuple[str, ...] | None = None
    skills: tuple[Skill, ...] | None = None

    attribute_choices: AttributeChoice | None = None
    choices: tuple[ChoiceConfig, ...] = ()

    def deltas(self) -> dict[str, Any]:
        """Attribute deltas carried by this modifier, in schema order."""
        return {
            name: value
            for name, value in self
            if value is not None and name not in ("attribute_choices", "choices")
        }

    def offered_choices(self) -> list[BaseChoiceConfig]:
        """Descriptors this modifier offers: the attribute choice first, then extras."""
        offered: list[BaseChoiceConfig] = []
        if self.attribute_choices is not None:
            offered.append(self.attribute_choices.to_config())
        offered.extend(self.choices)
        return offered

"""Advancement paths for shadowsheet.

A path is one of three tiers. Each tier unlocks a fixed set of character levels:

- Novice: 1, 2, 5, 8
- Expert: 3, 6, 9
- Master: 10, 15

All tiers share one `Path` type; only the unlock-level table differs.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .attributes import MainAttributes, SecondaryAttributes, Skill, add_delta
from .choices import BaseChoiceConfig, ChoiceSource
from .modifier import AttributeModifier


class PathTier(StrEnum):
    """Path tiers, lowest first."""

    NOVICE = "novice"
    EXPERT = "expert"
    MASTER = "master"

    @property
    def levels(self) -> tuple[int, ...]:
        return TIER_LEVELS[self]

    @property
    def source(self) -> ChoiceSource:
        """Choice source used for choices offered by a path of this tier."""
        return TIER_SOURCES[self]


TIER_LEVELS: dict[PathTier, tuple[int, ...]] = {
    PathTier.NOVICE: (1, 2, 5, 8),
    PathTier.EXPERT: (3, 6, 9),
    PathTier.MASTER: (10, 15),
}

TIER_SOURCES: dict[PathTier, ChoiceSource] = {
    PathTier.NOVICE: ChoiceSource.NOVICE_PATH,
    PathTier.EXPERT: ChoiceSource.EXPERT_PATH,
    PathTier.MASTER: ChoiceSource.MASTER_PATH,
}


class Path(BaseModel):
    """A tiered advancement path owning one modifier per unlock level.

    Attributes:
        id: Unique identifier (e.g. "warrior")
        name: Display name (e.g. "Warrior")
        tier: Novice, Expert or Master
        description: Flavor text
        modifiers: (unlock level, modifier) pairs in ascending level order
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique path identifier")
    name: str = Field(..., description="Display name of the path")
    tier: PathTier = Field(..., description="Path tier")
    description: str = Field(default="", description="Flavor text")
    modifiers: tuple[tuple[int, AttributeModifier], ...] = Field(
        ..., description="Modifiers keyed by unlock level"
    )

    @model_validator(mode="after")
    def _check_unlock_levels(self) -> "Path":
        levels = tuple(level for level, _ in self.modifiers)
        if levels != self.tier.levels:
            raise ValueError(
                f"{self.tier} path '{self.id}' must define levels {self.tier.levels}, got {levels}"
            )
        return self

    @classmethod
    def novice(
        cls,
        id: str,
        name: str,
        l1: AttributeModifier,
        l2: AttributeModifier,
        l5: AttributeModifier,
        l8: AttributeModifier,
        description: str = "",
    ) -> "Path":
        return cls(
            id=id,
            name=name,
            tier=PathTier.NOVICE,
            description=description,
            modifiers=((1, l1), (2, l2), (5, l5), (8, l8)),
        )

    @classmethod
    def expert(
        cls,
        id: str,
        name: str,
        l3: AttributeModifier,
        l6: AttributeModifier,
        l9: AttributeModifier,
        description: str = "",
    ) -> "Path":
        return cls(
            id=id,
            name=name,
            tier=PathTier.EXPERT,
            description=description,
            modifiers=((3, l3), (6, l6), (9, l9)),
        )

    @classmethod
    def master(
        cls,
        id: str,
        name: str,
        l10: AttributeModifier,
        l15: AttributeModifier,
        description: str = "",
    ) -> "Path":
        return cls(
            id=id,
            name=name,
            tier=PathTier.MASTER,
            description=description,
            modifiers=((10, l10), (15, l15)),
        )

    def modifier_at(self, level: int) -> AttributeModifier | None:
        """Get the modifier unlocked at exactly `level`."""
        for unlock_level, modifier in self.modifiers:
            if unlock_level == level:
                return modifier
        return None

    def unlocked(self, level: int) -> list[tuple[int, AttributeModifier]]:
        """Modifiers unlocked at or below `level`, ascending."""
        return [
            (unlock, self.modifier_at(unlock)) for unlock in self.tier.levels if unlock <= level
        ]

    def get_choices(self, level: int) -> list[tuple[int, BaseChoiceConfig]]:
        """Get the choices this path offers to a character of the given level.

        Args:
            level: Character level

        Returns:
            (unlock level, descriptor) pairs in ascending unlock level. A level's
            attribute choice comes before any other choice it offers.
        """
        return [
            (unlock, config)
            for unlock, modifier in self.unlocked(level)
            for config in modifier.offered_choices()
        ]

    def apply_modifiers(
        self, level: int, main: MainAttributes, secondary: SecondaryAttributes
    ) -> None:
        """Apply every unlocked modifier to a pair of fresh attribute buckets.

        Numeric deltas are added and list deltas appended, in ascending unlock
        level. Calling this twice on the same buckets applies everything twice.

        Args:
            level: Character level
            main: Main attribute bucket being built
            secondary: Secondary attribute bucket being built
        """
        for _, modifier in self.unlocked(level):
            for key, value in modifier.deltas().items():
                add_delta(main, secondary, key, value)

    def skills(self) -> list[Skill]:
        """Every skill granted by this path, at any level."""
        return [skill for _, modifier in self.modifiers for skill in modifier.skills or ()]

    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills()]

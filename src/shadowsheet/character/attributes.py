"""Character attributes for shadowsheet.

Main attributes are the four characteristics every ancestry starts from. Secondary
attributes are derived from them by the ancestry's rule table and then adjusted by
ancestry and path modifiers and by player choices. Both buckets are plain mutable
dataclasses so a resolution pass can build them up in place; callers only ever see
the frozen `Attributes` snapshot.
"""

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AttributeName(StrEnum):
    """Main character attributes."""

    STRENGTH = "strength"
    AGILITY = "agility"
    INTELLECT = "intellect"
    WILL = "will"


# Constant attribute names for easy import
ATTRIBUTE_NAMES = [attr.value for attr in AttributeName]

SECONDARY_ATTRIBUTE_NAMES = [
    "perception",
    "defense",
    "health",
    "healing_rate",
    "size",
    "speed",
    "power",
    "damage",
    "insanity",
    "corruption",
    "languages",
    "professions",
    "skills",
]

# Secondary attributes that accumulate instead of summing
LIST_ATTRIBUTE_NAMES = ["languages", "professions", "skills"]


class Skill(BaseModel):
    """A named talent granted by an ancestry, a path, or a choice."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Skill name, unique within a path")
    description: str = Field(default="", description="Rules text shown to the player")


@dataclass
class MainAttributes:
    """Working copy of the four main attributes."""

    strength: int = 10
    agility: int = 10
    intellect: int = 10
    will: int = 10

    def copy(self) -> "MainAttributes":
        return MainAttributes(
            strength=self.strength,
            agility=self.agility,
            intellect=self.intellect,
            will=self.will,
        )


@dataclass
class SecondaryAttributes:
    """Working bucket of derived attributes, rebuilt on every resolution."""

    perception: int = 0
    defense: int = 0
    health: int = 0
    healing_rate: int = 0
    size: float = 0
    speed: int = 0
    power: int = 0
    damage: int = 0
    insanity: int = 0
    corruption: int = 0
    languages: list[str] = field(default_factory=list)
    professions: list[str] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)


@dataclass(frozen=True)
class Attributes:
    """Fully resolved attribute snapshot returned by `Character.attributes`."""

    strength: int
    agility: int
    intellect: int
    will: int
    perception: int
    defense: int
    health: int
    healing_rate: int
    size: float
    speed: int
    power: int
    damage: int
    insanity: int
    corruption: int
    languages: tuple[str, ...]
    professions: tuple[str, ...]
    skills: tuple[Skill, ...]

    @classmethod
    def from_buckets(
        cls, main: MainAttributes, secondary: SecondaryAttributes
    ) -> "Attributes":
        """Freeze a pair of working buckets into a snapshot."""
        return cls(
            strength=main.strength,
            agility=main.agility,
            intellect=main.intellect,
            will=main.will,
            perception=secondary.perception,
            defense=secondary.defense,
            health=secondary.health,
            healing_rate=secondary.healing_rate,
            size=secondary.size,
            speed=secondary.speed,
            power=secondary.power,
            damage=secondary.damage,
            insanity=secondary.insanity,
            corruption=secondary.corruption,
            languages=tuple(secondary.languages),
            professions=tuple(secondary.professions),
            skills=tuple(secondary.skills),
        )

    @property
    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]


_MAIN_FIELDS = frozenset(f.name for f in fields(MainAttributes))
_SECONDARY_FIELDS = frozenset(f.name for f in fields(SecondaryAttributes))


def is_main_attribute(key: str) -> bool:
    """Check whether `key` names a main attribute."""
    return key in _MAIN_FIELDS


def is_secondary_attribute(key: str) -> bool:
    """Check whether `key` names a secondary attribute."""
    return key in _SECONDARY_FIELDS


def add_delta(
    main: MainAttributes, secondary: SecondaryAttributes, key: str, value: Any
) -> None:
    """Apply a single modifier delta to the matching attribute bucket.

    Main attributes are checked first, so a key present in both schemas always
    lands in the main bucket. List attributes are extended, never replaced.
    Keys that match neither bucket are ignored.

    Args:
        main: Main attribute bucket being built
        secondary: Secondary attribute bucket being built
        key: Attribute field name
        value: Numeric delta, or an iterable of entries for list attributes
    """
    if is_main_attribute(key):
        setattr(main, key, getattr(main, key) + value)
    elif key in LIST_ATTRIBUTE_NAMES:
        getattr(secondary, key).extend(value)
    elif is_secondary_attribute(key):
        setattr(secondary, key, getattr(secondary, key) + value)

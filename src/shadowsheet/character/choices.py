"""Player choices and the choice ledger.

A choice is a player-resolvable selection (attribute increase, skill, profession,
language or spell) offered by an ancestry or a path at a given level. Offers are
described by `ChoiceConfig` descriptors; the player's selections are stored in a
`ChoiceLedger` keyed by `ChoiceLocation`; `ChoiceLocation.key` renders the
`"{source}-{level}"` form used in logs.

Stored selections are never trusted blindly. Whenever the offering source changes,
`reconcile_choices` brings the stored selections back into agreement with the
currently available descriptors:

- attribute and language selections are clamped to the advertised count
- skill, profession and spell selections are filtered to the advertised candidates,
  then clamped to the count
- entries whose offer disappeared, or whose selection ends up empty, are dropped

The reconciliation functions are pure so they can be exercised without a Character.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .attributes import ATTRIBUTE_NAMES, AttributeName, Skill


class ChoiceSource(StrEnum):
    """Rule sources that can offer choices."""

    ANCESTRY = "ancestry"
    NOVICE_PATH = "novicePath"
    EXPERT_PATH = "expertPath"
    MASTER_PATH = "masterPath"


# Fixed aggregation order for available choices
CHOICE_SOURCES = [
    ChoiceSource.ANCESTRY,
    ChoiceSource.NOVICE_PATH,
    ChoiceSource.EXPERT_PATH,
    ChoiceSource.MASTER_PATH,
]


@dataclass(frozen=True)
class ChoiceLocation:
    """Identifies a choice slot by the source that offers it and its unlock level."""

    source: ChoiceSource
    level: int

    def __post_init__(self) -> None:
        """Coerce the source and reject negative levels.

        Raises:
            ValueError: If the source is unknown or the level is negative
        """
        object.__setattr__(self, "source", ChoiceSource(self.source))
        if self.level < 0:
            raise ValueError(f"Choice level must be >= 0, got {self.level}")

    @property
    def key(self) -> str:
        """String form used in log events, e.g. ``"novicePath-2"``."""
        return f"{self.source}-{self.level}"

    @classmethod
    def from_key(cls, key: str) -> "ChoiceLocation":
        """Parse the string form back into a location.

        Raises:
            ValueError: If the key is not ``"{source}-{level}"``
        """
        source, _, level = key.rpartition("-")
        return cls(source=ChoiceSource(source), level=int(level))


class Spell(BaseModel):
    """A spell that can be learned through a spell choice."""

    model_config = ConfigDict(frozen=True)

    name: str
    tradition: str = ""
    rank: int = 0
    description: str = ""


class BaseChoiceConfig(BaseModel):
    """Fields and helpers shared by every choice descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    selection_field: ClassVar[str]
    candidate_field: ClassVar[str]

    count: int = Field(default=1, ge=0, description="Number of options that may be picked")

    @property
    def selection(self) -> list[Any] | None:
        """The player's current selection, or None when nothing was picked."""
        return getattr(self, self.selection_field)

    @property
    def candidates(self) -> list[Any]:
        """Options currently legal for this choice."""
        return getattr(self, self.candidate_field)

    def with_selection(self, items: Iterable[Any]) -> "BaseChoiceConfig":
        """Return a copy carrying `items` as the selection."""
        return self.model_copy(update={self.selection_field: list(items)})

    def provided_fields(self) -> dict[str, Any]:
        """Fields explicitly given when this config was built, for field-level merges."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class AttributeChoiceConfig(BaseChoiceConfig):
    """Increase `count` main attributes by `increase_by` each."""

    selection_field: ClassVar[str] = "selected_attributes"
    candidate_field: ClassVar[str] = "available_attributes"

    type: Literal["attribute"] = "attribute"
    increase_by: int = 1
    available_attributes: list[AttributeName] = Field(
        default_factory=lambda: [AttributeName(name) for name in ATTRIBUTE_NAMES]
    )
    selected_attributes: list[AttributeName] | None = None


class SkillChoiceConfig(BaseChoiceConfig):
    """Pick `count` skills from a candidate pool."""

    selection_field: ClassVar[str] = "selected_skills"
    candidate_field: ClassVar[str] = "available_skills"

    type: Literal["skill"] = "skill"
    available_skills: list[Skill] = Field(default_factory=list)
    selected_skills: list[Skill] | None = None


class ProfessionChoiceConfig(BaseChoiceConfig):
    """Pick `count` professions; defaults apply until the player chooses."""

    selection_field: ClassVar[str] = "selected_professions"
    candidate_field: ClassVar[str] = "available_professions"

    type: Literal["profession"] = "profession"
    available_professions: list[str] = Field(default_factory=list)
    default_professions: list[str] = Field(default_factory=list)
    selected_professions: list[str] | None = None


class LanguageChoiceConfig(BaseChoiceConfig):
    """Learn `count` languages; defaults apply until the player chooses."""

    selection_field: ClassVar[str] = "selected_languages"
    candidate_field: ClassVar[str] = "available_languages"

    type: Literal["language"] = "language"
    available_languages: list[str] = Field(default_factory=list)
    default_languages: list[str] = Field(default_factory=list)
    selected_languages: list[str] | None = None


class SpellChoiceConfig(BaseChoiceConfig):
    """Learn `count` spells from a candidate pool."""

    selection_field: ClassVar[str] = "selected_spells"
    candidate_field: ClassVar[str] = "available_spells"

    type: Literal["spell"] = "spell"
    available_spells: list[Spell] = Field(default_factory=list)
    selected_spells: list[Spell] | None = None


ChoiceConfig = Annotated[
    AttributeChoiceConfig
    | SkillChoiceConfig
    | ProfessionChoiceConfig
    | LanguageChoiceConfig
    | SpellChoiceConfig,
    Field(discriminator="type"),
]

_choice_adapter: TypeAdapter[ChoiceConfig] = TypeAdapter(ChoiceConfig)

# Choice types whose selections must come from the advertised candidates.
# Attribute and language selections are only checked against the count.
MEMBERSHIP_CHECKED_TYPES = frozenset({"skill", "profession", "spell"})


def parse_choice(data: BaseChoiceConfig | Mapping[str, Any]) -> BaseChoiceConfig:
    """Build a choice config from a mapping with a ``type`` key.

    Configs are returned unchanged.

    Raises:
        pydantic.ValidationError: If the mapping does not describe a choice
    """
    if isinstance(data, BaseChoiceConfig):
        return data
    return _choice_adapter.validate_python(data)


@dataclass(frozen=True)
class AvailableChoice:
    """A choice descriptor currently offered to the character, with its location."""

    location: ChoiceLocation
    config: BaseChoiceConfig


def _option_key(item: Any) -> Any:
    # Skills and spells are matched by name, everything else by value
    return getattr(item, "name", item)


def find_descriptor(
    available: Sequence[AvailableChoice], location: ChoiceLocation, choice_type: str
) -> BaseChoiceConfig | None:
    """Find the available descriptor at `location` with the given type."""
    for choice in available:
        if choice.location == location and choice.config.type == choice_type:
            return choice.config
    return None


def reconcile_choice(
    stored: BaseChoiceConfig, descriptor: BaseChoiceConfig | None
) -> BaseChoiceConfig | None:
    """Bring one stored selection into agreement with its live descriptor.

    Args:
        stored: The selection held in the ledger
        descriptor: The currently offered descriptor at the same location, or None

    Returns:
        The corrected selection, or None if the entry should be dropped
    """
    if descriptor is None or descriptor.type != stored.type:
        return None

    selection = stored.selection
    if not selection:
        return None

    if stored.type in MEMBERSHIP_CHECKED_TYPES:
        legal = {_option_key(option) for option in descriptor.candidates}
        selection = [item for item in selection if _option_key(item) in legal]

    selection = selection[: descriptor.count]
    if not selection:
        return None

    return stored.with_selection(selection)


def reconcile_choices(
    selections: Mapping[ChoiceLocation, BaseChoiceConfig],
    available: Sequence[AvailableChoice],
    source: ChoiceSource,
) -> dict[ChoiceLocation, BaseChoiceConfig]:
    """Reconcile every stored selection belonging to `source`.

    Entries of other sources are carried over untouched and ledger order is kept.

    Args:
        selections: Ledger contents keyed by location
        available: Live descriptors, as returned by `Character.get_available_choices`
        source: The source whose entries should be reconciled

    Returns:
        The next ledger contents
    """
    result: dict[ChoiceLocation, BaseChoiceConfig] = {}
    for location, stored in selections.items():
        if location.source != source:
            result[location] = stored
            continue

        reconciled = reconcile_choice(stored, find_descriptor(available, location, stored.type))
        if reconciled is not None:
            result[location] = reconciled
    return result


def find_invalid_choices(
    selections: Mapping[ChoiceLocation, BaseChoiceConfig],
    available: Sequence[AvailableChoice],
    source: ChoiceSource,
) -> list[BaseChoiceConfig]:
    """List stored selections of `source` that reconciliation would drop or change.

    Nothing is modified; this is meant for warning the player before a
    destructive ancestry or path change.
    """
    invalid: list[BaseChoiceConfig] = []
    for location, stored in selections.items():
        if location.source != source:
            continue

        reconciled = reconcile_choice(stored, find_descriptor(available, location, stored.type))
        if reconciled is None or reconciled.selection != stored.selection:
            invalid.append(stored)
    return invalid


def effective_selection(
    descriptor: BaseChoiceConfig, stored: BaseChoiceConfig | None
) -> list[Any]:
    """Options that actually take effect for an offered choice.

    The stored selection wins when present, clamped to the descriptor count.
    Otherwise professions and languages fall back to their declared defaults;
    other choice types contribute nothing until the player picks.
    """
    if stored is not None and stored.type == descriptor.type and stored.selection is not None:
        return list(stored.selection[: descriptor.count])

    if isinstance(descriptor, ProfessionChoiceConfig):
        return descriptor.default_professions[: descriptor.count]
    if isinstance(descriptor, LanguageChoiceConfig):
        return descriptor.default_languages[: descriptor.count]
    return []


class ChoiceLedger:
    """Store of player selections, one entry per choice location."""

    def __init__(self) -> None:
        self._entries: dict[ChoiceLocation, BaseChoiceConfig] = {}

    def get(self, location: ChoiceLocation) -> BaseChoiceConfig | None:
        return self._entries.get(location)

    def set(self, location: ChoiceLocation, config: BaseChoiceConfig) -> None:
        self._entries[location] = config

    def delete(self, location: ChoiceLocation) -> None:
        self._entries.pop(location, None)

    def clear(self, source: ChoiceSource | None = None) -> int:
        """Remove every entry, or only those of `source`.

        Returns:
            Number of entries removed
        """
        if source is None:
            removed = len(self._entries)
            self._entries.clear()
            return removed

        locations = [location for location in self._entries if location.source == source]
        for location in locations:
            del self._entries[location]
        return len(locations)

    def entries(
        self, source: ChoiceSource | None = None
    ) -> list[tuple[ChoiceLocation, BaseChoiceConfig]]:
        """Stored entries in insertion order, optionally limited to one source."""
        return [
            (location, config)
            for location, config in self._entries.items()
            if source is None or location.source == source
        ]

    def snapshot(self) -> dict[ChoiceLocation, BaseChoiceConfig]:
        """Shallow copy of the ledger contents."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, location: object) -> bool:
        return location in self._entries

    def __iter__(self) -> Iterator[ChoiceLocation]:
        return iter(self._entries)

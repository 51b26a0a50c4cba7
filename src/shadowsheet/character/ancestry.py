"""Ancestries: starting attributes and secondary-attribute rule tables."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .attributes import (
    LIST_ATTRIBUTE_NAMES,
    SECONDARY_ATTRIBUTE_NAMES,
    MainAttributes,
    SecondaryAttributes,
    add_delta,
)
from .choices import BaseChoiceConfig
from .modifier import AttributeModifier

# Ancestry modifiers and choices unlock at this character level
ANCESTRY_UNLOCK_LEVEL = 4

# Rule signature: (main attributes, character level, secondary attributes so far) -> value
SecondaryAttributeRule = Callable[[MainAttributes, int, SecondaryAttributes], Any]


@dataclass(frozen=True)
class Ancestry:
    """A character's origin rule source.

    Ancestries are shared by reference between characters and never mutated.

    Attributes:
        name: Display name (e.g. "Human")
        main_attributes: Starting main attributes
        secondary_attribute_rules: One rule per secondary attribute name
        modifier: Modifier applied from level 4 onward
        choices: Extra choices offered from level 4 onward
    """

    name: str
    main_attributes: MainAttributes
    secondary_attribute_rules: Mapping[str, SecondaryAttributeRule]
    modifier: AttributeModifier | None = None
    choices: tuple[BaseChoiceConfig, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate the rule table covers every secondary attribute."""
        missing = [
            name for name in SECONDARY_ATTRIBUTE_NAMES if name not in self.secondary_attribute_rules
        ]
        if missing:
            raise ValueError(f"Ancestry '{self.name}' is missing rules for: {', '.join(missing)}")

    def base_main_attributes(self) -> MainAttributes:
        """Fresh copy of the starting main attributes."""
        return self.main_attributes.copy()

    def calculate_secondary_attributes(
        self, main: MainAttributes, level: int
    ) -> SecondaryAttributes:
        """Derive base secondary attributes from main attributes.

        Health is computed first since other rules may read it. Healing rate is
        computed last of all.
        """
        rules = self.secondary_attribute_rules
        secondary = SecondaryAttributes()

        secondary.health = rules["health"](main, level, secondary)

        for name in SECONDARY_ATTRIBUTE_NAMES:
            if name in ("health", "healing_rate"):
                continue
            value = rules[name](main, level, secondary)
            if name in LIST_ATTRIBUTE_NAMES:
                getattr(secondary, name).extend(value)
            else:
                setattr(secondary, name, value)

        secondary.healing_rate = self.recalculate_healing_rate(main, level, secondary)
        return secondary

    def recalculate_healing_rate(
        self, main: MainAttributes, level: int, secondary: SecondaryAttributes
    ) -> int:
        return self.secondary_attribute_rules["healing_rate"](main, level, secondary)

    def is_unlocked(self, level: int) -> bool:
        return level >= ANCESTRY_UNLOCK_LEVEL

    def get_choices(self, level: int) -> list[BaseChoiceConfig]:
        """Choices offered by this ancestry to a character of the given level."""
        if not self.is_unlocked(level):
            return []

        offered: list[BaseChoiceConfig] = []
        if self.modifier is not None:
            offered.extend(self.modifier.offered_choices())
        offered.extend(self.choices)
        return offered

    def apply_modifiers(
        self, level: int, main: MainAttributes, secondary: SecondaryAttributes
    ) -> None:
        """Apply the ancestry modifier when the character is level 4 or higher."""
        if self.modifier is None or not self.is_unlocked(level):
            return

        for key, value in self.modifier.deltas().items():
            add_delta(main, secondary, key, value)

"""Character attribute resolution and choice bookkeeping."""

from .ancestry import ANCESTRY_UNLOCK_LEVEL, Ancestry, SecondaryAttributeRule
from .attributes import (
    ATTRIBUTE_NAMES,
    SECONDARY_ATTRIBUTE_NAMES,
    AttributeName,
    Attributes,
    MainAttributes,
    SecondaryAttributes,
    Skill,
)
from .character import Character, ChoiceValidationConfig
from .choices import (
    AttributeChoiceConfig,
    AvailableChoice,
    ChoiceConfig,
    ChoiceLedger,
    ChoiceLocation,
    ChoiceSource,
    LanguageChoiceConfig,
    ProfessionChoiceConfig,
    SkillChoiceConfig,
    Spell,
    SpellChoiceConfig,
    find_invalid_choices,
    reconcile_choices,
)
from .languages import LanguageSuggestion, suggest_languages
from .modifier import AttributeChoice, AttributeModifier
from .path import TIER_LEVELS, Path, PathTier

__all__ = [
    "ANCESTRY_UNLOCK_LEVEL",
    "ATTRIBUTE_NAMES",
    "SECONDARY_ATTRIBUTE_NAMES",
    "TIER_LEVELS",
    "Ancestry",
    "AttributeChoice",
    "AttributeChoiceConfig",
    "AttributeModifier",
    "AttributeName",
    "Attributes",
    "AvailableChoice",
    "Character",
    "ChoiceConfig",
    "ChoiceLedger",
    "ChoiceLocation",
    "ChoiceSource",
    "ChoiceValidationConfig",
    "LanguageChoiceConfig",
    "LanguageSuggestion",
    "MainAttributes",
    "Path",
    "PathTier",
    "ProfessionChoiceConfig",
    "SecondaryAttributeRule",
    "SecondaryAttributes",
    "Skill",
    "SkillChoiceConfig",
    "Spell",
    "SpellChoiceConfig",
    "find_invalid_choices",
    "reconcile_choices",
    "suggest_languages",
]

"""Advisory language suggestions."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageSuggestion:
    """A language worth learning and why."""

    language: str
    reason: str


HIGH_INTELLECT_THRESHOLD = 12

# Novice path skills that mark a character as arcane or divine
ARCANE_SKILLS = frozenset({"Sense Magic", "Cantrip", "Academic Knowledge"})
DIVINE_SKILLS = frozenset({"Shared Recovery", "Prayer"})

BASE_SUGGESTIONS = [
    LanguageSuggestion("Common", "Basic communication language"),
    LanguageSuggestion("High Archaic", "Language of ancient texts and magic"),
]

HIGH_INTELLECT_SUGGESTIONS = [
    LanguageSuggestion("Celestial", "Advanced language suitable for high intellect"),
    LanguageSuggestion("High Archaic", "Complex language suitable for high intellect"),
]

ARCANE_SUGGESTIONS = [
    LanguageSuggestion("High Archaic", "Essential for magical studies and spellcasting"),
    LanguageSuggestion("Celestial", "Useful for understanding magical texts"),
    LanguageSuggestion("Primordial", "Important for elemental magic"),
]

DIVINE_SUGGESTIONS = [
    LanguageSuggestion("Celestial", "Sacred language of the gods"),
    LanguageSuggestion("High Archaic", "Language of religious texts and prayers"),
]


def collect_suggestions(
    intellect: int, novice_skill_names: Iterable[str] | None
) -> list[LanguageSuggestion]:
    """Gather every suggestion that applies, duplicates included.

    Args:
        intellect: Resolved intellect of the character
        novice_skill_names: Skill names of the novice path, or None without one

    Returns:
        Suggestions in order: base, intellect, arcane, divine
    """
    suggestions = list(BASE_SUGGESTIONS)

    if intellect >= HIGH_INTELLECT_THRESHOLD:
        suggestions.extend(HIGH_INTELLECT_SUGGESTIONS)

    if novice_skill_names is not None:
        names = set(novice_skill_names)
        if names & ARCANE_SKILLS:
            suggestions.extend(ARCANE_SUGGESTIONS)
        if names & DIVINE_SKILLS:
            suggestions.extend(DIVINE_SUGGESTIONS)

    return suggestions


def suggest_languages(
    intellect: int,
    novice_skill_names: Iterable[str] | None,
    chosen_languages: Iterable[str],
) -> list[LanguageSuggestion]:
    """Suggest languages the character has not already chosen.

    Duplicate languages collapse to their first occurrence.
    """
    chosen = set(chosen_languages)
    seen: set[str] = set()
    result = []
    for suggestion in collect_suggestions(intellect, novice_skill_names):
        if suggestion.language in chosen or suggestion.language in seen:
            continue
        seen.add(suggestion.language)
        result.append(suggestion)
    return result

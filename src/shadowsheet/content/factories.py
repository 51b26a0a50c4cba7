"""Factories for pre-built characters."""

from collections.abc import Iterable

import structlog

from shadowsheet.character.ancestry import Ancestry
from shadowsheet.character.character import Character
from shadowsheet.character.path import Path

from .ancestries import HUMAN
from .loader import get_path_by_id

logger = structlog.get_logger(__name__)


class UnknownPathError(LookupError):
    """Raised when a factory references a path that is not loaded."""


def create_character(
    name: str,
    ancestry: Ancestry,
    paths: Iterable[Path | str] = (),
    level: int = 0,
) -> Character:
    """
    Create a character with the given paths assigned.

    Args:
        name: Character name
        ancestry: Ancestry to build on
        paths: Paths or path IDs; each lands in the slot matching its tier
        level: Starting level

    Returns:
        The new Character

    Raises:
        UnknownPathError: If a path ID is not found
    """
    character = Character(name, ancestry, level=level)

    for entry in paths:
        path = get_path_by_id(entry) if isinstance(entry, str) else entry
        if path is None:
            raise UnknownPathError(f"Unknown path: {entry}")
        character.set_path(path)

    logger.debug(
        "character_created",
        character=name,
        ancestry=ancestry.name,
        level=level,
    )
    return character


def edward_character_factory() -> Character:
    """Edward: a human warrior, assassin and acrobat starting at level 0."""
    return create_character("Edward", HUMAN, paths=("warrior", "assassin", "acrobat"))

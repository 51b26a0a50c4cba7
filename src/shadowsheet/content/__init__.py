"""Built-in content: ancestries, path definitions and character factories."""

from .ancestries import ANCESTRIES, DWARF, HUMAN, get_ancestry
from .factories import UnknownPathError, create_character, edward_character_factory
from .loader import (
    PathLoadError,
    PathValidationError,
    get_path_by_id,
    get_paths_by_tier,
    load_all_paths,
    load_paths_from_directory,
    reset_path_cache,
)

__all__ = [
    "ANCESTRIES",
    "DWARF",
    "HUMAN",
    "get_ancestry",
    "UnknownPathError",
    "create_character",
    "edward_character_factory",
    "PathLoadError",
    "PathValidationError",
    "get_path_by_id",
    "get_paths_by_tier",
    "load_all_paths",
    "load_paths_from_directory",
    "reset_path_cache",
]

"""
Path loader module for shadowsheet.

Handles loading and validating path definitions from YAML files.

A path file looks like::

    paths:
      - id: warrior
        name: Warrior
        tier: novice
        levels:
          1:
            health: 5
            professions: [Warrior]
          2: {health: 5}
          5: {health: 5, defense: 1}
          8: {health: 5}
"""

from pathlib import Path as FilePath
from typing import Any

import structlog
import yaml

from shadowsheet.character.modifier import AttributeModifier
from shadowsheet.character.path import Path, PathTier
from shadowsheet.config import get_settings

logger = structlog.get_logger(__name__)


class PathLoadError(Exception):
    """Raised when there's an error loading path data."""

    pass


class PathValidationError(Exception):
    """Raised when path validation fails."""

    pass


# Global path cache
_paths: dict[str, Path] = {}
_paths_loaded = False


def load_yaml_file(file_path: FilePath) -> list[dict[str, Any]]:
    """
    Load a YAML file containing path definitions.

    Args:
        file_path: Path to the YAML file

    Returns:
        List of path dictionaries

    Raises:
        PathLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PathLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise PathLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise PathLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise PathLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or "paths" not in data:
        raise PathLoadError(f"Missing 'paths' key in {file_path}")

    paths = data["paths"]
    if not isinstance(paths, list):
        raise PathLoadError(f"'paths' must be a list in {file_path}")

    return paths


def validate_path_data(path_data: dict[str, Any], file_path: FilePath) -> None:
    """
    Validate that a path dictionary has all required fields.

    Args:
        path_data: Dictionary containing path data
        file_path: Path to the source file (for error messages)

    Raises:
        PathValidationError: If required fields are missing or invalid
    """
    required_fields = ["id", "name", "tier", "levels"]

    for field in required_fields:
        if field not in path_data:
            path_id = path_data.get("id", "unknown")
            raise PathValidationError(
                f"Path '{path_id}' in {file_path} missing required field: {field}"
            )

    tier = str(path_data["tier"]).lower()
    if tier not in {t.value for t in PathTier}:
        raise PathValidationError(
            f"Path '{path_data['id']}' in {file_path} has invalid tier '{tier}' "
            f"(must be one of: {', '.join(t.value for t in PathTier)})"
        )

    levels = path_data["levels"]
    if not isinstance(levels, dict):
        raise PathValidationError(
            f"Path '{path_data['id']}' in {file_path} has invalid levels (must be a dict)"
        )

    try:
        defined = sorted(int(level) for level in levels)
    except (TypeError, ValueError):
        raise PathValidationError(
            f"Path '{path_data['id']}' in {file_path} has non-numeric level keys"
        )

    expected = list(PathTier(tier).levels)
    if defined != expected:
        raise PathValidationError(
            f"Path '{path_data['id']}' in {file_path} must define levels {expected}, got {defined}"
        )


def create_path_from_data(path_data: dict[str, Any]) -> Path:
    """
    Create a Path instance from dictionary data.

    Args:
        path_data: Dictionary containing path data

    Returns:
        Path instance

    Raises:
        PathValidationError: If Pydantic validation fails
    """
    levels = {int(level): modifier for level, modifier in path_data["levels"].items()}
    tier = PathTier(str(path_data["tier"]).lower())

    try:
        return Path(
            id=path_data["id"],
            name=path_data["name"],
            tier=tier,
            description=path_data.get("description", ""),
            modifiers=tuple(
                (level, AttributeModifier.model_validate(levels[level] or {}))
                for level in tier.levels
            ),
        )
    except Exception as e:
        raise PathValidationError(f"Failed to create path '{path_data.get('id', 'unknown')}': {e}")


def load_paths_from_directory(directory: FilePath) -> dict[str, Path]:
    """
    Load all path YAML files from a directory.

    Args:
        directory: Path to the directory containing YAML files

    Returns:
        Dictionary mapping path_id to Path instances

    Raises:
        PathLoadError: If directory doesn't exist or files can't be loaded
        PathValidationError: If path validation fails
    """
    if not directory.exists():
        raise PathLoadError(f"Directory does not exist: {directory}")

    if not directory.is_dir():
        raise PathLoadError(f"Not a directory: {directory}")

    paths: dict[str, Path] = {}
    yaml_files = sorted(list(directory.glob("*.yaml")) + list(directory.glob("*.yml")))

    if not yaml_files:
        raise PathLoadError(f"No YAML files found in {directory}")

    for yaml_file in yaml_files:
        for path_data in load_yaml_file(yaml_file):
            validate_path_data(path_data, yaml_file)
            path = create_path_from_data(path_data)

            # Check for duplicate path IDs
            if path.id in paths:
                logger.warning("duplicate_path_id", path_id=path.id, file=str(yaml_file))
                continue

            paths[path.id] = path

            logger.debug("path_loaded", path_id=path.id, tier=str(path.tier))

    return paths


def load_all_paths(directory: FilePath | None = None) -> dict[str, Path]:
    """
    Load every path definition and cache the result.

    Args:
        directory: Directory to load from. If None, uses the configured paths directory.

    Returns:
        Dictionary mapping path_id to Path instances
    """
    global _paths, _paths_loaded

    if directory is None:
        directory = get_settings().paths_dir

    _paths = load_paths_from_directory(directory)
    _paths_loaded = True

    logger.info("paths_loaded", directory=str(directory), path_count=len(_paths))
    return _paths


def get_path_by_id(path_id: str) -> Path | None:
    """
    Get a path by ID, loading the default content on first use.

    Args:
        path_id: The path identifier

    Returns:
        Path if found, None otherwise
    """
    if not _paths_loaded:
        load_all_paths()

    return _paths.get(path_id)


def get_paths_by_tier(tier: PathTier | str) -> list[Path]:
    """Get every loaded path of a tier, sorted by name."""
    if not _paths_loaded:
        load_all_paths()

    tier = PathTier(tier)
    return sorted((p for p in _paths.values() if p.tier == tier), key=lambda p: p.name)


def reset_path_cache() -> None:
    """Forget cached paths so the next lookup reloads them."""
    global _paths, _paths_loaded

    _paths = {}
    _paths_loaded = False

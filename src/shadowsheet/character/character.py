"""The Character orchestrator.

A character owns an ancestry, three path slots (novice, expert, master), a ledger of
player choices and a level. Derived attributes are never cached: every read of
`Character.attributes` runs the full resolution pipeline:

1. copy the ancestry's base main attributes
2. derive secondary attributes from the ancestry rule table (health first,
   healing rate last)
3. apply ancestry modifiers (level 4 and up)
4. apply novice, expert and master path modifiers
5. fold in every currently available choice
6. recompute healing rate from the fully resolved state

Reassigning the ancestry or a path reconciles the stored choices of that source
against what is offered afterwards, unless the validation config says otherwise.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import structlog
from pydantic import ValidationError

from shadowsheet.config import Settings, get_settings

from .ancestry import ANCESTRY_UNLOCK_LEVEL, Ancestry
from .attributes import Attributes, MainAttributes, SecondaryAttributes, add_delta
from .choices import (
    CHOICE_SOURCES,
    AttributeChoiceConfig,
    AvailableChoice,
    BaseChoiceConfig,
    ChoiceLedger,
    ChoiceLocation,
    ChoiceSource,
    LanguageChoiceConfig,
    ProfessionChoiceConfig,
    SkillChoiceConfig,
    effective_selection,
    find_invalid_choices,
    parse_choice,
    reconcile_choices,
)
from .languages import LanguageSuggestion, suggest_languages
from .path import Path, PathTier

logger = structlog.get_logger(__name__)

SOURCE_TIERS: dict[ChoiceSource, PathTier] = {tier.source: tier for tier in PathTier}


@dataclass(frozen=True)
class ChoiceValidationConfig:
    """Controls how stored choices react to ancestry and path changes."""

    validate_on_path_change: bool = True
    validate_on_ancestry_change: bool = True
    preserve_invalid_choices: bool = False

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ChoiceValidationConfig":
        if settings is None:
            settings = get_settings()
        return cls(
            validate_on_path_change=settings.validate_on_path_change,
            validate_on_ancestry_change=settings.validate_on_ancestry_change,
            preserve_invalid_choices=settings.preserve_invalid_choices,
        )


class Character:
    """A playable character and its attribute-resolution pipeline."""

    def __init__(
        self,
        name: str,
        ancestry: Ancestry,
        level: int = 0,
        validation_config: ChoiceValidationConfig | None = None,
    ) -> None:
        """
        Initialize a character.

        Args:
            name: Character name
            ancestry: Ancestry providing base attributes and rules
            level: Starting level
            validation_config: Choice validation behaviour (defaults from settings)
        """
        self.name = name
        self.level = level
        self._ancestry = ancestry
        self._paths: dict[PathTier, Path | None] = {tier: None for tier in PathTier}
        self._ledger = ChoiceLedger()
        self._validation_config = validation_config or ChoiceValidationConfig.from_settings()

    def __repr__(self) -> str:
        return (
            f"Character(name={self.name!r}, ancestry={self._ancestry.name!r}, "
            f"level={self.level})"
        )

    # ------------------------------------------------------------------
    # Rule sources
    # ------------------------------------------------------------------

    @property
    def ancestry(self) -> Ancestry:
        return self._ancestry

    @ancestry.setter
    def ancestry(self, value: Ancestry) -> None:
        self.reassign(ChoiceSource.ANCESTRY, value)

    @property
    def novice_path(self) -> Path | None:
        return self._paths[PathTier.NOVICE]

    @novice_path.setter
    def novice_path(self, value: Path | None) -> None:
        self.reassign(ChoiceSource.NOVICE_PATH, value)

    @property
    def expert_path(self) -> Path | None:
        return self._paths[PathTier.EXPERT]

    @expert_path.setter
    def expert_path(self, value: Path | None) -> None:
        self.reassign(ChoiceSource.EXPERT_PATH, value)

    @property
    def master_path(self) -> Path | None:
        return self._paths[PathTier.MASTER]

    @master_path.setter
    def master_path(self, value: Path | None) -> None:
        self.reassign(ChoiceSource.MASTER_PATH, value)

    def reassign(self, source: ChoiceSource | str, value: Ancestry | Path | None) -> None:
        """Replace the ancestry or a path, then reconcile that source's choices.

        Args:
            source: Which rule source is being replaced
            value: The new ancestry, the new path, or None to empty a path slot

        Raises:
            ValueError: If the ancestry is cleared or a path lands in the wrong slot
        """
        source = ChoiceSource(source)

        if source == ChoiceSource.ANCESTRY:
            if not isinstance(value, Ancestry):
                raise ValueError("A character must always have an ancestry")
            self._ancestry = value
            should_validate = self._validation_config.validate_on_ancestry_change
        else:
            tier = SOURCE_TIERS[source]
            if value is not None and (not isinstance(value, Path) or value.tier != tier):
                raise ValueError(f"Slot {source} only accepts {tier} paths")
            self._paths[tier] = value
            should_validate = self._validation_config.validate_on_path_change

        logger.debug(
            "rule_source_assigned",
            character=self.name,
            source=str(source),
            value=getattr(value, "name", None),
        )

        if should_validate:
            self.validate_choices_for_source(source)

    def set_path(self, path: Path) -> None:
        """Assign a path to the slot matching its tier."""
        self.reassign(path.tier.source, path)

    def clear_path(self, tier: PathTier | str) -> None:
        """Empty the slot for the given tier."""
        self.reassign(PathTier(tier).source, None)

    # ------------------------------------------------------------------
    # Validation config
    # ------------------------------------------------------------------

    @property
    def validation_config(self) -> ChoiceValidationConfig:
        return self._validation_config

    def set_validation_config(self, **changes: bool) -> None:
        """Update part of the validation config.

        Turning path validation back on validates every source; turning ancestry
        validation back on validates the ancestry source.

        Raises:
            TypeError: If an unknown option is given
        """
        old = self._validation_config
        self._validation_config = replace(old, **changes)
        new = self._validation_config

        if not old.validate_on_path_change and new.validate_on_path_change:
            self.validate_all_choices()
        if not old.validate_on_ancestry_change and new.validate_on_ancestry_change:
            self.validate_choices_for_source(ChoiceSource.ANCESTRY)

    # ------------------------------------------------------------------
    # Attribute resolution
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> Attributes:
        """Fully resolved attributes at the current level, recomputed on every read."""
        return self.attributes_at(self.level)

    def attributes_at(self, level: int) -> Attributes:
        """Resolve attributes as if the character were `level`, without changing it."""
        main, secondary = self._resolve(level)
        return Attributes.from_buckets(main, secondary)

    def max_spell_power_for_level(self, level: int) -> int:
        """Power attribute the character would have at `level`."""
        return self.attributes_at(level).power

    def known_languages(self) -> list[str]:
        """Languages granted unconditionally by the ancestry and paths, ignoring choices."""
        _, secondary = self._resolve(self.level, include_choices=False)
        return secondary.languages

    def _resolve(
        self, level: int, include_choices: bool = True
    ) -> tuple[MainAttributes, SecondaryAttributes]:
        main = self._ancestry.base_main_attributes()
        secondary = self._ancestry.calculate_secondary_attributes(main, level)

        self._ancestry.apply_modifiers(level, main, secondary)
        for tier in PathTier:
            path = self._paths[tier]
            if path is not None:
                path.apply_modifiers(level, main, secondary)

        if include_choices:
            for choice in self._available_choices(level):
                self._apply_choice(choice, main, secondary)

        # Healing rate depends on the fully resolved health and size
        secondary.healing_rate = self._ancestry.recalculate_healing_rate(main, level, secondary)
        return main, secondary

    def _apply_choice(
        self, choice: AvailableChoice, main: MainAttributes, secondary: SecondaryAttributes
    ) -> None:
        config = choice.config
        selected = effective_selection(config, self._ledger.get(choice.location))

        if isinstance(config, AttributeChoiceConfig):
            for attribute in selected:
                add_delta(main, secondary, str(attribute), config.increase_by)
        elif isinstance(config, ProfessionChoiceConfig):
            secondary.professions.extend(selected)
        elif isinstance(config, LanguageChoiceConfig):
            secondary.languages.extend(selected)
        elif isinstance(config, SkillChoiceConfig):
            secondary.skills.extend(selected)

    # ------------------------------------------------------------------
    # Choices
    # ------------------------------------------------------------------

    def get_available_choices(self) -> list[AvailableChoice]:
        """Every choice currently offered, in order ancestry, novice, expert, master."""
        return self._available_choices(self.level)

    def _available_choices(self, level: int) -> list[AvailableChoice]:
        ancestry_location = ChoiceLocation(ChoiceSource.ANCESTRY, ANCESTRY_UNLOCK_LEVEL)
        choices = [
            AvailableChoice(ancestry_location, config)
            for config in self._ancestry.get_choices(level)
        ]

        for tier in PathTier:
            path = self._paths[tier]
            if path is None:
                continue
            choices.extend(
                AvailableChoice(ChoiceLocation(tier.source, unlock), config)
                for unlock, config in path.get_choices(level)
            )

        return choices

    def set_choice(
        self, location: ChoiceLocation, selection: BaseChoiceConfig | Mapping[str, Any]
    ) -> None:
        """Store the player's selection for a choice location.

        An existing entry of the same type is merged field by field; an existing
        entry of another type is left alone. Languages the character already
        knows are dropped from a language selection.

        Args:
            location: Where the choice is offered
            selection: A choice config, or a mapping with a ``type`` key
        """
        try:
            incoming = parse_choice(selection)
        except ValidationError as e:
            logger.warning(
                "choice_selection_rejected",
                character=self.name,
                location=location.key,
                error=str(e),
            )
            return

        if isinstance(incoming, LanguageChoiceConfig) and incoming.selected_languages:
            known = set(self.known_languages())
            incoming = incoming.model_copy(
                update={
                    "selected_languages": [
                        lang for lang in incoming.selected_languages if lang not in known
                    ]
                }
            )

        existing = self._ledger.get(location)
        if existing is None:
            self._ledger.set(location, incoming)
        elif existing.type == incoming.type:
            self._ledger.set(location, existing.model_copy(update=incoming.provided_fields()))
        else:
            logger.debug(
                "choice_type_mismatch",
                character=self.name,
                location=location.key,
                stored=existing.type,
                incoming=incoming.type,
            )
            return

        logger.debug("choice_set", character=self.name, location=location.key, type=incoming.type)

    def get_choice(self, location: ChoiceLocation) -> BaseChoiceConfig | None:
        """Get the stored selection for a location, as stored."""
        return self._ledger.get(location)

    def stored_choices(
        self, source: ChoiceSource | str | None = None
    ) -> list[tuple[ChoiceLocation, BaseChoiceConfig]]:
        """Stored selections in the order they were first made."""
        return self._ledger.entries(ChoiceSource(source) if source is not None else None)

    def validate_choices_for_source(self, source: ChoiceSource | str) -> None:
        """Reconcile stored selections of `source` with the choices offered now.

        Selections whose offer disappeared are removed; the rest are filtered and
        clamped. Does nothing while invalid choices are preserved.
        """
        if self._validation_config.preserve_invalid_choices:
            return

        source = ChoiceSource(source)
        before = self._ledger.snapshot()
        after = reconcile_choices(before, self.get_available_choices(), source)

        removed = []
        truncated = []
        for location, stored in before.items():
            reconciled = after.get(location)
            if reconciled is None:
                self._ledger.delete(location)
                removed.append(location.key)
            elif reconciled is not stored:
                self._ledger.set(location, reconciled)
                if reconciled.selection != stored.selection:
                    truncated.append(location.key)

        if removed or truncated:
            logger.info(
                "choices_reconciled",
                character=self.name,
                source=str(source),
                removed=removed,
                truncated=truncated,
            )

    def validate_all_choices(self) -> None:
        for source in CHOICE_SOURCES:
            self.validate_choices_for_source(source)

    def get_invalid_choices(self, source: ChoiceSource | str) -> list[BaseChoiceConfig]:
        """Stored selections of `source` that validation would drop or truncate.

        Read-only; useful for warning the player before a destructive change.
        """
        return find_invalid_choices(
            self._ledger.snapshot(), self.get_available_choices(), ChoiceSource(source)
        )

    def clear_choices(self, source: ChoiceSource | str | None = None) -> None:
        """Forget every stored selection, or only those of one source."""
        removed = self._ledger.clear(ChoiceSource(source) if source is not None else None)
        logger.debug(
            "choices_cleared",
            character=self.name,
            source=str(source) if source is not None else None,
            removed=removed,
        )

    # ------------------------------------------------------------------
    # Progression
    # ------------------------------------------------------------------

    def level_up(self) -> None:
        """Increase level by one. Newly unlocked choices show up on the next query."""
        self.level += 1
        logger.debug("character_leveled_up", character=self.name, level=self.level)

    def get_suggested_languages(self) -> list[LanguageSuggestion]:
        """Languages worth learning that the character has not chosen yet."""
        chosen = [
            language
            for _, config in self._ledger.entries()
            if isinstance(config, LanguageChoiceConfig)
            for language in config.selected_languages or ()
        ]
        novice = self.novice_path
        novice_skills = novice.skill_names() if novice is not None else None
        return suggest_languages(self.attributes.intellect, novice_skills, chosen)

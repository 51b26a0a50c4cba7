"""Tests for tiered paths."""

import pytest
from pydantic import ValidationError

from shadowsheet.character.attributes import MainAttributes, SecondaryAttributes, Skill
from shadowsheet.character.choices import ChoiceSource, SkillChoiceConfig
from shadowsheet.character.modifier import AttributeChoice, AttributeModifier
from shadowsheet.character.path import TIER_LEVELS, Path, PathTier


def _mod(**kwargs):
    return AttributeModifier(**kwargs)


class TestPathTier:
    """Tests for tier unlock tables."""

    def test_unlock_levels(self):
        """Test the unlock levels of each tier."""
        assert TIER_LEVELS[PathTier.NOVICE] == (1, 2, 5, 8)
        assert TIER_LEVELS[PathTier.EXPERT] == (3, 6, 9)
        assert TIER_LEVELS[PathTier.MASTER] == (10, 15)

    def test_sources(self):
        """Test each tier maps to its choice source."""
        assert PathTier.NOVICE.source == ChoiceSource.NOVICE_PATH
        assert PathTier.EXPERT.source == ChoiceSource.EXPERT_PATH
        assert PathTier.MASTER.source == ChoiceSource.MASTER_PATH


class TestPathConstruction:
    """Tests for building paths."""

    def test_constructors_set_tier(self):
        """Test tier constructors set the tier and unlock levels."""
        novice = Path.novice("n", "N", _mod(), _mod(), _mod(), _mod())
        expert = Path.expert("e", "E", _mod(), _mod(), _mod())
        master = Path.master("m", "M", _mod(), _mod())

        assert novice.tier == PathTier.NOVICE
        assert expert.tier == PathTier.EXPERT
        assert master.tier == PathTier.MASTER
        assert [level for level, _ in master.modifiers] == [10, 15]

    def test_wrong_levels_rejected(self):
        """Test a path with the wrong unlock levels fails validation."""
        with pytest.raises(ValidationError, match="must define levels"):
            Path(
                id="broken",
                name="Broken",
                tier=PathTier.EXPERT,
                modifiers=((3, _mod()), (6, _mod())),
            )

    def test_modifier_at(self):
        """Test looking up the modifier of a single unlock level."""
        l5 = _mod(defense=1)
        path = Path.novice("n", "N", _mod(), _mod(), l5, _mod())
        assert path.modifier_at(5) == l5
        assert path.modifier_at(4) is None


class TestGetChoices:
    """Tests for the choices a path offers at a level."""

    @pytest.fixture
    def path(self):
        return Path.novice(
            "chooser",
            "Chooser",
            _mod(attribute_choices=AttributeChoice(count=1, increase_by=1)),
            _mod(health=2),
            _mod(attribute_choices=AttributeChoice(count=2, increase_by=2)),
            _mod(attribute_choices=AttributeChoice(count=1, default_attributes=("will",))),
        )

    def test_nothing_below_first_level(self, path):
        """Test no choices are offered before the first unlock level."""
        assert path.get_choices(0) == []

    def test_only_unlocked_levels(self, path):
        """Test only levels at or below the character level offer choices."""
        choices = path.get_choices(5)
        assert [level for level, _ in choices] == [1, 5]
        assert choices[1][1].count == 2
        assert choices[1][1].increase_by == 2

    def test_ascending_order(self, path):
        """Test choices are listed by ascending unlock level."""
        assert [level for level, _ in path.get_choices(20)] == [1, 5, 8]

    def test_default_candidates(self, path):
        """Test candidate attributes default to all four."""
        choices = dict(path.get_choices(8))
        assert choices[1].available_attributes == ["strength", "agility", "intellect", "will"]
        assert choices[8].available_attributes == ["will"]

    def test_extra_choices_follow_attribute_choice(self):
        """Test extra choices follow the attribute choice of the same level."""
        skills = SkillChoiceConfig(count=1, available_skills=[Skill(name="Backstab")])
        path = Path.expert(
            "e",
            "E",
            _mod(attribute_choices=AttributeChoice(count=2), choices=(skills,)),
            _mod(),
            _mod(),
        )
        choices = path.get_choices(3)
        assert [(level, config.type) for level, config in choices] == [
            (3, "attribute"),
            (3, "skill"),
        ]


class TestApplyModifiers:
    """Tests for applying path modifiers to attribute buckets."""

    @pytest.fixture
    def path(self):
        return Path.novice(
            "warrior",
            "Warrior",
            _mod(health=5, strength=1, professions=("Warrior",), skills=(Skill(name="Grit"),)),
            _mod(health=5),
            _mod(health=5, defense=1, languages=("Elvish",)),
            _mod(health=5),
        )

    def test_applies_unlocked_levels_only(self, path):
        """Test modifiers above the character level are skipped."""
        main, secondary = MainAttributes(), SecondaryAttributes(health=10, defense=10)
        path.apply_modifiers(2, main, secondary)

        assert main.strength == 11
        assert secondary.health == 20
        assert secondary.defense == 10
        assert secondary.professions == ["Warrior"]
        assert [skill.name for skill in secondary.skills] == ["Grit"]

    def test_level_zero_applies_nothing(self, path):
        """Test a level 0 character gets no path modifiers."""
        main, secondary = MainAttributes(), SecondaryAttributes(health=10)
        path.apply_modifiers(0, main, secondary)
        assert main == MainAttributes()
        assert secondary == SecondaryAttributes(health=10)

    def test_lists_append(self, path):
        """Test list modifiers append to existing lists."""
        main, secondary = MainAttributes(), SecondaryAttributes(languages=["Common"])
        path.apply_modifiers(8, main, secondary)
        assert secondary.languages == ["Common", "Elvish"]
        assert secondary.health == 20
        assert secondary.defense == 1

    def test_applying_twice_accumulates(self, path):
        """Buckets must be fresh for every application."""
        main, secondary = MainAttributes(), SecondaryAttributes()
        path.apply_modifiers(1, main, secondary)
        path.apply_modifiers(1, main, secondary)
        assert main.strength == 12
        assert secondary.professions == ["Warrior", "Warrior"]

    def test_skill_names(self, path):
        """Test skill names granted across all levels."""
        assert path.skill_names() == ["Grit"]

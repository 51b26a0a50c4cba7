"""Tests for attribute buckets and delta application."""

import pytest

from shadowsheet.character.attributes import (
    ATTRIBUTE_NAMES,
    Attributes,
    MainAttributes,
    SecondaryAttributes,
    Skill,
    add_delta,
    is_main_attribute,
    is_secondary_attribute,
)


class TestAttributeNames:
    """Tests for attribute name tables."""

    def test_main_attribute_order(self):
        """Test main attributes are listed strength, agility, intellect, will."""
        assert ATTRIBUTE_NAMES == ["strength", "agility", "intellect", "will"]

    def test_membership(self):
        """Test main and secondary attribute name lookups."""
        assert is_main_attribute("strength")
        assert not is_main_attribute("health")
        assert is_secondary_attribute("health")
        assert is_secondary_attribute("languages")
        assert not is_secondary_attribute("strength")
        assert not is_secondary_attribute("charisma")


class TestAddDelta:
    """Tests for applying a single delta to the buckets."""

    def test_numeric_main_delta(self):
        """Test a numeric delta on a main attribute lands in the main bucket."""
        main, secondary = MainAttributes(), SecondaryAttributes()
        add_delta(main, secondary, "strength", 2)
        assert main.strength == 12

    def test_numeric_secondary_delta(self):
        """Test a numeric delta on a secondary attribute is added."""
        main, secondary = MainAttributes(), SecondaryAttributes(health=10)
        add_delta(main, secondary, "health", 5)
        assert secondary.health == 15

    def test_negative_delta(self):
        """Test negative deltas lower the attribute."""
        main, secondary = MainAttributes(), SecondaryAttributes()
        add_delta(main, secondary, "agility", -1)
        assert main.agility == 9

    def test_list_delta_appends(self):
        """List deltas extend the existing list instead of replacing it."""
        main, secondary = MainAttributes(), SecondaryAttributes(languages=["Common"])
        add_delta(main, secondary, "languages", ("Dwarfish", "Common"))
        assert secondary.languages == ["Common", "Dwarfish", "Common"]

    def test_skill_delta_appends(self):
        """Test list deltas extend the existing list."""
        main, secondary = MainAttributes(), SecondaryAttributes()
        skill = Skill(name="Grit", description="Catch your breath twice.")
        add_delta(main, secondary, "skills", [skill])
        assert secondary.skills == [skill]

    def test_unknown_key_ignored(self):
        """Test keys outside both schemas change nothing."""
        main, secondary = MainAttributes(), SecondaryAttributes()
        add_delta(main, secondary, "charisma", 3)
        assert main == MainAttributes()
        assert secondary == SecondaryAttributes()


class TestBuckets:
    """Tests for bucket defaults and snapshots."""

    def test_secondary_lists_not_shared(self):
        """Test each secondary bucket gets its own lists."""
        first, second = SecondaryAttributes(), SecondaryAttributes()
        first.languages.append("Common")
        assert second.languages == []

    def test_main_copy_is_independent(self):
        """Test copies of main attributes do not alias the original."""
        original = MainAttributes(strength=11)
        copy = original.copy()
        copy.strength += 1
        assert original.strength == 11
        assert copy.strength == 12

    def test_snapshot_freezes_lists(self):
        """Test the snapshot holds tuples detached from the buckets."""
        main = MainAttributes()
        secondary = SecondaryAttributes(health=10, languages=["Common"])
        snapshot = Attributes.from_buckets(main, secondary)

        secondary.languages.append("Elvish")

        assert snapshot.languages == ("Common",)
        assert snapshot.health == 10
        with pytest.raises(AttributeError):
            snapshot.health = 1  # type: ignore[misc]

    def test_skill_names(self):
        """Test skill names are read off the snapshot in order."""
        skill = Skill(name="Prayer")
        snapshot = Attributes.from_buckets(MainAttributes(), SecondaryAttributes(skills=[skill]))
        assert snapshot.skill_names == ["Prayer"]

"""Shared fixtures for character tests."""

import pytest

from shadowsheet.character import (
    Ancestry,
    AttributeChoice,
    AttributeModifier,
    MainAttributes,
    Path,
    Skill,
)


def _rules(languages=("Common",)):
    return {
        "health": lambda main, level, secondary: main.strength,
        "healing_rate": lambda main, level, secondary: secondary.health // 4,
        "perception": lambda main, level, secondary: main.intellect,
        "defense": lambda main, level, secondary: main.agility,
        "size": lambda main, level, secondary: 1,
        "speed": lambda main, level, secondary: 10,
        "power": lambda main, level, secondary: 0,
        "damage": lambda main, level, secondary: 0,
        "insanity": lambda main, level, secondary: 0,
        "corruption": lambda main, level, secondary: 0,
        "languages": lambda main, level, secondary: list(languages),
        "professions": lambda main, level, secondary: [],
        "skills": lambda main, level, secondary: [],
    }


@pytest.fixture
def make_ancestry():
    """Factory for simple ancestries: health = strength, healing rate = health // 4."""

    def factory(
        name="Testling",
        modifier=None,
        choices=(),
        languages=("Common",),
        **main,
    ):
        attributes = {"strength": 10, "agility": 10, "intellect": 10, "will": 10}
        attributes.update(main)
        return Ancestry(
            name=name,
            main_attributes=MainAttributes(**attributes),
            secondary_attribute_rules=_rules(languages),
            modifier=modifier,
            choices=tuple(choices),
        )

    return factory


@pytest.fixture
def ancestry(make_ancestry):
    """Plain ancestry with every main attribute at 10."""
    return make_ancestry()


@pytest.fixture
def skills():
    """Three skills used to build skill choice pools."""
    return [
        Skill(name="Backstab", description="Extra damage against surprised targets."),
        Skill(name="Sneak Attack", description="Extra damage with a boon."),
        Skill(name="Exploit Opportunity", description="Take an extra turn."),
    ]


@pytest.fixture
def empty_modifier():
    return AttributeModifier()


@pytest.fixture
def strong_novice(empty_modifier):
    """Novice path granting +1 strength at level 1 and an attribute choice at level 2."""
    return Path.novice(
        "strong",
        "Strong",
        AttributeModifier(strength=1, health=5, professions=("Warrior",)),
        AttributeModifier(attribute_choices=AttributeChoice(count=2, increase_by=1)),
        empty_modifier,
        empty_modifier,
    )


@pytest.fixture
def chooser_expert(empty_modifier):
    """Expert path offering an attribute choice at level 3."""
    return Path.expert(
        "chooser",
        "Chooser",
        AttributeModifier(health=3, attribute_choices=AttributeChoice(count=2, increase_by=1)),
        empty_modifier,
        empty_modifier,
    )


@pytest.fixture
def plain_expert(empty_modifier):
    """Expert path with no choices at all."""
    return Path.expert(
        "plain",
        "Plain",
        AttributeModifier(health=3),
        empty_modifier,
        empty_modifier,
    )

"""Built-in ancestries.

Ancestry rule tables are functions of (main attributes, level, secondary so far), so
ancestries are defined in code rather than loaded from YAML like paths.
"""

from shadowsheet.character.ancestry import Ancestry, SecondaryAttributeRule
from shadowsheet.character.attributes import MainAttributes, SecondaryAttributes, Skill
from shadowsheet.character.choices import ProfessionChoiceConfig
from shadowsheet.character.modifier import AttributeChoice, AttributeModifier


def _constant(value: object) -> SecondaryAttributeRule:
    def rule(main: MainAttributes, level: int, secondary: SecondaryAttributes) -> object:
        return value

    return rule


def _healing_rate(main: MainAttributes, level: int, secondary: SecondaryAttributes) -> int:
    # One quarter of health, rounded down
    return secondary.health // 4


HUMAN = Ancestry(
    name="Human",
    main_attributes=MainAttributes(strength=10, agility=10, intellect=10, will=10),
    secondary_attribute_rules={
        "health": lambda main, level, secondary: main.strength,
        "healing_rate": _healing_rate,
        "perception": lambda main, level, secondary: main.intellect,
        "defense": lambda main, level, secondary: main.agility,
        "size": _constant(1),
        "speed": _constant(10),
        "power": _constant(0),
        "damage": _constant(0),
        "insanity": _constant(0),
        "corruption": _constant(0),
        "languages": lambda main, level, secondary: ["Common"],
        "professions": lambda main, level, secondary: [],
        "skills": lambda main, level, secondary: [],
    },
    modifier=AttributeModifier(
        health=5,
        attribute_choices=AttributeChoice(count=1, increase_by=1),
    ),
)

DWARF = Ancestry(
    name="Dwarf",
    main_attributes=MainAttributes(strength=10, agility=9, intellect=10, will=10),
    secondary_attribute_rules={
        "health": lambda main, level, secondary: main.strength + 4,
        "healing_rate": _healing_rate,
        "perception": lambda main, level, secondary: main.intellect + 1,
        "defense": lambda main, level, secondary: main.agility,
        "size": _constant(0.5),
        "speed": _constant(8),
        "power": _constant(0),
        "damage": _constant(0),
        "insanity": _constant(0),
        "corruption": _constant(0),
        "languages": lambda main, level, secondary: ["Common", "Dwarfish"],
        "professions": lambda main, level, secondary: [],
        "skills": lambda main, level, secondary: [
            Skill(name="Darksight", description="You see in darkness as if it were shadows."),
            Skill(
                name="Robust Constitution",
                description="You take half damage from poison and resist being poisoned.",
            ),
        ],
    },
    modifier=AttributeModifier(health=4),
    choices=(
        ProfessionChoiceConfig(
            count=1,
            available_professions=["Miner", "Smith", "Brewer", "Stonemason"],
            default_professions=["Miner"],
        ),
    ),
)

ANCESTRIES: dict[str, Ancestry] = {
    ancestry.name.lower(): ancestry for ancestry in (HUMAN, DWARF)
}


def get_ancestry(name: str) -> Ancestry | None:
    """Get a built-in ancestry by name (case-insensitive)."""
    return ANCESTRIES.get(name.lower())

"""
Pydantic models for game data returned by XIVAPI.

Payloads use camelCase keys; models expose snake_case attributes and
accept either form. Strict mode is on so a string "90" is not a valid
level and 1 is not a valid boolean.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

JobCategory = Literal[
    "Tank",
    "Healer",
    "Melee DPS",
    "Ranged DPS",
    "Caster DPS",
    "Crafter",
    "Gatherer",
]

ItemCategory = Literal[
    "Weapon",
    "Armor",
    "Accessory",
    "Consumable",
    "Material",
    "Tool",
    "Furnishing",
    "Miscellany",
]

AchievementCategory = Literal[
    "Battle",
    "PvP",
    "Character",
    "Items",
    "Crafting",
    "Gathering",
    "Quests",
    "Exploration",
    "Grand Company",
    "Legacy",
]


class GameDataModel(BaseModel):
    """Base for all API payload models."""

    model_config = ConfigDict(
        strict=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Job(GameDataModel):
    """A combat, crafting or gathering job."""

    id: int
    name: str
    abbreviation: str
    category: JobCategory
    max_level: int = Field(gt=0)
    starting_level: int = Field(gt=0)
    class_job: str
    unlock_quest: str
    job_stone: Optional[str]
    primary_attribute: str
    is_starting_class: bool
    expansion_required: Optional[str]

    @model_validator(mode="after")
    def _starting_level_within_cap(self) -> "Job":
        if self.starting_level > self.max_level:
            raise ValueError("starting_level cannot exceed max_level")
        return self


class Item(GameDataModel):
    id: int
    name: str
    description: str
    category: ItemCategory
    sub_category: str
    item_level: int = Field(ge=0)
    required_level: int = Field(ge=0)
    rarity: str
    stack_size: int
    vendor_price: int
    can_be_hq: bool
    tradeable: bool
    desynthable: bool
    dyeable: bool
    stats: dict[str, float]
    jobs: list[str]
    obtained_from: list[str]


class Achievement(GameDataModel):
    id: int
    name: str
    description: str
    category: AchievementCategory
    sub_category: str
    points: int = Field(ge=0)
    title: Optional[str]
    icon: str
    is_secret: bool
    requirements: list[str]
    rewards: list[str]
    series: Optional[str]
    order: int


class QuestRewards(GameDataModel):
    experience: int
    gil: int
    items: list[str]
    unlocks: list[str]


class Quest(GameDataModel):
    id: int
    name: str
    description: str
    type: str
    level: int = Field(gt=0)
    job_required: Optional[str]
    level_required: int = Field(ge=0)
    expansion_required: Optional[str]
    prerequisites: list[str]
    rewards: QuestRewards
    objectives: list[str]
    location: str
    npc_giver: str
    is_main_scenario: bool
    is_side_quest: bool
    is_job_quest: bool
    is_class_quest: bool
    is_repeatable: bool

    # Strict mode only accepts model instances for nested models
    @field_validator("rewards", mode="before")
    @classmethod
    def _parse_rewards(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return QuestRewards.model_validate(value)
        return value


# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------


class SearchParams(BaseModel):
    """Base for query parameter models. Serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    limit: Optional[int] = Field(default=None, gt=0)
    page: Optional[int] = Field(default=None, gt=0)

    def to_query(self) -> dict[str, Any]:
        """Non-empty parameters keyed by their API names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ItemSearchParams(SearchParams):
    name: Optional[str] = None
    category: Optional[ItemCategory] = None
    categories: Optional[list[ItemCategory]] = None
    level: Optional[int] = None
    job_restriction: Optional[str] = None


class AchievementSearchParams(SearchParams):
    name: Optional[str] = None
    category: Optional[AchievementCategory] = None
    points: Optional[int] = None


class QuestSearchParams(SearchParams):
    name: Optional[str] = None
    type: Optional[str] = None
    level: Optional[int] = None
    job_required: Optional[str] = None
    is_main_scenario: Optional[bool] = None


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

_JOB_CATEGORIES = frozenset(get_args(JobCategory))
_ITEM_CATEGORIES = frozenset(get_args(ItemCategory))
_ACHIEVEMENT_CATEGORIES = frozenset(get_args(AchievementCategory))


def is_valid_job_category(category: str) -> bool:
    return category in _JOB_CATEGORIES


def is_valid_item_category(category: str) -> bool:
    return category in _ITEM_CATEGORIES


def is_valid_achievement_category(category: str) -> bool:
    return category in _ACHIEVEMENT_CATEGORIES


def _matches(model: type[GameDataModel], data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    try:
        model.model_validate(data)
    except ValidationError:
        return False
    return True


def validate_job(data: Any) -> bool:
    """True if ``data`` is a well-formed job payload."""
    return _matches(Job, data)


def validate_item(data: Any) -> bool:
    return _matches(Item, data)


def validate_achievement(data: Any) -> bool:
    return _matches(Achievement, data)


def validate_quest(data: Any) -> bool:
    return _matches(Quest, data)

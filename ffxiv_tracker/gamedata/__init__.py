from ffxiv_tracker.gamedata.models import (
    Achievement,
    AchievementSearchParams,
    Item,
    ItemSearchParams,
    Job,
    Quest,
    QuestRewards,
    QuestSearchParams,
    validate_achievement,
    validate_item,
    validate_job,
    validate_quest,
)

__all__ = [
    "Achievement",
    "AchievementSearchParams",
    "Item",
    "ItemSearchParams",
    "Job",
    "Quest",
    "QuestRewards",
    "QuestSearchParams",
    "validate_achievement",
    "validate_item",
    "validate_job",
    "validate_quest",
]

from ffxiv_tracker.services.tracker import (
    CharacterProfile,
    TrackerService,
    determine_job_category,
)

__all__ = ["CharacterProfile", "TrackerService", "determine_job_category"]

"""Remote access to published components."""

from cct.fetcher.client import (
    ContentClient,
    Fetched,
    FetchFailed,
    FetchOutcome,
    NotFound,
    parse_json,
)
from cct.fetcher.skills import SkillBundle, download_skill

__all__ = [
    # HTTP client and outcomes
    "ContentClient",
    "Fetched",
    "FetchFailed",
    "FetchOutcome",
    "NotFound",
    "parse_json",
    # Skill directories
    "SkillBundle",
    "download_skill",
]

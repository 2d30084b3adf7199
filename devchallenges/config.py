"""Runtime settings read from environment variables."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Settings shared by the API routes and the scripts."""

    github_token: Optional[str] = None
    repo_owner: str = "yoanbernabeu"
    repo_name: str = "DevChallenges"
    api_url: str = "https://api.github.com"
    cache_ttl_seconds: float = 60.0
    discussions_default_limit: int = 6

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment.

        An unset or empty GITHUB_TOKEN is not an error: features that need
        it report themselves as disabled.
        """
        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or None,
            repo_owner=os.getenv("GITHUB_REPO_OWNER", "yoanbernabeu"),
            repo_name=os.getenv("GITHUB_REPO_NAME", "DevChallenges"),
            api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", "60")),
            discussions_default_limit=int(os.getenv("DISCUSSIONS_DEFAULT_LIMIT", "6")),
        )

    @property
    def full_repo_name(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

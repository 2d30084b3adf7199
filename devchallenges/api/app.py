"""
HTTP API routes for the challenge website.

The GitHub token stays on the server: routes only ever return the reshaped
GitHub data and a short error reason, never the credential.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.responses import JSONResponse

from devchallenges.application.challenge_service import ChallengeService
from devchallenges.config import Settings
from devchallenges.domain.result import SERVER_ERROR, FetchResult, FetchStatus
from devchallenges.infrastructure.cache import TTLCache
from devchallenges.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=60"

router = APIRouter(prefix="/api", tags=["github"])


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache()
def get_service() -> ChallengeService:
    """Process-wide service, built once from the environment."""
    settings = get_settings()
    return ChallengeService(
        GitHubClient(settings),
        TTLCache(ttl_seconds=settings.cache_ttl_seconds),
    )


def _json(payload: Dict[str, Any], status_code: int = 200, cacheable: bool = False) -> JSONResponse:
    headers = {"Cache-Control": CACHE_CONTROL} if cacheable else None
    return JSONResponse(content=payload, status_code=status_code, headers=headers)


def _list_response(name: str, result: FetchResult) -> JSONResponse:
    """Render a list result; list routes never answer with an error status."""
    items = [item.to_dict() for item in result.data]
    if result.ok:
        return _json({name: items}, cacheable=True)
    return _json(
        {name: items, "error": result.error},
        cacheable=result.status is FetchStatus.EMPTY,
    )


def _parse_limit(raw: Optional[str], default: int) -> int:
    """Parse ``limit`` into the page size actually requested from GitHub."""
    try:
        limit = int(raw) if raw is not None else default
    except ValueError:
        logger.warning(f"Ignoring invalid discussions limit {raw!r}")
        limit = default
    if limit <= 0:
        limit = default
    # GitHub pages hold at most MAX_PAGE_SIZE nodes
    return min(limit, GitHubClient.MAX_PAGE_SIZE)


@router.get("/discussion/{discussion_id}")
def get_discussion(discussion_id: str, service: ChallengeService = Depends(get_service)):
    """Get one discussion with up to 20 comments."""
    if not discussion_id.strip():
        return _json({"error": "Discussion ID required"}, status_code=400)

    result = service.get_discussion(discussion_id)
    discussion = result.data.to_dict() if result.data else None

    if result.ok:
        return _json({"discussion": discussion}, cacheable=True)
    if result.status is FetchStatus.FAILED:
        return _json({"discussion": None, "error": SERVER_ERROR}, status_code=500)
    return _json(
        {"discussion": None, "error": result.error},
        cacheable=result.status is FetchStatus.EMPTY,
    )


@router.get("/discussions")
def get_discussions(
    limit: Optional[str] = Query(None),
    service: ChallengeService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """Get the most recent discussions of the challenge repository."""
    result = service.get_discussions(_parse_limit(limit, settings.discussions_default_limit))
    return _list_response("discussions", result)


@router.get("/participants")
def get_participants(tag: str = Query(""), service: ChallengeService = Depends(get_service)):
    """Get the participants whose issue mentions the challenge tag."""
    return _list_response("participants", service.get_participants(tag))


@router.get("/issues/{issue_number}/comments")
def get_issue_comments(issue_number: int, service: ChallengeService = Depends(get_service)):
    """Get the comments on a participant's issue."""
    return _list_response("comments", service.get_issue_comments(issue_number))


def create_app() -> FastAPI:
    app = FastAPI(title="DevChallenges API")
    app.include_router(router)
    return app


app = create_app()

"""
Shared fixtures for the challenge API tests.

GitHub is never contacted: HTTP sessions are mocks returning canned
payloads shaped like GitHub's responses.
"""

from unittest.mock import Mock

import pytest
import requests

from devchallenges.config import Settings
from devchallenges.infrastructure.cache import TTLCache
from devchallenges.infrastructure.github_client import GitHubClient
from devchallenges.application.challenge_service import ChallengeService


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(payload=None, status_code=200, reason="OK"):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.json.return_value = payload
    return response


def make_issue(number, login, title="Submission", body="My entry"):
    return {
        "number": number,
        "title": title,
        "body": body,
        "html_url": f"https://github.com/yoanbernabeu/DevChallenges/issues/{number}",
        "user": {
            "login": login,
            "avatar_url": f"https://avatars.githubusercontent.com/{login}",
        },
    }


def make_discussion_node(index):
    return {
        "id": f"D_kwDO{index}",
        "title": f"Discussion {index}",
        "url": f"https://github.com/yoanbernabeu/DevChallenges/discussions/{index}",
        "createdAt": f"2025-01-0{index}T10:00:00Z",
        "author": {"login": f"user{index}", "avatarUrl": f"https://avatars.example/{index}"},
        "category": {"name": "General", "emoji": ":speech_balloon:"},
        "comments": {"totalCount": index},
        "upvoteCount": index * 2,
    }


DISCUSSION_DETAIL_NODE = {
    "id": "D_kwDOabc123",
    "title": "WEEK-042: ideas thread",
    "url": "https://github.com/yoanbernabeu/DevChallenges/discussions/42",
    "createdAt": "2025-03-10T08:30:00Z",
    "body": "Share your ideas",
    "bodyHTML": "<p>Share your ideas</p>",
    "author": {"login": "yoanbernabeu", "avatarUrl": "https://avatars.example/yoan"},
    "category": {"name": "Ideas", "emoji": ":bulb:"},
    "upvoteCount": 7,
    "comments": {
        "totalCount": 2,
        "nodes": [
            {
                "id": "DC_kwDO1",
                "body": "Nice!",
                "bodyHTML": "<p>Nice!</p>",
                "createdAt": "2025-03-10T09:00:00Z",
                "author": {"login": "alice", "avatarUrl": "https://avatars.example/alice"},
                "upvoteCount": 1,
            },
            {
                "id": "DC_kwDO2",
                "body": "Count me in",
                "bodyHTML": "<p>Count me in</p>",
                "createdAt": "2025-03-10T09:05:00Z",
                "author": None,
                "upvoteCount": 0,
            },
        ],
    },
}


@pytest.fixture
def settings():
    return Settings(github_token="test-token")


@pytest.fixture
def settings_no_token():
    return Settings(github_token=None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(settings, session):
    return GitHubClient(settings, session=session)


@pytest.fixture
def service(client, cache):
    return ChallengeService(client, cache)

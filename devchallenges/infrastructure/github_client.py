"""GitHub REST and GraphQL API client for the challenge repository."""

import logging
from typing import Any, Dict, List, Optional

import requests

from devchallenges.config import Settings

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when GitHub answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"GitHub API error: {status_code} {reason}".strip())
        self.status_code = status_code
        self.reason = reason


class GraphQLError(Exception):
    """Raised when a GraphQL response carries an ``errors`` array."""

    def __init__(self, errors: List[Dict[str, Any]]):
        messages = [err.get("message", "") for err in errors]
        super().__init__(f"GraphQL errors: {messages}")
        self.errors = errors


class MissingTokenError(Exception):
    """Raised when a GraphQL call is attempted without an access token."""


DISCUSSIONS_QUERY = """
query($owner: String!, $name: String!, $limit: Int!) {
    repository(owner: $owner, name: $name) {
        discussions(first: $limit, orderBy: {field: CREATED_AT, direction: DESC}) {
            nodes {
                id
                title
                url
                createdAt
                author {
                    login
                    avatarUrl
                }
                category {
                    name
                    emoji
                }
                comments {
                    totalCount
                }
                upvoteCount
            }
        }
    }
}
"""

DISCUSSION_QUERY = """
query($id: ID!, $commentLimit: Int!) {
    node(id: $id) {
        ... on Discussion {
            id
            title
            url
            createdAt
            body
            bodyHTML
            author {
                login
                avatarUrl
            }
            category {
                name
                emoji
            }
            upvoteCount
            comments(first: $commentLimit) {
                totalCount
                nodes {
                    id
                    body
                    bodyHTML
                    createdAt
                    author {
                        login
                        avatarUrl
                    }
                    upvoteCount
                }
            }
        }
    }
}
"""


def _expect(payload: Any, kind: type, what: str) -> Any:
    """Return ``payload`` if it has the JSON shape GitHub documents for ``what``."""
    if not isinstance(payload, kind):
        raise ValueError(f"Unexpected {what} payload: {type(payload).__name__}")
    return payload


class GitHubClient:
    """Thin client for the endpoints the challenge website needs.

    Every call is a single request: nothing is retried, and failures are
    raised for the caller to turn into a fallback.
    """

    USER_AGENT = "DevChallenges-App"
    TIMEOUT_SECONDS = 30
    DISCUSSION_COMMENT_LIMIT = 20
    # GraphQL connections accept at most 100 nodes per page
    MAX_PAGE_SIZE = 100

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """
        Initialize GitHub client.

        Args:
            settings: Repository coordinates, API URL and optional token.
            session: HTTP session to use. A new one is created if None.
        """
        self.settings = settings
        self.token = settings.github_token
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.USER_AGENT,
        }

        # Add authorization header if token is available
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.settings.api_url}{path}"
        response = self.session.get(
            url, params=params, headers=self.headers, timeout=self.TIMEOUT_SECONDS
        )
        if not response.ok:
            logger.error(f"GitHub API error on {path}: {response.status_code} {response.reason}")
            raise GitHubAPIError(response.status_code, response.reason or "")
        return response.json()

    def _execute_query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            The ``data`` member of the GraphQL response

        Raises:
            MissingTokenError: If no token is configured
            GitHubAPIError: If GitHub answers with a non-2xx status
            GraphQLError: If the response carries GraphQL errors
            ValueError: If the body is not a GraphQL response object
        """
        if not self.token:
            raise MissingTokenError("GitHub GraphQL API requires a token")

        headers = dict(self.headers, **{"Content-Type": "application/json"})
        response = self.session.post(
            f"{self.settings.api_url}/graphql",
            json={"query": query, "variables": variables},
            headers=headers,
            timeout=self.TIMEOUT_SECONDS,
        )

        if not response.ok:
            logger.error(f"GitHub API error: {response.status_code} {response.reason}")
            raise GitHubAPIError(response.status_code, response.reason or "")

        result = _expect(response.json(), dict, "GraphQL response")
        if result.get("errors"):
            logger.error(f"GraphQL errors: {result['errors']}")
            raise GraphQLError(result["errors"])

        return _expect(result.get("data") or {}, dict, "GraphQL data")

    def get_discussions(self, limit: int) -> List[Dict[str, Any]]:
        """
        Fetch the most recent discussions of the repository.

        Args:
            limit: Maximum number of discussions (capped at 100)

        Returns:
            Discussion nodes, newest first
        """
        variables = {
            "owner": self.settings.repo_owner,
            "name": self.settings.repo_name,
            "limit": max(1, min(limit, self.MAX_PAGE_SIZE)),
        }
        data = self._execute_query(DISCUSSIONS_QUERY, variables)

        repository = data.get("repository") or {}
        discussions = repository.get("discussions") or {}
        return discussions.get("nodes") or []

    def get_discussion(self, discussion_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single discussion by node ID with its first comments.

        Returns None when the node does not exist or is not a discussion.
        """
        variables = {"id": discussion_id, "commentLimit": self.DISCUSSION_COMMENT_LIMIT}
        data = self._execute_query(DISCUSSION_QUERY, variables)

        node = data.get("node")
        # The inline fragment yields {} for nodes of another type
        if not node:
            return None
        return node

    def search_issues(self, tag: str) -> List[Dict[str, Any]]:
        """Search the repository's issues mentioning ``tag`` in their text."""
        query = f'repo:{self.settings.full_repo_name} is:issue "{tag}"'
        data = _expect(self._get("/search/issues", params={"q": query}), dict, "issue search")
        return _expect(data.get("items") or [], list, "issue search items")

    def get_issue_comments(self, issue_number: int) -> List[Dict[str, Any]]:
        """Fetch the first page of comments on an issue."""
        path = (
            f"/repos/{self.settings.repo_owner}/{self.settings.repo_name}"
            f"/issues/{issue_number}/comments"
        )
        return _expect(self._get(path), list, "issue comments")

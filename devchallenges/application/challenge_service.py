"""Application service feeding the challenge website from GitHub."""

import logging
from typing import List, Optional

import requests

from devchallenges.domain.discussion import Discussion, DiscussionDetail
from devchallenges.domain.participant import IssueComment, Participant
from devchallenges.domain.result import (
    GITHUB_API_ERROR,
    GRAPHQL_ERROR,
    FetchResult,
)
from devchallenges.infrastructure.cache import TTLCache
from devchallenges.infrastructure.github_client import (
    GitHubAPIError,
    GitHubClient,
    GraphQLError,
)

logger = logging.getLogger(__name__)

# Network failures and response bodies that do not have the expected shape
FETCH_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, AttributeError)


class ChallengeService:
    """Fetches discussions, participants and comments, with soft failure.

    No method raises for GitHub or network problems: each returns a
    FetchResult whose data is an empty fallback when the fetch did not
    succeed. Successful list fetches are cached for the cache's TTL.
    """

    def __init__(self, github_client: GitHubClient, cache: Optional[TTLCache] = None):
        """
        Initialize challenge service.

        Args:
            github_client: GitHub API client
            cache: Cache for list results. A private in-memory cache if None.
        """
        self.github_client = github_client
        self.cache = cache if cache is not None else TTLCache()

    def get_participants(self, tag: str) -> FetchResult[List[Participant]]:
        """Return one participant per repository issue mentioning ``tag``."""
        cache_key = f"participants_{tag}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"[Cache] Using cached participants for {tag}")
            return FetchResult.success([Participant.from_dict(item) for item in cached])

        try:
            issues = self.github_client.search_issues(tag)
            participants = [Participant.from_issue(issue) for issue in issues]
        except GitHubAPIError as e:
            logger.error(f"Failed to fetch participants: {e}")
            return FetchResult.upstream_error([], GITHUB_API_ERROR)
        except FETCH_ERRORS as e:
            logger.exception(f"Error fetching participants: {e}")
            return FetchResult.failed([])

        self.cache.set(cache_key, [participant.to_dict() for participant in participants])
        logger.info(f"[Cache] Stored participants for {tag}")
        return FetchResult.success(participants)

    def get_issue_comments(self, issue_number: int) -> FetchResult[List[IssueComment]]:
        """Return the first page of comments on an issue."""
        cache_key = f"comments_{issue_number}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"[Cache] Using cached comments for issue #{issue_number}")
            return FetchResult.success([IssueComment.from_dict(item) for item in cached])

        try:
            raw_comments = self.github_client.get_issue_comments(issue_number)
            comments = [IssueComment.from_api(comment) for comment in raw_comments]
        except GitHubAPIError as e:
            logger.error(f"Failed to fetch comments: {e}")
            return FetchResult.upstream_error([], GITHUB_API_ERROR)
        except FETCH_ERRORS as e:
            logger.exception(f"Error fetching comments: {e}")
            return FetchResult.failed([])

        self.cache.set(cache_key, [comment.to_dict() for comment in comments])
        logger.info(f"[Cache] Stored comments for issue #{issue_number}")
        return FetchResult.success(comments)

    def get_discussions(self, limit: int) -> FetchResult[List[Discussion]]:
        """Return up to ``limit`` discussions, newest first."""
        cache_key = f"discussions_{limit}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("[Cache] Using cached discussions")
            return FetchResult.success([Discussion.from_node(node) for node in cached])

        if not self.github_client.has_token:
            logger.info("[Discussions] No GitHub token provided, using fallback UI")
            return FetchResult.empty([])

        try:
            nodes = self.github_client.get_discussions(limit)
            discussions = [Discussion.from_node(node) for node in nodes]
        except GitHubAPIError as e:
            logger.warning(f"GraphQL request failed: {e}")
            return FetchResult.upstream_error([], GITHUB_API_ERROR)
        except GraphQLError as e:
            logger.warning(f"{e}")
            return FetchResult.upstream_error([], GRAPHQL_ERROR)
        except FETCH_ERRORS as e:
            logger.exception(f"Error fetching discussions: {e}")
            return FetchResult.failed([])

        self.cache.set(cache_key, [discussion.to_dict() for discussion in discussions])
        logger.info("[Cache] Stored discussions")
        return FetchResult.success(discussions)

    def get_discussion(self, discussion_id: str) -> FetchResult[Optional[DiscussionDetail]]:
        """
        Return a single discussion with up to 20 comments.

        A successful result may carry None when the ID does not resolve to a
        discussion. Not cached.
        """
        if not self.github_client.has_token:
            return FetchResult.empty(None)

        try:
            node = self.github_client.get_discussion(discussion_id)
            discussion = DiscussionDetail.from_node(node) if node else None
        except GitHubAPIError:
            return FetchResult.upstream_error(None, GITHUB_API_ERROR)
        except GraphQLError:
            return FetchResult.upstream_error(None, GRAPHQL_ERROR)
        except FETCH_ERRORS as e:
            logger.exception(f"Error fetching discussion {discussion_id}: {e}")
            return FetchResult.failed(None)

        return FetchResult.success(discussion)

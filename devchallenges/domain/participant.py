"""Domain entities for challenge participants and their issue comments."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Matches "Stack: React", "**Stack**: Go + HTMX", "### Stack : Rust"
STACK_PATTERN = re.compile(
    r"^[ \t#>*_-]*stack[ \t*_]*:[ \t*_]*(?P<stack>.+?)[ \t*_]*$",
    re.IGNORECASE | re.MULTILINE,
)


def extract_stack(body: str) -> Optional[str]:
    """Return the value of the first ``Stack:`` line of an issue body, if any."""
    if not body:
        return None
    match = STACK_PATTERN.search(body)
    if not match:
        return None
    stack = match.group("stack").strip()
    return stack or None


@dataclass(frozen=True)
class Participant:
    """One challenge submission, backed by a GitHub issue."""

    username: str
    avatar_url: str
    url: str
    body: str
    issue_number: int
    title: str
    stack: Optional[str] = None

    @classmethod
    def from_issue(cls, issue: Dict[str, Any]) -> "Participant":
        """Build a participant from an item of the issue search response."""
        body = issue.get("body") or ""
        return cls(
            username=issue["user"]["login"],
            avatar_url=issue["user"]["avatar_url"],
            url=issue["html_url"],
            body=body,
            issue_number=issue["number"],
            title=issue["title"],
            stack=extract_stack(body),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        return cls(
            username=data["username"],
            avatar_url=data["avatarUrl"],
            url=data["url"],
            body=data["body"],
            issue_number=data["issueNumber"],
            title=data["title"],
            stack=data.get("stack"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "username": self.username,
            "avatarUrl": self.avatar_url,
            "url": self.url,
            "body": self.body,
            "issueNumber": self.issue_number,
            "title": self.title,
        }
        if self.stack is not None:
            data["stack"] = self.stack
        return data


@dataclass(frozen=True)
class IssueComment:
    """Comment left on a participant's issue."""

    id: int
    username: str
    avatar_url: str
    body: str
    created_at: str

    @classmethod
    def from_api(cls, comment: Dict[str, Any]) -> "IssueComment":
        return cls(
            id=comment["id"],
            username=comment["user"]["login"],
            avatar_url=comment["user"]["avatar_url"],
            body=comment.get("body") or "",
            created_at=comment["created_at"],
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueComment":
        return cls(
            id=data["id"],
            username=data["username"],
            avatar_url=data["avatarUrl"],
            body=data["body"],
            created_at=data["createdAt"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "avatarUrl": self.avatar_url,
            "body": self.body,
            "createdAt": self.created_at,
        }

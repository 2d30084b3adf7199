"""Domain entities for GitHub Discussions threads."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Author:
    login: str
    avatar_url: str

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["Author"]:
        # GraphQL returns a null author for deleted accounts
        if not node:
            return None
        return cls(login=node["login"], avatar_url=node["avatarUrl"])

    def to_dict(self) -> Dict[str, Any]:
        return {"login": self.login, "avatarUrl": self.avatar_url}


def _author_dict(author: Optional[Author]) -> Optional[Dict[str, Any]]:
    return author.to_dict() if author else None


@dataclass(frozen=True)
class Category:
    name: str
    emoji: str

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["Category"]:
        if not node:
            return None
        return cls(name=node["name"], emoji=node["emoji"])

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "emoji": self.emoji}


@dataclass(frozen=True)
class Discussion:
    """Summary of a discussion as shown in the recent discussions list."""

    id: str
    title: str
    url: str
    created_at: str
    author: Optional[Author]
    category: Optional[Category]
    comment_count: int
    upvote_count: int

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "Discussion":
        return cls(
            id=node["id"],
            title=node["title"],
            url=node["url"],
            created_at=node["createdAt"],
            author=Author.from_node(node.get("author")),
            category=Category.from_node(node.get("category")),
            comment_count=(node.get("comments") or {}).get("totalCount", 0),
            upvote_count=node.get("upvoteCount", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "createdAt": self.created_at,
            "author": _author_dict(self.author),
            "category": self.category.to_dict() if self.category else None,
            "comments": {"totalCount": self.comment_count},
            "upvoteCount": self.upvote_count,
        }


@dataclass(frozen=True)
class DiscussionComment:
    id: str
    body: str
    body_html: str
    created_at: str
    author: Optional[Author]
    upvote_count: int

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "DiscussionComment":
        return cls(
            id=node["id"],
            body=node.get("body") or "",
            body_html=node.get("bodyHTML") or "",
            created_at=node["createdAt"],
            author=Author.from_node(node.get("author")),
            upvote_count=node.get("upvoteCount", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "body": self.body,
            "bodyHTML": self.body_html,
            "createdAt": self.created_at,
            "author": _author_dict(self.author),
            "upvoteCount": self.upvote_count,
        }


@dataclass(frozen=True)
class DiscussionDetail:
    """A single discussion with its body and first page of comments."""

    id: str
    title: str
    url: str
    created_at: str
    body: str
    body_html: str
    author: Optional[Author]
    category: Optional[Category]
    upvote_count: int
    comment_count: int
    comments: Tuple[DiscussionComment, ...]

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "DiscussionDetail":
        comments = node.get("comments") or {}
        return cls(
            id=node["id"],
            title=node["title"],
            url=node["url"],
            created_at=node["createdAt"],
            body=node.get("body") or "",
            body_html=node.get("bodyHTML") or "",
            author=Author.from_node(node.get("author")),
            category=Category.from_node(node.get("category")),
            upvote_count=node.get("upvoteCount", 0),
            comment_count=comments.get("totalCount", 0),
            comments=tuple(
                DiscussionComment.from_node(comment)
                for comment in comments.get("nodes") or []
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "createdAt": self.created_at,
            "body": self.body,
            "bodyHTML": self.body_html,
            "author": _author_dict(self.author),
            "category": self.category.to_dict() if self.category else None,
            "upvoteCount": self.upvote_count,
            "comments": {
                "totalCount": self.comment_count,
                "nodes": [comment.to_dict() for comment in self.comments],
            },
        }

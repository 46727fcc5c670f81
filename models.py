"""Shared typed models for the blog sync pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class FrontMatter:
    """Validated metadata block of one post."""

    title: str
    date: str
    excerpt: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    featured: bool = False


@dataclass(frozen=True, slots=True)
class ContentRecord:
    """Normalized post record written to the dataset artifact."""

    id: str
    title: str
    date: str
    excerpt: str
    content: str
    tags: tuple[str, ...]
    reading_time: int
    featured: bool

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the key names the presentation layer expects."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "excerpt": self.excerpt,
            "content": self.content,
            "tags": list(self.tags),
            "readingTime": self.reading_time,
            "featured": self.featured,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentRecord:
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            date=str(data["date"]),
            excerpt=str(data.get("excerpt", "")),
            content=str(data.get("content", "")),
            tags=tuple(str(tag) for tag in data.get("tags") or []),
            reading_time=int(data.get("readingTime", 1)),
            featured=bool(data.get("featured", False)),
        )

"""Dataset builder, artifact I/O and the read-only accessor layer.

The presentation layer calls load_dataset() once at startup and queries the
returned BlogDataset; it never re-parses source posts.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Iterable

from errors import DatasetLoadError, WriteError
from front_matter import parse_post_date
from models import ContentRecord

LOGGER = logging.getLogger(__name__)

ARTIFACT_FILENAME = "blog-data.json"


def sort_by_date(records: Iterable[ContentRecord]) -> list[ContentRecord]:
    """Return a new list ordered newest first.

    The sort is stable: records sharing a date keep their relative order.
    """
    return sorted(records, key=lambda record: parse_post_date(record.date), reverse=True)


@dataclass(frozen=True, slots=True)
class BlogDataset:
    """Immutable, date-ordered collection of posts."""

    posts: tuple[ContentRecord, ...] = ()
    generated_at: str | None = field(default=None, compare=False)

    def __len__(self) -> int:
        return len(self.posts)

    def get_by_id(self, post_id: str) -> ContentRecord | None:
        for post in self.posts:
            if post.id == post_id:
                return post
        return None

    def get_featured(self) -> list[ContentRecord]:
        return [post for post in self.posts if post.featured]

    def get_by_tag(self, tag: str) -> list[ContentRecord]:
        """Posts carrying exactly `tag` (case-sensitive), in dataset order."""
        return [post for post in self.posts if tag in post.tags]

    def get_all_tags(self) -> list[str]:
        """Every tag used by any post, deduplicated and sorted."""
        return sorted({tag for post in self.posts for tag in post.tags})

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "posts": [post.to_dict() for post in self.posts],
        }


def build_dataset(records: Iterable[ContentRecord]) -> BlogDataset:
    """Sort assembled records by date and freeze them into a BlogDataset."""
    ordered = sort_by_date(records)
    _warn_on_duplicate_ids(ordered)
    return BlogDataset(posts=tuple(ordered), generated_at=datetime.now(UTC).isoformat())


def write_dataset(dataset: BlogDataset, path: Path) -> None:
    """Replace the artifact at path with the serialized dataset.

    The payload goes to a temporary file in the same directory that is then
    renamed over the target, so readers never observe a truncated artifact.
    Raises WriteError on any filesystem failure.
    """
    payload = json.dumps(dataset.to_dict(), ensure_ascii=False, indent=2) + "\n"
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(payload)
        # NamedTemporaryFile creates 0600; keep the artifact readable by the web server.
        os.chmod(tmp_name, _artifact_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(f"Cannot write dataset to {path}: {exc}") from exc

    LOGGER.info("Wrote %s posts to %s", len(dataset), path)


def load_dataset(path: Path) -> BlogDataset:
    """Load a previously written artifact.

    Raises DatasetLoadError if the file is unreadable, not JSON, or does not
    hold a list of complete posts.
    """
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise DatasetLoadError(f"Cannot read dataset {path}: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("posts"), list):
        raise DatasetLoadError(f"Unexpected dataset shape in {path}: expected a 'posts' list")

    try:
        posts = tuple(ContentRecord.from_dict(item) for item in data["posts"])
    except (KeyError, TypeError, ValueError) as exc:
        raise DatasetLoadError(f"Invalid post in dataset {path}: {exc!r}") from exc

    return BlogDataset(posts=posts, generated_at=data.get("generatedAt"))


def _artifact_mode(path: Path) -> int:
    # Keep the previous artifact's mode, otherwise honour the umask.
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _warn_on_duplicate_ids(records: list[ContentRecord]) -> None:
    # Colliding slugs are reported but kept; get_by_id returns the newest.
    counts = Counter(record.id for record in records)
    for post_id, count in counts.items():
        if count > 1:
            LOGGER.warning("Post id %r is shared by %s posts", post_id, count)

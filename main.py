"""CLI entrypoint: sync Markdown blog posts into the dataset artifact."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from assembler import parse_post_file
from dataset import ARTIFACT_FILENAME, build_dataset, write_dataset
from errors import DiscoveryError, WriteError
from post_ids import POST_EXTENSION

DEFAULT_POSTS_DIRNAME = "blog-posts"


@dataclass(frozen=True, slots=True)
class SyncSummary:
    """Counts reported at the end of a run."""

    files_found: int
    records: int
    skipped: int
    featured: int
    tags: int


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Sync Markdown blog posts into the site dataset")
    parser.add_argument(
        "--input-dir",
        type=Path,
        default=None,
        help="Directory holding the Markdown posts (default: BLOG_POSTS_DIR or ./blog-posts)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Dataset file to write (default: BLOG_DATA_PATH or ./src/static/{ARTIFACT_FILENAME})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report without writing the dataset",
    )
    return parser.parse_args(argv)


def default_input_dir() -> Path:
    return Path(os.getenv("BLOG_POSTS_DIR", Path.cwd() / DEFAULT_POSTS_DIRNAME))


def default_output_path() -> Path:
    return Path(os.getenv("BLOG_DATA_PATH", Path.cwd() / "src" / "static" / ARTIFACT_FILENAME))


def resolve_log_level(name: str) -> int:
    """Map a level name to its number, falling back to INFO for unknown names."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def discover_post_files(root: Path) -> list[Path]:
    """Return every post file under root, recursively, in path order."""
    if not root.is_dir():
        raise DiscoveryError(f"Posts directory not found or not a directory: {root}")
    try:
        # rglob silently skips unreadable directories, so open the root first.
        with os.scandir(root):
            pass
        return sorted(root.rglob(f"*{POST_EXTENSION}"))
    except OSError as exc:
        raise DiscoveryError(f"Cannot list posts directory {root}: {exc}") from exc


def run(input_dir: Path, output_path: Path, dry_run: bool = False) -> SyncSummary:
    """Run one full sync: discover, parse, sort and write the dataset.

    Per-file problems only skip that file. Raises DiscoveryError or
    WriteError for failures that make the whole run meaningless.
    """
    logging.info("Syncing blog posts from %s", input_dir)
    files = discover_post_files(input_dir)
    if not files:
        logging.info("No Markdown files found, writing an empty dataset")
    else:
        logging.info("Found %s Markdown files", len(files))

    records = []
    for path in files:
        logging.info("Processing %s", path.relative_to(input_dir))
        record = parse_post_file(path)
        if record is None:
            continue
        records.append(record)
        logging.info("Parsed post id=%s title=%s", record.id, record.title)

    dataset = build_dataset(records)
    summary = SyncSummary(
        files_found=len(files),
        records=len(dataset),
        skipped=len(files) - len(dataset),
        featured=len(dataset.get_featured()),
        tags=len(dataset.get_all_tags()),
    )

    if dry_run:
        logging.info("[dry-run] Would write %s posts to %s", summary.records, output_path)
    else:
        write_dataset(dataset, output_path)

    logging.info(
        "Sync complete. files_found=%s posts=%s skipped=%s featured=%s tags=%s",
        summary.files_found,
        summary.records,
        summary.skipped,
        summary.featured,
        summary.tags,
    )
    if summary.records and not dry_run:
        logging.info('Commit the update with: git add . && git commit -m "Update blog posts"')
    return summary


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute the sync; returns the process exit code."""
    load_dotenv()
    logging.basicConfig(
        level=resolve_log_level(os.getenv("LOG_LEVEL", "INFO")),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)

    input_dir = args.input_dir or default_input_dir()
    output_path = args.output or default_output_path()

    try:
        run(input_dir=input_dir, output_path=output_path, dry_run=args.dry_run)
    except (DiscoveryError, WriteError) as exc:
        logging.error("Blog sync failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Print aggregate statistics for the blogs stored in the database.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bloglist.db import SqlDbClient
from bloglist.dependencies import get_db_client
from bloglist.stats import collect_stats


def format_stats(stats: dict) -> str:
    lines = [f"Total likes: {stats['total_likes']}"]
    favorite = stats["favorite_blog"]
    if favorite:
        lines.append(
            f"Favorite blog: {favorite['title']} by {favorite['author']}"
            f" ({favorite['likes']} likes)"
        )
    else:
        lines.append("Favorite blog: -")
    top_writer = stats["most_blogs"]
    lines.append(
        f"Most blogs: {top_writer['author']} ({top_writer['blogs']} blogs)"
        if top_writer
        else "Most blogs: -"
    )
    top_liked = stats["most_likes"]
    lines.append(
        f"Most likes: {top_liked['author']} ({top_liked['likes']} likes)"
        if top_liked
        else "Most likes: -"
    )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Bloglist statistics")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL to read from (defaults to the configured database)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the statistics as JSON",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    db = SqlDbClient(args.database_url) if args.database_url else get_db_client()
    stats = collect_stats(db)
    if args.json:
        print(json.dumps(stats, indent=2))
    else:
        print(format_stats(stats))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

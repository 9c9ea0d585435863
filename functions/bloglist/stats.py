"""
Blog statistics computed from whatever the database currently holds.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from bloglist.db import DbClient
from shared import list_helper
from shared.types import BlogPost

logger = logging.getLogger(__name__)


def collect_stats(db: DbClient) -> dict:
    """
    Run every list helper over the stored blogs.

    Helpers with no answer for an empty blog list yield None.
    """
    posts = [
        BlogPost(title=blog.title, author=blog.author, likes=blog.likes)
        for blog in db.list_blogs()
    ]
    logger.debug("Computing stats over %d blogs", len(posts))
    favorite = list_helper.favorite_blog(posts)
    top_writer = list_helper.most_blogs(posts)
    top_liked = list_helper.most_likes(posts)
    return {
        "total_likes": list_helper.total_likes(posts),
        "favorite_blog": asdict(favorite) if favorite else None,
        "most_blogs": asdict(top_writer) if top_writer else None,
        "most_likes": asdict(top_liked) if top_liked else None,
    }

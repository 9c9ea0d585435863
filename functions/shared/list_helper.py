# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

"""Aggregate statistics over a list of blog posts.

Every helper is a pure function over a caller-owned sequence. Helpers that
pick a winner return None for an empty sequence. Among equal maxima the
candidate seen first in input order wins.
"""

from typing import Callable, Dict, Optional, Sequence, Tuple

from shared.types import AuthorBlogs, AuthorLikes, BlogPost, FavoriteBlog


def total_likes(posts: Sequence[BlogPost]) -> int:
    return sum(post.likes for post in posts)


def favorite_blog(posts: Sequence[BlogPost]) -> Optional[FavoriteBlog]:
    favorite: Optional[BlogPost] = None
    for post in posts:
        if favorite is None or post.likes > favorite.likes:
            favorite = post
    if favorite is None:
        return None
    return FavoriteBlog(
        title=favorite.title, author=favorite.author, likes=favorite.likes
    )


def _group_by_author(
    posts: Sequence[BlogPost], value: Callable[[BlogPost], int]
) -> Dict[Optional[str], int]:
    # dicts keep insertion order, so authors stay in first-seen order.
    totals: Dict[Optional[str], int] = {}
    for post in posts:
        totals[post.author] = totals.get(post.author, 0) + value(post)
    return totals


def _first_max(totals: Dict[Optional[str], int]) -> Optional[Tuple[Optional[str], int]]:
    best: Optional[Tuple[Optional[str], int]] = None
    for author, total in totals.items():
        if best is None or total > best[1]:
            best = (author, total)
    return best


def most_blogs(posts: Sequence[BlogPost]) -> Optional[AuthorBlogs]:
    """Return the author with the most posts."""
    best = _first_max(_group_by_author(posts, lambda post: 1))
    if best is None:
        return None
    author, count = best
    return AuthorBlogs(author=author, blogs=count)


def most_likes(posts: Sequence[BlogPost]) -> Optional[AuthorLikes]:
    """Return the author whose posts have the highest combined likes."""
    best = _first_max(_group_by_author(posts, lambda post: post.likes))
    if best is None:
        return None
    author, likes = best
    return AuthorLikes(author=author, likes=likes)

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


from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BlogPost:
    """A single blog entry as seen by the statistics helpers."""

    title: str
    author: Optional[str]
    likes: int


@dataclass(frozen=True)
class FavoriteBlog:
    """The most liked post."""

    title: str
    author: Optional[str]
    likes: int


@dataclass(frozen=True)
class AuthorBlogs:
    author: Optional[str]
    blogs: int


@dataclass(frozen=True)
class AuthorLikes:
    author: Optional[str]
    likes: int

"""Feed ranking over a club's posts.

Everything in this module is pure: given the same posts, mode, query and
``now`` the output is identical, and equal sort keys keep their input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol, TypeVar

from tunein_stage.db.time import as_utc, utcnow


class RankablePost(Protocol):
    """Attributes the ranker reads from a post."""

    title: str
    content: str | None
    score: int
    created_at: datetime


P = TypeVar("P", bound=RankablePost)


class TopWindow(Enum):
    """Look-back windows for the Top ranking."""

    THREE_MONTHS = timedelta(days=90)
    SIX_MONTHS = timedelta(days=180)
    ONE_YEAR = timedelta(days=365)
    ALL_TIME = None


@dataclass(frozen=True)
class RankMode:
    """Newest first when ``top`` is False, otherwise Top by score over ``window``."""

    top: bool
    window: TopWindow = TopWindow.ALL_TIME

    @classmethod
    def new(cls) -> RankMode:
        return cls(top=False)

    @classmethod
    def top_of(cls, window: TopWindow = TopWindow.ALL_TIME) -> RankMode:
        return cls(top=True, window=window)

    @classmethod
    def parse(cls, key: str | None) -> RankMode:
        """Build a mode from a client sort key.

        ``new`` ranks newest first; ``top-3m``, ``top-6m``, ``top-1y`` and
        ``top-all`` rank by score. Anything else is Top over all time.
        """
        if key == "new":
            return cls.new()
        return cls.top_of(_SORT_KEY_WINDOWS.get(key or "", TopWindow.ALL_TIME))

    @property
    def key(self) -> str:
        """Return the client sort key for this mode."""
        if not self.top:
            return "new"
        for key, window in _SORT_KEY_WINDOWS.items():
            if window is self.window:
                return key
        return "top-all"


_SORT_KEY_WINDOWS: dict[str, TopWindow] = {
    "top-3m": TopWindow.THREE_MONTHS,
    "top-6m": TopWindow.SIX_MONTHS,
    "top-1y": TopWindow.ONE_YEAR,
    "top-all": TopWindow.ALL_TIME,
}


def matches_query(post: RankablePost, query: str) -> bool:
    """Return True if ``query`` occurs in the title or content, ignoring case."""
    needle = query.lower()
    if needle in post.title.lower():
        return True
    return post.content is not None and needle in post.content.lower()


def filter_by_query(posts: Iterable[P], query: str | None) -> list[P]:
    """Keep posts matching ``query``; an empty query keeps everything."""
    if not query:
        return list(posts)
    return [post for post in posts if matches_query(post, query)]


def within_window(post: RankablePost, window: TopWindow, now: datetime) -> bool:
    """Return True if ``post`` was created less than ``window`` before ``now``."""
    if window.value is None:
        return True
    return as_utc(now) - as_utc(post.created_at) < window.value


def rank(
    posts: Sequence[P],
    mode: RankMode,
    query: str | None = None,
    now: datetime | None = None,
) -> list[P]:
    """Return ``posts`` filtered by ``query`` and ordered by ``mode``.

    Args:
        posts: Candidate posts, usually every post of one club.
        mode: Newest first, or Top by score within a window.
        query: Case-insensitive substring searched in title and content.
        now: Reference instant for the Top window; defaults to the current time.
    """
    candidates = filter_by_query(posts, query)

    if not mode.top:
        return sorted(candidates, key=lambda post: as_utc(post.created_at), reverse=True)

    reference = now if now is not None else utcnow()
    windowed = [post for post in candidates if within_window(post, mode.window, reference)]
    return sorted(windowed, key=lambda post: post.score, reverse=True)

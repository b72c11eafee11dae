# src/tunein_stage/services/__init__.py
"""Business logic services for the TUNE-IN application."""

from .avatar_store import LocalAvatarStore, get_avatar_store
from .feed_ranker import RankMode, TopWindow, rank
from .score_aggregator import ScoreAggregator
from .vote_ledger import VoteLedger

__all__ = [
    "LocalAvatarStore",
    "get_avatar_store",
    "RankMode",
    "TopWindow",
    "rank",
    "ScoreAggregator",
    "VoteLedger",
]

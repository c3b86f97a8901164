"""Request statistics: bounded recency lists, frequency tables and their HTTP surface."""

from placeholder.stats.pipeline import StatsPipeline
from placeholder.stats.routes import router
from placeholder.stats.store import StatsStore

__all__ = ["StatsPipeline", "StatsStore", "router"]

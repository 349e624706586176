"""
Queue Manager
In-memory per-guild request queues
"""

from typing import Dict, List

from utils.logger import LoggerMixin

MAX_RECENT_QUERIES = 50


class QueueManager(LoggerMixin):
    """Tracks queued requests and recent queries for each guild."""

    def __init__(self):
        super().__init__("QueueManager")
        self.queues: Dict[int, List[str]] = {}
        self.recent_queries: Dict[int, List[str]] = {}

    def add(self, guild_id: int, query: str) -> int:
        """
        Queue a request.

        Returns:
            Position of the request in the queue (1-based)
        """
        queue = self.queues.setdefault(guild_id, [])
        queue.append(query)

        recent = self.recent_queries.setdefault(guild_id, [])
        if query in recent:
            recent.remove(query)
        recent.insert(0, query)
        del recent[MAX_RECENT_QUERIES:]

        self.debug(f"Queued {query!r} in guild {guild_id} at #{len(queue)}")
        return len(queue)

    def get(self, guild_id: int) -> List[str]:
        return list(self.queues.get(guild_id, []))

    def clear(self, guild_id: int) -> int:
        """Empty a guild's queue. Returns how many entries were removed."""
        removed = len(self.queues.pop(guild_id, []))
        if removed:
            self.info(f"Cleared {removed} queued requests in guild {guild_id}")
        return removed

    def suggest(self, guild_id: int, partial: str, limit: int = 25) -> List[str]:
        """Recent queries containing the partial text, most recent first."""
        needle = partial.lower()
        return [q for q in self.recent_queries.get(guild_id, []) if needle in q.lower()][:limit]

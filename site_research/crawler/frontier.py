# site_research/crawler/frontier.py
"""
Crawl frontier: FIFO of :class:`FrontierItem` guarded by a visited set,
with stable priority reordering.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, Optional, Sequence, Set

from site_research.crawler.models import FrontierItem


class Frontier:
    """Queue of not-yet-processed ``(url, depth)`` pairs.

    ``visited`` holds every URL that was ever enqueued, so it grows
    monotonically and a URL is handed out by :meth:`dequeue` at most once.
    """

    def __init__(self, priority_patterns: Sequence[str] = ()) -> None:
        self.priority_patterns: tuple[str, ...] = tuple(priority_patterns)
        self.visited: Set[str] = set()
        self._queue: Deque[FrontierItem] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[FrontierItem]:
        return iter(tuple(self._queue))

    def __contains__(self, url: object) -> bool:
        return url in self.visited

    def enqueue(self, item: FrontierItem) -> bool:
        """Queue *item*; no-op (returns False) if its URL was already seen."""
        if item.url in self.visited:
            return False
        self.visited.add(item.url)
        self._queue.append(item)
        return True

    def extend(self, urls: Iterable[str], depth: int) -> int:
        """Enqueue every URL at *depth*; returns how many were new."""
        return sum(self.enqueue(FrontierItem(url, depth)) for url in urls)

    def dequeue(self) -> Optional[FrontierItem]:
        return self._queue.popleft() if self._queue else None

    def is_priority(self, url: str) -> bool:
        return any(pattern in url for pattern in self.priority_patterns)

    def reprioritize(self) -> None:
        """Move priority URLs ahead of the rest; order within each group is kept."""
        # sorted() is stable, False sorts before True
        self._queue = deque(sorted(self._queue, key=lambda item: not self.is_priority(item.url)))


__all__ = ["Frontier"]

"""Ready-made contributors for the fields the Document ships with.

Game objects can use these directly or as a template for their own.
"""
from __future__ import annotations

import logging
from typing import Tuple

from .contributor import BaseContributor
from .document import DEFAULT_HEALTH, Document

logger = logging.getLogger(__name__)


class CollectibleContributor(BaseContributor):
    """A pickup whose collected flag lives in ``document.collected[key]``."""

    def __init__(self, key: str, collected: bool = False) -> None:
        if not key:
            raise ValueError("Collectible key must be a non-empty string")
        self.key = key
        self.collected = collected

    def collect(self) -> None:
        self.collected = True

    def pull(self, document: Document) -> None:
        if self.key not in document.collected:
            logger.debug("Collectible '%s' missing from document; defaulting to False", self.key)
            document.collected[self.key] = False
        self.collected = document.collected[self.key]

    def push(self, document: Document) -> None:
        document.collected[self.key] = self.collected

    def __repr__(self) -> str:
        return f"CollectibleContributor(key={self.key!r}, collected={self.collected!r})"


class CounterContributor(BaseContributor):
    """A tally (kills, deaths, coins spent) stored in ``document.counters[key]``."""

    def __init__(self, key: str, count: int = 0) -> None:
        if not key:
            raise ValueError("Counter key must be a non-empty string")
        self.key = key
        self.count = count

    def increment(self, amount: int = 1) -> int:
        self.count += amount
        return self.count

    def pull(self, document: Document) -> None:
        self.count = document.counters.setdefault(self.key, 0)

    def push(self, document: Document) -> None:
        document.counters[self.key] = self.count


class PlayerContributor(BaseContributor):
    """Owns the scalar player fields: health, position and play time."""

    def __init__(
        self,
        health: int = DEFAULT_HEALTH,
        position: Tuple[float, float] = (0.0, 0.0),
        play_time_seconds: float = 0.0,
    ) -> None:
        self.health = health
        self.position = position
        self.play_time_seconds = play_time_seconds

    def move_to(self, x: float, y: float) -> None:
        self.position = (x, y)

    def pull(self, document: Document) -> None:
        self.health = document.health
        self.position = document.position
        self.play_time_seconds = document.play_time_seconds

    def push(self, document: Document) -> None:
        document.health = self.health
        document.position = (float(self.position[0]), float(self.position[1]))
        document.play_time_seconds = self.play_time_seconds


__all__ = ["CollectibleContributor", "CounterContributor", "PlayerContributor"]

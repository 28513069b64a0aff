from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from .errors import SaveValidationError

# Increment when making breaking schema changes
SCHEMA_VERSION = 1

DEFAULT_HEALTH = 100


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Document:
    """Full persisted state for one profile.

    Scalar fields are owned by whichever contributor writes them. The keyed
    collections are plain dicts; each contributor reads and writes only its
    own keys.
    """

    health: int = DEFAULT_HEALTH
    position: Tuple[float, float] = (0.0, 0.0)
    play_time_seconds: float = 0.0
    collected: Dict[str, bool] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    def __post_init__(self) -> None:
        if isinstance(self.health, bool) or not isinstance(self.health, int):
            raise SaveValidationError("Document.health must be an integer")
        if len(self.position) != 2:
            raise SaveValidationError("Document.position must be an (x, y) pair")
        self.position = (float(self.position[0]), float(self.position[1]))

    def touch(self) -> None:
        self.updated_at = _now()

    def completion_percentage(self, total: Optional[int] = None) -> float:
        """Percentage of collectibles marked as collected.

        ``total`` defaults to the number of known collectible keys, so
        collectibles that were never seen by a contributor do not count.
        """
        denominator = len(self.collected) if total is None else total
        if denominator <= 0:
            return 0.0
        done = sum(1 for flag in self.collected.values() if flag)
        return done * 100.0 / denominator

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "health": self.health,
            "position": [self.position[0], self.position[1]],
            "play_time_seconds": self.play_time_seconds,
            "collected": dict(self.collected),
            "counters": dict(self.counters),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Document":
        position = data.get("position", [0.0, 0.0])
        return Document(
            health=int(data.get("health", DEFAULT_HEALTH)),
            position=(float(position[0]), float(position[1])),
            play_time_seconds=float(data.get("play_time_seconds", 0.0)),
            collected={str(k): bool(v) for k, v in data.get("collected", {}).items()},
            counters={str(k): int(v) for k, v in data.get("counters", {}).items()},
            schema_version=int(data.get("schema_version", SCHEMA_VERSION)),
            created_at=data.get("created_at") or _now(),
            updated_at=data.get("updated_at") or _now(),
        )

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional, Protocol, runtime_checkable

from .document import Document

logger = logging.getLogger(__name__)


@runtime_checkable
class Contributor(Protocol):
    """Anything that owns a slice of the Document.

    The document reference is only valid for the duration of the call and
    must not be kept.
    """

    def pull(self, document: Document) -> None:
        """Read own keys from ``document``; default-fill and write back any that are missing."""
        ...

    def push(self, document: Document) -> None:
        """Write local state into ``document`` under own keys, creating them if absent."""
        ...


class BaseContributor(ABC):
    """Optional base class for contributors that prefer explicit inheritance."""

    @abstractmethod
    def pull(self, document: Document) -> None:
        raise NotImplementedError

    @abstractmethod
    def push(self, document: Document) -> None:
        raise NotImplementedError


class ContributorRegistry:
    """Ordered, duplicate-free collection of contributors."""

    def __init__(self, contributors: Optional[Iterable[Contributor]] = None) -> None:
        self._items: List[Contributor] = []
        for c in contributors or ():
            self.register(c)

    def register(self, contributor: Contributor) -> bool:
        """Add a contributor. Returns False if it was already registered."""
        if not isinstance(contributor, Contributor):
            raise TypeError(f"{contributor!r} does not implement pull()/push()")
        if any(existing is contributor for existing in self._items):
            logger.debug("Contributor already registered: %r", contributor)
            return False
        self._items.append(contributor)
        return True

    def unregister(self, contributor: Contributor) -> bool:
        for i, existing in enumerate(self._items):
            if existing is contributor:
                del self._items[i]
                return True
        return False

    def __iter__(self) -> Iterator[Contributor]:
        # Snapshot so a contributor may (un)register others mid-cycle
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, contributor: object) -> bool:
        return any(existing is contributor for existing in self._items)


__all__ = ["Contributor", "BaseContributor", "ContributorRegistry"]

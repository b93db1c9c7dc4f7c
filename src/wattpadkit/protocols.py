"""Protocol interfaces for swappable components.

The Fetcher and WattpadClient reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Other cache backends to be swapped in without changing fetch code
"""

from __future__ import annotations

from typing import Protocol


class CacheProtocol(Protocol):
    """Interface for the raw response cache."""

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> bool: ...

    def remove(self, key: str) -> bool: ...

    def clear(self) -> None: ...

"""Port for catalog metadata lookups."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kisskh.domain.entities.kisskh import TitleRecord


@runtime_checkable
class MetadataClientPort(Protocol):
    """Async interface resolving an IMDb ID to its canonical title."""

    async def get_title(self, imdb_id: str) -> TitleRecord | None:
        """Return the title record, or None when no catalog knows the ID."""
        ...

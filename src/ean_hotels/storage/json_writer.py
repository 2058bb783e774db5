"""Write search results to disk as JSON documents."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional


class JsonStore:
    """Saves hotel exports under ``root``, one document per search."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        hotels: Iterable[dict[str, object]],
        *,
        filename: str,
        subdir: Optional[str] = None,
        search: Optional[Mapping[str, Any]] = None,
    ) -> Path:
        """Write ``hotels`` with a count and, when given, the search that produced them.

        ``search`` is stored as-is under ``"search"``; pass the query parameters
        or request URL with credentials already removed.
        """
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        items = list(hotels)
        document: dict[str, Any] = {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "count": len(items),
            "search": dict(search) if search is not None else None,
            "hotels": items,
        }
        path.write_text(json.dumps(document, indent=2, default=str))
        return path

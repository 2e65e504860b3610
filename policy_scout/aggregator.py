# File: policy_scout/aggregator.py
"""policy_scout.aggregator: outcome of one site analysis."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

__all__ = (
    "PolicyReport",
    "SOURCE_CACHED",
    "SOURCE_NEW",
    "SOURCE_NOT_FOUND",
    "SOURCE_EMPTY",
    "SOURCE_ERROR",
)

SOURCE_CACHED = "cached"
SOURCE_NEW = "new"
# no policy URL could be located for the site
SOURCE_NOT_FOUND = "not_found"
# a policy URL was located but yielded no extractable text
SOURCE_EMPTY = "empty"
SOURCE_ERROR = "error"


@dataclass(slots=True)
class PolicyReport:
    """Результат анализа одного сайта."""

    site_url: str
    source: str
    policy_url: Optional[str] = None
    summary: Optional[str] = None
    text_length: int = 0
    pages_visited: int = 0
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.source in (SOURCE_CACHED, SOURCE_NEW)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)

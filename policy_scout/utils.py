# File: policy_scout/utils.py
"""policy_scout.utils: URL validation, site lists and text clean-up."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Collection, List, Sequence, Union

from policy_scout.logger import logger

__all__: Sequence[str] = (
    "validate_site_url",
    "read_site_list",
    "clean_text",
    "remove_duplicates",
)

_WHITESPACE_RE = re.compile(r"\s+")


def validate_site_url(url: str) -> str:
    """Return the stripped URL; raise ValueError unless it starts with ``http``."""
    candidate = (url or "").strip()
    if not candidate.startswith("http"):
        raise ValueError(f"Please provide a valid URL (e.g., https://example.com), got {url!r}")
    return candidate


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def read_site_list(path: Union[str, Path]) -> List[str]:
    """Читает список сайтов: непустые строки, строки с ``#`` в начале пропускаются."""
    p = Path(path)
    if not p.exists():
        logger.error("Site list not found: %s", p)
        raise FileNotFoundError(f"Site list file not found: {p}")
    sites = []
    for line in p.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            sites.append(line)
    logger.debug("Loaded %d sites from %s", len(sites), p)
    return remove_duplicates(sites)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique

# File: policy_scout/storage.py
"""policy_scout.storage: cache of assembled policy texts, keyed by site hostname."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union

from policy_scout.crawler.relevance import hostname_of
from policy_scout.errors import ParseError
from policy_scout.logger import get_logger

__all__ = ("cache_key", "PolicyStore", "FilePolicyStore", "GENERIC_KEY")

logger = get_logger("storage")

KEY_PREFIX = "privacy_policy_"
KEY_SUFFIX = ".txt"
GENERIC_KEY = f"{KEY_PREFIX}generic{KEY_SUFFIX}"


def cache_key(site_url: str) -> str:
    """
    ``privacy_policy_<host with dots as underscores>.txt``.

    Read and write paths must both go through this function, otherwise
    lookups silently miss.
    """
    try:
        host = hostname_of(site_url)
    except ParseError:
        return GENERIC_KEY
    return f"{KEY_PREFIX}{host.replace('.', '_')}{KEY_SUFFIX}"


class PolicyStore(Protocol):
    def get_cached(self, key: str) -> Optional[str]: ...

    def put(self, key: str, content: str) -> None: ...


class FilePolicyStore:
    """One UTF-8 text file per key under *cache_dir*."""

    def __init__(self, cache_dir: Union[str, Path]) -> None:
        self.cache_dir = Path(cache_dir).expanduser()

    def _path(self, key: str) -> Path:
        if not key or Path(key).name != key:
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.cache_dir / key

    def get_cached(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read cached policy %s: %s", path, exc)
            return None
        return content or None

    def put(self, key: str, content: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
        logger.info("Saved policy to %s", path)

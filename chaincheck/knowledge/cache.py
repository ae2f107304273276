"""Binary cache for parsed knowledge base tables.

Saves the parsed table to a ``<name>.kb.cache`` file next to its source so
large tables are not re-parsed on every run.

Uses msgspec.msgpack for safe, fast serialization (no pickle).
"""

import os
import logging
from pathlib import Path
from typing import Optional, TYPE_CHECKING

import msgspec

if TYPE_CHECKING:
    from .base import KnowledgeBase

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class CacheData(msgspec.Struct):
    """Full cache structure for msgspec.msgpack serialization."""
    source_mtime: float
    source_size: int
    cache_version: int
    methods: dict[str, dict[str, list[str]]]


def get_cache_path(source_path: Path) -> Path:
    """Return the .kb.cache path for a given table file."""
    return source_path.parent / f"{source_path.name}.kb.cache"


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(CacheData)


def write_cache(source_path: Path, kb: "KnowledgeBase") -> Optional[Path]:
    """Serialize a parsed knowledge base next to its source.

    Args:
        source_path: Path to the source table.
        kb: The parsed KnowledgeBase.

    Returns:
        Path to the cache file, or None if write failed.
    """
    cache_path = get_cache_path(source_path)
    try:
        cache_data = CacheData(
            source_mtime=os.path.getmtime(source_path),
            source_size=os.path.getsize(source_path),
            cache_version=CACHE_VERSION,
            methods=kb.to_dict(),
        )
        encoded = _encoder.encode(cache_data)
        with open(cache_path, "wb") as f:
            f.write(encoded)
        return cache_path
    except (OSError, msgspec.EncodeError) as e:
        logger.debug(f"Failed to write cache: {e}")
        return None


def read_cache(cache_path: Path, source_path: Path) -> Optional[dict[str, dict[str, list[str]]]]:
    """Load a parsed table from cache if valid.

    Args:
        cache_path: Path to the .kb.cache file.
        source_path: Path to the source table.

    Returns:
        The method -> service -> arguments table, or None if the cache is
        stale, missing or corrupt.
    """
    if not cache_path.exists():
        return None

    try:
        with open(cache_path, "rb") as f:
            raw = f.read()
        cache_data = _decoder.decode(raw)
    except (OSError, msgspec.DecodeError, ValueError) as e:
        logger.debug(f"Failed to read cache: {e}")
        return None

    if cache_data.cache_version != CACHE_VERSION:
        logger.debug("Cache version mismatch")
        return None

    # Source must be unchanged
    try:
        current_mtime = os.path.getmtime(source_path)
        current_size = os.path.getsize(source_path)
    except OSError:
        return None

    if (cache_data.source_mtime != current_mtime or
            cache_data.source_size != current_size):
        logger.debug("Source file changed, cache invalidated")
        return None

    return cache_data.methods

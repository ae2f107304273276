"""Knowledge base module for loading required-argument tables."""

from .base import KnowledgeBase
from .loader import (
    load_knowledge_base,
    load_default_knowledge_base,
    parse_records,
    parse_json,
)
from .cache import get_cache_path, read_cache, write_cache

__all__ = [
    "KnowledgeBase",
    "load_knowledge_base",
    "load_default_knowledge_base",
    "parse_records",
    "parse_json",
    "get_cache_path",
    "read_cache",
    "write_cache",
]

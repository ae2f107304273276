"""Loading utilities for knowledge base tables.

Two source formats are understood:

- CSV-like records, one per line: ``service,method,arg1 arg2 ...``
- JSON: ``{"method": {"service": ["arg1", "arg2"]}}``, decoded with msgspec.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional

import msgspec

from ..exceptions import KnowledgeBaseError
from .base import KnowledgeBase
from .cache import get_cache_path, read_cache, write_cache

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "required_props.csv"

RawTable = dict[str, dict[str, list[str]]]

_json_decoder = msgspec.json.Decoder(RawTable)


def parse_records(text: str, source: str = "<string>") -> RawTable:
    """Parse newline-delimited ``service,method,args`` records.

    Repeated (service, method) records extend the same argument list.

    Raises:
        KnowledgeBaseError: If a record does not have exactly three fields
            or names no service or method.
    """
    methods: RawTable = {}
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            continue
        fields = line.split(",")
        if len(fields) != 3:
            raise KnowledgeBaseError(
                f"{source}:{lineno}: expected 3 comma-separated fields "
                f"(service,method,arguments), got {len(fields)}"
            )
        service, method, args = (f.strip() for f in fields)
        if not service or not method:
            raise KnowledgeBaseError(f"{source}:{lineno}: service and method must not be empty")
        required = methods.setdefault(method, {}).setdefault(service, [])
        for arg in args.split():
            if arg not in required:
                required.append(arg)
    return methods


def parse_json(data: bytes, source: str = "<string>") -> RawTable:
    """Decode a JSON table.

    Raises:
        KnowledgeBaseError: If the document is not valid JSON of the expected
            shape, or names an empty method, service or argument, or a method
            with no services.
    """
    try:
        methods = _json_decoder.decode(data)
    except msgspec.DecodeError as e:
        raise KnowledgeBaseError(f"{source}: {e}") from e

    for method, services in methods.items():
        if not method.strip():
            raise KnowledgeBaseError(f"{source}: method names must not be empty")
        if not services:
            raise KnowledgeBaseError(f"{source}: method `{method}` lists no services")
        for service, args in services.items():
            if not service.strip():
                raise KnowledgeBaseError(f"{source}: method `{method}` has an empty service name")
            if any(not arg.strip() for arg in args):
                raise KnowledgeBaseError(
                    f"{source}: method `{method}` (from {service}) has an empty argument name"
                )
    return methods


def _parse_file(path: Path) -> RawTable:
    if path.suffix == ".json":
        with open(path, "rb") as f:
            return parse_json(f.read(), source=str(path))
    with open(path, "r", encoding="utf-8") as f:
        return parse_records(f.read(), source=str(path))


def load_default_knowledge_base() -> KnowledgeBase:
    """Load the table shipped with the package."""
    text = (resources.files("chaincheck") / "data" / DEFAULT_TABLE).read_text(encoding="utf-8")
    return KnowledgeBase(parse_records(text, source=DEFAULT_TABLE), source=DEFAULT_TABLE)


def load_knowledge_base(path: Optional[str | Path] = None, use_cache: bool = True) -> KnowledgeBase:
    """Load a knowledge base from file, or the bundled table when no path is given.

    Args:
        path: Path to a ``.csv`` or ``.json`` table.
        use_cache: Reuse/write a ``.kb.cache`` file next to the source.

    Returns:
        Immutable KnowledgeBase.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        KnowledgeBaseError: If the file is malformed.
    """
    if path is None:
        return load_default_knowledge_base()

    path = Path(path)
    if use_cache:
        cached = read_cache(get_cache_path(path), path)
        if cached is not None:
            logger.debug(f"Loaded knowledge base from cache for {path}")
            return KnowledgeBase(cached, source=str(path))

    methods = _parse_file(path)
    logger.debug(f"Parsed {len(methods)} methods from {path}")
    kb = KnowledgeBase(methods, source=str(path))
    if use_cache:
        write_cache(path, kb)
    return kb

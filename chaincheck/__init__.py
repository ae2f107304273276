"""chaincheck - static checks for required arguments in builder call chains."""

from .knowledge import KnowledgeBase, load_knowledge_base
from .marker import required_props
from .models import MissingArguments, AmbiguousService, CallSite, ClientHint
from .queries import CheckQuery, CheckPathsQuery, LookupQuery
from .config import CheckSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "KnowledgeBase",
    "load_knowledge_base",
    "required_props",
    "MissingArguments",
    "AmbiguousService",
    "CallSite",
    "ClientHint",
    "CheckQuery",
    "CheckPathsQuery",
    "LookupQuery",
    "CheckSettings",
    "load_settings",
]

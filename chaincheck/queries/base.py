"""Base query interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..knowledge import KnowledgeBase

T = TypeVar("T")


class Query(ABC, Generic[T]):
    """Base query interface.

    All queries take a knowledge base and execute against it.
    """

    def __init__(self, kb: KnowledgeBase):
        self.kb = kb

    @abstractmethod
    def execute(self, *args, **params) -> T:
        """Execute the query and return typed result."""
        pass

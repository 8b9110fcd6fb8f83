from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """
    A single operation on the feed store.

    Use cases receive their repositories on construction and raise
    FeedStoreError subclasses for every failure a caller should handle.
    """

    @abstractmethod
    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        ...

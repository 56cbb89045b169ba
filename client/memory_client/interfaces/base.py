"""Abstract host interface for the upload dialog."""

from abc import ABC, abstractmethod
from typing import Any


class DialogHost(ABC):
    """Whatever renders the upload dialog. Subclass for console, web, etc."""

    @abstractmethod
    async def alert(self, message: str) -> None:
        """Show a user-facing message."""

    @abstractmethod
    async def on_success(self, record: dict[str, Any]) -> None:
        """Receive the record of a successfully uploaded memory."""

    @abstractmethod
    async def on_close(self) -> None:
        """Dismiss the dialog."""

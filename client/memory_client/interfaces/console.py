"""Terminal host for the upload dialog."""

import logging
from typing import Any

from memory_client.interfaces.base import DialogHost

logger = logging.getLogger(__name__)


class ConsoleHost(DialogHost):
    """Prints alerts and remembers the last uploaded record."""

    def __init__(self):
        self.last_record: dict[str, Any] | None = None
        self.closed = False

    async def alert(self, message: str) -> None:
        print(message)

    async def on_success(self, record: dict[str, Any]) -> None:
        self.last_record = record
        logger.info("Uploaded memory %r as %s", record["text"], record["media"])

    async def on_close(self) -> None:
        self.closed = True

from abc import ABC, abstractmethod

from mclogs_uploader.clipboard.exceptions import ClipboardError


class BaseClipboard(ABC):
    """Contract for clipboard write primitives."""

    @abstractmethod
    async def write(self, text: str) -> None:
        """Place ``text`` on the system clipboard.

        Raises:
            ClipboardError: if the write fails for any reason.
        """


class NullClipboard(BaseClipboard):
    """Clipboard that is never available."""

    async def write(self, text: str) -> None:
        raise ClipboardError("clipboard disabled")

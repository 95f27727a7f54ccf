import pyperclip

from mclogs_uploader.clipboard.base import BaseClipboard
from mclogs_uploader.clipboard.exceptions import ClipboardError


class PyperclipClipboard(BaseClipboard):
    """Writes to the clipboard through pyperclip."""

    async def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"pyperclip copy failed: {exc}") from exc

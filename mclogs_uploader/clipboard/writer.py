from mclogs_uploader.clipboard.base import BaseClipboard
from mclogs_uploader.logging.logger import Log


class ClipboardWriter:
    """Best-effort copy: primary primitive first, then the fallback.

    Never raises; a failed copy only changes how success is worded.
    """

    def __init__(self, primary: BaseClipboard, fallback: BaseClipboard | None = None) -> None:
        self._primary = primary
        self._fallback = fallback

    async def copy(self, text: str) -> bool:
        try:
            await self._primary.write(text)
            return True
        except Exception as exc:
            Log.warning(f"Clipboard copy failed: {exc}")

        if self._fallback is None:
            return False
        try:
            await self._fallback.write(text)
            return True
        except Exception as exc:
            Log.warning(f"Fallback clipboard failed: {exc}")
        return False

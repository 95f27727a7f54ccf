import asyncio
import shlex
import shutil
from typing import ClassVar

from mclogs_uploader.clipboard.base import BaseClipboard
from mclogs_uploader.clipboard.exceptions import ClipboardError


class CommandClipboard(BaseClipboard):
    """Pipes text into the platform clipboard command.

    Used as the fallback when the primary clipboard primitive fails.
    """

    CANDIDATES: ClassVar[tuple[tuple[str, ...], ...]] = (
        ("pbcopy",),
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
        ("clip",),
    )

    def __init__(self, command: str = "") -> None:
        self._command = tuple(shlex.split(command)) if command else None

    def _resolve_command(self) -> tuple[str, ...]:
        if self._command:
            return self._command
        for candidate in self.CANDIDATES:
            if shutil.which(candidate[0]):
                return candidate
        raise ClipboardError("no clipboard command found on PATH")

    async def write(self, text: str) -> None:
        command = self._resolve_command()
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate(text.encode("utf-8"))
        except OSError as exc:
            raise ClipboardError(f"{command[0]} failed to start: {exc}") from exc
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardError(f"{command[0]} exited with {process.returncode}: {message}")

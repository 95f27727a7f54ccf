from mclogs_uploader.clipboard.base import NullClipboard
from mclogs_uploader.clipboard.command_adapter import CommandClipboard
from mclogs_uploader.clipboard.pyperclip_adapter import PyperclipClipboard
from mclogs_uploader.clipboard.writer import ClipboardWriter
from mclogs_uploader.config.settings import Settings


class ClipboardWriterFactory:
    """Creates the clipboard writer configured in settings."""

    ENGINES: tuple[str, ...] = ("pyperclip", "command", "none")

    @classmethod
    def create(cls, settings: Settings) -> ClipboardWriter:
        match settings.clipboard_engine:
            case "pyperclip":
                return ClipboardWriter(
                    PyperclipClipboard(), CommandClipboard(settings.clipboard_command)
                )
            case "command":
                return ClipboardWriter(CommandClipboard(settings.clipboard_command))
            case "none":
                return ClipboardWriter(NullClipboard())
            case engine:
                raise ValueError(
                    f"Unknown clipboard engine '{engine}'. Choose from: {list(cls.ENGINES)}"
                )

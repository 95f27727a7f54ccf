from dataclasses import dataclass, field
from typing import Literal

ResponseType = Literal["text", "bytes"]


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    response_type: ResponseType = "text"
    headers: dict[str, str] = field(default_factory=dict)
    body: str | bytes | None = None


@dataclass(frozen=True)
class HttpResponse:
    """Response as seen by the pipeline: status, raw bytes, decoded text, headers."""

    status: int
    content: bytes = b""
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

from dataclasses import dataclass
from typing import Literal

SourceKind = Literal["url", "text"]


@dataclass(frozen=True, slots=True)
class UploadSource:
    """What the user picked for upload: a captured link or selected text."""

    kind: SourceKind
    value: str

    @classmethod
    def url(cls, value: str) -> "UploadSource":
        return cls(kind="url", value=value)

    @classmethod
    def text(cls, value: str) -> "UploadSource":
        return cls(kind="text", value=value)

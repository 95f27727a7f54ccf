from dataclasses import dataclass, field
from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure categories an upload run can end with."""

    NETWORK = "network"
    FETCH = "fetch"
    DECOMPRESSION = "decompression"
    MALFORMED_RESPONSE = "malformed_response"
    UPLOAD_REJECTED = "upload_rejected"
    RATE_LIMITED = "rate_limited"
    HTTP = "http"
    UNEXPECTED = "unexpected"


class PipelineState(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"
    UPLOADING = "uploading"
    COPYING = "copying"
    REPORTED = "reported"


@dataclass(frozen=True)
class UploadSuccess:
    """Share link returned by the log API."""

    url: str
    id: str
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class UploadFailure:
    """Terminal failure of one run, with a short human-readable cause."""

    reason: ErrorKind
    detail: str
    success: bool = field(default=False, init=False)


UploadOutcome = UploadSuccess | UploadFailure

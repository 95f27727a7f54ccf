from mclogs_uploader.pipeline.models import ErrorKind


class UploadPipelineError(Exception):
    """Base exception for all failures of an upload run."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class NetworkError(UploadPipelineError):
    """Raised when a request gets no response at all."""

    kind = ErrorKind.NETWORK


class FetchError(UploadPipelineError):
    """Raised when the log source answers with a non-200 status."""

    kind = ErrorKind.FETCH

    def __init__(self, status: int) -> None:
        super().__init__(f"HTTP error fetching log, status: {status}")
        self.status = status


class DecompressionError(UploadPipelineError):
    """Raised when a gzip log payload cannot be decompressed."""

    kind = ErrorKind.DECOMPRESSION


class MalformedResponseError(UploadPipelineError):
    """Raised when the log API answers 200 with a body that is not JSON."""

    kind = ErrorKind.MALFORMED_RESPONSE


class UploadRejectedError(UploadPipelineError):
    """Raised when the log API reports that it did not accept the upload."""

    kind = ErrorKind.UPLOAD_REJECTED


class RateLimitedError(UploadPipelineError):
    """Raised when the log API answers 429."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class HttpError(UploadPipelineError):
    """Raised when the log API answers with any other non-200 status."""

    kind = ErrorKind.HTTP

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status

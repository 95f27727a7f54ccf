import json
from urllib.parse import urlencode

from mclogs_uploader.http.base import BaseHttpTransport
from mclogs_uploader.http.models import HttpRequest, HttpResponse
from mclogs_uploader.logging.logger import Log
from mclogs_uploader.pipeline.exceptions import (
    HttpError,
    MalformedResponseError,
    RateLimitedError,
    UploadRejectedError,
)
from mclogs_uploader.pipeline.models import UploadSuccess

ERROR_BODY_PREVIEW_CHARS = 120


class UploadClient:
    """Submits log text to the mclo.gs API.

    Exactly one request per ``upload`` call. Rate limits and transient
    failures are raised to the caller, never retried here.
    """

    LOG_ENDPOINT = "/1/log"

    def __init__(self, transport: BaseHttpTransport, *, api_base_url: str) -> None:
        self._transport = transport
        self._endpoint = api_base_url.rstrip("/") + self.LOG_ENDPOINT

    async def upload(self, content: str) -> UploadSuccess:
        """POST ``content`` and return the share link.

        Raises:
            NetworkError: if the API did not respond.
            MalformedResponseError: if a 200 body is not valid JSON.
            UploadRejectedError: if the API reports ``success: false``.
            RateLimitedError: on HTTP 429.
            HttpError: on any other non-200 status.
        """
        Log.debug(f"Uploading {len(content)} chars to {self._endpoint}")
        response = await self._transport.request(
            HttpRequest(
                method="POST",
                url=self._endpoint,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                body=urlencode({"content": content}),
            )
        )
        match response.status:
            case 200:
                return self._parse_success(response)
            case 429:
                raise self._rate_limited(response)
            case status:
                raise HttpError(
                    status, f"HTTP {status}: {response.text[:ERROR_BODY_PREVIEW_CHARS]}"
                )

    def _parse_success(self, response: HttpResponse) -> UploadSuccess:
        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError("Malformed JSON from server") from exc

        if isinstance(payload, dict) and payload.get("success"):
            result = UploadSuccess(url=str(payload.get("url", "")), id=str(payload.get("id", "")))
            Log.info(f"Uploaded log {result.id}: {result.url}")
            return result

        error = payload.get("error") if isinstance(payload, dict) else None
        raise UploadRejectedError(error or "Upload failed (unknown cause)")

    @staticmethod
    def _rate_limited(response: HttpResponse) -> RateLimitedError:
        retry_after = (response.header("Retry-After") or "").strip()
        if retry_after.isdigit():
            seconds = int(retry_after)
            return RateLimitedError(
                f"Rate limit exceeded - wait {seconds}s and try again.",
                retry_after=seconds,
            )
        return RateLimitedError("Rate limit exceeded. Try again later.")

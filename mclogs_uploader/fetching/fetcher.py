import gzip
import zlib

from mclogs_uploader.http.base import BaseHttpTransport
from mclogs_uploader.http.models import HttpRequest
from mclogs_uploader.logging.logger import Log
from mclogs_uploader.pipeline.exceptions import DecompressionError, FetchError
from mclogs_uploader.source.classifier import is_gzip_log


class ContentFetcher:
    """Downloads log text for a URL, decompressing ``.log.gz`` payloads.

    A single GET per call; a failed fetch fails the whole upload attempt.
    """

    def __init__(self, transport: BaseHttpTransport) -> None:
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Return the log content behind ``url`` as text.

        Raises:
            NetworkError: if the source did not respond.
            FetchError: on any non-200 status.
            DecompressionError: if a gzip payload is malformed.
        """
        if is_gzip_log(url):
            return await self._fetch_gzip(url)
        return await self._fetch_text(url)

    async def _fetch_text(self, url: str) -> str:
        response = await self._transport.request(HttpRequest(method="GET", url=url))
        if response.status != 200:
            raise FetchError(response.status)
        Log.info(f"Fetched {len(response.text)} chars from {url}")
        return response.text

    async def _fetch_gzip(self, url: str) -> str:
        response = await self._transport.request(
            HttpRequest(method="GET", url=url, response_type="bytes")
        )
        if response.status != 200:
            raise FetchError(response.status)
        text = decompress_gzip_log(response.content)
        Log.info(
            f"Fetched {len(response.content)} gzip bytes from {url}, "
            f"{len(text)} chars after decompression"
        )
        return text


def decompress_gzip_log(payload: bytes) -> str:
    """Decompress a gzip log payload to UTF-8 text, replacing undecodable bytes.

    Raises:
        DecompressionError: if the payload is not valid gzip.
    """
    try:
        raw = gzip.decompress(payload)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressionError(f"Gzip decompression failed: {exc}") from exc
    return raw.decode("utf-8", errors="replace")

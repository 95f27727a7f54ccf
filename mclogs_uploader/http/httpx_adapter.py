import httpx

from mclogs_uploader.http.base import BaseHttpTransport
from mclogs_uploader.http.models import HttpRequest, HttpResponse
from mclogs_uploader.pipeline.exceptions import NetworkError


class HttpxTransport(BaseHttpTransport):
    """HTTP capability built on httpx.AsyncClient."""

    def __init__(
        self,
        *,
        timeout_seconds: float,
        user_agent: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TransportError as exc:
            raise NetworkError(f"Network error requesting {request.url}: {exc}") from exc

        text = response.text if request.response_type == "text" else ""
        return HttpResponse(
            status=response.status_code,
            content=response.content,
            text=text,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

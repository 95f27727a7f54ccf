from abc import ABC, abstractmethod

from mclogs_uploader.http.models import HttpRequest, HttpResponse


class BaseHttpTransport(ABC):
    """Contract for the HTTP capability used by the fetcher and upload client."""

    @abstractmethod
    async def request(self, request: HttpRequest) -> HttpResponse:
        """Send one request and return whatever response arrived.

        Any status code is a response; only the absence of a response is an
        error.

        Raises:
            NetworkError: if no response was received.
        """

import gzip
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from mclogs_uploader.http.base import BaseHttpTransport
from mclogs_uploader.http.models import HttpResponse


@pytest.fixture()
def gzip_hello_bytes() -> bytes:
    """Gzip payload that decompresses to ``hello``."""
    return gzip.compress(b"hello")


@pytest.fixture()
def make_transport() -> Callable[..., MagicMock]:
    """Build a transport mock whose ``request`` returns or raises as given."""

    def _make(
        response: HttpResponse | None = None,
        side_effect: object = None,
    ) -> MagicMock:
        transport = MagicMock(spec=BaseHttpTransport)
        transport.request = AsyncMock(return_value=response, side_effect=side_effect)
        return transport

    return _make

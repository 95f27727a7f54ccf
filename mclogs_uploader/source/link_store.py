from abc import ABC, abstractmethod

from mclogs_uploader.logging.logger import Log
from mclogs_uploader.source.classifier import is_likely_log_url


class BaseLinkStore(ABC):
    """Single slot holding the most recently captured log link."""

    @abstractmethod
    def set(self, url: str) -> None: ...

    @abstractmethod
    def get(self) -> str | None: ...

    @abstractmethod
    def clear(self) -> None: ...


class InMemoryLinkStore(BaseLinkStore):
    def __init__(self, url: str | None = None) -> None:
        self._url = url

    def set(self, url: str) -> None:
        self._url = url

    def get(self) -> str | None:
        return self._url

    def clear(self) -> None:
        self._url = None


def capture_link(store: BaseLinkStore, url: str | None) -> bool:
    """Remember a right-clicked link if it looks like a log.

    Returns:
        True if the slot was updated, False if the link was ignored.
    """
    if not url or not is_likely_log_url(url):
        return False
    store.set(url)
    Log.debug(f"Captured log link {url}")
    return True

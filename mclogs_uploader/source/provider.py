from abc import ABC, abstractmethod
from collections.abc import Callable

from mclogs_uploader.source.link_store import BaseLinkStore
from mclogs_uploader.source.models import UploadSource


class BaseSourceProvider(ABC):
    """Contract for whatever supplies the source at invocation time."""

    @abstractmethod
    def get_source(self) -> UploadSource | None:
        """Return the source to upload, or None when nothing is selected."""


class CaptureSourceProvider(BaseSourceProvider):
    """Picks the captured link first, then the active text selection."""

    def __init__(
        self,
        link_store: BaseLinkStore,
        selection_reader: Callable[[], str | None] | None = None,
    ) -> None:
        self._link_store = link_store
        self._selection_reader = selection_reader

    def get_source(self) -> UploadSource | None:
        link = self._link_store.get()
        if link:
            return UploadSource.url(link)
        if self._selection_reader is None:
            return None
        selection = self._selection_reader()
        if selection and selection.strip():
            return UploadSource.text(selection)
        return None

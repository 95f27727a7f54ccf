from abc import ABC, abstractmethod


class BaseReportSink(ABC):
    """Contract for whatever shows upload results to the user."""

    @abstractmethod
    def report(
        self,
        title: str,
        message: str,
        is_error: bool = False,
        link_url: str | None = None,
    ) -> None:
        """Show the final result of one run. Called exactly once per run."""

    def progress(self, title: str, message: str) -> None:
        """Show a transient in-progress notice. Optional for sinks."""

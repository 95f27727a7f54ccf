import asyncio

from mclogs_uploader.clipboard.factory import ClipboardWriterFactory
from mclogs_uploader.config.settings import Settings
from mclogs_uploader.fetching.fetcher import ContentFetcher
from mclogs_uploader.http.base import BaseHttpTransport
from mclogs_uploader.logging.logger import Log
from mclogs_uploader.pipeline.exceptions import UploadPipelineError
from mclogs_uploader.pipeline.models import (
    ErrorKind,
    PipelineState,
    UploadFailure,
    UploadOutcome,
    UploadSuccess,
)
from mclogs_uploader.pipeline.pipeline import PipelineContext, PipelineStep
from mclogs_uploader.pipeline.steps import CopyLinkStep, ResolveContentStep, UploadStep
from mclogs_uploader.reporting.base import BaseReportSink
from mclogs_uploader.source.link_store import BaseLinkStore
from mclogs_uploader.source.models import UploadSource
from mclogs_uploader.source.provider import BaseSourceProvider
from mclogs_uploader.upload.client import UploadClient


class UploadOrchestrator:
    """Runs one upload: resolve content -> upload -> copy link -> report.

    Pipeline state moves Idle -> Fetching -> Uploading -> Copying -> Reported.
    Every failure is turned into a single failure report; nothing escapes
    ``run``. Concurrent runs are serialized so they cannot race on the
    captured link.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        link_store: BaseLinkStore,
        report_sink: BaseReportSink,
    ) -> None:
        self._steps = steps
        self._link_store = link_store
        self._report_sink = report_sink
        self._lock = asyncio.Lock()

    async def run(self, source: UploadSource) -> UploadOutcome:
        async with self._lock:
            return await self._run(source)

    async def run_from_provider(self, provider: BaseSourceProvider) -> UploadOutcome | None:
        """Upload whatever the provider currently offers, if anything.

        The source is read under the run lock, so a link cleared by an
        earlier run is not uploaded again.
        """
        async with self._lock:
            source = provider.get_source()
            if source is None:
                self._report_sink.report(
                    "No Log Link Found",
                    "Make sure you've right-clicked a log link or selected some text!",
                )
                return None
            return await self._run(source)

    async def _run(self, source: UploadSource) -> UploadOutcome:
        Log.info(f"Starting upload from {source.kind} source")
        context = PipelineContext(source=source)
        self._report_sink.progress(
            "Uploading to mclo.gs",
            "Downloading and uploading log file..."
            if source.kind == "url"
            else "Uploading selected text...",
        )
        try:
            for step in self._steps:
                context = await step.run(context)
        except UploadPipelineError as exc:
            return self._fail(context, exc.kind, str(exc))
        except Exception as exc:
            Log.exception(f"Unexpected error during {context.state} stage")
            return self._fail(context, ErrorKind.UNEXPECTED, str(exc) or type(exc).__name__)

        if context.upload_result is None:
            return self._fail(context, ErrorKind.UNEXPECTED, "Upload failed")
        return self._succeed(context, context.upload_result)

    def _succeed(self, context: PipelineContext, result: UploadSuccess) -> UploadSuccess:
        context.state = PipelineState.REPORTED
        if context.copied:
            message = "Log uploaded to mclo.gs! URL copied to clipboard: "
        else:
            message = "Log uploaded to mclo.gs! Copy the link below: "
        self._report_sink.report("Upload Successful!", message, link_url=result.url)
        if context.source.kind == "url":
            self._link_store.clear()
        Log.info(f"Upload {result.id} reported, copied={context.copied}")
        return result

    def _fail(self, context: PipelineContext, reason: ErrorKind, detail: str) -> UploadFailure:
        Log.error(f"Upload failed during {context.state} stage ({reason}): {detail}")
        context.state = PipelineState.REPORTED
        self._report_sink.report(
            "Upload Failed",
            f"Failed to upload log: {detail}",
            is_error=True,
        )
        return UploadFailure(reason=reason, detail=detail)


def build_orchestrator(
    settings: Settings,
    *,
    transport: BaseHttpTransport,
    link_store: BaseLinkStore,
    report_sink: BaseReportSink,
) -> UploadOrchestrator:
    """Build an UploadOrchestrator with the configured adapters."""
    fetcher = ContentFetcher(transport)
    upload_client = UploadClient(transport, api_base_url=settings.api_base_url)
    clipboard_writer = ClipboardWriterFactory.create(settings)
    steps: list[PipelineStep] = [
        ResolveContentStep(fetcher),
        UploadStep(upload_client),
        CopyLinkStep(clipboard_writer),
    ]
    return UploadOrchestrator(steps=steps, link_store=link_store, report_sink=report_sink)

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from mclogs_uploader.clipboard.base import BaseClipboard
from mclogs_uploader.clipboard.writer import ClipboardWriter
from mclogs_uploader.fetching.fetcher import ContentFetcher
from mclogs_uploader.http.models import HttpResponse
from mclogs_uploader.pipeline.exceptions import (
    FetchError,
    NetworkError,
    RateLimitedError,
)
from mclogs_uploader.pipeline.models import ErrorKind, UploadFailure, UploadSuccess
from mclogs_uploader.pipeline.orchestrator import UploadOrchestrator, build_orchestrator
from mclogs_uploader.pipeline.steps import CopyLinkStep, ResolveContentStep, UploadStep
from mclogs_uploader.reporting.base import BaseReportSink
from mclogs_uploader.source.link_store import BaseLinkStore, InMemoryLinkStore
from mclogs_uploader.source.models import UploadSource
from mclogs_uploader.source.provider import CaptureSourceProvider
from mclogs_uploader.upload.client import UploadClient

LOG_URL = "https://example.com/logs/latest.log"
SHARE = UploadSuccess(url="https://mclo.gs/abc", id="abc")


def _make_orchestrator(
    link_store: BaseLinkStore | None = None,
) -> tuple[UploadOrchestrator, MagicMock, MagicMock, MagicMock, MagicMock]:
    fetcher = MagicMock(spec=ContentFetcher)
    fetcher.fetch = AsyncMock(return_value="[main/INFO] fetched log")
    upload_client = MagicMock(spec=UploadClient)
    upload_client.upload = AsyncMock(return_value=SHARE)
    clipboard_writer = MagicMock(spec=ClipboardWriter)
    clipboard_writer.copy = AsyncMock(return_value=True)
    sink = MagicMock(spec=BaseReportSink)

    orchestrator = UploadOrchestrator(
        steps=[
            ResolveContentStep(fetcher),
            UploadStep(upload_client),
            CopyLinkStep(clipboard_writer),
        ],
        link_store=link_store if link_store is not None else InMemoryLinkStore(),
        report_sink=sink,
    )
    return orchestrator, fetcher, upload_client, clipboard_writer, sink


class TestTextSource:
    @pytest.mark.asyncio
    async def test_uploads_selection_without_fetching(self) -> None:
        link_store = MagicMock(spec=BaseLinkStore)
        orchestrator, fetcher, upload_client, _writer, sink = _make_orchestrator(link_store)

        outcome = await orchestrator.run(UploadSource.text("panic: x"))

        assert outcome == SHARE
        fetcher.fetch.assert_not_awaited()
        upload_client.upload.assert_awaited_once_with("panic: x")
        sink.report.assert_called_once_with(
            "Upload Successful!",
            "Log uploaded to mclo.gs! URL copied to clipboard: ",
            link_url="https://mclo.gs/abc",
        )
        assert link_store.method_calls == []


class TestUrlSource:
    @pytest.mark.asyncio
    async def test_fetches_uploads_copies_and_clears_link(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        orchestrator, fetcher, upload_client, writer, sink = _make_orchestrator(link_store)

        outcome = await orchestrator.run(UploadSource.url(LOG_URL))

        assert outcome == SHARE
        fetcher.fetch.assert_awaited_once_with(LOG_URL)
        upload_client.upload.assert_awaited_once_with("[main/INFO] fetched log")
        writer.copy.assert_awaited_once_with("https://mclo.gs/abc")
        sink.report.assert_called_once()
        assert link_store.get() is None

    @pytest.mark.asyncio
    async def test_non_http_value_is_uploaded_as_text(self) -> None:
        orchestrator, fetcher, upload_client, _writer, _sink = _make_orchestrator()

        await orchestrator.run(UploadSource.url("file:///tmp/latest.log"))

        fetcher.fetch.assert_not_awaited()
        upload_client.upload.assert_awaited_once_with("file:///tmp/latest.log")

    @pytest.mark.asyncio
    async def test_fetch_failure_skips_upload_and_keeps_link(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        orchestrator, fetcher, upload_client, writer, sink = _make_orchestrator(link_store)
        fetcher.fetch.side_effect = FetchError(404)

        outcome = await orchestrator.run(UploadSource.url(LOG_URL))

        assert outcome == UploadFailure(
            reason=ErrorKind.FETCH, detail="HTTP error fetching log, status: 404"
        )
        assert outcome.success is False
        upload_client.upload.assert_not_awaited()
        writer.copy.assert_not_awaited()
        sink.report.assert_called_once_with(
            "Upload Failed",
            "Failed to upload log: HTTP error fetching log, status: 404",
            is_error=True,
        )
        assert link_store.get() == LOG_URL


class TestUploadFailures:
    @pytest.mark.asyncio
    async def test_upload_error_is_forwarded_verbatim(self) -> None:
        orchestrator, _fetcher, upload_client, writer, sink = _make_orchestrator()
        upload_client.upload.side_effect = RateLimitedError(
            "Rate limit exceeded - wait 30s and try again.", retry_after=30
        )

        outcome = await orchestrator.run(UploadSource.text("log"))

        assert outcome == UploadFailure(
            reason=ErrorKind.RATE_LIMITED,
            detail="Rate limit exceeded - wait 30s and try again.",
        )
        writer.copy.assert_not_awaited()
        assert sink.report.call_count == 1

    @pytest.mark.asyncio
    async def test_network_error_is_reported(self) -> None:
        orchestrator, _fetcher, upload_client, _writer, _sink = _make_orchestrator()
        upload_client.upload.side_effect = NetworkError("Network error occurred")

        outcome = await orchestrator.run(UploadSource.text("log"))

        assert isinstance(outcome, UploadFailure)
        assert outcome.reason is ErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_unexpected_exception_does_not_escape(self) -> None:
        orchestrator, _fetcher, upload_client, _writer, sink = _make_orchestrator()
        upload_client.upload.side_effect = RuntimeError("boom")

        outcome = await orchestrator.run(UploadSource.text("log"))

        assert outcome == UploadFailure(reason=ErrorKind.UNEXPECTED, detail="boom")
        sink.report.assert_called_once_with(
            "Upload Failed", "Failed to upload log: boom", is_error=True
        )


class TestClipboardOutcome:
    @pytest.mark.asyncio
    async def test_copy_failure_only_changes_wording(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        orchestrator, _fetcher, _client, writer, sink = _make_orchestrator(link_store)
        writer.copy.return_value = False

        outcome = await orchestrator.run(UploadSource.url(LOG_URL))

        assert outcome == SHARE
        sink.report.assert_called_once_with(
            "Upload Successful!",
            "Log uploaded to mclo.gs! Copy the link below: ",
            link_url="https://mclo.gs/abc",
        )
        assert link_store.get() is None

    @pytest.mark.asyncio
    async def test_clipboard_crash_keeps_upload_successful(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        fetcher = MagicMock(spec=ContentFetcher)
        fetcher.fetch = AsyncMock(return_value="log")
        upload_client = MagicMock(spec=UploadClient)
        upload_client.upload = AsyncMock(return_value=SHARE)
        primary = MagicMock(spec=BaseClipboard)
        primary.write = AsyncMock(side_effect=OSError("pbcopy vanished"))
        fallback = MagicMock(spec=BaseClipboard)
        fallback.write = AsyncMock()
        sink = MagicMock(spec=BaseReportSink)
        orchestrator = UploadOrchestrator(
            steps=[
                ResolveContentStep(fetcher),
                UploadStep(upload_client),
                CopyLinkStep(ClipboardWriter(primary, fallback)),
            ],
            link_store=link_store,
            report_sink=sink,
        )

        outcome = await orchestrator.run(UploadSource.url(LOG_URL))

        assert outcome == SHARE
        fallback.write.assert_awaited_once_with("https://mclo.gs/abc")
        sink.report.assert_called_once_with(
            "Upload Successful!",
            "Log uploaded to mclo.gs! URL copied to clipboard: ",
            link_url="https://mclo.gs/abc",
        )
        assert link_store.get() is None


class TestProgressAndProvider:
    @pytest.mark.asyncio
    async def test_progress_notice_precedes_report(self) -> None:
        orchestrator, _fetcher, _client, _writer, sink = _make_orchestrator()

        await orchestrator.run(UploadSource.url(LOG_URL))

        assert [c[0] for c in sink.method_calls] == ["progress", "report"]
        sink.progress.assert_called_once_with(
            "Uploading to mclo.gs", "Downloading and uploading log file..."
        )

    @pytest.mark.asyncio
    async def test_no_source_reports_hint(self) -> None:
        orchestrator, fetcher, upload_client, _writer, sink = _make_orchestrator()
        provider = CaptureSourceProvider(InMemoryLinkStore(), lambda: None)

        outcome = await orchestrator.run_from_provider(provider)

        assert outcome is None
        fetcher.fetch.assert_not_awaited()
        upload_client.upload.assert_not_awaited()
        assert sink.report.call_args.args[0] == "No Log Link Found"

    @pytest.mark.asyncio
    async def test_provider_prefers_captured_link(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        orchestrator, fetcher, _client, _writer, _sink = _make_orchestrator(link_store)
        provider = CaptureSourceProvider(link_store, lambda: "selected text")

        await orchestrator.run_from_provider(provider)

        fetcher.fetch.assert_awaited_once_with(LOG_URL)
        assert link_store.get() is None


class TestSerialization:
    @pytest.mark.asyncio
    async def test_concurrent_runs_do_not_interleave(self) -> None:
        orchestrator, _fetcher, upload_client, _writer, _sink = _make_orchestrator()
        events: list[str] = []

        async def slow_upload(content: str) -> UploadSuccess:
            events.append(f"start {content}")
            await asyncio.sleep(0)
            events.append(f"end {content}")
            return SHARE

        upload_client.upload.side_effect = slow_upload

        await asyncio.gather(
            orchestrator.run(UploadSource.text("a")),
            orchestrator.run(UploadSource.text("b")),
        )

        assert events == ["start a", "end a", "start b", "end b"]

    @pytest.mark.asyncio
    async def test_overlapping_menu_invocations_upload_captured_link_once(self) -> None:
        link_store = InMemoryLinkStore(LOG_URL)
        orchestrator, fetcher, upload_client, _writer, sink = _make_orchestrator(link_store)
        provider = CaptureSourceProvider(link_store, lambda: None)

        outcomes = await asyncio.gather(
            orchestrator.run_from_provider(provider),
            orchestrator.run_from_provider(provider),
        )

        assert outcomes == [SHARE, None]
        fetcher.fetch.assert_awaited_once_with(LOG_URL)
        assert upload_client.upload.await_count == 1
        assert sink.report.call_args.args[0] == "No Log Link Found"


class TestBuildOrchestrator:
    @pytest.mark.asyncio
    async def test_wires_default_steps(self, make_transport) -> None:
        transport = make_transport(
            HttpResponse(status=200, text='{"success":true,"url":"https://mclo.gs/x","id":"x"}')
        )
        settings = MagicMock(
            api_base_url="https://api.mclo.gs",
            clipboard_engine="none",
            clipboard_command="",
        )
        sink = MagicMock(spec=BaseReportSink)

        orchestrator = build_orchestrator(
            settings,
            transport=transport,
            link_store=InMemoryLinkStore(),
            report_sink=sink,
        )
        outcome = await orchestrator.run(UploadSource.text("hello"))

        assert outcome == UploadSuccess(url="https://mclo.gs/x", id="x")
        request = transport.request.await_args.args[0]
        assert request.url == "https://api.mclo.gs/1/log"
        assert sink.report.call_args.args[1].endswith("Copy the link below: ")

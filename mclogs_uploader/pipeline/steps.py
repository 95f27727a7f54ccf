from mclogs_uploader.clipboard.writer import ClipboardWriter
from mclogs_uploader.fetching.fetcher import ContentFetcher
from mclogs_uploader.logging.logger import Log
from mclogs_uploader.pipeline.models import PipelineState
from mclogs_uploader.pipeline.pipeline import PipelineContext, PipelineStep
from mclogs_uploader.source.classifier import is_http_url
from mclogs_uploader.upload.client import UploadClient


class ResolveContentStep(PipelineStep):
    """Turns the source into log text, fetching it when the source is a link."""

    def __init__(self, fetcher: ContentFetcher) -> None:
        self._fetcher = fetcher

    async def run(self, context: PipelineContext) -> PipelineContext:
        source = context.source
        if source.kind == "text":
            context.content = source.value
            return context

        context.state = PipelineState.FETCHING
        if is_http_url(source.value):
            context.content = await self._fetcher.fetch(source.value)
        else:
            Log.debug("Link source is not an http(s) URL, uploading it as text")
            context.content = source.value
        return context


class UploadStep(PipelineStep):
    def __init__(self, upload_client: UploadClient) -> None:
        self._upload_client = upload_client

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.UPLOADING
        context.upload_result = await self._upload_client.upload(context.content)
        return context


class CopyLinkStep(PipelineStep):
    def __init__(self, clipboard_writer: ClipboardWriter) -> None:
        self._clipboard_writer = clipboard_writer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload_result is None:
            raise ValueError("PipelineContext.upload_result must be set before copying")
        context.state = PipelineState.COPYING
        context.copied = await self._clipboard_writer.copy(context.upload_result.url)
        return context

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer

from mclogs_uploader.config.settings import Settings
from mclogs_uploader.fetching.fetcher import decompress_gzip_log
from mclogs_uploader.http.httpx_adapter import HttpxTransport
from mclogs_uploader.logging.logger import Log
from mclogs_uploader.pipeline.exceptions import DecompressionError
from mclogs_uploader.pipeline.models import UploadOutcome
from mclogs_uploader.pipeline.orchestrator import build_orchestrator
from mclogs_uploader.reporting.console_sink import ConsoleReportSink
from mclogs_uploader.source.classifier import is_gzip_log, is_http_url, is_likely_log_url
from mclogs_uploader.source.link_store import InMemoryLinkStore
from mclogs_uploader.source.provider import CaptureSourceProvider

app = typer.Typer(help="Upload log files and snippets to mclo.gs.")


def _read_stdin() -> str | None:
    if sys.stdin.isatty():
        return None
    return sys.stdin.read()


async def _upload(
    settings: Settings,
    provider: CaptureSourceProvider,
    link_store: InMemoryLinkStore,
) -> UploadOutcome | None:
    transport = HttpxTransport(
        timeout_seconds=settings.http_timeout_seconds,
        user_agent=settings.user_agent,
    )
    try:
        orchestrator = build_orchestrator(
            settings,
            transport=transport,
            link_store=link_store,
            report_sink=ConsoleReportSink(),
        )
        return await orchestrator.run_from_provider(provider)
    finally:
        await transport.aclose()


def _read_local_log(path: Path) -> str:
    if is_gzip_log(path.name):
        try:
            return decompress_gzip_log(path.read_bytes())
        except DecompressionError as exc:
            typer.secho(f"Cannot read {path}: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc
    return path.read_text(encoding="utf-8", errors="replace")


@app.command()
def upload(
    source: Optional[str] = typer.Argument(None, help="Log URL or local file path."),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Upload this text as-is."),
) -> None:
    """Upload a log link, a local file, literal text, or stdin."""
    settings = Settings()
    Log.configure(settings.log_level)

    link_store = InMemoryLinkStore()
    selection: str | None = text
    if source is not None:
        path = Path(source)
        if is_http_url(source):
            link_store.set(source)
        elif path.is_file():
            selection = _read_local_log(path)
        else:
            typer.secho(
                f"{source} is neither an http(s) URL nor an existing file",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
    elif selection is None:
        selection = _read_stdin()

    provider = CaptureSourceProvider(link_store, lambda: selection)
    outcome = asyncio.run(_upload(settings, provider, link_store))
    if outcome is None or not outcome.success:
        raise typer.Exit(code=1)


@app.command()
def check(url: str = typer.Argument(..., help="Link to classify.")) -> None:
    """Show whether a link would be captured and whether it is gzip-compressed."""
    typer.echo(f"likely log: {is_likely_log_url(url)}")
    typer.echo(f"gzip log:   {is_gzip_log(url)}")


def main() -> None:
    """Entry point for the ``mclogs-uploader`` console script."""
    app()


if __name__ == "__main__":
    main()

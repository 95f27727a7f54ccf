import typer

from mclogs_uploader.reporting.base import BaseReportSink


class ConsoleReportSink(BaseReportSink):
    """Prints reports to the terminal; errors go to stderr."""

    def report(
        self,
        title: str,
        message: str,
        is_error: bool = False,
        link_url: str | None = None,
    ) -> None:
        color = typer.colors.RED if is_error else typer.colors.GREEN
        typer.secho(title, fg=color, bold=True, err=is_error)
        typer.echo(f"{message}{link_url or ''}", err=is_error)

    def progress(self, title: str, message: str) -> None:
        typer.secho(f"{title}: {message}", fg=typer.colors.BLUE, err=True)

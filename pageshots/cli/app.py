import asyncio
from pathlib import Path
from typing import Optional

import pydantic
import typer
from rich.markup import escape

from pageshots.cli.common import verbose_callback
from pageshots.config import get_config
from pageshots.console import console, debug_console, err_console
from pageshots.errors import NoUrlsError, PageshotsError
from pageshots.results import report
from pageshots.runner import run
from pageshots.sizes import parse_sizes

config = get_config()

app = typer.Typer(
    name="pageshots",
    help="Take full-page screenshots of multiple URLs",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Callback function to print the version of the pageshots package.

    Args:
        value (bool): Boolean value to determine if the version should be printed.

    Raises:
        typer.Exit: If the value is True, the version will be printed and the program will exit.
    """
    if value:
        from pageshots.__about__ import __version__

        typer.echo(f"{__version__}")
        raise typer.Exit()


def fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=1)


def whole_number(name: str, value: str) -> int:
    try:
        return int(value, 10)
    except ValueError:
        raise fail(f"Invalid value for --{name}: {value!r} is not a whole number")


@app.command()
def capture(
    urls: Optional[list[str]] = typer.Argument(
        None,
        help="URLs to capture, bare hostnames get https://",
        show_default=False,
    ),
    output: Path = typer.Option(
        config.output_dir,
        "-o",
        "--output",
        help="Output directory for screenshots",
    ),
    size: Optional[list[str]] = typer.Option(
        None,
        "-s",
        "--size",
        help="Viewport size in WIDTHxHEIGHT format (e.g., 1000x1000). Can be specified multiple times",
        show_default=", ".join(config.sizes),
    ),
    concurrency: str = typer.Option(
        str(config.concurrency),
        "-c",
        "--concurrency",
        help="Number of parallel screenshots",
    ),
    timeout: str = typer.Option(
        str(config.timeout),
        "-t",
        "--timeout",
        help="Page load timeout in seconds",
    ),
    verbose: bool = typer.Option(
        False,
        callback=verbose_callback,
        help="show the log messages",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Takes full-page screenshots of every URL at every viewport size.
    Screenshots are saved as PNG files in the output directory.
    """
    if not urls:
        raise fail(str(NoUrlsError()))

    try:
        sizes = parse_sizes(size if size else config.sizes)
        run_config = config.run_configuration(
            output=output,
            concurrency=whole_number("concurrency", concurrency),
            timeout=whole_number("timeout", timeout),
        )
    except PageshotsError as e:
        raise fail(str(e))
    except pydantic.ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise fail(f"Invalid options: {messages}")
    debug_console.print(run_config)

    try:
        run_config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise fail(f"Failed to create output directory: {e}")
    console.print(f"Output directory: {escape(str(run_config.output_dir))}")

    try:
        results = asyncio.run(run(urls, sizes, run_config))
        summary = report(results)
    except Exception as e:
        err_console.print(f"[red]Unexpected error:[/red] {escape(repr(e))}")
        raise typer.Exit(code=1)

    raise typer.Exit(code=summary.exit_code)


if __name__ == "__main__":
    app()

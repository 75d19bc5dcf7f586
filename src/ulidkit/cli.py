"""Command-line interface for ulidkit.

Example:
    >>> # From terminal:
    >>> # ulidkit --version
    >>> # ulidkit generate --count 5
    >>> # ulidkit generate --count 100000 --timestamp 1695025680000 --exact
    >>> # ulidkit inspect 01HAKQK7G0PKCTV8M94TEF1FHK --json
"""

import json
from typing import Annotated, Optional

import typer

from ulidkit import __version__
from ulidkit.config import GeneratorConfig
from ulidkit.constants import TIMESTAMP_MAX_VALUE
from ulidkit.errors import DatetimeOutOfRangeError, UlidError
from ulidkit.generators import MonotonicUlidGenerator, SimpleUlidGenerator, UlidGenerator
from ulidkit.observability import configure_logging
from ulidkit.ulid import Ulid

app = typer.Typer(help="ULID generation and inspection.")


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show ulidkit version and exit.",
    callback=_version_callback,
    is_eager=True,
)


@app.callback()
def cli(
    version: bool = VERSION_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log generator events to stderr."),
) -> None:
    """ulidkit CLI entrypoint."""
    if verbose:
        configure_logging(log_level="DEBUG", force=True)


@app.command("generate")
def generate(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=0, help="Number of ULIDs to generate."),
    ] = 1,
    timestamp: Annotated[
        Optional[int],
        typer.Option(
            "--timestamp",
            "-t",
            min=0,
            max=TIMESTAMP_MAX_VALUE,
            help="Starting timestamp in milliseconds since the epoch (default: now).",
        ),
    ] = None,
    exact: Annotated[
        bool,
        typer.Option("--exact", help="Wait for the clock instead of stopping early."),
    ] = False,
    simple: Annotated[
        bool,
        typer.Option("--simple", help="Use independent random draws instead of monotonic ones."),
    ] = False,
) -> None:
    """Print ULIDs, one per line."""
    config = GeneratorConfig.from_env()
    generator: UlidGenerator = (
        SimpleUlidGenerator(config=config) if simple else MonotonicUlidGenerator(config=config)
    )
    try:
        if exact:
            ulids = generator.generate_exact(count, timestamp)
        else:
            ulids = generator.generate(count, timestamp)
    except UlidError as e:
        raise typer.BadParameter(e.message) from e

    for ulid in ulids:
        typer.echo(str(ulid))

    if len(ulids) < count:
        typer.echo(
            f"Warning: generated {len(ulids)} of {count} ULIDs; "
            "use --exact to wait for the next millisecond.",
            err=True,
        )


@app.command("inspect")
def inspect(
    value: Annotated[str, typer.Argument(help="ULID in its 26-character text form.")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print a JSON object instead of text."),
    ] = False,
) -> None:
    """Show the timestamp and randomness inside a ULID."""
    try:
        ulid = Ulid.parse(value)
    except UlidError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1) from e

    try:
        when: Optional[str] = ulid.datetime.isoformat(timespec="milliseconds")
    except DatetimeOutOfRangeError:
        when = None

    fields = {
        "ulid": str(ulid),
        "timestamp": ulid.timestamp,
        "datetime": when,
        "randomness": ulid.randomness_bytes.hex(),
        "bytes": bytes(ulid).hex(),
    }
    if as_json:
        typer.echo(json.dumps(fields, indent=2))
        return

    width = max(len(name) for name in fields)
    for name, field_value in fields.items():
        if field_value is None:
            field_value = "out of range"
        typer.echo(f"{name.ljust(width)}  {field_value}")


def main() -> None:
    """Run the ulidkit CLI."""
    app()


if __name__ == "__main__":
    main()

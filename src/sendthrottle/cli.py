# src/sendthrottle/cli.py
"""sendthrottle Command Line Interface.

Entry point for the sendthrottle CLI tool.
"""

import queue
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from sendthrottle import __version__
from sendthrottle.core.config import SendThrottleSettings, load_settings
from sendthrottle.core.logging import configure_logging
from sendthrottle.core.rate_limit import Throttler
from sendthrottle.demo import (
    CancelOrder,
    Client,
    OrderMessage,
    OrderProcessor,
    PrintingCallback,
)

app = typer.Typer(
    name="sendthrottle",
    help="sendthrottle: sliding-window send throttling with priority draining.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sendthrottle version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """sendthrottle: sliding-window send throttling with priority draining."""
    pass


def _load_or_exit(settings: str) -> SendThrottleSettings:
    try:
        return load_settings(Path(settings))
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        _echo_validation_errors(e)
        raise typer.Exit(1) from None


def _echo_validation_errors(e: ValidationError) -> None:
    typer.echo("Configuration errors:", err=True)
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"])
        typer.echo(f"  - {loc}: {error['msg']}", err=True)


def _apply_overrides(
    config: SendThrottleSettings, throttle: dict[str, Any], demo: dict[str, Any]
) -> SendThrottleSettings:
    """Re-validate settings with command line overrides applied."""
    try:
        return SendThrottleSettings(
            throttle={**config.throttle.model_dump(), **throttle},
            demo={**config.demo.model_dump(), **demo},
        )
    except ValidationError as e:
        _echo_validation_errors(e)
        raise typer.Exit(1) from None


@app.command()
def demo(
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    clients: int | None = typer.Option(
        None,
        "--clients",
        "-c",
        help="Number of producer clients (overrides settings).",
    ),
    capacity: int | None = typer.Option(
        None,
        "--capacity",
        help="Maximum sends per interval (overrides settings).",
    ),
    interval: float | None = typer.Option(
        None,
        "--interval",
        help="Sliding window width in seconds (overrides settings).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show throttling debug logs.",
    ),
) -> None:
    """Run the order demo: clients push orders through a throttled processor."""
    configure_logging("debug" if verbose else "warning")

    config = _load_or_exit(settings) if settings else SendThrottleSettings()
    throttle_overrides = {
        k: v
        for k, v in {"capacity": capacity, "interval_seconds": interval}.items()
        if v is not None
    }
    demo_overrides = {"clients": clients} if clients is not None else {}
    config = _apply_overrides(config, throttle_overrides, demo_overrides)

    callback = PrintingCallback()
    throttler = Throttler.from_settings(config.throttle, callback, CancelOrder)
    inbound: queue.Queue[OrderMessage] = queue.Queue()
    processor = OrderProcessor(
        inbound, throttler, poll_timeout=config.demo.poll_timeout_seconds
    )
    processor.start()

    producers = [
        Client(inbound, client_id) for client_id in range(1, config.demo.clients + 1)
    ]
    for client in producers:
        client.run()
    for client in producers:
        client.join()

    processor.stop()
    processor.join()

    typer.echo(
        f"Sent {callback.total} orders "
        f"(new={callback.sent['new']}, amend={callback.sent['amend']}, "
        f"cancel={callback.sent['cancel']}), dropped {len(processor.dropped)}"
    )


@app.command()
def validate(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate throttle configuration without running."""
    config = _load_or_exit(settings)

    typer.echo(f"Configuration valid: {Path(settings).name}")
    typer.echo(f"  Capacity: {config.throttle.capacity}")
    typer.echo(f"  Interval: {config.throttle.interval_seconds}s")
    max_pending = config.throttle.max_pending
    typer.echo(f"  Max pending: {max_pending if max_pending is not None else 'unbounded'}")
    typer.echo(f"  Clients: {config.demo.clients}")


if __name__ == "__main__":
    app()

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from watchdiff.config import WatchConfig, load_config
from watchdiff.constants import CONFIG_ENV_VAR, EXIT_INTERNAL_ERROR, EXIT_INTERRUPTED, EXIT_SUCCESS
from watchdiff.errors import ConfigError, SourceStartError
from watchdiff.log import configure_logging
from watchdiff.loop import WatchLoop
from watchdiff.snapshot import SnapshotManager
from watchdiff.source import WatchSource, build_watch_command, describe_exit_status
from watchdiff.stream import StreamDecoder
from watchdiff.terminal import supports_color

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        from watchdiff import __version__

        typer.echo(f"watchdiff {__version__}")
        raise typer.Exit()


app = typer.Typer(add_completion=False, help="Watch a Kubernetes resource and print what changed on every update")


def _resolve_config(
    config_path: Path | None,
    *,
    resource_type: str | None,
    resource_name: str | None,
    namespace: str | None,
    context: str | None,
    diff_with_first: bool,
    no_color: bool,
) -> WatchConfig:
    config = load_config(config_path).with_overrides(
        resource_type=resource_type,
        resource_name=resource_name,
        namespace=namespace,
        context=context,
        # Flags can only switch these on; leaving them off keeps the file value.
        diff_with_first=True if diff_with_first else None,
        no_color=True if no_color else None,
    )
    if not config.resource_type or not config.resource_name:
        raise ConfigError("Both RESOURCE_TYPE and RESOURCE_NAME are required")
    return config


def _emit(text: str) -> None:
    typer.echo(text, nl=False)


@app.command()
def watch(
    resource_type: str | None = typer.Argument(None, help="Resource type to watch, e.g. deployment"),
    resource_name: str | None = typer.Argument(None, help="Name of the resource"),
    diff_with_first: bool = typer.Option(
        False,
        "--diff-with-first",
        "-f",
        help="Diff with the first version instead of the previous version.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Namespace of the resource"),
    context: str | None = typer.Option(None, "--context", help="kubeconfig context to use"),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        envvar=CONFIG_ENV_VAR,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="YAML file with default settings",
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit."
    ),
) -> None:
    """Stream `kubectl get -w` output and report the changes between snapshots."""
    configure_logging()
    try:
        config = _resolve_config(
            config_path,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
            context=context,
            diff_with_first=diff_with_first,
            no_color=no_color,
        )
        normalizer = config.build_normalizer()
    except ConfigError as exc:
        logger.error("ERROR: %s", exc)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from exc

    colorize = not config.no_color and supports_color(sys.stdout)
    loop = WatchLoop(
        SnapshotManager(config.baseline_policy),
        emit=_emit,
        normalizer=normalizer,
        colorize=colorize,
    )

    logger.info("Starting watchdiff")
    source = WatchSource(build_watch_command(config))
    try:
        stream = source.start()
    except SourceStartError as exc:
        logger.error("ERROR: %s", exc)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from exc

    try:
        loop.run(StreamDecoder(stream))
        returncode = source.wait()
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping watch command")
        raise typer.Exit(EXIT_INTERRUPTED) from None
    finally:
        source.close()

    if returncode != 0:
        logger.error("Command finished with error: %s", describe_exit_status(returncode))
    raise typer.Exit(EXIT_SUCCESS)

"""The external ``kubectl get --watch`` process that feeds the diff loop."""
from __future__ import annotations

import logging
import subprocess
from types import TracebackType
from typing import IO

from watchdiff.config import WatchConfig
from watchdiff.constants import STOP_GRACE_SECONDS
from watchdiff.errors import SourceStartError

logger = logging.getLogger(__name__)


def build_watch_command(config: WatchConfig) -> list[str]:
    command = [config.kubectl, "get", "-w", config.resource_type, config.resource_name, "-o=json"]
    if config.namespace:
        command.append(f"--namespace={config.namespace}")
    if config.context:
        command.append(f"--context={config.context}")
    return command


class WatchSource:
    def __init__(self, command: list[str]) -> None:
        if not command:
            raise ValueError("Watch command must not be empty")
        self.command = list(command)
        self._process: subprocess.Popen[bytes] | None = None

    @property
    def stdout(self) -> IO[bytes]:
        if self._process is None or self._process.stdout is None:
            raise RuntimeError("Watch source has not been started")
        return self._process.stdout

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> IO[bytes]:
        if self._process is not None:
            raise RuntimeError("Watch source already started")
        try:
            # stderr is inherited so kubectl's own errors reach the operator.
            self._process = subprocess.Popen(self.command, stdout=subprocess.PIPE)
        except OSError as exc:
            raise SourceStartError(
                f"Failed to start {self.command[0]!r}: {exc}",
                details={"command": self.command},
            ) from exc
        return self.stdout

    def wait(self) -> int:
        if self._process is None:
            raise RuntimeError("Watch source has not been started")
        return self._process.wait()

    def stop(self, grace_seconds: float = STOP_GRACE_SECONDS) -> int | None:
        process = self._process
        if process is None:
            return None
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=grace_seconds)
            except subprocess.TimeoutExpired:
                logger.warning("Watch command did not exit after SIGTERM, killing it")
                process.kill()
                process.wait()
        return process.returncode

    def close(self) -> None:
        self.stop()
        if self._process is not None and self._process.stdout is not None:
            self._process.stdout.close()

    def __enter__(self) -> WatchSource:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def describe_exit_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status {returncode}"


__all__ = ["WatchSource", "build_watch_command", "describe_exit_status"]

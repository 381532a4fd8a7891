"""Bounded external process execution."""

from __future__ import annotations

import asyncio
import codecs
import os
import queue
import signal
import subprocess
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import closing
from dataclasses import dataclass
from typing import IO

from loguru import logger

from docxtract.commands import CommandKind, RecognizedCommand
from docxtract.errors import (
    DeadlineNotConfiguredError,
    ExecutableError,
    ExecutionTimeoutError,
    InvalidArgumentCountError,
    LaunchError,
    NonZeroExitError,
    OutputDecodeError,
    OutputReadError,
)

READ_CHUNK_SIZE = 4096
UNZIP_ARGUMENT_COUNT = 3

type PipeItem = bytes | OSError | None


@dataclass(frozen=True)
class OutputResult:
    """One item delivered by streaming execution: decoded text or an error."""

    text: str | None = None
    error: ExecutableError | None = None

    @classmethod
    def success(cls, text: str) -> OutputResult:
        return cls(text=text)

    @classmethod
    def failure(cls, error: ExecutableError) -> OutputResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text or ""


type OutputCallback = Callable[[OutputResult], None]


class Executable:
    """Run one recognized command with an optional wall-clock deadline.

    Calls on the same instance are serialized: a second call waits until the
    first one has released the instance. Separate instances share nothing and
    may run concurrently.

    stdout and stderr of the child are merged into a single pipe which is owned
    by the call that spawned it.
    """

    def __init__(
        self,
        command: RecognizedCommand,
        arguments: Sequence[str],
        timeout: float | None = None,
    ) -> None:
        arguments = list(arguments)
        if command.kind is CommandKind.UNZIP and len(arguments) != UNZIP_ARGUMENT_COUNT:
            raise InvalidArgumentCountError(len(arguments))
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.command = command
        self.arguments = arguments
        self.timeout = timeout
        self._lock = threading.Lock()

    @classmethod
    def unzip(cls, arguments: Sequence[str], timeout: float | None = None) -> Executable:
        return cls(RecognizedCommand.unzip(), arguments, timeout)

    def execute(self) -> str:
        """Run the command to completion and return its decoded output.

        Unlike the streaming mode, where a deadline is mandatory, the deadline
        is optional here. When configured it bounds the whole run, including
        draining the pipe, and the process group is killed on expiry. Without
        one the call waits for the pipe to close.

        Raises:
            LaunchError: The process could not be started.
            ExecutionTimeoutError: The deadline elapsed before exit.
            OutputReadError: The output pipe could not be drained.
            NonZeroExitError: The process exited with a non-zero code.
            OutputDecodeError: The output is not valid UTF-8.
        """
        with self._lock:
            process = self._spawn()
            try:
                output = self._communicate(process)
            finally:
                _reap(process)

            code = process.returncode
            logger.debug("executable.exit path={} code={}", self.command.path, code)
            if code != 0:
                raise NonZeroExitError(code)
            try:
                return output.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise OutputDecodeError(f"output of {self.command.path} is not valid UTF-8") from exc

    def stream(self) -> Iterator[OutputResult]:
        """Run the command and yield its output as decoded chunks.

        Exhausting the iterator marks end of stream, which happens when the
        pipe closes. A terminal failure (missing deadline, launch failure,
        timeout) is the only item yielded. Chunks that fail to decode yield an
        ``OutputDecodeError`` for that chunk and the stream continues. A non-zero
        exit code is reported as the last item.
        """
        with self._lock:
            if self.timeout is None:
                yield OutputResult.failure(
                    DeadlineNotConfiguredError("streaming execution requires a timeout")
                )
                return

            try:
                process = self._spawn()
            except LaunchError as exc:
                yield OutputResult.failure(exc)
                return

            chunks: queue.Queue[PipeItem] = queue.Queue()
            reader = threading.Thread(
                target=_drain_pipe,
                args=(process.stdout, chunks),
                name=f"docxtract-pipe-{process.pid}",
                daemon=True,
            )
            reader.start()
            try:
                try:
                    process.wait(timeout=self.timeout)
                except subprocess.TimeoutExpired:
                    _reap(process)
                    logger.warning(
                        "executable.timeout path={} timeout={}",
                        self.command.path,
                        self.timeout,
                    )
                    yield OutputResult.failure(
                        ExecutionTimeoutError(
                            f"{self.command.path} did not exit within {self.timeout} seconds"
                        )
                    )
                    return

                logger.debug("executable.exit path={} code={}", self.command.path, process.returncode)
                # Background processes left by the child would keep the pipe open past the deadline.
                _kill_group(process)
                yield from _decode_chunks(chunks)
                if process.returncode != 0:
                    yield OutputResult.failure(NonZeroExitError(process.returncode))
            finally:
                _reap(process)
                reader.join()
                if process.stdout is not None:
                    process.stdout.close()

    def execute_streaming(self, callback: OutputCallback) -> None:
        """Invoke ``callback`` once per item of :meth:`stream`, in order."""
        with closing(self.stream()) as results:
            for result in results:
                callback(result)

    async def execute_async(self) -> str:
        return await asyncio.to_thread(self.execute)

    async def execute_streaming_async(self, callback: OutputCallback) -> None:
        # The callback runs on the worker thread.
        await asyncio.to_thread(self.execute_streaming, callback)

    def _spawn(self) -> subprocess.Popen[bytes]:
        argv = [self.command.path, *self.arguments]
        logger.debug("executable.spawn path={} args={}", self.command.path, self.arguments)
        try:
            # The child gets its own process group so a timeout can kill the whole tree.
            return subprocess.Popen(  # noqa: S603
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            raise LaunchError(f"cannot launch {self.command.path}: {exc}") from exc

    def _communicate(self, process: subprocess.Popen[bytes]) -> bytes:
        try:
            output, _ = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            _kill_group(process)
            process.communicate()
            logger.warning("executable.timeout path={} timeout={}", self.command.path, self.timeout)
            raise ExecutionTimeoutError(
                f"{self.command.path} did not exit within {self.timeout} seconds"
            ) from exc
        except OSError as exc:
            raise OutputReadError(f"cannot read output of {self.command.path}: {exc}") from exc
        return output or b""


def _drain_pipe(pipe: IO[bytes] | None, chunks: queue.Queue[PipeItem]) -> None:
    try:
        if pipe is None:
            return
        while chunk := pipe.read1(READ_CHUNK_SIZE):  # type: ignore[attr-defined]
            chunks.put(chunk)
    except OSError as exc:
        chunks.put(exc)
    finally:
        chunks.put(None)


def _decode_chunks(chunks: queue.Queue[PipeItem]) -> Iterator[OutputResult]:
    decoder = codecs.getincrementaldecoder("utf-8")()
    while (item := chunks.get()) is not None:
        if isinstance(item, OSError):
            yield OutputResult.failure(OutputReadError(f"cannot read output pipe: {item}"))
            return
        try:
            text = decoder.decode(item)
        except UnicodeDecodeError as exc:
            decoder.reset()
            yield OutputResult.failure(OutputDecodeError(f"output chunk is not valid UTF-8: {exc.reason}"))
            continue
        if text:
            yield OutputResult.success(text)

    try:
        tail = decoder.decode(b"", final=True)
    except UnicodeDecodeError as exc:
        yield OutputResult.failure(OutputDecodeError(f"output ends with a truncated character: {exc.reason}"))
        return
    if tail:
        yield OutputResult.success(tail)


def _kill_group(process: subprocess.Popen[bytes]) -> None:
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except (ProcessLookupError, PermissionError):
        return


def _reap(process: subprocess.Popen[bytes]) -> None:
    # The group may outlive the child, so it is killed even after the child exited.
    _kill_group(process)
    process.wait()

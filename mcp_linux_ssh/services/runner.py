"""Bounded subprocess execution."""

import asyncio
import logging
from collections.abc import Sequence

from mcp_linux_ssh.errors import ExecutionError, ExecutionTimeoutError
from mcp_linux_ssh.models import ExecutionResult

logger = logging.getLogger(__name__)


def decode_output(data: bytes | None) -> str:
    """Decode process output permissively and trim surrounding whitespace."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace").strip()


async def _feed_stdin(proc: asyncio.subprocess.Process, data: bytes, label: str) -> None:
    """Write the whole payload to the child's stdin, then close it."""
    assert proc.stdin is not None
    try:
        proc.stdin.write(data)
        await proc.stdin.drain()
    except (BrokenPipeError, ConnectionResetError) as e:
        raise ExecutionError(f"Failed to write input to {label}: {e}") from e
    finally:
        proc.stdin.close()


async def _communicate(
    proc: asyncio.subprocess.Process,
    input_data: bytes | None,
    label: str,
) -> tuple[bytes, bytes]:
    """Feed stdin (if any) while draining stdout/stderr, then wait."""
    assert proc.stdout is not None and proc.stderr is not None

    # Drain both pipes while writing so a chatty child cannot block the writer.
    readers = asyncio.gather(proc.stdout.read(), proc.stderr.read())
    try:
        if input_data is not None:
            await _feed_stdin(proc, input_data, label)
        stdout, stderr = await readers
        await proc.wait()
    except BaseException:
        readers.cancel()
        raise
    return stdout, stderr


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill and reap a child that is still running."""
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()


async def run_process(
    executable: str,
    args: Sequence[str] = (),
    input_data: str | bytes | None = None,
    timeout: float = 0,
    label: str | None = None,
) -> ExecutionResult:
    """Run a subprocess to completion, bounded by timeout.

    Args:
        executable: Program to run (looked up on PATH)
        args: Arguments passed verbatim, no shell involved
        input_data: Optional payload written to stdin, which is then closed
        timeout: Seconds to wait; 0 waits forever
        label: Name used in error messages (defaults to executable)

    Returns:
        ExecutionResult with trimmed stdout/stderr. Nonzero exits are
        returned, not raised.

    Raises:
        ExecutionError: If the process cannot be spawned, fed, or awaited
        ExecutionTimeoutError: If timeout expires first. The child is killed.
    """
    label = label or executable
    payload = input_data.encode("utf-8") if isinstance(input_data, str) else input_data

    logger.debug("Spawning %s %s (timeout=%s)", executable, list(args), timeout or "none")

    try:
        proc = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.PIPE if payload is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExecutionError(f"Failed to spawn {label}: {e}") from e

    try:
        if timeout > 0:
            stdout, stderr = await asyncio.wait_for(
                _communicate(proc, payload, label), timeout=timeout
            )
        else:
            stdout, stderr = await _communicate(proc, payload, label)
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %ss, killing pid %s", label, timeout, proc.pid)
        await _terminate(proc)
        raise ExecutionTimeoutError(label, timeout) from None
    except ExecutionError:
        await _terminate(proc)
        raise
    except OSError as e:
        await _terminate(proc)
        raise ExecutionError(f"Failed to wait for {label}: {e}") from e

    returncode = proc.returncode
    exit_code = returncode if returncode is not None and returncode >= 0 else None

    logger.debug("%s exited with %s", label, exit_code)
    return ExecutionResult(
        exit_code=exit_code,
        stdout=decode_output(stdout),
        stderr=decode_output(stderr),
    )

"""Child-process execution with captured output, blocking or under asyncio."""

import asyncio
import subprocess
from dataclasses import dataclass
from typing import Sequence

from ..errors import CommandExitError, CommandSpawnError


@dataclass(frozen=True)
class CommandOutput:
    """Decoded output of a command that exited with status 0."""

    stdout: str
    stderr: str
    returncode: int = 0


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _finish(program: str, returncode: int, stdout: bytes, stderr: bytes) -> CommandOutput:
    out, err = _decode(stdout), _decode(stderr)
    if returncode != 0:
        raise CommandExitError(program, returncode, out, err)
    return CommandOutput(stdout=out, stderr=err, returncode=returncode)


def run_command(program: str, args: Sequence[str]) -> CommandOutput:
    """
    Run *program* with *args* and wait for it to exit.

    Raises CommandSpawnError if the program cannot be started and
    CommandExitError if it exits non-zero.  Text on stderr alone is not a
    failure at this level.
    """
    try:
        proc = subprocess.run(
            [program, *args],
            stdin=subprocess.DEVNULL,
            capture_output=True,
        )
    except OSError as exc:
        raise CommandSpawnError(program, str(exc)) from exc
    return _finish(program, proc.returncode, proc.stdout, proc.stderr)


async def run_command_async(program: str, args: Sequence[str]) -> CommandOutput:
    """Suspending counterpart of :func:`run_command` with the same outcomes."""
    try:
        proc = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise CommandSpawnError(program, str(exc)) from exc
    stdout, stderr = await proc.communicate()
    return _finish(program, proc.returncode, stdout, stderr)

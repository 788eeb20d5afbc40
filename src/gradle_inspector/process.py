"""Asynchronous process execution for Gradle invocations.

Commands run to completion and have their output captured in full. A
non-zero exit status is returned to the caller rather than raised, since
only the caller knows what a failure means for its operation.
"""

import asyncio
import logging
import pathlib
import typing

from gradle_inspector import errors, models

LOGGER = logging.getLogger(__name__)


async def run(
    command: str,
    args: typing.Sequence[str],
    working_directory: pathlib.Path | str,
    silent: bool | None = None,
) -> models.CommandResult:
    """Run a command and capture its exit status and output.

    Args:
        command: Executable to run
        args: Arguments passed to the executable
        working_directory: Directory the command runs in
        silent: Suppress echoing captured output to the log. Defaults to
            silent unless DEBUG logging is enabled.

    Returns:
        The captured result, whatever the exit status

    Raises:
        errors.ExecutionError: If the command could not be started

    """
    if silent is None:
        silent = not LOGGER.isEnabledFor(logging.DEBUG)
    LOGGER.debug(
        'Running %s %s in %s', command, ' '.join(args), working_directory
    )
    try:
        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            cwd=working_directory,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        LOGGER.error('Unable to start %s: %s', command, exc)
        raise errors.ExecutionError(command, args, -1, str(exc)) from exc

    stdout, stderr = await process.communicate()
    result = models.CommandResult(
        command=command,
        args=list(args),
        exit_code=process.returncode,
        stdout=stdout.decode('utf-8', errors='replace'),
        stderr=stderr.decode('utf-8', errors='replace'),
    )
    if not silent:
        LOGGER.debug('%s stdout: %s', result.command_line, result.stdout)
        if result.stderr:
            LOGGER.debug('%s stderr: %s', result.command_line, result.stderr)
    LOGGER.debug(
        '%s exited with status %i', result.command_line, result.exit_code
    )
    return result

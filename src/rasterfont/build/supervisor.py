"""FontForge process supervision.

Runs the generated build script under FontForge, streams its output, turns
``PROGRESS:`` lines into progress reports, and honours cancellation.

Output is drained by one reader task per stream. Readers push lines onto a
queue; a single consumer keeps the diagnostic tail and forwards progress.
The supervisor itself only waits for whichever comes first: process exit or
cancellation.
"""

import asyncio
import re
import subprocess
from collections import deque
from pathlib import Path

import structlog

from rasterfont.build.cancellation import CancellationToken
from rasterfont.build.script import PROGRESS_PREFIX, BuildScriptGenerator, generated_script
from rasterfont.build.tool import find_fontforge
from rasterfont.config import BuildConfig
from rasterfont.domain import BuildResult, BuildState, FontBuildJob
from rasterfont.exceptions import (
    BuildCancelledError,
    ToolFailureError,
    ToolMisbehavedError,
    ToolNotFoundError,
)
from rasterfont.utils.progress import BUILD_END, BUILD_START, ProgressReporter, scale_progress

logger = structlog.get_logger("rasterfont.supervisor")

STREAM_LIMIT = 1024 * 1024
ADDED_PATTERN = re.compile(r"^Successfully added (\d+) glyphs")
_EOF = None


def parse_progress_line(line: str) -> tuple[float, str] | None:
    """Parse a ``PROGRESS:<percentage>|<message>`` line.

    The message may itself contain ``|``.

    Returns:
        (percentage, message), or None if the line is not a valid progress line
    """
    if not line.startswith(PROGRESS_PREFIX):
        return None
    body = line[len(PROGRESS_PREFIX):]
    value, sep, message = body.partition("|")
    if not sep:
        return None
    try:
        percentage = float(value)
    except ValueError:
        return None
    if percentage != percentage:  # NaN
        return None
    return percentage, message


class BuildProcessSupervisor:
    """Runs one FontForge build and reports how it ended.

    State moves IDLE -> LAUNCHING -> RUNNING -> COMPLETED | FAILED | CANCELLED.

    Example:
        supervisor = BuildProcessSupervisor(BuildConfig())
        result = await supervisor.run(job, reporter, token)
    """

    def __init__(self, config: BuildConfig | None = None) -> None:
        self.config = config or BuildConfig()
        self.state = BuildState.IDLE
        self.executable: Path | None = None
        self.exit_code: int | None = None
        self.glyphs_added: int | None = None
        self._tail: deque[str] = deque(maxlen=self.config.diagnostic_lines)

    @property
    def diagnostics(self) -> list[str]:
        """Trailing output lines from the tool (stdout and stderr interleaved)."""
        return list(self._tail)

    def _transition(self, state: BuildState) -> None:
        logger.debug("Build state", previous=self.state.value, state=state.value)
        self.state = state

    def resolve_tool(self) -> Path:
        """Locate FontForge (LAUNCHING).

        Raises:
            ToolNotFoundError: If FontForge cannot be found
        """
        if self.executable is None:
            self._transition(BuildState.LAUNCHING)
            try:
                self.executable = find_fontforge(
                    self.config.tool_candidates, explicit=self.config.tool_path
                )
            except Exception:
                self._transition(BuildState.FAILED)
                raise
        return self.executable

    async def run(
        self,
        job: FontBuildJob,
        reporter: ProgressReporter | None = None,
        token: CancellationToken | None = None,
    ) -> BuildResult:
        """Generate the build script, run it, and wait for the result.

        Args:
            job: Build job
            reporter: Receives progress rescaled into the 50-100 range
            token: Cancellation signal; the process is killed when raised

        Returns:
            BuildResult for a completed build

        Raises:
            ToolNotFoundError: FontForge could not be located
            ToolFailureError: FontForge exited nonzero
            ToolMisbehavedError: FontForge exited cleanly without writing the font
            BuildCancelledError: The token was raised
        """
        reporter = reporter or ProgressReporter()
        token = token or CancellationToken()
        token.raise_if_cancelled("build")

        executable = self.resolve_tool()
        self.glyphs_added = None
        script = BuildScriptGenerator(job).generate()

        with generated_script(script) as script_path:
            logger.info("Launching FontForge", executable=str(executable), script=str(script_path))
            try:
                process = await asyncio.create_subprocess_exec(
                    str(executable),
                    "-script",
                    str(script_path),
                    stdin=subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    limit=STREAM_LIMIT,
                    start_new_session=True,
                )
            except OSError as e:
                self._transition(BuildState.FAILED)
                raise ToolNotFoundError([str(executable)]) from e
            self._transition(BuildState.RUNNING)
            exit_code = await self._supervise(process, reporter, token)

        self.exit_code = exit_code
        return self._finish(job, exit_code)

    async def _supervise(
        self,
        process: asyncio.subprocess.Process,
        reporter: ProgressReporter,
        token: CancellationToken,
    ) -> int:
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        readers = [
            asyncio.create_task(self._read_stream(process.stdout, queue)),
            asyncio.create_task(self._read_stream(process.stderr, queue)),
        ]
        consumer = asyncio.create_task(self._consume(queue, len(readers), reporter))

        loop = asyncio.get_running_loop()
        cancelled = asyncio.Event()
        unregister = token.register(lambda: loop.call_soon_threadsafe(cancelled.set))

        exit_task = asyncio.create_task(process.wait())
        cancel_task = asyncio.create_task(cancelled.wait())
        pumps = [*readers, consumer]

        try:
            await asyncio.wait({exit_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)

            if cancel_task.done() or token.is_cancelled:
                await self._kill(process, exit_task)
                self._transition(BuildState.CANCELLED)
                raise BuildCancelledError("build")

            await asyncio.gather(*pumps)
            return exit_task.result()
        finally:
            unregister()
            if process.returncode is None:
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
            for task in (exit_task, cancel_task, *pumps):
                if not task.done():
                    task.cancel()
            await asyncio.gather(exit_task, cancel_task, *pumps, return_exceptions=True)

    async def _kill(self, process: asyncio.subprocess.Process, exit_task: asyncio.Task) -> None:
        if process.returncode is None:
            logger.info("Cancelling FontForge", pid=process.pid)
            try:
                process.kill()
            except ProcessLookupError:
                pass
        try:
            await asyncio.wait_for(asyncio.shield(exit_task), timeout=self.config.kill_timeout)
        except TimeoutError:
            logger.warning("FontForge did not exit after kill", pid=process.pid)

    async def _read_stream(
        self, stream: asyncio.StreamReader | None, queue: "asyncio.Queue[str | None]"
    ) -> None:
        try:
            if stream is not None:
                async for raw in stream:
                    line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                    if line:
                        await queue.put(line)
        finally:
            await queue.put(_EOF)

    async def _consume(
        self, queue: "asyncio.Queue[str | None]", producers: int, reporter: ProgressReporter
    ) -> None:
        remaining = producers
        while remaining:
            line = await queue.get()
            if line is _EOF:
                remaining -= 1
                continue
            self._tail.append(line)
            logger.debug("FontForge output", line=line)
            added = ADDED_PATTERN.match(line)
            if added:
                self.glyphs_added = int(added.group(1))
            parsed = parse_progress_line(line)
            if parsed is not None:
                percentage, message = parsed
                reporter.report(scale_progress(percentage, BUILD_START, BUILD_END), message)

    def _finish(self, job: FontBuildJob, exit_code: int) -> BuildResult:
        diagnostics = self.diagnostics
        if exit_code != 0:
            self._transition(BuildState.FAILED)
            raise ToolFailureError(exit_code, diagnostics)
        if not job.output_path.exists():
            self._transition(BuildState.FAILED)
            raise ToolMisbehavedError(str(job.output_path), diagnostics)

        added = self.glyphs_added if self.glyphs_added is not None else job.glyph_count
        self._transition(BuildState.COMPLETED)
        return BuildResult(
            success=True,
            state=BuildState.COMPLETED,
            output_path=job.output_path,
            glyph_count=added,
            submitted_count=job.glyph_count,
            exit_code=exit_code,
            diagnostics=diagnostics,
        )

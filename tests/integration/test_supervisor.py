"""Integration tests for FontForge supervision against fake executables."""

import asyncio
import time
from pathlib import Path

import pytest

from conftest import posix_only, svg_document
from rasterfont.build import BuildProcessSupervisor, CancellationToken
from rasterfont.config import BuildConfig
from rasterfont.domain import BuildState, FontBuildJob
from rasterfont.exceptions import (
    BuildCancelledError,
    ToolError,
    ToolFailureError,
    ToolMisbehavedError,
    ToolNotFoundError,
)
from rasterfont.utils import ProgressReporter

pytestmark = posix_only


@pytest.fixture
def job(tmp_path: Path) -> FontBuildJob:
    converted = tmp_path / "converted"
    converted.mkdir()
    return FontBuildJob(
        svg_paths=[
            svg_document(converted / "upper_A.svg"),
            svg_document(converted / "space.svg"),
        ],
        font_name="Fake Font",
        output_path=tmp_path / "Fake_Font.ttf",
    )


def supervisor_for(executable: Path, **kwargs) -> BuildProcessSupervisor:
    return BuildProcessSupervisor(BuildConfig(tool_path=executable, tool_candidates=[], **kwargs))


class TestSuccessfulBuild:
    """Tests for builds that produce a font."""

    def test_build(self, make_fontforge, job: FontBuildJob, script_dir: Path) -> None:
        """Test the script's progress is rescaled into 50-100 and the font exists."""
        supervisor = supervisor_for(make_fontforge("build"))
        reporter = ProgressReporter()

        result = asyncio.run(supervisor.run(job, reporter))

        assert result.success
        assert result.state == BuildState.COMPLETED
        assert supervisor.state == BuildState.COMPLETED
        assert result.exit_code == 0
        assert result.glyph_count == 2
        assert result.submitted_count == 2
        assert result.output_path.exists()
        assert result.file_size > 0

        percentages = [e.percentage for e in reporter.events]
        assert percentages == [72.5, 95.0, 97.5, 100.0]
        assert reporter.events[0].message == "Processed glyph: A"
        assert reporter.events[1].message == "Processed glyph:  "

    def test_glyph_count_from_tool(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test the result counts glyphs the tool added, not documents submitted."""
        job.svg_paths.append(svg_document(job.svg_paths[0].parent / "logo.svg"))

        result = asyncio.run(supervisor_for(make_fontforge("build")).run(job))

        assert result.glyph_count == 2
        assert result.submitted_count == 3

    def test_script_removed(self, make_fontforge, job: FontBuildJob, script_dir: Path) -> None:
        asyncio.run(supervisor_for(make_fontforge("build")).run(job))

        assert list(script_dir.iterdir()) == []

    def test_diagnostics_kept(self, make_fontforge, job: FontBuildJob, script_dir: Path) -> None:
        """Test non-progress output is kept in the diagnostic tail."""
        result = asyncio.run(supervisor_for(make_fontforge("build")).run(job))

        assert any("Font file created successfully" in line for line in result.diagnostics)
        assert len(result.diagnostics) <= 10


class TestFailedBuild:
    """Tests for builds that fail."""

    def test_nonzero_exit(self, make_fontforge, job: FontBuildJob, script_dir: Path) -> None:
        """Test a nonzero exit raises with the last lines of output."""
        supervisor = supervisor_for(make_fontforge("fail"))

        with pytest.raises(ToolFailureError) as exc_info:
            asyncio.run(supervisor.run(job))

        error = exc_info.value
        assert error.exit_code == 3
        assert error.diagnostics == [f"diagnostic line {i}" for i in range(5, 15)]
        assert "diagnostic line 14" in str(error)
        assert supervisor.state == BuildState.FAILED
        assert list(script_dir.iterdir()) == []

    def test_diagnostic_tail_size(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        supervisor = supervisor_for(make_fontforge("fail"), diagnostic_lines=3)

        with pytest.raises(ToolFailureError) as exc_info:
            asyncio.run(supervisor.run(job))

        assert exc_info.value.diagnostics == [
            "diagnostic line 12",
            "diagnostic line 13",
            "diagnostic line 14",
        ]

    def test_missing_artifact(self, make_fontforge, job: FontBuildJob, script_dir: Path) -> None:
        """Test a clean exit without the font file is a misbehaving tool."""
        supervisor = supervisor_for(make_fontforge("misbehave"))

        with pytest.raises(ToolMisbehavedError) as exc_info:
            asyncio.run(supervisor.run(job))

        assert exc_info.value.output_path == str(job.output_path)
        assert isinstance(exc_info.value, ToolError)
        assert supervisor.state == BuildState.FAILED

    def test_malformed_progress_ignored(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test malformed progress lines are diagnostics, not progress."""
        reporter = ProgressReporter()

        with pytest.raises(ToolFailureError) as exc_info:
            asyncio.run(supervisor_for(make_fontforge("noisy")).run(job, reporter))

        assert [(e.percentage, e.message) for e in reporter.events] == [
            (70.0, "Processed glyph: A|with a bar")
        ]
        diagnostics = exc_info.value.diagnostics
        assert "PROGRESS:abc|not a number" in diagnostics
        assert "a warning on stderr" in diagnostics
        assert exc_info.value.exit_code == 2

    def test_tool_not_found(self, tmp_path: Path, job: FontBuildJob, monkeypatch) -> None:
        """Test a missing tool fails before anything is launched."""
        monkeypatch.setattr("rasterfont.build.tool.shutil.which", lambda name: None)
        supervisor = supervisor_for(tmp_path / "no-such-fontforge")

        with pytest.raises(ToolNotFoundError):
            asyncio.run(supervisor.run(job))

        assert supervisor.state == BuildState.FAILED

    def test_tool_not_executable(
        self, tmp_path: Path, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test a tool path that cannot be executed is reported as not found."""
        fake = tmp_path / "fontforge"
        fake.write_text("not a program", encoding="utf-8")
        fake.chmod(0o644)

        with pytest.raises(ToolNotFoundError):
            asyncio.run(supervisor_for(fake).run(job))

        assert list(script_dir.iterdir()) == []


class TestCancellation:
    """Tests for cancelling a running build."""

    def test_cancel_running_build(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test cancellation kills the process promptly and cleans up."""
        supervisor = supervisor_for(make_fontforge("hang"))
        token = CancellationToken()
        reporter = ProgressReporter(lambda pct, msg: token.cancel())

        start = time.monotonic()
        with pytest.raises(BuildCancelledError) as exc_info:
            asyncio.run(supervisor.run(job, reporter, token))
        elapsed = time.monotonic() - start

        assert elapsed < 20
        assert exc_info.value.stage == "build"
        assert supervisor.state == BuildState.CANCELLED
        assert [e.percentage for e in reporter.events] == [55.0]
        assert not job.output_path.exists()
        assert list(script_dir.iterdir()) == []

    def test_cancel_from_another_thread(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test a token raised from another thread stops the build."""
        import threading

        supervisor = supervisor_for(make_fontforge("hang"))
        token = CancellationToken()
        timer = threading.Timer(0.5, token.cancel)
        timer.start()

        try:
            with pytest.raises(BuildCancelledError):
                asyncio.run(supervisor.run(job, token=token))
        finally:
            timer.cancel()

        assert supervisor.state == BuildState.CANCELLED

    def test_cancelled_before_start(
        self, make_fontforge, job: FontBuildJob, script_dir: Path
    ) -> None:
        """Test an already raised token never launches the tool."""
        supervisor = supervisor_for(make_fontforge("build"))
        token = CancellationToken()
        token.cancel()

        with pytest.raises(BuildCancelledError):
            asyncio.run(supervisor.run(job, token=token))

        assert supervisor.state == BuildState.IDLE
        assert not job.output_path.exists()

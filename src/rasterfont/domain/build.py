"""Build job, progress and result models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class BuildState(str, Enum):
    """Lifecycle of one FontForge run."""

    IDLE = "idle"
    LAUNCHING = "launching"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BuildState.COMPLETED, BuildState.FAILED, BuildState.CANCELLED)


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """A progress report.

    Attributes:
        percentage: Overall completion, 0 to 100
        message: Human-readable status text
    """

    percentage: float
    message: str


@dataclass
class FontBuildJob:
    """Everything the build script needs, assembled once per run.

    Attributes:
        svg_paths: Vector documents to import, in build order
        font_name: Family and full name of the font
        output_path: Where FontForge writes the font
        em_size: Units per em
        simplification: Tracing tolerance the documents were made with
        version: Font version string
        copyright: Font copyright string
    """

    svg_paths: list[Path]
    font_name: str
    output_path: Path
    em_size: int = 1000
    simplification: float = 0.001
    version: str = "1.0"
    copyright: str = "Custom Font"

    @property
    def internal_name(self) -> str:
        return self.font_name.replace(" ", "")

    @property
    def glyph_count(self) -> int:
        return len(self.svg_paths)


@dataclass
class BuildResult:
    """Outcome of a FontForge run.

    Attributes:
        success: True when the font file was produced
        state: Terminal supervisor state
        output_path: Font file path
        glyph_count: Glyphs FontForge reported adding (documents submitted
            if it did not say)
        submitted_count: Glyph documents handed to the build
        exit_code: FontForge exit status (None if it never ran)
        diagnostics: Trailing tool output lines
    """

    success: bool
    state: BuildState
    output_path: Path
    glyph_count: int = 0
    submitted_count: int = 0
    exit_code: int | None = None
    diagnostics: list[str] = field(default_factory=list)

    @property
    def file_size(self) -> int:
        """Size of the produced font in bytes (0 if absent)."""
        if self.output_path.exists():
            return self.output_path.stat().st_size
        return 0

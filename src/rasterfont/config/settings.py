"""Configuration settings for rasterfont."""

from pathlib import Path

from pydantic import BaseModel, Field

# Known FontForge install locations, probed in order before PATH lookup.
DEFAULT_TOOL_CANDIDATES: list[str] = [
    r"C:\Program Files (x86)\FontForgeBuilds\bin\fontforge.exe",
    r"C:\Program Files\FontForgeBuilds\bin\fontforge.exe",
    r"C:\Program Files (x86)\FontForge\bin\fontforge.exe",
    r"C:\Program Files\FontForge\bin\fontforge.exe",
    r"C:\Program Files (x86)\FontForgeBuilds\bin\ffpython.exe",
    r"C:\Program Files\FontForgeBuilds\bin\ffpython.exe",
    "/Applications/FontForge.app/Contents/MacOS/FontForge",
    "/Applications/FontForge.app/Contents/Resources/opt/local/bin/fontforge",
    "/opt/homebrew/bin/fontforge",
    "/usr/local/bin/fontforge",
    "/usr/bin/fontforge",
]


class VectorizeConfig(BaseModel):
    """Configuration for raster to vector tracing."""

    simplification: float = Field(
        default=0.001,
        ge=0.0,
        le=1.0,
        description="Douglas-Peucker tolerance as a fraction of each contour's perimeter",
    )
    alpha_threshold: int = Field(
        default=128,
        ge=1,
        le=255,
        description="Alpha values at or above this are foreground",
    )
    reuse_existing: bool = Field(
        default=False,
        description="Keep SVG files left by a previous run instead of re-tracing",
    )


class FontConfig(BaseModel):
    """Font naming and metrics."""

    name: str = Field(
        default="Custom Font",
        min_length=1,
        description="Family and full name of the generated font",
    )
    em_size: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="Units per em",
    )
    version: str = Field(default="1.0")
    copyright: str = Field(default="Custom Font")

    @property
    def internal_name(self) -> str:
        """PostScript-style name: the font name with spaces removed."""
        return self.name.replace(" ", "")

    @property
    def file_stem(self) -> str:
        """File name stem for the generated font."""
        return self.name.strip().replace(" ", "_")


class BuildConfig(BaseModel):
    """Configuration for the FontForge build phase."""

    tool_candidates: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TOOL_CANDIDATES),
        description="FontForge install locations probed before PATH lookup",
    )
    tool_path: Path | None = Field(
        default=None,
        description="Explicit FontForge executable (skips probing)",
    )
    diagnostic_lines: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Trailing tool output lines kept for error reports",
    )
    kill_timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Seconds to wait for FontForge to exit after it is killed",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RasterFontSettings(BaseModel):
    """Main application settings."""

    vectorize: VectorizeConfig = Field(default_factory=VectorizeConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterFontSettings:
    """Get default application settings."""
    return RasterFontSettings()

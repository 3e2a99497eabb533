"""Exception hierarchy for rasterfont."""

from collections.abc import Sequence


class RasterFontError(Exception):
    """Base exception for all rasterfont errors."""

    pass


class InputError(RasterFontError):
    """The input directory is missing or holds no recognized glyph images."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid input '{path}': {reason}")


class FormatError(RasterFontError):
    """A glyph image could not be decoded or lacks an alpha channel."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unsupported image '{path}': {reason}")


class ToolError(RasterFontError):
    """Errors related to the external font compiler."""

    def __init__(self, message: str, diagnostics: Sequence[str] = ()) -> None:
        self.diagnostics = list(diagnostics)
        super().__init__(message)

    @property
    def diagnostic_text(self) -> str:
        """Trailing tool output joined into one block."""
        return "\n".join(self.diagnostics)


class ToolNotFoundError(ToolError):
    """FontForge could not be located."""

    def __init__(self, searched: Sequence[str]) -> None:
        self.searched = list(searched)
        super().__init__(
            "FontForge executable not found. Install FontForge or put 'fontforge' on PATH."
        )


class ToolMisbehavedError(ToolError):
    """FontForge exited cleanly but did not produce the font file."""

    def __init__(self, output_path: str, diagnostics: Sequence[str] = ()) -> None:
        self.output_path = output_path
        super().__init__(
            f"FontForge reported success but '{output_path}' was not created",
            diagnostics,
        )


class ToolFailureError(ToolError):
    """FontForge exited with a nonzero status."""

    def __init__(self, exit_code: int, diagnostics: Sequence[str] = ()) -> None:
        self.exit_code = exit_code
        message = f"FontForge script failed with exit code {exit_code}"
        if diagnostics:
            message += ". Last output:\n" + "\n".join(diagnostics)
        super().__init__(message, diagnostics)


class BuildCancelledError(RasterFontError):
    """The build was cancelled by the caller."""

    def __init__(self, stage: str, completed: int = 0) -> None:
        self.stage = stage
        self.completed = completed
        super().__init__(f"Build cancelled during {stage}")

"""FontForge build orchestration for rasterfont.

Key responsibilities:
- Locate the FontForge executable
- Generate the FontForge build script
- Run it under supervision with streamed progress and cancellation

Key classes:
- CancellationToken: Cooperative cancellation signal
- BuildScriptGenerator: Renders the FontForge script for a job
- BuildProcessSupervisor: Runs FontForge and reports the outcome
"""

from rasterfont.build.cancellation import CancellationToken
from rasterfont.build.script import PROGRESS_PREFIX, BuildScriptGenerator, generated_script
from rasterfont.build.supervisor import BuildProcessSupervisor, parse_progress_line
from rasterfont.build.tool import find_fontforge

__all__ = [
    "PROGRESS_PREFIX",
    "BuildProcessSupervisor",
    "BuildScriptGenerator",
    "CancellationToken",
    "find_fontforge",
    "generated_script",
    "parse_progress_line",
]

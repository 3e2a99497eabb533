"""Shared fixtures: glyph images, SVG documents and a fake FontForge."""

import importlib.util
import stat
import sys
import tempfile
import textwrap
import types
from collections.abc import Callable
from pathlib import Path

import cv2
import numpy as np
import pytest

FAKE_MODULE_PATH = Path(__file__).parent / "fake_fontforge.py"

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="fake FontForge relies on a shebang script"
)


def rgba_canvas(size: int = 40) -> np.ndarray:
    """Fully transparent RGBA canvas."""
    return np.zeros((size, size, 4), dtype=np.uint8)


def ink(image: np.ndarray, x0: int, y0: int, x1: int, y1: int, alpha: int = 255) -> None:
    """Fill the inclusive rectangle [x0, x1] x [y0, y1] with opaque black."""
    image[y0 : y1 + 1, x0 : x1 + 1] = (0, 0, 0, alpha)


def erase(image: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> None:
    """Make the inclusive rectangle [x0, x1] x [y0, y1] transparent."""
    image[y0 : y1 + 1, x0 : x1 + 1] = 0


def square_image(size: int = 40) -> np.ndarray:
    image = rgba_canvas(size)
    ink(image, 8, 8, size - 9, size - 9)
    return image


def ring_image(size: int = 40) -> np.ndarray:
    image = square_image(size)
    erase(image, 16, 16, size - 17, size - 17)
    return image


def write_png(path: Path, image: np.ndarray) -> Path:
    assert cv2.imwrite(str(path), image)
    return path


def load_fake_fontforge() -> types.ModuleType:
    """Import a fresh copy of the fake fontforge module."""
    spec = importlib.util.spec_from_file_location("fontforge", FAKE_MODULE_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


_EXECUTABLE_TEMPLATE = """\
#!{python}
import importlib.util
import sys
import time

MODE = {mode!r}


def progress(percentage, message):
    sys.stdout.write(f"PROGRESS:{{percentage}}|{{message}}\\n")
    sys.stdout.flush()


if MODE == "build":
    spec = importlib.util.spec_from_file_location("fontforge", {module!r})
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    sys.modules["fontforge"] = module
    script = sys.argv[2]
    sys.argv = [script]
    with open(script, encoding="utf-8") as handle:
        code = compile(handle.read(), script, "exec")
    exec(code, {{"__name__": "__main__"}})
elif MODE == "fail":
    for i in range(15):
        print(f"diagnostic line {{i}}", flush=True)
    sys.exit(3)
elif MODE == "misbehave":
    progress(100, "Font generation completed!")
elif MODE == "noisy":
    print("PROGRESS:abc|not a number", flush=True)
    print("PROGRESS:40", flush=True)
    print("plain output", flush=True)
    sys.stderr.write("a warning on stderr\\n")
    sys.stderr.flush()
    progress(40, "Processed glyph: A|with a bar")
    sys.exit(2)
elif MODE == "hang":
    progress(10, "Processed glyph: A")
    time.sleep(60)
"""


@pytest.fixture
def make_fontforge(tmp_path: Path) -> Callable[[str], Path]:
    """Factory for fake FontForge executables.

    Modes:
        build: runs the generated script against the fake fontforge module
        fail: prints 15 lines, exits 3
        misbehave: reports completion, exits 0 without writing the font
        noisy: prints malformed progress lines, then exits 2
        hang: reports progress, then sleeps
    """

    def factory(mode: str) -> Path:
        path = tmp_path / f"fontforge-{mode}"
        path.write_text(
            _EXECUTABLE_TEMPLATE.format(
                python=sys.executable, mode=mode, module=str(FAKE_MODULE_PATH)
            ),
            encoding="utf-8",
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return factory


@pytest.fixture
def fake_fontforge_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """Fake fontforge module installed in sys.modules for in-process scripts."""
    module = load_fake_fontforge()
    monkeypatch.setitem(sys.modules, "fontforge", module)
    return module


@pytest.fixture
def script_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect temporary build scripts into a directory the test can inspect."""
    directory = tmp_path / "scripts"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


@pytest.fixture
def glyph_dir(tmp_path: Path) -> Path:
    """Input folder with a few glyph images: a ring, a square and a digit."""
    directory = tmp_path / "glyphs"
    directory.mkdir()
    write_png(directory / "upper_O.png", ring_image())
    write_png(directory / "lower_l.png", square_image())
    write_png(directory / "7.png", square_image(32))
    return directory


def svg_document(path: Path) -> Path:
    """Write a tiny valid SVG document."""
    path.write_text(
        textwrap.dedent(
            """\
            <svg xmlns="http://www.w3.org/2000/svg" width="10" height="10" viewBox="0 0 10 10">
              <g><path d="M1 1H9V9H1Z" fill="black" fill-rule="nonzero" /></g>
            </svg>
            """
        ),
        encoding="utf-8",
    )
    return path

"""Tests for FontForge build script generation."""

import ast
import types
from pathlib import Path
from unittest.mock import Mock

import pytest

from conftest import svg_document
from rasterfont.build import PROGRESS_PREFIX, BuildScriptGenerator, generated_script
from rasterfont.build.supervisor import parse_progress_line
from rasterfont.domain import FontBuildJob


def make_job(tmp_path: Path, names: list[str], **kwargs) -> FontBuildJob:
    converted = tmp_path / "converted"
    converted.mkdir(exist_ok=True)
    paths = [svg_document(converted / f"{name}.svg") for name in names]
    return FontBuildJob(
        svg_paths=paths,
        font_name=kwargs.pop("font_name", "Test Font"),
        output_path=tmp_path / "Test_Font.ttf",
        **kwargs,
    )


def run_script(job: FontBuildJob) -> None:
    script = BuildScriptGenerator(job).generate()
    exec(compile(script, "build_font.py", "exec"), {"__name__": "__main__"})


def progress_lines(output: str) -> list[tuple[float, str]]:
    parsed = (parse_progress_line(line) for line in output.splitlines())
    return [p for p in parsed if p is not None]


class TestBuildScriptGenerator:
    """Tests for BuildScriptGenerator."""

    def test_script_is_valid_python(self, tmp_path: Path) -> None:
        job = make_job(tmp_path, ["upper_A"])
        ast.parse(BuildScriptGenerator(job).generate())

    def test_values_embedded_safely(self, tmp_path: Path) -> None:
        """Test names with quotes and backslashes survive as literals."""
        job = make_job(tmp_path, ["upper_A"], font_name='Weird "Font" \\ Name')

        script = BuildScriptGenerator(job).generate()

        assert repr('Weird "Font" \\ Name') in script
        ast.parse(script)

    def test_unknown_names_warned(self, tmp_path: Path, monkeypatch) -> None:
        """Test documents the script will skip are logged while generating."""
        warnings = Mock()
        monkeypatch.setattr("rasterfont.naming.logger", warnings)
        job = make_job(tmp_path, ["upper_A", "logo", "7"])

        BuildScriptGenerator(job).generate()

        warnings.warning.assert_called_once_with(
            "Skipping glyph with unrecognized name", glyph="logo"
        )

    def test_builds_font(
        self, tmp_path: Path, fake_fontforge_module: types.ModuleType, capsys
    ) -> None:
        """Test glyphs are imported, cleaned up and the font is written."""
        job = make_job(tmp_path, ["upper_A", "lower_b", "7"], em_size=1000)

        run_script(job)

        (font,) = fake_fontforge_module.fonts
        assert font.fontname == "TestFont"
        assert font.familyname == "Test Font"
        assert font.em == 1000
        assert font.ascent == 200
        assert font.descent == 200
        assert font.hhea_descent == -200
        assert font.closed
        assert sorted(font.glyphs) == [ord("7"), ord("A"), ord("b")]

        glyph = font.glyphs[ord("A")]
        assert glyph.imported == [str(job.svg_paths[0])]
        assert glyph.operations == ["correctDirection", "removeOverlap", "simplify"]
        assert glyph.left_side_bearing == 20
        assert glyph.right_side_bearing == 20
        assert job.output_path.exists()

    def test_space_glyph(
        self, tmp_path: Path, fake_fontforge_module: types.ModuleType, capsys
    ) -> None:
        """Test the space gets a fixed advance and no imported outlines."""
        job = make_job(tmp_path, ["upper_A", "space"], em_size=2048)

        run_script(job)

        (font,) = fake_fontforge_module.fonts
        space = font.glyphs[32]
        assert space.width == 256
        assert space.imported == []
        assert space.operations == []

    def test_progress_lines(
        self, tmp_path: Path, fake_fontforge_module: types.ModuleType, capsys
    ) -> None:
        """Test one progress line per glyph, then the generate and done phases."""
        job = make_job(tmp_path, ["upper_A", "lower_b", "foobar"])

        run_script(job)

        events = progress_lines(capsys.readouterr().out)
        assert [pct for pct, _ in events] == [30.0, 60.0, 90.0, 95.0, 100.0]
        assert events[0][1] == "Processed glyph: A"
        assert events[1][1] == "Processed glyph: b"
        assert events[2][1] == "Skipped: foobar"
        assert events[3][1] == "Generating font file..."
        assert events[4][1] == "Font generation completed! 2 glyphs added."

    def test_broken_glyph_skipped(
        self, tmp_path: Path, fake_fontforge_module: types.ModuleType, capsys
    ) -> None:
        """Test a glyph that fails to import is skipped, not fatal."""
        job = make_job(tmp_path, ["upper_A", "upper_B"])
        job.svg_paths[1].write_text("not svg", encoding="utf-8")

        run_script(job)

        out = capsys.readouterr().out
        assert "Error processing glyph" in out
        assert "Skipped: upper_B" in out
        assert job.output_path.exists()

    def test_no_glyphs_exits_nonzero(
        self, tmp_path: Path, fake_fontforge_module: types.ModuleType, capsys
    ) -> None:
        """Test a run where nothing could be added exits with status 1."""
        job = make_job(tmp_path, ["foobar", "unknown"])

        with pytest.raises(SystemExit) as exc_info:
            run_script(job)

        assert exc_info.value.code == 1
        assert "No glyphs were successfully added" in capsys.readouterr().out
        assert not job.output_path.exists()


class TestGeneratedScript:
    """Tests for the temporary script file."""

    def test_written_and_removed(self, script_dir: Path) -> None:
        with generated_script("print('hi')\n") as path:
            assert path.parent == script_dir
            assert path.name.startswith("rasterfont_")
            assert path.suffix == ".py"
            assert path.read_text(encoding="utf-8") == "print('hi')\n"

        assert not path.exists()

    def test_removed_on_error(self, script_dir: Path) -> None:
        with pytest.raises(RuntimeError):
            with generated_script("pass\n"):
                raise RuntimeError("boom")

        assert list(script_dir.iterdir()) == []

    def test_already_deleted(self, script_dir: Path) -> None:
        with generated_script("pass\n") as path:
            path.unlink()

        assert list(script_dir.iterdir()) == []

"""Glyph image discovery.

Finds the PNG files in an input directory whose base names match the
expected glyph list, and reports which expected glyphs are present.
"""

from dataclasses import dataclass, field
from pathlib import Path

from rasterfont.exceptions import InputError
from rasterfont.naming import EXPECTED_GLYPHS, canonical_name

IMAGE_EXTENSION = ".png"


@dataclass(frozen=True)
class GlyphSource:
    """A recognized glyph image.

    Attributes:
        name: Expected glyph name (canonical spelling)
        path: Image file
    """

    name: str
    path: Path


@dataclass
class GlyphInventory:
    """Expected glyphs matched against the files in a directory.

    Attributes:
        directory: Scanned directory
        found: Recognized glyph images in EXPECTED_GLYPHS order
        unrecognized: PNG files whose names match no expected glyph
    """

    directory: Path
    found: list[GlyphSource] = field(default_factory=list)
    unrecognized: list[Path] = field(default_factory=list)

    @property
    def expected(self) -> tuple[str, ...]:
        return EXPECTED_GLYPHS

    @property
    def found_names(self) -> list[str]:
        return [source.name for source in self.found]

    @property
    def missing(self) -> list[str]:
        present = set(self.found_names)
        return [name for name in EXPECTED_GLYPHS if name not in present]

    @property
    def is_complete(self) -> bool:
        return not self.missing


def take_inventory(directory: Path) -> GlyphInventory:
    """Match the PNG files in a directory against the expected glyph names.

    Only the top level of the directory is scanned. Extensions and names are
    compared case-insensitively. When two files map to the same glyph the
    first in sorted order wins.

    Raises:
        InputError: If the directory does not exist
    """
    if not directory.exists():
        raise InputError(str(directory), "directory does not exist")
    if not directory.is_dir():
        raise InputError(str(directory), "not a directory")

    by_name: dict[str, Path] = {}
    unrecognized: list[Path] = []

    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() != IMAGE_EXTENSION:
            continue
        name = canonical_name(path.stem)
        if name is None:
            unrecognized.append(path)
        elif name not in by_name:
            by_name[name] = path

    found = [GlyphSource(name, by_name[name]) for name in EXPECTED_GLYPHS if name in by_name]
    return GlyphInventory(directory=directory, found=found, unrecognized=unrecognized)


def find_glyph_images(directory: Path) -> list[GlyphSource]:
    """Recognized glyph images in a directory, in EXPECTED_GLYPHS order.

    Raises:
        InputError: If the directory is missing or holds no recognized images
    """
    inventory = take_inventory(directory)
    if not inventory.found:
        raise InputError(str(directory), "no recognized PNG glyph images found")
    return inventory.found

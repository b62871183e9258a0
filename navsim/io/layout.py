# navsim/io/layout.py
"""
Plain-text layout persistence.

Format: exactly `height` lines, each with exactly `width` whitespace
separated integers, 0 free / 1 blocked, row-major, nothing else.
"""
from __future__ import annotations

import os
from typing import Union

import numpy as np
from loguru import logger

from navsim.errors import DimensionMismatch, LayoutError
from navsim.map_grid import GridMap

PathLike = Union[str, "os.PathLike[str]"]

_TOKENS = {"0": 0, "1": 1}


def format_layout(matrix) -> str:
    rows = np.asarray(matrix, dtype=np.uint8)
    return "".join(" ".join(str(int(v)) for v in row) + "\n" for row in rows)


def parse_layout(text: str, *, width: int, height: int) -> np.ndarray:
    """
    Parse and fully validate layout text into a (height, width) uint8 array.

    Raises:
      DimensionMismatch: wrong number of lines or of values on a line
      LayoutError: a value other than 0 or 1
    """
    lines = text.splitlines()
    # A trailing newline or blank lines at EOF are not rows
    while lines and not lines[-1].strip():
        lines.pop()

    if len(lines) != height:
        first = len(lines[0].split()) if lines else 0
        raise DimensionMismatch((width, height), (first, len(lines)))

    staged = np.zeros((height, width), dtype=np.uint8)
    for r, line in enumerate(lines):
        tokens = line.split()
        if len(tokens) != width:
            raise DimensionMismatch((width, height), (len(tokens), len(lines)))
        for c, tok in enumerate(tokens):
            if tok not in _TOKENS:
                raise LayoutError(f"line {r + 1}, column {c + 1}: expected 0 or 1, got {tok!r}")
            staged[r, c] = _TOKENS[tok]
    return staged


def save_layout(grid: GridMap, path: PathLike) -> None:
    text = format_layout(grid.snapshot())
    try:
        parent = os.path.dirname(os.fspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise LayoutError(f"could not save layout to {path}: {e}") from e
    logger.info("Layout saved to {}", path)


def load_layout(grid: GridMap, path: PathLike) -> None:
    """
    Read, validate, then commit a layout into grid.

    The whole file is staged first; on any failure the grid is untouched.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LayoutError(f"could not load layout from {path}: {e}") from e

    staged = parse_layout(text, width=grid.width, height=grid.height)
    grid.load_snapshot(staged)
    logger.info("Layout loaded from {}", path)

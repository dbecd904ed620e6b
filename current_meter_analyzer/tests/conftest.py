from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import numpy as np
import pytest

HEADER = ("surface-meter", "3.0W", "-4.9 -27.2 3600 360 2.26")
N_ROWS = 360

# First rows of the two blocks of the survey file used throughout the tests.
SNS_FIRST = (290.0, 0.4671, 228.54)
NSN_FIRST = (122.0, 0.0516, 0.28)


@dataclass(frozen=True)
class BlockData:
    time: np.ndarray
    speed: np.ndarray
    direction: np.ndarray
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class CurrentFile:
    path: Path
    blocks: Tuple[BlockData, ...]


def make_block(first: Tuple[float, float, float], n: int, seed: int) -> BlockData:
    """Evenly spaced time, random speed/direction; the values are exactly as written."""
    rng = np.random.default_rng(seed)
    t = first[0] + np.arange(n, dtype=np.float64)
    s = rng.uniform(0.0, 0.5, n)
    d = rng.uniform(0.0, 359.0, n)
    s[0] = first[1]
    d[0] = first[2]

    lines = tuple(f"{ti:g} {si:.4f} {di:.2f}" for ti, si, di in zip(t, s, d))
    mat = np.array([[float(x) for x in ln.split()] for ln in lines], dtype=np.float64)
    return BlockData(time=mat[:, 0], speed=mat[:, 1], direction=mat[:, 2], lines=lines)


def render(blocks: Sequence[BlockData], header: Sequence[str] = HEADER) -> str:
    parts: List[str] = []
    for b in blocks:
        parts.extend(header)
        parts.extend(b.lines)
    return "\n".join(parts) + "\n"


@pytest.fixture
def write_current_file(tmp_path: Path) -> Callable[..., CurrentFile]:
    def _write(n_blocks: int = 2, name: str = "Gorsten-NS-s.dat") -> CurrentFile:
        firsts = [SNS_FIRST, NSN_FIRST]
        blocks = tuple(make_block(firsts[k % 2], N_ROWS, seed=k) for k in range(n_blocks))
        p = tmp_path / name
        p.write_text(render(blocks), encoding="utf-8")
        return CurrentFile(path=p, blocks=blocks)

    return _write


@pytest.fixture
def two_block_file(write_current_file) -> CurrentFile:
    return write_current_file(2)


@pytest.fixture
def one_block_file(write_current_file) -> CurrentFile:
    return write_current_file(1, name="single.dat")

"""Saving and loading puzzle grids as numpy files."""

from pathlib import Path

import numpy as np

GRID_DTYPE = np.int8
GRID_KEY = "grid"


def as_grid(arr: np.ndarray) -> np.ndarray:
    """Return arr as a 2-D int8 grid, refusing values that would not survive the cast."""
    grid = np.asarray(arr)
    if grid.ndim != 2:
        raise ValueError(f"A grid must be 2-D, got shape {grid.shape}")
    info = np.iinfo(GRID_DTYPE)
    if grid.size and (grid.min() < info.min or grid.max() > info.max):
        raise ValueError(f"Grid values must fit in {np.dtype(GRID_DTYPE).name}")
    return grid.astype(GRID_DTYPE, copy=False)


def export_ndarray(arr: np.ndarray, filepath: str | Path, compressed: bool = False) -> Path:
    """
    Save a puzzle grid to disk as int8 and return the path actually written.

    The extension of filepath is replaced: `.npy` by default, or `.npz` (holding
    the grid under the key 'grid') when compressed is True.
    """
    grid = as_grid(arr)
    path = Path(filepath)
    if compressed:
        path = path.with_suffix(".npz")
        np.savez_compressed(path, **{GRID_KEY: grid})
    else:
        path = path.with_suffix(".npy")
        np.save(path, grid)
    return path


def import_ndarray(filepath: str | Path) -> np.ndarray:
    """Load a puzzle grid written by `export_ndarray` (or any 2-D integer .npy/.npz)."""
    path = Path(filepath)
    if path.suffix == ".npz":
        with np.load(path) as data:
            key = GRID_KEY if GRID_KEY in data.files else data.files[0]
            return data[key]
    return np.load(path)

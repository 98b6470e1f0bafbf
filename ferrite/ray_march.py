"""Data for the ray march compute pass: push constants, terrain and palette."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

GRID_X = 512
GRID_Y = 192
GRID_Z = 512

WATER_LEVEL = 64
SNOW_LINE = 176

AIR = 0
STONE = 1
DIRT = 2
GRASS = 3
SAND = 4
SNOW = 5
WATER = 6

WORKGROUP_SIZE = 8

_PUSH_FORMAT = "<16f3ff3ff2f"


@dataclass(frozen=True, eq=False)
class RayMarchPushConstants:
    """Per-frame constants pushed to the ray march shader.

    ``inv_view_proj`` is a 4x4 matrix indexed [row, column]; it is written
    column by column, as the shader expects.
    """

    inv_view_proj: Any
    camera_pos: tuple[float, float, float]
    chunk_offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    jitter: tuple[float, float] = (0.0, 0.0)

    SIZE: ClassVar[int] = struct.calcsize(_PUSH_FORMAT)

    def __post_init__(self) -> None:
        matrix = np.asarray(self.inv_view_proj, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("inv_view_proj must be a 4x4 matrix")
        object.__setattr__(self, "inv_view_proj", matrix)
        for name, size in (("camera_pos", 3), ("chunk_offset", 3), ("jitter", 2)):
            value = tuple(float(c) for c in getattr(self, name))
            if len(value) != size:
                raise ValueError(f"{name} must have {size} components")
            object.__setattr__(self, name, value)

    def to_bytes(self) -> bytes:
        """The shader's little-endian layout, padding included."""
        columns = self.inv_view_proj.T.flatten()
        return struct.pack(
            _PUSH_FORMAT,
            *columns,
            *self.camera_pos,
            0.0,
            *self.chunk_offset,
            0.0,
            *self.jitter,
        )


def _heights(grid_x: int, grid_y: int, grid_z: int) -> np.ndarray:
    f32 = np.float32
    fx = np.arange(grid_x, dtype=f32)[None, :]
    fz = np.arange(grid_z, dtype=f32)[:, None]
    h = (
        f32(80.0)
        + f32(32.0) * np.sin(fx * f32(0.0125))
        + f32(24.0) * np.cos(fz * f32(0.0175))
        + f32(16.0) * np.sin(fx * f32(0.0075) + fz * f32(0.01))
        + f32(40.0) * (np.sin(fx * f32(0.005)) * np.cos(fz * f32(0.005)))
    )
    height = np.clip(np.trunc(h), 0, None).astype(np.int64)
    return np.minimum(height, grid_y - 1)


def generate_terrain(
    grid_x: int = GRID_X, grid_y: int = GRID_Y, grid_z: int = GRID_Z
) -> np.ndarray:
    """Rolling height-map terrain as a flat uint32 array.

    The voxel at (x, y, z) sits at index ``x + y*grid_x + z*grid_x*grid_y``.
    """
    if min(grid_x, grid_y, grid_z) <= 0:
        raise ValueError("grid dimensions must be positive")

    height = _heights(grid_x, grid_y, grid_z)[:, None, :]
    y = np.arange(grid_y)[None, :, None]
    stone_top = np.maximum(height - 24, 0)

    solid = y <= height
    conditions = [
        solid & (y < stone_top),
        solid & (y < height),
        solid & (height <= WATER_LEVEL),
        solid & (height > SNOW_LINE),
        solid,
        y <= WATER_LEVEL,
    ]
    choices = [STONE, DIRT, SAND, SNOW, GRASS, WATER]
    volume = np.select(conditions, choices, default=AIR).astype(np.uint32)
    return volume.reshape(-1)


def default_palette() -> np.ndarray:
    """256 RGBA colours; index 0 is air and unused."""
    palette = np.zeros((256, 4), dtype=np.float32)
    palette[STONE] = (0.5, 0.5, 0.5, 1.0)
    palette[DIRT] = (0.45, 0.3, 0.15, 1.0)
    palette[GRASS] = (0.2, 0.65, 0.15, 1.0)
    palette[SAND] = (0.85, 0.78, 0.55, 1.0)
    palette[SNOW] = (0.92, 0.95, 0.98, 1.0)
    palette[WATER] = (0.2, 0.4, 0.75, 0.9)
    return palette


def palette_bytes(palette: Iterable[Iterable[float]]) -> bytes:
    """Pack RGBA palette entries as little-endian float32."""
    array = np.asarray(palette, dtype="<f4")
    if array.ndim != 2 or array.shape[1] != 4:
        raise ValueError("palette must be a sequence of RGBA entries")
    return array.tobytes()


def dispatch_groups(width: int, height: int) -> tuple[int, int]:
    """Workgroup counts covering an image with 8x8 groups."""
    if width < 0 or height < 0:
        raise ValueError("image size must not be negative")
    return (
        (width + WORKGROUP_SIZE - 1) // WORKGROUP_SIZE,
        (height + WORKGROUP_SIZE - 1) // WORKGROUP_SIZE,
    )
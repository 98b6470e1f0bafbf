"""Per-frame state: TAA jitter and history, push constants and debug statistics."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ferrite.camera import CameraUniform, Transform
from ferrite.ray_march import GRID_X, GRID_Y, GRID_Z, RayMarchPushConstants

FOV_Y = math.pi / 4
NEAR_PLANE = 0.1
FAR_PLANE = 1000.0

JITTER_CYCLE = 8
VOXEL_COUNT = GRID_X * GRID_Y * GRID_Z
FRAME_TIME_WINDOW = 120
TITLE_INTERVAL = 0.25


def halton(index: int, base: int) -> float:
    """Element ``index`` (counted from zero) of the Halton sequence in ``base``."""
    if index < 0:
        raise ValueError(f"index must not be negative, got {index}")
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    result = 0.0
    f = 1.0 / base
    index += 1
    while index > 0:
        index, digit = divmod(index, base)
        result += f * digit
        f /= base
    return result


def taa_jitter(frame_number: int) -> tuple[float, float]:
    """Sub-pixel jitter in pixels from Halton(2, 3), an 8-sample cycle centred on 0."""
    i = frame_number % JITTER_CYCLE
    return halton(i, 2) - 0.5, halton(i, 3) - 0.5


def build_push_constants(
    transform: Transform, aspect: float, jitter: Iterable[float]
) -> tuple[RayMarchPushConstants, np.ndarray]:
    """Ray march push constants for the camera, and its current view-projection."""
    uniform = CameraUniform.from_transform_and_projection(
        transform, FOV_Y, aspect, NEAR_PLANE, FAR_PLANE
    )
    view_proj = uniform.proj @ uniform.view
    constants = RayMarchPushConstants(
        inv_view_proj=uniform.inv_view_proj,
        camera_pos=uniform.camera_pos,
        chunk_offset=(0.0, 0.0, 0.0),
        jitter=tuple(jitter),  # type: ignore[arg-type]
    )
    return constants, view_proj


def reprojection_matrix(prev_view_proj: Any, inv_view_proj: Any) -> np.ndarray:
    """Matrix taking current clip space to the previous frame's clip space."""
    prev = np.asarray(prev_view_proj, dtype=float)
    inv = np.asarray(inv_view_proj, dtype=float)
    if prev.shape != (4, 4) or inv.shape != (4, 4):
        raise ValueError("both matrices must be 4x4")
    return prev @ inv


@dataclass
class TaaState:
    """TAA state carried from one frame to the next."""

    frame_number: int = 0
    enabled: bool = True
    prev_view_proj: np.ndarray = field(default_factory=lambda: np.identity(4))

    def toggle(self) -> bool:
        """Switch TAA on or off and restart history; returns the new setting."""
        self.enabled = not self.enabled
        self.frame_number = 0
        return self.enabled

    def uses_resolve(self) -> bool:
        """Whether this frame resolves against history rather than seeding it."""
        return self.enabled and self.frame_number != 0

    def advance(self, view_proj: Any) -> None:
        """Remember this frame's view-projection and move to the next frame."""
        matrix = np.asarray(view_proj, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("view_proj must be a 4x4 matrix")
        self.prev_view_proj = matrix
        self.frame_number += 1


@dataclass
class DebugStats:
    """Recent frame times, summarised into a window title a few times a second."""

    frame_times: deque[float] = field(
        default_factory=lambda: deque(maxlen=FRAME_TIME_WINDOW)
    )
    update_timer: float = math.inf

    def update(
        self,
        dt: float,
        taa_enabled: bool | None,
        camera_position: Iterable[float] | None,
        width: int,
        height: int,
    ) -> str | None:
        """Record a frame; returns a new title when one is due, else None."""
        if dt > 0.0:
            self.frame_times.append(dt)

        self.update_timer += dt
        if self.update_timer < TITLE_INTERVAL:
            return None
        self.update_timer = 0.0

        avg_dt = sum(self.frame_times) / len(self.frame_times) if self.frame_times else 0.0
        fps = 1.0 / avg_dt if avg_dt > 0.0 else 0.0
        ms = avg_dt * 1000.0

        if camera_position is None:
            pos_str = "---"
        else:
            x, y, z = camera_position
            pos_str = f"({x:.1f}, {y:.1f}, {z:.1f})"

        if taa_enabled is None:
            taa_str = "TAA ---"
        else:
            taa_str = "TAA ON" if taa_enabled else "TAA OFF"

        return (
            f"Ferrite Engine | {fps:.0f} FPS ({ms:.1f}ms) | {VOXEL_COUNT} voxels, 1 chunk"
            f" | {taa_str} | {pos_str} | {width}x{height}"
        )
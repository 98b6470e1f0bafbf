"""Temporal anti-aliasing resolve: push constants and history ping-pong."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from ferrite.layouts import ImageBarrier, ImageLayout, transition_barrier

MAX_FRAMES_IN_FLIGHT = 2
DEFAULT_BLEND_FACTOR = 0.1

CURRENT_IMAGE = "current"
HISTORY_IMAGES = ("history_0", "history_1")

_PUSH_FORMAT = "<16ff3f"


@dataclass(frozen=True, eq=False)
class TaaResolvePushConstants:
    """Constants pushed to the resolve shader.

    ``reproj_matrix`` (previous view-projection times the current inverse
    view-projection) is a 4x4 matrix indexed [row, column], written column
    by column.
    """

    reproj_matrix: Any
    blend_factor: float = DEFAULT_BLEND_FACTOR

    SIZE: ClassVar[int] = struct.calcsize(_PUSH_FORMAT)

    def __post_init__(self) -> None:
        matrix = np.asarray(self.reproj_matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("reproj_matrix must be a 4x4 matrix")
        object.__setattr__(self, "reproj_matrix", matrix)
        object.__setattr__(self, "blend_factor", float(self.blend_factor))

    def to_bytes(self) -> bytes:
        """The shader's little-endian layout, padding included."""
        return struct.pack(
            _PUSH_FORMAT,
            *self.reproj_matrix.T.flatten(),
            self.blend_factor,
            0.0,
            0.0,
            0.0,
        )


def history_indices(frame_index: int) -> tuple[int, int]:
    """(read, write) history image indices for a frame in flight."""
    if frame_index not in range(MAX_FRAMES_IN_FLIGHT):
        raise ValueError(
            f"frame index must be in [0, {MAX_FRAMES_IN_FLIGHT}), got {frame_index}"
        )
    return 1 - frame_index, frame_index


def descriptor_bindings(frame_count: int = MAX_FRAMES_IN_FLIGHT) -> list[dict[int, str]]:
    """Image bound at each binding of each frame's descriptor set.

    Binding 0 is the ray march output, 1 the history read, 2 the history write.
    """
    if not 0 <= frame_count <= MAX_FRAMES_IN_FLIGHT:
        raise ValueError(
            f"frame count must be in [0, {MAX_FRAMES_IN_FLIGHT}], got {frame_count}"
        )
    sets = []
    for frame in range(frame_count):
        read, write = history_indices(frame)
        sets.append({0: CURRENT_IMAGE, 1: HISTORY_IMAGES[read], 2: HISTORY_IMAGES[write]})
    return sets


def resolve_transitions(frame_index: int) -> list[ImageBarrier]:
    """Barriers recorded by the resolve pass, in order, around its dispatch.

    The read history keeps its contents (it comes from TRANSFER_SRC, not
    UNDEFINED); the written history ends in TRANSFER_SRC, ready to blit.
    """
    read, write = history_indices(frame_index)
    read_image = HISTORY_IMAGES[read]
    write_image = HISTORY_IMAGES[write]
    return [
        transition_barrier(read_image, ImageLayout.TRANSFER_SRC_OPTIMAL, ImageLayout.GENERAL),
        transition_barrier(write_image, ImageLayout.UNDEFINED, ImageLayout.GENERAL),
        transition_barrier(write_image, ImageLayout.GENERAL, ImageLayout.TRANSFER_SRC_OPTIMAL),
    ]
"""Voxel-space coordinate types: world, chunk and chunk-local positions."""

from __future__ import annotations

from dataclasses import dataclass

CHUNK_SIZE = 32
"""Side length of a chunk in voxels."""

CHUNK_VOLUME = CHUNK_SIZE**3
"""Total voxels per chunk."""

VOXEL_SIZE_CM = 4.0
"""Voxel edge length in centimetres."""


@dataclass(frozen=True)
class WorldPos:
    """Absolute voxel-space position."""

    x: int
    y: int
    z: int

    def to_chunk_and_local(self) -> tuple[ChunkPos, LocalPos]:
        """Split into the containing chunk and the offset within that chunk."""
        chunk = ChunkPos(
            self.x // CHUNK_SIZE, self.y // CHUNK_SIZE, self.z // CHUNK_SIZE
        )
        local = LocalPos(
            self.x % CHUNK_SIZE, self.y % CHUNK_SIZE, self.z % CHUNK_SIZE
        )
        return chunk, local


@dataclass(frozen=True)
class ChunkPos:
    """Chunk-space position; each unit is one chunk."""

    x: int
    y: int
    z: int

    def world_origin(self) -> WorldPos:
        """World-space minimum corner of this chunk."""
        return WorldPos(
            self.x * CHUNK_SIZE, self.y * CHUNK_SIZE, self.z * CHUNK_SIZE
        )


@dataclass(frozen=True)
class LocalPos:
    """Position within a chunk, each component in [0, CHUNK_SIZE)."""

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        if not all(0 <= c < CHUNK_SIZE for c in (self.x, self.y, self.z)):
            raise ValueError(
                f"LocalPos components must be in [0, {CHUNK_SIZE}), "
                f"got ({self.x}, {self.y}, {self.z})"
            )

    def to_index(self) -> int:
        """Linear index into a flat chunk array (x + y*32 + z*32*32)."""
        return self.x + self.y * CHUNK_SIZE + self.z * CHUNK_SIZE * CHUNK_SIZE

    @classmethod
    def from_index(cls, index: int) -> LocalPos:
        """Reconstruct a local position from a linear index."""
        if not 0 <= index < CHUNK_VOLUME:
            raise ValueError(f"index {index} outside [0, {CHUNK_VOLUME})")
        rest, x = divmod(index, CHUNK_SIZE)
        z, y = divmod(rest, CHUNK_SIZE)
        return cls(x, y, z)
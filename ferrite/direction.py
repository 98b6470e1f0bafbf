"""The six cardinal directions and cube faces."""

from __future__ import annotations

from enum import IntEnum

from ferrite.coords import CHUNK_SIZE

_NORMALS = {
    0: (1.0, 0.0, 0.0),
    1: (-1.0, 0.0, 0.0),
    2: (0.0, 1.0, 0.0),
    3: (0.0, -1.0, 0.0),
    4: (0.0, 0.0, 1.0),
    5: (0.0, 0.0, -1.0),
}


class Face(IntEnum):
    """A cube face, identified by its outward axis direction."""

    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    def normal(self) -> tuple[float, float, float]:
        """Unit normal vector for this face."""
        return _NORMALS[self.value]

    def opposite(self) -> Face:
        """The face pointing the other way."""
        return Face(self.value ^ 1)

    def step(self, x: int, y: int, z: int) -> tuple[int, int, int] | None:
        """Move one voxel in this direction, or None if that leaves the chunk."""
        axis = self.value // 2
        delta = -1 if self.value % 2 else 1
        coords = [x, y, z]
        moved = coords[axis] + delta
        if not 0 <= moved < CHUNK_SIZE:
            return None
        coords[axis] = moved
        return coords[0], coords[1], coords[2]
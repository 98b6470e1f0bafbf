"""Morton (Z-order) encoding for 32x32x32 voxel grids.

Coordinates in [0, 32) are interleaved into a 15-bit code,
...z1y1x1z0y0x0, giving spatial locality.
"""

from __future__ import annotations


def _spread_bits(v: int) -> int:
    v &= 0x1F
    v = (v | (v << 8)) & 0x100F
    v = (v | (v << 4)) & 0x10C3
    v = (v | (v << 2)) & 0x1249
    return v


def _compact_bits(v: int) -> int:
    v &= 0x1249
    v = (v | (v >> 2)) & 0x10C3
    v = (v | (v >> 4)) & 0x100F
    v = (v | (v >> 8)) & 0x1F
    return v


def encode(x: int, y: int, z: int) -> int:
    """Encode (x, y, z), each in [0, 32), as a 15-bit Morton code."""
    if not all(0 <= c < 32 for c in (x, y, z)):
        raise ValueError(f"coordinates must be in [0, 32), got ({x}, {y}, {z})")
    return _spread_bits(x) | (_spread_bits(y) << 1) | (_spread_bits(z) << 2)


def decode(code: int) -> tuple[int, int, int]:
    """Decode a Morton code back to (x, y, z)."""
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"code must fit in 16 bits, got {code}")
    return _compact_bits(code), _compact_bits(code >> 1), _compact_bits(code >> 2)
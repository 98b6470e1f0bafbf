"""Voxel palette indices and material properties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in [0, 255], got {value}")


@dataclass(frozen=True)
class Voxel:
    """A voxel is a palette index; 0 is air."""

    value: int = 0

    AIR: ClassVar[Voxel]

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"voxel index must fit in 16 bits, got {self.value}")

    def is_air(self) -> bool:
        return self.value == 0

    def is_solid(self) -> bool:
        return self.value != 0


Voxel.AIR = Voxel(0)


@dataclass(frozen=True)
class Material:
    """Material properties for a voxel palette entry."""

    albedo: tuple[int, int, int] = (128, 128, 128)
    roughness: int = 200
    metallic: int = 0
    emission: int = 0

    def __post_init__(self) -> None:
        if len(self.albedo) != 3:
            raise ValueError("albedo must have three components")
        for channel in self.albedo:
            _check_byte("albedo", channel)
        _check_byte("roughness", self.roughness)
        _check_byte("metallic", self.metallic)
        _check_byte("emission", self.emission)

    @classmethod
    def color(cls, r: int, g: int, b: int) -> Material:
        """A plain coloured, non-metallic, non-emissive material."""
        return cls(albedo=(r, g, b))
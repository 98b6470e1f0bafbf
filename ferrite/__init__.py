"""Voxel engine core: coordinates, Morton codes, camera, terrain and frame planning."""

__version__ = "0.1.0"
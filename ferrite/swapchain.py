"""Choice of swapchain format, extent and image count from surface capabilities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

FORMAT_B8G8R8A8_SRGB = 50
COLOR_SPACE_SRGB_NONLINEAR = 0
PRESENT_MODE_FIFO = 2

SPECIAL_EXTENT = 0xFFFFFFFF
"""A current extent width of this value lets the swapchain choose its own size."""


@dataclass(frozen=True)
class Extent2D:
    """Width and height in pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class SurfaceFormat:
    """A pixel format and colour space pair offered by a surface."""

    format: int
    color_space: int


@dataclass(frozen=True)
class SurfaceCapabilities:
    """Limits a surface places on swapchains created for it.

    A ``max_image_count`` of 0 means there is no upper limit.
    """

    min_image_count: int
    max_image_count: int
    current_extent: Extent2D
    min_image_extent: Extent2D
    max_image_extent: Extent2D


@dataclass(frozen=True)
class SwapchainConfig:
    """The settings chosen for a new swapchain."""

    format: SurfaceFormat
    extent: Extent2D
    image_count: int
    present_mode: int = PRESENT_MODE_FIFO


PREFERRED_FORMAT = SurfaceFormat(FORMAT_B8G8R8A8_SRGB, COLOR_SPACE_SRGB_NONLINEAR)


def choose_surface_format(formats: Sequence[SurfaceFormat]) -> SurfaceFormat:
    """sRGB BGRA8 with non-linear sRGB colour space if offered, else the first format."""
    if not formats:
        raise ValueError("surface offers no formats")
    return next((f for f in formats if f == PREFERRED_FORMAT), formats[0])


def _clamp(value: int, low: int, high: int) -> int:
    if low > high:
        raise ValueError(f"invalid extent range [{low}, {high}]")
    return min(max(value, low), high)


def choose_extent(capabilities: SurfaceCapabilities, width: int, height: int) -> Extent2D:
    """The surface's current extent, or the window size clamped to the allowed range."""
    current = capabilities.current_extent
    if current.width != SPECIAL_EXTENT:
        return current
    return Extent2D(
        _clamp(width, capabilities.min_image_extent.width, capabilities.max_image_extent.width),
        _clamp(height, capabilities.min_image_extent.height, capabilities.max_image_extent.height),
    )


def choose_image_count(capabilities: SurfaceCapabilities) -> int:
    """One more than the minimum, capped at the maximum when there is one."""
    count = capabilities.min_image_count + 1
    if capabilities.max_image_count > 0:
        count = min(count, capabilities.max_image_count)
    return count


def configure_swapchain(
    capabilities: SurfaceCapabilities,
    formats: Sequence[SurfaceFormat],
    width: int,
    height: int,
) -> SwapchainConfig:
    """All swapchain settings for a window of the given size, with FIFO presentation."""
    return SwapchainConfig(
        format=choose_surface_format(formats),
        extent=choose_extent(capabilities, width, height),
        image_count=choose_image_count(capabilities),
        present_mode=PRESENT_MODE_FIFO,
    )
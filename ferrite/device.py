"""Scoring of physical GPUs and the choice of queue families on the chosen one."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

SWAPCHAIN_EXTENSION = "VK_KHR_swapchain"
ACCELERATION_STRUCTURE_EXTENSION = "VK_KHR_acceleration_structure"
RAY_QUERY_EXTENSION = "VK_KHR_ray_query"

DISCRETE_SCORE = 1000
INTEGRATED_SCORE = 100
API_1_3_SCORE = 500
API_1_2_SCORE = 200
RAY_TRACING_SCORE = 300
DEDICATED_COMPUTE_SCORE = 50


class DeviceType(IntEnum):
    """Kinds of physical device, numbered as the graphics API numbers them."""

    OTHER = 0
    INTEGRATED_GPU = 1
    DISCRETE_GPU = 2
    VIRTUAL_GPU = 3
    CPU = 4


class NoSuitableDeviceError(RuntimeError):
    """Raised when no physical device can run the renderer."""


@dataclass(frozen=True)
class QueueFamily:
    """Capabilities of one queue family of a physical device."""

    graphics: bool = False
    compute: bool = False
    transfer: bool = False
    present: bool = False


@dataclass(frozen=True)
class DeviceInfo:
    """What the renderer needs to know about a physical device to rank it."""

    name: str
    device_type: DeviceType
    api_version: int
    queue_families: Sequence[QueueFamily] = ()
    extensions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "device_type", DeviceType(self.device_type))
        object.__setattr__(self, "queue_families", tuple(self.queue_families))
        object.__setattr__(self, "extensions", frozenset(self.extensions))


@dataclass(frozen=True)
class DeviceCandidate:
    """A usable device with its chosen queue families and its score."""

    info: DeviceInfo
    graphics_family: int
    compute_family: int
    transfer_family: int
    has_rt: bool
    score: int


def make_api_version(variant: int, major: int, minor: int, patch: int) -> int:
    """Pack an API version the way the graphics API does."""
    for name, value, limit in (
        ("variant", variant, 0x7),
        ("major", major, 0x7F),
        ("minor", minor, 0x3FF),
        ("patch", patch, 0xFFF),
    ):
        if not 0 <= value <= limit:
            raise ValueError(f"{name} must be in [0, {limit}], got {value}")
    return (variant << 29) | (major << 22) | (minor << 12) | patch


def _api_major(version: int) -> int:
    return (version >> 22) & 0x7F


def _api_minor(version: int) -> int:
    return (version >> 12) & 0x3FF


def _pick_families(families: Sequence[QueueFamily]) -> tuple[int, int, int] | None:
    graphics = compute = transfer = None
    for index, family in enumerate(families):
        if family.graphics and family.present and graphics is None:
            graphics = index
        if family.compute and not family.graphics and compute is None:
            compute = index
        if (
            family.transfer
            and not family.graphics
            and not family.compute
            and transfer is None
        ):
            transfer = index
    if graphics is None:
        return None
    return (
        graphics,
        graphics if compute is None else compute,
        graphics if transfer is None else transfer,
    )


def evaluate_device(info: DeviceInfo) -> DeviceCandidate | None:
    """Score a device, or return None when it cannot be used.

    A device needs a graphics queue that can present, swapchain support and
    at least API version 1.2.
    """
    families = _pick_families(info.queue_families)
    if families is None:
        return None
    graphics, compute, transfer = families

    if SWAPCHAIN_EXTENSION not in info.extensions:
        return None

    has_rt = {ACCELERATION_STRUCTURE_EXTENSION, RAY_QUERY_EXTENSION} <= info.extensions

    score = 0
    if info.device_type is DeviceType.DISCRETE_GPU:
        score += DISCRETE_SCORE
    elif info.device_type is DeviceType.INTEGRATED_GPU:
        score += INTEGRATED_SCORE

    major, minor = _api_major(info.api_version), _api_minor(info.api_version)
    if major >= 1 and minor >= 3:
        score += API_1_3_SCORE
    elif minor >= 2:
        score += API_1_2_SCORE
    else:
        return None

    if has_rt:
        score += RAY_TRACING_SCORE
    if compute != graphics:
        score += DEDICATED_COMPUTE_SCORE

    return DeviceCandidate(info, graphics, compute, transfer, has_rt, score)


def select_device(devices: Iterable[DeviceInfo]) -> DeviceCandidate:
    """The highest-scoring usable device; the earliest wins a tie."""
    devices = list(devices)
    if not devices:
        raise NoSuitableDeviceError("No Vulkan-capable GPU found")
    candidates = [c for c in map(evaluate_device, devices) if c is not None]
    if not candidates:
        raise NoSuitableDeviceError(
            "No suitable Vulkan GPU found (need graphics + compute + presentation support)"
        )
    return max(candidates, key=lambda c: c.score)


def unique_queue_families(graphics: int, compute: int, transfer: int) -> list[int]:
    """Queue family indices without repeats, in first-seen order."""
    return list(dict.fromkeys((graphics, compute, transfer)))
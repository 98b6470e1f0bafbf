"""Image layouts and the access masks and pipeline stages used to move between them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Hashable


class ImageLayout(IntEnum):
    """Image layouts, numbered as the graphics API numbers them."""

    UNDEFINED = 0
    GENERAL = 1
    COLOR_ATTACHMENT_OPTIMAL = 2
    DEPTH_STENCIL_ATTACHMENT_OPTIMAL = 3
    DEPTH_STENCIL_READ_ONLY_OPTIMAL = 4
    SHADER_READ_ONLY_OPTIMAL = 5
    TRANSFER_SRC_OPTIMAL = 6
    TRANSFER_DST_OPTIMAL = 7
    PREINITIALIZED = 8
    PRESENT_SRC_KHR = 1000001002


class AccessFlags(IntFlag):
    """Memory access kinds a barrier waits for or makes visible."""

    NONE = 0
    SHADER_READ = 0x20
    SHADER_WRITE = 0x40
    TRANSFER_READ = 0x800
    TRANSFER_WRITE = 0x1000


class PipelineStage(IntFlag):
    """Pipeline stages a barrier synchronises."""

    TOP_OF_PIPE = 0x1
    COMPUTE_SHADER = 0x800
    TRANSFER = 0x1000
    BOTTOM_OF_PIPE = 0x2000
    ALL_COMMANDS = 0x10000


@dataclass(frozen=True)
class ImageBarrier:
    """A layout transition of the first mip level and array layer of a colour image."""

    image: Hashable
    old_layout: ImageLayout
    new_layout: ImageLayout
    src_access: AccessFlags
    dst_access: AccessFlags
    src_stage: PipelineStage
    dst_stage: PipelineStage


_SHADER_RW = AccessFlags.SHADER_READ | AccessFlags.SHADER_WRITE

_LAYOUT_USAGE: dict[ImageLayout, tuple[AccessFlags, PipelineStage]] = {
    ImageLayout.UNDEFINED: (AccessFlags.NONE, PipelineStage.TOP_OF_PIPE),
    ImageLayout.GENERAL: (_SHADER_RW, PipelineStage.COMPUTE_SHADER),
    ImageLayout.TRANSFER_SRC_OPTIMAL: (AccessFlags.TRANSFER_READ, PipelineStage.TRANSFER),
    ImageLayout.TRANSFER_DST_OPTIMAL: (AccessFlags.TRANSFER_WRITE, PipelineStage.TRANSFER),
    ImageLayout.PRESENT_SRC_KHR: (AccessFlags.NONE, PipelineStage.BOTTOM_OF_PIPE),
}


def access_and_stage_for_layout(layout: ImageLayout) -> tuple[AccessFlags, PipelineStage]:
    """The access mask and pipeline stage that go with an image layout."""
    return _LAYOUT_USAGE.get(ImageLayout(layout), (_SHADER_RW, PipelineStage.ALL_COMMANDS))


def transition_barrier(
    image: Hashable, old_layout: ImageLayout, new_layout: ImageLayout
) -> ImageBarrier:
    """The barrier that moves ``image`` from ``old_layout`` to ``new_layout``."""
    old_layout = ImageLayout(old_layout)
    new_layout = ImageLayout(new_layout)
    src_access, src_stage = access_and_stage_for_layout(old_layout)
    dst_access, dst_stage = access_and_stage_for_layout(new_layout)
    return ImageBarrier(
        image=image,
        old_layout=old_layout,
        new_layout=new_layout,
        src_access=src_access,
        dst_access=dst_access,
        src_stage=src_stage,
        dst_stage=dst_stage,
    )
import pytest

from ferrite.device import (
    ACCELERATION_STRUCTURE_EXTENSION,
    DEDICATED_COMPUTE_SCORE,
    DISCRETE_SCORE,
    INTEGRATED_SCORE,
    RAY_QUERY_EXTENSION,
    RAY_TRACING_SCORE,
    SWAPCHAIN_EXTENSION,
    DeviceInfo,
    DeviceType,
    NoSuitableDeviceError,
    QueueFamily,
    evaluate_device,
    make_api_version,
    select_device,
    unique_queue_families,
)

V13 = make_api_version(0, 1, 3, 0)
V12 = make_api_version(0, 1, 2, 0)
V11 = make_api_version(0, 1, 1, 0)

ALL_QUEUE = QueueFamily(graphics=True, compute=True, transfer=True, present=True)
COMPUTE_ONLY = QueueFamily(compute=True, transfer=True)
TRANSFER_ONLY = QueueFamily(transfer=True)


def make_info(
    name="gpu",
    device_type=DeviceType.DISCRETE_GPU,
    api_version=V13,
    families=(ALL_QUEUE,),
    extensions=(SWAPCHAIN_EXTENSION,),
):
    return DeviceInfo(name, device_type, api_version, families, frozenset(extensions))


def test_api_version_fields_decode():
    version = make_api_version(0, 1, 3, 7)
    assert version >> 22 == 1
    assert (version >> 12) & 0x3FF == 3
    assert version & 0xFFF == 7


def test_api_version_ordering():
    assert V13 > V12 > V11


def test_api_version_rejects_out_of_range():
    with pytest.raises(ValueError):
        make_api_version(0, 1, 1024, 0)


def test_single_family_used_for_all_queues():
    candidate = evaluate_device(make_info())
    assert (candidate.graphics_family, candidate.compute_family, candidate.transfer_family) == (0, 0, 0)


def test_dedicated_queues_are_preferred():
    candidate = evaluate_device(make_info(families=(ALL_QUEUE, COMPUTE_ONLY, TRANSFER_ONLY)))
    assert candidate.graphics_family == 0
    assert candidate.compute_family == 1
    assert candidate.transfer_family == 2


def test_dedicated_compute_adds_bonus():
    shared = evaluate_device(make_info())
    dedicated = evaluate_device(make_info(families=(ALL_QUEUE, COMPUTE_ONLY)))
    assert dedicated.score - shared.score == DEDICATED_COMPUTE_SCORE


def test_graphics_family_must_present():
    no_present = QueueFamily(graphics=True, compute=True, transfer=True)
    assert evaluate_device(make_info(families=(no_present,))) is None


def test_graphics_family_can_come_later():
    no_present = QueueFamily(graphics=True, compute=True)
    candidate = evaluate_device(make_info(families=(no_present, ALL_QUEUE)))
    assert candidate.graphics_family == 1


def test_swapchain_required():
    assert evaluate_device(make_info(extensions=())) is None


def test_old_api_rejected():
    assert evaluate_device(make_info(api_version=V11)) is None


def test_newer_api_scores_higher():
    assert evaluate_device(make_info(api_version=V13)).score > evaluate_device(
        make_info(api_version=V12)
    ).score


def test_device_type_bonuses():
    other = evaluate_device(make_info(device_type=DeviceType.OTHER)).score
    integrated = evaluate_device(make_info(device_type=DeviceType.INTEGRATED_GPU)).score
    discrete = evaluate_device(make_info(device_type=DeviceType.DISCRETE_GPU)).score
    assert integrated - other == INTEGRATED_SCORE
    assert discrete - other == DISCRETE_SCORE


def test_rt_needs_both_extensions():
    partial = evaluate_device(
        make_info(extensions=(SWAPCHAIN_EXTENSION, ACCELERATION_STRUCTURE_EXTENSION))
    )
    full = evaluate_device(
        make_info(
            extensions=(SWAPCHAIN_EXTENSION, ACCELERATION_STRUCTURE_EXTENSION, RAY_QUERY_EXTENSION)
        )
    )
    assert partial.has_rt is False
    assert full.has_rt is True
    assert full.score - partial.score == RAY_TRACING_SCORE


def test_select_prefers_discrete():
    devices = [
        make_info("integrated", DeviceType.INTEGRATED_GPU),
        make_info("discrete", DeviceType.DISCRETE_GPU),
    ]
    assert select_device(devices).info.name == "discrete"


def test_select_tie_keeps_first():
    devices = [make_info("first"), make_info("second")]
    assert select_device(devices).info.name == "first"


def test_select_skips_unusable():
    devices = [make_info("broken", extensions=()), make_info("ok", DeviceType.CPU)]
    assert select_device(devices).info.name == "ok"


def test_select_empty_raises():
    with pytest.raises(NoSuitableDeviceError):
        select_device([])


def test_select_none_suitable_raises():
    with pytest.raises(NoSuitableDeviceError):
        select_device([make_info(extensions=())])


@pytest.mark.parametrize(
    "families, expected",
    [
        ((0, 0, 0), [0]),
        ((0, 1, 0), [0, 1]),
        ((0, 1, 2), [0, 1, 2]),
        ((2, 2, 1), [2, 1]),
    ],
)
def test_unique_queue_families(families, expected):
    assert unique_queue_families(*families) == expected
import numpy as np
import pytest

from ferrite.camera import Transform
from ferrite.frame import (
    DebugStats,
    TaaState,
    build_push_constants,
    halton,
    reprojection_matrix,
    taa_jitter,
)


def test_halton_first_base_two():
    assert halton(0, 2) == 0.5


@pytest.mark.parametrize("base", [2, 3, 5])
def test_halton_values_in_unit_interval_and_distinct(base):
    values = [halton(i, base) for i in range(50)]
    assert all(0.0 < v < 1.0 for v in values)
    assert len(set(values)) == len(values)


def test_halton_rejects_bad_arguments():
    with pytest.raises(ValueError):
        halton(-1, 2)
    with pytest.raises(ValueError):
        halton(0, 1)


def test_jitter_is_centred_and_periodic():
    for n in range(40):
        jx, jy = taa_jitter(n)
        assert -0.5 <= jx < 0.5
        assert -0.5 <= jy < 0.5
        assert taa_jitter(n) == taa_jitter(n + 8)


def test_jitter_cycle_has_eight_distinct_samples():
    samples = {taa_jitter(n) for n in range(8)}
    assert len(samples) == 8


def test_jitter_frame_zero_x_is_centre():
    assert taa_jitter(0)[0] == 0.0


def test_build_push_constants_inverts_view_proj():
    transform = Transform.from_translation((1.0, 2.0, 3.0)).looking_at(
        (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    )
    pc, view_proj = build_push_constants(transform, 16 / 9, (0.25, -0.125))
    assert np.allclose(view_proj @ pc.inv_view_proj, np.identity(4), atol=1e-6)
    assert pc.camera_pos == (1.0, 2.0, 3.0)
    assert pc.jitter == (0.25, -0.125)
    assert pc.chunk_offset == (0.0, 0.0, 0.0)


def test_reprojection_of_same_frame_is_identity():
    transform = Transform.from_translation((5.0, 0.0, -2.0))
    pc, view_proj = build_push_constants(transform, 1.0, (0.0, 0.0))
    reproj = reprojection_matrix(view_proj, pc.inv_view_proj)
    assert np.allclose(reproj, np.identity(4), atol=1e-6)


def test_reprojection_rejects_wrong_shape():
    with pytest.raises(ValueError):
        reprojection_matrix(np.identity(3), np.identity(4))


def test_taa_state_defaults_and_resolve():
    state = TaaState()
    assert state.enabled
    assert state.frame_number == 0
    assert np.array_equal(state.prev_view_proj, np.identity(4))
    assert not state.uses_resolve()
    matrix = np.arange(16, dtype=float).reshape(4, 4)
    state.advance(matrix)
    assert state.frame_number == 1
    assert np.array_equal(state.prev_view_proj, matrix)
    assert state.uses_resolve()


def test_taa_toggle_resets_history():
    state = TaaState()
    state.advance(np.identity(4))
    state.advance(np.identity(4))
    assert state.toggle() is False
    assert state.frame_number == 0
    state.advance(np.identity(4))
    assert not state.uses_resolve()
    assert state.toggle() is True
    assert state.frame_number == 0


def test_taa_advance_rejects_wrong_shape():
    with pytest.raises(ValueError):
        TaaState().advance(np.identity(2))


def test_debug_stats_first_update_gives_title():
    stats = DebugStats()
    title = stats.update(0.5, True, (1.0, 2.0, 3.0), 1280, 720)
    assert title == (
        f"Ferrite Engine | 2 FPS (500.0ms) | {512 * 192 * 512} voxels, 1 chunk"
        " | TAA ON | (1.0, 2.0, 3.0) | 1280x720"
    )


def test_debug_stats_throttles_updates():
    stats = DebugStats()
    assert stats.update(0.01, False, None, 800, 600) is not None
    assert stats.update(0.1, False, None, 800, 600) is None
    assert stats.update(0.1, False, None, 800, 600) is None
    title = stats.update(0.1, False, None, 800, 600)
    assert title is not None
    assert "TAA OFF" in title
    assert "| --- |" in title
    assert title.endswith("800x600")


def test_debug_stats_without_taa_state():
    stats = DebugStats()
    title = stats.update(0.0, None, None, 1, 1)
    assert "TAA ---" in title
    assert "0 FPS" in title
    assert len(stats.frame_times) == 0


def test_debug_stats_keeps_window_of_frames():
    stats = DebugStats()
    for _ in range(200):
        stats.update(0.016, True, None, 10, 10)
    assert len(stats.frame_times) == 120
    assert stats.update_timer < 0.25
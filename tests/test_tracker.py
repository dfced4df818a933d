import numpy as np
import pytest

from face_overlay.assets import OverlayAsset
from face_overlay.landmarks import LEFT_EYE
from face_overlay.tracker import OverlayTracker

from conftest import make_asset, make_landmarks


def test_first_frame_emits_raw_placement(landmarks, asset):
    tracker = OverlayTracker(asset)
    instruction = tracker.process_landmarks(landmarks)
    assert instruction is not None
    assert (instruction.center_x, instruction.center_y) == pytest.approx((120.0, 195.0))
    assert (instruction.width, instruction.height) == pytest.approx((100.0, 40.0))
    assert instruction.angle == pytest.approx(0.0)
    assert instruction.opacity == pytest.approx(0.9)
    assert tracker.placement is not None


def test_no_asset_means_no_draw_and_no_state(landmarks):
    tracker = OverlayTracker()
    assert tracker.process_landmarks(landmarks) is None
    assert tracker.placement is None
    assert tracker.eye_centers is not None


def test_unloaded_asset_means_no_draw(landmarks):
    tracker = OverlayTracker(OverlayAsset(name="pending"))
    assert tracker.process_landmarks(landmarks) is None
    assert tracker.placement is None


def test_missing_landmark_leaves_placement_unchanged(landmarks, asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(landmarks)
    before = tracker.placement

    broken = list(make_landmarks((300, 300), (340, 300)))
    broken[LEFT_EYE["top_lid"]] = None
    assert tracker.process_landmarks(broken) is None
    assert tracker.placement == before


def test_style_switch_keeps_smoothed_geometry(landmarks, asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(make_landmarks((200, 200), (240, 200)))
    tracker.process_landmarks(landmarks)
    before = tracker.placement

    tracker.set_asset(make_asset(100, 100, name="square"))
    assert tracker.placement == before

    instruction = tracker.process_landmarks(landmarks)
    assert instruction.center_x == pytest.approx(before.center_x * 0.6 + 120.0 * 0.4)
    assert instruction.height == pytest.approx(instruction.width)


def test_reset_clears_state(landmarks, asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(landmarks)
    tracker.reset()
    assert tracker.placement is None
    assert tracker.eye_centers is None


def test_only_first_face_is_tracked(asset):
    tracker = OverlayTracker(asset)
    faces = [make_landmarks((100, 200), (140, 200)), make_landmarks((400, 200), (440, 200))]
    instructions = tracker.process_faces(faces)
    assert len(instructions) == 1
    assert instructions[0].center_x == pytest.approx(120.0)


def test_no_faces_draws_nothing(asset):
    tracker = OverlayTracker(asset)
    assert tracker.process_faces([]) == []
    assert tracker.placement is None


def test_smoothing_over_stream(asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(make_landmarks((100, 200), (140, 200)))
    target = make_landmarks((110, 200), (150, 200))
    xs = [tracker.process_landmarks(target).center_x for _ in range(10)]
    assert all(np.diff(xs) > 0)
    assert xs[-1] == pytest.approx(130.0, abs=0.1)


def test_rejected_frame_clears_debug_geometry(landmarks, asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(landmarks)
    assert tracker.eye_centers is not None
    assert tracker.raw_placement is not None

    broken = list(landmarks)
    broken[LEFT_EYE["top_lid"]] = None
    tracker.process_landmarks(broken)
    assert tracker.eye_centers is None
    assert tracker.raw_placement is None


def test_unloaded_asset_clears_raw_placement(landmarks, asset):
    tracker = OverlayTracker(asset)
    tracker.process_landmarks(landmarks)
    tracker.set_asset(None)
    tracker.process_landmarks(landmarks)
    assert tracker.raw_placement is None
    assert tracker.eye_centers is not None


def test_tracker_matches_pure_solve(asset):
    from face_overlay.placement import solve_placement

    tracker = OverlayTracker(asset)
    expected = None
    for left, right in [((100, 200), (140, 200)), ((110, 205), (152, 210)), ((90, 198), (128, 196))]:
        tracker.process_landmarks(make_landmarks(left, right))
        expected = solve_placement(np.array(left, float), np.array(right, float), asset, expected)
        assert tracker.placement == expected

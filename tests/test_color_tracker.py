"""Tests for per-marker tracking on synthetic HSV frames.

Verifies that:
- The largest blob in the color window is found with its enclosing circle
- Small speckles are removed by the opening
- A miss carries the previous reading forward as STALE
"""

import cv2
import numpy as np
import pytest

from marker_engine.api.frame_data import ReadingSource, TrackReading
from marker_engine.calib.color_calibrator import ColorWindow
from marker_engine.detect.color_tracker import MarkerTracker, annotate, largest_circle, mask_for_window

GREEN = (60, 200, 200)
BLUE = (120, 200, 200)


def hsv_frame(*blobs):
    """Blank 320x240 HSV frame with filled circles given as (center, radius, hsv)."""
    hsv = np.zeros((240, 320, 3), dtype=np.uint8)
    for center, radius, color in blobs:
        cv2.circle(hsv, center, radius, color, -1)
    return hsv


class TestMask:
    """Segmentation and denoising."""

    def test_speckle_is_removed(self) -> None:
        hsv = hsv_frame()
        hsv[50:53, 250:253] = GREEN
        mask = mask_for_window(hsv, ColorWindow.from_sample(GREEN))
        assert cv2.countNonZero(mask) == 0

    def test_blob_survives(self) -> None:
        hsv = hsv_frame(((100, 120), 20, GREEN))
        mask = mask_for_window(hsv, ColorWindow.from_sample(GREEN))
        assert mask[120, 100] == 255

    def test_other_colors_are_excluded(self) -> None:
        hsv = hsv_frame(((100, 120), 20, BLUE))
        mask = mask_for_window(hsv, ColorWindow.from_sample(GREEN))
        assert cv2.countNonZero(mask) == 0

    def test_empty_mask_has_no_circle(self) -> None:
        assert largest_circle(np.zeros((20, 20), dtype=np.uint8)) is None


class TestTrack:
    """Single-marker readings."""

    def test_found_reading_matches_blob(self) -> None:
        tracker = MarkerTracker()
        hsv = hsv_frame(((100, 120), 20, GREEN))
        r = tracker.track(hsv, ColorWindow.from_sample(GREEN), TrackReading.unknown())

        assert r.source is ReadingSource.FOUND
        assert r.x == pytest.approx(100, abs=1.5)
        assert r.y == pytest.approx(120, abs=1.5)
        assert r.radius == pytest.approx(20, abs=3)

    def test_largest_blob_wins(self) -> None:
        tracker = MarkerTracker()
        hsv = hsv_frame(((250, 180), 10, GREEN), ((80, 80), 25, GREEN))
        r = tracker.track(hsv, ColorWindow.from_sample(GREEN), TrackReading.unknown())

        assert r.x == pytest.approx(80, abs=1.5)
        assert r.y == pytest.approx(80, abs=1.5)

    def test_miss_keeps_previous_as_stale(self) -> None:
        tracker = MarkerTracker()
        previous = TrackReading(42.0, 17.0, 9.0, ReadingSource.FOUND)
        r = tracker.track(hsv_frame(), ColorWindow.from_sample(GREEN), previous)

        assert r.source is ReadingSource.STALE
        assert (r.x, r.y, r.radius) == (42.0, 17.0, 9.0)

    def test_repeated_misses_stay_stale(self) -> None:
        tracker = MarkerTracker()
        window = ColorWindow.from_sample(GREEN)
        r = TrackReading(42.0, 17.0, 9.0, ReadingSource.FOUND)
        for _ in range(3):
            r = tracker.track(hsv_frame(), window, r)
        assert r.source is ReadingSource.STALE
        assert r.centroid == (42.0, 17.0)

    def test_miss_before_any_find_stays_unknown(self) -> None:
        tracker = MarkerTracker()
        r = tracker.track(hsv_frame(), ColorWindow.from_sample(GREEN), TrackReading.unknown())
        assert r.source is ReadingSource.UNKNOWN
        assert r.centroid == (0.0, 0.0)

    def test_no_window_carries_previous(self) -> None:
        """Before calibration there is nothing to segment."""
        tracker = MarkerTracker()
        previous = TrackReading(1.0, 2.0, 3.0, ReadingSource.FOUND)
        r = tracker.track(hsv_frame(((100, 120), 20, GREEN)), None, previous)

        assert r.source is ReadingSource.STALE
        assert tracker.last_masks[0] is None

    def test_mask_is_kept_for_preview(self) -> None:
        tracker = MarkerTracker()
        tracker.track(hsv_frame(((100, 120), 20, GREEN)), ColorWindow.from_sample(GREEN),
                      TrackReading.unknown(), index=1)
        assert tracker.last_masks[1] is not None
        assert tracker.last_masks[1].shape == (240, 320)


class TestTrackAll:
    """Both markers in one frame."""

    def test_each_marker_uses_its_own_window(self) -> None:
        tracker = MarkerTracker()
        hsv = hsv_frame(((60, 120), 20, GREEN), ((260, 60), 20, BLUE))
        windows = [ColorWindow.from_sample(GREEN), ColorWindow.from_sample(BLUE)]
        r0, r1 = tracker.track_all(hsv, windows, [TrackReading.unknown()] * 2)

        assert r0.found and r1.found
        assert r0.x == pytest.approx(60, abs=1.5)
        assert r1.x == pytest.approx(260, abs=1.5)
        assert r1.y == pytest.approx(60, abs=1.5)


class TestAnnotate:
    """Camera view overlay."""

    def test_found_marker_is_circled(self) -> None:
        frame = np.zeros((240, 320, 3), dtype=np.uint8)
        annotate(frame, [TrackReading(100.0, 120.0, 20.0, ReadingSource.FOUND), TrackReading.unknown()])
        # red (BGR) outline on marker 0
        assert frame[120, 120].tolist() == [0, 0, 255]

    def test_stale_marker_is_not_drawn(self) -> None:
        frame = np.zeros((240, 320, 3), dtype=np.uint8)
        annotate(frame, [TrackReading(100.0, 120.0, 20.0, ReadingSource.STALE)])
        assert not frame.any()

"""Unit tests for path edit validation."""

import pytest

from ledlayout.config import ValidationOptions
from ledlayout.core.validator import (
    escapes_bounds,
    sample_contour_points,
    segment_stats,
    validate_path_edit,
)
from ledlayout.domain import BoundingBox, Contour, Point, RejectReason, Severity

SQUARE = "M0 0 H100 V100 H0 Z"
SMALL_SQUARE = "M0 0 H10 V10 H0 Z"
FIGURE_EIGHT = "M0 0 L100 100 L100 0 L0 100 Z"
WIDE = "M0 0 H200 V100 H0 Z"


class TestSampling:
    """Tests for contour resampling."""

    def test_closed_contour_drops_wraparound(self):
        contour = Contour(points=(Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)))
        points = sample_contour_points(contour, ValidationOptions())
        assert len(points) == 50
        assert points[0] == Point(0, 0)
        assert points[-1] != points[0]

    def test_open_contour_keeps_endpoint(self):
        contour = Contour(points=(Point(0, 0), Point(100, 0)), closed=False)
        points = sample_contour_points(contour, ValidationOptions())
        # ceil(100 / 8) = 13 is below the 24 sample minimum
        assert len(points) == 25
        assert points[-1] == Point(100, 0)

    def test_sample_count_capped(self):
        contour = Contour(points=(Point(0, 0), Point(5000, 0), Point(5000, 5000), Point(0, 5000)))
        points = sample_contour_points(contour, ValidationOptions())
        assert len(points) == 220

    def test_overflowing_length_returns_vertices(self):
        contour = Contour(points=(Point(0, 0), Point(1e308, 0), Point(1e308, 1e308), Point(0, 1e308)))
        assert sample_contour_points(contour, ValidationOptions()) == list(contour.points)

    def test_zero_length(self):
        contour = Contour(points=(Point(3, 3), Point(3, 3)))
        assert sample_contour_points(contour, ValidationOptions()) == [Point(3, 3), Point(3, 3)]


class TestSegmentStats:
    """Tests for segment_stats."""

    def test_closed(self):
        points = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        stats = segment_stats(points, closed=True)
        assert stats.total == 40
        assert stats.max_segment == 10
        assert stats.median_segment == 10

    def test_open(self):
        stats = segment_stats([Point(0, 0), Point(3, 4), Point(3, 10)], closed=False)
        assert stats.total == 11
        assert stats.max_segment == 6
        assert stats.median_segment == 6

    def test_too_few_points(self):
        assert segment_stats([Point(0, 0)], closed=True).total == 0


class TestEscapesBounds:
    """Tests for escapes_bounds."""

    def test_within_margin(self):
        base = BoundingBox(0, 0, 100, 100)
        assert not escapes_bounds(BoundingBox(-5, 0, 105, 100), base, ValidationOptions())

    def test_beyond_margin(self):
        base = BoundingBox(0, 0, 100, 100)
        assert escapes_bounds(BoundingBox(0, 0, 110, 100), base, ValidationOptions())

    def test_minimum_margin_for_small_boxes(self):
        base = BoundingBox(0, 0, 10, 10)
        assert not escapes_bounds(BoundingBox(0, 0, 12.9, 10), base, ValidationOptions())
        assert escapes_bounds(BoundingBox(0, 0, 13.1, 10), base, ValidationOptions())


class TestValidatePathEdit:
    """Tests for validate_path_edit."""

    def test_unchanged_outline_ok(self):
        result = validate_path_edit(SQUARE, SQUARE)
        assert result.ok
        assert result.severity == Severity.OK
        assert result.reason is None
        # uniform resampling cuts the corners slightly
        assert result.metrics.candidate_length == pytest.approx(400, rel=0.02)
        assert result.metrics.previous_length == result.metrics.candidate_length
        assert result.metrics.contour_count == 1

    def test_blank_is_degenerate(self):
        result = validate_path_edit(SQUARE, "   ")
        assert not result.ok
        assert result.reason == RejectReason.DEGENERATE_SEGMENT

    def test_flat_path_is_degenerate(self):
        result = validate_path_edit(SQUARE, "M0 0 L100 0")
        assert result.severity == Severity.ERROR
        assert result.reason == RejectReason.DEGENERATE_SEGMENT

    def test_unparseable_is_degenerate(self):
        result = validate_path_edit(SQUARE, "10 20 30")
        assert result.reason == RejectReason.DEGENERATE_SEGMENT

    def test_self_intersection_warns(self):
        result = validate_path_edit(SQUARE, FIGURE_EIGHT)
        assert result.ok
        assert result.severity == Severity.WARN
        assert result.reason == RejectReason.SELF_INTERSECTION
        assert result.metrics.contour_count == 1

    def test_self_intersection_strict(self):
        result = validate_path_edit(SQUARE, FIGURE_EIGHT, options=ValidationOptions(strict=True))
        assert not result.ok
        assert result.severity == Severity.ERROR

    def test_bbox_escape(self):
        base = BoundingBox(0, 0, 100, 100)
        result = validate_path_edit(SQUARE, WIDE, base_bbox=base)
        assert result.ok
        assert result.reason == RejectReason.BBOX_ESCAPE

        strict = validate_path_edit(
            SQUARE, WIDE, base_bbox=base, options=ValidationOptions(strict=True)
        )
        assert strict.severity == Severity.ERROR

    def test_translated_outside_base(self):
        result = validate_path_edit(
            SQUARE, "M300 300 H400 V400 H300 Z", base_bbox=BoundingBox(0, 0, 100, 100)
        )
        assert result.reason == RejectReason.BBOX_ESCAPE

    def test_bbox_checked_before_self_intersection(self):
        base = BoundingBox(0, 0, 10, 10)
        result = validate_path_edit(SQUARE, FIGURE_EIGHT, base_bbox=base)
        assert result.reason == RejectReason.BBOX_ESCAPE

    def test_length_jump_is_spike(self):
        result = validate_path_edit(SMALL_SQUARE, SQUARE)
        assert result.severity == Severity.WARN
        assert result.reason == RejectReason.CURVATURE_SPIKE
        assert result.metrics.previous_length == pytest.approx(40)

    def test_long_segment_warns(self):
        options = ValidationOptions(median_segment_factor=0.5, diagonal_factor=0.01)
        result = validate_path_edit(SQUARE, SQUARE, options=options)
        assert result.severity == Severity.WARN
        assert result.reason == RejectReason.CURVATURE_SPIKE

    def test_severe_spike_rejected_in_lenient_mode(self):
        options = ValidationOptions(median_segment_factor=0.1, diagonal_factor=0.01)
        result = validate_path_edit(SQUARE, SQUARE, options=options)
        assert not result.ok
        assert result.reason == RejectReason.CURVATURE_SPIKE

    def test_missing_previous_skips_length_check(self):
        result = validate_path_edit("", SQUARE)
        assert result.ok
        assert result.metrics.previous_length == 0

    def test_overflowing_previous_counts_as_missing(self):
        result = validate_path_edit("M0 0 L1e400 0 L0 10 Z", SQUARE)
        assert result.ok
        assert result.metrics.previous_length == 0

    def test_overflowing_candidate_is_degenerate(self):
        result = validate_path_edit(SQUARE, "M0 0 L1e400 0 L0 10 Z")
        assert not result.ok
        assert result.reason == RejectReason.DEGENERATE_SEGMENT

    def test_result_serializes(self):
        data = validate_path_edit(SQUARE, FIGURE_EIGHT).to_dict()
        assert data["severity"] == "warn"
        assert data["reason"] == "self_intersection"

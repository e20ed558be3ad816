"""Unit tests for placement quality metrics."""

import pytest

from ledlayout.core.quality import (
    PlacementQuality,
    QualityThresholds,
    evaluate_placement_quality,
    grade_placement,
    nearest_neighbor_distances,
)
from ledlayout.domain import LEDPosition


def led(x: float, y: float, rotation: float = 0.0) -> LEDPosition:
    return LEDPosition(x=x, y=y, rotation=rotation)


class TestNearestNeighbor:
    """Tests for nearest_neighbor_distances."""

    def test_distances(self):
        distances = nearest_neighbor_distances([led(0, 0), led(3, 4), led(10, 4)])
        assert distances == [5.0, 5.0, 7.0]

    def test_single_position(self):
        assert nearest_neighbor_distances([led(0, 0)]) == []


class TestEvaluateQuality:
    """Tests for evaluate_placement_quality."""

    def test_centered_module(self, square):
        quality = evaluate_placement_quality(square, [led(50, 50)])
        assert quality.count == 1
        assert quality.inside_rate == 1.0
        assert quality.min_clearance == pytest.approx(50, abs=0.01)
        assert quality.symmetry_mean == pytest.approx(1.0, abs=1e-3)
        assert quality.nn_mean == 0.0
        assert quality.nn_cv == 0.0

    def test_even_pair(self, square):
        quality = evaluate_placement_quality(square, [led(25, 50), led(75, 50)])
        assert quality.nn_mean == pytest.approx(50)
        assert quality.nn_cv == pytest.approx(0.0)
        assert quality.min_clearance == pytest.approx(25, abs=0.01)
        assert grade_placement(quality).passed

    def test_module_outside(self, square):
        quality = evaluate_placement_quality(square, [led(50, 50), led(150, 50)])
        assert quality.inside_rate == 0.5
        assert quality.min_clearance == 0.0

    def test_footprint_crossing_edge(self, square):
        quality = evaluate_placement_quality(square, [led(97, 50)])
        assert quality.inside_rate == 0.0
        rotated = evaluate_placement_quality(square, [led(97, 50, rotation=90)])
        assert rotated.inside_rate == 1.0

    def test_uneven_spacing(self, square):
        positions = [led(10, 50), led(12, 50), led(90, 50)]
        quality = evaluate_placement_quality(square, positions)
        assert quality.nn_cv > 0.45

    def test_empty_layout(self, square):
        assert evaluate_placement_quality(square, []) == PlacementQuality()

    def test_to_dict(self, square):
        data = evaluate_placement_quality(square, [led(50, 50)]).to_dict()
        assert set(data) == {
            "inside_rate", "min_clearance", "mean_clearance", "symmetry_mean",
            "nn_mean", "nn_cv", "count",
        }


class TestGradePlacement:
    """Tests for grade_placement."""

    def test_empty_layout_fails(self):
        grade = grade_placement(PlacementQuality())
        assert not grade.passed
        assert grade.failures == [
            "inside_rate < 0.98",
            "min_clearance < 0.60",
            "symmetry_mean < 0.45",
        ]

    def test_custom_thresholds(self):
        quality = PlacementQuality(
            inside_rate=0.9, min_clearance=1.0, symmetry_mean=0.8, nn_cv=0.2, count=10
        )
        assert not grade_placement(quality).passed
        assert grade_placement(quality, QualityThresholds(inside_rate=0.85)).passed

    def test_spacing_failure(self):
        quality = PlacementQuality(
            inside_rate=1.0, min_clearance=1.0, symmetry_mean=0.8, nn_cv=0.9, count=10
        )
        assert grade_placement(quality).failures == ["nn_cv > 0.45"]

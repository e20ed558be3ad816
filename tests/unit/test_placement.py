"""Unit tests for the placement pipeline."""

import pytest

from ledlayout.catalog import get_module
from ledlayout.config import Orientation
from ledlayout.core.geometry import is_point_inside
from ledlayout.core.placement import (
    PlacementReport,
    derive_target_count,
    generate_led_positions,
    place_outline,
)
from ledlayout.domain import Outline
from ledlayout.io import parse_path_data


class TestDeriveTargetCount:
    """Tests for derive_target_count."""

    def test_density(self, square):
        # 400 units at 12.5 per inch is 32 in; 32 / 12 ft * 3 per ft = 8
        assert derive_target_count(square, get_module("tetra-max-small-24v"), 12.5) == 8

    def test_denser_module(self, square):
        assert derive_target_count(square, get_module("tetra-max-mini-24v"), 12.5) == 11

    def test_at_least_one(self):
        tiny = Outline.from_polygons([[(0, 0), (1, 0), (1, 1), (0, 1)]])
        assert derive_target_count(tiny, get_module("tetra-max-small-24v"), 12.5) == 1

    def test_empty_outline(self):
        assert derive_target_count(Outline(), get_module("tetra-max-small-24v"), 12.5) == 0

    def test_overflowing_length(self):
        huge = Outline.from_polygons([[(0, 0), (1e308, 0), (1e308, 1e308), (0, 1e308)]])
        assert derive_target_count(huge, get_module("tetra-max-small-24v"), 12.5) == 0


class TestPlaceOutline:
    """Tests for place_outline and generate_led_positions."""

    def test_square_four_modules(self, square, make_config):
        """Four modules in a square sit on the midlines, two per axis."""
        positions = generate_led_positions(square, make_config(target_count=4))
        assert len(positions) == 4
        coords = sorted((round(p.x), round(p.y)) for p in positions)
        expected = sorted([(28, 50), (72, 50), (50, 28), (50, 72)])
        for (x, y), (ex, ey) in zip(coords, expected):
            assert x == pytest.approx(ex, abs=1)
            assert y == pytest.approx(ey, abs=1)
        assert all(p.rotation == 0.0 for p in positions)

    def test_positions_inside(self, ring, make_config):
        positions = generate_led_positions(ring, make_config(target_count=12))
        assert 0 < len(positions) <= 12
        for p in positions:
            assert is_point_inside(ring, p.x, p.y)

    def test_three_columns_symmetric(self, shape_paths, make_config):
        bar = parse_path_data(shape_paths["wide_bar"])
        config = make_config(target_count=9, column_count=3)
        positions = generate_led_positions(bar, config)
        assert len(positions) == 9
        for group in (positions[0:3], positions[3:6], positions[6:9]):
            center, low, high = group
            assert center.y == pytest.approx(30, abs=0.01)
            assert (center.y - low.y) == pytest.approx(high.y - center.y, abs=1e-6)
            assert low.x == pytest.approx(center.x)

    def test_derived_target(self, square, make_config):
        report = place_outline(square, make_config(target_count=None))
        assert report.target_count == 8
        assert len(report.positions) <= 8

    def test_report_figures(self, square, make_config):
        report = place_outline(square, make_config(target_count=4))
        assert isinstance(report, PlacementReport)
        assert report.base_count == 4
        assert report.step == 4.0
        assert report.candidate_count > 0
        assert sum(report.chain_counts) <= report.base_count
        assert report.chain_count == len(report.chain_counts)

    def test_base_count_rounds_up(self, shape_paths, make_config):
        bar = parse_path_data(shape_paths["wide_bar"])
        report = place_outline(bar, make_config(target_count=7, column_count=3))
        assert report.base_count == 3
        assert len(report.positions) == 7

    def test_vertical_orientation(self, square, make_config):
        positions = generate_led_positions(
            square, make_config(target_count=4, orientation=Orientation.VERTICAL)
        )
        assert all(p.rotation == 90.0 for p in positions)

    def test_empty_outline(self, make_config):
        report = place_outline(Outline(), make_config())
        assert report.positions == []
        assert report.target_count == 0

    def test_zero_target(self, square, make_config):
        report = place_outline(square, make_config(target_count=0))
        assert report.positions == []
        assert report.candidate_count == 0

    def test_thin_sliver_stays_inside(self, make_config):
        sliver = parse_path_data("M0 0 H100 V4 H0 Z")
        positions = generate_led_positions(sliver, make_config(target_count=4))
        assert len(positions) <= 4
        for p in positions:
            assert 0 <= p.x <= 100
            assert 0 <= p.y <= 4

    def test_deterministic(self, ring, make_config):
        config = make_config(target_count=10, orientation=Orientation.AUTO)
        assert generate_led_positions(ring, config) == generate_led_positions(ring, config)

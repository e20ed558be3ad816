"""Whole-pipeline properties of LED placement across a set of shapes.

These tests run the real pipeline (path data -> outline -> positions) and
check the guarantees callers rely on rather than exact coordinates.
"""

import math

import pytest

from ledlayout.config import Orientation, PlacementTuning, get_default_settings
from ledlayout.core import (
    LayoutProcessor,
    build_chains,
    evaluate_placement_quality,
    generate_candidates,
    generate_led_positions,
    is_point_inside,
    place_outline,
)
from ledlayout.core.chains import chain_break_threshold
from ledlayout.domain import Outline
from ledlayout.io import parse_path_data

SHAPES = ["figure_eight", "letter_i", "ring", "square", "wide_bar"]


class TestPlacementGuarantees:
    """Containment, count and determinism across shapes and settings."""

    @pytest.mark.parametrize("shape", SHAPES)
    @pytest.mark.parametrize("target", [1, 4, 9, 16])
    @pytest.mark.parametrize("columns", [1, 3])
    def test_inside_and_within_target(self, shape, target, columns, make_config, shape_paths):
        outline = parse_path_data(shape_paths[shape])
        config = make_config(target_count=target, column_count=columns)
        positions = generate_led_positions(outline, config)

        assert len(positions) <= target
        for position in positions:
            assert is_point_inside(outline, position.x, position.y)

    @pytest.mark.parametrize("shape", SHAPES)
    def test_deterministic(self, shape, make_config, shape_paths):
        outline = parse_path_data(shape_paths[shape])
        config = make_config(target_count=10, column_count=2, orientation=Orientation.AUTO)
        first = generate_led_positions(outline, config)
        second = generate_led_positions(parse_path_data(shape_paths[shape]), config)
        assert first == second

    @pytest.mark.parametrize("shape", ["square", "ring", "wide_bar"])
    def test_derived_count_fills_shape(self, shape, make_config, shape_paths):
        """Placement reaches the density-derived count on roomy shapes."""
        outline = parse_path_data(shape_paths[shape])
        report = place_outline(outline, make_config(target_count=None))
        assert report.target_count > 0
        assert len(report.positions) == report.target_count

    @pytest.mark.parametrize(
        "path_data",
        ["", "M0 0 L100 0", "M5 5 L5 5 Z"],
    )
    def test_degenerate_input_yields_nothing(self, path_data, make_config):
        outline = parse_path_data(path_data)
        assert generate_led_positions(outline, make_config(target_count=6)) == []

    @pytest.mark.parametrize("target", [1, 4, 6, 12])
    def test_thin_sliver_positions_inside(self, target, make_config):
        """A 4-unit bar may still get modules; they sit inside the bar."""
        outline = parse_path_data("M0 0 H100 V4 H0 Z")
        positions = generate_led_positions(outline, make_config(target_count=target))
        assert len(positions) <= target
        for p in positions:
            assert is_point_inside(outline, p.x, p.y)
            assert 0 <= p.y <= 4

    @pytest.mark.parametrize(
        "polygon",
        [
            [(0, 0), (math.inf, 0), (0, 10)],
            [(0, 0), (1e308, 0), (1e308, 1e308), (0, 1e308)],
        ],
    )
    def test_overflowing_length_yields_nothing(self, polygon, make_config):
        outline = Outline.from_polygons([polygon])
        assert outline.is_empty()
        assert generate_led_positions(outline, make_config(target_count=6)) == []
        assert place_outline(outline, make_config(target_count=None)).positions == []


class TestStrokeStructure:
    """Placement respects the separate strokes of a glyph."""

    def test_chains_never_bridge_dot_and_stem(self, shape_paths):
        outline = parse_path_data(shape_paths["letter_i"])
        tuning = PlacementTuning()
        candidate_set = generate_candidates(outline, 8, tuning)
        chains = build_chains(
            candidate_set.candidates, chain_break_threshold(candidate_set.step, tuning)
        )
        assert len(chains) >= 2
        for chain in chains:
            in_dot = {c.y < 30 for c in chain.candidates}
            assert len(in_dot) == 1

    def test_dot_and_stem_both_lit(self, make_config, shape_paths):
        outline = parse_path_data(shape_paths["letter_i"])
        positions = generate_led_positions(outline, make_config(target_count=8))
        dot = [p for p in positions if p.y < 25]
        stem = [p for p in positions if p.y > 35]
        assert dot
        assert len(stem) > len(dot)

    def test_counter_left_dark(self, make_config, shape_paths):
        outline = parse_path_data(shape_paths["ring"])
        positions = generate_led_positions(outline, make_config(target_count=16))
        for p in positions:
            assert not (30 < p.x < 70 and 30 < p.y < 70)

    def test_columns_symmetric_about_centerline(self, make_config, shape_paths):
        outline = parse_path_data(shape_paths["wide_bar"])
        positions = generate_led_positions(outline, make_config(target_count=15, column_count=5))
        assert len(positions) == 15
        for i in range(0, 15, 5):
            group = positions[i : i + 5]
            center = group[0].y
            offsets = sorted(round(p.y - center, 6) for p in group)
            assert offsets == [-o for o in reversed(offsets)]

    def test_quality_of_simple_layout(self, make_config, shape_paths):
        outline = parse_path_data(shape_paths["wide_bar"])
        positions = generate_led_positions(outline, make_config(target_count=6))
        quality = evaluate_placement_quality(outline, positions)
        assert quality.inside_rate == 1.0
        assert quality.count == 6


class TestParallelProcessing:
    """The process pool gives the same layouts as inline processing."""

    def test_parallel_matches_sequential(self, make_config, shape_paths):
        outlines = [(name, parse_path_data(shape_paths[name])) for name in SHAPES]
        config = make_config(target_count=8, column_count=2)

        sequential = LayoutProcessor(get_default_settings(), configure=False).place_all(
            outlines, config, max_workers=1
        )
        parallel = LayoutProcessor(get_default_settings(), configure=False).place_all(
            outlines, config, max_workers=2
        )

        assert [layout.char_id for layout in parallel] == SHAPES
        assert [layout.positions for layout in parallel] == [
            layout.positions for layout in sequential
        ]
        assert all(layout.ok for layout in parallel)

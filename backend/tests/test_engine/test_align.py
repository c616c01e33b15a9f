"""Tests for subpath and segment alignment."""

import pytest

from tests.conftest import DIAMOND, HOME_PATH, OPEN_POLYLINE, SQUARE, STAR_PATH, TRIANGLE, TWO_TRIANGLES

from pathmorph.engine.align import (
    align_documents,
    align_segment_counts,
    align_subpath_counts,
    control_point_distance,
    rotate_to_minimize_distance,
    subdivide_subpath,
    subpath_centroid,
)
from pathmorph.models.geometry import count_segments
from pathmorph.svg.path_parser import parse_path_data
from pathmorph.utils.bezier import cubic_point


# ── Subpath counts ──


class TestSubpathCounts:
    def test_surplus_target_gets_degenerate_partner(self):
        a = parse_path_data(SQUARE)
        b = parse_path_data(TWO_TRIANGLES)
        aligned_a, aligned_b = align_subpath_counts(a, b)
        assert len(aligned_a) == len(aligned_b) == 2
        extra = aligned_a[1]
        assert len(extra) == 1 and extra[0].is_degenerate
        assert extra[0].p0 == pytest.approx((160 / 6, 140 / 6))

    def test_surplus_source_gets_degenerate_partner(self):
        a = parse_path_data(TWO_TRIANGLES)
        b = parse_path_data(SQUARE)
        _, aligned_b = align_subpath_counts(a, b)
        assert aligned_b[1][0].is_degenerate

    def test_centroid_of_empty(self):
        assert subpath_centroid(()) == (0.0, 0.0)


# ── Segment counts ──


class TestSegmentCounts:
    def test_subdivide_allocation_spreads_evenly(self):
        square = parse_path_data(SQUARE)[0]
        result = subdivide_subpath(square, 6)
        assert len(result) == 6
        # ratio 1.5: pieces per segment are 2, 1, 2, 1 (round half up)
        ends = [seg.p3 for seg in result]
        assert ends[1] == (100.0, 0.0)
        assert ends[2] == (100.0, 100.0)
        assert ends[4] == (0.0, 100.0)

    def test_subdivide_preserves_shape(self):
        star = parse_path_data(STAR_PATH)[0]
        result = subdivide_subpath(star, len(star) * 2 + 1)
        assert result[0].p0 == star[0].p0
        assert result[-1].p3 == star[-1].p3
        for seg in result:
            x, y = cubic_point(seg, 0.5)
            assert 0 <= x <= 24 and 0 <= y <= 24

    def test_subdivide_never_shrinks(self):
        square = parse_path_data(SQUARE)[0]
        assert subdivide_subpath(square, 2) == square

    def test_pair_gets_equal_counts(self):
        a = parse_path_data(TRIANGLE)[0]
        b = parse_path_data(HOME_PATH)[0]
        aligned_a, aligned_b = align_segment_counts(a, b)
        assert len(aligned_a) == len(aligned_b) == len(b)

    def test_empty_side_collapses_to_other_centroid(self):
        a = parse_path_data(SQUARE)[0]
        aligned_a, aligned_b = align_segment_counts(a, ())
        assert len(aligned_b) == 4
        assert all(seg.p0 == (50.0, 50.0) for seg in aligned_b)


# ── Rotation ──


class TestRotation:
    def test_rotation_finds_shifted_start(self):
        square = parse_path_data(SQUARE)[0]
        shifted = parse_path_data("M100,100 L0,100 L0,0 L100,0 Z")[0]
        rotated = rotate_to_minimize_distance(square, shifted)
        assert rotated[0].p0 == (100.0, 100.0)
        assert control_point_distance(rotated, shifted) == pytest.approx(0.0)

    def test_ties_keep_original_order(self):
        square = parse_path_data(SQUARE)[0]
        diamond = parse_path_data(DIAMOND)[0]
        assert rotate_to_minimize_distance(square, diamond) == square

    def test_open_subpath_not_rotated(self):
        polyline = parse_path_data(OPEN_POLYLINE)[0]
        reversed_line = parse_path_data("M20,5 L10,0 L0,0")[0]
        assert rotate_to_minimize_distance(polyline, reversed_line) == polyline

    def test_near_closed_within_tolerance_rotates(self):
        square = parse_path_data("M0,0 L100,0 L100,100 L0,100 L0,0.3")[0]
        shifted = parse_path_data("M100,100 L0,100 L0,0 L100,0 L100,100")[0]
        assert rotate_to_minimize_distance(square, shifted, close_tolerance=0.5)[0].p0 != (0.0, 0.0)
        assert rotate_to_minimize_distance(square, shifted, close_tolerance=0.1) == square


# ── Whole documents ──


class TestAlignDocuments:
    def test_one_subpath_against_two(self):
        from_doc = parse_path_data(SQUARE)
        to_doc = parse_path_data(TWO_TRIANGLES)
        assert count_segments(from_doc) == [4]
        assert sum(count_segments(to_doc)) == 6

        aligned_from, aligned_to = align_documents(from_doc, to_doc)
        assert len(aligned_from) == len(aligned_to) == 2
        assert count_segments(aligned_from) == count_segments(aligned_to) == [4, 3]
        assert all(seg.is_degenerate for seg in aligned_from[1])

    @pytest.mark.parametrize("a,b", [
        (SQUARE, STAR_PATH),
        (HOME_PATH, TWO_TRIANGLES),
        (OPEN_POLYLINE, DIAMOND),
        (STAR_PATH, TRIANGLE),
    ])
    def test_segment_counts_match(self, a, b):
        aligned_a, aligned_b = align_documents(parse_path_data(a), parse_path_data(b))
        assert count_segments(aligned_a) == count_segments(aligned_b)

    def test_rotation_can_be_disabled(self):
        square = parse_path_data(SQUARE)
        shifted = parse_path_data("M100,100 L0,100 L0,0 L100,0 Z")
        aligned, _ = align_documents(square, shifted, rotate=False)
        assert aligned == square

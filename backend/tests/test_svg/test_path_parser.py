"""Tests for path-data parsing into cubic subpaths."""

import pytest

from tests.conftest import CIRCLE_PATH, HOME_PATH, SMILE_PATH, SQUARE, TWO_TRIANGLES, WAVE_PATH

from pathmorph.models.geometry import count_segments, subpath_is_closed
from pathmorph.svg.path_parser import PathParseError, iter_commands, parse_path_data
from pathmorph.utils.bezier import cubic_point


def _close(a, b, tol=1e-9):
    return abs(a[0] - b[0]) < tol and abs(a[1] - b[1]) < tol


# ── Tokenizing ──


class TestIterCommands:
    def test_comma_and_whitespace_separators(self):
        cmds = list(iter_commands("M 10,20\tL30 , 40"))
        assert [c.letter for c in cmds] == ["M", "L"]
        assert cmds[0].args == (10.0, 20.0)
        assert cmds[1].args == (30.0, 40.0)

    def test_scientific_notation(self):
        cmds = list(iter_commands("M1e2,-2.5E-1"))
        assert cmds[0].args == (100.0, -0.25)

    def test_packed_numbers(self):
        # "-" and "." start a new number without a separator
        cmds = list(iter_commands("M.5.5L-1-2"))
        assert cmds[0].args == (0.5, 0.5)
        assert cmds[1].args == (-1.0, -2.0)

    def test_packed_arc_flags(self):
        cmds = list(iter_commands("M0 0a5 5 0 1110 0"))
        assert cmds[1].args == (5.0, 5.0, 0.0, 1.0, 1.0, 10.0, 0.0)

    def test_relative_flag(self):
        cmds = list(iter_commands("m1 1l2 2Z"))
        assert cmds[0].is_relative
        assert cmds[1].upper == "L"
        assert not cmds[2].is_relative

    def test_unknown_command(self):
        with pytest.raises(PathParseError) as exc:
            list(iter_commands("M0 0 X 1 1"))
        assert exc.value.position == 5

    def test_missing_arguments(self):
        with pytest.raises(PathParseError):
            list(iter_commands("M0,0 L10"))

    def test_number_before_command(self):
        with pytest.raises(PathParseError):
            list(iter_commands("10 20"))

    def test_arguments_after_close(self):
        with pytest.raises(PathParseError):
            list(iter_commands("M0 0 L1 1 Z 5"))

    def test_invalid_arc_flag(self):
        with pytest.raises(PathParseError):
            list(iter_commands("M0 0 A5 5 0 2 1 10 0"))

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_path_data("garbage")


# ── Normalizing to cubics ──


class TestParsePathData:
    def test_empty_string(self):
        assert parse_path_data("") == ()

    def test_square_closes_with_line(self):
        doc = parse_path_data(SQUARE)
        assert count_segments(doc) == [4]
        assert doc[0][-1].p3 == (0.0, 0.0)
        assert subpath_is_closed(doc[0], 0.5)

    def test_line_degree_elevation(self):
        seg = parse_path_data("M0,0 L30,0")[0][0]
        assert seg.p1 == (10.0, 0.0)
        assert seg.p2 == (20.0, 0.0)

    def test_close_on_start_point_adds_nothing(self):
        doc = parse_path_data("M0,0 L10,0 L0,0 Z")
        assert count_segments(doc) == [2]

    def test_subpaths_split_on_move(self):
        doc = parse_path_data(TWO_TRIANGLES)
        assert count_segments(doc) == [3, 3]
        assert doc[1][0].p0 == (20.0, 20.0)

    def test_implicit_lineto_after_move(self):
        doc = parse_path_data("M0 0 10 0 10 10")
        assert count_segments(doc) == [2]
        assert doc[0][1].p3 == (10.0, 10.0)

    def test_relative_commands(self):
        doc = parse_path_data("m10 10 l5 0 h5 v5")
        ends = [seg.p3 for seg in doc[0]]
        assert ends == [(15.0, 10.0), (20.0, 10.0), (20.0, 15.0)]

    def test_relative_move_after_close(self):
        doc = parse_path_data("M10 10 l5 0 l0 5 z m5 5 l1 0")
        assert doc[1][0].p0 == (15.0, 15.0)

    def test_drawing_after_close_starts_new_subpath(self):
        doc = parse_path_data("M0 0 L10 0 L10 10 Z L5 5")
        assert count_segments(doc) == [3, 1]
        assert doc[1][0].p0 == (0.0, 0.0)
        assert doc[1][0].p3 == (5.0, 5.0)

    def test_leading_relative_move(self):
        doc = parse_path_data("m5 5 l1 0")
        assert doc[0][0].p0 == (5.0, 5.0)
        assert doc[0][0].p3 == (6.0, 5.0)

    def test_move_only_subpaths_draw_nothing(self):
        doc = parse_path_data("M0 0 m5 5 l1 0")
        assert count_segments(doc) == [1]
        assert doc[0][0].p0 == (5.0, 5.0)

    def test_smooth_cubic_reflects_previous_control(self):
        seg = parse_path_data("M0 0 C0 10 10 10 10 0 S20 -10 20 0")[0][1]
        assert seg.p1 == (10.0, -10.0)

    def test_smooth_cubic_without_previous_cubic(self):
        seg = parse_path_data("M0 0 L5 0 S10 5 15 0")[0][1]
        assert seg.p1 == (5.0, 0.0)

    def test_smooth_quadratic_chain(self):
        doc = parse_path_data(WAVE_PATH)
        assert count_segments(doc) == [3]
        # Each T mirrors the previous quadratic control, so the wave alternates
        mid = cubic_point(doc[0][1], 0.5)
        assert mid[1] == pytest.approx(15.0)

    def test_quadratic_degree_elevation(self):
        seg = parse_path_data("M0 0 Q15 30 30 0")[0][0]
        assert seg.p1 == pytest.approx((10.0, 20.0))
        assert seg.p2 == pytest.approx((20.0, 20.0))

    def test_smile_shorthand(self):
        doc = parse_path_data(SMILE_PATH)
        assert count_segments(doc) == [2]
        assert _close(doc[0][-1].p3, (16.0, 14.0))


class TestArcs:
    def test_full_circle_from_two_arcs(self):
        doc = parse_path_data(CIRCLE_PATH)
        assert len(doc) == 1
        # Each half circle splits into two quarter arcs
        assert len(doc[0]) == 4
        for seg in doc[0]:
            for t in (0.0, 0.3, 0.5, 0.8, 1.0):
                x, y = cubic_point(seg, t)
                assert ((x - 12) ** 2 + (y - 12) ** 2) ** 0.5 == pytest.approx(10.0, rel=1e-3)

    def test_arc_endpoints_are_exact(self):
        doc = parse_path_data("M0 0 A5 5 0 0 1 10 0")
        assert doc[0][0].p0 == (0.0, 0.0)
        assert doc[0][-1].p3 == (10.0, 0.0)

    def test_zero_radius_arc_is_line(self):
        doc = parse_path_data("M0 0 A0 5 0 0 1 10 0")
        assert count_segments(doc) == [1]
        assert doc[0][0].p1 == pytest.approx((10 / 3, 0.0))

    def test_small_radii_scale_up(self):
        doc = parse_path_data("M0 0 A1 1 0 0 1 10 0")
        seg = doc[0][0]
        # Radius grows to 5: the half circle bulges 5 units away from the chord
        apex = cubic_point(seg, 1.0)
        assert abs(apex[1]) == pytest.approx(5.0, rel=1e-6)

    def test_home_icon(self):
        doc = parse_path_data(HOME_PATH)
        assert len(doc) == 1
        assert subpath_is_closed(doc[0], 0.5)

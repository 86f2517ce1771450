"""Tests for traversers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from hextiles.constants import CompassDirection, Rotation
from hextiles.grid import Grid
from hextiles.hex import define_hex
from hextiles.hex_utils import hex_distance, hexes_are_adjacent
from hextiles.models import OffsetCoordinates
from hextiles.traversers import (
    line, rectangle, ring, spiral, concat, repeat, repeat_with, move, from_coordinates,
    options_from_opposing_corners,
)

Hex = define_hex()
E, SE, S, W, N, NE = (CompassDirection.E, CompassDirection.SE, CompassDirection.S,
                      CompassDirection.W, CompassDirection.N, CompassDirection.NE)


def keys(traverser, hex_class=Hex, cursor=None):
    return [h.key for h in traverser(hex_class, cursor)]


def offsets(traverser, hex_class):
    return [h.to_offset().to_tuple() for h in traverser(hex_class)]


class TestLine:
    def test_direction_from_start(self):
        assert keys(line(start=(0, 0), direction=E, length=3)) == [(0, 0), (1, 0), (2, 0)]

    def test_at_excludes_anchor(self):
        assert keys(line(at=(0, 0), direction=E, length=2)) == [(1, 0), (2, 0)]

    def test_no_anchor_starts_at_origin(self):
        assert keys(line(direction=SE, length=2)) == [(0, 0), (0, 1)]

    def test_cursor_is_not_repeated(self):
        assert keys(line(direction=E, length=2), cursor=Hex((1, 0))) == [(2, 0), (3, 0)]

    def test_zero_length(self):
        assert keys(line(start=(0, 0), direction=E, length=0)) == []

    def test_stop_is_included(self):
        result = keys(line(start=(0, 0), stop=(3, -3)))
        assert len(result) == 4
        assert result[0] == (0, 0)
        assert result[-1] == (3, -3)

    def test_through_is_included(self):
        assert keys(line(start=(0, 0), through=(2, 0))) == [(0, 0), (1, 0), (2, 0)]

    def test_until_is_excluded(self):
        assert keys(line(start=(0, 0), until=(3, 0))) == [(0, 0), (1, 0), (2, 0)]

    def test_line_between_is_connected(self):
        result = list(line(start=(-3, 2), stop=(4, -1))(Hex))
        assert len(result) == hex_distance(-3, 2, 4, -1) + 1
        for a, b in zip(result, result[1:]):
            assert hexes_are_adjacent(Hex.settings, a, b)

    def test_direction_with_predicates(self):
        assert keys(line(start=(0, 0), direction=E, through=lambda h: h.q == 2)) == [(0, 0), (1, 0), (2, 0)]
        assert keys(line(start=(0, 0), direction=E, until=lambda h: h.q == 2)) == [(0, 0), (1, 0)]
        assert keys(line(start=(0, 0), direction=E, until=(5, 0), length=2)) == [(0, 0), (1, 0)]

    def test_target_off_the_ray_ends_the_walk(self):
        expected = [(q, 0) for q in range(6)]
        assert keys(line(start=(0, 0), direction=E, until=(0, 5))) == expected
        assert keys(line(start=(0, 0), direction=E, through={"q": 0, "r": 5})) == expected
        assert keys(line(at=(0, 0), direction=E, until=(-2, 0))) == [(1, 0), (2, 0)]

    @pytest.mark.parametrize("orientation", ["pointy", "flat"])
    @pytest.mark.parametrize("direction", list(CompassDirection))
    def test_off_ray_target_is_finite_in_every_direction(self, orientation, direction):
        hex_class = define_hex(orientation=orientation)
        result = list(line(start=(1, 1), direction=direction, until=(40, -90))(hex_class))
        assert len(result) <= hex_distance(1, 1, 40, -90) + 1

    def test_grid_from_off_ray_line(self):
        grid = Grid(Hex, line(start=(0, 0), direction=E, until=(0, 5)))
        assert grid.size == 6

    def test_invalid_options(self):
        with pytest.raises(ValueError):
            line()
        with pytest.raises(ValueError):
            line(direction=E)
        with pytest.raises(ValueError):
            line(direction=E, stop=(1, 0))
        with pytest.raises(ValueError):
            line(stop=(1, 0), until=(2, 0))
        with pytest.raises(ValueError):
            line(start=(0, 0), at=(1, 0), direction=E, length=1)
        with pytest.raises(ValueError):
            line(until=lambda h: True)

    def test_restartable(self):
        traverser = line(start=(0, 0), direction=NE, length=4)
        assert keys(traverser) == keys(traverser)


class TestRectangle:
    def test_width_height(self):
        assert keys(rectangle(width=3, height=2)) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    @pytest.mark.parametrize("orientation", ["pointy", "flat"])
    @pytest.mark.parametrize("offset", [-1, 1])
    @pytest.mark.parametrize("direction", [N, E, S, W])
    def test_count_and_uniqueness(self, orientation, offset, direction):
        hex_class = define_hex(orientation=orientation, offset=offset)
        result = keys(rectangle(width=4, height=3, direction=direction, start=(2, -1)), hex_class)
        assert len(result) == 12
        assert len(set(result)) == 12
        assert result[0] == (2, -1)

    @pytest.mark.parametrize("orientation", ["pointy", "flat"])
    @pytest.mark.parametrize("offset", [-1, 1])
    def test_covers_offset_rectangle(self, orientation, offset):
        hex_class = define_hex(orientation=orientation, offset=offset)
        result = offsets(rectangle(width=3, height=2), hex_class)
        assert set(result) == {(col, row) for col in range(3) for row in range(2)}

    def test_at_skips_first_corner(self):
        assert keys(rectangle(width=2, height=2, at=(0, 0))) == [(1, 0), (0, 1), (1, 1)]

    def test_ordinal_direction_rejected(self):
        with pytest.raises(ValueError):
            rectangle(width=2, height=2, direction=NE)

    def test_missing_size(self):
        with pytest.raises(ValueError):
            rectangle(width=2)

    def test_corners_rules(self):
        settings = Hex.settings
        a, b = OffsetCoordinates(0, 0), OffsetCoordinates(2, 1)
        assert options_from_opposing_corners(settings, a, b) == {
            "width": 3, "height": 2, "direction": E, "start": a,
        }
        assert options_from_opposing_corners(settings, b, a, False) == {
            "width": 3, "height": 2, "direction": W, "at": b,
        }
        bottom_left, top_right = OffsetCoordinates(0, 1), OffsetCoordinates(2, 0)
        assert options_from_opposing_corners(settings, bottom_left, top_right)["direction"] == N
        assert options_from_opposing_corners(settings, bottom_left, top_right)["width"] == 2
        assert options_from_opposing_corners(settings, top_right, bottom_left)["direction"] == S

    @pytest.mark.parametrize("corner_a,corner_b", [
        ((0, 0), (2, 1)), ((2, 1), (0, 0)), ((0, 1), (2, 0)), ((2, 0), (0, 1)),
    ])
    def test_from_corners(self, corner_a, corner_b):
        a, b = OffsetCoordinates(*corner_a), OffsetCoordinates(*corner_b)
        result = list(rectangle(a, b)(Hex))
        assert len(result) == 6
        assert len({h.key for h in result}) == 6
        assert result[0].to_offset() == a
        assert {h.to_offset().to_tuple() for h in result} == {(c, r) for c in range(3) for r in range(2)}

    def test_from_corners_without_corner_a(self):
        a, b = OffsetCoordinates(0, 0), OffsetCoordinates(2, 1)
        result = list(rectangle(a, b, include_corner_a=False)(Hex))
        assert len(result) == 5
        assert a not in [h.to_offset() for h in result]

    def test_from_axial_corners(self):
        result = keys(rectangle((0, 0), (2, 1)))
        assert len(result) == 6


class TestRingAndSpiral:
    def test_ring_sizes(self):
        assert len(keys(ring(center=(0, 0), radius=0))) == 1
        assert len(keys(ring(center=(0, 0), radius=1))) == 6
        assert len(keys(ring(center=(0, 0), radius=2))) == 12

    def test_ring_distance(self):
        result = keys(ring(center=(1, -2), radius=3))
        assert len(set(result)) == 18
        assert result[0] == (4, -2)
        for q, r in result:
            assert hex_distance(1, -2, q, r) == 3

    def test_ring_is_walked_step_by_step(self):
        result = list(ring(center=(0, 0), radius=2)(Hex))
        for a, b in zip(result, result[1:] + result[:1]):
            assert hexes_are_adjacent(Hex.settings, a, b)

    def test_ring_from_start(self):
        result = keys(ring(center=(0, 0), start=(0, 2)))
        assert result[0] == (0, 2)
        assert len(result) == 12

    def test_ring_counterclockwise(self):
        clockwise = keys(ring(center=(0, 0), radius=1))
        counter = keys(ring(center=(0, 0), radius=1, rotation=Rotation.COUNTERCLOCKWISE))
        assert counter[0] == clockwise[0]
        assert counter[1:] == clockwise[:0:-1]

    def test_ring_around_cursor(self):
        result = keys(ring(radius=1), cursor=Hex((5, 5)))
        assert all(hex_distance(5, 5, q, r) == 1 for q, r in result)

    def test_ring_needs_radius(self):
        with pytest.raises(ValueError):
            ring(center=(0, 0))

    def test_spiral(self):
        result = keys(spiral(radius=2))
        assert len(result) == 19
        assert len(set(result)) == 19
        assert result[0] == (0, 0)
        assert [hex_distance(0, 0, q, r) for q, r in result] == sorted(hex_distance(0, 0, q, r) for q, r in result)

    def test_spiral_at_excludes_center(self):
        result = keys(spiral(radius=1, at=(0, 0)))
        assert len(result) == 6
        assert (0, 0) not in result


class TestCombinators:
    def test_concat(self):
        traverser = concat(line(start=(0, 0), direction=E, length=2), line(direction=SE, length=2))
        assert keys(traverser) == [(0, 0), (1, 0), (1, 1), (1, 2)]

    def test_concat_list(self):
        traverser = concat([from_coordinates((3, 3)), move(W)])
        assert keys(traverser) == [(3, 3), (2, 3)]

    def test_repeat(self):
        assert keys(repeat(3, move(E))) == [(1, 0), (2, 0), (3, 0)]
        assert keys(repeat(2, [move(E), move(SE)])) == [(1, 0), (1, 1), (2, 1), (2, 2)]

    def test_repeat_with(self):
        source = line(start=(0, 0), direction=E, length=2)
        assert keys(repeat_with(source, move(SE))) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert keys(repeat_with(source, move(SE), include_source=False)) == [(0, 1), (1, 1)]

    def test_move(self):
        assert keys(move(E, 2), cursor=Hex((1, 1))) == [(2, 1), (3, 1)]
        assert keys(move(NE)) == [(1, -1)]

    def test_from_coordinates(self):
        assert keys(from_coordinates((0, 0), {"q": 1, "r": 0})) == [(0, 0), (1, 0)]

    def test_independent_runs(self):
        traverser = concat(spiral(radius=1), move(E, 3))
        first = keys(traverser)
        second = keys(traverser)
        assert first == second
        assert len(first) == 10

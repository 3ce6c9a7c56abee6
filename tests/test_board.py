import random

import pytest

from snakearena.board import (
    filter_points,
    pick_random_point,
    tournament_start_point,
    tournament_starts,
    unique_occupied_points,
    unoccupied_point,
    unoccupied_point_even,
    unoccupied_point_odd,
    unoccupied_points,
)
from snakearena.models import Point, RulesError, Snake


def test_unoccupied_point_even():
    point = unoccupied_point_even(2, 2, [], [], random.Random(1))
    assert (point.x + point.y) % 2 == 0


def test_unoccupied_point_odd():
    point = unoccupied_point_odd(2, 2, [Point(0, 1)], [], random.Random(1))
    assert (point.x + point.y) % 2 == 1


def test_unoccupied_point_with_full_board():
    point = unoccupied_point(
        2,
        2,
        [Point(0, 0)],
        [Snake(body=[Point(0, 1), Point(1, 1), Point(1, 0)])],
    )
    assert point is None


def test_unoccupied_points_with_empty_spots():
    points = unoccupied_points(2, 2, [Point(0, 0)], [Snake(body=[Point(0, 1)])])
    assert points == [Point(1, 0), Point(1, 1)]


def test_unique_occupied_points():
    points = unique_occupied_points(
        [Point(0, 0)],
        [Snake(body=[Point(0, 1), Point(1, 1), Point(1, 1), Point(1, 0)])],
    )
    assert len(points) == 4


def test_unoccupied_points_never_overlap_occupied():
    food = [Point(2, 3)]
    snakes = [Snake(body=[Point(0, 0), Point(0, 1)])]
    free = unoccupied_points(5, 5, food, snakes)
    assert not set(free) & set(unique_occupied_points(food, snakes))
    assert len(free) + 3 == 25


@pytest.mark.parametrize("even", [True, False])
def test_filter_points_splits_by_parity(even):
    points = unoccupied_points(4, 4, [], [])
    kept = filter_points(points, even)
    dropped = filter_points(points, not even)
    assert sorted(kept + dropped, key=lambda p: (p.x, p.y)) == points
    assert not set(kept) & set(dropped)


def test_pick_random_point_empty():
    assert pick_random_point([]) is None


def test_pick_random_point_from_list():
    points = [Point(1, 2), Point(3, 4)]
    assert pick_random_point(points, random.Random(7)) in points


def test_tournament_small_starts():
    starts = tournament_starts(7)
    assert len(starts) == 8
    assert starts[0] == Point(1, 1)
    assert starts[1] == Point(5, 5)
    assert len(set(starts)) == 8


@pytest.mark.parametrize("size", [7, 11, 19])
def test_tournament_starts_inside_board(size):
    for point in tournament_starts(size):
        assert 0 < point.x < size - 1
        assert 0 < point.y < size - 1


def test_tournament_starts_unknown_size():
    with pytest.raises(ValueError):
        tournament_starts(10)


def test_tournament_start_point():
    assert tournament_start_point(7, 1, []) == Point(5, 5)
    with pytest.raises(RulesError):
        tournament_start_point(7, 8, [])


def test_tournament_start_point_other_size_is_free_cell():
    snakes = [Snake(body=[Point(0, 0)])]
    point = tournament_start_point(3, 0, snakes, random.Random(3))
    assert point in unoccupied_points(3, 3, [], snakes)
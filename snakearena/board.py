"""Board geometry: free cells, random placement and tournament starts."""

from __future__ import annotations

import random
from itertools import chain
from typing import Iterable, Optional, Sequence

from .models import Point, RulesError, Snake


def _build_starts(size: int) -> tuple[Point, ...]:
    center = (size - 1) // 2
    return (
        Point(1, 1),
        Point(size - 2, size - 2),
        Point(1, size - 2),
        Point(size - 2, 1),
        Point(center, 1),
        Point(size - 2, center),
        Point(center, size - 2),
        Point(1, center),
    )


_TOURNAMENT_STARTS = {size: _build_starts(size) for size in (7, 11, 19)}


def unique_occupied_points(food: Iterable[Point], snakes: Iterable[Snake]) -> list[Point]:
    """Food and snake body points, without duplicates, in first-seen order."""
    bodies = (point for snake in snakes for point in snake.body)
    return list(dict.fromkeys(chain(food, bodies)))


def unoccupied_points(
    width: int, height: int, food: Iterable[Point], snakes: Iterable[Snake]
) -> list[Point]:
    """Every free cell, column by column."""
    occupied = unique_occupied_points(food, snakes)
    if width * height - len(occupied) <= 0:
        return []
    taken = set(occupied)
    return [
        Point(x, y)
        for x in range(width)
        for y in range(height)
        if Point(x, y) not in taken
    ]


def filter_points(points: Iterable[Point], even: bool) -> list[Point]:
    """Drop the points whose coordinate sum is even (or odd when `even` is False)."""
    parity = 0 if even else 1
    return [point for point in points if (point.x + point.y) % 2 != parity]


def pick_random_point(points: Sequence[Point], rng: Optional[random.Random] = None) -> Optional[Point]:
    if not points:
        return None
    source = rng if rng is not None else random
    return points[source.randrange(len(points))]


def unoccupied_point(
    width: int,
    height: int,
    food: Iterable[Point],
    snakes: Iterable[Snake],
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    return pick_random_point(unoccupied_points(width, height, food, snakes), rng)


def unoccupied_point_even(
    width: int,
    height: int,
    food: Iterable[Point],
    snakes: Iterable[Snake],
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    """A random free cell whose coordinates sum to an even number."""
    points = filter_points(unoccupied_points(width, height, food, snakes), False)
    return pick_random_point(points, rng)


def unoccupied_point_odd(
    width: int,
    height: int,
    food: Iterable[Point],
    snakes: Iterable[Snake],
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    """A random free cell whose coordinates sum to an odd number."""
    points = filter_points(unoccupied_points(width, height, food, snakes), True)
    return pick_random_point(points, rng)


def tournament_starts(size: int) -> list[Point]:
    """The fixed start positions of a square tournament board."""
    try:
        return list(_TOURNAMENT_STARTS[size])
    except KeyError:
        raise ValueError(f"{size} is not a tournament board size") from None


def tournament_start_point(
    size: int,
    index: int,
    snakes: Iterable[Snake],
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    """The start of the index-th snake; random free cell on other board sizes."""
    starts = _TOURNAMENT_STARTS.get(size)
    if starts is None:
        return unoccupied_point(size, size, [], snakes, rng)
    if not 0 <= index < len(starts):
        raise RulesError(f"no tournament start position for snake {index}")
    return starts[index]
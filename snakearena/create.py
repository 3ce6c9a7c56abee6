"""Creating a new game from a create request."""

from __future__ import annotations

import random
import uuid
from typing import Optional

import httpx

from .board import (
    tournament_start_point,
    unoccupied_point,
    unoccupied_point_even,
    unoccupied_point_odd,
)
from .colors import ColorPalette
from .models import (
    CreateRequest,
    Game,
    GameFrame,
    GameMode,
    GameStatus,
    Point,
    RulesError,
    Snake,
)
from .start import notify_game_start

DEFAULT_SNAKE_TIMEOUT = 500
MAX_SNAKE_TIMEOUT = 5000
START_HEALTH = 100
START_LENGTH = 3
_TOURNAMENT_SIZES = {(7, 7), (11, 11), (19, 19)}


def snake_timeout(request: CreateRequest) -> int:
    """The requested snake timeout in ms, or 500 if it is out of range."""
    timeout = request.snake_timeout
    if timeout < 1 or timeout > MAX_SNAKE_TIMEOUT:
        return DEFAULT_SNAKE_TIMEOUT
    return timeout


def is_tournament_board_size(request: CreateRequest) -> bool:
    return (request.width, request.height) in _TOURNAMENT_SIZES


def create_snakes(request: CreateRequest, rng: Optional[random.Random] = None) -> list[Snake]:
    """Place the requested snakes on the board.

    Off tournament sizes all snakes start on cells of the same colour,
    chosen at random, so they cannot meet head on by parity.
    """
    source = rng if rng is not None else random
    even = source.random() < 0.5
    tournament = is_tournament_board_size(request)
    snakes: list[Snake] = []
    for index, options in enumerate(request.snakes):
        if tournament:
            start = tournament_start_point(request.width, index, snakes, rng)
        elif even:
            start = unoccupied_point_even(request.width, request.height, [], snakes, rng)
        else:
            start = unoccupied_point_odd(request.width, request.height, [], snakes, rng)
        if start is None:
            raise RulesError("no unoccupied spots left for new snake")

        snake_id = options.id or str(uuid.uuid4())
        if any(snake.id == snake_id for snake in snakes):
            raise RulesError("duplicate snake id found, create aborted")

        snakes.append(
            Snake(
                id=snake_id,
                name=options.name,
                url=options.url,
                health=START_HEALTH,
                head_type=options.head_type,
                tail_type=options.tail_type,
                body=[Point(start.x, start.y) for _ in range(START_LENGTH)],
            )
        )
    return snakes


def generate_food(
    request: CreateRequest, snakes: list[Snake], rng: Optional[random.Random] = None
) -> list[Point]:
    """Place up to the requested amount of food on free cells."""
    food: list[Point] = []
    for _ in range(request.food):
        point = unoccupied_point(request.width, request.height, food, snakes, rng)
        if point is not None:
            food.append(point)
    return food


def create_initial_game(
    request: CreateRequest,
    client: Optional[httpx.Client] = None,
    rng: Optional[random.Random] = None,
    palette: Optional[ColorPalette] = None,
) -> tuple[Game, list[GameFrame]]:
    """Create a stopped game and its first frame, and notify the snakes."""
    snakes = create_snakes(request, rng)
    food = generate_food(request, snakes, rng)
    game = Game(
        id=str(uuid.uuid4()),
        width=request.width,
        height=request.height,
        status=GameStatus.STOPPED.value,
        snake_timeout=snake_timeout(request),
        mode=GameMode.MULTI_PLAYER.value,
        max_turns_to_next_food_spawn=request.max_turns_to_next_food_spawn,
    )
    if len(snakes) == 1:
        game.mode = GameMode.SINGLE_PLAYER.value

    frames = [GameFrame(turn=0, food=food, snakes=snakes)]
    notify_game_start(game, frames[0], client, palette)
    return game, frames
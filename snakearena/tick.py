"""Advancing a game by one turn: moves, food, growth and deaths."""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, Optional

import httpx

from .board import unoccupied_point
from .death import check_for_death
from .models import Game, GameFrame, Point, RulesError
from .move import SnakeUpdate, gather_snake_moves

log = logging.getLogger(__name__)

FULL_HEALTH = 100
MIN_SPAWN_CHANCE = 0.5
# Spawn rolls are drawn from 0..1000 inclusive.
SPAWN_ROLL_LIMIT = 1001


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf


def food_spawn_chance(game: Game) -> float:
    """Chance, out of 1000, that food spawns given the turns since the last spawn.

    The chance grows geometrically from 0.5 so that it reaches 1000 when the
    maximum number of turns between spawns is hit.
    """
    steps = game.max_turns_to_next_food_spawn - 1
    ratio = _power(1000 / MIN_SPAWN_CHANCE, 1.0 / steps) if steps else math.inf
    turns = float(game.turns_since_last_food_spawn)
    if ratio == 1.0:
        return MIN_SPAWN_CHANCE * turns
    growth = _power(ratio, turns)
    return MIN_SPAWN_CHANCE * ((1 - growth) / (1 - ratio))


def update_food(
    game: Game,
    frame: GameFrame,
    food_to_remove: Iterable[Point],
    rng: Optional[random.Random] = None,
) -> list[Point]:
    """Drop eaten food and spawn new food, updating the game's spawn counter."""
    source = rng if rng is not None else random
    eaten = list(food_to_remove)
    food = [point for point in frame.food if point not in eaten]
    alive = frame.alive_snakes()
    half_alive = math.ceil(len(alive) / 2)

    food_to_add = 0
    if game.max_turns_to_next_food_spawn <= 0:
        food_to_add = len(eaten)
    elif game.turns_since_last_food_spawn == game.max_turns_to_next_food_spawn:
        food_to_add = half_alive
    else:
        roll = source.randrange(SPAWN_ROLL_LIMIT)
        chance = food_spawn_chance(game)
        log.info(
            "food spawn chance: game=%s roll=%s turns_since_last=%s chance=%s",
            game.id,
            roll,
            game.turns_since_last_food_spawn,
            chance,
        )
        if roll <= chance:
            food_to_add = half_alive

    if food_to_add > 0:
        game.turns_since_last_food_spawn = 0
        for _ in range(food_to_add):
            point = unoccupied_point(game.width, game.height, frame.food, alive, rng)
            if point is not None:
                food.append(point)
    else:
        game.turns_since_last_food_spawn += 1
    return food


def update_snakes(game: Game, frame: GameFrame, moves: Iterable[SnakeUpdate]) -> None:
    """Apply each snake's chosen move, or the default move if it failed."""
    for update in moves:
        snake = update.snake
        snake.latency = str(int(update.latency * 1000))
        if update.error is not None:
            log.info(
                "default move: game=%s snake=%s name=%s turn=%s error=%s",
                game.id,
                snake.id,
                snake.name,
                frame.turn,
                update.error,
            )
            snake.default_move()
        else:
            log.info(
                "move: game=%s snake=%s name=%s turn=%s move=%s",
                game.id,
                snake.id,
                snake.name,
                frame.turn,
                update.move,
            )
            snake.move(update.move)


def check_for_snakes_eating(frame: GameFrame) -> list[Point]:
    """Feed snakes whose head is on food and trim or grow their tails.

    Returns the food points that were eaten.
    """
    eaten: list[Point] = []
    for snake in frame.alive_snakes():
        head = snake.head()
        ate = False
        for food in frame.food:
            if head == food:
                snake.health = FULL_HEALTH
                ate = True
                eaten.append(food)
                log.info(
                    "snake ate: snake=%s name=%s turn=%s food=%s",
                    snake.id,
                    snake.name,
                    frame.turn,
                    food,
                )
        if snake.body:
            snake.body.pop()
        if ate and snake.body:
            tail = snake.tail()
            snake.body.append(Point(tail.x, tail.y))
    return eaten


def game_tick(
    game: Game,
    last_frame: Optional[GameFrame],
    client: Optional[httpx.Client] = None,
    rng: Optional[random.Random] = None,
) -> GameFrame:
    """Run the game one turn and return the next frame."""
    if last_frame is None:
        raise RulesError("invalid state, previous frame is missing")
    next_frame = GameFrame(
        turn=last_frame.turn + 1,
        snakes=last_frame.snakes,
        food=last_frame.food,
    )
    timeout = game.snake_timeout / 1000 if game.snake_timeout > 0 else None
    log.info("gathering snake moves: game=%s turn=%s timeout=%s", game.id, next_frame.turn, timeout)
    moves = gather_snake_moves(timeout, game, last_frame, client)

    update_snakes(game, next_frame, moves)

    log.info("reducing snake health: game=%s turn=%s", game.id, next_frame.turn)
    for snake in next_frame.alive_snakes():
        snake.health -= 1

    log.info("handling food: game=%s turn=%s", game.id, next_frame.turn)
    eaten = check_for_snakes_eating(next_frame)
    next_frame.food = update_food(game, last_frame, eaten, rng)

    log.info("checking for death: game=%s turn=%s", game.id, next_frame.turn)
    for update in check_for_death(game.width, game.height, next_frame):
        if update.snake.death is None:
            update.snake.death = update.death
    return next_frame
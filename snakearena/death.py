"""Death detection and end-of-game checks."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Death, DeathCause, GameFrame, GameMode, Point, Snake


@dataclass
class DeathUpdate:
    """A snake together with the death it has just suffered."""

    snake: Snake
    death: Death


def death_by_health(health: int) -> bool:
    return health <= 0


def death_by_out_of_bounds(head: Point, width: int, height: int) -> bool:
    return head.x < 0 or head.x >= width or head.y < 0 or head.y >= height


def death_by_head_collision(snake: Snake, other: Snake) -> bool:
    """True when the snake meets a different, not shorter snake head on."""
    return (
        other.id != snake.id
        and snake.head() == other.head()
        and len(snake.body) <= len(other.body)
    )


def check_for_death(width: int, height: int, frame: GameFrame) -> list[DeathUpdate]:
    """Find the living snakes that have starved or collided this turn."""
    updates: list[DeathUpdate] = []
    alive = frame.alive_snakes()

    def record(snake: Snake, cause: DeathCause) -> None:
        updates.append(DeathUpdate(snake, Death(turn=frame.turn, cause=cause)))

    for snake in alive:
        if death_by_health(snake.health):
            record(snake, DeathCause.STARVATION)
            continue
        head = snake.head()
        if head is None:
            continue
        if death_by_out_of_bounds(head, width, height):
            record(snake, DeathCause.WALL_COLLISION)
            continue
        for other in alive:
            if death_by_head_collision(snake, other):
                record(snake, DeathCause.HEAD_TO_HEAD_COLLISION)
            if head in other.body[1:]:
                if snake.id == other.id:
                    record(snake, DeathCause.SNAKE_SELF_COLLISION)
                else:
                    record(snake, DeathCause.SNAKE_COLLISION)
    return updates


def check_for_game_over(mode: str, frame: GameFrame) -> bool:
    """Single player ends with no snake alive, otherwise with one or none."""
    alive = len(frame.alive_snakes())
    if mode == GameMode.SINGLE_PLAYER:
        return alive == 0
    return alive <= 1
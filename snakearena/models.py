"""Core game state: points, snakes, frames, games and create requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RulesError(Exception):
    """Raised when the game rules cannot be applied to a state."""


class GameStatus(str, Enum):
    """Lifecycle status of a game."""

    STOPPED = "stopped"
    RUNNING = "running"
    ERROR = "error"
    COMPLETE = "complete"


class GameMode(str, Enum):
    """How the end of a game is decided."""

    SINGLE_PLAYER = "single-player"
    MULTI_PLAYER = "multi-player"


class DeathCause(str, Enum):
    """Reason a snake died."""

    SNAKE_COLLISION = "snake-collision"
    SNAKE_SELF_COLLISION = "snake-self-collision"
    STARVATION = "starvation"
    HEAD_TO_HEAD_COLLISION = "head-collision"
    WALL_COLLISION = "wall-collision"


@dataclass(frozen=True)
class Point:
    """A cell on the board."""

    x: int
    y: int


_DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


@dataclass
class Death:
    """When and why a snake died."""

    turn: int = 0
    cause: str = ""


@dataclass
class Snake:
    """A snake taking part in a game; the head is the first body point."""

    id: str = ""
    name: str = ""
    url: str = ""
    health: int = 0
    body: list[Point] = field(default_factory=list)
    death: Optional[Death] = None
    color: str = ""
    head_type: str = ""
    tail_type: str = ""
    latency: str = ""

    def head(self) -> Optional[Point]:
        """The first body point, or None for an empty body."""
        return self.body[0] if self.body else None

    def tail(self) -> Optional[Point]:
        """The last body point, or None for an empty body."""
        return self.body[-1] if self.body else None

    def move(self, direction: str) -> None:
        """Push a new head one cell in the given direction.

        Unknown directions fall back to the default move. The tail is left
        in place; trimming it is part of the tick.
        """
        delta = _DIRECTIONS.get(direction)
        if delta is None:
            self.default_move()
            return
        head = self.head()
        if head is None:
            return
        dx, dy = delta
        self.body.insert(0, Point(head.x + dx, head.y + dy))

    def default_move(self) -> None:
        """Move up, the move used when a snake gives no valid answer."""
        self.move("up")

    def is_alive(self) -> bool:
        return self.death is None


@dataclass
class Game:
    """Settings and bookkeeping of one game."""

    id: str = ""
    width: int = 0
    height: int = 0
    status: str = ""
    snake_timeout: int = 0
    mode: str = ""
    max_turns_to_next_food_spawn: int = 0
    turns_since_last_food_spawn: int = 0


@dataclass
class GameFrame:
    """The state of the board at one turn."""

    turn: int = 0
    snakes: list[Snake] = field(default_factory=list)
    food: list[Point] = field(default_factory=list)

    def alive_snakes(self) -> list[Snake]:
        return [snake for snake in self.snakes if snake.is_alive()]


@dataclass
class SnakeOptions:
    """A snake as requested when creating a game."""

    id: str = ""
    name: str = ""
    url: str = ""
    head_type: str = ""
    tail_type: str = ""


@dataclass
class CreateRequest:
    """Parameters for creating a new game."""

    width: int = 0
    height: int = 0
    food: int = 0
    snakes: list[SnakeOptions] = field(default_factory=list)
    snake_timeout: int = 0
    max_turns_to_next_food_spawn: int = 0
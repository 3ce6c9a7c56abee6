"""The /start call: collect colours and looks from each snake."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import httpx

from .colors import ColorPalette, default_palette
from .http import SnakeResponse, gather_all_snake_responses
from .models import Game, GameFrame, Snake
from .payload import parse_start_response

# Snake servers get a long time to answer /start, e.g. to wake from sleep.
START_TIMEOUT = 5.0

_COLOUR = re.compile(r"#?[a-fA-F0-9]{6}")


@dataclass
class SnakeMetadata:
    """A snake with the colour its /start response asked for."""

    snake: Optional[Snake]
    color: str = ""
    error: Optional[Exception] = None


def to_snake_metadata(response: SnakeResponse) -> SnakeMetadata:
    """Decode a /start response, copying head and tail types onto the snake."""
    if response.error is not None:
        return SnakeMetadata(response.snake, error=response.error)
    try:
        start = parse_start_response(response.data)
    except ValueError as exc:
        return SnakeMetadata(response.snake, error=exc)
    response.snake.head_type = start["head_type"]
    response.snake.tail_type = start["tail_type"]
    return SnakeMetadata(response.snake, color=start["color"])


def is_valid_colour(colour: str) -> bool:
    return _COLOUR.fullmatch(colour) is not None


def effective_color(meta: SnakeMetadata, palette: Optional[ColorPalette] = None) -> str:
    """The requested colour, or the next palette colour if it is unusable."""
    if meta.error is not None or meta.snake is None or not is_valid_colour(meta.color):
        return (palette or default_palette).next_color()
    return meta.color


def gather_snake_start_responses(
    timeout: float,
    game: Game,
    frame: GameFrame,
    client: Optional[httpx.Client] = None,
) -> list[SnakeMetadata]:
    responses = gather_all_snake_responses("start", timeout, game, frame, client)
    return [to_snake_metadata(response) for response in responses]


def notify_game_start(
    game: Game,
    frame: GameFrame,
    client: Optional[httpx.Client] = None,
    palette: Optional[ColorPalette] = None,
) -> None:
    """Call /start on every snake and give each one its colour."""
    for meta in gather_snake_start_responses(START_TIMEOUT, game, frame, client):
        meta.snake.color = effective_color(meta, palette)
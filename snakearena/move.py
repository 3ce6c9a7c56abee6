"""The /move and /end calls."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .http import (
    JSON_HEADERS,
    SnakeResponse,
    client_scope,
    gather_alive_snake_responses,
    get_url,
)
from .models import Game, GameFrame, Snake
from .payload import build_snake_request, parse_move_response

log = logging.getLogger(__name__)

END_TIMEOUT = 0.2


@dataclass
class SnakeUpdate:
    """A snake with the move it chose; latency is in seconds."""

    snake: Snake
    latency: float = 0.0
    move: str = ""
    error: Optional[Exception] = None


def to_snake_update(response: SnakeResponse) -> SnakeUpdate:
    if response.error is not None:
        return SnakeUpdate(response.snake, response.latency, error=response.error)
    try:
        move = parse_move_response(response.data)
    except ValueError as exc:
        return SnakeUpdate(response.snake, response.latency, error=exc)
    return SnakeUpdate(response.snake, response.latency, move=move)


def gather_snake_moves(
    timeout: float,
    game: Game,
    frame: GameFrame,
    client: Optional[httpx.Client] = None,
) -> list[SnakeUpdate]:
    """Ask every living snake for its next move."""
    responses = gather_alive_snake_responses("move", timeout, game, frame, client)
    return [to_snake_update(response) for response in responses]


def notify_game_end(
    game: Game, frame: GameFrame, client: Optional[httpx.Client] = None
) -> None:
    """Send /end to every snake; failures are logged and otherwise ignored."""
    with client_scope(client, END_TIMEOUT) as http_client:
        for snake in frame.snakes:
            payload = json.dumps(build_snake_request(game, frame, snake.id)).encode()
            try:
                http_client.post(
                    get_url(snake.url, "end"),
                    content=payload,
                    headers=JSON_HEADERS,
                    timeout=END_TIMEOUT,
                )
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                log.error("error POSTing to /end for snake %s: %s", snake.id, exc)
"""JSON payloads exchanged with snake servers."""

from __future__ import annotations

import json
from typing import Any, Iterable, Union

from .models import Game, GameFrame, Point, RulesError, Snake


def convert_points(points: Iterable[Point]) -> list[dict[str, int]]:
    return [{"x": point.x, "y": point.y} for point in points]


def convert_snake(snake: Snake) -> dict[str, Any]:
    return {
        "id": snake.id,
        "name": snake.name,
        "health": snake.health,
        "body": convert_points(snake.body),
    }


def build_snake_request(game: Game, frame: GameFrame, snake_id: str) -> dict[str, Any]:
    """Build the request body sent to the snake with the given id."""
    you = next((snake for snake in frame.snakes if snake.id == snake_id), None)
    if you is None:
        raise RulesError(f"snake {snake_id!r} is not in the frame")
    return {
        "game": {"id": game.id},
        "turn": frame.turn,
        "board": {
            "height": game.height,
            "width": game.width,
            "food": convert_points(frame.food),
            "snakes": [convert_snake(snake) for snake in frame.alive_snakes()],
        },
        "you": convert_snake(you),
    }


def _decode_fields(data: Union[str, bytes], names: Iterable[str]) -> dict[str, str]:
    """Pick string fields out of a JSON object, matching keys case-insensitively."""
    value = json.loads(data)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"cannot decode JSON {type(value).__name__} into a response object")
    wanted = {name.lower(): name for name in names}
    result: dict[str, str] = {}
    for key, item in value.items():
        name = wanted.get(key.lower())
        if name is None or item is None:
            continue
        if not isinstance(item, str):
            raise ValueError(f"field {key!r} must be a string")
        result[name] = item
    return result


def parse_move_response(data: Union[str, bytes]) -> str:
    """Return the move named in a /move response; empty if there is none."""
    return _decode_fields(data, ["move"]).get("move", "")


def parse_start_response(data: Union[str, bytes]) -> dict[str, str]:
    """Return color, head_type and tail_type from a /start response."""
    fields = _decode_fields(data, ["color", "headtype", "tailtype"])
    return {
        "color": fields.get("color", ""),
        "head_type": fields.get("headtype", ""),
        "tail_type": fields.get("tailtype", ""),
    }
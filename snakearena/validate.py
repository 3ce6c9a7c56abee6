"""Health checks of a snake server's endpoints."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import httpx

from .http import JSON_HEADERS, client_scope, get_url, is_valid_url
from .models import Game, GameFrame, Point, Snake
from .payload import build_snake_request

log = logging.getLogger(__name__)

# Response time, in milliseconds, considered slow for a snake.
SLOW_SNAKE_MS = 1000
VALIDATE_TIMEOUT = 5.0


@dataclass
class Score:
    checks_passed: int = 0
    checks_failed: int = 0


@dataclass
class SnakeResponseStatus:
    """The outcome of validating one endpoint."""

    message: str = ""
    raw: str = ""
    time: int = 0
    status_code: int = 0
    errors: list[str] = field(default_factory=list)
    score: Score = field(default_factory=Score)


class _ResponseFormatError(ValueError):
    """The snake answered with something that is not JSON."""


class _CallResult(NamedTuple):
    raw: str
    status_code: int
    time_ms: int
    error: Optional[Exception]


def _validation_state(game_id: str, url: str) -> tuple[Game, GameFrame]:
    game = Game(id=game_id, width=10, height=10, status="Running")
    snake = Snake(id="you", name="you", url=url, body=[Point(2, 2)])
    frame = GameFrame(turn=1, snakes=[snake], food=[Point(1, 1)])
    return game, frame


def _check_json(contents: bytes) -> Optional[Exception]:
    try:
        value = json.loads(contents)
    except ValueError as exc:
        return _ResponseFormatError(f"invalid JSON: {exc}")
    if value is not None and not isinstance(value, dict):
        return ValueError(f"cannot unmarshal JSON {type(value).__name__} into an object")
    return None


def _make_snake_call(
    game: Game,
    frame: GameFrame,
    url: str,
    endpoint: str,
    client: Optional[httpx.Client],
) -> _CallResult:
    if endpoint == "ping":
        payload = b"{}"
    else:
        payload = json.dumps(build_snake_request(game, frame, "you")).encode()
    with client_scope(client, VALIDATE_TIMEOUT) as http_client:
        start = time.perf_counter()
        try:
            with http_client.stream(
                "POST",
                get_url(url, endpoint),
                content=payload,
                headers=JSON_HEADERS,
                timeout=VALIDATE_TIMEOUT,
            ) as response:
                status_code = response.status_code
                time_ms = int((time.perf_counter() - start) * 1000)
                try:
                    contents = response.read()
                except httpx.HTTPError as exc:
                    return _CallResult("", status_code, 0, exc)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return _CallResult("", 0, 0, exc)
    raw = contents.decode("utf-8", errors="replace")
    error = None if endpoint in ("end", "ping") else _check_json(contents)
    return _CallResult(raw, status_code, time_ms, error)


def score_response(
    game_id: str,
    url: str,
    endpoint: str,
    slow_snake_ms: int,
    client: Optional[httpx.Client] = None,
) -> SnakeResponseStatus:
    """Call an endpoint and score its URL, status code, format and speed."""
    status = SnakeResponseStatus()
    score = status.score
    if not is_valid_url(url):
        score.checks_failed += 1
        status.message = "Snake URL not valid"
        status.errors = [f"invalid url '{url}'"]
        return status

    score.checks_passed += 1
    game, frame = _validation_state(game_id, url)
    result = _make_snake_call(game, frame, url, endpoint, client)
    status.message = "Perfect"
    status.raw = result.raw
    status.time = result.time_ms
    status.status_code = result.status_code

    if status.status_code > 0 and not 200 <= status.status_code < 300:
        score.checks_failed += 1
        status.message = "Bad return code, expected 200"
        status.errors.append(
            f"incorrect http response code, got {status.status_code}, expected 200"
        )
    else:
        score.checks_passed += 1

    if result.error is not None:
        score.checks_failed += 1
        if isinstance(result.error, _ResponseFormatError):
            status.message = "Bad response format - please ensure you return valid JSON"
        else:
            status.message = "Unknown error"
        status.errors.append(str(result.error))
    else:
        score.checks_passed += 1

    if result.time_ms < slow_snake_ms:
        score.checks_passed += 1
    else:
        status.message = "Slow snake"
        status.errors.append(
            f"snake took {result.time_ms} ms to respond, try and get it < {slow_snake_ms} ms."
        )
        score.checks_failed += 1
    return status


def validate_start(
    game_id: str, url: str, slow_snake_ms: int, client: Optional[httpx.Client] = None
) -> SnakeResponseStatus:
    return score_response(game_id, url, "start", slow_snake_ms, client)


def validate_move(
    game_id: str, url: str, slow_snake_ms: int, client: Optional[httpx.Client] = None
) -> SnakeResponseStatus:
    return score_response(game_id, url, "move", slow_snake_ms, client)


def validate_end(
    game_id: str, url: str, slow_snake_ms: int, client: Optional[httpx.Client] = None
) -> SnakeResponseStatus:
    return score_response(game_id, url, "end", slow_snake_ms, client)


def validate_ping(
    game_id: str, url: str, slow_snake_ms: int, client: Optional[httpx.Client] = None
) -> SnakeResponseStatus:
    return score_response(game_id, url, "ping", slow_snake_ms, client)
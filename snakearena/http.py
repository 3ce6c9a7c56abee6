"""HTTP plumbing for talking to snake servers."""

from __future__ import annotations

import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

import httpx

from .models import Game, GameFrame, RulesError, Snake
from .payload import build_snake_request

log = logging.getLogger(__name__)

MAX_RESPONSE_BYTES = 1_000_000
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass
class SnakeResponse:
    """What came back from one snake server; latency is in seconds."""

    snake: Snake
    data: bytes = b""
    error: Optional[Exception] = None
    latency: float = 0.0
    status_code: int = 0


def is_valid_url(url: str) -> bool:
    """True for a non-empty URL that parses and names a scheme."""
    if not url:
        return False
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False
    return bool(parsed.scheme)


def clean_url(url: str) -> str:
    """Make sure the URL ends with a slash."""
    return url if url.endswith("/") else f"{url}/"


def get_url(url: str, path: str) -> str:
    return f"{clean_url(url)}{path}"


def create_client(timeout: float) -> httpx.Client:
    """A client with the given timeout in seconds."""
    return httpx.Client(
        timeout=timeout,
        limits=httpx.Limits(max_keepalive_connections=200, keepalive_expiry=90.0),
    )


def client_scope(client: Optional[httpx.Client], timeout: float):
    """Use the given client, or a fresh one that is closed afterwards."""
    return create_client(timeout) if client is None else nullcontext(client)


def post_to_snake(
    client: httpx.Client, snake: Snake, endpoint: str, payload: bytes, timeout: float
) -> SnakeResponse:
    """POST a JSON payload to a snake endpoint, reading at most 1 MB back."""
    url = get_url(snake.url, endpoint)
    start = time.perf_counter()
    try:
        with client.stream(
            "POST", url, content=payload, headers=JSON_HEADERS, timeout=timeout
        ) as response:
            latency = time.perf_counter() - start
            chunks: list[bytes] = []
            size = 0
            read_error: Optional[Exception] = None
            try:
                for chunk in response.iter_bytes():
                    chunk = chunk[: MAX_RESPONSE_BYTES - size]
                    chunks.append(chunk)
                    size += len(chunk)
                    if size >= MAX_RESPONSE_BYTES:
                        break
            except httpx.HTTPError as exc:
                read_error = exc
            status_code = response.status_code
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log.error("error POSTing to snake %s at %s: %s", snake.id, url, exc)
        return SnakeResponse(snake, error=exc)
    log.debug("snake %s answered %s on %s in %.3fs", snake.id, status_code, endpoint, latency)
    return SnakeResponse(
        snake,
        data=b"".join(chunks),
        error=read_error,
        latency=latency,
        status_code=status_code,
    )


def gather_snake_responses(
    endpoint: str,
    timeout: float,
    game: Game,
    frame: GameFrame,
    snakes: Iterable[Snake],
    client: Optional[httpx.Client] = None,
) -> list[SnakeResponse]:
    """Call the endpoint on every given snake concurrently, in snake order."""
    snakes = list(snakes)
    if not snakes:
        return []

    with client_scope(client, timeout) as http_client:

        def ask(snake: Snake) -> SnakeResponse:
            if not is_valid_url(snake.url):
                return SnakeResponse(snake, error=RulesError(f"invalid snake URL: {snake.url}"))
            try:
                payload = json.dumps(build_snake_request(game, frame, snake.id)).encode()
            except RulesError as exc:
                log.error("error while building request for snake %s: %s", snake.id, exc)
                return SnakeResponse(snake, error=exc)
            return post_to_snake(http_client, snake, endpoint, payload, timeout)

        with ThreadPoolExecutor(max_workers=len(snakes)) as pool:
            return list(pool.map(ask, snakes))


def gather_all_snake_responses(
    endpoint: str,
    timeout: float,
    game: Game,
    frame: GameFrame,
    client: Optional[httpx.Client] = None,
) -> list[SnakeResponse]:
    return gather_snake_responses(endpoint, timeout, game, frame, frame.snakes, client)


def gather_alive_snake_responses(
    endpoint: str,
    timeout: float,
    game: Game,
    frame: GameFrame,
    client: Optional[httpx.Client] = None,
) -> list[SnakeResponse]:
    return gather_snake_responses(endpoint, timeout, game, frame, frame.alive_snakes(), client)
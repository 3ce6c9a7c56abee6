import httpx
import pytest

from snakearena.colors import DEFAULT_COLORS, ColorPalette
from snakearena.http import SnakeResponse
from snakearena.models import Game, GameFrame, Snake
from snakearena.start import (
    SnakeMetadata,
    effective_color,
    gather_snake_start_responses,
    is_valid_colour,
    notify_game_start,
    to_snake_metadata,
)


def endpoint_client(url, body, status):
    def handler(request):
        assert str(request.url) == url
        return httpx.Response(status, content=body.encode())

    return httpx.Client(transport=httpx.MockTransport(handler))


def snake_after_start(body, status, palette):
    snake = Snake(url="http://good-server")
    with endpoint_client("http://good-server/start", body, status) as client:
        notify_game_start(Game(), GameFrame(snakes=[snake]), client, palette)
    return snake


def test_start_snakes():
    snake = snake_after_start('{"color":"#ff0000"}', 200, ColorPalette(DEFAULT_COLORS))
    assert snake.color == "#ff0000"
    assert snake.death is None


def test_start_snakes_missing_color():
    snake = snake_after_start("{}", 200, ColorPalette(["red", "green", "blue"]))
    assert snake.color == "red"
    assert snake.death is None


def test_start_snakes_missing_endpoint():
    snake = snake_after_start("{}", 404, ColorPalette(["red", "green", "blue"]))
    assert snake.color == "red"
    assert snake.death is None


def test_start_snakes_missing_server():
    def handler(request):
        raise httpx.ConnectError("fail")

    snake = Snake(url="http://dead-server")
    palette = ColorPalette(["red", "green", "blue"])
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        notify_game_start(Game(), GameFrame(snakes=[snake]), client, palette)
    assert snake.color == "red"
    assert snake.death is None


def test_start_sets_head_and_tail_types():
    body = '{"color":"#00ff00","headType":"bendr","tailType":"pixel"}'
    snake = snake_after_start(body, 200, ColorPalette(["red"]))
    assert (snake.color, snake.head_type, snake.tail_type) == ("#00ff00", "bendr", "pixel")


@pytest.mark.parametrize(
    "colour, valid",
    [("#CDCDCD", True), ("CDCDCD", True), ("#aaaaaaa", False), ("#zzzzzz", False)],
)
def test_is_valid_colour(colour, valid):
    assert is_valid_colour(colour) is valid


def test_effective_colour():
    palette = ColorPalette(["red", "green"])
    meta = SnakeMetadata(Snake(), color="#CDCDCD")
    assert effective_color(meta, palette) == "#CDCDCD"
    meta.color = "#aaaaaaa"
    assert effective_color(meta, palette) == "red"


def test_effective_colour_on_error_or_missing_snake():
    palette = ColorPalette(["red", "green"])
    assert effective_color(SnakeMetadata(Snake(), "#CDCDCD", ValueError("x")), palette) == "red"
    assert effective_color(SnakeMetadata(None, "#CDCDCD"), palette) == "green"


def test_to_snake_metadata_bad_json():
    meta = to_snake_metadata(SnakeResponse(Snake(), data=b"{{"))
    assert isinstance(meta.error, ValueError)
    assert meta.color == ""


def test_to_snake_metadata_passes_error_through():
    error = RuntimeError("boom")
    meta = to_snake_metadata(SnakeResponse(Snake(), error=error))
    assert meta.error is error


def test_gather_snake_start_responses():
    snake = Snake(url="http://good-server")
    with endpoint_client("http://good-server/start", '{"color":"#123456"}', 200) as client:
        metas = gather_snake_start_responses(5.0, Game(), GameFrame(snakes=[snake]), client)
    assert [(m.snake, m.color, m.error) for m in metas] == [(snake, "#123456", None)]
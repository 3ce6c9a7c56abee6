import re
import time

import httpx
import pytest

from snakearena.validate import (
    score_response,
    validate_end,
    validate_move,
    validate_ping,
    validate_start,
)

SNAKE_URL = "http://good-server"
VALIDATION_COUNT = 4


def mock_client(url, body, status, sleep=0.0, sent=None):
    def handler(request):
        time.sleep(sleep)
        assert str(request.url) == url
        if sent is not None:
            sent.append(request.content)
        return httpx.Response(status, content=body.encode())

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_validate_ping_404():
    with mock_client(SNAKE_URL + "/ping", "{}", 404) as client:
        response = validate_ping("1234", SNAKE_URL, 200, client)
    assert response.errors[0] == "incorrect http response code, got 404, expected 200"
    assert response.message == "Bad return code, expected 200"


def test_validate_trailing_slash():
    with mock_client(SNAKE_URL + "/ping", "{}", 200) as client:
        response = validate_ping("1234", SNAKE_URL + "/", 200, client)
    assert response.score.checks_passed == VALIDATION_COUNT


def test_validate_ping_500():
    with mock_client(SNAKE_URL + "/ping", "{}", 500) as client:
        response = validate_ping("1234", SNAKE_URL, 200, client)
    assert response.errors[0] == "incorrect http response code, got 500, expected 200"


@pytest.mark.parametrize(
    "validator, endpoint, raw",
    [
        (validate_end, "end", ""),
        (validate_move, "move", "{  }"),
        (validate_ping, "ping", "{  }"),
        (validate_start, "start", '{ "color": "blue" }'),
        (validate_end, "end", "WE DON'T CARE ABOUT THE RESPONSE FORMAT"),
        (validate_ping, "ping", "WE DON'T CARE ABOUT THE RESPONSE FORMAT"),
    ],
)
def test_validate_perfect(validator, endpoint, raw):
    with mock_client(f"{SNAKE_URL}/{endpoint}", raw, 200) as client:
        response = validator("1234", SNAKE_URL, 100, client)
    assert "Perfect" in response.message
    assert response.errors == []
    assert response.raw == raw
    assert response.status_code == 200
    assert response.score.checks_passed == VALIDATION_COUNT
    assert response.score.checks_failed == 0


def test_validate_start_bad_json():
    raw = '{ color": "blue" }'
    with mock_client(SNAKE_URL + "/start", raw, 200) as client:
        response = validate_start("1234", SNAKE_URL, 100, client)
    assert "Bad response format" in response.message
    assert len(response.errors) == 1
    assert response.errors[0].startswith("invalid JSON")
    assert response.raw == raw
    assert response.score.checks_passed == VALIDATION_COUNT - 1
    assert response.score.checks_failed == 1


def test_validate_move_non_object_is_unknown_error():
    with mock_client(SNAKE_URL + "/move", "[1, 2]", 200) as client:
        response = validate_move("1234", SNAKE_URL, 100, client)
    assert response.message == "Unknown error"
    assert response.score.checks_failed == 1


def test_validate_start_bad_url():
    response = validate_start("1234", "start", 100)
    assert "Snake URL not valid" in response.message
    assert response.errors == ["invalid url 'start'"]
    assert (response.score.checks_passed, response.score.checks_failed) == (0, 1)


def test_validate_slow_url():
    slow_snake = 1
    with mock_client(SNAKE_URL + "/move", "{}", 200, sleep=(slow_snake + 1) / 1000) as client:
        response = validate_move("1234", SNAKE_URL, slow_snake, client)
    match = re.search(r"snake took (\d+) ms", response.errors[0])
    assert match is not None
    assert int(match.group(1)) > slow_snake
    assert response.message == "Slow snake"


def test_validate_unreachable_server():
    def handler(request):
        raise httpx.ConnectError("fail")

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        response = score_response("1234", SNAKE_URL, "move", 100, client)
    assert response.message == "Unknown error"
    assert response.errors == ["fail"]
    assert (response.score.checks_passed, response.score.checks_failed) == (3, 1)


def test_ping_sends_empty_object():
    sent = []
    with mock_client(SNAKE_URL + "/ping", "{}", 200, sent=sent) as client:
        validate_ping("1234", SNAKE_URL, 100, client)
    assert sent == [b"{}"]
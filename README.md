# snakearena

A rules engine for multiplayer snake games in which every snake is controlled
by its own HTTP server. The engine creates games, asks each snake server for
its move every turn, moves the snakes, handles food, and decides who dies and
when the game is over.

## Installation

```
pip install snakearena
```

## Snake servers

Each snake is an HTTP server at a base URL. The engine sends JSON `POST`
requests to these endpoints:

- `start`: called once when a game is created. The reply may pick a `color`
  (`#rrggbb` or `rrggbb`), a `headType` and a `tailType`.
- `move`: called every turn. The reply is `{"move": "up" | "down" | "left" | "right"}`.
- `end`: called once when the game is over.
- `ping`: used only by the validation helpers.

The request body holds the game id, the turn number, the board (width, height,
food and the living snakes) and the receiving snake as `you`. Replies are read
up to 1 MB.

## Running a game

```python
import random

from snakearena.create import create_initial_game
from snakearena.death import check_for_game_over
from snakearena.http import create_client
from snakearena.models import CreateRequest, GameMode, SnakeOptions
from snakearena.move import notify_game_end
from snakearena.tick import game_tick

request = CreateRequest(
    width=11,
    height=11,
    food=5,
    snakes=[
        SnakeOptions(name="one", url="http://localhost:8001"),
        SnakeOptions(name="two", url="http://localhost:8002"),
    ],
)

rng = random.Random()
client = create_client(5.0)
game, frames = create_initial_game(request, client=client, rng=rng)

frame = frames[-1]
while True:
    frame = game_tick(game, frame, client=client, rng=rng)
    frames.append(frame)
    if check_for_game_over(GameMode(game.mode), frame):
        notify_game_end(game, frame, client=client)
        break
```

On the tournament board sizes (7x7, 11x11 and 19x19) snakes start at fixed
positions; on any other size they are placed at random on squares of the same
colour, like bishops on a chessboard. Snakes without an id are given a random
UUID. Snake timeouts outside 1 to 5000 milliseconds fall back to 500.

`create_initial_game` raises `RulesError` when the snake ids clash, when the
board has no room left for another snake, or when a tournament board is asked
for more than eight snakes; `game_tick` raises it when it has no previous
frame to work from.

## Rules of a turn

1. Every living snake moves; a snake whose server fails, answers badly or
   names an unknown direction moves up.
2. Every living snake loses one point of health.
3. A snake whose head lands on food is fed back to 100 health and grows by one.
4. Eaten food is replaced; with `max_turns_to_next_food_spawn` set, food
   instead appears with a chance that rises each turn until the limit is hit,
   one piece for every two living snakes (rounded up).
5. Snakes die of starvation, of leaving the board, of running into a body
   (their own or another's), or of meeting the head of a snake at least as long.

A multi-player game ends when one snake or none is left; a single-player game
ends when its only snake dies.

## Checking a snake server

```python
from snakearena.validate import validate_move

status = validate_move("check-1", "http://localhost:8001", 1000)
print(status.message, status.score.checks_passed, status.score.checks_failed)
print(status.errors)
```

`validate_start`, `validate_end` and `validate_ping` work the same way. Each
scores the URL, the HTTP status, whether the body is valid JSON (not checked
for `end` and `ping`), and whether the reply came faster than the given number
of milliseconds.

## Snake colours

Snakes that choose no valid colour in their `start` reply get the next colour
from a shared palette, which wraps around when it runs out. A palette of your
own can be passed to `create_initial_game`:

```python
from snakearena.colors import ColorPalette

palette = ColorPalette(["red", "green", "blue"])
palette.next_color()  # "red"
```

## What this package does not do

It is a library of game rules only. It has no command-line program, no server
that accepts requests to create or watch games, no storage of games or frames,
and no worker that picks up queued games; the loop above is left to the caller.

## Tests

```
pip install -e ".[test]"
pytest
```
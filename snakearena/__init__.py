"""Rules engine for multiplayer snake games played by HTTP snake servers."""

__version__ = "0.1.0"

__all__ = [
    "board",
    "colors",
    "create",
    "death",
    "http",
    "models",
    "move",
    "payload",
    "start",
    "tick",
    "validate",
]
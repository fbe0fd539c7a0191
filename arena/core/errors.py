# arena/core/errors.py


class ArenaError(Exception):
    """Base class for every error raised by the arena core."""


class InvalidInputError(ArenaError, ValueError):
    """Bad endpoints, sizes, difficulty names, algorithm names or map files."""


class WeightsConfigError(ArenaError, ValueError):
    """The predictor weight table is missing entries or holds non-numbers."""

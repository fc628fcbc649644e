"""Error types raised by the Game of Life engine."""


class GameOfLifeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(GameOfLifeError, ValueError):
    """Invalid run parameters: dimensions, selector, density, iterations."""


class SeedMismatchError(ConfigurationError):
    """A seed snapshot declares dimensions other than the requested ones."""

    def __init__(self, path, declared: tuple[int, int], requested: tuple[int, int]):
        self.path = path
        self.declared = declared
        self.requested = requested
        super().__init__(
            f"Seed file {path} is {declared[0]}x{declared[1]}, "
            f"but a {requested[0]}x{requested[1]} grid was requested"
        )


class SnapshotParseError(GameOfLifeError, ValueError):
    """A snapshot header could not be parsed."""

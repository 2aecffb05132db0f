class RushHourError(Exception):
    """Base exception class for Rush Hour errors."""
    pass


class PuzzleParseError(RushHourError, ValueError):
    """Raised when puzzle text cannot be turned into a board."""
    pass


class InvalidVehicle(RushHourError, ValueError):
    """Raised when a vehicle is built from an unusable cell set."""
    pass


class InvalidMove(RushHourError):
    """Raised when an explicit move cannot be applied to a board."""
    pass


class CarNotFound(RushHourError, KeyError):
    """Raised when a specified car is not found on the board."""
    pass


class SearchLimitReached(RushHourError):
    """Raised when the search explores more states than allowed."""

    def __init__(self, limit: int):
        super().__init__(f"Search limit of {limit} states reached.")
        self.limit = limit

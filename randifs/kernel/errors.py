class ConfigurationError(ValueError):
    """Raised when an orbit cannot be built from the supplied configuration:
    a malformed probability table, a degenerate window, a bad canvas size
    or an unknown preset. Always raised while constructing, never while
    iterating."""


class SearchExhausted(RuntimeError):
    """The bounded fixed-point search used up its rounds without finding a
    point within tolerance."""

    def __init__(self, rounds: int, tries: int):
        self.rounds = rounds
        self.tries = tries
        super().__init__(f"no fixed point found after {rounds} rounds of {tries} tries")

"""Hold'em engine exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly.
Degenerate tables (fewer than two players with chips) are not errors; they
are modelled as a terminal game state.
"""


class HoldemError(Exception):
    """Root of all Hold'em engine exceptions."""


class PokerError(HoldemError):
    """Errors in the poker rules engine."""


class IllegalActionError(PokerError):
    """An action outside the acting player's legal set, or out of turn.

    Raised before any state is mutated.
    """


class MalformedRangeError(PokerError):
    """A range table entry that does not describe a valid starting hand."""

    def __init__(self, message: str, bad_entries=None):
        super().__init__(message)
        self.bad_entries = list(bad_entries or [])


class ConfigurationError(HoldemError):
    """Invalid or missing configuration."""


class TableNotFoundError(HoldemError):
    """No table is registered under the requested id."""

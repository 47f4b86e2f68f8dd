"""Texas Hold'em trainer engine.

The ``holdem.poker`` package holds the rules engine (cards, hand evaluation,
positions, betting rounds, side pots and the AI opponent model).
``holdem.trainer_game`` wraps one table for interactive play.
"""

__version__ = "1.0.0"

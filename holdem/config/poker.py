"""Poker game configuration constants."""

# Table Limits
POKER_MIN_PLAYERS = 2  # Fewer players than this ends the session
POKER_MAX_PLAYERS = 9  # Seats at a full ring table

# Default Stakes
POKER_DEFAULT_STARTING_STACK = 1000  # Chips each player starts a session with
POKER_DEFAULT_SMALL_BLIND = 25
POKER_DEFAULT_BIG_BLIND = 50
POKER_DEFAULT_ANTE = 0

# Dealing
POKER_HOLE_CARDS = 2  # Cards dealt to each player
POKER_BURN_CARDS = 1  # Burned before each street

# Players
POKER_HUMAN_SEAT = 0  # Seat index of the human player
POKER_HUMAN_NAME = "You"

# AI Range Frequency Scaling
POKER_TIGHT_FOLD_THRESHOLD = 0.6  # Fold threshold above which ranges are played tighter
POKER_LOOSE_FOLD_THRESHOLD = 0.4  # Fold threshold below which ranges are played looser
POKER_TIGHT_FREQUENCY_SCALE = 0.7  # Frequency multiplier for tight personalities
POKER_LOOSE_FREQUENCY_SCALE = 1.3  # Frequency multiplier for loose personalities

# AI Preflop Tier Table
POKER_STRONG_TIER_FOLD_WEIGHT = 0.3  # Fold threshold weight when playing strong hands
POKER_MEDIUM_TIER_FOLD_WEIGHT = 0.7  # Fold threshold weight when playing medium hands
POKER_LOOSE_TIER_MAX_FOLD_THRESHOLD = 0.3  # Only very loose players widen to the loose tier
POKER_LOOSE_TIER_PLAY_PROBABILITY = 0.5  # Probability of playing a loose-tier hand
POKER_RANGE_BET_BB_BASE = 2.0  # Opening bet in big blinds before aggression is added

# AI Postflop Heuristic
POKER_WEAK_HAND_THRESHOLD = 0.3  # Strength below which weak hands check/fold
POKER_STRONG_HAND_THRESHOLD = 0.7  # Strength above which hands bet/raise
POKER_BLUFF_HAND_THRESHOLD = 0.4  # Bluffs only happen below this strength
POKER_BLUFF_BET_BB_MULTIPLIER = 2  # Bluff bet size in big blinds
POKER_VALUE_BET_BB_BASE = 1.0  # Value bet in big blinds before aggression is added

# Coarse Hand Strength
POKER_HIGH_CARD_WEIGHT = 0.3  # Weight of the top rank (rank / 14)
POKER_PAIR_BONUS = 0.4  # Bonus when a hole card pairs
POKER_TWO_PAIR_BONUS = 0.5  # Bonus when both hole cards pair (or two pairs involve a hole card)
POKER_TRIPS_BONUS = 0.6  # Bonus for three or more of a hole card's rank

# Personality presets handed to AI seats in order (the last one repeats)
POKER_DEFAULT_PERSONALITIES = (
    "TIGHT_PASSIVE",
    "LOOSE_AGGRESSIVE",
    "BALANCED",
    "CALLING_STATION",
)

# History
POKER_MAX_HAND_HISTORY = 200  # Finished hands a session keeps in memory

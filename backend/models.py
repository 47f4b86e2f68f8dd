"""Request and response models for the trainer HTTP API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from holdem.config.game_settings import BlindLevel, GameSettings, GameType
from holdem.config.poker import (
    POKER_DEFAULT_ANTE,
    POKER_DEFAULT_BIG_BLIND,
    POKER_DEFAULT_SMALL_BLIND,
    POKER_DEFAULT_STARTING_STACK,
    POKER_MAX_PLAYERS,
    POKER_MIN_PLAYERS,
)
from holdem.poker.strategy.personality import AIPersonality, get_personality
from holdem.poker.strategy.ranges import AIRange


class RangeEntryModel(BaseModel):
    """One starting hand in a range."""

    hand: str  # e.g. 'AKs', 'QQ', 'T9o'
    frequency: float
    action: str = "call"


class RangeModel(BaseModel):
    """A named preflop range as submitted by a client."""

    name: str
    description: str = ""
    hands: List[RangeEntryModel] = Field(default_factory=list)

    def to_range(self) -> AIRange:
        # Structural checks (unknown notation, bad frequency) happen on validate()
        return AIRange.from_dict(self.model_dump())


class PersonalityModel(BaseModel):
    """AI personality: a preset name or explicit traits."""

    preset: Optional[str] = None  # e.g. 'TIGHT_PASSIVE'
    name: str = "Custom"
    aggressiveness: float = 0.5
    bluff_frequency: float = 0.2
    fold_threshold: float = 0.5
    raise_bias: float = 0.4
    preflop_range: Optional[str] = None
    custom_range: Optional[RangeModel] = None

    def to_personality(self) -> AIPersonality:
        if self.preset:
            personality = get_personality(self.preset)
            if self.custom_range is not None:
                personality = personality.with_range(self.custom_range.to_range())
            return personality
        return AIPersonality(
            name=self.name,
            aggressiveness=self.aggressiveness,
            bluff_frequency=self.bluff_frequency,
            fold_threshold=self.fold_threshold,
            raise_bias=self.raise_bias,
            preflop_range=self.preflop_range,
            custom_range=self.custom_range.to_range() if self.custom_range else None,
        )


class BlindLevelModel(BaseModel):
    level: int
    small_blind: int
    big_blind: int
    ante: int = 0
    hands_per_level: int = 10


class SettingsModel(BaseModel):
    """Table settings; omitted fields use the cash game defaults."""

    game_type: GameType = GameType.CASH
    starting_stack: int = POKER_DEFAULT_STARTING_STACK
    small_blind: Optional[int] = None
    big_blind: Optional[int] = None
    ante: Optional[int] = None
    blind_levels: Optional[List[BlindLevelModel]] = None
    ai_personalities: Optional[List[PersonalityModel]] = None
    has_human: bool = True

    def to_settings(self) -> GameSettings:
        """Build validated GameSettings (raises ConfigurationError)."""
        overrides: Dict[str, Any] = {
            "starting_stack": self.starting_stack,
            "has_human": self.has_human,
        }
        for key in ("small_blind", "big_blind", "ante"):
            value = getattr(self, key)
            if value is not None:
                overrides[key] = value
        if self.blind_levels is not None:
            overrides["blind_levels"] = [BlindLevel(**lvl.model_dump()) for lvl in self.blind_levels]
        if self.ai_personalities:
            overrides["ai_personalities"] = [p.to_personality() for p in self.ai_personalities]

        if self.game_type == GameType.TOURNAMENT:
            return GameSettings.tournament(**overrides).validate()
        overrides.setdefault("small_blind", POKER_DEFAULT_SMALL_BLIND)
        overrides.setdefault("big_blind", POKER_DEFAULT_BIG_BLIND)
        overrides.setdefault("ante", POKER_DEFAULT_ANTE)
        return GameSettings(**overrides).validate()


class CreateTableRequest(BaseModel):
    """Request to open a new table."""

    player_count: int = Field(default=6, ge=POKER_MIN_PLAYERS, le=POKER_MAX_PLAYERS)
    seed: Optional[int] = None
    previous_dealer_index: Optional[int] = Field(default=None, ge=0)
    settings: Optional[SettingsModel] = None
    auto_play: bool = True  # Play AI turns until the human must act


class ActionRequest(BaseModel):
    """A player's betting action."""

    player_id: str
    action: str  # fold, check, call, bet, raise, all-in
    amount: Optional[int] = None  # Street total for bet/raise
    auto_play: bool = True

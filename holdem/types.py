"""Core enumerations and table constants for the poker engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

MAX_PLAYERS = 6
"""Maximum number of players per game."""

MIN_PLAYERS = 2
"""Minimum number of players needed to start."""

HOLE_CARDS = 2
"""Number of hole cards per player."""

COMMUNITY_CARDS = 5
"""Number of community cards."""

DECK_SIZE = 52
"""Total cards in a deck."""

TURN_TIMEOUT = 60
"""Turn timeout in seconds."""

MIN_RAISE_MULTIPLIER = 2
"""Minimum raise multiplier."""

DEFAULT_SMALL_BLIND = 1_000_000
"""Default small blind, in the smallest chip unit."""

DEFAULT_BIG_BLIND = 2_000_000
"""Default big blind."""

MIN_BUY_IN = 200_000_000
"""Default minimum buy-in (100 big blinds)."""

MAX_BUY_IN = 2_000_000_000
"""Default maximum buy-in (1000 big blinds)."""


class GameStage(Enum):
    """Phase of a game. A new game starts in ``WAITING``."""

    WAITING = 0
    PRE_FLOP = 1
    FLOP = 2
    TURN = 3
    RIVER = 4
    SHOWDOWN = 5
    FINISHED = 6


class PlayerAction(Enum):
    """Kinds of action recorded for a player."""

    FOLD = 0
    CHECK = 1
    CALL = 2
    RAISE = 3
    ALL_IN = 4


class ActionKind(Enum):
    """Kinds of action a player may request."""

    FOLD = 0
    CHECK = 1
    CALL = 2
    BET = 3
    RAISE = 4
    ALL_IN = 5


_AMOUNT_KINDS = frozenset({ActionKind.BET, ActionKind.RAISE})


@dataclass(frozen=True)
class PlayerActionParam:
    """A requested player action; bets and raises carry an amount."""

    kind: ActionKind
    amount: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind in _AMOUNT_KINDS:
            if self.amount is None:
                raise ValueError(f"{self.kind.name} requires an amount")
            if self.amount < 0:
                raise ValueError("amount must not be negative")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.name} takes no amount")


class PlayerStatus(Enum):
    """Status of a player in the current hand. New players are ``WAITING``."""

    WAITING = 0
    ACTIVE = 1
    FOLDED = 2
    ALL_IN = 3
    LEFT = 4


class Suit(Enum):
    """Card suit, in deck order."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Rank(IntEnum):
    """Card rank; the value is the numeric rank, ace high."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class HandRank(IntEnum):
    """Poker hand categories, weakest first."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9
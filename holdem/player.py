"""Per-player state within a game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, List

from .errors import ErrorCode, PokerError
from .types import HOLE_CARDS, PlayerStatus


def _empty_hole_cards() -> List[int]:
    return [0] * HOLE_CARDS


@dataclass
class PlayerState:
    """A player's seat, chips and hand state in one game."""

    player: Hashable
    game: Hashable
    seat_index: int
    status: PlayerStatus = PlayerStatus.WAITING
    chip_stack: int = 0
    current_bet: int = 0
    total_bet_this_hand: int = 0
    encrypted_hole_cards: List[int] = field(default_factory=_empty_hole_cards)
    has_cards: bool = False
    has_folded: bool = False
    is_all_in: bool = False
    joined_at: int = 0
    last_action_at: int = 0
    bump: int = 0

    @classmethod
    def create(
        cls,
        player: Hashable,
        game: Hashable,
        seat_index: int,
        buy_in: int,
        bump: int,
        now: int,
    ) -> "PlayerState":
        """A freshly seated player holding ``buy_in`` chips."""
        return cls(
            player=player,
            game=game,
            seat_index=seat_index,
            status=PlayerStatus.WAITING,
            chip_stack=buy_in,
            joined_at=now,
            last_action_at=now,
            bump=bump,
        )

    def place_bet(self, amount: int, now: int) -> None:
        """Move ``amount`` chips from the stack into the current bet."""
        if amount < 0:
            raise PokerError(ErrorCode.INVALID_BET_AMOUNT)
        if self.chip_stack < amount:
            raise PokerError(ErrorCode.INSUFFICIENT_CHIPS)
        self.chip_stack -= amount
        self.current_bet += amount
        self.total_bet_this_hand += amount
        if self.chip_stack == 0:
            self.is_all_in = True
        self.last_action_at = now

    def fold(self, now: int) -> None:
        """Give up the current hand."""
        self.has_folded = True
        self.status = PlayerStatus.FOLDED
        self.last_action_at = now

    def reset_for_new_round(self) -> None:
        """Clear the bet for a new betting round."""
        self.current_bet = 0

    def reset_for_new_hand(self) -> None:
        """Clear all hand state; players with chips become active."""
        self.current_bet = 0
        self.total_bet_this_hand = 0
        self.encrypted_hole_cards = _empty_hole_cards()
        self.has_cards = False
        self.has_folded = False
        self.is_all_in = False
        if self.chip_stack > 0:
            self.status = PlayerStatus.ACTIVE

    def add_winnings(self, amount: int) -> None:
        """Add chips won to the stack."""
        self.chip_stack += amount
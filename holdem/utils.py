"""Small helpers shared across the game logic."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .errors import ErrorCode, PokerError


def validate_buy_in(amount: int, min_buy_in: int, max_buy_in: int) -> None:
    """Raise if ``amount`` lies outside ``[min_buy_in, max_buy_in]``."""
    if amount < min_buy_in:
        raise PokerError(ErrorCode.BUY_IN_TOO_LOW)
    if amount > max_buy_in:
        raise PokerError(ErrorCode.BUY_IN_TOO_HIGH)


def find_next_active_player(
    current_index: int, active_players: Sequence[bool], player_count: int
) -> Optional[int]:
    """Return the next active seat after ``current_index``, wrapping around."""
    for step in range(1, player_count + 1):
        seat = (current_index + step) % player_count
        if active_players[seat]:
            return seat
    return None


def calculate_pot_total(contributions: Iterable[int]) -> int:
    """Sum all contributions to the pot."""
    return sum(contributions)
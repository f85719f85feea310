"""Rules for cashing chips out of a game."""

from __future__ import annotations

from typing import Tuple

from .errors import ErrorCode, PokerError
from .game import Game
from .player import PlayerState
from .types import GameStage


def calculate_withdrawal_fee(amount: int, rake_percentage: int) -> Tuple[int, int]:
    """Split a withdrawal into ``(net_amount, fee)``."""
    if rake_percentage == 0:
        return amount, 0
    fee = amount * rake_percentage // 100
    return max(amount - fee, 0), fee


def validate_withdrawal(player_state: PlayerState, game: Game, chip_amount: int) -> None:
    """Raise unless the player may withdraw ``chip_amount`` chips now."""
    if game.stage not in (GameStage.WAITING, GameStage.FINISHED):
        raise PokerError(ErrorCode.INVALID_GAME_STAGE)
    if player_state.chip_stack < chip_amount:
        raise PokerError(ErrorCode.INSUFFICIENT_CHIPS)
    if player_state.has_cards and not player_state.has_folded:
        raise PokerError(ErrorCode.INVALID_ACTION)
"""Hand progression: stages, turn order, dealer button and timeouts."""

from __future__ import annotations

import logging
from typing import Sequence

from .errors import ErrorCode, PokerError
from .game import Game, reveal_community_cards
from .player import PlayerState
from .types import COMMUNITY_CARDS, MAX_PLAYERS, MIN_PLAYERS, TURN_TIMEOUT, GameStage

logger = logging.getLogger(__name__)

_NEXT_STAGE = {
    GameStage.PRE_FLOP: GameStage.FLOP,
    GameStage.FLOP: GameStage.TURN,
    GameStage.TURN: GameStage.RIVER,
    GameStage.RIVER: GameStage.SHOWDOWN,
}

_CARDS_REVEALED = {
    GameStage.FLOP: 3,
    GameStage.TURN: 1,
    GameStage.RIVER: 1,
}


def advance_game_stage(game: Game, now: int) -> None:
    """Move to the next stage, reset betting and turn the board cards for it."""
    try:
        next_stage = _NEXT_STAGE[game.stage]
    except KeyError:
        raise PokerError(ErrorCode.INVALID_GAME_STAGE) from None

    count = _CARDS_REVEALED.get(next_stage, 0)
    if count:
        # Fail before touching the game if there is no deck to deal from.
        game.get_encrypted_deck()

    game.stage = next_stage
    reset_betting_round(game, now)
    if count:
        reveal_community_cards(game, count)
    logger.debug("advanced game %s to %s", game.game_id, next_stage.name)


def reset_betting_round(game: Game, now: int) -> None:
    """Clear bets and action flags and pick the first player to act."""
    game.current_bet = 0
    game.players_acted = [False] * MAX_PLAYERS
    game.current_player_index = get_first_player_for_round(game)
    game.last_action_at = now


def _first_active_from(game: Game, start: int):
    seat = start % game.player_count
    for _ in range(game.player_count):
        if game.active_players[seat]:
            return seat
        seat = (seat + 1) % game.player_count
    return None


def get_first_player_for_round(game: Game) -> int:
    """First active seat to act: after the big blind pre-flop, else after the dealer."""
    offset = 3 if game.stage == GameStage.PRE_FLOP else 1
    seat = _first_active_from(game, game.dealer_position + offset)
    return game.dealer_position if seat is None else seat


def rotate_dealer_button(game: Game) -> None:
    """Move the dealer button to the next active seat."""
    seat = _first_active_from(game, game.dealer_position + 1)
    if seat is None:
        raise PokerError(ErrorCode.NOT_ENOUGH_PLAYERS)
    logger.debug("dealer button moved from %s to %s", game.dealer_position, seat)
    game.dealer_position = seat


def get_small_blind_position(game: Game) -> int:
    """Seat of the small blind; the dealer posts it heads-up."""
    if game.player_count == 2:
        return game.dealer_position
    return (game.dealer_position + 1) % game.player_count


def get_big_blind_position(game: Game) -> int:
    """Seat of the big blind."""
    if game.player_count == 2:
        return (game.dealer_position + 1) % game.player_count
    return (game.dealer_position + 2) % game.player_count


def check_turn_timeout(game: Game, now: int) -> bool:
    """Whether the player to act has run out of time."""
    return now - game.last_action_at >= TURN_TIMEOUT


def handle_player_timeout(game: Game, player_state: PlayerState, now: int) -> None:
    """Fold the timed-out player to act and pass the turn on."""
    if not check_turn_timeout(game, now):
        raise PokerError(ErrorCode.INVALID_ACTION)
    if game.current_player_index != player_state.seat_index:
        raise PokerError(ErrorCode.NOT_PLAYER_TURN)
    player_state.fold(now)
    game.active_players[player_state.seat_index] = False
    logger.debug("player %s timed out and folded", player_state.player)
    advance_to_next_active_player(game, now)


def advance_to_next_active_player(game: Game, now: int) -> None:
    """Give the turn to the next active seat."""
    seat = _first_active_from(game, game.current_player_index + 1)
    if seat is None:
        raise PokerError(ErrorCode.INVALID_GAME_STAGE)
    game.current_player_index = seat
    game.last_action_at = now


def check_single_player_remaining(game: Game) -> bool:
    """Whether at most one seated player is still in the hand."""
    return sum(game.active_players[: game.player_count]) <= 1


def check_all_players_all_in(game: Game, player_states: Sequence[PlayerState]) -> bool:
    """Whether no further betting is possible (at most one player can still bet)."""
    can_bet = sum(
        1
        for seat in range(game.player_count)
        if game.active_players[seat]
        and not player_states[seat].has_folded
        and not player_states[seat].is_all_in
    )
    return can_bet <= 1


def start_new_hand(game: Game) -> None:
    """Rotate the button and reset the table for the next hand."""
    rotate_dealer_button(game)
    game.stage = GameStage.PRE_FLOP
    game.pot = 0
    game.current_bet = 0
    game.community_cards = [0] * COMMUNITY_CARDS
    game.community_cards_revealed = 0
    game.deck_initialized = False
    for seat in range(game.player_count):
        if game.players[seat] is not None:
            game.active_players[seat] = True
    logger.debug("new hand, dealer at seat %s", game.dealer_position)


def should_end_game(game: Game) -> bool:
    """Whether too few players remain to continue."""
    return game.player_count < MIN_PLAYERS


def end_game(game: Game) -> None:
    """Mark the game finished."""
    game.stage = GameStage.FINISHED
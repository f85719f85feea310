"""Invariant checks and integrity audits for a running game."""

from __future__ import annotations

import logging
from typing import Sequence

from .errors import ErrorCode, PokerError
from .game import Game
from .player import PlayerState
from .types import DECK_SIZE, MAX_PLAYERS, TURN_TIMEOUT, GameStage

logger = logging.getLogger(__name__)

_FORWARD = {
    (GameStage.WAITING, GameStage.PRE_FLOP),
    (GameStage.PRE_FLOP, GameStage.FLOP),
    (GameStage.FLOP, GameStage.TURN),
    (GameStage.TURN, GameStage.RIVER),
    (GameStage.RIVER, GameStage.SHOWDOWN),
    (GameStage.FINISHED, GameStage.WAITING),
}


def validate_game_state(game: Game, player_states: Sequence[PlayerState]) -> None:
    """Check seat counts, dealer and turn positions are consistent."""
    if game.player_count > game.max_players or game.player_count > MAX_PLAYERS:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    if game.dealer_position >= game.player_count:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    if game.stage not in (GameStage.WAITING, GameStage.FINISHED):
        if game.current_player_index >= game.player_count:
            raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    validate_chip_conservation(game, player_states)


def validate_chip_conservation(game: Game, player_states: Sequence[PlayerState]) -> int:
    """Return the chips active players hold in stacks plus bets this hand."""
    total = sum(
        player_states[seat].chip_stack + player_states[seat].total_bet_this_hand
        for seat in range(game.player_count)
        if game.active_players[seat]
    )
    logger.debug("chips in stacks and bets: %s, pot: %s", total, game.pot)
    return total


def validate_deck_integrity(encrypted_deck: Sequence[int]) -> None:
    """Check the deck holds each of the 52 card indices exactly once."""
    if len(encrypted_deck) != DECK_SIZE:
        raise ValueError(f"expected {DECK_SIZE} card indices, got {len(encrypted_deck)}")
    seen = set()
    for card_index in encrypted_deck:
        if not 0 <= card_index < DECK_SIZE:
            raise PokerError(ErrorCode.INVALID_CARD_INDEX)
        if card_index in seen:
            raise PokerError(ErrorCode.DECK_NOT_INITIALIZED)
        seen.add(card_index)


def validate_state_transition(from_stage: GameStage, to_stage: GameStage) -> GameStage:
    """Check a stage change is legal and return the new stage."""
    if to_stage != GameStage.FINISHED and (from_stage, to_stage) not in _FORWARD:
        raise PokerError(ErrorCode.INVALID_GAME_STAGE)
    return to_stage


def validate_player_action(
    game: Game, player_state: PlayerState, seat_index: int
) -> None:
    """Check it is this active, unfolded player's turn."""
    if game.current_player_index != seat_index:
        raise PokerError(ErrorCode.NOT_PLAYER_TURN)
    if not game.active_players[seat_index]:
        raise PokerError(ErrorCode.PLAYER_NOT_IN_GAME)
    if player_state.has_folded:
        raise PokerError(ErrorCode.INVALID_ACTION)


def validate_bet_limits(
    bet_amount: int, min_bet: int, max_bet: int, player_chips: int
) -> None:
    """Check a bet against the minimum, an optional maximum and the stack."""
    if bet_amount < player_chips and bet_amount < min_bet:
        raise PokerError(ErrorCode.INVALID_BET_AMOUNT)
    if max_bet > 0 and bet_amount > max_bet:
        raise PokerError(ErrorCode.INVALID_BET_AMOUNT)
    if bet_amount > player_chips:
        raise PokerError(ErrorCode.INSUFFICIENT_CHIPS)


def validate_no_timeout(game: Game, current_time: int) -> None:
    """Raise if the turn has already timed out."""
    if current_time - game.last_action_at >= TURN_TIMEOUT:
        raise PokerError(ErrorCode.INVALID_ACTION)


def check_collusion_prevention(game: Game) -> None:
    """Require the cards to be held in the encrypted deck."""
    if not game.deck_initialized:
        raise PokerError(ErrorCode.DECK_NOT_INITIALIZED)


def verify_shuffle_randomness(
    shuffle_commitment: bytes, player_entropy: Sequence[bytes]
) -> None:
    """Require entropy from at least two players."""
    if len(player_entropy) < 2:
        raise PokerError(ErrorCode.NOT_ENOUGH_PLAYERS)
    logger.debug("shuffle used %s entropy contributions", len(player_entropy))


def audit_game_actions(game: Game, player_states: Sequence[PlayerState]) -> int:
    """Count seated players who folded without putting any chips in."""
    suspicious = sum(
        1
        for state in player_states[: game.player_count]
        if state.has_folded and state.total_bet_this_hand == 0
    )
    if suspicious:
        logger.info("audit: %s potentially suspicious actions", suspicious)
    return suspicious


def verify_action_auditability(game: Game) -> None:
    """Require a recorded last action."""
    if game.last_action_at <= 0:
        raise PokerError(ErrorCode.INVALID_GAME_STAGE)


def check_timeout_stalling(game: Game, current_time: int) -> bool:
    """Whether more than three quarters of the turn time has passed."""
    elapsed = current_time - game.last_action_at
    stalling = elapsed > TURN_TIMEOUT * 3 // 4
    if stalling:
        logger.info("possible stalling: %s seconds since last action", elapsed)
    return stalling


def verify_game_integrity(game: Game, player_states: Sequence[PlayerState]) -> int:
    """Return the chips in play; require at least one active player."""
    total = game.pot + sum(
        state.chip_stack + state.current_bet
        for state in player_states[: game.player_count]
    )
    if not any(game.active_players[: game.player_count]):
        raise PokerError(ErrorCode.NOT_ENOUGH_PLAYERS)
    return total


def prevent_card_manipulation(encrypted_deck: bytes, original_commitment: bytes) -> None:
    """Check the deck reference and commitment are well-formed 32-byte values."""
    if len(encrypted_deck) != 32 or len(original_commitment) != 32:
        raise ValueError("deck reference and commitment must be 32 bytes")
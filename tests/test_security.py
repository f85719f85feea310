import pytest

from holdem.errors import ErrorCode, PokerError
from holdem.game import initialize_game, join_game
from holdem.security import (
    audit_game_actions,
    check_collusion_prevention,
    check_timeout_stalling,
    prevent_card_manipulation,
    validate_bet_limits,
    validate_chip_conservation,
    validate_deck_integrity,
    validate_game_state,
    validate_no_timeout,
    validate_player_action,
    validate_state_transition,
    verify_action_auditability,
    verify_game_integrity,
    verify_shuffle_randomness,
)
from holdem.types import MIN_BUY_IN, TURN_TIMEOUT, GameStage


def _table(n=3):
    game = initialize_game(3, "host")
    states = [join_game(game, f"p{i}", MIN_BUY_IN) for i in range(n)]
    return game, states


def _code(excinfo):
    return excinfo.value.code


def test_game_state_rejects_bad_dealer():
    game, states = _table()
    game.dealer_position = game.player_count
    with pytest.raises(PokerError) as err:
        validate_game_state(game, states)
    assert _code(err) == ErrorCode.INVALID_GAME_CONFIG


def test_game_state_rejects_bad_turn_in_hand():
    game, states = _table()
    game.stage = GameStage.FLOP
    game.current_player_index = game.player_count
    with pytest.raises(PokerError) as err:
        validate_game_state(game, states)
    assert _code(err) == ErrorCode.INVALID_GAME_CONFIG


def test_game_state_rejects_too_many_players():
    game, states = _table(2)
    game.max_players = 1
    with pytest.raises(PokerError) as err:
        validate_game_state(game, states)
    assert _code(err) == ErrorCode.INVALID_GAME_CONFIG


def test_chip_conservation_survives_bets():
    game, states = _table(2)
    before = validate_chip_conservation(game, states)
    states[0].place_bet(1000, now=0)
    assert validate_chip_conservation(game, states) == before == 2 * MIN_BUY_IN


def test_chip_conservation_ignores_inactive():
    game, states = _table(2)
    game.active_players[1] = False
    assert validate_chip_conservation(game, states) == states[0].chip_stack


def test_deck_integrity_rejects_duplicate():
    deck = list(range(52))
    validate_deck_integrity(deck)
    deck[5] = deck[6]
    with pytest.raises(PokerError) as err:
        validate_deck_integrity(deck)
    assert _code(err) == ErrorCode.DECK_NOT_INITIALIZED


def test_deck_integrity_rejects_out_of_range():
    deck = list(range(52))
    deck[0] = 52
    with pytest.raises(PokerError) as err:
        validate_deck_integrity(deck)
    assert _code(err) == ErrorCode.INVALID_CARD_INDEX


def test_deck_integrity_rejects_wrong_length():
    with pytest.raises(ValueError):
        validate_deck_integrity(list(range(51)))


@pytest.mark.parametrize(
    "src,dst",
    [
        (GameStage.WAITING, GameStage.PRE_FLOP),
        (GameStage.PRE_FLOP, GameStage.FLOP),
        (GameStage.FLOP, GameStage.TURN),
        (GameStage.TURN, GameStage.RIVER),
        (GameStage.RIVER, GameStage.SHOWDOWN),
        (GameStage.SHOWDOWN, GameStage.FINISHED),
        (GameStage.FLOP, GameStage.FINISHED),
        (GameStage.FINISHED, GameStage.WAITING),
    ],
)
def test_legal_transitions(src, dst):
    assert validate_state_transition(src, dst) is dst


@pytest.mark.parametrize(
    "src,dst",
    [
        (GameStage.WAITING, GameStage.FLOP),
        (GameStage.FLOP, GameStage.PRE_FLOP),
        (GameStage.SHOWDOWN, GameStage.WAITING),
        (GameStage.RIVER, GameStage.RIVER),
    ],
)
def test_illegal_transitions(src, dst):
    with pytest.raises(PokerError) as err:
        validate_state_transition(src, dst)
    assert _code(err) == ErrorCode.INVALID_GAME_STAGE


def test_player_action_checks():
    game, states = _table()
    game.current_player_index = 0
    with pytest.raises(PokerError) as err:
        validate_player_action(game, states[1], 1)
    assert _code(err) == ErrorCode.NOT_PLAYER_TURN
    game.active_players[0] = False
    with pytest.raises(PokerError) as err:
        validate_player_action(game, states[0], 0)
    assert _code(err) == ErrorCode.PLAYER_NOT_IN_GAME
    game.active_players[0] = True
    states[0].fold(now=0)
    with pytest.raises(PokerError) as err:
        validate_player_action(game, states[0], 0)
    assert _code(err) == ErrorCode.INVALID_ACTION


def test_bet_limits_errors():
    with pytest.raises(PokerError) as err:
        validate_bet_limits(5, 10, 0, 100)
    assert _code(err) == ErrorCode.INVALID_BET_AMOUNT
    with pytest.raises(PokerError) as err:
        validate_bet_limits(60, 10, 50, 100)
    assert _code(err) == ErrorCode.INVALID_BET_AMOUNT
    with pytest.raises(PokerError) as err:
        validate_bet_limits(150, 10, 0, 100)
    assert _code(err) == ErrorCode.INSUFFICIENT_CHIPS


def test_bet_below_minimum_allowed_when_all_in():
    validate_bet_limits(5, 10, 0, 5)
    with pytest.raises(PokerError) as err:
        validate_bet_limits(4, 10, 0, 5)
    assert _code(err) == ErrorCode.INVALID_BET_AMOUNT


def test_no_timeout():
    game, _ = _table()
    game.last_action_at = 100
    validate_no_timeout(game, 100 + TURN_TIMEOUT - 1)
    with pytest.raises(PokerError) as err:
        validate_no_timeout(game, 100 + TURN_TIMEOUT)
    assert _code(err) == ErrorCode.INVALID_ACTION


def test_collusion_prevention_needs_deck():
    game, _ = _table()
    with pytest.raises(PokerError) as err:
        check_collusion_prevention(game)
    assert _code(err) == ErrorCode.DECK_NOT_INITIALIZED


def test_shuffle_randomness_needs_two_contributions():
    with pytest.raises(PokerError) as err:
        verify_shuffle_randomness(bytes(32), [bytes(32)])
    assert _code(err) == ErrorCode.NOT_ENOUGH_PLAYERS


def test_audit_counts_free_folds():
    game, states = _table()
    states[1].place_bet(100, now=0)
    for state in states[:2]:
        state.fold(now=0)
    assert audit_game_actions(game, states) == 1
    states[2].fold(now=0)
    assert audit_game_actions(game, states) == 2


def test_auditability_needs_recorded_action():
    game, _ = _table()
    game.last_action_at = 0
    with pytest.raises(PokerError) as err:
        verify_action_auditability(game)
    assert _code(err) == ErrorCode.INVALID_GAME_STAGE


def test_timeout_stalling():
    game, _ = _table()
    game.last_action_at = 1000
    assert check_timeout_stalling(game, 1000) is False
    assert check_timeout_stalling(game, 1045) is False
    assert check_timeout_stalling(game, 1046) is True
    assert check_timeout_stalling(game, 1000 + TURN_TIMEOUT) is True


def test_game_integrity_total_is_conserved():
    game, states = _table()
    game.pot = 700
    before = verify_game_integrity(game, states)
    states[0].place_bet(2500, now=0)
    assert verify_game_integrity(game, states) == before == game.pot + 3 * MIN_BUY_IN


def test_game_integrity_needs_active_player():
    game, states = _table(2)
    game.active_players[:2] = [False, False]
    with pytest.raises(PokerError) as err:
        verify_game_integrity(game, states)
    assert _code(err) == ErrorCode.NOT_ENOUGH_PLAYERS


def test_card_manipulation_rejects_malformed_inputs():
    prevent_card_manipulation(bytes(32), bytes(32))
    with pytest.raises(ValueError):
        prevent_card_manipulation(bytes(31), bytes(32))
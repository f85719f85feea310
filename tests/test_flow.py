import pytest

from holdem.cards import EncryptedDeck
from holdem.errors import ErrorCode, PokerError
from holdem.flow import (
    advance_game_stage,
    advance_to_next_active_player,
    check_all_players_all_in,
    check_single_player_remaining,
    check_turn_timeout,
    end_game,
    get_big_blind_position,
    get_first_player_for_round,
    get_small_blind_position,
    handle_player_timeout,
    reset_betting_round,
    rotate_dealer_button,
    should_end_game,
    start_new_hand,
)
from holdem.game import initialize_game, join_game
from holdem.types import MIN_BUY_IN, TURN_TIMEOUT, GameStage


def _table(n=3):
    game = initialize_game(7, "host")
    states = [join_game(game, f"p{i}", MIN_BUY_IN) for i in range(n)]
    return game, states


def _deal(game):
    game.deck = EncryptedDeck.from_shuffle(
        list(reversed(range(52))), bytes(32), bytes(32)
    )
    game.deck_initialized = True
    game.stage = GameStage.PRE_FLOP


def test_advance_to_flop_reveals_three_after_burn():
    game, _ = _table()
    _deal(game)
    game.current_bet = 500
    game.players_acted[0] = True
    advance_game_stage(game, now=123)
    assert game.stage == GameStage.FLOP
    assert game.community_cards_revealed == 3
    assert game.community_cards[:3] == game.deck.encrypted_indices[1:4]
    assert game.current_bet == 0
    assert not any(game.players_acted)
    assert game.last_action_at == 123


def test_full_hand_reaches_showdown_with_five_board_cards():
    game, _ = _table()
    _deal(game)
    stages = []
    for _ in range(4):
        advance_game_stage(game, now=1)
        stages.append(game.stage)
    assert stages == [GameStage.FLOP, GameStage.TURN, GameStage.RIVER, GameStage.SHOWDOWN]
    assert game.community_cards_revealed == 5
    deck = game.deck.encrypted_indices
    assert game.community_cards == [deck[1], deck[2], deck[3], deck[5], deck[7]]
    assert game.deck.next_card_index == 8


@pytest.mark.parametrize(
    "stage", [GameStage.WAITING, GameStage.SHOWDOWN, GameStage.FINISHED]
)
def test_advance_from_terminal_stages_rejected(stage):
    game, _ = _table()
    _deal(game)
    game.stage = stage
    with pytest.raises(PokerError) as err:
        advance_game_stage(game, now=0)
    assert err.value.code == ErrorCode.INVALID_GAME_STAGE
    assert game.stage == stage


def test_advance_without_deck_leaves_game_untouched():
    game, _ = _table()
    game.stage = GameStage.PRE_FLOP
    with pytest.raises(PokerError) as err:
        advance_game_stage(game, now=0)
    assert err.value.code == ErrorCode.DECK_NOT_INITIALIZED
    assert game.stage == GameStage.PRE_FLOP


def test_first_player_post_flop_follows_dealer():
    game, states = _table()
    game.stage = GameStage.FLOP
    assert get_first_player_for_round(game) == states[1].seat_index
    game.active_players[1] = False
    assert get_first_player_for_round(game) == states[2].seat_index


def test_first_player_pre_flop_follows_big_blind():
    game, states = _table()
    game.stage = GameStage.PRE_FLOP
    assert get_first_player_for_round(game) == states[0].seat_index


def test_first_player_falls_back_to_dealer():
    game, _ = _table()
    game.stage = GameStage.FLOP
    game.dealer_position = 2
    game.active_players[:3] = [False, False, False]
    assert get_first_player_for_round(game) == game.dealer_position


def test_reset_betting_round_sets_turn():
    game, states = _table()
    game.stage = GameStage.TURN
    game.current_bet = 10
    reset_betting_round(game, now=55)
    assert game.current_player_index == states[1].seat_index
    assert game.current_bet == 0
    assert game.last_action_at == 55


def test_rotate_dealer_skips_inactive():
    game, states = _table()
    rotate_dealer_button(game)
    assert game.dealer_position == states[1].seat_index
    game.active_players[2] = False
    rotate_dealer_button(game)
    assert game.dealer_position == states[0].seat_index


def test_rotate_dealer_without_active_players_fails():
    game, _ = _table()
    game.active_players[:3] = [False, False, False]
    with pytest.raises(PokerError) as err:
        rotate_dealer_button(game)
    assert err.value.code == ErrorCode.NOT_ENOUGH_PLAYERS


def test_blind_positions_heads_up():
    game, states = _table(2)
    assert get_small_blind_position(game) == game.dealer_position
    assert get_big_blind_position(game) == states[1].seat_index


def test_blind_positions_three_handed():
    game, states = _table(3)
    assert get_small_blind_position(game) == states[1].seat_index
    assert get_big_blind_position(game) == states[2].seat_index


def test_turn_timeout_boundary():
    game, _ = _table()
    game.last_action_at = 1000
    assert check_turn_timeout(game, 1000 + TURN_TIMEOUT) is True
    assert check_turn_timeout(game, 1000 + TURN_TIMEOUT - 1) is False


def test_handle_timeout_folds_and_passes_turn():
    game, states = _table()
    game.current_player_index = states[0].seat_index
    game.last_action_at = 0
    handle_player_timeout(game, states[0], now=TURN_TIMEOUT)
    assert states[0].has_folded
    assert not game.active_players[states[0].seat_index]
    assert game.current_player_index == states[1].seat_index
    assert game.last_action_at == TURN_TIMEOUT


def test_handle_timeout_before_deadline_rejected():
    game, states = _table()
    game.last_action_at = 0
    with pytest.raises(PokerError) as err:
        handle_player_timeout(game, states[0], now=TURN_TIMEOUT - 1)
    assert err.value.code == ErrorCode.INVALID_ACTION
    assert not states[0].has_folded


def test_handle_timeout_wrong_player_rejected():
    game, states = _table()
    game.current_player_index = states[0].seat_index
    with pytest.raises(PokerError) as err:
        handle_player_timeout(game, states[1], now=game.last_action_at + TURN_TIMEOUT)
    assert err.value.code == ErrorCode.NOT_PLAYER_TURN


def test_advance_to_next_active_player_without_any_fails():
    game, _ = _table()
    game.active_players[:3] = [False, False, False]
    with pytest.raises(PokerError) as err:
        advance_to_next_active_player(game, now=0)
    assert err.value.code == ErrorCode.INVALID_GAME_STAGE


def test_single_player_remaining():
    game, _ = _table()
    assert check_single_player_remaining(game) is False
    game.active_players[0] = False
    game.active_players[1] = False
    assert check_single_player_remaining(game) is True


def test_all_players_all_in():
    game, states = _table()
    states[0].place_bet(states[0].chip_stack, now=0)
    assert check_all_players_all_in(game, states) is False
    states[1].place_bet(states[1].chip_stack, now=0)
    assert check_all_players_all_in(game, states) is True


def test_start_new_hand_resets_table():
    game, states = _table()
    _deal(game)
    game.stage = GameStage.RIVER
    game.pot = 900
    game.current_bet = 300
    game.community_cards_revealed = 5
    game.active_players[1] = False
    start_new_hand(game)
    assert game.dealer_position == states[2].seat_index
    assert game.stage == GameStage.PRE_FLOP
    assert (game.pot, game.current_bet, game.community_cards_revealed) == (0, 0, 0)
    assert game.deck_initialized is False
    assert game.active_players[:3] == [True, True, True]


def test_should_end_and_end_game():
    game, _ = _table(1)
    assert should_end_game(game) is True
    join_game(game, "second", MIN_BUY_IN)
    assert should_end_game(game) is False
    end_game(game)
    assert game.stage == GameStage.FINISHED
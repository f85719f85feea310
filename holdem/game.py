"""Game table state, setup, joining, leaving and community cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, List, Optional

from .cards import EncryptedDeck
from .errors import ErrorCode, PokerError
from .player import PlayerState
from .types import (
    COMMUNITY_CARDS,
    DEFAULT_BIG_BLIND,
    DEFAULT_SMALL_BLIND,
    MAX_BUY_IN,
    MAX_PLAYERS,
    MIN_BUY_IN,
    MIN_PLAYERS,
    GameStage,
)
from .utils import validate_buy_in

_MIN_BIG_BLINDS_PER_BUY_IN = 50


def _flags() -> List[bool]:
    return [False] * MAX_PLAYERS


@dataclass
class Game:
    """A poker table: configuration, seats, pot and board."""

    authority: Hashable
    game_id: int
    small_blind: int
    big_blind: int
    min_buy_in: int
    max_buy_in: int
    max_players: int
    stage: GameStage = GameStage.WAITING
    player_count: int = 0
    players: List[Optional[Hashable]] = field(
        default_factory=lambda: [None] * MAX_PLAYERS
    )
    active_players: List[bool] = field(default_factory=_flags)
    dealer_position: int = 0
    current_player_index: int = 0
    pot: int = 0
    current_bet: int = 0
    players_acted: List[bool] = field(default_factory=_flags)
    community_cards: List[int] = field(default_factory=lambda: [0] * COMMUNITY_CARDS)
    community_cards_revealed: int = 0
    encrypted_deck: bytes = bytes(32)
    deck_initialized: bool = False
    started_at: int = 0
    last_action_at: int = 0
    shuffle_session_id: bytes = bytes(32)
    bump: int = 0
    deck: EncryptedDeck = field(default_factory=EncryptedDeck)
    escrow: int = 0

    @classmethod
    def create(
        cls,
        game_id: int,
        authority: Hashable,
        small_blind: int,
        big_blind: int,
        min_buy_in: int,
        max_buy_in: int,
        max_players: int,
        bump: int,
        now: int,
    ) -> "Game":
        """An empty table waiting for players."""
        return cls(
            authority=authority,
            game_id=game_id,
            small_blind=small_blind,
            big_blind=big_blind,
            min_buy_in=min_buy_in,
            max_buy_in=max_buy_in,
            max_players=max_players,
            last_action_at=now,
            bump=bump,
        )

    @property
    def address(self) -> str:
        """Identifier derived from the authority and the game id."""
        return f"game/{self.authority}/{self.game_id}"

    def _seated(self) -> List[Optional[Hashable]]:
        return self.players[: self.player_count]

    def is_full(self) -> bool:
        """Whether every seat allowed by the configuration is taken."""
        return self.player_count >= self.max_players

    def has_player(self, player: Hashable) -> bool:
        """Whether ``player`` holds a seat."""
        return player in self._seated()

    def add_player(self, player: Hashable) -> int:
        """Seat ``player`` in the next free seat and return its index."""
        if self.is_full():
            raise PokerError(ErrorCode.GAME_FULL)
        if self.has_player(player):
            raise PokerError(ErrorCode.PLAYER_ALREADY_IN_GAME)
        seat = self.player_count
        self.players[seat] = player
        self.active_players[seat] = True
        self.player_count += 1
        return seat

    def remove_player(self, player: Hashable) -> None:
        """Deactivate ``player``; before the game starts, free the seat too."""
        try:
            index = self._seated().index(player)
        except ValueError:
            raise PokerError(ErrorCode.PLAYER_NOT_IN_GAME) from None
        self.active_players[index] = False
        if self.stage == GameStage.WAITING:
            last = self.player_count - 1
            del self.players[index]
            self.players.insert(last, None)
            del self.active_players[index]
            self.active_players.insert(last, False)
            self.player_count -= 1

    def get_encrypted_deck(self) -> EncryptedDeck:
        """The shuffled deck cards are dealt from."""
        if not self.deck_initialized:
            raise PokerError(ErrorCode.DECK_NOT_INITIALIZED)
        return self.deck


def initialize_game(
    game_id: int,
    authority: Hashable,
    small_blind: Optional[int] = None,
    big_blind: Optional[int] = None,
    min_buy_in: Optional[int] = None,
    max_buy_in: Optional[int] = None,
    max_players: Optional[int] = None,
    bump: int = 0,
    now: int = 0,
) -> Game:
    """Validate the configuration, filling in defaults, and create a game."""
    small_blind = DEFAULT_SMALL_BLIND if small_blind is None else small_blind
    big_blind = DEFAULT_BIG_BLIND if big_blind is None else big_blind
    min_buy_in = MIN_BUY_IN if min_buy_in is None else min_buy_in
    max_buy_in = MAX_BUY_IN if max_buy_in is None else max_buy_in
    max_players = MAX_PLAYERS if max_players is None else max_players

    if not MIN_PLAYERS <= max_players <= MAX_PLAYERS:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    if big_blind <= small_blind:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    if min_buy_in < big_blind * _MIN_BIG_BLINDS_PER_BUY_IN:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    if max_buy_in < min_buy_in:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)

    return Game.create(
        game_id,
        authority,
        small_blind,
        big_blind,
        min_buy_in,
        max_buy_in,
        max_players,
        bump,
        now,
    )


def join_game(
    game: Game, player: Hashable, buy_in: int, bump: int = 0, now: int = 0
) -> PlayerState:
    """Seat ``player`` with ``buy_in`` chips, held in the game's escrow."""
    if game.stage != GameStage.WAITING:
        raise PokerError(ErrorCode.GAME_ALREADY_STARTED)
    validate_buy_in(buy_in, game.min_buy_in, game.max_buy_in)
    seat = game.add_player(player)
    game.escrow += buy_in
    return PlayerState.create(player, game.address, seat, buy_in, bump, now)


def leave_game(game: Game, player_state: PlayerState) -> int:
    """Remove a player between hands and return the chips paid back."""
    if game.stage not in (GameStage.WAITING, GameStage.FINISHED):
        raise PokerError(ErrorCode.CANNOT_LEAVE_DURING_HAND)
    if player_state.game != game.address:
        raise PokerError(ErrorCode.PLAYER_NOT_IN_GAME)
    game.remove_player(player_state.player)
    remaining = player_state.chip_stack
    if remaining > 0:
        game.escrow -= remaining
    return remaining


def reveal_community_cards(game: Game, count: int) -> None:
    """Burn one card, then turn ``count`` cards onto the board."""
    deck = game.get_encrypted_deck()
    if game.community_cards_revealed + count > COMMUNITY_CARDS:
        raise PokerError(ErrorCode.INVALID_CARD_INDEX)
    deck.burn_card()
    for _ in range(count):
        card_index = deck.next_encrypted_card()
        game.community_cards[game.community_cards_revealed] = card_index
        game.community_cards_revealed += 1
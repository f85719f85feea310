"""Error codes and the exception raised for rule violations."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Numbered error conditions of the poker engine."""

    GAME_FULL = 6000
    NOT_ENOUGH_PLAYERS = 6001
    GAME_ALREADY_STARTED = 6002
    INVALID_GAME_STAGE = 6003
    PLAYER_NOT_IN_GAME = 6004
    PLAYER_ALREADY_IN_GAME = 6005
    INSUFFICIENT_BALANCE = 6006
    BUY_IN_TOO_LOW = 6007
    BUY_IN_TOO_HIGH = 6008
    INVALID_BET_AMOUNT = 6009
    NOT_PLAYER_TURN = 6010
    INVALID_ACTION = 6011
    INSUFFICIENT_CHIPS = 6012
    INVALID_SEAT_POSITION = 6013
    SEAT_OCCUPIED = 6014
    CANNOT_LEAVE_DURING_HAND = 6015
    DECK_NOT_INITIALIZED = 6016
    CARDS_NOT_DEALT = 6017
    INVALID_CARD_INDEX = 6018
    ARCIUM_MPC_FAILED = 6019
    ENCRYPTION_FAILED = 6020
    INVALID_GAME_CONFIG = 6021
    GAME_NOT_FINISHED = 6022

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.GAME_FULL: "Game is full, cannot join",
    ErrorCode.NOT_ENOUGH_PLAYERS: "Not enough players to start game",
    ErrorCode.GAME_ALREADY_STARTED: "Game has already started",
    ErrorCode.INVALID_GAME_STAGE: "Game is not in the correct stage for this action",
    ErrorCode.PLAYER_NOT_IN_GAME: "Player is not in this game",
    ErrorCode.PLAYER_ALREADY_IN_GAME: "Player already in game",
    ErrorCode.INSUFFICIENT_BALANCE: "Insufficient balance for buy-in",
    ErrorCode.BUY_IN_TOO_LOW: "Buy-in amount too low",
    ErrorCode.BUY_IN_TOO_HIGH: "Buy-in amount too high",
    ErrorCode.INVALID_BET_AMOUNT: "Invalid bet amount",
    ErrorCode.NOT_PLAYER_TURN: "Not player's turn",
    ErrorCode.INVALID_ACTION: "Invalid action for current game state",
    ErrorCode.INSUFFICIENT_CHIPS: "Player has insufficient chips",
    ErrorCode.INVALID_SEAT_POSITION: "Invalid seat position",
    ErrorCode.SEAT_OCCUPIED: "Seat is already occupied",
    ErrorCode.CANNOT_LEAVE_DURING_HAND: "Cannot leave during active hand",
    ErrorCode.DECK_NOT_INITIALIZED: "Deck not initialized",
    ErrorCode.CARDS_NOT_DEALT: "Cards not dealt yet",
    ErrorCode.INVALID_CARD_INDEX: "Invalid card index",
    ErrorCode.ARCIUM_MPC_FAILED: "Arcium MPC operation failed",
    ErrorCode.ENCRYPTION_FAILED: "Encryption/Decryption failed",
    ErrorCode.INVALID_GAME_CONFIG: "Invalid game configuration",
    ErrorCode.GAME_NOT_FINISHED: "Game has not finished",
}


class PokerError(Exception):
    """Raised when an operation breaks a rule of the game."""

    def __init__(self, code):
        self.code = ErrorCode(code)
        super().__init__(self.code.message)
"""Playing cards and the shuffled, encrypted deck."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .errors import ErrorCode, PokerError
from .types import DECK_SIZE, Rank, Suit

_SUITS = list(Suit)
_RANKS = list(Rank)
_CARDS_PER_SUIT = len(_RANKS)


@dataclass(frozen=True)
class Card:
    """A playing card."""

    suit: Suit
    rank: Rank

    def to_index(self) -> int:
        """Position of the card in an unshuffled deck (0-51)."""
        return self.suit.value * _CARDS_PER_SUIT + (int(self.rank) - int(Rank.TWO))

    @classmethod
    def from_index(cls, index: int) -> "Card":
        """Card at ``index`` of an unshuffled deck."""
        if not 0 <= index < DECK_SIZE:
            raise PokerError(ErrorCode.INVALID_CARD_INDEX)
        suit_index, rank_index = divmod(index, _CARDS_PER_SUIT)
        return cls(_SUITS[suit_index], _RANKS[rank_index])


def _zero_bytes() -> bytes:
    return bytes(32)


@dataclass
class EncryptedDeck:
    """Shuffled deck of encrypted card indices and a dealing position."""

    encrypted_indices: List[int] = field(default_factory=lambda: [0] * DECK_SIZE)
    shuffle_commitment: bytes = field(default_factory=_zero_bytes)
    next_card_index: int = 0
    cards_dealt: int = 0
    shuffle_session_id: bytes = field(default_factory=_zero_bytes)

    @classmethod
    def from_shuffle(
        cls,
        encrypted_indices: Sequence[int],
        shuffle_commitment: bytes,
        shuffle_session_id: bytes,
    ) -> "EncryptedDeck":
        """Build a fresh deck from the result of a shuffle."""
        indices = list(encrypted_indices)
        if len(indices) != DECK_SIZE:
            raise ValueError(f"expected {DECK_SIZE} card indices, got {len(indices)}")
        commitment = bytes(shuffle_commitment)
        session = bytes(shuffle_session_id)
        if len(commitment) != 32 or len(session) != 32:
            raise ValueError("commitment and session id must be 32 bytes")
        return cls(indices, commitment, 0, 0, session)

    def next_encrypted_card(self) -> int:
        """Take the next card index from the deck."""
        if self.next_card_index >= DECK_SIZE:
            raise PokerError(ErrorCode.INVALID_CARD_INDEX)
        card_index = self.encrypted_indices[self.next_card_index]
        self.next_card_index += 1
        self.cards_dealt += 1
        return card_index

    def burn_card(self) -> None:
        """Deal one card face down and discard it."""
        self.next_encrypted_card()

    def has_cards(self, count: int) -> bool:
        """Whether at least ``count`` cards remain."""
        return self.next_card_index + count <= DECK_SIZE


def generate_standard_deck() -> List[Card]:
    """The 52 cards in unshuffled order: suit by suit, two to ace."""
    return [Card(suit, rank) for suit in _SUITS for rank in _RANKS]
"""Commitments and proofs about hands, shuffles and card ownership."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .cards import Card
from .errors import ErrorCode, PokerError
from .evaluator import EvaluatedHand
from .types import DECK_SIZE

logger = logging.getLogger(__name__)

_COMMITMENT_SIZE = 32
_KEY_SIZE = 32
_CARD_SHARD_SIZE = 16
_SHUFFLE_PREFIX = 4
_HAND_PROOF_PAYLOAD = bytes([1, 2, 3, 4])


@dataclass(frozen=True)
class HandProof:
    """A proof that a hand has a given rank, without the cards themselves."""

    commitment: bytes
    proof: bytes
    hand_rank: int


def _require_size(value: bytes, size: int, name: str) -> bytes:
    data = bytes(value)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return data


def verify_hand_proof(proof: HandProof, expected_rank: int) -> bool:
    """Whether the proof is non-empty and claims ``expected_rank``."""
    valid = proof.hand_rank == int(expected_rank) and len(proof.proof) > 0
    if valid:
        logger.debug("hand proof verified for rank %s", expected_rank)
    else:
        logger.debug("hand proof verification failed")
    return valid


def generate_shuffle_proof(
    original_deck: Sequence[int],
    shuffled_deck: Sequence[int],
    player_entropy: Sequence[bytes],
) -> bytes:
    """Proof binding the start of the original deck to the start of the shuffle."""
    for name, deck in (("original deck", original_deck), ("shuffled deck", shuffled_deck)):
        if len(deck) != DECK_SIZE:
            raise ValueError(f"{name} must hold {DECK_SIZE} cards, got {len(deck)}")
    proof = bytes(original_deck[:_SHUFFLE_PREFIX]) + bytes(shuffled_deck[:_SHUFFLE_PREFIX])
    logger.debug("shuffle proof from %s entropy contributions", len(player_entropy))
    return proof


def verify_shuffle_proof(proof: bytes, commitment: bytes, player_count: int) -> bool:
    """Check a shuffle proof is present and that enough players took part."""
    if not proof:
        raise PokerError(ErrorCode.ARCIUM_MPC_FAILED)
    if player_count < 2:
        raise PokerError(ErrorCode.NOT_ENOUGH_PLAYERS)
    logger.debug("shuffle proof verified for %s players", player_count)
    return True


def prove_card_ownership(encrypted_card: bytes, owner: bytes) -> bytes:
    """Proof tying the first half of an encrypted card to its owner's key."""
    card = _require_size(encrypted_card, _COMMITMENT_SIZE, "encrypted card")
    key = _require_size(owner, _KEY_SIZE, "owner key")
    return card[:_CARD_SHARD_SIZE] + key


def verify_card_ownership_proof(proof: bytes, owner: bytes) -> bool:
    """Check an ownership proof holds a card shard and a key."""
    if len(proof) < _CARD_SHARD_SIZE + _KEY_SIZE:
        raise PokerError(ErrorCode.ENCRYPTION_FAILED)
    logger.debug("card ownership verified")
    return True


def generate_hand_validity_proof(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    evaluated_hand: EvaluatedHand,
) -> HandProof:
    """Commit to a hand's rank and main values without revealing the cards."""
    header = bytes(
        [
            int(evaluated_hand.rank),
            evaluated_hand.primary_value,
            evaluated_hand.secondary_value,
        ]
    )
    commitment = header + bytes(_COMMITMENT_SIZE - len(header))
    return HandProof(
        commitment=commitment,
        proof=_HAND_PROOF_PAYLOAD,
        hand_rank=int(evaluated_hand.rank),
    )


def verify_deck_integrity_proof(encrypted_deck: bytes, proof: bytes) -> bool:
    """Check a deck integrity proof is present."""
    if not proof:
        raise PokerError(ErrorCode.DECK_NOT_INITIALIZED)
    logger.debug("deck integrity proof verified")
    return True
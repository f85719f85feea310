"""Poker hand evaluation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .cards import Card
from .errors import ErrorCode, PokerError
from .types import HandRank


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """Hand category plus the values that break ties, compared in field order."""

    rank: HandRank
    primary_value: int
    secondary_value: int
    kickers: Tuple[int, int, int, int, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "kickers", tuple(self.kickers))


def _is_flush(cards: Sequence[Card]) -> bool:
    return len({card.suit for card in cards}) == 1


def _straight_high(cards: Sequence[Card]) -> Optional[int]:
    ranks = sorted((int(card.rank) for card in cards), reverse=True)
    if all(high - low == 1 for high, low in zip(ranks, ranks[1:])):
        return ranks[0]
    if ranks == [14, 5, 4, 3, 2]:
        return 5
    return None


def _kickers(cards: Sequence[Card], exclude: Sequence[int] = ()) -> Tuple[int, ...]:
    ranks = sorted(
        (int(card.rank) for card in cards if int(card.rank) not in exclude),
        reverse=True,
    )[:5]
    return tuple(ranks + [0] * (5 - len(ranks)))


def _four_of_kind(counts: Counter) -> Optional[Tuple[int, int]]:
    quad = kicker = 0
    for rank in sorted(counts):
        if counts[rank] == 4:
            quad = rank
        elif counts[rank] == 1:
            kicker = rank
    return (quad, kicker) if quad else None


def _full_house(counts: Counter) -> Optional[Tuple[int, int]]:
    trips = pair = 0
    for rank in sorted(counts, reverse=True):
        count = counts[rank]
        if count == 3 and not trips:
            trips = rank
        elif count in (2, 3) and not pair:
            pair = rank
    return (trips, pair) if trips and pair else None


def _three_of_kind(counts: Counter, cards: Sequence[Card]):
    trips = next((rank for rank in sorted(counts) if counts[rank] == 3), 0)
    return (trips, _kickers(cards, [trips])) if trips else None


def _two_pair(counts: Counter) -> Optional[Tuple[int, int, int]]:
    pairs: List[int] = []
    kicker = 0
    for rank in sorted(counts, reverse=True):
        if counts[rank] == 2:
            pairs.append(rank)
        elif counts[rank] == 1:
            kicker = rank
    return (pairs[0], pairs[1], kicker) if len(pairs) >= 2 else None


def _one_pair(counts: Counter, cards: Sequence[Card]):
    pair = next((rank for rank in sorted(counts, reverse=True) if counts[rank] == 2), 0)
    return (pair, _kickers(cards, [pair])) if pair else None


def evaluate_hand(cards: Sequence[Card]) -> EvaluatedHand:
    """Evaluate exactly five cards."""
    cards = list(cards)
    if len(cards) != 5:
        raise PokerError(ErrorCode.INVALID_CARD_INDEX)

    flush = _is_flush(cards)
    straight_high = _straight_high(cards)
    counts = Counter(int(card.rank) for card in cards)

    if flush and straight_high is not None:
        if straight_high == 14:
            return EvaluatedHand(HandRank.ROYAL_FLUSH, 14, 0, (14, 13, 12, 11, 10))
        return EvaluatedHand(HandRank.STRAIGHT_FLUSH, straight_high, 0, _kickers(cards))

    quads = _four_of_kind(counts)
    if quads:
        rank, kicker = quads
        return EvaluatedHand(HandRank.FOUR_OF_A_KIND, rank, 0, (kicker, 0, 0, 0, 0))

    full = _full_house(counts)
    if full:
        trips, pair = full
        return EvaluatedHand(HandRank.FULL_HOUSE, trips, pair, (0, 0, 0, 0, 0))

    if flush:
        kickers = _kickers(cards)
        return EvaluatedHand(HandRank.FLUSH, kickers[0], 0, kickers)

    if straight_high is not None:
        return EvaluatedHand(HandRank.STRAIGHT, straight_high, 0, (0, 0, 0, 0, 0))

    trips = _three_of_kind(counts, cards)
    if trips:
        rank, kickers = trips
        return EvaluatedHand(HandRank.THREE_OF_A_KIND, rank, 0, kickers)

    two_pair = _two_pair(counts)
    if two_pair:
        high, low, kicker = two_pair
        return EvaluatedHand(HandRank.TWO_PAIR, high, low, (kicker, 0, 0, 0, 0))

    pair = _one_pair(counts, cards)
    if pair:
        rank, kickers = pair
        return EvaluatedHand(HandRank.ONE_PAIR, rank, 0, kickers)

    kickers = _kickers(cards)
    return EvaluatedHand(HandRank.HIGH_CARD, kickers[0], 0, kickers)


def evaluate_best_hand(
    hole_cards: Sequence[Card], community_cards: Sequence[Card]
) -> EvaluatedHand:
    """Best five-card hand from two hole cards and five community cards."""
    hole = list(hole_cards)
    community = list(community_cards)
    if len(hole) != 2 or len(community) != 5:
        raise PokerError(ErrorCode.INVALID_CARD_INDEX)
    return max(evaluate_hand(hand) for hand in combinations(hole + community, 5))
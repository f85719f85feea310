"""Showdown: winners of the main and side pots, and paying them out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from .cards import Card
from .errors import ErrorCode, PokerError
from .evaluator import EvaluatedHand, evaluate_best_hand
from .game import Game
from .player import PlayerState
from .types import MAX_PLAYERS

logger = logging.getLogger(__name__)

MAX_RAKE = 3_000_000
"""Upper limit on the rake taken from one pot."""


@dataclass(frozen=True)
class SidePot:
    """A pot that only some seats may win."""

    amount: int
    eligible_seats: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "eligible_seats", frozenset(self.eligible_seats))

    def is_eligible(self, seat: int) -> bool:
        """Whether ``seat`` may win this pot."""
        return seat in self.eligible_seats


@dataclass(frozen=True)
class PotWinner:
    """A winning seat, its hand and its share of one pot."""

    seat_index: int
    hand: EvaluatedHand
    share: int


def determine_main_pot_winners(
    player_hands: Sequence[Tuple[int, EvaluatedHand]], pot_amount: int
) -> List[PotWinner]:
    """Split a pot among the best hands; the first winner gets the odd chips."""
    if not player_hands:
        return []
    best = max(hand for _, hand in player_hands)
    winners = [(seat, hand) for seat, hand in player_hands if hand == best]
    share, remainder = divmod(pot_amount, len(winners))
    return [
        PotWinner(seat, hand, share + remainder if position == 0 else share)
        for position, (seat, hand) in enumerate(winners)
    ]


def determine_side_pot_winners(
    player_hands: Sequence[Tuple[int, EvaluatedHand]], side_pot: SidePot
) -> List[PotWinner]:
    """Winners of a side pot among the seats eligible for it."""
    eligible = [(seat, hand) for seat, hand in player_hands if side_pot.is_eligible(seat)]
    return determine_main_pot_winners(eligible, side_pot.amount)


def determine_all_winners(
    player_hands: Sequence[Tuple[int, EvaluatedHand]],
    main_pot: int,
    side_pots: Iterable[SidePot] = (),
) -> List[Tuple[int, int]]:
    """Total winnings per seat over all side pots and the main pot, by seat."""
    totals = [0] * MAX_PLAYERS
    for side_pot in side_pots:
        for winner in determine_side_pot_winners(player_hands, side_pot):
            totals[winner.seat_index] += winner.share
    for winner in determine_main_pot_winners(player_hands, main_pot):
        totals[winner.seat_index] += winner.share
    return [(seat, amount) for seat, amount in enumerate(totals) if amount > 0]


def evaluate_and_determine_winners(
    player_hole_cards: Sequence[Tuple[int, Sequence[Card]]],
    community_cards: Sequence[Card],
    main_pot: int,
    side_pots: Iterable[SidePot] = (),
) -> List[Tuple[int, int]]:
    """Evaluate each player's best hand and work out what every seat wins."""
    hands = []
    for seat, hole_cards in player_hole_cards:
        hand = evaluate_best_hand(hole_cards, community_cards)
        logger.debug(
            "seat %s hand: %s (primary %s, secondary %s)",
            seat,
            hand.rank.name,
            hand.primary_value,
            hand.secondary_value,
        )
        hands.append((seat, hand))
    winners = determine_all_winners(hands, main_pot, side_pots)
    for seat, amount in winners:
        logger.debug("seat %s wins %s", seat, amount)
    return winners


def distribute_winnings(
    game: Game,
    player_states: Sequence[PlayerState],
    winners: Iterable[Tuple[int, int]],
) -> int:
    """Credit each winner and empty the pot; return the total paid out."""
    winners = list(winners)
    total = sum(amount for _, amount in winners)
    if total > game.pot:
        raise PokerError(ErrorCode.INVALID_GAME_CONFIG)
    for seat, amount in winners:
        player_states[seat].add_winnings(amount)
        logger.debug("seat %s received %s chips", seat, amount)
    game.pot = 0
    return total


def calculate_rake(pot_amount: int, rake_percentage: int) -> int:
    """House fee: a percentage of the pot, capped at ``MAX_RAKE``."""
    return min(pot_amount * rake_percentage // 100, MAX_RAKE)


def handle_muck(player_state: PlayerState, now: int) -> None:
    """Fold at showdown without showing the cards."""
    player_state.fold(now)
    logger.debug("player %s mucked", player_state.player)
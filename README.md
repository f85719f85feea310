# holdem

`holdem` is a library that models a Texas Hold'em table. It provides:

- table setup, seating and leaving;
- dealer rotation and blind positions;
- stage flow from pre-flop to showdown, with burn cards and community cards;
- five- and seven-card hand evaluation;
- side pots, showdown winners, payouts and rake;
- withdrawal fees;
- consistency checks and proof records for the game state.

The library does no I/O and never reads the clock. Every call that records a time takes a
`now` argument, which is a Unix timestamp in seconds.

## Installation

Install the package:

```
pip install .
```

Install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Cards and hands

Cards are numbered 0 to 51. Hearts come first, then diamonds, then clubs, then spades. Within
each suit the ranks run from two to ace.

- `Card.to_index()` converts a card to its number.
- `Card.from_index()` converts a number to a card.
- `generate_standard_deck()` returns the 52 cards in that order.

```python
from holdem.cards import Card
from holdem.types import Suit, Rank, HandRank
from holdem.evaluator import evaluate_hand, evaluate_best_hand

royal = [Card(Suit.SPADES, r) for r in (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN)]
assert evaluate_hand(royal).rank is HandRank.ROYAL_FLUSH

hole = [Card.from_index(12), Card.from_index(25)]          # ace of hearts, ace of diamonds
board = [Card.from_index(i) for i in (0, 14, 28, 42, 5)]
best = evaluate_best_hand(hole, board)
print(best.rank, best.primary_value)
```

`evaluate_hand` takes exactly five cards. `evaluate_best_hand` takes two hole cards and five
community cards, and returns the best of the 21 five-card hands that can be formed from them.

An `EvaluatedHand` is compared in this order:

1. by rank;
2. by primary value;
3. by secondary value;
4. by kickers.

This means `>` and `==` between two hands decide a showdown.

## Running a table

```python
import random

from holdem.cards import EncryptedDeck
from holdem.flow import advance_game_stage, start_new_hand
from holdem.game import initialize_game, join_game, leave_game
from holdem.types import GameStage

game = initialize_game(game_id=1, authority="table-owner", now=1_700_000_000)
alice = join_game(game, "alice", 200_000_000, now=1_700_000_001)
bob = join_game(game, "bob", 200_000_000, now=1_700_000_002)

# Supply a shuffled deck and begin the hand.
game.deck = EncryptedDeck.from_shuffle(random.sample(range(52), 52), bytes(32), bytes(32))
game.deck_initialized = True
game.stage = GameStage.PRE_FLOP

advance_game_stage(game, now=1_700_000_010)   # flop: one burn card, three board cards
print(game.community_cards[:game.community_cards_revealed])
```

### Table configuration

`initialize_game` replaces each configuration argument left as `None` with its default:

| Setting | Default |
|---|---|
| Blinds | 1,000,000 / 2,000,000 |
| Buy-in | 200,000,000 to 2,000,000,000 |
| Seats | 6 |

If the configuration breaks any of these rules, `initialize_game` raises `PokerError` with
`INVALID_GAME_CONFIG`:

- the seat count is between 2 and 6;
- the big blind is higher than the small blind;
- the minimum buy-in is at least 50 big blinds;
- the maximum buy-in is at least the minimum buy-in.

### Seating and leaving

`join_game` checks three conditions:

- the table is still waiting for players;
- the buy-in is within the configured limits;
- the player is not already seated and the table is not full.

It then adds the buy-in to `game.escrow` and returns the new `PlayerState`.

`leave_game` is allowed only while the table is waiting or finished. It removes the player,
takes the remaining stack out of `game.escrow`, and returns that amount.

### Stage flow

`holdem.flow.advance_game_stage` moves the hand one stage forward: pre-flop, flop, turn,
river, showdown. At each step it resets the betting round and reveals the community cards
for the new street.

`start_new_hand` does the following:

- rotates the dealer button;
- empties the pot and the board;
- marks the deck as not initialised, so a new deck has to be supplied before the next flop.

`holdem.flow` also provides these functions:

| Function | Purpose |
|---|---|
| `get_small_blind_position`, `get_big_blind_position` | Blind seats; heads-up, the dealer posts the small blind. |
| `get_first_player_for_round` | The first player to act in a betting round. |
| `check_turn_timeout`, `handle_player_timeout` | Detect a timed-out turn and fold that player. |
| `check_single_player_remaining`, `check_all_players_all_in` | End-of-betting checks. |
| `should_end_game`, `end_game` | Decide whether the game is over, and end it. |

`PlayerState` records a player's stack and bets. Its methods are:

- `place_bet`
- `fold`
- `add_winnings`
- `reset_for_new_round`
- `reset_for_new_hand`

## Showdown and payouts

`holdem.showdown.evaluate_and_determine_winners` evaluates each remaining hand against the
board. It awards every `SidePot` to the best hand among the seats eligible for it. It then
awards the main pot. When a pot splits unevenly, the first winner receives the odd chips.

`distribute_winnings` credits the winners' stacks and empties the pot. It raises if the
winners would be paid more than the pot holds.

`calculate_rake` returns the house fee as a percentage of the pot, capped at `MAX_RAKE`
(3,000,000).

`handle_muck` folds a player without showing their cards.

## Withdrawals

`holdem.withdrawal.calculate_withdrawal_fee` splits an amount into `(net_amount, fee)`.

`validate_withdrawal` allows a cash-out only when all of these hold:

- the table is between hands;
- the amount is no more than the player's stack;
- the player is not holding a live hand.

## Errors

Every rule violation raises `holdem.errors.PokerError`. Its `code` attribute holds an
`ErrorCode` member, such as `ErrorCode.GAME_FULL`, `ErrorCode.INSUFFICIENT_CHIPS` or
`ErrorCode.INVALID_GAME_STAGE`. Each code has a `message` property that describes the error.

## Integrity checks

`holdem.security` validates the following:

- stage transitions;
- bet limits;
- turn order;
- timeouts;
- that a deck is a permutation of the 52 cards.

It also audits the chips in play and counts seated players who folded without putting chips
in.

`holdem.proofs` provides commitment-style records for hands, shuffles and card ownership,
each with a matching check. These checks test the form of a proof only: whether it is present,
its size, and the rank it claims. They do not perform any cryptographic verification.

## What the package does not do

The package leaves several parts of a game to the caller:

- **Betting actions.** There are no handlers for check, call, bet, raise or all-in. Betting is
  recorded only through `PlayerState.place_bet` and `PlayerState.fold`.
- **Starting a hand.** There is no start-of-game step. The package does not shuffle the deck,
  deal hole cards or post blinds. The caller supplies the shuffled `EncryptedDeck`, sets the
  stage, and posts the blinds with `place_bet`.
- **Reading hole cards.** `holdem.showdown` works on hole cards that the caller passes in.
- **Storage, networking and interface.** There is no persistent storage, no network service,
  no command-line program and no user interface.
"""Texas Hold'em table state, hand evaluation, stage flow and showdown payouts."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "errors",
    "utils",
    "cards",
    "evaluator",
    "player",
    "game",
    "flow",
    "security",
    "proofs",
    "showdown",
    "withdrawal",
]
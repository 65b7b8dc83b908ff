"""Order game anti-cheat verification and scoring."""

from .validation import get_correct_order, would_solve, evaluate_ordering, is_solved, count_correct_pairs
from .scoring import calculate_order_score
from .submission import OrderPlayVerdict, verify_order_play

__all__ = [
    "get_correct_order",
    "would_solve",
    "evaluate_ordering",
    "is_solved",
    "count_correct_pairs",
    "calculate_order_score",
    "OrderPlayVerdict",
    "verify_order_play"
]

"""Reconcile an untrusted claim with the server-recomputed value."""

from typing import Any, Optional, Tuple, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Discrepancy(BaseModel):
    """A field where the producer's claim disagrees with the recomputation."""

    field: str
    claimed: Any
    recomputed: Any
    note: str


def reconcile(field: str, claimed: Any, recomputed: T, note: Optional[str] = None) -> Tuple[T, Optional[Discrepancy]]:
    """Return the authoritative value and a discrepancy if the claim disagrees.

    The recomputed value always wins. The discrepancy is ``None`` when the
    claim matches, so callers only have to act on non-``None`` results.
    """
    if _normalize(claimed) == _normalize(recomputed):
        return recomputed, None

    return recomputed, Discrepancy(
        field=field,
        claimed=claimed,
        recomputed=recomputed,
        note=note or f"{field} claimed {claimed!r} but recomputed {recomputed!r}"
    )


def _normalize(value: Any) -> Any:
    # Tuples compare equal to lists and enum members compare by value.
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return getattr(value, "value", value)

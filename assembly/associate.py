"""Best-effort pairing of an assembly step with the pieces it handles."""
from typing import Sequence, TypeVar

from .constants import FALLBACK_WINDOW, KEYWORDS, MAX_MATCHES

P = TypeVar("P")


def _name(piece) -> str:
    # bare names are accepted as well as Piece rows
    return piece if isinstance(piece, str) else piece.name


def matching_keywords(text: str) -> list[str]:
    """Keywords present in text (case-insensitive), in vocabulary order."""
    text = text.lower()
    return [k for k in KEYWORDS if k in text]


def associate(step_text: str, pieces: Sequence[P], step_index: int) -> list[P]:
    """Up to MAX_MATCHES pieces whose name shares a keyword with step_text.

    A piece matches when some keyword appears both in the step text and in
    the piece's name. With no match, a window of FALLBACK_WINDOW pieces
    starting at (step_index - 1) mod len(pieces) is returned instead,
    wrapping past the end of the list. This is a heuristic for
    illustration, not a statement of which pieces a step really uses.
    """
    if not pieces:
        return []
    words = matching_keywords(step_text)
    matched = [p for p in pieces
               if any(k in _name(p).lower() for k in words)]
    if matched:
        return matched[:MAX_MATCHES]
    n = len(pieces)
    start = (step_index - 1) % n
    return [pieces[(start + i) % n] for i in range(min(FALLBACK_WINDOW, n))]

from collections.abc import Sequence
from difflib import get_close_matches

from glow.core.errors import AmbiguousError, NotFoundError
from glow.core.models import Habit

__all__ = ["find_habit", "resolve_habit"]

FUZZY_MATCH_CUTOFF = 0.8


def _match_id_prefix(ref: str, pool: Sequence[Habit]) -> Habit | None:
    ref_lower = ref.lower()
    exact = next((h for h in pool if h.id.lower() == ref_lower), None)
    if exact:
        return exact
    matches = [h for h in pool if h.id.lower().startswith(ref_lower)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        sample = [h.id[:8] for h in matches[:3]]
        raise AmbiguousError(ref, count=len(matches), sample=sample)
    return None


def _match_substring(ref: str, pool: Sequence[Habit]) -> Habit | None:
    ref_lower = ref.lower()
    exact = next((h for h in pool if h.title.lower() == ref_lower), None)
    if exact:
        return exact
    matches = [h for h in pool if ref_lower in h.title.lower()]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        sample = [h.title for h in matches[:3]]
        raise AmbiguousError(ref, count=len(matches), sample=sample)
    return None


def _match_fuzzy(ref: str, pool: Sequence[Habit]) -> Habit | None:
    titles = [h.title.lower() for h in pool]
    matches = get_close_matches(ref.lower(), titles, n=1, cutoff=FUZZY_MATCH_CUTOFF)
    if matches:
        return pool[titles.index(matches[0])]
    return None


def find_habit(ref: str, pool: Sequence[Habit]) -> Habit | None:
    """Match by id prefix, then title substring, then close spelling."""
    if not pool or not ref:
        return None
    return _match_id_prefix(ref, pool) or _match_substring(ref, pool) or _match_fuzzy(ref, pool)


def resolve_habit(ref: str, pool: Sequence[Habit]) -> Habit:
    habit = find_habit(ref, pool)
    if not habit:
        raise NotFoundError(f"No habit found: '{ref}'")
    return habit

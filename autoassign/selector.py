from __future__ import annotations

import random
from typing import FrozenSet, List, Optional, Protocol, Sequence


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int: ...


_default_rng = random.Random()


def eligible_users(pool: Sequence[str], exclude: Optional[str]) -> List[str]:
    """Return ``pool`` without ``exclude`` and without repeated logins, in pool order."""
    seen = set()
    eligible: List[str] = []
    for login in pool:
        if login == exclude or login in seen:
            continue
        seen.add(login)
        eligible.append(login)
    return eligible


def choose_users(
    pool: Sequence[str],
    count: int,
    exclude: Optional[str] = None,
    rng: Optional[RandomSource] = None,
) -> FrozenSet[str]:
    """Pick ``count`` distinct users from ``pool``, never ``exclude``.

    A non-positive ``count``, or one at least as large as the eligible pool,
    selects everyone eligible. Otherwise the first ``count`` slots of a partial
    Fisher-Yates shuffle are returned.
    """
    candidates = eligible_users(pool, exclude)
    if count <= 0 or count >= len(candidates):
        return frozenset(candidates)

    rng = rng or _default_rng
    for i in range(count):
        j = rng.randrange(i, len(candidates))
        candidates[i], candidates[j] = candidates[j], candidates[i]
    return frozenset(candidates[:count])

from __future__ import annotations

import hashlib
from typing import Sequence


def _seeded_rank(selection_seed: str, item_id: str) -> tuple[int, str]:
    digest = hashlib.sha256(f"{selection_seed}:{item_id}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big"), item_id


def sample_item_ids(
    candidate_ids: Sequence[str],
    *,
    count: int,
    selection_seed: str,
) -> list[str]:
    """Picks up to ``count`` distinct ids in a seed-stable random order.

    Duplicated candidates collapse to one entry, so an id never appears twice in
    the returned list. An undersized pool returns everything it has.
    """
    if count <= 0:
        return []
    unique_ids = list(dict.fromkeys(candidate_ids))
    ranked = sorted(unique_ids, key=lambda item_id: _seeded_rank(selection_seed, item_id))
    return ranked[:count]

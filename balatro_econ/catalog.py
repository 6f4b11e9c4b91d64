"""Consumable catalog lookup.

Templates are never handed out: every accessor returns a fresh copy so a
live card's ``sell_value_bonus`` cannot leak back into the catalog.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .consumables import Consumable
from .enums import ConsumableType
from .errors import UnknownConsumableError
from .planets import PLANETS
from .rng import get_rng
from .spectral import SPECTRALS
from .tarot import TAROTS

CATALOG: dict[str, Consumable] = {c.id: c for c in (*TAROTS, *PLANETS, *SPECTRALS)}

_BY_TYPE: dict[ConsumableType, list[Consumable]] = {
    ConsumableType.TAROT: TAROTS,
    ConsumableType.PLANET: PLANETS,
    ConsumableType.SPECTRAL: SPECTRALS,
}


def get_consumable_by_id(consumable_id: str) -> Optional[Consumable]:
    template = CATALOG.get(consumable_id)
    return template.clone() if template is not None else None


def require_consumable(consumable_id: str) -> Consumable:
    """Like ``get_consumable_by_id`` but raises on a broken reference."""
    consumable = get_consumable_by_id(consumable_id)
    if consumable is None:
        raise UnknownConsumableError(consumable_id)
    return consumable


def all_consumable_ids() -> list[str]:
    return list(CATALOG)


def get_consumables_by_type(
    ctype: ConsumableType, include_pack_exclusive: bool = True,
) -> list[Consumable]:
    return [
        c.clone() for c in _BY_TYPE[ctype]
        if include_pack_exclusive or not c.pack_exclusive
    ]


def get_random_consumables(
    count: int,
    ctype: ConsumableType,
    rng: Optional[random.Random] = None,
    exclude_ids: Iterable[str] = (),
) -> list[Consumable]:
    """Up to ``count`` distinct random entries of ``ctype``.

    Pack-exclusive entries are never drawn here.
    """
    rng = get_rng(rng)
    excluded = set(exclude_ids)
    pool = [
        c for c in _BY_TYPE[ctype]
        if not c.pack_exclusive and c.id not in excluded
    ]
    picked = rng.sample(pool, min(count, len(pool)))
    return [c.clone() for c in picked]


def get_random_consumable(
    ctype: ConsumableType, rng: Optional[random.Random] = None,
) -> Optional[Consumable]:
    picked = get_random_consumables(1, ctype, rng)
    return picked[0] if picked else None

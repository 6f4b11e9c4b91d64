"""Booster pack catalog and weighted pack draws.

Cost, choices and select count depend only on (type, size):

    size    cost  choices  (buffoon/spectral)  select
    normal  4     3        2                   1
    jumbo   6     5        4                   1
    mega    8     5        4                   2
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from .enums import PackSize, PackType
from .rng import get_rng

STARTER_PACK_ID = "pack_buffoon_normal"

_SIZE_COST: dict[PackSize, int] = {PackSize.NORMAL: 4, PackSize.JUMBO: 6, PackSize.MEGA: 8}
_SIZE_CHOICES: dict[PackSize, int] = {PackSize.NORMAL: 3, PackSize.JUMBO: 5, PackSize.MEGA: 5}
_SIZE_SELECT: dict[PackSize, int] = {PackSize.NORMAL: 1, PackSize.JUMBO: 1, PackSize.MEGA: 2}
_SMALL_PACK_TYPES = {PackType.BUFFOON, PackType.SPECTRAL}

_TYPE_LABEL: dict[PackType, tuple[str, str]] = {
    PackType.STANDARD: ("标准卡包", "游戏牌"),
    PackType.ARCANA: ("秘术卡包", "塔罗牌"),
    PackType.CELESTIAL: ("天体卡包", "星球牌"),
    PackType.BUFFOON: ("小丑卡包", "小丑牌"),
    PackType.SPECTRAL: ("幻灵卡包", "幻灵牌"),
}
_SIZE_PREFIX: dict[PackSize, str] = {PackSize.NORMAL: "", PackSize.JUMBO: "巨型", PackSize.MEGA: "超级"}

PACK_WEIGHTS: dict[PackType, dict[PackSize, float]] = {
    PackType.STANDARD: {PackSize.NORMAL: 4, PackSize.JUMBO: 2, PackSize.MEGA: 0.5},
    PackType.ARCANA: {PackSize.NORMAL: 4, PackSize.JUMBO: 2, PackSize.MEGA: 0.5},
    PackType.CELESTIAL: {PackSize.NORMAL: 4, PackSize.JUMBO: 2, PackSize.MEGA: 0.5},
    PackType.BUFFOON: {PackSize.NORMAL: 1.2, PackSize.JUMBO: 0.6, PackSize.MEGA: 0.15},
    PackType.SPECTRAL: {PackSize.NORMAL: 0.6, PackSize.JUMBO: 0.3, PackSize.MEGA: 0.07},
}


@dataclass(frozen=True)
class BoosterPack:
    id: str
    name: str
    description: str
    type: PackType
    size: PackSize
    cost: int
    choices: int       # cards revealed
    select_count: int  # cards to pick

    @property
    def weight(self) -> float:
        return PACK_WEIGHTS[self.type][self.size]


def _build(ptype: PackType, size: PackSize) -> BoosterPack:
    choices = _SIZE_CHOICES[size] - (1 if ptype in _SMALL_PACK_TYPES else 0)
    select = _SIZE_SELECT[size]
    label, contents = _TYPE_LABEL[ptype]
    return BoosterPack(
        id=f"pack_{ptype.value}_{size.value}",
        name=_SIZE_PREFIX[size] + label,
        description=f"从最多{choices}张{contents}中选择{select}张",
        type=ptype,
        size=size,
        cost=_SIZE_COST[size],
        choices=choices,
        select_count=select,
    )


BOOSTER_PACKS: list[BoosterPack] = [_build(t, s) for t in PackType for s in PackSize]

_BY_ID: dict[str, BoosterPack] = {p.id: p for p in BOOSTER_PACKS}


def get_pack_by_id(pack_id: str) -> Optional[BoosterPack]:
    return _BY_ID.get(pack_id)


def get_packs_by_type(ptype: PackType) -> list[BoosterPack]:
    return [p for p in BOOSTER_PACKS if p.type == ptype]


def get_random_pack(
    rng: Optional[random.Random] = None,
    exclude_ids: Iterable[str] = (),
) -> Optional[BoosterPack]:
    """Weighted draw over the pack table, skipping ``exclude_ids``."""
    rng = get_rng(rng)
    excluded = set(exclude_ids)
    candidates = [p for p in BOOSTER_PACKS if p.id not in excluded]
    if not candidates:
        return None
    poll = rng.random() * sum(p.weight for p in candidates)
    cume = 0.0
    for p in candidates:
        cume += p.weight
        if poll < cume:
            return p
    return candidates[-1]


def get_random_packs(
    count: int,
    rng: Optional[random.Random] = None,
    exclude_ids: Iterable[str] = (),
) -> list[BoosterPack]:
    """Up to ``count`` weighted draws without repeats."""
    excluded = set(exclude_ids)
    drawn = []
    for _ in range(count):
        pack = get_random_pack(rng, excluded)
        if pack is None:
            break
        excluded.add(pack.id)
        drawn.append(pack)
    return drawn

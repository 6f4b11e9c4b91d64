"""Voucher catalog and purchase progression.

Vouchers come in base/upgraded pairs. The upgraded half is offered only
after its base has been bought, and a pair drops out of the offer pool
once both halves are owned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .errors import UnknownVoucherError

logger = logging.getLogger(__name__)

VOUCHER_COST = 10
BLANK_VOUCHER_ID = "voucher_blank"


# ---------------------------------------------------------------------------
# Voucher catalog: (key, name, description, cost, order, requires)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VoucherDef:
    id: str
    name: str
    description: str
    cost: int = VOUCHER_COST
    order: int = 0
    requires: Optional[str] = None  # id of prerequisite voucher

    @property
    def is_upgraded(self) -> bool:
        return self.requires is not None


@dataclass(frozen=True)
class VoucherPair:
    base: VoucherDef
    upgraded: VoucherDef


_PAIR_RAW: list[tuple[tuple[str, str, str], tuple[str, str, str]]] = [
    (("overstock", "库存过剩", "商店卡牌槽位+1"),
     ("overstock_plus", "库存过剩+", "商店卡牌槽位+2")),
    (("clearance", "清仓大甩卖", "所有卡牌和卡包75折"),
     ("liquidation", "清仓大甩卖+", "所有卡牌和卡包5折")),
    (("hone", "打磨", "箔片、全息、多色版本出现率翻倍"),
     ("glow_up", "蜕变", "箔片、全息、多色版本出现率翻4倍")),
    (("reroll_surplus", "刷新盈余", "刷新费用减少$2"),
     ("reroll_glut", "刷新盈余+", "刷新费用减少$4")),
    (("crystal_ball", "水晶球", "消耗牌槽位+1"),
     ("omen_globe", "预兆球", "幻灵牌可能出现在秘术卡包中")),
    (("telescope", "望远镜", "天体卡包包含你最常打出的牌型"),
     ("observatory", "天文台", "星球牌对其牌型给予x1.5倍率")),
    (("grabber", "抓取者", "每回合永久+1出牌次数"),
     ("nacho_tong", "抓取者+", "每回合永久+2出牌次数")),
    (("wasteful", "浪费", "每回合永久+1弃牌次数"),
     ("recyclomancy", "浪费+", "每回合永久+2弃牌次数")),
    (("tarot_merchant", "塔罗商人", "塔罗牌出现频率翻倍"),
     ("tarot_tycoon", "塔罗商人+", "塔罗牌出现频率翻4倍")),
    (("planet_merchant", "星球商人", "星球牌出现频率翻倍"),
     ("planet_tycoon", "星球商人+", "星球牌出现频率翻4倍")),
    (("seed_money", "种子资金", "利息上限提升至$10"),
     ("money_tree", "种子资金+", "利息上限提升至$20")),
    (("blank", "空白", "什么都不做？"),
     ("antimatter", "空白+", "小丑牌槽位+1")),
    (("magic_trick", "魔术技巧", "商店会出售扑克牌"),
     ("illusion", "魔术技巧+", "商店的扑克牌带有特殊效果（增强/版本/蜡封）")),
    (("hieroglyph", "象形文字", "底注-1，每回合出牌次数-1"),
     ("petroglyph", "象形文字+", "底注-1，每回合弃牌次数-1")),
    (("directors_cut", "导演剪辑版", "每个底注可重掷Boss盲注1次"),
     ("retcon", "导演剪辑版+", "可无限次重掷Boss盲注")),
    (("paint_brush", "画笔", "手牌上限+1"),
     ("palette", "画笔+", "手牌上限+2")),
]


def _build_pairs() -> list[VoucherPair]:
    pairs = []
    for i, ((bkey, bname, bdesc), (ukey, uname, udesc)) in enumerate(_PAIR_RAW):
        base = VoucherDef(f"voucher_{bkey}", bname, bdesc, order=2 * i + 1)
        upgraded = VoucherDef(f"voucher_{ukey}", uname, udesc, order=2 * i + 2,
                              requires=base.id)
        pairs.append(VoucherPair(base, upgraded))
    return pairs


VOUCHER_PAIRS: list[VoucherPair] = _build_pairs()

VOUCHERS: dict[str, VoucherDef] = {
    v.id: v for pair in VOUCHER_PAIRS for v in (pair.base, pair.upgraded)
}

_PAIR_OF: dict[str, VoucherPair] = {
    v.id: pair for pair in VOUCHER_PAIRS for v in (pair.base, pair.upgraded)
}


def get_voucher(voucher_id: str) -> VoucherDef:
    try:
        return VOUCHERS[voucher_id]
    except KeyError:
        raise UnknownVoucherError(voucher_id) from None


def get_voucher_pair(voucher_id: str) -> Optional[VoucherPair]:
    return _PAIR_OF.get(voucher_id)


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------

class VoucherTracker:
    """Which vouchers the player owns, in purchase order."""

    def __init__(self, used: Iterable[str] = ()):
        self._used: list[str] = []
        for voucher_id in used:
            self.purchase(voucher_id)

    @property
    def used(self) -> list[str]:
        return list(self._used)

    @property
    def count(self) -> int:
        return len(self._used)

    def is_used(self, voucher_id: str) -> bool:
        return voucher_id in self._used

    def any_used(self, *voucher_ids: str) -> bool:
        return any(v in self._used for v in voucher_ids)

    def purchase(self, voucher_id: str) -> bool:
        """Record a purchase. Returns False if already owned."""
        get_voucher(voucher_id)
        if voucher_id in self._used:
            return False
        self._used.append(voucher_id)
        logger.debug("voucher recorded: %s (%d owned)", voucher_id, len(self._used))
        return True

    def get_available_vouchers(self) -> list[VoucherDef]:
        """One offer per pair: base, else upgraded, else nothing."""
        available = []
        for pair in VOUCHER_PAIRS:
            if not self.is_used(pair.base.id):
                available.append(pair.base)
            elif not self.is_used(pair.upgraded.id):
                available.append(pair.upgraded)
        return available

    def can_buy_voucher(self, voucher_id: str) -> bool:
        return any(v.id == voucher_id for v in self.get_available_vouchers())

    def is_exhausted(self) -> bool:
        return not self.get_available_vouchers()

"""Planet cards (12). Each levels up one hand type."""

from __future__ import annotations

from typing import Optional

from .consumables import Consumable
from .effects import EffectContext, EffectResult
from .enums import ConsumableType, HandType, PLANET_BONUS


# ---------------------------------------------------------------------------
# Planet table: (key, name, description, cost, hand type)
# Chip/mult bonus per level comes from PLANET_BONUS
# ---------------------------------------------------------------------------

_PLANET_RAW: list[tuple[str, str, str, int, HandType]] = [
    ("mercury", "水星", "升级对子", 4, HandType.PAIR),
    ("venus", "金星", "升级三条", 4, HandType.THREE_OF_A_KIND),
    ("earth", "地球", "升级葫芦", 4, HandType.FULL_HOUSE),
    ("mars", "火星", "升级四条", 6, HandType.FOUR_OF_A_KIND),
    ("jupiter", "木星", "升级同花", 5, HandType.FLUSH),
    ("saturn", "土星", "升级顺子", 5, HandType.STRAIGHT),
    ("uranus", "天王星", "升级两对", 4, HandType.TWO_PAIR),
    ("neptune", "海王星", "升级同花顺", 6, HandType.STRAIGHT_FLUSH),
    ("pluto", "冥王星", "升级高牌", 3, HandType.HIGH_CARD),
    ("planet_x", "行星X", "升级五条", 7, HandType.FIVE_OF_A_KIND),
    ("ceres", "谷神星", "升级同花葫芦", 7, HandType.FLUSH_HOUSE),
    ("eris", "阋神星", "升级同花五条", 7, HandType.FLUSH_FIVE),
]

# Hand types that only exist with modified decks
SECRET_HAND_TYPES = {HandType.FIVE_OF_A_KIND, HandType.FLUSH_HOUSE, HandType.FLUSH_FIVE}


def _level_up(name: str, description: str, hand_type: HandType):
    chips, mult = PLANET_BONUS[hand_type]

    def effect(ctx: EffectContext) -> EffectResult:
        return EffectResult.ok(
            f"{name}: {description} (+{chips}筹码, +{mult}倍率)",
            hand_type_upgrade=hand_type,
        )
    return effect


def _build(key, name, description, cost, hand_type) -> Consumable:
    chips, mult = PLANET_BONUS[hand_type]
    return Consumable(
        id=f"planet_{key}",
        name=name,
        description=description,
        type=ConsumableType.PLANET,
        cost=cost,
        effect=_level_up(name, description, hand_type),
        use_condition="无特殊条件",
        hand_type=hand_type,
        chips=chips,
        mult=mult,
    )


PLANETS: list[Consumable] = [_build(*row) for row in _PLANET_RAW]

_BY_HAND_TYPE: dict[HandType, Consumable] = {p.hand_type: p for p in PLANETS}

BASIC_PLANET_IDS: list[str] = [
    p.id for p in PLANETS if p.hand_type not in SECRET_HAND_TYPES
]


def get_planet_by_hand_type(hand_type: HandType) -> Optional[Consumable]:
    """Fresh copy of the planet that levels ``hand_type``."""
    planet = _BY_HAND_TYPE.get(hand_type)
    return planet.clone() if planet is not None else None

"""Booster pack contents.

A pack reveals exactly ``pack.choices`` items; how many the player keeps
(``select_count``) is decided downstream. Hallucination may append one
extra tarot to any pack type.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .cards import Card, JokerCard
from .catalog import get_random_consumables, require_consumable
from .consumables import Consumable
from .enums import ConsumableType, HandType, PackType, Rank, Suit
from .jokers import get_random_jokers
from .packs import BoosterPack
from .planets import get_planet_by_hand_type
from .probabilities import BLACK_HOLE_CHANCE, HALLUCINATION_CHANCE, SOUL_CHANCE, roll_card_modifiers
from .rng import get_rng

logger = logging.getLogger(__name__)

PackContent = Union[Card, JokerCard, Consumable]

TELESCOPE_ID = "voucher_telescope"
OMEN_GLOBE_ID = "voucher_omen_globe"
OMEN_GLOBE_CHANCE = 0.2
SOUL_ID = "spectral_soul"
BLACK_HOLE_ID = "spectral_black_hole"


@dataclass
class PackSession:
    """What pack generation needs to know about the running game."""
    vouchers_used: Sequence[str] = ()
    player_joker_ids: Sequence[str] = ()
    shop_joker_ids: Sequence[str] = ()
    most_played_hand_type: Optional[HandType] = None
    has_hallucination: bool = False
    rng: random.Random = field(default_factory=get_rng)


def generate_pack_contents(
    pack: BoosterPack,
    session: Optional[PackSession] = None,
    apply_hallucination: bool = True,
) -> list[PackContent]:
    session = session or PackSession()
    if pack.type == PackType.STANDARD:
        contents = generate_standard_cards(pack.choices, session)
    elif pack.type == PackType.ARCANA:
        contents = _arcana_contents(pack.choices, session)
    elif pack.type == PackType.CELESTIAL:
        contents = _celestial_contents(pack.choices, session)
    elif pack.type == PackType.BUFFOON:
        contents = _buffoon_contents(pack.choices, session)
    else:
        contents = _spectral_contents(pack.choices, session)

    if apply_hallucination:
        _apply_hallucination(contents, session)

    logger.info("opened %s: %s", pack.id, contents)
    return contents


def generate_random_playing_card(
    vouchers_used: Sequence[str] = (),
    rng: Optional[random.Random] = None,
) -> Card:
    rng = get_rng(rng)
    rank = rng.choice(list(Rank))
    suit = rng.choice(list(Suit))
    enhancement, edition, seal = roll_card_modifiers(vouchers_used, rng)
    return Card(rank, suit, edition=edition, enhancement=enhancement, seal=seal)


def generate_standard_cards(count: int, session: PackSession) -> list[Card]:
    return [generate_random_playing_card(session.vouchers_used, session.rng) for _ in range(count)]


# ---------------------------------------------------------------------------
# Per-type generators
# ---------------------------------------------------------------------------

def _arcana_contents(count: int, session: PackSession) -> list[Consumable]:
    """Tarot draws; with Omen Globe some slots turn spectral."""
    if OMEN_GLOBE_ID not in session.vouchers_used:
        return get_random_consumables(count, ConsumableType.TAROT, session.rng)

    spectral_slots = sum(1 for _ in range(count) if session.rng.random() < OMEN_GLOBE_CHANCE)
    contents = get_random_consumables(count - spectral_slots, ConsumableType.TAROT, session.rng)
    contents += get_random_consumables(spectral_slots, ConsumableType.SPECTRAL, session.rng)
    return contents


def _celestial_contents(count: int, session: PackSession) -> list[Consumable]:
    target = None
    if TELESCOPE_ID in session.vouchers_used and session.most_played_hand_type is not None:
        target = get_planet_by_hand_type(session.most_played_hand_type)

    if target is None:
        return get_random_consumables(count, ConsumableType.PLANET, session.rng)

    logger.debug("telescope: forcing %s", target.id)
    rest = get_random_consumables(count - 1, ConsumableType.PLANET, session.rng, exclude_ids=[target.id])
    return [target] + rest


def _buffoon_contents(count: int, session: PackSession) -> list[JokerCard]:
    existing = set(session.player_joker_ids) | set(session.shop_joker_ids)
    return get_random_jokers(count, session.rng, exclude_ids=existing,
                             vouchers_used=session.vouchers_used)


def _spectral_contents(count: int, session: PackSession) -> list[Consumable]:
    """Spectral draws; each slot may instead reveal Soul or Black Hole."""
    rng = session.rng
    specials: list[Consumable] = []
    for _ in range(count):
        roll = rng.random()
        if roll < SOUL_CHANCE and not _has(specials, SOUL_ID):
            specials.append(require_consumable(SOUL_ID))
        elif roll < SOUL_CHANCE + BLACK_HOLE_CHANCE and not _has(specials, BLACK_HOLE_ID):
            specials.append(require_consumable(BLACK_HOLE_ID))
    regular = get_random_consumables(count - len(specials), ConsumableType.SPECTRAL, rng)
    return regular + specials


def _has(items: list[Consumable], consumable_id: str) -> bool:
    return any(c.id == consumable_id for c in items)


def _apply_hallucination(contents: list[PackContent], session: PackSession) -> None:
    if not session.has_hallucination:
        return
    if session.rng.random() < HALLUCINATION_CHANCE:
        extra = get_random_consumables(1, ConsumableType.TAROT, session.rng)
        if extra:
            contents.append(extra[0])
            logger.info("幻觉: 生成了一张塔罗牌！")

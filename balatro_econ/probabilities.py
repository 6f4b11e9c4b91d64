"""Modifier roll tables for generated playing cards and jokers.

Hone doubles and Glow Up quadruples the foil/holographic/polychrome
chances, each capped. Negative jokers are unaffected by vouchers.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .enums import Edition, Enhancement, Seal
from .rng import get_rng

# Playing cards
ENHANCEMENT_CHANCE = 0.40
SEAL_CHANCE = 0.20
CARD_EDITION_BASE: dict[Edition, float] = {
    Edition.FOIL: 0.04,
    Edition.HOLOGRAPHIC: 0.028,
    Edition.POLYCHROME: 0.012,
}
CARD_EDITION_CAP: dict[Edition, float] = {
    Edition.FOIL: 0.5,
    Edition.HOLOGRAPHIC: 0.3,
    Edition.POLYCHROME: 0.15,
}

# Jokers
JOKER_EDITION_BASE: dict[Edition, float] = {
    Edition.FOIL: 0.014,
    Edition.HOLOGRAPHIC: 0.003,
    Edition.POLYCHROME: 0.003,
    Edition.NEGATIVE: 0.01,
}
JOKER_EDITION_CAP: dict[Edition, float] = {
    Edition.FOIL: 0.3,
    Edition.HOLOGRAPHIC: 0.15,
    Edition.POLYCHROME: 0.08,
}

# Pack specials
HALLUCINATION_CHANCE = 0.5
SOUL_CHANCE = 0.003
BLACK_HOLE_CHANCE = 0.003

ENHANCEMENT_TYPES: list[Enhancement] = [e for e in Enhancement if e != Enhancement.NONE]
SEAL_TYPES: list[Seal] = [s for s in Seal if s != Seal.NONE]


def get_edition_multiplier(vouchers_used: Iterable[str] = ()) -> int:
    used = set(vouchers_used)
    if "voucher_glow_up" in used:
        return 4
    if "voucher_hone" in used:
        return 2
    return 1


def _scaled(base, caps, multiplier) -> dict[Edition, float]:
    table = {}
    for edition, chance in base.items():
        cap = caps.get(edition)
        table[edition] = chance if cap is None else min(chance * multiplier, cap)
    table[Edition.NONE] = max(0.0, 1 - sum(table.values()))
    return table


def get_playing_card_edition_probabilities(vouchers_used: Iterable[str] = ()) -> dict[Edition, float]:
    return _scaled(CARD_EDITION_BASE, CARD_EDITION_CAP, get_edition_multiplier(vouchers_used))


def get_joker_edition_probabilities(vouchers_used: Iterable[str] = ()) -> dict[Edition, float]:
    return _scaled(JOKER_EDITION_BASE, JOKER_EDITION_CAP, get_edition_multiplier(vouchers_used))


def _roll(table: dict[Edition, float], rng: random.Random) -> Edition:
    r = rng.random()
    cumulative = 0.0
    for edition, chance in table.items():
        if edition == Edition.NONE:
            continue
        cumulative += chance
        if r < cumulative:
            return edition
    return Edition.NONE


def roll_playing_card_edition(vouchers_used: Iterable[str] = (),
                              rng: Optional[random.Random] = None) -> Edition:
    return _roll(get_playing_card_edition_probabilities(vouchers_used), get_rng(rng))


def roll_joker_edition(vouchers_used: Iterable[str] = (),
                       rng: Optional[random.Random] = None) -> Edition:
    return _roll(get_joker_edition_probabilities(vouchers_used), get_rng(rng))


def roll_card_modifiers(vouchers_used: Iterable[str] = (),
                        rng: Optional[random.Random] = None) -> tuple[Enhancement, Edition, Seal]:
    """Independent enhancement, edition and seal rolls for a playing card."""
    rng = get_rng(rng)
    enhancement = Enhancement.NONE
    if rng.random() < ENHANCEMENT_CHANCE:
        enhancement = rng.choice(ENHANCEMENT_TYPES)
    edition = roll_playing_card_edition(vouchers_used, rng)
    seal = Seal.NONE
    if rng.random() < SEAL_CHANCE:
        seal = rng.choice(SEAL_TYPES)
    return enhancement, edition, seal

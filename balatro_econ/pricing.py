"""Price formulas shared by the shop and sell-back.

    price = max(1, floor(floor(base * discount) * (1 + 0.2 * vouchers_owned)))

Liquidation (x0.5) beats Clearance (x0.75); they do not stack. The
inflation term counts every owned voucher. Computed in integers so the
floors are exact.
"""

from __future__ import annotations

from typing import Iterable

from .enums import Edition, Sticker

LIQUIDATION_ID = "voucher_liquidation"
CLEARANCE_ID = "voucher_clearance"

EDITION_SURCHARGE: dict[Edition, int] = {
    Edition.NONE: 0,
    Edition.FOIL: 2,
    Edition.HOLOGRAPHIC: 3,
    Edition.POLYCHROME: 5,
    Edition.NEGATIVE: 5,
}

PLAYING_CARD_COST = 1


def apply_discount(base: int, vouchers_used: Iterable[str]) -> int:
    used = set(vouchers_used)
    if LIQUIDATION_ID in used:
        return base // 2
    if CLEARANCE_ID in used:
        return base * 3 // 4
    return base


def calculate_price(base: int, vouchers_used: Iterable[str] = ()) -> int:
    used = list(vouchers_used)
    discounted = apply_discount(base, used)
    inflated = discounted * (5 + len(used)) // 5
    return max(1, inflated)


def calculate_price_with_edition(base: int, edition: Edition,
                                 vouchers_used: Iterable[str] = ()) -> int:
    return calculate_price(base + EDITION_SURCHARGE.get(edition, 0), vouchers_used)


def calculate_sell_price(current_price: int, sticker: Sticker = Sticker.NONE) -> int:
    if sticker == Sticker.RENTAL:
        return 1
    return max(1, current_price // 2)

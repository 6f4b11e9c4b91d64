"""Balatro economy core: consumable effects, shop, vouchers and booster packs."""

from .cards import Card, JokerCard, JokerView, HandPile, DeckPile
from .catalog import (
    get_consumable_by_id,
    require_consumable,
    get_consumables_by_type,
    get_random_consumables,
)
from .config import EconomyConfig, configure_logging
from .consumables import Consumable
from .effects import EffectContext, EffectResult, LastUsed
from .enums import (
    Suit,
    Rank,
    Edition,
    Enhancement,
    Seal,
    Sticker,
    HandType,
    ConsumableType,
    JokerRarity,
    PackType,
    PackSize,
    ShopItemCategory,
)
from .errors import GameError, UnknownConsumableError, UnknownVoucherError, InvalidStateError
from .hand_levels import HandLevels
from .pack_generator import PackSession, generate_pack_contents
from .packs import BoosterPack, BOOSTER_PACKS, get_pack_by_id
from .resolver import EffectResolver, Resolution, ResolutionTargets
from .session import GameSession
from .shop import Shop, ShopConfig, ShopItem, ShopResult
from .slots import ConsumableSlots, JokerSlots
from .vouchers import VoucherDef, VoucherPair, VoucherTracker, VOUCHER_PAIRS, get_voucher

__all__ = [
    # Cards
    "Card",
    "JokerCard",
    "JokerView",
    "HandPile",
    "DeckPile",
    # Consumables
    "Consumable",
    "EffectContext",
    "EffectResult",
    "LastUsed",
    "get_consumable_by_id",
    "require_consumable",
    "get_consumables_by_type",
    "get_random_consumables",
    "EffectResolver",
    "Resolution",
    "ResolutionTargets",
    "ConsumableSlots",
    "JokerSlots",
    "HandLevels",
    # Economy
    "Shop",
    "ShopConfig",
    "ShopItem",
    "ShopResult",
    "VoucherDef",
    "VoucherPair",
    "VoucherTracker",
    "VOUCHER_PAIRS",
    "get_voucher",
    "BoosterPack",
    "BOOSTER_PACKS",
    "get_pack_by_id",
    "PackSession",
    "generate_pack_contents",
    "GameSession",
    # Enums
    "Suit",
    "Rank",
    "Edition",
    "Enhancement",
    "Seal",
    "Sticker",
    "HandType",
    "ConsumableType",
    "JokerRarity",
    "PackType",
    "PackSize",
    "ShopItemCategory",
    # Config / errors
    "EconomyConfig",
    "configure_logging",
    "GameError",
    "UnknownConsumableError",
    "UnknownVoucherError",
    "InvalidStateError",
]

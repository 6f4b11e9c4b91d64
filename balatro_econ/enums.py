"""Enumerations and constants for the shop economy and consumable effects."""

from __future__ import annotations
from enum import Enum, IntEnum


class Suit(str, Enum):
    SPADES = "Spades"
    HEARTS = "Hearts"
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOL[self]

    @property
    def label(self) -> str:
        """Chinese suit name used in effect messages."""
        return _SUIT_LABEL[self]


_SUIT_SYMBOL: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
}

_SUIT_LABEL: dict[Suit, str] = {
    Suit.SPADES: "黑桃",
    Suit.HEARTS: "红桃",
    Suit.CLUBS: "梅花",
    Suit.DIAMONDS: "方块",
}


class Rank(IntEnum):
    """Card ranks with numeric values for comparison. Ace = 14."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def display(self) -> str:
        _map = {11: "J", 12: "Q", 13: "K", 14: "A"}
        return _map.get(self.value, str(self.value))

    @property
    def is_face(self) -> bool:
        return self.value in (11, 12, 13)


FACE_RANKS: tuple[Rank, ...] = (Rank.JACK, Rank.QUEEN, Rank.KING)
NUMBER_RANKS: tuple[Rank, ...] = tuple(r for r in Rank if r.value <= 10)


class Edition(str, Enum):
    NONE = ""
    FOIL = "Foil"
    HOLOGRAPHIC = "Holographic"
    POLYCHROME = "Polychrome"
    NEGATIVE = "Negative"

    @property
    def label(self) -> str:
        return _EDITION_LABEL[self]


_EDITION_LABEL: dict[Edition, str] = {
    Edition.NONE: "无",
    Edition.FOIL: "箔片",
    Edition.HOLOGRAPHIC: "全息",
    Edition.POLYCHROME: "多色",
    Edition.NEGATIVE: "负片",
}


class Enhancement(str, Enum):
    NONE = ""
    BONUS = "Bonus"
    MULT = "Mult"
    WILD = "Wild"
    GLASS = "Glass"
    STEEL = "Steel"
    STONE = "Stone"
    GOLD = "Gold"
    LUCKY = "Lucky"


class Seal(str, Enum):
    NONE = ""
    GOLD = "Gold"
    RED = "Red"
    BLUE = "Blue"
    PURPLE = "Purple"


class Sticker(str, Enum):
    NONE = ""
    ETERNAL = "eternal"
    PERISHABLE = "perishable"
    RENTAL = "rental"


class JokerRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class ConsumableType(str, Enum):
    TAROT = "tarot"
    PLANET = "planet"
    SPECTRAL = "spectral"


class PackType(str, Enum):
    STANDARD = "standard"
    ARCANA = "arcana"
    CELESTIAL = "celestial"
    BUFFOON = "buffoon"
    SPECTRAL = "spectral"


class PackSize(str, Enum):
    NORMAL = "normal"
    JUMBO = "jumbo"
    MEGA = "mega"


class ShopItemCategory(str, Enum):
    JOKER = "joker"
    CONSUMABLE = "consumable"
    PACK = "pack"
    VOUCHER = "voucher"
    PLAYING_CARD = "playing_card"


class HandType(str, Enum):
    """Poker hand types, ordered by rank."""
    HIGH_CARD = "High Card"
    PAIR = "Pair"
    TWO_PAIR = "Two Pair"
    THREE_OF_A_KIND = "Three of a Kind"
    STRAIGHT = "Straight"
    FLUSH = "Flush"
    FULL_HOUSE = "Full House"
    FOUR_OF_A_KIND = "Four of a Kind"
    STRAIGHT_FLUSH = "Straight Flush"
    FIVE_OF_A_KIND = "Five of a Kind"
    FLUSH_HOUSE = "Flush House"
    FLUSH_FIVE = "Flush Five"


# Base chips and mult for each hand type at level 1
HAND_BASE: dict[HandType, tuple[int, int]] = {
    HandType.FLUSH_FIVE:       (160, 16),
    HandType.FLUSH_HOUSE:      (140, 14),
    HandType.FIVE_OF_A_KIND:   (120, 12),
    HandType.STRAIGHT_FLUSH:   (100,  8),
    HandType.FOUR_OF_A_KIND:   ( 60,  7),
    HandType.FULL_HOUSE:       ( 40,  4),
    HandType.FLUSH:            ( 35,  4),
    HandType.STRAIGHT:         ( 30,  4),
    HandType.THREE_OF_A_KIND:  ( 30,  3),
    HandType.TWO_PAIR:         ( 20,  2),
    HandType.PAIR:             ( 10,  2),
    HandType.HIGH_CARD:        (  5,  1),
}

# Planet card level-up bonuses per level: (chips, mult)
PLANET_BONUS: dict[HandType, tuple[int, int]] = {
    HandType.FLUSH_FIVE:       (50, 3),
    HandType.FLUSH_HOUSE:      (40, 4),
    HandType.FIVE_OF_A_KIND:   (35, 3),
    HandType.STRAIGHT_FLUSH:   (40, 4),
    HandType.FOUR_OF_A_KIND:   (30, 3),
    HandType.FULL_HOUSE:       (25, 2),
    HandType.FLUSH:            (15, 2),
    HandType.STRAIGHT:         (30, 3),
    HandType.THREE_OF_A_KIND:  (20, 2),
    HandType.TWO_PAIR:         (20, 1),
    HandType.PAIR:             (15, 1),
    HandType.HIGH_CARD:        (10, 1),
}

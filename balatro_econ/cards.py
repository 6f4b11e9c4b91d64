"""Card, joker and pile data structures."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from .enums import Suit, Rank, Edition, Enhancement, Seal, Sticker, JokerRarity


# Cards compare by identity: effects hand the resolver the very objects
# that must be removed from the hand pile.
@dataclass(eq=False)
class Card:
    """A playing card with all modifiers."""
    rank: Rank
    suit: Suit
    edition: Edition = Edition.NONE
    enhancement: Enhancement = Enhancement.NONE
    seal: Seal = Seal.NONE

    def increase_rank(self, amount: int = 1) -> Rank:
        """Raise the rank, stopping at Ace."""
        self.rank = Rank(min(Rank.ACE.value, self.rank.value + amount))
        return self.rank

    def clone(self) -> Card:
        return replace(self)

    def display(self) -> str:
        s = f"{self.rank.display}{self.suit.symbol}"
        if self.enhancement != Enhancement.NONE:
            s += f"[{self.enhancement.value}]"
        if self.edition != Edition.NONE:
            s += f"({self.edition.value})"
        if self.seal != Seal.NONE:
            s += f"<{self.seal.value}>"
        return s

    def __repr__(self) -> str:
        return self.display()


@dataclass(eq=False)
class JokerCard:
    """A joker owned by the player or offered in the shop."""
    id: str
    name: str
    rarity: JokerRarity = JokerRarity.COMMON
    cost: int = 0
    edition: Edition = Edition.NONE
    sticker: Sticker = Sticker.NONE
    sell_value_bonus: int = 0

    @property
    def has_edition(self) -> bool:
        return self.edition != Edition.NONE

    @property
    def is_eternal(self) -> bool:
        return self.sticker == Sticker.ETERNAL

    @property
    def sell_price(self) -> int:
        if self.sticker == Sticker.RENTAL:
            return 1
        return max(1, self.cost // 2) + self.sell_value_bonus

    def clone(self) -> JokerCard:
        return replace(self)

    def view(self) -> JokerView:
        return JokerView(
            id=self.id,
            edition=self.edition,
            has_edition=self.has_edition,
            sell_price=self.sell_price,
            sticker=self.sticker,
        )

    def __repr__(self) -> str:
        tag = f"({self.edition.value})" if self.has_edition else ""
        return f"Joker<{self.id}{tag}>"


@dataclass(frozen=True)
class JokerView:
    """Read-only joker snapshot handed to consumable effects."""
    id: str
    edition: Edition
    has_edition: bool
    sell_price: int
    sticker: Sticker = Sticker.NONE


# ---------------------------------------------------------------------------
# Piles
# ---------------------------------------------------------------------------

@dataclass
class HandPile:
    """Cards currently held. ``max_size`` caps normal draws only."""
    max_size: int = 8
    cards: list[Card] = field(default_factory=list)

    def get_cards(self) -> list[Card]:
        return list(self.cards)

    def add_card(self, card: Card) -> bool:
        if len(self.cards) >= self.max_size:
            return False
        self.cards.append(card)
        return True

    def force_add_card(self, card: Card) -> None:
        self.cards.append(card)

    def remove_cards(self, indices: Iterable[int]) -> list[Card]:
        """Remove cards at ``indices``; returns them in hand order."""
        doomed = sorted(set(indices))
        removed = [self.cards[i] for i in doomed]
        for i in reversed(doomed):
            del self.cards[i]
        return removed

    def index_of(self, card: Card) -> Optional[int]:
        for i, held in enumerate(self.cards):
            if held is card:
                return i
        return None

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class DeckPile:
    """Draw pile; index 0 is the top."""
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard(cls) -> DeckPile:
        return cls([Card(rank, suit) for suit in Suit for rank in Rank])

    def add_to_top(self, card: Card) -> None:
        self.cards.insert(0, card)

    def add_to_bottom(self, card: Card) -> None:
        self.cards.append(card)

    def draw(self, count: int = 1) -> list[Card]:
        drawn, self.cards = self.cards[:count], self.cards[count:]
        return drawn

    def shuffle(self, rng) -> None:
        rng.shuffle(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

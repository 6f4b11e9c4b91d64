"""
Shared pytest fixtures for the balatro_econ test suite.

This module provides reusable fixtures for:
- Seeded random sources
- Hand piles and effect contexts
- A resolver harness wired to in-memory collaborators
- Shops and full game sessions
"""

import random

import pytest

from balatro_econ.cards import Card, HandPile, JokerCard
from balatro_econ.effects import EffectContext
from balatro_econ.enums import Rank, Suit
from balatro_econ.hand_levels import HandLevels
from balatro_econ.resolver import EffectResolver, ResolutionTargets
from balatro_econ.session import GameSession
from balatro_econ.shop import Shop
from balatro_econ.slots import ConsumableSlots


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng():
    """Random source with a fixed seed."""
    return random.Random(12345)


# =============================================================================
# Card Fixtures
# =============================================================================


def make_hand(count=8):
    """``count`` distinct cards, cycling suits then ranks."""
    suits = list(Suit)
    ranks = list(Rank)
    return [Card(ranks[i % len(ranks)], suits[i % len(suits)]) for i in range(count)]


def make_joker(joker_id="joker", cost=4, **kwargs):
    return JokerCard(joker_id, joker_id, cost=cost, **kwargs)


@pytest.fixture
def hand_cards():
    """Eight distinct playing cards."""
    return make_hand(8)


# =============================================================================
# Resolver Harness
# =============================================================================


class Harness:
    """In-memory collaborators for the resolver."""

    def __init__(self, cards, money=0, max_slots=2, rng=None):
        self.hand = HandPile(max_size=8, cards=list(cards))
        self.slots = ConsumableSlots(max_slots)
        self.hand_levels = HandLevels()
        self.money = money
        self.resolver = EffectResolver()
        self.rng = rng or random.Random(1)

    def set_money(self, amount):
        self.money = amount

    def targets(self):
        return ResolutionTargets(
            hand=self.hand,
            slots=self.slots,
            hand_levels=self.hand_levels,
            get_money=lambda: self.money,
            set_money=self.set_money,
        )

    def context(self, selected=(), jokers=(), **hooks):
        cards = self.hand.get_cards()
        return EffectContext(
            hand_cards=cards,
            selected_cards=[cards[i] for i in selected],
            money=self.money,
            jokers=list(jokers),
            last_used=self.resolver.last_used,
            rng=self.rng,
            **hooks,
        )

    def use(self, consumable_id, selected=(), jokers=(), **hooks):
        ctx = self.context(selected, jokers, **hooks)
        return self.resolver.use_consumable(consumable_id, ctx, self.targets())


@pytest.fixture
def harness(hand_cards, rng):
    """Resolver harness holding eight cards and $0."""
    return Harness(hand_cards, rng=rng)


# =============================================================================
# Economy Fixtures
# =============================================================================


@pytest.fixture
def shop():
    """Populated first-visit shop with a seeded source."""
    return Shop(rng=random.Random(42))


@pytest.fixture
def session():
    """Fresh game session with a seeded source and a dealt hand."""
    game = GameSession(rng=random.Random(7))
    game.deal()
    return game

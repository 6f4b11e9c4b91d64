"""Spectral cards (19).

Joker-touching spectrals only report intent through the context hooks;
the catalog never holds the joker list itself. Soul and Black Hole are
pack-exclusive and cost nothing.
"""

from __future__ import annotations

from .cards import Card
from .consumables import (
    Consumable,
    has_hand_cards,
    has_jokers,
    joker_slot_free,
    selection_condition,
    selection_error,
    selects,
)
from .effects import EffectContext, EffectResult
from .enums import (
    ConsumableType,
    Edition,
    Enhancement,
    FACE_RANKS,
    NUMBER_RANKS,
    Rank,
    Seal,
    Suit,
)

SPECTRAL = ConsumableType.SPECTRAL

IMMOLATE_DESTROY_COUNT = 5
IMMOLATE_MONEY = 20

SUITS = list(Suit)


def _no_hand(ctx: EffectContext) -> bool:
    return not ctx.hand_cards


def _destroy_random(ctx: EffectContext) -> Card:
    return ctx.rng.choice(list(ctx.hand_cards))


# ---------------------------------------------------------------------------
# Hand-destroying / card-generating
# ---------------------------------------------------------------------------

def _immolate(ctx: EffectContext) -> EffectResult:
    if len(ctx.hand_cards) < IMMOLATE_DESTROY_COUNT:
        return EffectResult.fail(f"需要至少{IMMOLATE_DESTROY_COUNT}张手牌")
    doomed = ctx.rng.sample(list(ctx.hand_cards), IMMOLATE_DESTROY_COUNT)
    return EffectResult.ok(
        f"火祭: 摧毁{IMMOLATE_DESTROY_COUNT}张随机手牌，获得${IMMOLATE_MONEY}",
        destroyed_cards=doomed,
        money_change=IMMOLATE_MONEY,
    )


def _familiar(ctx: EffectContext) -> EffectResult:
    if _no_hand(ctx):
        return EffectResult.fail("需要手牌")
    doomed = _destroy_random(ctx)
    enhancements = [Enhancement.BONUS, Enhancement.MULT, Enhancement.WILD]
    new_cards = [
        Card(rank, ctx.rng.choice(SUITS), enhancement=ctx.rng.choice(enhancements))
        for rank in FACE_RANKS
    ]
    return EffectResult.ok(
        f"使魔: 摧毁 {doomed.display()}，添加3张增强人头牌",
        destroyed_cards=[doomed],
        new_cards=new_cards,
    )


def _grim(ctx: EffectContext) -> EffectResult:
    if _no_hand(ctx):
        return EffectResult.fail("需要手牌")
    doomed = _destroy_random(ctx)
    enhancements = [Enhancement.BONUS, Enhancement.MULT, Enhancement.GLASS]
    new_cards = [
        Card(Rank.ACE, ctx.rng.choice(SUITS), enhancement=ctx.rng.choice(enhancements))
        for _ in range(2)
    ]
    return EffectResult.ok(
        f"冷酷: 摧毁 {doomed.display()}，添加2张增强A",
        destroyed_cards=[doomed],
        new_cards=new_cards,
    )


def _incantation(ctx: EffectContext) -> EffectResult:
    if _no_hand(ctx):
        return EffectResult.fail("需要手牌")
    doomed = _destroy_random(ctx)
    enhancements = [Enhancement.BONUS, Enhancement.MULT, Enhancement.LUCKY]
    new_cards = [
        Card(
            ctx.rng.choice(NUMBER_RANKS),
            ctx.rng.choice(SUITS),
            enhancement=ctx.rng.choice(enhancements),
        )
        for _ in range(4)
    ]
    return EffectResult.ok(
        f"咒语: 摧毁 {doomed.display()}，添加4张增强数字牌",
        destroyed_cards=[doomed],
        new_cards=new_cards,
    )


def _cryptid(ctx: EffectContext) -> EffectResult:
    error = selection_error(ctx, 1, 2)
    if error:
        return EffectResult.fail(error)
    cards = list(ctx.selected_cards)
    # Always two copies: both from a lone card, else one of each.
    sources = cards * 2 if len(cards) == 1 else cards
    return EffectResult.ok(
        f"神秘生物: 复制{len(sources)}张牌",
        affected_cards=cards,
        new_cards=[card.clone() for card in sources],
    )


# ---------------------------------------------------------------------------
# Single-card grants
# ---------------------------------------------------------------------------

def _ghost(ctx: EffectContext) -> EffectResult:
    error = selection_error(ctx, 1, 1)
    if error:
        return EffectResult.fail(error)
    card = ctx.selected_cards[0]
    card.enhancement = Enhancement.GLASS
    return EffectResult.ok(f"幽灵: {card.display()} 获得玻璃增强", affected_cards=[card])


def _grant_seal(label: str, seal: Seal, color: str):
    def effect(ctx: EffectContext) -> EffectResult:
        error = selection_error(ctx, 1, 1)
        if error:
            return EffectResult.fail(error)
        card = ctx.selected_cards[0]
        card.seal = seal
        return EffectResult.ok(
            f"{label}: {card.display()} 获得{color}蜡封", affected_cards=[card],
        )
    return effect


def _aura(ctx: EffectContext) -> EffectResult:
    error = selection_error(ctx, 1, 1)
    if error:
        return EffectResult.fail(error)
    card = ctx.selected_cards[0]
    roll = ctx.rng.random()
    if roll < 0.33:
        card.edition = Edition.FOIL
    elif roll < 0.66:
        card.edition = Edition.HOLOGRAPHIC
    else:
        card.edition = Edition.POLYCHROME
    return EffectResult.ok(
        f"光环: {card.display()} 获得{card.edition.label}版本", affected_cards=[card],
    )


# ---------------------------------------------------------------------------
# Whole-hand rewrites
# ---------------------------------------------------------------------------

def _sigil(ctx: EffectContext) -> EffectResult:
    if _no_hand(ctx):
        return EffectResult.fail("需要手牌")
    suit = ctx.rng.choice(SUITS)
    cards = list(ctx.hand_cards)
    for card in cards:
        card.suit = suit
    return EffectResult.ok(f"印记: 所有手牌变为{suit.label}", affected_cards=cards)


def _ouija(ctx: EffectContext) -> EffectResult:
    if _no_hand(ctx):
        return EffectResult.fail("需要手牌")
    rank = ctx.rng.choice(list(Rank))
    cards = list(ctx.hand_cards)
    for card in cards:
        card.rank = rank
    if ctx.decrease_hand_size is not None:
        ctx.decrease_hand_size(1)
    return EffectResult.ok(
        f"通灵板: 所有手牌变为{rank.display}，手牌上限-1", affected_cards=cards,
    )


# ---------------------------------------------------------------------------
# Joker hooks
# ---------------------------------------------------------------------------

def _wraith(ctx: EffectContext) -> EffectResult:
    if not joker_slot_free(ctx):
        return EffectResult.fail("小丑牌槽位已满")
    added = ctx.add_joker("rare") if ctx.add_joker is not None else False
    message = "怨灵: 创建稀有小丑，金钱设为$0" if added else "怨灵: 金钱设为$0（小丑槽位已满）"
    return EffectResult.ok(message, set_money=0)


def _ectoplasm(ctx: EffectContext) -> EffectResult:
    added = False
    if ctx.add_edition_to_random_joker is not None:
        added = ctx.add_edition_to_random_joker(Edition.NEGATIVE)
    if ctx.decrease_hand_size is not None:
        ctx.decrease_hand_size(1)
    if added:
        return EffectResult.ok("外质: 随机小丑获得负片版本，手牌上限-1")
    return EffectResult.ok("外质: 没有可添加版本的小丑，手牌上限-1")


def _ankh(ctx: EffectContext) -> EffectResult:
    if not ctx.jokers:
        return EffectResult.fail("生命之符: 没有小丑牌可以复制")
    copied = ctx.copy_random_joker() if ctx.copy_random_joker is not None else None
    destroyed = ctx.destroy_other_jokers() if ctx.destroy_other_jokers is not None else 0
    if copied is None:
        return EffectResult.ok(f"生命之符: 复制失败，摧毁了{destroyed}张小丑")
    return EffectResult.ok(f"生命之符: 复制1张小丑，摧毁了{destroyed}张小丑")


def _hex(ctx: EffectContext) -> EffectResult:
    if not ctx.jokers:
        return EffectResult.fail("诅咒: 没有小丑牌")
    added = False
    if ctx.add_edition_to_random_joker is not None:
        added = ctx.add_edition_to_random_joker(Edition.POLYCHROME)
    destroyed = ctx.destroy_other_jokers() if ctx.destroy_other_jokers is not None else 0
    if added:
        return EffectResult.ok(f"诅咒: 随机小丑获得多色版本，摧毁了{destroyed}张小丑")
    return EffectResult.ok(f"诅咒: 没有可添加版本的小丑，摧毁了{destroyed}张小丑")


def _soul(ctx: EffectContext) -> EffectResult:
    if not joker_slot_free(ctx):
        return EffectResult.fail("小丑牌槽位已满")
    added = ctx.add_joker("legendary") if ctx.add_joker is not None else False
    if added:
        return EffectResult.ok("灵魂: 创建传奇小丑")
    return EffectResult.ok("灵魂: 小丑槽位已满，无法生成")


def _black_hole(ctx: EffectContext) -> EffectResult:
    return EffectResult.ok("黑洞: 所有牌型等级+1", upgrade_all_hand_levels=True)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

HAND_CONDITION = "需要至少有1张手牌"
JOKER_CONDITION = "需要至少有1张小丑牌"
SLOT_CONDITION = "需要至少1个小丑牌空位"


def _spectral(id, name, description, cost, effect, precondition=None,
              use_condition="", pack_exclusive=False) -> Consumable:
    return Consumable(
        id=id, name=name, description=description, type=SPECTRAL, cost=cost,
        effect=effect, precondition=precondition, use_condition=use_condition,
        pack_exclusive=pack_exclusive,
    )


def _single(id, name, description, cost, effect) -> Consumable:
    return _spectral(id, name, description, cost, effect,
                     selects(1), selection_condition(1))


SPECTRALS: list[Consumable] = [
    _spectral("spectral_immolate", "火祭", "摧毁5张随机手牌，获得$20", 5, _immolate,
              has_hand_cards(IMMOLATE_DESTROY_COUNT), "需要至少5张手牌"),
    _single("spectral_ghost", "幽灵", "将选中的1张牌添加玻璃增强", 4, _ghost),
    _spectral("spectral_cryptid", "神秘生物", "创建2张选定牌的精确复制(包括增强、版本、印章)", 6,
              _cryptid, selects(1, 2), selection_condition(1, 2)),
    _spectral("spectral_familiar", "使魔", "摧毁1张随机手牌，添加3张增强人头牌到手牌", 4,
              _familiar, has_hand_cards(), HAND_CONDITION),
    _spectral("spectral_grim", "冷酷", "摧毁1张随机手牌，添加2张增强A到手牌", 4,
              _grim, has_hand_cards(), HAND_CONDITION),
    _spectral("spectral_incantation", "咒语", "摧毁1张随机手牌，添加4张增强数字牌到手牌", 4,
              _incantation, has_hand_cards(), HAND_CONDITION),
    _single("spectral_talisman", "护身符", "给选中的1张牌添加黄金蜡封", 5,
            _grant_seal("护身符", Seal.GOLD, "黄金")),
    _single("spectral_aura", "光环", "给选中的1张牌随机添加箔片/全息/多色版本", 5, _aura),
    _spectral("spectral_wraith", "怨灵", "创建1张稀有小丑，金钱设为$0", 6,
              _wraith, joker_slot_free, SLOT_CONDITION),
    _spectral("spectral_sigil", "印记", "将手牌转为同一随机花色", 4,
              _sigil, has_hand_cards(), HAND_CONDITION),
    _spectral("spectral_ouija", "通灵板", "将手牌转为同一随机点数，手牌上限-1", 5,
              _ouija, has_hand_cards(), HAND_CONDITION),
    _spectral("spectral_ectoplasm", "外质", "给随机小丑添加负片版本，手牌上限-1", 5,
              _ectoplasm, has_jokers(), JOKER_CONDITION),
    _spectral("spectral_ankh", "生命之符", "随机复制1张小丑，摧毁其他所有小丑", 8,
              _ankh, has_jokers(), JOKER_CONDITION),
    _single("spectral_deja_vu", "既视感", "给选中的1张牌添加红色蜡封", 5,
            _grant_seal("既视感", Seal.RED, "红色")),
    _spectral("spectral_hex", "诅咒", "给随机小丑添加多色版本，摧毁其他所有小丑", 8,
              _hex, has_jokers(), JOKER_CONDITION),
    _single("spectral_trance", "恍惚", "给选中的1张牌添加蓝色蜡封", 5,
            _grant_seal("恍惚", Seal.BLUE, "蓝色")),
    _single("spectral_medium", "灵媒", "给选中的1张牌添加紫色蜡封", 5,
            _grant_seal("灵媒", Seal.PURPLE, "紫色")),
    _spectral("spectral_soul", "灵魂", "创建1张传奇小丑（卡包限定）", 0,
              _soul, joker_slot_free, SLOT_CONDITION, pack_exclusive=True),
    _spectral("spectral_black_hole", "黑洞", "升级所有牌型1级（卡包限定）", 0,
              _black_hole, None, "无特殊条件", pack_exclusive=True),
]

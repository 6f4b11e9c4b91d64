"""Tarot cards (22).

Selection-based tarots check their bounds twice: once in the precondition
the resolver consults, and again inside the effect for callers that skip
the resolver.
"""

from __future__ import annotations

from .consumables import (
    Consumable,
    selection_condition,
    selection_error,
    selects,
)
from .effects import EffectContext, EffectResult
from .enums import ConsumableType, Edition, Enhancement, Suit

TAROT = ConsumableType.TAROT
FOOL_ID = "tarot_fool"

HERMIT_MAX_GAIN = 20
TEMPERANCE_MAX_GAIN = 50
WHEEL_HIT_CHANCE = 0.25


# ---------------------------------------------------------------------------
# Effect factories
# ---------------------------------------------------------------------------

def _enhance(label: str, enhancement: Enhancement, kind: str, count: int):
    """Effect that sets ``enhancement`` on exactly ``count`` selected cards."""
    def effect(ctx: EffectContext) -> EffectResult:
        error = selection_error(ctx, count, count)
        if error:
            return EffectResult.fail(error)
        cards = list(ctx.selected_cards)
        for card in cards:
            card.enhancement = enhancement
        if count == 1:
            message = f"{label}: {cards[0].display()} 变为{kind}"
        else:
            message = f"{label}: {len(cards)}张牌变为{kind}"
        return EffectResult.ok(message, affected_cards=cards)
    return effect


def _change_suit(label: str, suit: Suit):
    """Effect that moves 1-3 selected cards to ``suit``."""
    def effect(ctx: EffectContext) -> EffectResult:
        error = selection_error(ctx, 1, 3)
        if error:
            return EffectResult.fail(error)
        cards = list(ctx.selected_cards)
        for card in cards:
            card.suit = suit
        return EffectResult.ok(
            f"{label}: {len(cards)}张牌变为{suit.label}", affected_cards=cards,
        )
    return effect


def _generate(label: str, kind: str, pool, count: int = 2):
    """Effect that asks for ``count`` distinct random ids from ``pool()``."""
    def effect(ctx: EffectContext) -> EffectResult:
        ids = list(pool())
        picked = ctx.rng.sample(ids, min(count, len(ids)))
        return EffectResult.ok(
            f"{label}: 生成{len(picked)}张随机{kind}", new_consumable_ids=picked,
        )
    return effect


def _planet_pool():
    from .planets import BASIC_PLANET_IDS
    return BASIC_PLANET_IDS


def _tarot_pool():
    return [c.id for c in TAROTS if c.id != "tarot_emperor"]


# ---------------------------------------------------------------------------
# Bespoke effects
# ---------------------------------------------------------------------------

def _fool_target(ctx: EffectContext):
    """Return ``(entry, error)`` for the consumable Fool would copy."""
    from .catalog import get_consumable_by_id

    last = ctx.last_used
    if last is None:
        return None, "愚者: 没有上一次使用的消耗牌"
    if last.type not in (ConsumableType.TAROT, ConsumableType.PLANET):
        return None, "愚者: 上一次使用的不是塔罗牌或星球牌"
    if last.id == FOOL_ID:
        return None, "愚者: 不能复制自己"
    target = get_consumable_by_id(last.id)
    if target is None:
        return None, f"愚者: 消耗牌不存在 {last.id}"
    return target, None


def _fool_can_use(ctx: EffectContext) -> bool:
    target, error = _fool_target(ctx)
    if error:
        return False
    return target.can_use(ctx)


def _fool(ctx: EffectContext) -> EffectResult:
    target, error = _fool_target(ctx)
    if error:
        return EffectResult.fail(error)
    if not target.can_use(ctx):
        return EffectResult.fail(f"愚者: {target.use_condition or '无法复制'}")
    return EffectResult.ok(
        f"愚者: 复制了 {target.name}", copied_consumable_id=target.id,
    )


def _hermit(ctx: EffectContext) -> EffectResult:
    gain = max(0, min(ctx.money, HERMIT_MAX_GAIN))
    return EffectResult.ok(f"隐士: 资金翻倍 +${gain}", money_change=gain)


def _wheel_can_use(ctx: EffectContext) -> bool:
    return any(not j.has_edition for j in ctx.jokers)


def _wheel_of_fortune(ctx: EffectContext) -> EffectResult:
    if not ctx.jokers:
        return EffectResult.fail("命运之轮: 没有小丑牌可以添加版本")
    if not _wheel_can_use(ctx):
        return EffectResult.fail("命运之轮: 所有小丑牌都已有版本")
    if ctx.rng.random() >= WHEEL_HIT_CHANCE:
        return EffectResult.ok("命运之轮: 运气不好，没有效果")

    roll = ctx.rng.random()
    if roll < 0.5:
        edition = Edition.FOIL
    elif roll < 0.85:
        edition = Edition.HOLOGRAPHIC
    else:
        edition = Edition.POLYCHROME
    if ctx.add_edition_to_random_joker is not None:
        ctx.add_edition_to_random_joker(edition)
    return EffectResult.ok(f"命运之轮: 随机小丑牌获得{edition.label}版本")


def _strength(ctx: EffectContext) -> EffectResult:
    error = selection_error(ctx, 1, 2)
    if error:
        return EffectResult.fail(error)
    cards = list(ctx.selected_cards)
    parts = []
    for card in cards:
        card.increase_rank(1)
        parts.append(f"{card.display()}+1")
    return EffectResult.ok("力量: " + " ".join(parts), affected_cards=cards)


def _hanged_man(ctx: EffectContext) -> EffectResult:
    if selection_error(ctx, 1, 2):
        return EffectResult.fail("需要选择1-2张牌")
    cards = list(ctx.selected_cards)
    return EffectResult.ok(f"倒吊人: 摧毁{len(cards)}张牌", destroyed_cards=cards)


def _death(ctx: EffectContext) -> EffectResult:
    error = selection_error(ctx, 2, 2)
    if error:
        return EffectResult.fail(error)
    left, right = ctx.selected_cards[0], ctx.selected_cards[1]
    before = left.display()
    left.suit = right.suit
    left.rank = right.rank
    return EffectResult.ok(
        f"死神: {before} 变成了 {right.display()}", affected_cards=[left],
    )


def _temperance(ctx: EffectContext) -> EffectResult:
    if not ctx.jokers:
        return EffectResult.ok("节制: 没有小丑牌", money_change=0)
    gain = min(sum(j.sell_price for j in ctx.jokers), TEMPERANCE_MAX_GAIN)
    return EffectResult.ok(f"节制: 获得${gain}（小丑牌总售价）", money_change=gain)


def _judgement(ctx: EffectContext) -> EffectResult:
    added = ctx.add_joker(None) if ctx.add_joker is not None else False
    if added:
        return EffectResult.ok("审判: 生成1张随机小丑牌")
    return EffectResult.ok("审判: 小丑槽位已满，无法生成")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

NO_CONDITION = "无特殊条件"


def _selection_tarot(id, name, description, cost, effect, minimum, maximum=None):
    return Consumable(
        id=id, name=name, description=description, type=TAROT, cost=cost,
        effect=effect, precondition=selects(minimum, maximum),
        use_condition=selection_condition(minimum, maximum),
    )


TAROTS: list[Consumable] = [
    Consumable(
        id=FOOL_ID, name="愚者", description="复制上一次使用的塔罗牌或星球牌效果",
        type=TAROT, cost=3, effect=_fool, precondition=_fool_can_use,
        use_condition="需要本回合使用过塔罗牌或星球牌",
    ),
    _selection_tarot("tarot_magician", "魔术师", "将选中的2张牌变为幸运牌", 4,
                     _enhance("魔术师", Enhancement.LUCKY, "幸运牌", 2), 2),
    Consumable(
        id="tarot_high_priestess", name="女祭司", description="生成最多2张随机星球牌",
        type=TAROT, cost=4, effect=_generate("女祭司", "星球牌", _planet_pool),
        use_condition=NO_CONDITION,
    ),
    _selection_tarot("tarot_empress", "皇后", "将选中的2张牌变为倍率牌", 4,
                     _enhance("皇后", Enhancement.MULT, "倍率牌", 2), 2),
    Consumable(
        id="tarot_emperor", name="皇帝", description="生成最多2张随机塔罗牌",
        type=TAROT, cost=4, effect=_generate("皇帝", "塔罗牌", _tarot_pool),
        use_condition=NO_CONDITION,
    ),
    _selection_tarot("tarot_hierophant", "教皇", "将选中的2张牌变为奖励牌", 4,
                     _enhance("教皇", Enhancement.BONUS, "奖励牌", 2), 2),
    _selection_tarot("tarot_lovers", "恋人", "将选中的1张牌变为万能牌", 3,
                     _enhance("恋人", Enhancement.WILD, "万能牌", 1), 1),
    _selection_tarot("tarot_chariot", "战车", "将选中的1张牌变为钢铁牌", 4,
                     _enhance("战车", Enhancement.STEEL, "钢铁牌", 1), 1),
    _selection_tarot("tarot_justice", "正义", "将选中的1张牌变为玻璃牌", 4,
                     _enhance("正义", Enhancement.GLASS, "玻璃牌", 1), 1),
    Consumable(
        id="tarot_hermit", name="隐士", description="将资金翻倍（最多$20）",
        type=TAROT, cost=4, effect=_hermit, use_condition=NO_CONDITION,
    ),
    Consumable(
        id="tarot_wheel_of_fortune", name="命运之轮",
        description="1/4概率给随机小丑牌添加箔片/全息/多色版本",
        type=TAROT, cost=4, effect=_wheel_of_fortune, precondition=_wheel_can_use,
        use_condition="需要至少拥有1张小丑牌",
    ),
    _selection_tarot("tarot_strength", "力量", "将最多2张选中牌的点数+1", 4,
                     _strength, 1, 2),
    _selection_tarot("tarot_hanged_man", "倒吊人", "摧毁最多2张选中牌", 4,
                     _hanged_man, 1, 2),
    _selection_tarot("tarot_death", "死神", "将左边选中的牌变成右边牌的花色和点数", 4,
                     _death, 2),
    Consumable(
        id="tarot_temperance", name="节制",
        description="获得当前所有小丑牌总售价的资金（最多$50）",
        type=TAROT, cost=4, effect=_temperance, use_condition=NO_CONDITION,
    ),
    _selection_tarot("tarot_devil", "恶魔", "将选中的1张牌变为黄金牌", 4,
                     _enhance("恶魔", Enhancement.GOLD, "黄金牌", 1), 1),
    _selection_tarot("tarot_tower", "塔", "将选中的1张牌变为石头牌", 4,
                     _enhance("塔", Enhancement.STONE, "石头牌", 1), 1),
    _selection_tarot("tarot_star", "星星", "将选中的最多3张牌变为红桃", 3,
                     _change_suit("星星", Suit.HEARTS), 1, 3),
    _selection_tarot("tarot_moon", "月亮", "将选中的最多3张牌变为黑桃", 3,
                     _change_suit("月亮", Suit.SPADES), 1, 3),
    _selection_tarot("tarot_sun", "太阳", "将选中的最多3张牌变为方块", 3,
                     _change_suit("太阳", Suit.DIAMONDS), 1, 3),
    Consumable(
        id="tarot_judgement", name="审判", description="生成1张随机小丑牌",
        type=TAROT, cost=4, effect=_judgement, use_condition=NO_CONDITION,
    ),
    _selection_tarot("tarot_world", "世界", "将选中的最多3张牌变为梅花", 3,
                     _change_suit("世界", Suit.CLUBS), 1, 3),
]

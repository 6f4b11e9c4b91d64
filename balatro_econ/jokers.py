"""Joker catalog and rarity-weighted draws.

Only the economic face of a joker lives here (id, name, rarity, cost);
scoring triggers belong to the scoring engine.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from .cards import JokerCard
from .enums import Edition, JokerRarity
from .probabilities import roll_joker_edition
from .rng import get_rng


# ---------------------------------------------------------------------------
# Rarity thresholds
# ---------------------------------------------------------------------------
# rarity = rare if roll > 0.95, uncommon if roll > 0.7, else common.
# Legendary jokers never come from a rarity roll (Soul only).

RARE_THRESHOLD = 0.95
UNCOMMON_THRESHOLD = 0.7

# Jokers whose presence changes shop or pack behaviour
SHOWMAN_ID = "showman"
HALLUCINATION_ID = "hallucination"
GIFT_CARD_ID = "gift_card"


# ---------------------------------------------------------------------------
# Joker catalog: (id, name, rarity, cost)
# ---------------------------------------------------------------------------

_JOKER_RAW: list[tuple[str, str, JokerRarity, int]] = [
    ("lusty_joker", "色欲小丑", JokerRarity.COMMON, 5),
    ("wrathful_joker", "暴怒小丑", JokerRarity.COMMON, 5),
    ("scary_face", "恐怖面孔", JokerRarity.COMMON, 4),
    ("jolly_joker", "开心小丑", JokerRarity.COMMON, 3),
    ("droll_joker", "同花小丑", JokerRarity.COMMON, 3),
    ("blueprint", "蓝图", JokerRarity.RARE, 8),
    ("swashbuckler", "剑客", JokerRarity.COMMON, 3),
    ("brainstorm", "头脑风暴", JokerRarity.RARE, 8),
    ("zany_joker", "滑稽小丑", JokerRarity.COMMON, 4),
    ("mad_joker", "疯狂小丑", JokerRarity.COMMON, 4),
    ("crazy_joker", "狂热小丑", JokerRarity.COMMON, 4),
    ("half_joker", "半张小丑", JokerRarity.COMMON, 5),
    ("greedy_joker", "贪婪小丑", JokerRarity.COMMON, 5),
    ("gluttonous_joker", "暴食小丑", JokerRarity.COMMON, 5),
    ("sock_and_buskin", "喜剧与悲剧", JokerRarity.UNCOMMON, 5),
    ("loyalty_card", "忠诚卡", JokerRarity.UNCOMMON, 5),
    ("cartomancer", "纸牌占卜师", JokerRarity.UNCOMMON, 6),
    ("space_joker", "太空小丑", JokerRarity.UNCOMMON, 5),
    ("flower_pot", "花盆", JokerRarity.UNCOMMON, 5),
    ("four_fingers", "四指", JokerRarity.UNCOMMON, 5),
    ("dusk", "黄昏", JokerRarity.UNCOMMON, 5),
    ("constellation", "星座", JokerRarity.UNCOMMON, 5),
    ("hiker", "远足者", JokerRarity.UNCOMMON, 5),
    ("shortcut", "捷径", JokerRarity.UNCOMMON, 5),
    ("the_duo", "二人组", JokerRarity.RARE, 8),
    ("the_trio", "三人组", JokerRarity.RARE, 8),
    ("the_family", "家庭", JokerRarity.RARE, 8),
    ("dna", "DNA", JokerRarity.RARE, 8),
    ("baseball_card", "棒球卡", JokerRarity.RARE, 8),
    ("triboulet", "特里布莱", JokerRarity.LEGENDARY, 20),
    ("chicot", "奇科", JokerRarity.LEGENDARY, 20),
    ("perkeo", "佩尔科", JokerRarity.LEGENDARY, 20),
    ("joker", "小丑", JokerRarity.COMMON, 2),
    ("chaos_the_clown", "混沌小丑", JokerRarity.COMMON, 3),
    ("stone_joker", "石头小丑", JokerRarity.COMMON, 4),
    ("juggler", "杂耍者", JokerRarity.COMMON, 3),
    ("drunkard", "酒鬼", JokerRarity.COMMON, 3),
    ("troubadour", "吟游诗人", JokerRarity.COMMON, 4),
    ("banner", "旗帜", JokerRarity.COMMON, 4),
    ("mystic_summit", "神秘峰顶", JokerRarity.COMMON, 4),
    ("misprint", "印刷错误", JokerRarity.COMMON, 3),
    ("steel_joker", "钢铁小丑", JokerRarity.COMMON, 4),
    ("abstract_joker", "抽象小丑", JokerRarity.COMMON, 3),
    ("delayed_gratification", "延迟满足", JokerRarity.COMMON, 3),
    ("golden_ticket", "金票", JokerRarity.COMMON, 5),
    ("odd_todd", "奇数托德", JokerRarity.COMMON, 4),
    ("scholar", "学者", JokerRarity.COMMON, 4),
    ("business_card", "名片", JokerRarity.COMMON, 3),
    ("supernova", "超新星", JokerRarity.COMMON, 4),
    ("fortune_teller", "算命先生", JokerRarity.COMMON, 4),
    ("hanging_chad", "悬挂票", JokerRarity.COMMON, 4),
    ("splash", "水花", JokerRarity.COMMON, 3),
    ("sly_joker", "狡猾小丑", JokerRarity.COMMON, 3),
    ("wily_joker", "诡计小丑", JokerRarity.COMMON, 4),
    ("devious_joker", "阴险小丑", JokerRarity.COMMON, 4),
    ("crafty_joker", "灵巧小丑", JokerRarity.COMMON, 3),
    ("hack", "黑客", JokerRarity.UNCOMMON, 5),
    ("fibonacci", "斐波那契", JokerRarity.UNCOMMON, 8),
    ("oops_all_6s", "哎呀全是6", JokerRarity.UNCOMMON, 5),
    ("stuntman", "特技演员", JokerRarity.UNCOMMON, 5),
    ("drivers_license", "驾照", JokerRarity.UNCOMMON, 6),
    ("astronomer", "天文学家", JokerRarity.UNCOMMON, 8),
    ("throwback", "复古", JokerRarity.UNCOMMON, 5),
    ("satellite", "卫星", JokerRarity.UNCOMMON, 6),
    ("runner", "跑者", JokerRarity.COMMON, 5),
    ("gift_card", "礼品卡", JokerRarity.UNCOMMON, 6),
    ("bull", "公牛", JokerRarity.UNCOMMON, 6),
    ("the_order", "秩序", JokerRarity.RARE, 8),
    ("the_tribe", "部落", JokerRarity.RARE, 8),
    ("smeared_joker", "污损小丑", JokerRarity.RARE, 8),
    ("rough_gem", "粗糙宝石", JokerRarity.RARE, 7),
    ("bloodstone", "血石", JokerRarity.RARE, 7),
    ("arrowhead", "箭头", JokerRarity.RARE, 7),
    ("onyx_agate", "黑玛瑙", JokerRarity.RARE, 7),
    ("bootstraps", "自力更生", JokerRarity.RARE, 7),
    ("yorick", "约里克", JokerRarity.LEGENDARY, 20),
    ("ceremonial_dagger", "仪式匕首", JokerRarity.COMMON, 6),
    ("eight_ball", "八号球", JokerRarity.COMMON, 5),
    ("raised_fist", "高举拳头", JokerRarity.COMMON, 5),
    ("gros_michel", "大麦克", JokerRarity.COMMON, 5),
    ("even_steven", "偶数史蒂文", JokerRarity.COMMON, 4),
    ("ride_the_bus", "巴士之旅", JokerRarity.COMMON, 6),
    ("egg", "蛋", JokerRarity.COMMON, 4),
    ("ice_cream", "冰淇淋", JokerRarity.COMMON, 5),
    ("blue_joker", "蓝色小丑", JokerRarity.COMMON, 5),
    ("faceless_joker", "无面小丑", JokerRarity.COMMON, 4),
    ("green_joker", "绿色小丑", JokerRarity.COMMON, 4),
    ("superposition", "叠加态", JokerRarity.COMMON, 4),
    ("to_do_list", "待办清单", JokerRarity.COMMON, 4),
    ("red_card", "红牌", JokerRarity.COMMON, 5),
    ("square_joker", "方块小丑", JokerRarity.COMMON, 4),
    ("photograph", "照片", JokerRarity.COMMON, 5),
    ("reserved_parking", "预留车位", JokerRarity.COMMON, 6),
    ("mail_in_rebate", "邮寄返利", JokerRarity.COMMON, 4),
    ("golden_joker", "金色小丑", JokerRarity.COMMON, 6),
    ("popcorn", "爆米花", JokerRarity.COMMON, 5),
    ("smiley_face", "笑脸", JokerRarity.COMMON, 4),
    ("shoot_the_moon", "射月", JokerRarity.COMMON, 5),
    ("joker_stencil", "小丑模板", JokerRarity.UNCOMMON, 8),
    ("mime", "默剧演员", JokerRarity.UNCOMMON, 5),
    ("credit_card", "信用卡", JokerRarity.UNCOMMON, 1),
    ("marble_joker", "大理石小丑", JokerRarity.UNCOMMON, 6),
    ("pareidolia", "幻想性错觉", JokerRarity.UNCOMMON, 5),
    ("burglar", "窃贼", JokerRarity.UNCOMMON, 6),
    ("blackboard", "黑板", JokerRarity.UNCOMMON, 6),
    ("sixth_sense", "第六感", JokerRarity.UNCOMMON, 6),
    ("cavendish", "卡文迪什", JokerRarity.UNCOMMON, 4),
    ("card_sharp", "老千", JokerRarity.UNCOMMON, 6),
    ("madness", "疯狂", JokerRarity.UNCOMMON, 7),
    ("seance", "降神会", JokerRarity.UNCOMMON, 6),
    ("riff_raff", "乌合之众", JokerRarity.UNCOMMON, 6),
    ("vampire", "吸血鬼", JokerRarity.UNCOMMON, 7),
    ("hologram", "全息影像", JokerRarity.UNCOMMON, 7),
    ("vagabond", "流浪者", JokerRarity.UNCOMMON, 8),
    ("cloud_9", "九霄云外", JokerRarity.UNCOMMON, 7),
    ("rocket", "火箭", JokerRarity.UNCOMMON, 6),
    ("obelisk", "方尖碑", JokerRarity.UNCOMMON, 8),
    ("midas_mask", "迈达斯面具", JokerRarity.UNCOMMON, 7),
    ("luchador", "摔跤手", JokerRarity.UNCOMMON, 5),
    ("turtle_bean", "龟豆", JokerRarity.UNCOMMON, 6),
    ("erosion", "侵蚀", JokerRarity.UNCOMMON, 6),
    ("to_the_moon", "登月", JokerRarity.UNCOMMON, 5),
    ("hallucination", "幻觉", JokerRarity.UNCOMMON, 4),
    ("lucky_cat", "招财猫", JokerRarity.UNCOMMON, 6),
    ("flash_card", "闪卡", JokerRarity.UNCOMMON, 5),
    ("spare_trousers", "备用裤子", JokerRarity.UNCOMMON, 6),
    ("ramen", "拉面", JokerRarity.UNCOMMON, 6),
    ("seltzer", "苏打水", JokerRarity.UNCOMMON, 6),
    ("castle", "城堡", JokerRarity.UNCOMMON, 6),
    ("mr_bones", "骨头先生", JokerRarity.UNCOMMON, 5),
    ("acrobat", "杂技演员", JokerRarity.UNCOMMON, 6),
    ("certificate", "证书", JokerRarity.UNCOMMON, 6),
    ("showman", "马戏团演员", JokerRarity.UNCOMMON, 5),
    ("merry_andy", "快乐的安迪", JokerRarity.UNCOMMON, 7),
    ("seeing_double", "重影", JokerRarity.UNCOMMON, 6),
    ("matador", "斗牛士", JokerRarity.UNCOMMON, 7),
    ("hit_the_road", "上路", JokerRarity.UNCOMMON, 8),
    ("burnt_joker", "烧焦的小丑", JokerRarity.UNCOMMON, 8),
    ("trading_card", "交易卡", JokerRarity.UNCOMMON, 6),
    ("walkie_talkie", "对讲机", JokerRarity.RARE, 4),
    ("campfire", "篝火", JokerRarity.RARE, 9),
    ("wee_joker", "微小丑", JokerRarity.RARE, 8),
    ("the_idol", "偶像", JokerRarity.RARE, 6),
    ("invisible_joker", "隐形小丑", JokerRarity.RARE, 8),
    ("canio", "卡尼奥", JokerRarity.LEGENDARY, 20),
    ("clever_joker", "聪明小丑", JokerRarity.COMMON, 4),
    ("baron", "男爵", JokerRarity.RARE, 8),
]


@dataclass(frozen=True)
class JokerDef:
    id: str
    name: str
    rarity: JokerRarity
    cost: int

    def create(self, edition: Edition = Edition.NONE) -> JokerCard:
        return JokerCard(self.id, self.name, self.rarity, self.cost, edition=edition)


JOKERS: dict[str, JokerDef] = {row[0]: JokerDef(*row) for row in _JOKER_RAW}

JOKERS_BY_RARITY: dict[JokerRarity, list[JokerDef]] = {}
for _j in JOKERS.values():
    JOKERS_BY_RARITY.setdefault(_j.rarity, []).append(_j)


def get_joker_by_id(joker_id: str) -> Optional[JokerCard]:
    defn = JOKERS.get(joker_id)
    return defn.create() if defn is not None else None


def select_joker_rarity(rng: Optional[random.Random] = None) -> JokerRarity:
    roll = get_rng(rng).random()
    if roll > RARE_THRESHOLD:
        return JokerRarity.RARE
    if roll > UNCOMMON_THRESHOLD:
        return JokerRarity.UNCOMMON
    return JokerRarity.COMMON


def get_random_joker(
    rng: Optional[random.Random] = None,
    rarity: Optional[JokerRarity] = None,
    exclude_ids: Iterable[str] = (),
    vouchers_used: Iterable[str] = (),
    roll_edition: bool = True,
) -> Optional[JokerCard]:
    """Draw one joker, rolling rarity unless one is forced.

    Falls back to any non-legendary joker when the rolled rarity has
    nothing left after exclusions. Returns None if nothing is left at all.
    """
    rng = get_rng(rng)
    excluded = set(exclude_ids)
    if rarity is None:
        rarity = select_joker_rarity(rng)
    pool = [j for j in JOKERS_BY_RARITY.get(rarity, []) if j.id not in excluded]
    if not pool:
        pool = [
            j for j in JOKERS.values()
            if j.rarity != JokerRarity.LEGENDARY and j.id not in excluded
        ]
    if not pool:
        return None
    edition = roll_joker_edition(vouchers_used, rng) if roll_edition else Edition.NONE
    return rng.choice(pool).create(edition)


def get_random_jokers(
    count: int,
    rng: Optional[random.Random] = None,
    exclude_ids: Iterable[str] = (),
    vouchers_used: Iterable[str] = (),
) -> list[JokerCard]:
    """Up to ``count`` jokers with distinct ids."""
    excluded = set(exclude_ids)
    drawn = []
    for _ in range(count):
        joker = get_random_joker(rng, exclude_ids=excluded, vouchers_used=vouchers_used)
        if joker is None:
            break
        excluded.add(joker.id)
        drawn.append(joker)
    return drawn

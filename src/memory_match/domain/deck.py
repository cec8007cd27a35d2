from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, replace

from src.memory_match.domain.constants import DIFFICULTY_GRID, EMOJI_SET


@dataclass(frozen=True)
class Card:
    """盤面の1枚。

    現状の契約:
    - id: デッキ内で一意。1ゲームの間は変わらない
    - content: 絵柄。同じ絵柄はちょうど2枚
    - matched: 一度 True になったらそのゲーム中は戻らない
    """

    id: str
    content: str
    matched: bool = False


def grid_size_for(difficulty: str) -> int:
    """難易度から盤面の一辺を返す。未知の難易度は ValueError。"""
    try:
        return DIFFICULTY_GRID[difficulty]
    except KeyError:
        raise ValueError(f"unknown difficulty: {difficulty!r}") from None


def grid_label(size: int) -> str:
    return f"{size}x{size}"


def make_deck(size: int, rng: random.Random | None = None) -> list[Card]:
    """size×size 枚のシャッフル済みデッキを作る。

    - 絵柄は EMOJI_SET の先頭から size²/2 種を使い、各2枚ずつ。
    - Fisher–Yates で一様にシャッフルする。
    - 呼び出しごとにデッキ固有のトークンを id に含めるため、別デッキの札と id は衝突しない。
    """
    total = size * size
    if total % 2 != 0:
        raise ValueError(f"grid size {size} does not hold whole pairs")
    pairs_count = total // 2
    if pairs_count > len(EMOJI_SET):
        raise ValueError(f"not enough symbols for a {grid_label(size)} grid")

    rand = rng if rng is not None else random
    token = uuid.uuid4().hex[:8]
    cards: list[Card] = []
    for i, symbol in enumerate(EMOJI_SET[:pairs_count]):
        cards.append(Card(id=f"{token}-{i}-a", content=symbol))
        cards.append(Card(id=f"{token}-{i}-b", content=symbol))
    for i in range(len(cards) - 1, 0, -1):
        j = rand.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def find_card(deck: list[Card], card_id: str | None) -> Card | None:
    """id で札を探す。無ければ None。"""
    if card_id is None:
        return None
    return next((c for c in deck if c.id == card_id), None)


def mark_matched(deck: list[Card], content: str) -> list[Card]:
    """同じ絵柄の札をすべて matched にした新しいデッキを返す。"""
    return [replace(c, matched=True) if c.content == content else c for c in deck]


def all_matched(deck: list[Card]) -> bool:
    """デッキが空でなく、すべて揃っていれば True。"""
    return bool(deck) and all(c.matched for c in deck)


def matched_count(deck: list[Card]) -> int:
    return sum(1 for c in deck if c.matched)

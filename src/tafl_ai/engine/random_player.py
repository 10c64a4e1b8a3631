"""Uniform random baseline for Hnefatafl.

合法手から一様に1手を選ぶだけの対戦相手。
ルール実装のスモークテスト（ランダム同士で長手数を指しても状態が壊れないか）と、
Web API の ai_type="random"（探索なしで即答する相手）に使う。
"""

from __future__ import annotations

import random

from tafl_ai.game.hnefatafl.moves import Move
from tafl_ai.game.hnefatafl.state import TaflState


def random_move(state: TaflState, rng: random.Random | None = None) -> Move:
    """Pick one of state's legal moves; rng makes the choice reproducible.

    手がない局面（終局後、または手詰まり）では ValueError を送出する。
    """
    candidates = state.legal_moves()
    if not candidates:
        raise ValueError(f"{state.turn.name} has no legal moves")
    return (rng or random).choice(candidates)

"""Search configuration for the minimax AI.

探索エンジンの設定定義。
難易度（探索深さ）は呼び出し側が選ぶので、設定クラスとプリセットで管理する。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for choose_move().

    Attributes:
        depth:          探索深さ（手数）。深いほど強いが指数的に遅くなる
        order_captures: 駒を取る手を先に読む（αβ枝刈りの効率が上がる）
    """

    depth: int = 3
    order_captures: bool = True


# 難易度プリセット
# 11×11盤は合法手が100手前後あるので、Python では深さ3〜4が実用の上限
SEARCH_LEVELS: dict[str, SearchConfig] = {
    "easy": SearchConfig(depth=1),
    "normal": SearchConfig(depth=3),  # 速さと強さのバランス
    "hard": SearchConfig(depth=4),
}

DEFAULT_LEVEL = "normal"


def search_config(level: str) -> SearchConfig:
    """Return the preset for level, raising ValueError for unknown names."""
    try:
        return SEARCH_LEVELS[level]
    except KeyError:
        msg = f"Unknown AI level: {level}"
        raise ValueError(msg) from None

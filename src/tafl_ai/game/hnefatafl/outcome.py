"""Win detection and end-of-game scoring for Hnefatafl.

勝敗判定と終局時のスコア計算。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.types import PieceKind, Side, is_corner

if TYPE_CHECKING:
    from tafl_ai.game.hnefatafl.state import TaflState

# スコア計算の係数
WIN_BONUS = 500
CAPTURE_POINTS = 40
SURVIVOR_POINTS = 20
MOVE_PENALTY = 2


def check_win(board: Board) -> Side | None:
    """Return the winning side, or None while the game goes on.

    1. 王が盤上にいない → 攻撃側の勝ち（王が取られた）
    2. 王が隅にいる → 防御側の勝ち（脱出成功）
    """
    king_pos = board.find_king()
    if king_pos is None:
        return Side.ATTACKERS
    if is_corner(king_pos):
        return Side.DEFENDERS
    return None


def final_score(state: TaflState) -> int:
    """Score of the winning side for a finished game.

    勝った側のスコア:
    - 防御側: 500 + 取った攻撃駒×40 + 残った防御駒（王を含む）×20
    - 攻撃側: 500 + 取った防御駒×40
    どちらも手数×2 を引き、0 未満にはしない。
    """
    if state.winner is None:
        raise ValueError("Game is not over yet")

    score = WIN_BONUS
    if state.winner == Side.DEFENDERS:
        score += state.captured_attackers * CAPTURE_POINTS
        survivors = state.board.count(PieceKind.DEFENDER, PieceKind.KING)
        score += survivors * SURVIVOR_POINTS
    else:
        score += state.captured_defenders * CAPTURE_POINTS

    score -= state.move_count * MOVE_PENALTY
    return max(0, score)

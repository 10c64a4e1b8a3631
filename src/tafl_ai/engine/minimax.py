"""Minimax search with alpha-beta pruning for Hnefatafl."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from tafl_ai.engine.config import SearchConfig
from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.moves import Move, apply_move, legal_moves, would_capture
from tafl_ai.game.hnefatafl.outcome import check_win
from tafl_ai.game.hnefatafl.state import TaflState
from tafl_ai.game.hnefatafl.types import (
    CORNERS,
    THRONE,
    PieceKind,
    Side,
)

logger = logging.getLogger(__name__)

# 駒の価値（攻撃駒は数が多いぶん1枚あたりの価値が低い）
ATTACKER_VALUE = 20.0
DEFENDER_VALUE = 30.0
# 王の位置評価: 玉座から離れるほど、隅に近いほど防御側に有利
KING_CENTER_WEIGHT = 5.0
KING_CORNER_WEIGHT = 10.0

WIN_SCORE = 10000.0


@dataclass
class SearchStats:
    """Counters collected during one search."""

    nodes: int = 0


def _manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def evaluate(board: Board, side: Side) -> float:
    """Evaluate a position from side's perspective.

    局面を side の視点から数値評価する（静的評価関数）。

    Scoring (攻撃側視点。防御側はこの符号反転):
    - 材料: 攻撃駒×20 − 防御駒×30（王は数えない）
    - 王が玉座から離れている距離 ×(−5)
    - 王から最寄りの隅までの距離 ×(+10)

    Returns positive if side is better off.
    """
    attackers = board.count(PieceKind.ATTACKER, PieceKind.ELITE_ATTACKER)
    defenders = board.count(PieceKind.DEFENDER)
    score = attackers * ATTACKER_VALUE - defenders * DEFENDER_VALUE

    king_pos = board.find_king()
    if king_pos is not None:
        dist_center = _manhattan(king_pos, THRONE)
        dist_corner = min(_manhattan(king_pos, corner) for corner in CORNERS)
        score -= dist_center * KING_CENTER_WEIGHT
        score += dist_corner * KING_CORNER_WEIGHT

    return score if side == Side.ATTACKERS else -score


def order_moves(board: Board, moves: list[Move]) -> list[Move]:
    """Put capturing moves first, keeping generation order otherwise.

    駒を取る手を先に読むことで、早い段階で良い評価値が見つかり
    αβ枝刈りが効きやすくなる。
    """
    captures = [m for m in moves if would_capture(board, m)]
    if not captures:
        return moves
    captured = set(captures)
    quiet = [m for m in moves if m not in captured]
    return captures + quiet


def negamax(
    board: Board,
    side: Side,
    depth: int,
    alpha: float,
    beta: float,
    *,
    order_captures: bool = True,
    prune: bool = True,
    stats: SearchStats | None = None,
) -> tuple[Move | None, float]:
    """Negamax search with alpha-beta pruning.

    ネガマックス法 + αβ枝刈りによる探索。
    常に「手番側 side にとっての評価値」を返し、相手番の値は符号反転して使う。

    alpha: 手番側が保証できる最低スコア
    beta:  相手が許す上限スコア
    prune=False のときは枝刈りをしない（全幅探索。検証用）。

    board は変更しない。子ノードはそれぞれ専用の複製で展開する。

    Returns (best_move, score). best_move is None at leaves and terminal nodes.
    """
    if stats is not None:
        stats.nodes += 1

    # 終局: 残り深さを足して「速い勝ち・遅い負け」を優先する
    winner = check_win(board)
    if winner is not None:
        if winner == side:
            return None, WIN_SCORE + depth
        return None, -(WIN_SCORE + depth)

    if depth == 0:
        return None, evaluate(board, side)

    moves = legal_moves(board, side)
    if not moves:
        # 手詰まりのルールはないので、静的評価で葉として扱う
        return None, evaluate(board, side)
    if order_captures:
        moves = order_moves(board, moves)

    best_move = moves[0]
    best_score = float("-inf")

    for move in moves:
        child = board.clone()
        apply_move(child, move)
        _, score = negamax(
            child,
            side.opponent,
            depth - 1,
            -beta,
            -alpha,
            order_captures=order_captures,
            prune=prune,
            stats=stats,
        )
        score = -score

        if score > best_score:
            best_score = score
            best_move = move

        if prune:
            alpha = max(alpha, score)
            if alpha >= beta:
                break  # βカットオフ

    return best_move, best_score


def choose_move(
    board: Board,
    side: Side,
    depth: int = 3,
    *,
    order_captures: bool = True,
) -> Move | None:
    """Return the best move for side, or None if there is nothing to play.

    探索は複製した盤面の上だけで行い、渡された board は変更しない。
    終局している局面、または合法手がない局面では None を返す。
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")
    if check_win(board) is not None:
        return None

    stats = SearchStats()
    started = time.perf_counter()
    move, score = negamax(
        board,
        side,
        depth,
        float("-inf"),
        float("inf"),
        order_captures=order_captures,
        stats=stats,
    )
    logger.debug(
        "%s depth=%d best=%s score=%.1f nodes=%d (%.2fs)",
        side.name,
        depth,
        move,
        score,
        stats.nodes,
        time.perf_counter() - started,
    )
    return move


def minimax_move(state: TaflState, config: SearchConfig | None = None) -> Move | None:
    """Return the best move for the side to move in state.

    対局状態から探索を呼ぶための薄いラッパー。config を省略すると既定値（深さ3）。
    結果の適用は呼び出し側が submit_move() で行う。
    """
    if state.is_terminal:
        return None
    config = config or SearchConfig()
    return choose_move(
        state.board, state.turn, config.depth, order_captures=config.order_captures
    )


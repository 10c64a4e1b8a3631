"""Capture resolution for Hnefatafl.

捕獲判定モジュール。

通常の駒は「挟み撃ち」で取られる:
  動かした駒 → 隣の敵駒 → その先のマス（自陣の駒 or 空いた玉座/隅）

空いた玉座・隅は全ての駒に対して敵として扱われる（どちらの陣営の
「挟む側」にもなる）。この非対称なルールが最も間違えやすい部分。

王だけは挟み撃ちでは取られず、縦横4方向すべてを囲まれたときに取られる。
"""

from __future__ import annotations

import logging

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.types import (
    DIRECTIONS,
    PieceKind,
    Position,
    Side,
    in_bounds,
    is_special,
)

logger = logging.getLogger(__name__)

# 王を取るのに必要な敵対マスの数（端の特例なし）
KING_HOSTAGE_COUNT = 4


def is_hostile_to(board: Board, pos: Position, side: Side) -> bool:
    """Return True if the square at pos acts as an enemy of side.

    - 盤外: 敵ではない（盤端だけで捕獲は起きない）
    - 相手陣営の駒: 敵
    - 空いた玉座・隅: 全員にとって敵
    - それ以外: 敵ではない
    """
    if not in_bounds(pos):
        return False
    kind = board.piece_at(pos)
    if kind == PieceKind.EMPTY:
        return is_special(pos)
    return kind.side == side.opponent


def is_king_captured(board: Board, king_pos: Position) -> bool:
    """Return True if the king at king_pos is enclosed on all four sides.

    王の縦横4マスを調べ、攻撃駒または空いた玉座・隅を「敵対点」として数える。
    盤外のマスは数えない（スキップする）ため、盤端にいる王は取られない。
    """
    hostile = sum(
        1
        for dr, dc in DIRECTIONS
        if is_hostile_to(board, (king_pos[0] + dr, king_pos[1] + dc), Side.DEFENDERS)
    )
    return hostile == KING_HOSTAGE_COUNT


def resolve_captures(board: Board, landed_at: Position, side: Side) -> list[Position]:
    """Remove every enemy piece captured by side's move onto landed_at.

    side の駒が landed_at に着地した直後の捕獲を解決する。
    取られた駒のマスは board 上でその場で空にされ、その座標のリストを返す
    （スコア集計やアニメーションなど呼び出し側で使う）。
    """
    captured: list[Position] = []
    row, col = landed_at

    for dr, dc in DIRECTIONS:
        adj = (row + dr, col + dc)
        far = (row + 2 * dr, col + 2 * dc)
        if not in_bounds(far):
            continue  # 向こう側のマスがなければ挟めない

        victim = board.piece_at(adj)
        if victim == PieceKind.EMPTY or not is_hostile_to(board, adj, side):
            continue  # 空マスや自陣の駒は対象外

        if victim == PieceKind.KING:
            # 王は挟み撃ちではなく4方向包囲で判定する
            if is_king_captured(board, adj):
                board.set_piece(adj, PieceKind.EMPTY)
                captured.append(adj)
                logger.debug("King captured at %s", adj)
            continue

        # 向こう側が「取られる側にとっての敵」なら挟み撃ち成立
        if is_hostile_to(board, far, side.opponent):
            board.set_piece(adj, PieceKind.EMPTY)
            captured.append(adj)
            logger.debug("%s captured at %s by %s", victim.name, adj, side.name)

    return captured

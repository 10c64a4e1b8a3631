"""Move validation, generation and application for Hnefatafl.

指し手の合法性判定・生成・適用。

駒は飛車のように縦横へ何マスでも動ける（飛び越えは不可）。
玉座と隅には王しか止まれない。
"""

from __future__ import annotations

from dataclasses import dataclass

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.capture import resolve_captures
from tafl_ai.game.hnefatafl.types import (
    DIRECTIONS,
    PieceKind,
    Position,
    Side,
    in_bounds,
    is_special,
)


@dataclass(frozen=True)
class Move:
    """A single orthogonal move from from_pos to to_pos."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos}->{self.to_pos}"


def is_legal(board: Board, from_pos: Position, to_pos: Position, side: Side) -> bool:
    """Return True if side may move the piece at from_pos to to_pos.

    判定順序（すべて満たす必要がある）:
    0. from_pos に side の駒がある
    1. to_pos が盤内かつ空マス
    2. 同じ行または列（斜め移動は不可）
    3. 途中のマスがすべて空（敵味方問わず飛び越え不可）
    4. 行き先が玉座・隅なら動かす駒は王でなければならない

    ルール4は「止まる」ことだけを制限する。王以外の駒が空いた玉座を
    「通過」する制限は legal_destinations() の走査側で行う。
    """
    if not (in_bounds(from_pos) and in_bounds(to_pos)):
        return False
    piece = board.piece_at(from_pos)
    if piece.side != side:
        return False

    # 1. 行き先は空マス
    if board.piece_at(to_pos) != PieceKind.EMPTY:
        return False

    # 2. 縦横の直線移動のみ
    (fr, fc), (tr, tc) = from_pos, to_pos
    if fr != tr and fc != tc:
        return False

    # 3. 経路上に駒がないこと
    dr = (tr > fr) - (tr < fr)
    dc = (tc > fc) - (tc < fc)
    r, c = fr + dr, fc + dc
    while (r, c) != (tr, tc):
        if board.piece_at((r, c)) != PieceKind.EMPTY:
            return False
        r += dr
        c += dc

    # 4. 玉座・隅に止まれるのは王だけ
    if is_special(to_pos) and piece != PieceKind.KING:
        return False

    return True


def legal_destinations(board: Board, pos: Position) -> list[Position]:
    """Return every square the piece at pos can move to.

    4方向に1マスずつ進み、駒に当たったら止まる。
    王以外の駒は玉座・隅に到達した時点で走査を打ち切る
    （そのマスに止まることも、通過することもできない）。
    """
    piece = board.piece_at(pos)
    if piece == PieceKind.EMPTY:
        return []

    targets: list[Position] = []
    for dr, dc in DIRECTIONS:
        r, c = pos[0] + dr, pos[1] + dc
        while in_bounds((r, c)):
            if board.piece_at((r, c)) != PieceKind.EMPTY:
                break  # 駒に当たった → この方向は終わり
            if is_special((r, c)) and piece != PieceKind.KING:
                break  # 王以外は特殊マスの手前で止まる
            targets.append((r, c))
            r += dr
            c += dc
    return targets


def legal_moves(board: Board, side: Side) -> list[Move]:
    """Generate all legal moves for side.

    side の全合法手を生成する（行優先で駒を走査、方向は上・下・左・右の順）。
    """
    return [
        Move(pos, target)
        for pos in board.positions_of(side)
        for target in legal_destinations(board, pos)
    ]


def apply_move(board: Board, move: Move) -> list[Position]:
    """Move a piece in place and resolve the resulting captures.

    board をその場で変更する（呼び出し側が clone() した盤面を渡すこと）。
    合法性はチェックしない。取られた駒の座標リストを返す。
    """
    piece = board.piece_at(move.from_pos)
    side = piece.side
    if side is None:
        raise ValueError(f"No piece at {move.from_pos}")
    board.set_piece(move.to_pos, piece)
    board.set_piece(move.from_pos, PieceKind.EMPTY)
    return resolve_captures(board, move.to_pos, side)


def would_capture(board: Board, move: Move) -> bool:
    """Probe whether move captures at least one piece (board is untouched).

    探索の手順付け（取る手を先に読む）に使う。複製した盤面で試すだけ。
    """
    return len(apply_move(board.clone(), move)) > 0

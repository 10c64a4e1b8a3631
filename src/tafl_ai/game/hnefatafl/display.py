"""Terminal display and move notation for Hnefatafl boards.

盤面のターミナル表示と棋譜表記。
"""

from __future__ import annotations

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.state import MoveRecord
from tafl_ai.game.hnefatafl.types import BOARD_SIZE, PieceKind, Position, is_special

# 駒の表示文字（エリートは小文字で区別するだけ）
PIECE_CHARS: dict[PieceKind, str] = {
    PieceKind.KING: "K",
    PieceKind.DEFENDER: "D",
    PieceKind.ATTACKER: "A",
    PieceKind.ELITE_ATTACKER: "a",
}

# 棋譜用の文字（エリートも通常の攻撃駒と同じ "A"）
NOTATION_CHARS: dict[PieceKind, str] = {
    PieceKind.KING: "K",
    PieceKind.DEFENDER: "D",
    PieceKind.ATTACKER: "A",
    PieceKind.ELITE_ATTACKER: "A",
}

COL_LABELS = "abcdefghijk"


def square_name(pos: Position) -> str:
    """Chess-like square name: column a–k, row 1 at the bottom.

    例: (0, 0) → "a11"、(10, 10) → "k1"
    """
    row, col = pos
    return f"{COL_LABELS[col]}{BOARD_SIZE - row}"


def format_record(record: MoveRecord) -> str:
    """History entry such as "K to f6"."""
    return f"{NOTATION_CHARS[record.piece]} to {square_name(record.move.to_pos)}"


def board_to_str(board: Board) -> str:
    """Convert a board to a human-readable string.

    Example output (先頭3行):
           a b c d e f g h i j k
        11 + . . A A A A A . . +
        10 . . . . . a . . . . .

    - K = 王、D = 防御駒、A = 攻撃駒、a = エリート攻撃駒
    - "+" = 空いた玉座・隅、"." = 空マス
    """
    lines = ["   " + " ".join(COL_LABELS)]
    for r in range(BOARD_SIZE):
        cells: list[str] = []
        for c in range(BOARD_SIZE):
            kind = board.piece_at((r, c))
            if kind == PieceKind.EMPTY:
                cells.append("+" if is_special((r, c)) else ".")
            else:
                cells.append(PIECE_CHARS[kind])
        lines.append(f"{BOARD_SIZE - r:>2} {' '.join(cells)}")
    return "\n".join(lines)

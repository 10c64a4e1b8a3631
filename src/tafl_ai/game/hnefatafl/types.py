"""Types and constants for Hnefatafl (11x11).

ハネフタフル（11×11盤）の基本型・定数定義。
攻撃側（ATTACKERS）と防御側（DEFENDERS）の非対称な2陣営で戦う。
"""

from __future__ import annotations

from enum import IntEnum, unique

# 盤面のサイズ: 11 × 11
BOARD_SIZE = 11
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE  # 121マス

# 座標は (行, 列) のタプル。0始まり
Position = tuple[int, int]

# 玉座（中央のマス）
THRONE: Position = (5, 5)

# 盤の四隅（王がここに到達すれば防御側の勝ち）
CORNERS: tuple[Position, ...] = (
    (0, 0),
    (0, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, 0),
    (BOARD_SIZE - 1, BOARD_SIZE - 1),
)

# 縦横4方向: (行の変化, 列の変化)
DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@unique
class Side(IntEnum):
    """The two sides of the game.

    攻撃側（ATTACKERS）が先手。防御側（DEFENDERS）は王を隅へ逃がすのが目的。
    """

    ATTACKERS = 0
    DEFENDERS = 1

    @property
    def opponent(self) -> Side:
        """相手陣営を返す。0↔1 の切り替え。"""
        return Side(1 - self.value)


@unique
class PieceKind(IntEnum):
    """Contents of a single square.

    マスの状態（5種類）。値は元の盤面表現の整数コードに対応する。
    ELITE_ATTACKER は見た目だけの区別で、ルール上は ATTACKER と同じ。
    """

    EMPTY = 0
    KING = 1
    DEFENDER = 2
    ATTACKER = 3
    ELITE_ATTACKER = 4

    @property
    def side(self) -> Side | None:
        """この駒を所有する陣営。空マスは None。"""
        if self in (PieceKind.ATTACKER, PieceKind.ELITE_ATTACKER):
            return Side.ATTACKERS
        if self in (PieceKind.DEFENDER, PieceKind.KING):
            return Side.DEFENDERS
        return None


def in_bounds(pos: Position) -> bool:
    """Return True if pos lies on the board."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_throne(pos: Position) -> bool:
    """玉座 (5,5) かどうか。"""
    return pos == THRONE


def is_corner(pos: Position) -> bool:
    """盤の四隅のいずれかかどうか。"""
    return pos in CORNERS


def is_special(pos: Position) -> bool:
    """Throne or corner: squares only the king may occupy.

    特殊マス（玉座・隅）。王以外は止まることも通過することもできず、
    空いているときは全ての駒に対して敵として振る舞う。
    """
    return pos == THRONE or pos in CORNERS

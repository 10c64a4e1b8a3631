"""Board representation for Hnefatafl.

盤面のデータ構造。121マスを行優先の1次元リストで持つ。

この Board はミュータブル（変更可能）。
捕獲判定はマスをその場で空にするアルゴリズムなので、
変更は必ず clone() した盤面に対して行う:
- 対局状態（TaflState）は指し手ごとに盤面を複製してから変更する
- 探索エンジンはノードごとに専用の複製を持つ
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tafl_ai.game.hnefatafl.errors import OutOfBounds
from tafl_ai.game.hnefatafl.types import (
    BOARD_SIZE,
    NUM_SQUARES,
    THRONE,
    PieceKind,
    Position,
    Side,
    in_bounds,
)

# 防御側12枚: 玉座を囲む菱形
DEFENDER_START: tuple[Position, ...] = (
    (3, 5),
    (4, 4), (4, 5), (4, 6),
    (5, 3), (5, 4), (5, 6), (5, 7),
    (6, 4), (6, 5), (6, 6),
    (7, 5),
)

# 攻撃側24枚: 各辺に5枚の列 + 1枚の突起（T字型）
ATTACKER_START: tuple[Position, ...] = (
    # 上辺
    (0, 3), (0, 4), (0, 5), (0, 6), (0, 7), (1, 5),
    # 下辺
    (10, 3), (10, 4), (10, 5), (10, 6), (10, 7), (9, 5),
    # 左辺
    (3, 0), (4, 0), (5, 0), (6, 0), (7, 0), (5, 1),
    # 右辺
    (3, 10), (4, 10), (5, 10), (6, 10), (7, 10), (5, 9),
)

# 玉座に最も近い4枚がエリート攻撃駒になる
NUM_ELITE = 4


def square_index(pos: Position) -> int:
    """Convert a position to a flat index, failing loudly when off-board."""
    if not in_bounds(pos):
        raise OutOfBounds(f"Position off the board: {pos}")
    return pos[0] * BOARD_SIZE + pos[1]


@dataclass
class Board:
    """Mutable 11x11 board.

    squares: 121要素のリスト（行優先）。squares[row * 11 + col] が (row, col)。
    """

    squares: list[PieceKind] = field(default_factory=lambda: Board._initial_squares())

    def __post_init__(self) -> None:
        if len(self.squares) != NUM_SQUARES:
            msg = f"Board needs {NUM_SQUARES} squares, got {len(self.squares)}"
            raise ValueError(msg)

    @staticmethod
    def _initial_squares() -> list[PieceKind]:
        """Return the fixed starting position.

        標準の初期配置を返す。

            . . . A A A A A . . .
            . . . . . A . . . . .
            . . . . . . . . . . .
            A . . . . D . . . . A
            A . . . D D D . . . A
            A A . D D K D D . A A
            A . . . D D D . . . A
            A . . . . D . . . . A
            . . . . . . . . . . .
            . . . . . A . . . . .
            . . . A A A A A . . .
        """
        squares = [PieceKind.EMPTY] * NUM_SQUARES
        squares[square_index(THRONE)] = PieceKind.KING
        for pos in DEFENDER_START:
            squares[square_index(pos)] = PieceKind.DEFENDER
        for pos in ATTACKER_START:
            squares[square_index(pos)] = PieceKind.ATTACKER

        # 王（玉座）からのユークリッド距離が近い順に4枚をエリートにする
        # sorted は安定ソートなので同距離なら定義順
        by_distance = sorted(
            ATTACKER_START,
            key=lambda p: math.hypot(p[0] - THRONE[0], p[1] - THRONE[1]),
        )
        for pos in by_distance[:NUM_ELITE]:
            squares[square_index(pos)] = PieceKind.ELITE_ATTACKER
        return squares

    @classmethod
    def empty(cls) -> Board:
        """Return a board with no pieces at all (for setting up positions)."""
        return cls(squares=[PieceKind.EMPTY] * NUM_SQUARES)

    @classmethod
    def from_pieces(cls, pieces: dict[Position, PieceKind]) -> Board:
        """Build a board holding exactly the given pieces."""
        board = cls.empty()
        for pos, kind in pieces.items():
            board.set_piece(pos, kind)
        return board

    def piece_at(self, pos: Position) -> PieceKind:
        """Return the contents of pos. Raises OutOfBounds off the board."""
        return self.squares[square_index(pos)]

    def set_piece(self, pos: Position, kind: PieceKind) -> None:
        """Overwrite the square at pos in place.

        盤外座標は OutOfBounds。座標を丸めて黙って書き込むことはしない。
        """
        self.squares[square_index(pos)] = kind

    def clone(self) -> Board:
        """Return an independent copy.

        要素は IntEnum（不変値）なので、リストの複製だけで完全な深いコピーになる。
        """
        return Board(squares=list(self.squares))

    def find_king(self) -> Position | None:
        """Return the king's position, or None once it has been captured."""
        try:
            idx = self.squares.index(PieceKind.KING)
        except ValueError:
            return None
        return divmod(idx, BOARD_SIZE)

    def count(self, *kinds: PieceKind) -> int:
        """Number of squares holding any of the given kinds."""
        return sum(1 for kind in self.squares if kind in kinds)

    def positions_of(self, side: Side) -> list[Position]:
        """All squares holding a piece owned by side, in row-major order."""
        return [
            divmod(idx, BOARD_SIZE)
            for idx, kind in enumerate(self.squares)
            if kind.side == side
        ]

"""Game state machine for Hnefatafl.

ハネフタフルの対局状態。
Board が盤面データを持ち、TaflState が手番・手数・捕獲数・勝敗を管理する。

指し手の適用は submit_move() だけが行う:
  合法性判定 → 盤面を複製して移動 → 捕獲判定 → 勝敗判定 → 手番交代
元の状態は一切変更せず、新しい TaflState を返す。
不正な手は MoveRejected 系の例外になり、部分的に変更された盤面が外に出ることはない。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from tafl_ai.game.hnefatafl.board import Board, square_index
from tafl_ai.game.hnefatafl.errors import IllegalMove, MutationAfterTerminal, OutOfBounds
from tafl_ai.game.hnefatafl.moves import Move, apply_move, is_legal
from tafl_ai.game.hnefatafl.moves import legal_moves as _legal_moves
from tafl_ai.game.hnefatafl.outcome import check_win
from tafl_ai.game.hnefatafl.types import PieceKind, Position, Side, in_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """One accepted move, kept for notation, replay and undo."""

    move: Move
    piece: PieceKind
    captured: tuple[Position, ...] = ()


@dataclass(frozen=True)
class TaflState:
    """Immutable snapshot of a Hnefatafl game.

    対局状態のスナップショット。submit_move() は常に新しいオブジェクトを返す。

    Attributes:
        squares:            盤面121マスの不変スナップショット（行優先）
        turn:               手番の陣営（攻撃側が先手）
        move_count:         受理された手数
        captured_attackers: 防御側が取った攻撃駒の数
        captured_defenders: 攻撃側が取った防御駒の数（王は含まない）
        active:             対局中なら True。勝敗がつくと False
        winner:             勝った陣営（対局中は None）
        history:            受理された手の記録
    """

    squares: tuple[PieceKind, ...] = field(default_factory=lambda: tuple(Board().squares))
    turn: Side = Side.ATTACKERS
    move_count: int = 0
    captured_attackers: int = 0
    captured_defenders: int = 0
    active: bool = True
    winner: Side | None = None
    history: tuple[MoveRecord, ...] = ()

    def __post_init__(self) -> None:
        # リストを渡されても共有しないようにタプルへ固定する
        object.__setattr__(self, "squares", tuple(self.squares))

    @classmethod
    def from_board(cls, board: Board, **fields: Any) -> TaflState:
        """Build a state holding a snapshot of board (for setting up positions)."""
        return cls(squares=tuple(board.squares), **fields)

    @property
    def board(self) -> Board:
        """A fresh Board copy of the position.

        毎回新しい複製を返すので、呼び出し側が変更しても状態には影響しない。
        """
        return Board(squares=list(self.squares))

    @property
    def is_terminal(self) -> bool:
        """終局していれば True。"""
        return not self.active

    def piece_at(self, pos: Position) -> PieceKind:
        """盤面のマスの内容を返す（盤外は OutOfBounds）。"""
        return self.squares[square_index(pos)]

    def legal_moves(self) -> list[Move]:
        """手番側の合法手。終局後は空リスト。"""
        if not self.active:
            return []
        return _legal_moves(self.board, self.turn)

    def apply_move(self, move: Move) -> TaflState:
        """submit_move() の Move 版。"""
        return submit_move(self, move.from_pos, move.to_pos)


def new_game() -> TaflState:
    """Start a new game from the fixed initial placement."""
    return TaflState()


def submit_move(state: TaflState, from_pos: Position, to_pos: Position) -> TaflState:
    """Apply a move for the side to move and return the resulting state.

    唯一の状態遷移の入口。

    Raises:
        MutationAfterTerminal: 終局後に指そうとした
        OutOfBounds:           盤外の座標が渡された（呼び出し側のバグ）
        IllegalMove:           ルール違反の手
    """
    if not state.active:
        raise MutationAfterTerminal(f"Game is already over ({state.winner.name} won)")
    for pos in (from_pos, to_pos):
        if not in_bounds(pos):
            raise OutOfBounds(f"Position off the board: {pos}")
    # state.board は毎回複製なので、この複製をそのまま新しい盤面として使う
    board = state.board
    if not is_legal(board, from_pos, to_pos, state.turn):
        raise IllegalMove(f"Illegal move for {state.turn.name}: {from_pos} -> {to_pos}")

    move = Move(from_pos, to_pos)
    piece = state.piece_at(from_pos)
    captured = apply_move(board, move)

    # 取られた駒の種類は変更前の盤面から読む
    taken = [state.piece_at(pos) for pos in captured]
    pieces_taken = sum(1 for kind in taken if kind != PieceKind.KING)
    captured_attackers = state.captured_attackers
    captured_defenders = state.captured_defenders
    if state.turn == Side.ATTACKERS:
        captured_defenders += pieces_taken
    else:
        captured_attackers += pieces_taken

    winner = check_win(board)
    active = winner is None
    logger.debug(
        "Move %d: %s %s captured=%s",
        state.move_count + 1,
        piece.name,
        move,
        captured,
    )
    if not active:
        logger.info("Game over after %d moves: %s win", state.move_count + 1, winner.name)

    return TaflState.from_board(
        board,
        # 勝敗がついたら手番は交代しない（以後は読み取り専用）
        turn=state.turn.opponent if active else state.turn,
        move_count=state.move_count + 1,
        captured_attackers=captured_attackers,
        captured_defenders=captured_defenders,
        active=active,
        winner=winner,
        history=state.history + (MoveRecord(move, piece, tuple(captured)),),
    )


def replay(moves: Iterable[Move]) -> TaflState:
    """Rebuild a game from the start by submitting each move in turn.

    リモート対局の相手から受け取った手順や、取り消し（undo）の実装に使う。
    同じ手順からは常に同じ状態が再現される。
    """
    state = new_game()
    for move in moves:
        state = state.apply_move(move)
    return state


def undo(state: TaflState) -> TaflState:
    """Return the state before the last accepted move."""
    if not state.history:
        raise ValueError("No moves to undo")
    return replay(record.move for record in state.history[:-1])

"""Hnefatafl — 11x11 Tafl rules engine."""

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.capture import is_hostile_to, is_king_captured, resolve_captures
from tafl_ai.game.hnefatafl.display import board_to_str, format_record
from tafl_ai.game.hnefatafl.errors import (
    IllegalMove,
    MoveRejected,
    MutationAfterTerminal,
    OutOfBounds,
    TaflError,
)
from tafl_ai.game.hnefatafl.moves import Move, is_legal, legal_destinations, legal_moves
from tafl_ai.game.hnefatafl.outcome import check_win, final_score
from tafl_ai.game.hnefatafl.state import (
    MoveRecord,
    TaflState,
    new_game,
    replay,
    submit_move,
    undo,
)
from tafl_ai.game.hnefatafl.types import BOARD_SIZE, CORNERS, THRONE, PieceKind, Side

__all__ = [
    "BOARD_SIZE",
    "Board",
    "CORNERS",
    "IllegalMove",
    "Move",
    "MoveRecord",
    "MoveRejected",
    "MutationAfterTerminal",
    "OutOfBounds",
    "PieceKind",
    "Side",
    "THRONE",
    "TaflError",
    "TaflState",
    "board_to_str",
    "check_win",
    "final_score",
    "format_record",
    "is_hostile_to",
    "is_king_captured",
    "is_legal",
    "legal_destinations",
    "legal_moves",
    "new_game",
    "replay",
    "resolve_captures",
    "submit_move",
    "undo",
]

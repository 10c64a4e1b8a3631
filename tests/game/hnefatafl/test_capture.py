"""Tests for capture resolution.

Coverage map:
  - Hostility predicate: off-board, enemy piece, empty throne/corner
  - Sandwich capture with a piece, an empty throne or an empty corner as anvil
  - Captures that must NOT happen (occupied throne, edge, moving into a sandwich)
  - King capture: four hostile contributions, throne as one of them, edge immunity
"""

from __future__ import annotations

import pytest

from tafl_ai.game.hnefatafl.board import Board
from tafl_ai.game.hnefatafl.capture import (
    is_hostile_to,
    is_king_captured,
    resolve_captures,
)
from tafl_ai.game.hnefatafl.outcome import check_win
from tafl_ai.game.hnefatafl.types import PieceKind, Side

A = PieceKind.ATTACKER
E = PieceKind.ELITE_ATTACKER
D = PieceKind.DEFENDER
K = PieceKind.KING
EMPTY = PieceKind.EMPTY


class TestHostility:
    def test_off_board_never_hostile(self) -> None:
        board = Board.empty()
        assert not is_hostile_to(board, (-1, 0), Side.ATTACKERS)
        assert not is_hostile_to(board, (5, 11), Side.DEFENDERS)

    def test_enemy_piece_hostile(self) -> None:
        board = Board.from_pieces({(2, 2): A, (3, 3): D, (4, 4): K})
        assert is_hostile_to(board, (2, 2), Side.DEFENDERS)
        assert is_hostile_to(board, (3, 3), Side.ATTACKERS)
        assert is_hostile_to(board, (4, 4), Side.ATTACKERS)

    def test_own_piece_not_hostile(self) -> None:
        board = Board.from_pieces({(2, 2): E, (3, 3): D})
        assert not is_hostile_to(board, (2, 2), Side.ATTACKERS)
        assert not is_hostile_to(board, (3, 3), Side.DEFENDERS)

    def test_empty_special_squares_hostile_to_everyone(self) -> None:
        board = Board.empty()
        for pos in [(5, 5), (0, 0), (0, 10), (10, 0), (10, 10)]:
            assert is_hostile_to(board, pos, Side.ATTACKERS)
            assert is_hostile_to(board, pos, Side.DEFENDERS)

    def test_occupied_throne_follows_occupant(self) -> None:
        board = Board.from_pieces({(5, 5): K})
        assert is_hostile_to(board, (5, 5), Side.ATTACKERS)
        assert not is_hostile_to(board, (5, 5), Side.DEFENDERS)

    def test_plain_empty_square_not_hostile(self) -> None:
        assert not is_hostile_to(Board.empty(), (3, 4), Side.ATTACKERS)


class TestSandwichCapture:
    def test_between_two_attackers(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): D, (3, 5): A})
        assert resolve_captures(board, (3, 3), Side.ATTACKERS) == [(3, 4)]
        assert board.piece_at((3, 4)) == EMPTY

    def test_elite_attacker_is_a_jaw(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): D, (3, 5): E})
        assert resolve_captures(board, (3, 3), Side.ATTACKERS) == [(3, 4)]

    def test_elite_attacker_is_captured_like_attacker(self) -> None:
        board = Board.from_pieces({(3, 3): D, (3, 4): E, (3, 5): D})
        assert resolve_captures(board, (3, 3), Side.DEFENDERS) == [(3, 4)]

    def test_king_as_defenders_jaw(self) -> None:
        board = Board.from_pieces({(2, 3): D, (2, 4): A, (2, 5): K})
        assert resolve_captures(board, (2, 3), Side.DEFENDERS) == [(2, 4)]

    def test_against_empty_throne(self) -> None:
        board = Board.from_pieces({(5, 3): A, (5, 4): D})
        assert resolve_captures(board, (5, 3), Side.ATTACKERS) == [(5, 4)]

    def test_attacker_against_empty_throne(self) -> None:
        board = Board.from_pieces({(3, 5): D, (4, 5): A})
        assert resolve_captures(board, (3, 5), Side.DEFENDERS) == [(4, 5)]

    def test_against_empty_corner(self) -> None:
        board = Board.from_pieces({(0, 2): A, (0, 1): D})
        assert resolve_captures(board, (0, 2), Side.ATTACKERS) == [(0, 1)]

    def test_attacker_against_empty_corner(self) -> None:
        board = Board.from_pieces({(2, 0): D, (1, 0): A})
        assert resolve_captures(board, (2, 0), Side.DEFENDERS) == [(1, 0)]

    def test_occupied_throne_is_not_an_anvil_for_attackers(self) -> None:
        board = Board.from_pieces({(5, 3): A, (5, 4): D, (5, 5): K})
        assert resolve_captures(board, (5, 3), Side.ATTACKERS) == []
        assert board.piece_at((5, 4)) == D

    def test_empty_far_square_no_capture(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): D})
        assert resolve_captures(board, (3, 3), Side.ATTACKERS) == []

    def test_board_edge_is_not_an_anvil(self) -> None:
        board = Board.from_pieces({(1, 4): A, (0, 4): D})
        assert resolve_captures(board, (1, 4), Side.ATTACKERS) == []
        assert board.piece_at((0, 4)) == D

    def test_moving_between_enemies_is_safe(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): D, (3, 5): A})
        assert resolve_captures(board, (3, 4), Side.DEFENDERS) == []
        assert board.piece_at((3, 4)) == D

    def test_own_piece_never_captured(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): A, (3, 5): A})
        assert resolve_captures(board, (3, 3), Side.ATTACKERS) == []

    def test_multiple_captures(self) -> None:
        board = Board.from_pieces(
            {(3, 3): A, (3, 4): D, (3, 5): A, (2, 3): D, (1, 3): A, (4, 3): D, (5, 3): E}
        )
        captured = resolve_captures(board, (3, 3), Side.ATTACKERS)
        assert sorted(captured) == [(2, 3), (3, 4), (4, 3)]
        assert board.count(D) == 0


class TestAnvilFollowsHostility:
    """A sandwich closes exactly when the far square is hostile to the victim."""

    @pytest.mark.parametrize("far_kind", [EMPTY, A, E, D, K])
    @pytest.mark.parametrize(
        "mover_at, victim_at, far",
        [((3, 3), (3, 4), (3, 5)), ((5, 3), (5, 4), (5, 5)), ((0, 2), (0, 1), (0, 0))],
    )
    def test_attackers_capture(
        self,
        far_kind: PieceKind,
        mover_at: tuple[int, int],
        victim_at: tuple[int, int],
        far: tuple[int, int],
    ) -> None:
        pieces = {mover_at: A, victim_at: D}
        if far_kind != EMPTY:
            pieces[far] = far_kind
        board = Board.from_pieces(pieces)
        expected = is_hostile_to(board, far, Side.DEFENDERS)

        captured = resolve_captures(board, mover_at, Side.ATTACKERS)
        assert (captured == [victim_at]) == expected

    @pytest.mark.parametrize("far_kind", [EMPTY, A, E, D, K])
    def test_defenders_capture(self, far_kind: PieceKind) -> None:
        pieces = {(5, 7): D, (5, 6): A}
        if far_kind != EMPTY:
            pieces[(5, 5)] = far_kind
        board = Board.from_pieces(pieces)
        expected = is_hostile_to(board, (5, 5), Side.ATTACKERS)

        captured = resolve_captures(board, (5, 7), Side.DEFENDERS)
        assert (captured == [(5, 6)]) == expected


class TestKingCapture:
    def test_surrounded_on_throne(self) -> None:
        board = Board.from_pieces({(5, 5): K, (4, 5): A, (6, 5): A, (5, 4): A, (5, 6): E})
        assert is_king_captured(board, (5, 5))

    def test_missing_one_side_survives(self) -> None:
        board = Board.from_pieces({(5, 5): K, (4, 5): A, (6, 5): A, (5, 4): A})
        assert not is_king_captured(board, (5, 5))

    def test_defender_on_one_side_survives(self) -> None:
        board = Board.from_pieces({(5, 5): K, (4, 5): A, (6, 5): A, (5, 4): A, (5, 6): D})
        assert not is_king_captured(board, (5, 5))

    def test_empty_throne_counts_as_hostile(self) -> None:
        board = Board.from_pieces({(4, 5): K, (3, 5): A, (4, 4): A, (4, 6): A})
        assert is_king_captured(board, (4, 5))

    def test_king_on_edge_cannot_be_captured(self) -> None:
        board = Board.from_pieces({(0, 5): K, (0, 4): A, (0, 6): A, (1, 5): A})
        assert not is_king_captured(board, (0, 5))

    def test_resolve_removes_king(self) -> None:
        board = Board.from_pieces({(5, 5): K, (4, 5): A, (5, 4): A, (5, 6): A, (6, 5): A})
        captured = resolve_captures(board, (6, 5), Side.ATTACKERS)
        assert captured == [(5, 5)]
        assert board.find_king() is None
        assert check_win(board) == Side.ATTACKERS

    def test_king_not_taken_by_simple_sandwich(self) -> None:
        board = Board.from_pieces({(3, 3): A, (3, 4): K, (3, 5): A})
        assert resolve_captures(board, (3, 3), Side.ATTACKERS) == []
        assert board.find_king() == (3, 4)

    def test_defenders_never_capture_own_king(self) -> None:
        board = Board.from_pieces({(5, 5): K, (4, 5): A, (5, 4): A, (5, 6): A, (6, 5): D})
        assert resolve_captures(board, (6, 5), Side.DEFENDERS) == []
        assert board.find_king() == (5, 5)

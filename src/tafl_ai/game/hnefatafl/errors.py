"""Exceptions raised by the Hnefatafl rules engine.

ルールエンジンの例外階層。

- OutOfBounds: 盤外座標（呼び出し側のバグ）。握りつぶさずに失敗させる。
- MoveRejected: 指し手が受理されなかった（状態は変化しない）。
    - IllegalMove: ルール違反の手
    - MutationAfterTerminal: 終局後の指し手
"""

from __future__ import annotations


class TaflError(Exception):
    """Base class for all rules-engine errors."""


class OutOfBounds(TaflError, IndexError):
    """A coordinate outside the 11x11 board was passed in."""


class MoveRejected(TaflError, ValueError):
    """A submitted move was not applied; the game state is unchanged."""


class IllegalMove(MoveRejected):
    """The move violates the movement rules."""


class MutationAfterTerminal(MoveRejected):
    """A move was submitted after the game had already ended."""

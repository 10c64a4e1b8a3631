"""FastAPI web application for playing Hnefatafl against the AI.

FastAPI を使ったハネフタフル対局 API。
描画・通信・タイマーなどは呼び出し側（フロントエンドやP2P層）の責任で、
このモジュールはルールエンジンへの要求／応答の窓口だけを提供する。

エンドポイント:
  POST /api/new-game            — 新規対局を開始（ゲームIDを返す）
  POST /api/move                — 人間の手を適用し、AIの手番ならAIが応答する
  POST /api/auto-move/{id}      — 手番側の手をAIが指す（観戦・ヒント用）
  POST /api/undo/{id}           — 直前の1手を取り消す
  GET  /api/state/{id}          — 現在の局面情報を取得
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from tafl_ai.engine.config import DEFAULT_LEVEL, search_config
from tafl_ai.engine.minimax import minimax_move
from tafl_ai.engine.random_player import random_move
from tafl_ai.game.hnefatafl.display import board_to_str, format_record
from tafl_ai.game.hnefatafl.errors import MoveRejected
from tafl_ai.game.hnefatafl.moves import Move
from tafl_ai.game.hnefatafl.outcome import final_score
from tafl_ai.game.hnefatafl.state import TaflState, new_game, submit_move, undo
from tafl_ai.game.hnefatafl.types import BOARD_SIZE, Side

logger = logging.getLogger(__name__)

app = FastAPI(title="Tafl AI")

# 対局情報のインメモリストレージ（サーバ再起動で消える簡易実装）
_games: dict[str, dict[str, Any]] = {}

# 盤内座標のみ受け付ける（盤外はリクエスト検証の段階で 422）
Coordinate = Annotated[int, Field(ge=0, lt=BOARD_SIZE)]

_SIDES = {"attackers": Side.ATTACKERS, "defenders": Side.DEFENDERS}


class NewGameRequest(BaseModel):
    """新規対局リクエストのスキーマ。"""

    ai_side: str | None = "attackers"  # AI の陣営。None なら人間同士
    ai_type: str = "minimax"  # "minimax" or "random"
    level: str = DEFAULT_LEVEL  # "easy" / "normal" / "hard"


class MoveRequest(BaseModel):
    """指し手リクエストのスキーマ。"""

    game_id: str
    from_pos: tuple[Coordinate, Coordinate]
    to_pos: tuple[Coordinate, Coordinate]


def _get_ai_fn(ai_type: str, level: str) -> Callable[[TaflState], Move | None]:
    """Get the AI move function based on type.

    AI種別に応じた手選択関数を返す。
    """
    if ai_type == "random":
        return lambda state: random_move(state) if state.legal_moves() else None
    if ai_type == "minimax":
        config = search_config(level)
        return lambda state: minimax_move(state, config)
    msg = f"Unknown AI type: {ai_type}"
    raise ValueError(msg)


def _move_to_dict(move: Move) -> dict[str, list[int]]:
    return {"from": list(move.from_pos), "to": list(move.to_pos)}


def _state_to_dict(state: TaflState) -> dict[str, Any]:
    """Convert game state to JSON-serializable dict.

    局面情報を JSON 形式（辞書）に変換する。
    """
    board = [
        [state.piece_at((r, c)).name for c in range(BOARD_SIZE)]
        for r in range(BOARD_SIZE)
    ]
    return {
        "turn": state.turn.name.lower(),
        "move_count": state.move_count,
        "captured_attackers": state.captured_attackers,
        "captured_defenders": state.captured_defenders,
        "active": state.active,
        "winner": state.winner.name.lower() if state.winner is not None else None,
        "score": final_score(state) if state.winner is not None else None,
        "legal_moves": [_move_to_dict(m) for m in state.legal_moves()],
        "history": [format_record(r) for r in state.history],
        "board": board,
        "board_display": board_to_str(state.board),
    }


def _get_game(game_id: str) -> dict[str, Any]:
    game = _games.get(game_id)
    if game is None:
        raise HTTPException(404, "Game not found")
    return game


async def _play_ai(game: dict[str, Any]) -> Move | None:
    """Let the AI play one move for the side to move.

    探索は時間がかかるのでワーカースレッドで実行し、イベントループを塞がない。
    探索中に局面が差し替えられた（別リクエストで手が進んだ・取り消された）場合は
    結果を捨てて 409 を返す。これが探索のキャンセルに相当する。
    """
    state: TaflState = game["state"]
    move = await asyncio.to_thread(game["ai_fn"], state)
    if game["state"] is not state:
        raise HTTPException(409, "Game changed while the AI was thinking")
    if move is None:
        return None  # 合法手なし（パスのルールはないので何もしない）
    game["state"] = state.apply_move(move)
    return move


@app.post("/api/new-game")
async def create_game(req: NewGameRequest) -> dict[str, Any]:
    """新規対局を開始する。

    攻撃側が先手なので、AI が攻撃側ならこの時点で AI が初手を指す。
    """
    ai_side = None
    if req.ai_side is not None:
        if req.ai_side not in _SIDES:
            raise HTTPException(400, f"Unknown side: {req.ai_side}")
        ai_side = _SIDES[req.ai_side]
    try:
        ai_fn = _get_ai_fn(req.ai_type, req.level)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc

    game_id = str(uuid.uuid4())[:8]
    game: dict[str, Any] = {"state": new_game(), "ai_side": ai_side, "ai_fn": ai_fn}
    _games[game_id] = game
    logger.info("New game %s (ai_side=%s, ai_type=%s)", game_id, req.ai_side, req.ai_type)

    ai_move = None
    if ai_side == game["state"].turn:
        ai_move = await _play_ai(game)

    return {
        "game_id": game_id,
        "state": _state_to_dict(game["state"]),
        "ai_move": _move_to_dict(ai_move) if ai_move is not None else None,
    }


@app.post("/api/move")
async def make_move(req: MoveRequest) -> dict[str, Any]:
    """プレイヤーの手を受け取り、AIの手番ならAIが応答して次の局面を返す。"""
    game = _get_game(req.game_id)
    state: TaflState = game["state"]

    if game["ai_side"] is not None and state.turn == game["ai_side"] and state.active:
        raise HTTPException(400, "It is the AI's turn")

    try:
        state = submit_move(state, req.from_pos, req.to_pos)
    except MoveRejected as exc:
        raise HTTPException(400, str(exc)) from exc
    game["state"] = state

    ai_move = None
    if state.active and state.turn == game["ai_side"]:
        ai_move = await _play_ai(game)

    return {
        "state": _state_to_dict(game["state"]),
        "ai_move": _move_to_dict(ai_move) if ai_move is not None else None,
    }


@app.post("/api/auto-move/{game_id}")
async def auto_move(game_id: str) -> dict[str, Any]:
    """手番側の手を AI が1手指す（AI同士の観戦やヒントに使う）。"""
    game = _get_game(game_id)
    if game["state"].is_terminal:
        raise HTTPException(400, "Game is already over")
    moved_by = game["state"].turn
    move = await _play_ai(game)
    return {
        "state": _state_to_dict(game["state"]),
        "move": _move_to_dict(move) if move is not None else None,
        "moved_by": moved_by.name.lower(),
    }


@app.post("/api/undo/{game_id}")
async def undo_move(game_id: str) -> dict[str, Any]:
    """直前の1手を取り消す（手順を初手から再生し直す）。"""
    game = _get_game(game_id)
    try:
        game["state"] = undo(game["state"])
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {"state": _state_to_dict(game["state"])}


@app.get("/api/state/{game_id}")
async def get_state(game_id: str) -> dict[str, Any]:
    """現在の局面情報を取得する。"""
    return _state_to_dict(_get_game(game_id)["state"])


def main() -> None:
    """Run the web server.

    `tafl-web` または `python -m tafl_ai.web.app` で起動する。
    """
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()

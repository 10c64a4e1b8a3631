"""CLI entry point for tafl-ai — Human vs minimax AI.

コマンドラインで動くハネフタフル対局プログラム。

起動方法: `tafl-cli --side defenders --level normal`
"""

from __future__ import annotations

import argparse
import logging

from tafl_ai.engine.config import DEFAULT_LEVEL, SEARCH_LEVELS
from tafl_ai.engine.minimax import minimax_move
from tafl_ai.game.hnefatafl.display import board_to_str, format_record, square_name
from tafl_ai.game.hnefatafl.moves import Move
from tafl_ai.game.hnefatafl.outcome import final_score
from tafl_ai.game.hnefatafl.state import new_game
from tafl_ai.game.hnefatafl.types import Side


def _format_move(move: Move) -> str:
    """例: "d11 -> d9" """
    return f"{square_name(move.from_pos)} -> {square_name(move.to_pos)}"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Hnefatafl against the minimax AI.")
    parser.add_argument(
        "--side",
        choices=[s.name.lower() for s in Side],
        default="defenders",
        help="Side played by the human (attackers move first).",
    )
    parser.add_argument("--level", choices=sorted(SEARCH_LEVELS), default=DEFAULT_LEVEL)
    parser.add_argument("--verbose", action="store_true", help="Log search details.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run a Human vs AI game.

    ゲームの流れ:
    1. 盤面を表示
    2. 人間の番なら合法手一覧を表示して番号入力を求める
    3. AI の番なら探索して応答する
    4. 終局まで繰り返す
    """
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    human = Side[args.side.upper()]
    config = SEARCH_LEVELS[args.level]

    print("=== Hnefatafl ===")
    print(f"You are {human.name}. K=king D=defender A/a=attacker +=throne/corner")
    print()

    state = new_game()

    while state.active:
        print(board_to_str(state.board))
        print(
            f"Move {state.move_count + 1}: {state.turn.name} to play "
            f"(captured: attackers {state.captured_attackers}, "
            f"defenders {state.captured_defenders})"
        )
        print()

        moves = state.legal_moves()
        if not moves:
            # 手詰まりのルールはないので、ここで対局を打ち切る
            print(f"{state.turn.name} has no legal moves. Game stopped.")
            return

        if state.turn == human:
            print("Legal moves:")
            for i, m in enumerate(moves):
                print(f"  {i}: {_format_move(m)}")
            print()

            while True:
                try:
                    choice = input("Your move (number): ")
                    idx = int(choice)
                    if 0 <= idx < len(moves):
                        state = state.apply_move(moves[idx])
                        break
                    print(f"Invalid: choose 0-{len(moves) - 1}")
                except ValueError:
                    print("Enter a number.")
                except (EOFError, KeyboardInterrupt):
                    print("\nGame aborted.")
                    return
        else:
            print("AI is thinking...")
            move = minimax_move(state, config)
            if move is None:
                print("AI has no move. Game stopped.")
                return
            state = state.apply_move(move)
            print(f"AI plays: {format_record(state.history[-1])} ({_format_move(move)})")

        print()

    # 終局: 結果を表示
    print(board_to_str(state.board))
    print()
    if state.winner == Side.DEFENDERS:
        print("The King has escaped to safety!")
    else:
        print("The King has been captured!")
    print("You win!" if state.winner == human else "AI wins!")
    print(f"Score: {final_score(state)}")


if __name__ == "__main__":
    main()

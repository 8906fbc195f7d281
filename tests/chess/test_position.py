"""Unit tests for /src/chess/position.py"""

import chess
import pytest

from src.chess.moves import Move
from src.chess.position import (
    apply,
    initial_position,
    is_legal,
    legal_moves,
    project_position,
    side_to_move,
)
from src.core.exceptions import ChainConsistencyError
from src.core.shared_types import Color

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def moves(*ucis: str) -> list[Move]:
    return [Move.from_uci(uci) for uci in ucis]


def test_initial_position() -> None:
    position = initial_position()
    assert position.fen() == STARTING_FEN
    assert side_to_move(position) == Color.WHITE
    assert len(legal_moves(position)) == 20


def test_apply_leaves_input_untouched() -> None:
    position = initial_position()
    after = apply(position, Move.from_uci("e2e4"))
    assert position.fen() == STARTING_FEN
    assert side_to_move(after) == Color.BLACK
    assert after.piece_at(chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)


def test_apply_illegal_move() -> None:
    with pytest.raises(ChainConsistencyError):
        apply(initial_position(), Move.from_uci("e2e5"))


@pytest.mark.parametrize(
    "uci, expected", [("e2e4", True), ("g1f3", True), ("e2e5", False), ("e7e5", False)]
)
def test_is_legal(uci: str, expected: bool) -> None:
    assert is_legal(initial_position(), Move.from_uci(uci)) is expected


def test_project_position_replays_in_order() -> None:
    position = project_position(moves("e2e4", "e7e5", "g1f3", "b8c6"))
    assert position.fen() == "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"


def test_project_position_with_castling() -> None:
    position = project_position(moves("e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6", "e1g1"))
    assert position.piece_at(chess.G1) == chess.Piece(chess.KING, chess.WHITE)
    assert position.piece_at(chess.F1) == chess.Piece(chess.ROOK, chess.WHITE)


def test_project_position_stops_at_illegal_move() -> None:
    with pytest.raises(ChainConsistencyError):
        project_position(moves("e2e4", "e2e4"))


def test_promotions_collapse_into_one_move() -> None:
    position = chess.Board("8/P7/8/8/8/8/8/k6K w - - 0 1")
    promotion = Move.from_uci("a7a8")
    assert legal_moves(position).count(promotion) == 1
    after = apply(position, promotion)
    assert after.piece_at(chess.A8) == chess.Piece(chess.QUEEN, chess.WHITE)


def test_project_from_custom_start() -> None:
    start = chess.Board("8/P7/8/8/8/8/8/k6K w - - 0 1")
    position = project_position(moves("a7a8"), start=start)
    assert side_to_move(position) == Color.BLACK
    assert start.piece_at(chess.A7) == chess.Piece(chess.PAWN, chess.WHITE)

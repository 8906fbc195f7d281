"""
Rules oracle.

Thin layer over python-chess: the chain only needs to know which moves are legal in a position and
how a position changes after a move. Positions are plain chess.Board objects and are never mutated in place.
"""

from typing import Iterable, Optional

import chess

from src.chess.moves import Move
from src.core.exceptions import ChainConsistencyError
from src.core.shared_types import Color

Position = chess.Board


def initial_position() -> Position:
    return chess.Board()


def side_to_move(position: Position) -> Color:
    return Color.WHITE if position.turn == chess.WHITE else Color.BLACK


def legal_moves(position: Position) -> list[Move]:
    """
    Legal moves, one entry per (from, to) pair.
    ----

    python-chess lists a promoting pawn push once per promotion piece. A move record cannot tell those apart,
    so they collapse into a single Move.
    """
    moves: list[Move] = []
    for candidate in position.legal_moves:
        move = Move.from_chess_move(candidate)
        if move not in moves:
            moves.append(move)
    return moves


def is_legal(position: Position, move: Move) -> bool:
    return _resolve(position, move) is not None


def apply(position: Position, move: Move) -> Position:
    """Return the position after the move. The given position is left untouched."""
    resolved = _resolve(position, move)
    if resolved is None:
        raise ChainConsistencyError(
            f"Move {move.to_uci()} is not legal in position {position.fen()!r}."
        )
    new_position = position.copy(stack=False)
    new_position.push(resolved)
    return new_position


def project_position(
    moves: Iterable[Move], start: Optional[Position] = None
) -> Position:
    """Replay moves one by one, starting from the initial position (or the given start)."""
    position = start.copy(stack=False) if start is not None else initial_position()
    for move in moves:
        position = apply(position, move)
    return position


def _resolve(position: Position, move: Move) -> Optional[chess.Move]:
    """Find the legal python-chess move with the same squares. A promotion resolves to the queen."""
    candidates = [m for m in position.legal_moves if move.matches(m)]
    if not candidates:
        return None
    for candidate in candidates:
        if candidate.promotion in (None, chess.QUEEN):
            return candidate
    return candidates[0]

"""
A move as the chain records it: just the square the piece leaves and the square it lands on.

There is no room for a promotion piece in a move record, so a pawn reaching the last rank always becomes a queen.
"""

from dataclasses import dataclass
from typing import Self

import chess

from src.chess.square import Square
from src.core.exceptions import UnsupportedActionError

COORDINATES_SIZE = 2


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)

        Promotion to anything other than a queen cannot be recorded.
        """
        if len(uci) not in (4, 5):
            raise ValueError(f"Cannot interpret {uci!r} as a UCI move.")
        if len(uci) == 5 and uci[4].lower() != "q":
            raise UnsupportedActionError(
                f"Under-promotion ({uci!r}) cannot be stored in a move record. Only queen promotions are supported."
            )
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:4]))

    def to_uci(self) -> str:
        """Convert into UCI notation (without promotion suffix)"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @classmethod
    def from_coordinates(cls, start: int, end: int) -> Self:
        return cls(Square.from_index(start), Square.from_index(end))

    def coordinates(self) -> bytes:
        """The two bytes a move record signs: start square index, end square index."""
        return bytes([self.from_square.to_index(), self.to_square.to_index()])

    @classmethod
    def from_chess_move(cls, move: chess.Move) -> Self:
        return cls.from_coordinates(move.from_square, move.to_square)

    def matches(self, move: chess.Move) -> bool:
        return (
            move.from_square == self.from_square.to_index()
            and move.to_square == self.to_square.to_index()
        )

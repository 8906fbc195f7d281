"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Move records store a square in a single byte: 0 (a1) to 63 (h8)
BOARD_DIMENSIONS = (8, 8)
NUMBER_OF_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        if len(sq) != 2:
            raise ValueError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0].lower()) - ord("a") + 1
        rank = int(sq[1])
        square = cls(file, rank)
        if not square.is_within_bounds():
            raise ValueError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    @classmethod
    def from_index(cls, index: int) -> Square:
        """Rank-major index as used on the wire: a1=0, b1=1, ..., a2=8, ..., h8=63"""
        if not 0 <= index < NUMBER_OF_SQUARES:
            raise ValueError(f"Square index {index} outside of 0-{NUMBER_OF_SQUARES - 1}.")
        rank, file = divmod(index, BOARD_DIMENSIONS[0])
        return cls(file + 1, rank + 1)

    def to_index(self) -> int:
        return (self.rank - 1) * BOARD_DIMENSIONS[0] + (self.file - 1)

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )

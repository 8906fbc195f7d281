"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import BOARD_DIMENSIONS, NUMBER_OF_SQUARES, Square


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file - 1]}{rank}")
        for file in range(1, 9)
        for rank in range(1, 9)
    ],
)
def test_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 1, rank 1, etc. And back."""
    square = Square.from_algebraic(notation)
    assert square == Square(file, rank)
    assert square.to_algebraic() == notation


@pytest.mark.parametrize(
    "notation, index",
    [("a1", 0), ("h1", 7), ("a2", 8), ("e2", 12), ("e4", 28), ("a8", 56), ("h8", 63)],
)
def test_index(notation: str, index: int) -> None:
    """Move records use one byte per square, counting along the ranks from a1."""
    square = Square.from_algebraic(notation)
    assert square.to_index() == index
    assert Square.from_index(index) == square


def test_every_index_maps_to_a_square_on_the_board() -> None:
    squares = {Square.from_index(index) for index in range(NUMBER_OF_SQUARES)}
    assert len(squares) == NUMBER_OF_SQUARES
    assert all(square.is_within_bounds() for square in squares)


@pytest.mark.parametrize("index", [-1, 64, 255])
def test_index_out_of_range(index: int) -> None:
    with pytest.raises(ValueError):
        Square.from_index(index)


@pytest.mark.parametrize("notation", ["i1", "a9", "a0", "e", "e22"])
def test_invalid_algebraic(notation: str) -> None:
    with pytest.raises(ValueError):
        Square.from_algebraic(notation)


def test_square_out_of_bounds() -> None:
    square = Square(BOARD_DIMENSIONS[0] + 1, BOARD_DIMENSIONS[1] + 1)
    assert not square.is_within_bounds()

    square = Square(-1, -1)
    assert not square.is_within_bounds()

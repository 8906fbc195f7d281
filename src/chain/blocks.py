"""
The three block types a game chain is made of, and their fixed-size byte layouts.

All integers are big-endian. None of the blocks carry a length or type tag: a reader knows what comes next
only from its position in the chain.

* ChallengeBlock: 82 bytes  version(1) network_id(1) id(4) white key(32) black key(32) paired game id(4) timestamp(8)
* AcceptBlock:    64 bytes  signature over the challenge bytes
* MoveBlock:      66 bytes  start square(1) end square(1) signature(64)
"""

import struct
from dataclasses import dataclass
from typing import Self

from nacl.signing import SigningKey

from src.chess.moves import COORDINATES_SIZE, Move
from src.chess.square import NUMBER_OF_SQUARES
from src.core.exceptions import BlockFormatError, TruncatedInputError
from src.crypto.signing import PUBLIC_KEY_SIZE, SIGNATURE_SIZE, sign, verify

CHALLENGE_LAYOUT = struct.Struct(">BBI32s32sIQ")
CHALLENGE_SIZE = CHALLENGE_LAYOUT.size
ACCEPT_SIZE = SIGNATURE_SIZE
MOVE_SIZE = COORDINATES_SIZE + SIGNATURE_SIZE

# (field name, number of bits) for every integer field of the challenge
_CHALLENGE_INT_FIELDS = (
    ("version", 8),
    ("network_id", 8),
    ("game_id", 32),
    ("paired_game_id", 32),
    ("timestamp", 64),
)


def _require(data: bytes, size: int, block_name: str) -> None:
    if len(data) < size:
        raise TruncatedInputError(
            f"{block_name} needs {size} bytes, only {len(data)} available."
        )


def _check_signature(signature: bytes, block_name: str) -> None:
    if len(signature) != SIGNATURE_SIZE:
        raise BlockFormatError(
            f"{block_name} signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}."
        )


@dataclass(frozen=True)
class ChallengeBlock:
    """Genesis block: names the two players (by public key) and the game metadata."""

    version: int
    network_id: int
    game_id: int
    white_public_key: bytes
    black_public_key: bytes
    paired_game_id: int
    timestamp: int

    def __post_init__(self) -> None:
        for name in ("white_public_key", "black_public_key"):
            key = getattr(self, name)
            if len(key) != PUBLIC_KEY_SIZE:
                raise BlockFormatError(
                    f"{name} must be {PUBLIC_KEY_SIZE} bytes, got {len(key)}."
                )
        for name, bits in _CHALLENGE_INT_FIELDS:
            value = getattr(self, name)
            if not 0 <= value < 2**bits:
                raise BlockFormatError(f"{name}={value} does not fit in {bits} bits.")

    @classmethod
    def new(
        cls,
        white_public_key: bytes,
        black_public_key: bytes,
        *,
        version: int = 0,
        network_id: int = 0,
        game_id: int = 0,
        paired_game_id: int = 0,
        timestamp: int = 0,
    ) -> Self:
        """
        Start a new game between the owners of the two keys.

        NOTE: id and timestamp are not generated here. Callers that need them pass them in.
        """
        return cls(
            version=version,
            network_id=network_id,
            game_id=game_id,
            white_public_key=bytes(white_public_key),
            black_public_key=bytes(black_public_key),
            paired_game_id=paired_game_id,
            timestamp=timestamp,
        )

    def encode(self) -> bytes:
        return CHALLENGE_LAYOUT.pack(
            self.version,
            self.network_id,
            self.game_id,
            self.white_public_key,
            self.black_public_key,
            self.paired_game_id,
            self.timestamp,
        )

    @classmethod
    def decode(cls, data: bytes) -> Self:
        """Read the challenge from the first 82 bytes. Anything after that is ignored."""
        _require(data, CHALLENGE_SIZE, "ChallengeBlock")
        (
            version,
            network_id,
            game_id,
            white_public_key,
            black_public_key,
            paired_game_id,
            timestamp,
        ) = CHALLENGE_LAYOUT.unpack_from(data)
        return cls(
            version=version,
            network_id=network_id,
            game_id=game_id,
            white_public_key=white_public_key,
            black_public_key=black_public_key,
            paired_game_id=paired_game_id,
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class AcceptBlock:
    """A player's detached signature over the challenge bytes. Does not say which player signed."""

    signature: bytes

    def __post_init__(self) -> None:
        _check_signature(self.signature, "AcceptBlock")

    @classmethod
    def new(cls, challenge: ChallengeBlock, signing_key: SigningKey) -> Self:
        return cls(sign(signing_key, challenge.encode()))

    def verifies(self, challenge: ChallengeBlock, public_key: bytes) -> bool:
        return verify(public_key, challenge.encode(), self.signature)

    def encode(self) -> bytes:
        return self.signature

    @classmethod
    def decode(cls, data: bytes) -> Self:
        _require(data, ACCEPT_SIZE, "AcceptBlock")
        return cls(bytes(data[:ACCEPT_SIZE]))


@dataclass(frozen=True)
class MoveBlock:
    """
    One half-move.
    ----

    The signature covers every byte of the chain before this block, followed by the two square bytes of this move.
    Changing anything earlier in the chain therefore invalidates this signature and all that follow.
    """

    start_square: int
    end_square: int
    signature: bytes

    def __post_init__(self) -> None:
        for name in ("start_square", "end_square"):
            value = getattr(self, name)
            if not 0 <= value < NUMBER_OF_SQUARES:
                raise BlockFormatError(
                    f"{name}={value} outside of 0-{NUMBER_OF_SQUARES - 1}."
                )
        _check_signature(self.signature, "MoveBlock")

    @classmethod
    def new(cls, move: Move, preceding: bytes, signing_key: SigningKey) -> Self:
        """Sign the move on top of the given chain bytes."""
        coordinates = move.coordinates()
        return cls(
            start_square=coordinates[0],
            end_square=coordinates[1],
            signature=sign(signing_key, preceding + coordinates),
        )

    @property
    def move(self) -> Move:
        return Move.from_coordinates(self.start_square, self.end_square)

    def coordinates(self) -> bytes:
        return bytes([self.start_square, self.end_square])

    def signed_payload(self, preceding: bytes) -> bytes:
        return preceding + self.coordinates()

    def verifies(self, preceding: bytes, public_key: bytes) -> bool:
        return verify(public_key, self.signed_payload(preceding), self.signature)

    def encode(self) -> bytes:
        return self.coordinates() + self.signature

    @classmethod
    def decode(cls, data: bytes) -> Self:
        _require(data, MOVE_SIZE, "MoveBlock")
        return cls(
            start_square=data[0],
            end_square=data[1],
            signature=bytes(data[COORDINATES_SIZE:MOVE_SIZE]),
        )

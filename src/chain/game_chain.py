"""
The GameChain is the entrypoint into the ledger.
It owns the challenge, the two accept slots and the move blocks, and enforces who may add what and when:

* both players accept the challenge (in any order),
* then White and Black take turns appending moves, each signed over everything before it.

Any observer holding the encoded bytes can rebuild the chain with GameChain.decode() and check it with verify().
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from nacl.signing import SigningKey

from src.chain.blocks import (
    ACCEPT_SIZE,
    CHALLENGE_SIZE,
    MOVE_SIZE,
    AcceptBlock,
    ChallengeBlock,
    MoveBlock,
)
from src.chess import position as oracle
from src.chess.moves import Move
from src.core.exceptions import (
    ChainFullError,
    DuplicateKeyError,
    IllegalMoveError,
    KeyNotInChallengeError,
    TruncatedInputError,
    UnsupportedActionError,
    WrongSignerError,
)
from src.core.models import ChainModel
from src.core.shared_types import AcceptState, Color, VerifyFailure
from src.crypto.signing import public_key_bytes

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of GameChain.audit(). Truthy only when the whole chain checks out."""

    ok: bool
    failure: Optional[VerifyFailure] = None
    move_index: Optional[int] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class GameChain:
    challenge: ChallengeBlock
    accepts: list[Optional[AcceptBlock]] = field(default_factory=lambda: [None, None])
    moves: list[MoveBlock] = field(default_factory=list)
    # (number of moves, board after those moves). Stale as soon as a move is appended.
    _projection: Optional[tuple[int, oracle.Position]] = field(
        default=None, init=False, repr=False, compare=False
    )

    # --- CONSTRUCTION ---
    @classmethod
    def new(cls, challenge: ChallengeBlock) -> Self:
        """A fresh chain: no accepts, no moves."""
        return cls(challenge)

    @property
    def accept_state(self) -> AcceptState:
        filled = sum(accept is not None for accept in self.accepts)
        return (
            AcceptState.NO_ACCEPTS,
            AcceptState.ONE_ACCEPT,
            AcceptState.TWO_ACCEPTS,
        )[filled]

    def color_of(self, public_key: bytes) -> Optional[Color]:
        """Which color the key plays, if any. White wins if both challenge keys are the same."""
        if public_key == self.challenge.white_public_key:
            return Color.WHITE
        if public_key == self.challenge.black_public_key:
            return Color.BLACK
        return None

    def public_key_of(self, color: Color) -> bytes:
        return (
            self.challenge.white_public_key
            if color == Color.WHITE
            else self.challenge.black_public_key
        )

    # --- ACCEPT PROTOCOL ---
    def accept(self, signing_key: SigningKey) -> AcceptBlock:
        """
        Join the game by signing the challenge.
        ----

        1. Only the two players named in the challenge can accept.
        2. A lone accept always sits in the first slot.
        3. A key that already signed the accept in the first slot cannot accept again.
        4. No room after two accepts.
        """
        public_key = public_key_bytes(signing_key)
        if self.color_of(public_key) is None:
            raise KeyNotInChallengeError(
                f"Key {public_key.hex()} is not one of the players in this challenge."
            )

        if self.accepts[0] is None and self.accepts[1] is not None:
            self.accepts[0], self.accepts[1] = self.accepts[1], None

        if self.accepts[0] is None:
            slot = 0
        elif self.accepts[1] is None:
            if self.accepts[0].verifies(self.challenge, public_key):
                raise DuplicateKeyError(
                    f"Key {public_key.hex()} already accepted this challenge."
                )
            slot = 1
        else:
            raise ChainFullError("Both players already accepted this challenge.")

        accept_block = AcceptBlock.new(self.challenge, signing_key)
        self.accepts[slot] = accept_block
        log.debug("Accept stored in slot %d for key %s", slot, public_key.hex())
        return accept_block

    # --- MOVE PROTOCOL ---
    def active_color(self) -> Color:
        """White moves when an even number of moves has been played."""
        return Color.WHITE if len(self.moves) % 2 == 0 else Color.BLACK

    def append_move(self, signing_key: SigningKey, move: Move) -> MoveBlock:
        """
        Sign and append a move
        -----

        1. Both players must have accepted.
        2. The key must belong to the color whose turn it is.
        3. The move must be legal in the current position.
        4. Sign (all chain bytes so far ++ the two square bytes) and store the block.
        """
        if self.accept_state != AcceptState.TWO_ACCEPTS:
            raise UnsupportedActionError(
                f"Cannot move before both players accepted. Current state: {self.accept_state}"
            )

        position = self.project_position()

        color = self.active_color()
        public_key = public_key_bytes(signing_key)
        if public_key != self.public_key_of(color):
            raise WrongSignerError(f"It is {color}'s turn. This key cannot sign the move.")

        if not oracle.is_legal(position, move):
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

        move_block = MoveBlock.new(move, self.encode(), signing_key)
        self.moves.append(move_block)
        self._projection = (len(self.moves), oracle.apply(position, move))
        log.debug("Move %d (%s) signed by %s", len(self.moves), move.to_uci(), color)
        return move_block

    # --- POSITION PROJECTION ---
    def project_position(self) -> oracle.Position:
        """
        Board after replaying every stored move from the initial position.

        Raises ChainConsistencyError if a stored move is not legal when its turn comes
        (only possible for a chain that does not verify, or one whose signer signed nonsense).
        """
        if self._projection is None or self._projection[0] != len(self.moves):
            replayed = oracle.project_position(block.move for block in self.moves)
            self._projection = (len(self.moves), replayed)
        return self._projection[1].copy(stack=False)

    def side_to_move(self) -> Color:
        return oracle.side_to_move(self.project_position())

    def legal_moves(self) -> list[Move]:
        return oracle.legal_moves(self.project_position())

    def moves_uci(self) -> list[str]:
        return [block.move.to_uci() for block in self.moves]

    # --- VERIFICATION ---
    def verify(self) -> bool:
        """Pass/fail check of the whole chain. Use audit() to find out why it failed."""
        return self.audit().ok

    def audit(self) -> VerificationResult:
        """
        Replay the chain and check every signature
        ----

        1. Both accept slots must be filled.
        2. The accepts must be signed by the two players, in either order (slots are not tagged with a color).
        3. Move i must be signed by White when i is even and by Black when i is odd,
           over the chain bytes before move i plus its own squares.
        """
        first, second = self.accepts
        if first is None or second is None:
            return self._failed(VerifyFailure.MISSING_ACCEPT)

        white = self.challenge.white_public_key
        black = self.challenge.black_public_key
        white_then_black = first.verifies(self.challenge, white) and second.verifies(
            self.challenge, black
        )
        black_then_white = first.verifies(self.challenge, black) and second.verifies(
            self.challenge, white
        )
        if not (white_then_black or black_then_white):
            return self._failed(VerifyFailure.BAD_ACCEPT)

        preceding = self.challenge.encode() + first.encode() + second.encode()
        mover, waiting = white, black
        for index, block in enumerate(self.moves):
            if not block.verifies(preceding, mover):
                return self._failed(VerifyFailure.BAD_MOVE_SIGNATURE, index)
            preceding += block.encode()
            mover, waiting = waiting, mover

        return VerificationResult(ok=True)

    def _failed(
        self, failure: VerifyFailure, move_index: Optional[int] = None
    ) -> VerificationResult:
        log.info("Chain failed verification: %s (move index %s)", failure, move_index)
        return VerificationResult(ok=False, failure=failure, move_index=move_index)

    # --- SERIALIZATION ---
    def encode(self) -> bytes:
        """
        challenge ++ accept0 ++ accept1 ++ move0 ++ move1 ...

        Stops at the first missing part: no second accept without a first one, no moves without both accepts.
        """
        parts = [self.challenge.encode()]
        for accept_block in self.accepts:
            if accept_block is None:
                return b"".join(parts)
            parts.append(accept_block.encode())
        parts.extend(block.encode() for block in self.moves)
        return b"".join(parts)

    @classmethod
    def decode(cls, data: bytes) -> Self:
        """
        Inverse of encode()
        ----

        * the challenge must be complete,
        * accepts are read while a full 64 bytes are left (at most two), a short tail is not an error,
        * after two accepts the rest must be a whole number of 66-byte move records.
        """
        challenge = ChallengeBlock.decode(data)
        chain = cls(challenge)
        offset = CHALLENGE_SIZE

        for slot in range(2):
            if len(data) - offset < ACCEPT_SIZE:
                return chain
            chain.accepts[slot] = AcceptBlock.decode(data[offset:])
            offset += ACCEPT_SIZE

        remainder = len(data) - offset
        if remainder % MOVE_SIZE:
            raise TruncatedInputError(
                f"Trailing {remainder % MOVE_SIZE} bytes do not form a complete {MOVE_SIZE}-byte move record."
            )
        while offset < len(data):
            chain.moves.append(MoveBlock.decode(data[offset : offset + MOVE_SIZE]))
            offset += MOVE_SIZE
        return chain

    def to_hex(self) -> str:
        return self.encode().hex()

    @classmethod
    def from_hex(cls, encoded: str) -> Self:
        return cls.decode(bytes.fromhex(encoded))

    # --- BOUNDARY MODEL ---
    def to_model(self) -> ChainModel:
        """Summary used by the Service layer"""
        return ChainModel(
            version=self.challenge.version,
            network_id=self.challenge.network_id,
            game_id=self.challenge.game_id,
            white_public_key=self.challenge.white_public_key.hex(),
            black_public_key=self.challenge.black_public_key.hex(),
            paired_game_id=self.challenge.paired_game_id,
            timestamp=self.challenge.timestamp,
            accepts=sum(accept is not None for accept in self.accepts),
            moves_uci=self.moves_uci(),
        )

"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, VerifyFailure
from src.crypto.signing import PUBLIC_KEY_SIZE

HexString = str
MoveUCI = str

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


def _parse_hex(value: str, field_name: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise InvalidRequestError(
            f"Cannot interpret {field_name}: {value!r} as hexadecimal bytes."
        ) from None


# --- REQUEST MODELS ---
class CreateChallengeRequest(BaseModel):
    white_public_key: HexString
    black_public_key: HexString
    game_id: int = 0
    paired_game_id: int = 0
    timestamp: int = 0

    @field_validator(*["white_public_key", "black_public_key"])
    @classmethod
    def validate_public_key(cls, value: str) -> str:
        key = _parse_hex(value, "public key")
        if len(key) != PUBLIC_KEY_SIZE:
            raise InvalidRequestError(
                f"A public key must be {PUBLIC_KEY_SIZE} bytes, got {len(key)}."
            )
        return key.hex()

    @field_validator(*["game_id", "paired_game_id"])
    @classmethod
    def validate_u32(cls, value: int) -> int:
        if not 0 <= value <= U32_MAX:
            raise InvalidRequestError(f"{value} does not fit in an unsigned 32-bit integer.")
        return value

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, value: int) -> int:
        if not 0 <= value <= U64_MAX:
            raise InvalidRequestError(f"{value} does not fit in an unsigned 64-bit integer.")
        return value


class ChainRequest(BaseModel):
    encoded_chain: HexString

    @field_validator("encoded_chain")
    @classmethod
    def validate_encoded_chain(cls, value: str) -> str:
        return _parse_hex(value.strip(), "encoded_chain").hex()


# --- RESPONSE MODELS ---
class ChallengeSummary(BaseModel):
    version: int
    network_id: int
    game_id: int
    white_public_key: HexString
    black_public_key: HexString
    paired_game_id: int
    timestamp: int


class ChallengeResponse(BaseModel):
    encoded_chain: HexString
    challenge: ChallengeSummary


class ChainReportResponse(BaseModel):
    valid: bool
    failure: Optional[VerifyFailure]
    failed_move_index: Optional[int]
    challenge: ChallengeSummary
    accepts: int
    moves_uci: list[MoveUCI]
    fen: Optional[str]
    side_to_move: Optional[Color]


class LegalMovesResponse(BaseModel):
    color: Color
    legal_moves: list[MoveUCI]

"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import pytest
from nacl.signing import SigningKey

from src.chain.blocks import ChallengeBlock
from src.chain.game_chain import GameChain
from src.chess.moves import Move
from src.crypto.signing import public_key_bytes, signing_key_from_seed

# Fixed seeds so failures are reproducible
WHITE_SEED = bytes([1]) * 32
BLACK_SEED = bytes([2]) * 32
OUTSIDER_SEED = bytes([3]) * 32


@pytest.fixture
def white_key() -> SigningKey:
    return signing_key_from_seed(WHITE_SEED)


@pytest.fixture
def black_key() -> SigningKey:
    return signing_key_from_seed(BLACK_SEED)


@pytest.fixture
def outsider_key() -> SigningKey:
    """Key that is not part of the challenge."""
    return signing_key_from_seed(OUTSIDER_SEED)


@pytest.fixture
def challenge(white_key: SigningKey, black_key: SigningKey) -> ChallengeBlock:
    return ChallengeBlock.new(public_key_bytes(white_key), public_key_bytes(black_key))


@pytest.fixture
def new_chain(challenge: ChallengeBlock) -> GameChain:
    """Chain without accepts."""
    return GameChain.new(challenge)


@pytest.fixture
def accepted_chain(
    new_chain: GameChain, white_key: SigningKey, black_key: SigningKey
) -> GameChain:
    """Both players joined, no moves yet."""
    new_chain.accept(white_key)
    new_chain.accept(black_key)
    return new_chain


@pytest.fixture
def opened_chain(
    accepted_chain: GameChain, white_key: SigningKey, black_key: SigningKey
) -> GameChain:
    """1. e4 e5 2. Nf3"""
    accepted_chain.append_move(white_key, Move.from_uci("e2e4"))
    accepted_chain.append_move(black_key, Move.from_uci("e7e5"))
    accepted_chain.append_move(white_key, Move.from_uci("g1f3"))
    return accepted_chain

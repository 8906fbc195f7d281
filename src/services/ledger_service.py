"""Orchestration for observers of a game: they only ever hold the encoded chain bytes."""

import logging

from src.api.models import (
    ChainReportResponse,
    ChainRequest,
    ChallengeResponse,
    ChallengeSummary,
    CreateChallengeRequest,
    LegalMovesResponse,
)
from src.chain.blocks import ChallengeBlock
from src.chain.game_chain import GameChain
from src.core.config import SETTINGS, Settings
from src.core.exceptions import ChainConsistencyError, ChainVerificationError
from src.core.models import ChainModel

log = logging.getLogger(__name__)


class LedgerService:
    """Turns requests into chain operations and chains into responses."""

    def __init__(self, settings: Settings = SETTINGS) -> None:
        self.settings = settings

    # -- Entry points --
    def create_challenge(self, request: CreateChallengeRequest) -> ChallengeResponse:
        """Build the genesis block for two players. Version and network come from the settings."""
        challenge = ChallengeBlock.new(
            bytes.fromhex(request.white_public_key),
            bytes.fromhex(request.black_public_key),
            version=self.settings.protocol_version,
            network_id=self.settings.network_id,
            game_id=request.game_id,
            paired_game_id=request.paired_game_id,
            timestamp=request.timestamp,
        )
        chain = GameChain.new(challenge)
        return ChallengeResponse(
            encoded_chain=chain.to_hex(),
            challenge=self._challenge_summary(chain.to_model()),
        )

    def inspect_chain(self, request: ChainRequest) -> ChainReportResponse:
        """
        Verify a chain received from someone else and describe it.
        ----
        The position is only reported for a chain that verifies.
        """
        chain = GameChain.from_hex(request.encoded_chain)
        result = chain.audit()
        model = chain.to_model()

        fen = None
        side_to_move = None
        if result.ok:
            try:
                position = chain.project_position()
            except ChainConsistencyError:
                log.warning("Verified chain contains a move that does not replay: %s", model.moves_uci)
                raise
            fen = position.fen()
            side_to_move = chain.side_to_move()

        return ChainReportResponse(
            valid=result.ok,
            failure=result.failure,
            failed_move_index=result.move_index,
            challenge=self._challenge_summary(model),
            accepts=model.accepts,
            moves_uci=model.moves_uci,
            fen=fen,
            side_to_move=side_to_move,
        )

    def legal_moves(self, request: ChainRequest) -> LegalMovesResponse:
        """Moves the player to move could append next."""
        chain = self._verified_chain(request.encoded_chain)
        return LegalMovesResponse(
            color=chain.active_color(),
            legal_moves=[move.to_uci() for move in chain.legal_moves()],
        )

    # -- Internal helpers --
    def _verified_chain(self, encoded_chain: str) -> GameChain:
        """Decode the chain and raise error if it does not verify."""
        chain = GameChain.from_hex(encoded_chain)
        result = chain.audit()
        if not result.ok:
            raise ChainVerificationError(
                f"Chain does not verify: {result.failure} (move index {result.move_index})."
            )
        return chain

    def _challenge_summary(self, model: ChainModel) -> ChallengeSummary:
        return ChallengeSummary(
            version=model.version,
            network_id=model.network_id,
            game_id=model.game_id,
            white_public_key=model.white_public_key,
            black_public_key=model.black_public_key,
            paired_game_id=model.paired_game_id,
            timestamp=model.timestamp,
        )

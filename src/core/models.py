"""
Boundary layer data model(s).

A chain is bytes on the wire. The Service needs a readable summary of it to build responses,
so the chain layer converts itself into the model defined here
(decouples the block/byte representation from whatever the API layer wants to show).
"""

from dataclasses import dataclass

# Type aliases to make ChainModel easier to read
HexString = str
MoveUCI = str


@dataclass
class ChainModel:
    """Transport-safe summary of a GameChain."""

    version: int
    network_id: int
    game_id: int
    white_public_key: HexString
    black_public_key: HexString
    paired_game_id: int
    timestamp: int
    accepts: int
    moves_uci: list[MoveUCI]

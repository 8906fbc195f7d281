"""
Errors raised across layers.

Everything derives from LedgerError so a caller can reject a chain with a single except clause.
"""


class LedgerError(Exception):
    """Base class for all errors raised by this package."""


# --- ACCEPT PROTOCOL ---
class AcceptError(LedgerError):
    """A player could not join the game."""


class KeyNotInChallengeError(AcceptError):
    """The signing key belongs to neither player named in the challenge."""


class DuplicateKeyError(AcceptError):
    """This key already accepted the challenge."""


class ChainFullError(AcceptError):
    """Both accept slots are already filled."""


# --- MOVE PROTOCOL ---
class MoveError(LedgerError):
    """A move could not be appended to the chain."""


class WrongSignerError(MoveError):
    """The key does not belong to the color whose turn it is."""


class IllegalMoveError(MoveError):
    """The move is not legal in the current position."""


class UnsupportedActionError(MoveError):
    """The action cannot be expressed on this chain (yet)."""


# --- DECODING ---
class DecodeError(LedgerError):
    """Bytes could not be turned into blocks."""


class TruncatedInputError(DecodeError):
    """Fewer bytes than the fixed size of the block being read."""


class BlockFormatError(DecodeError):
    """A block field holds a value outside of its allowed range."""


# --- CHAIN STATE ---
class ChainConsistencyError(LedgerError):
    """A stored move does not replay as a legal move. Only happens on chains that fail verification."""


class ChainVerificationError(LedgerError):
    """The chain does not verify, so it cannot be used."""


# --- BOUNDARY ---
class InvalidRequestError(LedgerError):
    """Request data rejected by the request model validators."""

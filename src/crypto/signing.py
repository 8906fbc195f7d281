"""
Signature capability (Ed25519 through PyNaCl).

Public keys are 32 bytes, signatures 64 bytes. Signatures are detached: the message is never stored with them.
"""

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64
SEED_SIZE = 32


def generate_key() -> SigningKey:
    """New key pair from the libsodium CSPRNG."""
    return SigningKey.generate()


def signing_key_from_seed(seed: bytes) -> SigningKey:
    """Deterministic key pair, e.g. for key material that is stored elsewhere."""
    if len(seed) != SEED_SIZE:
        raise ValueError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}.")
    return SigningKey(seed)


def public_key_bytes(key: SigningKey) -> bytes:
    return bytes(key.verify_key)


def sign(key: SigningKey, message: bytes) -> bytes:
    return key.sign(message).signature


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """True if the signature over message was made by the owner of public_key. Never raises."""
    if len(public_key) != PUBLIC_KEY_SIZE or len(signature) != SIGNATURE_SIZE:
        return False
    try:
        VerifyKey(public_key).verify(message, signature)
    except BadSignatureError:
        return False
    return True

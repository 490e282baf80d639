"""Key string grammar: seeded private keys, view keys and addresses."""

from cryptography.hazmat.primitives import hashes

from .encoding import b58decode, b58encode, bech32m_decode, bech32m_encode
from .types import (
    ADDRESS_HRP,
    FIELD_MODULUS,
    FIELD_SIZE,
    PRIVATE_KEY_PREFIX,
    PRIVATE_KEY_TEXT_PREFIX,
    SCALAR_MODULUS,
    SEED_SIZE,
    VIEW_KEY_PREFIX,
    VIEW_KEY_TEXT_PREFIX,
    EncodingError,
    InvalidAddressError,
    InvalidPrivateKeyError,
    InvalidViewKeyError,
)


def private_key_from_seed(seed: bytes) -> str:
    """
    Derive a private key string from a 32-byte seed.

    The seed is read as a little-endian integer and reduced into the base
    field; the private key string carries that field element.

    Args:
        seed: 32-byte seed

    Returns:
        Private key string ("APrivateKey1...")
    """
    if len(seed) != SEED_SIZE:
        raise ValueError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}")

    field = int.from_bytes(seed, "little") % FIELD_MODULUS
    return encode_private_key(field.to_bytes(FIELD_SIZE, "little"))


def encode_private_key(seed_field: bytes) -> str:
    """Encode a 32-byte little-endian field element as a private key string."""
    _check_element(seed_field, FIELD_MODULUS, InvalidPrivateKeyError, "Private key seed")
    return b58encode(PRIVATE_KEY_PREFIX + seed_field)


def decode_private_key(private_key: str) -> bytes:
    """
    Decode a private key string into its 32-byte seed field element.

    Raises:
        InvalidPrivateKeyError: If the string is not a valid private key
    """
    raw = _b58_payload(private_key, PRIVATE_KEY_TEXT_PREFIX, PRIVATE_KEY_PREFIX, InvalidPrivateKeyError)
    _check_element(raw, FIELD_MODULUS, InvalidPrivateKeyError, "Private key seed")
    return raw


def encode_view_key(scalar: bytes) -> str:
    """Encode a 32-byte little-endian scalar as a view key string."""
    _check_element(scalar, SCALAR_MODULUS, InvalidViewKeyError, "View key scalar")
    return b58encode(VIEW_KEY_PREFIX + scalar)


def decode_view_key(view_key: str) -> bytes:
    """
    Decode a view key string into its 32-byte scalar.

    Raises:
        InvalidViewKeyError: If the string is not a valid view key
    """
    raw = _b58_payload(view_key, VIEW_KEY_TEXT_PREFIX, VIEW_KEY_PREFIX, InvalidViewKeyError)
    _check_element(raw, SCALAR_MODULUS, InvalidViewKeyError, "View key scalar")
    return raw


def encode_address(x_coordinate: bytes) -> str:
    """Encode a 32-byte little-endian group x-coordinate as an address."""
    _check_element(x_coordinate, FIELD_MODULUS, InvalidAddressError, "Address")
    return bech32m_encode(ADDRESS_HRP, x_coordinate)


def decode_address(address: str) -> bytes:
    """
    Decode an address string into its 32-byte group x-coordinate.

    Raises:
        InvalidAddressError: If the string is not a valid address
    """
    try:
        _, raw = bech32m_decode(address, ADDRESS_HRP)
    except EncodingError as e:
        raise InvalidAddressError(f"Invalid address: {e}")

    _check_element(raw, FIELD_MODULUS, InvalidAddressError, "Address")
    return raw


def is_private_key(text: str) -> bool:
    """Check if text is a well-formed private key string."""
    return _is_valid(decode_private_key, text)


def is_view_key(text: str) -> bool:
    """Check if text is a well-formed view key string."""
    return _is_valid(decode_view_key, text)


def is_address(text: str) -> bool:
    """Check if text is a well-formed address string."""
    return _is_valid(decode_address, text)


def fingerprint(key: str) -> str:
    """
    Generate a short, non-reversible fingerprint for a key string.

    Used wherever a key has to be named in output without revealing it.

    Args:
        key: Any key or address string

    Returns:
        A fingerprint string like "A7B3 C9D1 E5F2 8A4B"
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(key.encode("utf-8"))
    hash_bytes = digest.finalize()

    hex_bytes = [f"{b:02X}" for b in hash_bytes[:8]]
    groups = [hex_bytes[i] + hex_bytes[i + 1] for i in range(0, 8, 2)]

    return " ".join(groups)


def _b58_payload(text: str, text_prefix: str, byte_prefix: bytes, error: type) -> bytes:
    if not text.startswith(text_prefix):
        raise error(f"Expected prefix {text_prefix!r}")

    try:
        raw = b58decode(text)
    except EncodingError as e:
        raise error(str(e))

    if len(raw) != len(byte_prefix) + FIELD_SIZE or not raw.startswith(byte_prefix):
        raise error(f"Expected {len(byte_prefix) + FIELD_SIZE} bytes with key prefix, got {len(raw)}")

    return raw[len(byte_prefix):]


def _check_element(raw: bytes, modulus: int, error: type, label: str) -> None:
    if len(raw) != FIELD_SIZE:
        raise error(f"{label} must be {FIELD_SIZE} bytes, got {len(raw)}")
    if int.from_bytes(raw, "little") >= modulus:
        raise error(f"{label} is out of range")


def _is_valid(decoder, text: str) -> bool:
    try:
        decoder(text)
    except (InvalidPrivateKeyError, InvalidViewKeyError, InvalidAddressError):
        return False
    return True

"""Base58 and bech32m codecs used by Aleo key, address and record strings."""

from typing import List, Optional, Tuple

from .types import EncodingError


# Base58 (Bitcoin alphabet)
B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
B58_MAP = {c: i for i, c in enumerate(B58_ALPHABET)}

# Bech32m (BIP-350)
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_MAP = {c: i for i, c in enumerate(BECH32_CHARSET)}
BECH32M_CONST = 0x2BC830A3
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
CHECKSUM_LENGTH = 6

FIELD_SUFFIX = "field"


def b58encode(data: bytes) -> str:
    """
    Encode bytes as base58 text.

    Leading zero bytes are kept as leading '1' characters.
    """
    n_pad = 0
    for b in data:
        if b != 0:
            break
        n_pad += 1

    num = int.from_bytes(data, "big")
    out = []
    while num > 0:
        num, rem = divmod(num, 58)
        out.append(B58_ALPHABET[rem])

    return B58_ALPHABET[0] * n_pad + "".join(reversed(out))


def b58decode(text: str) -> bytes:
    """
    Decode base58 text into bytes.

    Raises:
        EncodingError: If the text contains a non-base58 character
    """
    num = 0
    for c in text:
        if c not in B58_MAP:
            raise EncodingError(f"Invalid base58 character: {c!r}")
        num = num * 58 + B58_MAP[c]

    n_pad = 0
    for c in text:
        if c != B58_ALPHABET[0]:
            break
        n_pad += 1

    full = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * n_pad + full


def _polymod(values: List[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i in range(5):
            if (top >> i) & 1:
                chk ^= _GENERATOR[i]
    return chk


def _hrp_expand(hrp: str) -> List[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, values: List[int]) -> List[int]:
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * CHECKSUM_LENGTH) ^ BECH32M_CONST
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(CHECKSUM_LENGTH)]


def convert_bits(data: List[int], from_bits: int, to_bits: int, pad: bool) -> List[int]:
    """
    Regroup a sequence of from_bits-wide values into to_bits-wide values.

    Raises:
        EncodingError: If a value is out of range, or (without padding) the
            leftover bits are too many or not zero
    """
    acc = 0
    bits = 0
    out = []
    max_value = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise EncodingError(f"Value out of range for {from_bits}-bit group: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)

    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & max_value):
        raise EncodingError("Invalid padding bits")

    return out


def bech32m_encode(hrp: str, data: bytes) -> str:
    """
    Encode bytes as a bech32m string with the given human-readable part.

    Args:
        hrp: Human-readable part (e.g. "aleo", "record")
        data: Payload bytes

    Returns:
        Lowercase bech32m string
    """
    if not hrp or hrp.lower() != hrp:
        raise EncodingError(f"Invalid human-readable part: {hrp!r}")

    values = convert_bits(list(data), 8, 5, pad=True)
    checksum = _create_checksum(hrp, values)
    return hrp + "1" + "".join(BECH32_CHARSET[v] for v in values + checksum)


def bech32m_decode(text: str, hrp: Optional[str] = None) -> Tuple[str, bytes]:
    """
    Decode a bech32m string.

    Unlike BIP-173 addresses there is no 90 character limit, since record
    ciphertexts are much longer.

    Args:
        text: The bech32m string
        hrp: Expected human-readable part, if any

    Returns:
        Tuple of (hrp, payload bytes)

    Raises:
        EncodingError: If the string is malformed or the checksum is wrong
    """
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise EncodingError("Invalid character in bech32m string")
    if text.lower() != text and text.upper() != text:
        raise EncodingError("Mixed case bech32m string")

    text = text.lower()
    pos = text.rfind("1")
    if pos < 1 or pos + CHECKSUM_LENGTH + 1 > len(text):
        raise EncodingError("Missing or misplaced bech32m separator")

    found_hrp = text[:pos]
    if hrp is not None and found_hrp != hrp:
        raise EncodingError(f"Expected prefix {hrp!r}, got {found_hrp!r}")

    values = []
    for c in text[pos + 1:]:
        if c not in BECH32_MAP:
            raise EncodingError(f"Invalid bech32m character: {c!r}")
        values.append(BECH32_MAP[c])

    if _polymod(_hrp_expand(found_hrp) + values) != BECH32M_CONST:
        raise EncodingError("Invalid bech32m checksum")

    payload = convert_bits(values[:-CHECKSUM_LENGTH], 5, 8, pad=False)
    return found_hrp, bytes(payload)


def string_to_field(text: str) -> str:
    """
    Pack a UTF-8 string into a field literal.

    The text is base58-encoded, and the ASCII bytes of the base58 string are
    read as a big-endian integer.

    Example:
        >>> string_to_field("aleo")
        '56445857182825field'
    """
    encoded = b58encode(text.encode("utf-8")).encode("ascii")
    return f"{int.from_bytes(encoded, 'big')}{FIELD_SUFFIX}"


def field_to_string(value: str) -> str:
    """
    Unpack a field literal produced by string_to_field.

    Args:
        value: Decimal digits, with or without the "field" suffix

    Raises:
        EncodingError: If the value does not unpack to base58 text and UTF-8
    """
    if value.endswith(FIELD_SUFFIX):
        value = value[: -len(FIELD_SUFFIX)]
    if not value.isdigit():
        raise EncodingError(f"Invalid field value: {value!r}")

    number = int(value)
    packed = number.to_bytes((number.bit_length() + 7) // 8, "big")
    try:
        encoded = packed.decode("ascii")
        return b58decode(encoded).decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Field does not hold an encoded string: {e}")

"""Type definitions and protocol constants for the Aleo test kit."""

# Curve constants (BLS12-377 scalar field, Edwards-BLS12 scalar field)
FIELD_MODULUS = 8444461749428370424248824938781546531375899335154063827935233455917409239041
SCALAR_MODULUS = 2111115437357092606062206234695386632838870926408408195193685246394721360383
FIELD_SIZE = 32

# Key string prefixes (raw bytes before base58 encoding)
PRIVATE_KEY_PREFIX = bytes([127, 134, 189, 116, 210, 221, 210, 137, 145, 18, 253])
VIEW_KEY_PREFIX = bytes([14, 138, 223, 204, 247, 224, 122])
PRIVATE_KEY_TEXT_PREFIX = "APrivateKey1"
VIEW_KEY_TEXT_PREFIX = "AViewKey1"

# Bech32m human-readable parts
ADDRESS_HRP = "aleo"
RECORD_HRP = "record"

# Seeded key generation
SEED_SIZE = 32

# Literal types: name -> (bit width, signed) for integers
INTEGER_TYPES = {
    "u8": (8, False),
    "u16": (16, False),
    "u32": (32, False),
    "u64": (64, False),
    "u128": (128, False),
    "i8": (8, True),
    "i16": (16, True),
    "i32": (32, True),
    "i64": (64, True),
    "i128": (128, True),
}

FIELD_LIKE_TYPES = {
    "field": FIELD_MODULUS,
    "group": FIELD_MODULUS,
    "scalar": SCALAR_MODULUS,
}

LITERAL_TYPES = frozenset(INTEGER_TYPES) | frozenset(FIELD_LIKE_TYPES) | {"address", "boolean"}


# Exception types
class AleoTestkitError(Exception):
    """Base exception for test kit errors."""
    pass


class EncodingError(AleoTestkitError):
    """Base58 or bech32m encoding/decoding failed."""
    pass


class KeyFormatError(AleoTestkitError):
    """Key or address string does not follow its grammar."""
    pass


class InvalidPrivateKeyError(KeyFormatError):
    """Invalid private key string."""
    pass


class InvalidViewKeyError(KeyFormatError):
    """Invalid view key string."""
    pass


class InvalidAddressError(KeyFormatError):
    """Invalid address string."""
    pass


class LiteralError(AleoTestkitError):
    """Invalid typed literal."""
    pass


class RecordError(AleoTestkitError):
    """Invalid record plaintext or ciphertext."""
    pass


class RecordDecryptionError(RecordError):
    """Record cannot be decrypted with the given key."""
    pass


class ProgramError(AleoTestkitError):
    """Base exception for program errors."""
    pass


class ProgramParseError(ProgramError):
    """Program source text is invalid."""

    def __init__(self, message: str, line: int = 0) -> None:
        self.line = line
        if line:
            message = f"line {line}: {message}"
        super().__init__(message)


class ExecutionError(ProgramError):
    """Program execution halted."""
    pass


class ConformanceError(AleoTestkitError):
    """One or more conformance checks failed."""
    pass

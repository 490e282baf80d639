"""
Aleo test kit - recorded account data and a harness for Aleo SDK tests

Fixture keys, addresses, records and a sample program, with pure-Python
codecs, record and program parsers, and a conformance runner.
"""

from .account_data import (
    SEED,
    MESSAGE,
    PRIVATE_KEY_STRING,
    VIEW_KEY_STRING,
    ADDRESS_STRING,
    BEACON_PRIVATE_KEY_STRING,
    BEACON_VIEW_KEY_STRING,
    BEACON_ADDRESS_STRING,
    FUNDED_PRIVATE_KEY_STRING,
    FUNDED_VIEW_KEY_STRING,
    FUNDED_ADDRESS_STRING,
    RECORD_CIPHERTEXT_STRING,
    RECORD_PLAINTEXT_STRING,
    FOREIGN_CIPHERTEXT_STRING,
    FOREIGN_VIEW_KEY_STRING,
    HELLO_PROGRAM_ID,
    HELLO_PROGRAM_MAIN_FUNCTION,
    HELLO_PROGRAM,
    AccountFixture,
    ACCOUNTS,
)
from .encoding import (
    b58encode,
    b58decode,
    bech32m_encode,
    bech32m_decode,
    string_to_field,
    field_to_string,
)
from .keys import (
    private_key_from_seed,
    encode_private_key,
    decode_private_key,
    encode_view_key,
    decode_view_key,
    encode_address,
    decode_address,
    is_private_key,
    is_view_key,
    is_address,
    fingerprint,
)
from .record import (
    Visibility,
    Literal,
    parse_literal,
    RecordEntry,
    RecordPlaintext,
    RecordCiphertext,
    matches_plaintext,
)
from .program import (
    Program,
    Function,
    parse_program,
)
from .conformance import (
    AccountBackend,
    LocalBackend,
    CheckStatus,
    CheckResult,
    ConformanceConfig,
    ConformanceReport,
    run_conformance,
)
from .types import (
    FIELD_MODULUS,
    SCALAR_MODULUS,
    AleoTestkitError,
    EncodingError,
    KeyFormatError,
    InvalidPrivateKeyError,
    InvalidViewKeyError,
    InvalidAddressError,
    LiteralError,
    RecordError,
    RecordDecryptionError,
    ProgramError,
    ProgramParseError,
    ExecutionError,
    ConformanceError,
)

__version__ = "0.1.0"

__all__ = [
    # Account data
    "SEED",
    "MESSAGE",
    "PRIVATE_KEY_STRING",
    "VIEW_KEY_STRING",
    "ADDRESS_STRING",
    "BEACON_PRIVATE_KEY_STRING",
    "BEACON_VIEW_KEY_STRING",
    "BEACON_ADDRESS_STRING",
    "FUNDED_PRIVATE_KEY_STRING",
    "FUNDED_VIEW_KEY_STRING",
    "FUNDED_ADDRESS_STRING",
    "RECORD_CIPHERTEXT_STRING",
    "RECORD_PLAINTEXT_STRING",
    "FOREIGN_CIPHERTEXT_STRING",
    "FOREIGN_VIEW_KEY_STRING",
    "HELLO_PROGRAM_ID",
    "HELLO_PROGRAM_MAIN_FUNCTION",
    "HELLO_PROGRAM",
    "AccountFixture",
    "ACCOUNTS",
    # Encoding
    "b58encode",
    "b58decode",
    "bech32m_encode",
    "bech32m_decode",
    "string_to_field",
    "field_to_string",
    # Keys
    "private_key_from_seed",
    "encode_private_key",
    "decode_private_key",
    "encode_view_key",
    "decode_view_key",
    "encode_address",
    "decode_address",
    "is_private_key",
    "is_view_key",
    "is_address",
    "fingerprint",
    # Records
    "Visibility",
    "Literal",
    "parse_literal",
    "RecordEntry",
    "RecordPlaintext",
    "RecordCiphertext",
    "matches_plaintext",
    # Programs
    "Program",
    "Function",
    "parse_program",
    # Conformance
    "AccountBackend",
    "LocalBackend",
    "CheckStatus",
    "CheckResult",
    "ConformanceConfig",
    "ConformanceReport",
    "run_conformance",
    # Constants
    "FIELD_MODULUS",
    "SCALAR_MODULUS",
    # Errors
    "AleoTestkitError",
    "EncodingError",
    "KeyFormatError",
    "InvalidPrivateKeyError",
    "InvalidViewKeyError",
    "InvalidAddressError",
    "LiteralError",
    "RecordError",
    "RecordDecryptionError",
    "ProgramError",
    "ProgramParseError",
    "ExecutionError",
    "ConformanceError",
]

"""Account, record and program test data recorded from a local network run."""

from dataclasses import dataclass

# A random seed used to generate the private key
SEED = bytes([
    94, 91, 52, 251, 240, 230, 226, 35, 117, 253, 224, 210, 175, 13, 205, 120,
    155, 214, 7, 169, 66, 62, 206, 50, 188, 40, 29, 122, 40, 250, 54, 18,
])

# UTF-8 bytes of the message "hello world"
MESSAGE = bytes([104, 101, 108, 108, 111, 32, 119, 111, 114, 108, 100])

# Private key string derived from the seed
BEACON_PRIVATE_KEY_STRING = "APrivateKey1zkp8CZNn3yeCseEtxuVPbDCwSyhGW6yZKUYKfgXmcpoGPWH"
BEACON_VIEW_KEY_STRING = "AViewKey1mSnpFFC8Mj4fXbK5YiWgZ3mjiV8CxA79bYNa8ymUpTrw"
BEACON_ADDRESS_STRING = "aleo1rhgdu77hgyqd3xjj8ucu3jj9r2krwz6mnzyd80gncr5fxcwlh5rsvzp9px"

FUNDED_PRIVATE_KEY_STRING = "APrivateKey1zkp3dQx4WASWYQVWKkq14v3RoQDfY2kbLssUj7iifi1VUQ6"
FUNDED_VIEW_KEY_STRING = "AViewKey1cxguxtKkjYnT9XDza9yTvVMxt6Ckb1Pv4ck1hppMzmCB"
FUNDED_ADDRESS_STRING = "aleo184vuwr5u7u0ha5f5k44067dd2uaqewxx6pe5ltha5pv99wvhfqxqv339h4"

# Owner of the record below
PRIVATE_KEY_STRING = "APrivateKey1zkpJkyYRGYtkeHDaFfwsKtUJzia7csiWhfBWPXWhXJzy9Ls"
VIEW_KEY_STRING = "AViewKey1ccEt8A2Ryva5rxnKcAbn7wgTaTsb79tzkKHFpeKsm9NX"
ADDRESS_STRING = "aleo1j7qxyunfldj2lp8hsvy7mw5k8zaqgjfyr72x2gh3x4ewgae8v5gscf5jh3"

# Ciphertext of a record owned by PRIVATE_KEY_STRING
RECORD_CIPHERTEXT_STRING = (
    "record1qyqsqpe2szk2wwwq56akkwx586hkndl3r8vzdwve32lm7elvphh37rsyqyxx66trwfhkxun9v35hguerqqpqzqrtjzeu6v"
    "ah9x2me2exkgege824sd8x2379scspmrmtvczs0d93qttl7y92ga0k0rsexu409hu3vlehe3yxjhmey3frh2z5pxm5cmxsv4un97q"
)

# Plaintext of RECORD_CIPHERTEXT_STRING
RECORD_PLAINTEXT_STRING = (
    "{\n"
    "  owner: aleo1j7qxyunfldj2lp8hsvy7mw5k8zaqgjfyr72x2gh3x4ewgae8v5gscf5jh3.private,\n"
    "  microcredits: 1500000000000000u64.private,\n"
    "  _nonce: 3077450429259593211617823051143573281856129402760267155982965992208217472983group.public\n"
    "}"
)

# Ciphertext of a record owned by a different private key
FOREIGN_CIPHERTEXT_STRING = (
    "record1qyqsq553yxz8ylwqyqfmcfmwz03x6xsxf2h2kypcwhykzgm50ut4susyqyxx66trwfhkxun9v35hguerqqpqzqyjt8kxnp"
    "28v83t460knvp0dq86a3r3dyve945u0xqeksq323paqtegslprdc5zypksrja7rmctx90jnpeq5sqkwlfct7ygy990a5pqs7y5pt0"
)

# View key of a different private key
FOREIGN_VIEW_KEY_STRING = "AViewKey1ghtvuJQQzQ31xSiVh6X1PK8biEVhQBygRGV4KdYmq4JT"

HELLO_PROGRAM_ID = "hellothere.aleo"
HELLO_PROGRAM_MAIN_FUNCTION = "hello"
HELLO_PROGRAM = (
    "program " + HELLO_PROGRAM_ID + ";\n"
    "\n"
    "function " + HELLO_PROGRAM_MAIN_FUNCTION + ":\n"
    "    input r0 as u32.public;\n"
    "    input r1 as u32.private;\n"
    "    add r0 r1 into r2;\n"
    "    output r2 as u32.private;\n"
)


@dataclass(frozen=True)
class AccountFixture:
    """A private key with the view key and address derived from it."""
    name: str
    private_key: str
    view_key: str
    address: str


DEFAULT_ACCOUNT = AccountFixture("default", PRIVATE_KEY_STRING, VIEW_KEY_STRING, ADDRESS_STRING)
BEACON_ACCOUNT = AccountFixture(
    "beacon", BEACON_PRIVATE_KEY_STRING, BEACON_VIEW_KEY_STRING, BEACON_ADDRESS_STRING
)
FUNDED_ACCOUNT = AccountFixture(
    "funded", FUNDED_PRIVATE_KEY_STRING, FUNDED_VIEW_KEY_STRING, FUNDED_ADDRESS_STRING
)

ACCOUNTS = (DEFAULT_ACCOUNT, BEACON_ACCOUNT, FUNDED_ACCOUNT)

__all__ = [
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
    "DEFAULT_ACCOUNT",
    "BEACON_ACCOUNT",
    "FUNDED_ACCOUNT",
    "ACCOUNTS",
]

"""Tests for key string grammar and seeded key generation."""

import pytest
from aleo_testkit.account_data import (
    ACCOUNTS,
    ADDRESS_STRING,
    BEACON_PRIVATE_KEY_STRING,
    FOREIGN_VIEW_KEY_STRING,
    FUNDED_PRIVATE_KEY_STRING,
    PRIVATE_KEY_STRING,
    SEED,
    VIEW_KEY_STRING,
)
from aleo_testkit.keys import (
    decode_address,
    decode_private_key,
    decode_view_key,
    encode_address,
    encode_private_key,
    encode_view_key,
    fingerprint,
    is_address,
    is_private_key,
    is_view_key,
    private_key_from_seed,
)
from aleo_testkit.types import (
    FIELD_MODULUS,
    SCALAR_MODULUS,
    InvalidAddressError,
    InvalidPrivateKeyError,
    InvalidViewKeyError,
)
from .test_vectors import (
    ADDRESS_X_HEX,
    FUNDED_SEED_FIELD_HEX,
    MAX_SEED_PRIVATE_KEY,
    VIEW_KEY_SCALAR_HEX,
    ZERO_SEED_PRIVATE_KEY,
)


class TestSeededGeneration:
    """Test private key generation from a 32-byte seed."""

    def test_seed_yields_beacon_key(self) -> None:
        """The recorded seed generates the beacon private key."""
        assert private_key_from_seed(SEED) == BEACON_PRIVATE_KEY_STRING

    def test_deterministic_generation(self) -> None:
        """Same seed always produces the same key."""
        assert private_key_from_seed(SEED) == private_key_from_seed(bytes(SEED))

    def test_zero_seed(self) -> None:
        """An all-zero seed encodes the zero field element."""
        assert private_key_from_seed(bytes(32)) == ZERO_SEED_PRIVATE_KEY

    def test_seed_is_reduced_into_field(self) -> None:
        """Seeds above the modulus are reduced."""
        key = private_key_from_seed(b"\xff" * 32)
        assert key == MAX_SEED_PRIVATE_KEY

        expected = (int.from_bytes(b"\xff" * 32, "little") % FIELD_MODULUS).to_bytes(32, "little")
        assert decode_private_key(key) == expected

    def test_invalid_seed_length(self) -> None:
        """Reject seeds that are not 32 bytes."""
        with pytest.raises(ValueError, match="32 bytes"):
            private_key_from_seed(b"too short")

        with pytest.raises(ValueError, match="32 bytes"):
            private_key_from_seed(b"x" * 64)


class TestPrivateKeys:
    """Test private key decoding and encoding."""

    def test_decode_beacon_key_returns_seed(self) -> None:
        """The beacon key carries the seed itself (already below the modulus)."""
        assert decode_private_key(BEACON_PRIVATE_KEY_STRING) == SEED

    def test_decode_funded_key(self) -> None:
        """Decode the funded private key to its seed field element."""
        assert decode_private_key(FUNDED_PRIVATE_KEY_STRING).hex() == FUNDED_SEED_FIELD_HEX

    def test_encode_matches_recorded_string(self) -> None:
        """Encoding the decoded seed gives back the recorded string."""
        raw = decode_private_key(PRIVATE_KEY_STRING)
        assert encode_private_key(raw) == PRIVATE_KEY_STRING

    def test_wrong_prefix(self) -> None:
        """A view key is not a private key."""
        with pytest.raises(InvalidPrivateKeyError, match="prefix"):
            decode_private_key(VIEW_KEY_STRING)

    def test_truncated_key(self) -> None:
        """A shortened key is rejected."""
        with pytest.raises(InvalidPrivateKeyError):
            decode_private_key(PRIVATE_KEY_STRING[:-2])

    def test_invalid_base58_character(self) -> None:
        """Characters outside the base58 alphabet are rejected."""
        with pytest.raises(InvalidPrivateKeyError, match="base58"):
            decode_private_key(PRIVATE_KEY_STRING[:-1] + "0")

    def test_out_of_range_seed(self) -> None:
        """Field elements at or above the modulus cannot be encoded."""
        with pytest.raises(InvalidPrivateKeyError, match="out of range"):
            encode_private_key(FIELD_MODULUS.to_bytes(32, "little"))


class TestViewKeys:
    """Test view key decoding and encoding."""

    def test_decode_view_key(self) -> None:
        """Decode the recorded view key to its scalar."""
        assert decode_view_key(VIEW_KEY_STRING).hex() == VIEW_KEY_SCALAR_HEX

    def test_encode_matches_recorded_string(self) -> None:
        """Encoding the decoded scalar gives back the recorded string."""
        raw = decode_view_key(FOREIGN_VIEW_KEY_STRING)
        assert encode_view_key(raw) == FOREIGN_VIEW_KEY_STRING

    def test_wrong_prefix(self) -> None:
        """A private key is not a view key."""
        with pytest.raises(InvalidViewKeyError, match="prefix"):
            decode_view_key(PRIVATE_KEY_STRING)

    def test_out_of_range_scalar(self) -> None:
        """Scalars at or above the scalar modulus cannot be encoded."""
        with pytest.raises(InvalidViewKeyError, match="out of range"):
            encode_view_key(SCALAR_MODULUS.to_bytes(32, "little"))

    def test_wrong_length(self) -> None:
        """Scalars must be 32 bytes."""
        with pytest.raises(InvalidViewKeyError, match="32 bytes"):
            encode_view_key(bytes(16))


class TestAddresses:
    """Test address decoding and encoding."""

    def test_decode_address(self) -> None:
        """Decode the recorded address to its x-coordinate."""
        assert decode_address(ADDRESS_STRING).hex() == ADDRESS_X_HEX

    def test_encode_address(self) -> None:
        """Encoding the x-coordinate gives back the address."""
        assert encode_address(bytes.fromhex(ADDRESS_X_HEX)) == ADDRESS_STRING

    def test_bad_checksum(self) -> None:
        """A changed character breaks the checksum."""
        tampered = ADDRESS_STRING[:-1] + ("q" if ADDRESS_STRING[-1] != "q" else "p")
        with pytest.raises(InvalidAddressError, match="checksum"):
            decode_address(tampered)

    def test_wrong_prefix(self) -> None:
        """Record ciphertexts are not addresses."""
        with pytest.raises(InvalidAddressError, match="prefix"):
            decode_address("a1lqfn3a")

    def test_uppercase_address(self) -> None:
        """An all-uppercase address is the same address."""
        assert decode_address(ADDRESS_STRING.upper()) == decode_address(ADDRESS_STRING)


class TestPredicates:
    """Test the is_* predicates against every recorded account."""

    @pytest.mark.parametrize("account", ACCOUNTS, ids=lambda a: a.name)
    def test_recorded_strings_are_well_formed(self, account) -> None:
        """Each recorded string matches exactly one grammar."""
        assert is_private_key(account.private_key)
        assert not is_view_key(account.private_key)
        assert not is_address(account.private_key)

        assert is_view_key(account.view_key)
        assert not is_private_key(account.view_key)
        assert not is_address(account.view_key)

        assert is_address(account.address)
        assert not is_private_key(account.address)
        assert not is_view_key(account.address)

    def test_garbage_is_rejected(self) -> None:
        """Arbitrary text matches no grammar."""
        for text in ("", "hello", "APrivateKey1", "AViewKey1", "aleo1"):
            assert not is_private_key(text)
            assert not is_view_key(text)
            assert not is_address(text)


class TestFingerprint:
    """Tests for key fingerprints."""

    def test_fingerprint_format(self) -> None:
        """Fingerprint is four space-separated groups of four hex digits."""
        fp = fingerprint(PRIVATE_KEY_STRING)

        assert len(fp) == 19
        parts = fp.split(" ")
        assert len(parts) == 4
        for part in parts:
            assert len(part) == 4
            assert all(c in "0123456789ABCDEF" for c in part)

    def test_fingerprint_deterministic(self) -> None:
        """Same key, same fingerprint."""
        assert fingerprint(VIEW_KEY_STRING) == fingerprint(VIEW_KEY_STRING)

    def test_different_keys_different_fingerprints(self) -> None:
        """Different keys produce different fingerprints."""
        assert fingerprint(PRIVATE_KEY_STRING) != fingerprint(BEACON_PRIVATE_KEY_STRING)

"""Tests for base58, bech32m and the string-to-field codec."""

import pytest
from aleo_testkit.account_data import ADDRESS_STRING, RECORD_CIPHERTEXT_STRING
from aleo_testkit.encoding import (
    b58decode,
    b58encode,
    bech32m_decode,
    bech32m_encode,
    convert_bits,
    field_to_string,
    string_to_field,
)
from aleo_testkit.types import EncodingError
from .test_vectors import STRING_FIELD_VECTORS


class TestBase58:
    """Test base58 encoding."""

    def test_encode_text(self) -> None:
        assert b58encode(b"hello world") == "StV1DL6CwTryKyV"

    def test_decode_text(self) -> None:
        assert b58decode("StV1DL6CwTryKyV") == b"hello world"

    def test_leading_zeros(self) -> None:
        """Leading zero bytes become leading '1' characters and back."""
        assert b58encode(b"\x00\x00\x01") == "112"
        assert b58decode("112") == b"\x00\x00\x01"

    def test_empty(self) -> None:
        assert b58encode(b"") == ""
        assert b58decode("") == b""

    @pytest.mark.parametrize("char", ["0", "O", "I", "l", "+"])
    def test_invalid_character(self, char: str) -> None:
        """Characters outside the alphabet are rejected."""
        with pytest.raises(EncodingError, match="Invalid base58 character"):
            b58decode("abc" + char)


class TestBech32m:
    """Test bech32m encoding (BIP-350)."""

    def test_decode_reference_vector(self) -> None:
        """Minimal valid bech32m string from BIP-350."""
        assert bech32m_decode("a1lqfn3a") == ("a", b"")

    def test_decode_uppercase(self) -> None:
        """All-uppercase strings are accepted."""
        assert bech32m_decode("A1LQFN3A") == ("a", b"")

    def test_reject_bech32_checksum(self) -> None:
        """A valid BIP-173 (bech32) string fails the bech32m checksum."""
        with pytest.raises(EncodingError, match="checksum"):
            bech32m_decode("a12uel5l")

    def test_reject_mixed_case(self) -> None:
        with pytest.raises(EncodingError, match="Mixed case"):
            bech32m_decode("a1LQfn3a")

    def test_reject_missing_separator(self) -> None:
        with pytest.raises(EncodingError, match="separator"):
            bech32m_decode("lqfn3a")

    def test_reject_invalid_character(self) -> None:
        """'b' is not in the bech32 character set."""
        with pytest.raises(EncodingError, match="Invalid bech32m character"):
            bech32m_decode("a1bqfn3a")

    def test_reject_unexpected_prefix(self) -> None:
        with pytest.raises(EncodingError, match="Expected prefix"):
            bech32m_decode(ADDRESS_STRING, "record")

    def test_address_payload(self) -> None:
        """Addresses carry 32 bytes."""
        hrp, data = bech32m_decode(ADDRESS_STRING)
        assert hrp == "aleo"
        assert len(data) == 32
        assert bech32m_encode(hrp, data) == ADDRESS_STRING

    def test_long_strings_are_allowed(self) -> None:
        """Record ciphertexts exceed the 90 character BIP-173 limit."""
        assert len(RECORD_CIPHERTEXT_STRING) > 90

        hrp, data = bech32m_decode(RECORD_CIPHERTEXT_STRING)
        assert hrp == "record"
        assert len(data) == 118
        assert bech32m_encode(hrp, data) == RECORD_CIPHERTEXT_STRING

    def test_reject_uppercase_hrp_on_encode(self) -> None:
        with pytest.raises(EncodingError, match="human-readable part"):
            bech32m_encode("ALEO", bytes(32))


class TestConvertBits:
    """Test bit regrouping."""

    def test_regroup_with_padding(self) -> None:
        assert convert_bits([0xFF], 8, 5, pad=True) == [31, 28]

    def test_reject_non_zero_padding(self) -> None:
        with pytest.raises(EncodingError, match="padding"):
            convert_bits([31, 29], 5, 8, pad=False)

    def test_reject_out_of_range_value(self) -> None:
        with pytest.raises(EncodingError, match="out of range"):
            convert_bits([32], 5, 8, pad=False)


class TestStringField:
    """Test the base58 string-to-field codec."""

    @pytest.mark.parametrize("text,expected", STRING_FIELD_VECTORS.items())
    def test_string_to_field(self, text: str, expected: str) -> None:
        assert string_to_field(text) == expected

    @pytest.mark.parametrize("text,packed", STRING_FIELD_VECTORS.items())
    def test_field_to_string(self, text: str, packed: str) -> None:
        assert field_to_string(packed) == text

    def test_suffix_is_optional(self) -> None:
        assert field_to_string("56445857182825") == "aleo"

    def test_unicode_text(self) -> None:
        text = "Café ✓"
        assert field_to_string(string_to_field(text)) == text

    @pytest.mark.parametrize("value", ["", "field", "12abc", "-5field"])
    def test_reject_non_numeric(self, value: str) -> None:
        with pytest.raises(EncodingError, match="Invalid field value"):
            field_to_string(value)

    def test_reject_non_base58_payload(self) -> None:
        """A field whose bytes are not base58 text does not unpack."""
        with pytest.raises(EncodingError):
            field_to_string("1field")

        with pytest.raises(EncodingError):
            field_to_string("255field")

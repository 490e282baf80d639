"""Typed literals, record plaintexts and record ciphertexts."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .encoding import bech32m_decode
from .keys import decode_address, encode_address
from .types import (
    FIELD_LIKE_TYPES,
    FIELD_MODULUS,
    FIELD_SIZE,
    INTEGER_TYPES,
    RECORD_HRP,
    EncodingError,
    InvalidAddressError,
    LiteralError,
    RecordError,
)


IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
NUMERIC_LITERAL_RE = re.compile(r"^(-?[0-9]+)([a-z][a-z0-9]*)$")

OWNER = "owner"
NONCE = "_nonce"


class Visibility(Enum):
    """Visibility of a record entry or program value."""
    CONSTANT = "constant"
    PUBLIC = "public"
    PRIVATE = "private"


# Entry variant bytes in the serialized record
_VISIBILITY_BY_VARIANT = {
    0: Visibility.CONSTANT,
    1: Visibility.PUBLIC,
    2: Visibility.PRIVATE,
}


@dataclass(frozen=True)
class Literal:
    """A typed literal value such as 7u32, true, or an address."""
    type: str
    value: Union[int, bool, str]

    def __str__(self) -> str:
        if self.type == "boolean":
            return "true" if self.value else "false"
        if self.type == "address":
            return str(self.value)
        return f"{self.value}{self.type}"


def integer_bounds(type_name: str) -> Tuple[int, int]:
    """Inclusive (min, max) for an integer literal type."""
    bits, signed = INTEGER_TYPES[type_name]
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def make_literal(type_name: str, value: Union[int, bool, str]) -> Literal:
    """
    Build a literal, checking the value against its type.

    Raises:
        LiteralError: If the type is unknown or the value is out of range
    """
    if type_name == "boolean":
        if not isinstance(value, bool):
            raise LiteralError(f"Expected a boolean, got {value!r}")
        return Literal(type_name, value)

    if type_name == "address":
        try:
            decode_address(str(value))
        except InvalidAddressError as e:
            raise LiteralError(str(e))
        return Literal(type_name, str(value))

    if isinstance(value, bool) or not isinstance(value, int):
        raise LiteralError(f"Expected an integer value for {type_name}, got {value!r}")

    if type_name in INTEGER_TYPES:
        low, high = integer_bounds(type_name)
        if not low <= value <= high:
            raise LiteralError(f"{value} is out of range for {type_name}")
    elif type_name in FIELD_LIKE_TYPES:
        if not 0 <= value < FIELD_LIKE_TYPES[type_name]:
            raise LiteralError(f"{value} is out of range for {type_name}")
    else:
        raise LiteralError(f"Unknown literal type: {type_name}")

    return Literal(type_name, value)


def parse_literal(text: str) -> Literal:
    """
    Parse a literal from its text form.

    Examples: "7u32", "-3i8", "12field", "true", "aleo1...".

    Raises:
        LiteralError: If the text is not a valid literal
    """
    text = text.strip()
    if text in ("true", "false"):
        return Literal("boolean", text == "true")
    if text.startswith("aleo1"):
        return make_literal("address", text)

    match = NUMERIC_LITERAL_RE.match(text)
    if match is None:
        raise LiteralError(f"Invalid literal: {text!r}")

    digits, type_name = match.groups()
    if type_name not in INTEGER_TYPES and type_name not in FIELD_LIKE_TYPES:
        raise LiteralError(f"Unknown literal type: {type_name}")
    return make_literal(type_name, int(digits))


def parse_visibility(text: str) -> Visibility:
    """Parse a visibility keyword."""
    try:
        return Visibility(text)
    except ValueError:
        raise LiteralError(f"Unknown visibility: {text!r}")


def split_visibility(text: str) -> Tuple[str, Visibility]:
    """Split "<value>.<visibility>" into its parts."""
    value, dot, visibility = text.strip().rpartition(".")
    if not dot:
        raise LiteralError(f"Missing visibility in {text!r}")
    return value, parse_visibility(visibility)


@dataclass(frozen=True)
class RecordEntry:
    """A named, typed and visibility-tagged record member."""
    name: str
    literal: Literal
    visibility: Visibility

    def __str__(self) -> str:
        return f"{self.name}: {self.literal}.{self.visibility.value}"


@dataclass(frozen=True)
class RecordPlaintext:
    """
    A decrypted record.

    Attributes:
        owner: The owner's address.
        owner_visibility: Whether the owner is stored publicly or privately.
        entries: Data members, in declaration order (owner and nonce excluded).
        nonce: The record nonce (group element x-coordinate).
    """

    owner: str
    owner_visibility: Visibility
    entries: Tuple[RecordEntry, ...]
    nonce: int

    @classmethod
    def from_string(cls, text: str) -> "RecordPlaintext":
        """
        Parse a record plaintext in its brace form.

        Raises:
            RecordError: If the text is not a valid flat record
        """
        text = text.strip()
        if not (text.startswith("{") and text.endswith("}")):
            raise RecordError("Record must be enclosed in braces")

        body = text[1:-1].strip()
        if "{" in body or "}" in body:
            raise RecordError("Nested record members are not supported")
        if not body:
            raise RecordError("Record has no members")

        owner: Optional[RecordEntry] = None
        nonce: Optional[RecordEntry] = None
        entries = []
        seen = set()

        for member in body.split(","):
            name, colon, value = member.partition(":")
            name = name.strip()
            if not colon:
                raise RecordError(f"Invalid record member: {member.strip()!r}")
            if not IDENTIFIER_RE.match(name):
                raise RecordError(f"Invalid member name: {name!r}")
            if name in seen:
                raise RecordError(f"Duplicate member: {name}")
            seen.add(name)

            try:
                literal_text, visibility = split_visibility(value)
                entry = RecordEntry(name, parse_literal(literal_text), visibility)
            except LiteralError as e:
                raise RecordError(f"Invalid value for {name}: {e}")

            if name == OWNER:
                owner = entry
            elif name == NONCE:
                nonce = entry
            else:
                entries.append(entry)

        if owner is None:
            raise RecordError("Record is missing the owner")
        if owner.literal.type != "address":
            raise RecordError("Record owner must be an address")
        if owner.visibility == Visibility.CONSTANT:
            raise RecordError("Record owner must be public or private")

        if nonce is None:
            raise RecordError("Record is missing the nonce")
        if nonce.literal.type != "group" or nonce.visibility != Visibility.PUBLIC:
            raise RecordError("Record nonce must be a public group element")

        return cls(
            owner=owner.literal.value,
            owner_visibility=owner.visibility,
            entries=tuple(entries),
            nonce=nonce.literal.value,
        )

    def get(self, name: str) -> Optional[RecordEntry]:
        """Look up a data member by name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    @property
    def microcredits(self) -> Optional[int]:
        """The microcredits balance, if this is a credits record."""
        entry = self.get("microcredits")
        return entry.literal.value if entry is not None else None

    def __str__(self) -> str:
        members = [f"{OWNER}: {self.owner}.{self.owner_visibility.value}"]
        members.extend(str(entry) for entry in self.entries)
        members.append(f"{NONCE}: {self.nonce}group.{Visibility.PUBLIC.value}")
        return "{\n" + ",\n".join(f"  {m}" for m in members) + "\n}"


class _Reader:
    """Little-endian cursor over serialized record bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, size: int) -> bytes:
        if self._offset + size > len(self._data):
            raise RecordError(
                f"Record data too short: need {size} bytes at offset {self._offset}, "
                f"have {len(self._data) - self._offset}"
            )
        chunk = self._data[self._offset:self._offset + size]
        self._offset += size
        return chunk

    def u8(self) -> int:
        return self.take(1)[0]

    def u16(self) -> int:
        return int.from_bytes(self.take(2), "little")

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset


@dataclass(frozen=True)
class RecordCiphertext:
    """
    Structural view of an encrypted record.

    Format (little-endian):
        owner variant (u8): 0 = public address (32 bytes),
                            1 = private (u16 field count, fields)
        entry count (u8)
        per entry: identifier (u8 length, ASCII), entry length (u16),
                   variant (u8: 0 constant, 1 public, 2 private), payload
        nonce (32 bytes)

    Attributes:
        text: The original "record1..." string.
        owner_visibility: Whether the owner is stored publicly or privately.
        owner: The owner's address when public, otherwise None.
        entries: (name, visibility) pairs in serialized order.
        nonce: The record nonce (group element x-coordinate).
    """

    text: str
    owner_visibility: Visibility
    owner: Optional[str]
    entries: Tuple[Tuple[str, Visibility], ...]
    nonce: int

    @classmethod
    def from_string(cls, text: str) -> "RecordCiphertext":
        """
        Decode a record ciphertext string.

        Raises:
            RecordError: If the string or its byte layout is invalid
        """
        try:
            _, data = bech32m_decode(text, RECORD_HRP)
        except EncodingError as e:
            raise RecordError(f"Invalid record ciphertext: {e}")

        reader = _Reader(data)

        owner_variant = reader.u8()
        owner = None
        if owner_variant == 0:
            owner_visibility = Visibility.PUBLIC
            try:
                owner = encode_address(reader.take(FIELD_SIZE))
            except InvalidAddressError as e:
                raise RecordError(f"Invalid record owner: {e}")
        elif owner_variant == 1:
            owner_visibility = Visibility.PRIVATE
            field_count = reader.u16()
            reader.take(field_count * FIELD_SIZE)
        else:
            raise RecordError(f"Unknown owner variant: {owner_variant}")

        entries = []
        for _ in range(reader.u8()):
            name = _read_identifier(reader)
            payload = reader.take(reader.u16())
            entries.append((name, _entry_visibility(name, payload)))

        nonce = int.from_bytes(reader.take(FIELD_SIZE), "little")
        if nonce >= FIELD_MODULUS:
            raise RecordError("Record nonce is out of range")
        if reader.remaining:
            raise RecordError(f"Unexpected {reader.remaining} trailing bytes in record")

        return cls(
            text=text,
            owner_visibility=owner_visibility,
            owner=owner,
            entries=tuple(entries),
            nonce=nonce,
        )

    def entry_names(self) -> Tuple[str, ...]:
        """Names of the data members, in serialized order."""
        return tuple(name for name, _ in self.entries)

    def __str__(self) -> str:
        return self.text


def _read_identifier(reader: _Reader) -> str:
    raw = reader.take(reader.u8())
    try:
        name = raw.decode("ascii")
    except UnicodeDecodeError:
        raise RecordError("Record member name is not ASCII")
    if not IDENTIFIER_RE.match(name):
        raise RecordError(f"Invalid member name: {name!r}")
    return name


def _entry_visibility(name: str, payload: bytes) -> Visibility:
    if not payload:
        raise RecordError(f"Empty entry for {name}")

    visibility = _VISIBILITY_BY_VARIANT.get(payload[0])
    if visibility is None:
        raise RecordError(f"Unknown entry variant {payload[0]} for {name}")

    if visibility == Visibility.PRIVATE:
        if len(payload) < 3:
            raise RecordError(f"Truncated private entry for {name}")
        field_count = int.from_bytes(payload[1:3], "little")
        if len(payload) != 3 + field_count * FIELD_SIZE:
            raise RecordError(f"Private entry {name} has inconsistent length")

    return visibility


def matches_plaintext(ciphertext: RecordCiphertext, plaintext: RecordPlaintext) -> bool:
    """
    Check that a ciphertext has the same shape and nonce as a plaintext.

    This does not decrypt anything; a match means the plaintext can be the
    decryption of the ciphertext, a mismatch means it cannot.
    """
    if ciphertext.nonce != plaintext.nonce:
        return False
    if ciphertext.owner_visibility != plaintext.owner_visibility:
        return False
    if ciphertext.owner is not None and ciphertext.owner != plaintext.owner:
        return False
    return ciphertext.entries == tuple((e.name, e.visibility) for e in plaintext.entries)

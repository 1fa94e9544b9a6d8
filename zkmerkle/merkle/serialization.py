"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

Canonical leaf encoding for Merkle tree values.

Every value committed to a tree is turned into a leaf byte string by
serialize_value(). The encoding must be deterministic across runs and
platforms, and injective over the values a caller wants to tell apart:

- CanonicalSerializable: value.to_canonical_bytes()
- bytes / bytearray / memoryview: the raw bytes
- str: UTF-8
- int in [0, r): BLS12-381 scalar encoding (32 bytes, little-endian)

Anything else is rejected with SerializationError.
"""

from abc import ABC, abstractmethod
from typing import Any, Union

from zkmerkle.exceptions import SerializationError


VALUE_ENCODINGS = ("utf8", "hex", "field")


class CanonicalSerializable(ABC):
    """
    Capability for value types that supply their own leaf encoding.

    Implementations must return the same bytes for equal values on every
    platform, independent of object identity or locale.
    """

    @abstractmethod
    def to_canonical_bytes(self) -> bytes:
        """Return the canonical byte encoding of this value."""
        pass


def serialize_value(value: Any) -> bytes:
    """
    Serialize a value into its canonical leaf bytes.

    Args:
        value: Value to encode

    Returns:
        Canonical byte encoding

    Raises:
        SerializationError: If the value has no canonical encoding
    """
    if isinstance(value, CanonicalSerializable):
        encoded = value.to_canonical_bytes()
        if not isinstance(encoded, bytes):
            raise SerializationError(
                f"{type(value).__name__}.to_canonical_bytes() returned "
                f"{type(encoded).__name__}, expected bytes"
            )
        return encoded

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, str):
        return value.encode("utf-8")

    # bool is an int subclass but True/1 must not collide
    if isinstance(value, int) and not isinstance(value, bool):
        # Lazy import to avoid circular dependency
        from zkmerkle.merkle.field import BLS12_381_SCALAR_MODULUS, ScalarField

        if not 0 <= value < BLS12_381_SCALAR_MODULUS:
            raise SerializationError(
                f"Integer {value} is outside the scalar field range [0, r)"
            )
        return ScalarField(value).to_canonical_bytes()

    raise SerializationError(
        f"No canonical encoding for value of type {type(value).__name__}"
    )


def decode_value(raw: Union[str, int], encoding: str = "utf8") -> Any:
    """
    Parse a textual value (e.g. from a JSON values file) into a leaf value.

    Args:
        raw: Text (or an integer for the field encoding)
        encoding: "utf8" (text as-is), "hex" (raw bytes, optional 0x prefix)
            or "field" (decimal or 0x-prefixed scalar field element)

    Returns:
        A value accepted by serialize_value()

    Raises:
        SerializationError: If the text cannot be decoded
    """
    if encoding == "utf8":
        if not isinstance(raw, str):
            raise SerializationError(f"utf8 values must be strings, got {raw!r}")
        return raw

    if encoding == "hex":
        if not isinstance(raw, str):
            raise SerializationError(f"hex values must be strings, got {raw!r}")
        text = raw[2:] if raw.lower().startswith("0x") else raw
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise SerializationError(f"Invalid hex value {raw!r}: {e}") from e

    if encoding == "field":
        from zkmerkle.merkle.field import BLS12_381_SCALAR_MODULUS, ScalarField

        if isinstance(raw, bool):
            raise SerializationError(f"field values must be integers, got {raw!r}")
        if isinstance(raw, int):
            number = raw
        elif isinstance(raw, str):
            try:
                number = int(raw.strip(), 0)
            except ValueError as e:
                raise SerializationError(f"Invalid field element {raw!r}") from e
        else:
            raise SerializationError(f"field values must be integers, got {raw!r}")
        if not 0 <= number < BLS12_381_SCALAR_MODULUS:
            raise SerializationError(
                f"Field element {number} is outside the range [0, r)"
            )
        return ScalarField(number)

    raise SerializationError(
        f"Unknown value encoding '{encoding}', must be one of {VALUE_ENCODINGS}"
    )

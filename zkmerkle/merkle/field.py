"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

BLS12-381 scalar field values as Merkle leaves.

Commitments built here are meant to be consumed by proving circuits over the
BLS12-381 scalar field, so field elements get a canonical leaf encoding that
matches the arkworks uncompressed layout: the reduced integer as 32
little-endian bytes.

This is a value container only. It performs no field arithmetic.
"""

import random
import secrets
from typing import Optional

from zkmerkle.exceptions import SerializationError
from zkmerkle.merkle.serialization import CanonicalSerializable


BLS12_381_SCALAR_MODULUS = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

SCALAR_SIZE = 32


class ScalarField(CanonicalSerializable):
    """
    Element of the BLS12-381 scalar field Fr.

    The value is reduced modulo r on construction, so negative integers wrap
    around. Instances are immutable and compare by reduced value.

    Example:
        >>> ScalarField(1).to_canonical_bytes().hex()
        '0100000000000000000000000000000000000000000000000000000000000000'
    """

    __slots__ = ("_value",)

    MODULUS = BLS12_381_SCALAR_MODULUS

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"ScalarField value must be an int, got {type(value).__name__}")
        object.__setattr__(self, "_value", value % self.MODULUS)

    def __setattr__(self, name, value):
        raise AttributeError("ScalarField is immutable")

    @property
    def value(self) -> int:
        return self._value

    def to_canonical_bytes(self) -> bytes:
        return self._value.to_bytes(SCALAR_SIZE, "little")

    @classmethod
    def from_canonical_bytes(cls, data: bytes) -> "ScalarField":
        """
        Decode a canonical 32-byte little-endian encoding.

        Raises:
            SerializationError: If the length is wrong or the integer is not
                reduced modulo r
        """
        if len(data) != SCALAR_SIZE:
            raise SerializationError(
                f"Scalar encoding must be {SCALAR_SIZE} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, "little")
        if value >= cls.MODULUS:
            raise SerializationError("Scalar encoding is not reduced modulo r")
        return cls(value)

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "ScalarField":
        """
        Sample a uniformly random element.

        Args:
            rng: Optional seeded random.Random for reproducible output. Uses
                the secrets module when omitted.
        """
        if rng is None:
            return cls(secrets.randbelow(cls.MODULUS))
        return cls(rng.randrange(cls.MODULUS))

    def __eq__(self, other) -> bool:
        if isinstance(other, ScalarField):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ScalarField, self._value))

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"ScalarField({self._value})"

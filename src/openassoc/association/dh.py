# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Diffie-Hellman sessions for encrypting the MAC key exchange.

   The consumer sends its modulus, generator and public key with the
   association request. The provider answers with its own public key and
   the MAC key XOR-ed with the hash of the shared secret. All the numbers
   are sent as the base64 encoding of their big-endian two's complement
   representation (btwoc).

"""

import hashlib
from binascii import a2b_base64 as base64decode
from binascii import b2a_base64 as base64encode
from typing import Final, Self

from cryptography.hazmat.primitives.asymmetric import dh

from .exceptions import AssociationError
from .types import AssociationSessionType, HashAlgorithm

__all__ = 'DEFAULT_GENERATOR', 'DEFAULT_MODULUS', 'DiffieHellmanSession', 'base64_to_int', 'btwoc', 'int_to_base64'


DEFAULT_MODULUS: Final = int(
    'DCF93A0B883972EC0E19989AC5A2CE310E1D37717E8D9571BB7623731866E61EF75A2E2'
    '7898B057F9891C2E27A639C3F29B60814581CD3B2CA3986D2683705577D45C2E7E52DC8'
    '1C7A171876E5CEA74B1448BFDFAF18828EFD2519F14E45E3826634AF1949E5B535CC829'
    'A483B8A76223E5D490A257F05BDFF16F2FB22C583AB',
    16,
)

DEFAULT_GENERATOR: Final = 2


def btwoc(value: int) -> bytes:
    """Return the shortest big-endian two's complement representation of a non-negative integer"""
    if value < 0:
        raise ValueError(f'Cannot encode negative values: {value!r}')
    return value.to_bytes(value.bit_length() // 8 + 1)


def int_to_base64(value: int) -> str:
    return base64encode(btwoc(value), newline=False).decode('ascii')


def base64_to_int(data: str) -> int:
    try:
        return int.from_bytes(base64decode(data))
    except ValueError as exc:
        raise AssociationError(f'Invalid base64 encoded number: {data!r}') from exc


class DiffieHellmanSession:
    type: AssociationSessionType

    def __init__(self, type: AssociationSessionType, private_key: dh.DHPrivateKey) -> None:  # noqa: A002
        if type.h_algorithm is None:
            raise AssociationError(f'A Diffie-Hellman session cannot be used with the {type} session type')
        self.type = type
        self._private_key = private_key
        self._parameter_numbers = private_key.parameters().parameter_numbers()

    def __repr__(self) -> str:
        return f'<{self.__class__.__qualname__} type={self.type}>'

    @classmethod
    def create(cls, type: AssociationSessionType, modulus: int = DEFAULT_MODULUS, generator: int = DEFAULT_GENERATOR) -> Self:  # noqa: A002
        if type.h_algorithm is None:
            raise AssociationError(f'A Diffie-Hellman session cannot be used with the {type} session type')
        try:
            parameters = dh.DHParameterNumbers(modulus, generator).parameters()
        except ValueError as exc:
            raise AssociationError(f'Invalid Diffie-Hellman parameters: {exc}') from exc
        return cls(type, parameters.generate_private_key())

    @classmethod
    def from_base64(cls, type: AssociationSessionType, modulus: str, generator: str) -> Self:  # noqa: A002
        return cls.create(type, base64_to_int(modulus), base64_to_int(generator))

    @property
    def h_algorithm(self) -> HashAlgorithm:
        assert self.type.h_algorithm is not None  # noqa: S101 (used by type checkers)
        return self.type.h_algorithm

    @property
    def modulus(self) -> str:
        return int_to_base64(self._parameter_numbers.p)

    @property
    def generator(self) -> str:
        return int_to_base64(self._parameter_numbers.g)

    @property
    def public_key(self) -> str:
        return int_to_base64(self._private_key.public_key().public_numbers().y)

    def compute_shared_secret(self, other_public: str) -> bytes:
        """Return the btwoc representation of the secret shared with the owner of other_public"""
        try:
            peer_key = dh.DHPublicNumbers(base64_to_int(other_public), self._parameter_numbers).public_key()
            secret = self._private_key.exchange(peer_key)
        except ValueError as exc:
            raise AssociationError(f'Cannot compute the Diffie-Hellman shared secret: {exc}') from exc
        return btwoc(int.from_bytes(secret))

    def encrypt_mac_key(self, mac_key: bytes, other_public: str) -> str:
        return base64encode(self._xor_secret(mac_key, other_public), newline=False).decode('ascii')

    def decrypt_mac_key(self, enc_mac_key: str, other_public: str) -> bytes:
        try:
            data = base64decode(enc_mac_key)
        except ValueError as exc:
            raise AssociationError(f'Invalid base64 encoded MAC key: {enc_mac_key!r}') from exc
        return self._xor_secret(data, other_public)

    def _xor_secret(self, data: bytes, other_public: str) -> bytes:
        digest = hashlib.new(self.h_algorithm.hashlib_name, self.compute_shared_secret(other_public)).digest()
        if len(data) != len(digest):
            raise AssociationError(f'The MAC key length does not match the {self.h_algorithm} digest size ({len(data)} != {len(digest)})')
        return bytes(a ^ b for a, b in zip(data, digest, strict=True))

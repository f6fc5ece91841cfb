# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# An association session type is the combination of a session type (how the
# MAC key is transported: in clear or encrypted with a Diffie-Hellman shared
# secret), an association type (the MAC algorithm used to sign assertions)
# and the protocol generation that allows the combination. The same session
# and association type names can be valid in both OpenID 1.x and OpenID 2.0,
# but they are distinct session types because the wire encoding differs.
# All the supported types register themselves when defined and can be found
# with AssociationSessionType.resolve().


from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Final, Self, TypeAlias

from .exceptions import AssociationError

__all__ = (  # noqa: RUF022
    'AssociationType',
    'SessionType',
    'HashAlgorithm',
    'AssociationSessionType',

    'NO_ENCRYPTION_COMPAT_SHA1MAC',
    'NO_ENCRYPTION_SHA1MAC',
    'NO_ENCRYPTION_SHA256MAC',
    'DH_COMPAT_SHA1',
    'DH_SHA1',
    'DH_SHA256',
)


class StringEnum(StrEnum):
    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}.{self.name}'


class AssociationType(StringEnum):
    HMAC_SHA1 = 'HMAC-SHA1'
    HMAC_SHA256 = 'HMAC-SHA256'


class SessionType(StringEnum):
    NO_ENCRYPTION_COMPAT = ''
    NO_ENCRYPTION = 'no-encryption'
    DH_SHA1 = 'DH-SHA1'
    DH_SHA256 = 'DH-SHA256'


class HashAlgorithm(StringEnum):
    SHA1 = 'SHA-1'
    SHA256 = 'SHA-256'

    @property
    def hashlib_name(self) -> str:
        return self.lower().replace('-', '')


TypeKey: TypeAlias = tuple[str, str, bool]


@dataclass(frozen=True, kw_only=True, slots=True)
class AssociationSessionType:
    session_type: Final[str]
    association_type: Final[str]
    h_algorithm: Final[HashAlgorithm | None]
    is_version2: Final[bool]
    mac_key_size: Final[int]
    order: Final[int]

    _registry: ClassVar[MutableMapping[TypeKey, Self]] = {}

    def __post_init__(self) -> None:
        if self.key in self._registry:
            raise ValueError(f'The association session type is already defined: {self._registry[self.key]}')
        self._registry[self.key] = self

    def __str__(self) -> str:
        return f'{self.session_type or "<no-encryption>"}:{self.association_type}:{"OpenID2" if self.is_version2 else "OpenID1"}'

    @property
    def key(self) -> TypeKey:
        return self.session_type, self.association_type, self.is_version2

    @property
    def uses_key_agreement(self) -> bool:
        return self.h_algorithm is not None

    @classmethod
    def resolve(cls, session_type: str | None, association_type: str | None, legacy: bool = False) -> Self:
        """
        Find the association session type for the given names.

        In legacy (OpenID 1.x) mode a missing session type means no encryption
        and a missing association type defaults to HMAC-SHA1. In OpenID 2.0
        mode both must be provided. Raises AssociationError for unsupported
        combinations.
        """
        if legacy:
            session_type = SessionType.NO_ENCRYPTION_COMPAT if session_type is None else session_type
            association_type = AssociationType.HMAC_SHA1 if association_type is None else association_type
        elif session_type is None or association_type is None:
            raise AssociationError(f'Both the session type and the association type are required for OpenID 2.0 (got {session_type!r} and {association_type!r})')
        try:
            return cls._registry[session_type, association_type, not legacy]
        except KeyError as exc:
            mode = 'OpenID 1.x' if legacy else 'OpenID 2.0'
            raise AssociationError(f'Unsupported {mode} session / association type: {session_type!r} / {association_type!r}') from exc

    @classmethod
    def supported_types(cls, *, version2: bool | None = None) -> list[Self]:
        """Return the supported types in preference order, optionally filtered by protocol generation"""
        return sorted((item for item in cls._registry.values() if version2 is None or item.is_version2 is version2), key=lambda item: item.order)


NO_ENCRYPTION_COMPAT_SHA1MAC = AssociationSessionType(
    session_type=SessionType.NO_ENCRYPTION_COMPAT,
    association_type=AssociationType.HMAC_SHA1,
    h_algorithm=None,
    is_version2=False,
    mac_key_size=20,
    order=0,
)

NO_ENCRYPTION_SHA1MAC = AssociationSessionType(
    session_type=SessionType.NO_ENCRYPTION,
    association_type=AssociationType.HMAC_SHA1,
    h_algorithm=None,
    is_version2=True,
    mac_key_size=20,
    order=1,
)

NO_ENCRYPTION_SHA256MAC = AssociationSessionType(
    session_type=SessionType.NO_ENCRYPTION,
    association_type=AssociationType.HMAC_SHA256,
    h_algorithm=None,
    is_version2=True,
    mac_key_size=32,
    order=2,
)

DH_COMPAT_SHA1 = AssociationSessionType(
    session_type=SessionType.DH_SHA1,
    association_type=AssociationType.HMAC_SHA1,
    h_algorithm=HashAlgorithm.SHA1,
    is_version2=False,
    mac_key_size=20,
    order=3,
)

DH_SHA1 = AssociationSessionType(
    session_type=SessionType.DH_SHA1,
    association_type=AssociationType.HMAC_SHA1,
    h_algorithm=HashAlgorithm.SHA1,
    is_version2=True,
    mac_key_size=20,
    order=4,
)

DH_SHA256 = AssociationSessionType(
    session_type=SessionType.DH_SHA256,
    association_type=AssociationType.HMAC_SHA256,
    h_algorithm=HashAlgorithm.SHA256,
    is_version2=True,
    mac_key_size=32,
    order=5,
)

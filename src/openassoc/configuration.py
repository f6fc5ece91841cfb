# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Self

from openassoc.association import DEFAULT_GENERATOR, DEFAULT_MODULUS, AssociationSessionType, AssociationType, DiffieHellmanSession, SessionType
from openassoc.message import AssociationRequest

__all__ = 'Configuration',  # noqa: COM818


_true_values = frozenset({'1', 'true', 'yes', 'on'})
_false_values = frozenset({'0', 'false', 'no', 'off'})


def _boolean(value: Any) -> bool:
    match value:
        case bool():
            return value
        case str() if value.lower() in _true_values:
            return True
        case str() if value.lower() in _false_values:
            return False
        case _:
            raise ValueError(f'Invalid boolean value: {value!r}')


def _integer(value: Any) -> int:
    match value:
        case bool():
            raise ValueError(f'Invalid integer value: {value!r}')
        case int():
            return value
        case str():
            return int(value, 0)
        case _:
            raise ValueError(f'Invalid integer value: {value!r}')


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f'Invalid string value: {value!r}')
    return value


@dataclass(frozen=True, kw_only=True, slots=True)
class Configuration:
    """The association preferences of a relying party"""

    session_type: str = SessionType.DH_SHA256
    assoc_type: str = AssociationType.HMAC_SHA256
    compatibility: bool = False
    dh_modulus: int = DEFAULT_MODULUS
    dh_generator: int = DEFAULT_GENERATOR

    _converters: ClassVar[Mapping[str, Callable[[Any], Any]]] = {
        'session_type': _string,
        'assoc_type': _string,
        'compatibility': _boolean,
        'dh_modulus': _integer,
        'dh_generator': _integer,
    }

    def __post_init__(self) -> None:
        if self.dh_generator < 2:
            raise ValueError(f'The Diffie-Hellman generator must be at least 2: {self.dh_generator!r}')
        if self.dh_modulus <= self.dh_generator:
            raise ValueError('The Diffie-Hellman modulus must be greater than the generator')
        self.association_session_type()

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> Self:
        """Create a configuration from a settings mapping, converting string values as needed"""
        names = {field.name for field in fields(cls)}
        unknown = [name for name in settings if name not in names]
        if unknown:
            raise TypeError(f'Unknown configuration settings: {", ".join(unknown)}')
        return cls(**{name: cls._converters[name](value) for name, value in settings.items()})

    def association_session_type(self) -> AssociationSessionType:
        return AssociationSessionType.resolve(self.session_type, self.assoc_type, legacy=self.compatibility)

    def association_request(self) -> AssociationRequest:
        """Create a validated association request with a fresh Diffie-Hellman session if the session type needs one"""
        session_type = self.association_session_type()
        if session_type.uses_key_agreement:
            dh_session = DiffieHellmanSession.create(session_type, self.dh_modulus, self.dh_generator)
        else:
            dh_session = None
        return AssociationRequest.create(session_type, dh_session)

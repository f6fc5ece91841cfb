# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
The OpenID association request.

   A relying party sends this request to an OpenID provider in order to
   establish a shared secret that is later used to verify the signatures
   of positive assertions. Both OpenID 2.0 and OpenID 1.x requests are
   handled. The protocol generation and the use of encryption for the MAC
   key are encoded redundantly on the wire (the presence of openid.ns, the
   session type name and the presence of the Diffie-Hellman parameters)
   and a request is only valid if all the encodings agree.

"""

import logging
from collections.abc import Mapping
from typing import Final, Self

from openassoc.association import AssociationError, AssociationSessionType, DiffieHellmanSession

from .base import OPENID2_NS, Message
from .exceptions import InvalidCombinationError, MalformedParametersError
from .parameters import ParameterList

__all__ = 'MODE_ASSOCIATE', 'AssociationRequest', 'check_session_combination'


MODE_ASSOCIATE: Final = 'associate'

# OpenID 1.x requests may have an empty session type, but the key must be present
REQUIRED_FIELDS: Final = (
    'openid.mode',
    'openid.session_type',
)

OPTIONAL_FIELDS: Final = (
    'openid.ns',                    # not in OpenID 1.x requests
    'openid.assoc_type',            # can be missing in OpenID 1.x requests
    'openid.dh_modulus',
    'openid.dh_gen',
    'openid.dh_consumer_public',
)

DH_FIELDS: Final = ('openid.dh_modulus', 'openid.dh_gen', 'openid.dh_consumer_public')


log = logging.getLogger(__name__)


def check_session_combination(session_type: AssociationSessionType | None, dh_session: DiffieHellmanSession | None) -> None:
    """Make sure that the Diffie-Hellman session (or its absence) matches the association session type"""
    if session_type is None or (dh_session is None and session_type.h_algorithm is not None) or (dh_session is not None and dh_session.type != session_type):
        raise InvalidCombinationError(f'Invalid association / session combination specified: {session_type} with DH session {dh_session!r}')


class AssociationRequest:
    dh_session: DiffieHellmanSession | None

    def __init__(self, parameters: Mapping[str, str] | None = None, /, *, dh_session: DiffieHellmanSession | None = None) -> None:
        self._message = Message(parameters, required_fields=REQUIRED_FIELDS, optional_fields=OPTIONAL_FIELDS)
        self.dh_session = dh_session

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self._message.parameters!r})'

    @classmethod
    def build(cls, session_type: AssociationSessionType, dh_session: DiffieHellmanSession | None = None) -> Self:
        """
        Assemble an outgoing request for the given session type.

        The Diffie-Hellman session is required for the session types that
        encrypt the MAC key and must be None for the no-encryption types.
        Nothing is validated here, use create() to get a validated request.
        """
        request = cls(dh_session=dh_session)
        message = request._message
        if session_type.is_version2:
            message.set('openid.ns', OPENID2_NS)
        message.set('openid.mode', MODE_ASSOCIATE)
        message.set('openid.session_type', str(session_type.session_type))
        message.set('openid.assoc_type', str(session_type.association_type))
        if dh_session is not None:
            message.set('openid.dh_modulus', dh_session.modulus)
            message.set('openid.dh_gen', dh_session.generator)
            message.set('openid.dh_consumer_public', dh_session.public_key)
        return request

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, str]) -> Self:
        """Wrap the parameters of an incoming request without validating them"""
        return cls(ParameterList(parameters))

    @classmethod
    def create(cls, session_type: AssociationSessionType | None, dh_session: DiffieHellmanSession | None = None) -> Self:
        check_session_combination(session_type, dh_session)
        assert session_type is not None  # noqa: S101 (used by type checkers)
        request = cls.build(session_type, dh_session)
        request.validate()
        return request

    @classmethod
    def parse(cls, parameters: Mapping[str, str]) -> Self:
        request = cls.from_parameters(parameters)
        request.validate()
        return request

    @property
    def parameters(self) -> ParameterList:
        return self._message.parameters

    @property
    def is_version2(self) -> bool:
        return self._message.get('openid.ns') == OPENID2_NS

    @property
    def session_type_name(self) -> str | None:
        return self._message.get('openid.session_type')

    @property
    def association_type_name(self) -> str | None:
        return self._message.get('openid.assoc_type')

    @property
    def dh_modulus(self) -> str | None:
        return self._message.get('openid.dh_modulus')

    @property
    def dh_gen(self) -> str | None:
        return self._message.get('openid.dh_gen')

    @property
    def dh_consumer_public(self) -> str | None:
        return self._message.get('openid.dh_consumer_public')

    @property
    def type(self) -> AssociationSessionType:
        """The association session type of the request (raises AssociationError if unsupported)"""
        return AssociationSessionType.resolve(self.session_type_name, self.association_type_name, legacy=not self.is_version2)

    def get(self, key: str) -> str | None:
        return self._message.get(key)

    def has(self, key: str) -> bool:
        return self._message.has(key)

    def is_valid(self) -> bool:
        if not self._message.is_valid():
            return False

        undeclared_fields = self._message.undeclared_fields()
        if undeclared_fields:
            log.debug('Association request has extra fields: %s', ', '.join(undeclared_fields))

        # the session type lookup also covers most of the compatibility checks
        try:
            session_type = self.type
        except AssociationError as exc:
            log.debug('Invalid association request: %s', exc)
            return False

        if session_type.is_version2 != self.is_version2:
            log.debug('Association request protocol version does not match the %s session type', session_type)
            return False

        if not self.is_version2 and not self._message.has('openid.session_type'):
            log.debug('OpenID 1.x association request without a session type')
            return False

        present = [key for key in DH_FIELDS if self._message.has(key)]
        if session_type.uses_key_agreement and len(present) != len(DH_FIELDS):
            log.debug('Association request for %s is missing Diffie-Hellman parameters: %s', session_type, ', '.join(key for key in DH_FIELDS if key not in present))
            return False
        if not session_type.uses_key_agreement and present:
            log.debug('No-encryption association request carries Diffie-Hellman parameters: %s', ', '.join(present))
            return False

        return True

    def validate(self) -> None:
        if not self.is_valid():
            log.debug('Rejected association request with parameters: %s', ', '.join(self._message.parameters))
            raise MalformedParametersError('Invalid set of parameters for the requested message type')

    def to_form(self) -> str:
        return self._message.to_form()

    def to_kv(self) -> str:
        return self._message.to_kv()

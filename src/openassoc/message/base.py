# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
The generic keyed message.

   OpenID messages are a set of key/value pairs, where the keys carry the
   "openid." prefix when sent as form data. Each message type declares the
   fields it requires and the fields it may carry. Fields outside these
   declarations are tolerated (extensions add their own fields), which
   means that the structural check only looks at the required fields and
   at the well-formedness of every parameter.

"""

import logging
from collections.abc import Collection, Mapping
from typing import Final

from .exceptions import MessageError
from .parameters import ParameterList

__all__ = 'OPENID1_NS', 'OPENID11_NS', 'OPENID2_NS', 'Message'


OPENID1_NS: Final = 'http://openid.net/signon/1.0'
OPENID11_NS: Final = 'http://openid.net/signon/1.1'
OPENID2_NS: Final = 'http://specs.openid.net/auth/2.0'


log = logging.getLogger(__name__)


class Message:
    parameters: ParameterList
    required_fields: tuple[str, ...]
    optional_fields: tuple[str, ...]

    def __init__(self, parameters: Mapping[str, str] | None = None, /, *, required_fields: Collection[str] = (), optional_fields: Collection[str] = ()) -> None:
        match parameters:
            case ParameterList():
                self.parameters = parameters
            case None:
                self.parameters = ParameterList()
            case _:
                self.parameters = ParameterList(parameters)
        self.required_fields = tuple(required_fields)
        self.optional_fields = tuple(optional_fields)

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self.parameters!r})'

    def get(self, key: str) -> str | None:
        return self.parameters.get(key)

    def set(self, key: str, value: str) -> None:
        self.parameters[key] = value

    def has(self, key: str) -> bool:
        return key in self.parameters

    def undeclared_fields(self) -> list[str]:
        declared = {*self.required_fields, *self.optional_fields}
        return [key for key in self.parameters if key not in declared]

    def is_valid(self) -> bool:
        for parameter in self.parameters.parameters():
            if not parameter.is_valid():
                log.debug('Malformed message parameter: %r', parameter)
                return False
        missing = [key for key in self.required_fields if key not in self.parameters]
        if missing:
            log.debug('Message is missing required fields: %s', ', '.join(missing))
            return False
        return True

    def to_form(self) -> str:
        return self.parameters.to_form()

    def to_kv(self) -> str:
        invalid = [parameter for parameter in self.parameters.parameters() if not parameter.is_valid()]
        if invalid:
            raise MessageError(f'Cannot encode parameters in key-value form: {", ".join(repr(parameter.key) for parameter in invalid)}')
        return self.parameters.to_kv()

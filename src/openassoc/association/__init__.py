# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .dh import DEFAULT_GENERATOR, DEFAULT_MODULUS, DiffieHellmanSession
from .exceptions import AssociationError
from .types import (
    DH_COMPAT_SHA1,
    DH_SHA1,
    DH_SHA256,
    NO_ENCRYPTION_COMPAT_SHA1MAC,
    NO_ENCRYPTION_SHA1MAC,
    NO_ENCRYPTION_SHA256MAC,
    AssociationSessionType,
    AssociationType,
    HashAlgorithm,
    SessionType,
)

__all__ = (  # noqa: RUF022
    'AssociationError',
    'AssociationSessionType',
    'AssociationType',
    'SessionType',
    'HashAlgorithm',
    'DiffieHellmanSession',
    'DEFAULT_GENERATOR',
    'DEFAULT_MODULUS',

    'NO_ENCRYPTION_COMPAT_SHA1MAC',
    'NO_ENCRYPTION_SHA1MAC',
    'NO_ENCRYPTION_SHA256MAC',
    'DH_COMPAT_SHA1',
    'DH_SHA1',
    'DH_SHA256',
)

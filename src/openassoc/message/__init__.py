# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .association import MODE_ASSOCIATE, AssociationRequest, check_session_combination
from .base import OPENID1_NS, OPENID2_NS, OPENID11_NS, Message
from .exceptions import InvalidCombinationError, MalformedParametersError, MessageError
from .parameters import Parameter, ParameterList

__all__ = (  # noqa: RUF022
    # Namespaces

    'OPENID1_NS',
    'OPENID11_NS',
    'OPENID2_NS',

    # Generic messages

    'Parameter',
    'ParameterList',
    'Message',

    # Association requests

    'MODE_ASSOCIATE',
    'AssociationRequest',
    'check_session_combination',

    # Exceptions

    'MessageError',
    'InvalidCombinationError',
    'MalformedParametersError',
)

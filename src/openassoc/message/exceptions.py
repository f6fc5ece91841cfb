# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later


__all__ = 'MessageError', 'InvalidCombinationError', 'MalformedParametersError'  # noqa: RUF022


class MessageError(ValueError):
    """Base class for the errors raised while creating or parsing messages."""


class InvalidCombinationError(MessageError):
    """Raised when the session type and the Diffie-Hellman session of a request do not match."""


class MalformedParametersError(MessageError):
    """Raised when a message does not hold a valid set of parameters for its type."""

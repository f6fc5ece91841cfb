# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later


__all__ = 'AssociationError',  # noqa: COM818


class AssociationError(ValueError):
    """Raised for unsupported association / session types and invalid key agreement data."""

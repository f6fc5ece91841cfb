# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Self
from urllib.parse import parse_qsl, urlencode

from .exceptions import MessageError

__all__ = 'Parameter', 'ParameterList'


@dataclass(frozen=True, slots=True)
class Parameter:
    key: str
    value: str

    def is_valid(self) -> bool:
        # these would break the key-value form encoding
        return '\n' not in self.key and ':' not in self.key and '\n' not in self.value


class ParameterList(MutableMapping[str, str]):
    """
    An ordered collection of message parameters.

    Keys are unique and keep the position where they were first added, even
    if their value is later replaced. The insertion order is the order used
    when the parameters are serialized.
    """

    def __init__(self, parameters: Mapping[str, str] | Iterable[tuple[str, str]] = (), /) -> None:
        self._data: dict[str, str] = {}
        self.update(parameters)

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self._data!r})'

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(f'Parameter keys and values must be strings, got {key!r}: {value!r}')
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def parameters(self) -> list[Parameter]:
        return [Parameter(key, value) for key, value in self._data.items()]

    @classmethod
    def from_form(cls, data: str) -> Self:
        """Parse application/x-www-form-urlencoded data, as used by direct requests"""
        instance = cls()
        for key, value in parse_qsl(data, keep_blank_values=True):
            if key in instance:
                raise MessageError(f'Duplicate parameter in form data: {key!r}')
            instance[key] = value
        return instance

    @classmethod
    def from_kv(cls, data: str) -> Self:
        """Parse key-value form data (one key:value pair per line)"""
        instance = cls()
        lines = data.split('\n')
        if lines and lines[-1] == '':
            del lines[-1]
        for number, line in enumerate(lines, start=1):
            key, separator, value = line.partition(':')
            if not separator:
                raise MessageError(f'Invalid key-value form data on line {number}: {line!r}')
            if key in instance:
                raise MessageError(f'Duplicate parameter in key-value form data: {key!r}')
            instance[key] = value
        return instance

    def to_form(self) -> str:
        return urlencode(list(self._data.items()))

    def to_kv(self) -> str:
        return ''.join(f'{key}:{value}\n' for key, value in self._data.items())

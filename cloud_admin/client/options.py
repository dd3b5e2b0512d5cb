from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from cloud_admin.client.exceptions import DuplicateOptionError, InvalidOptionError


class OptionType(str, Enum):
    PAGE_SIZE = 'pageSize'
    PAGE_TOKEN = 'pageToken'
    FILTER = 'filter'

    def __str__(self):
        return self.name


class ListOption:
    """ Call-time option for listing operations """

    __slots__ = ('__option_type', '__value')

    def __init__(self, option_type: OptionType, value: Any):
        self.__option_type = OptionType(option_type)
        self.__value = value

    @property
    def option_type(self) -> OptionType:
        return self.__option_type

    @property
    def value(self) -> Any:
        return self.__value

    @classmethod
    def page_size(cls, page_size: int) -> 'ListOption':
        """ Maximum number of values per page """
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise InvalidOptionError(f'The page size must be a positive integer (given: {page_size!r})')
        return cls(OptionType.PAGE_SIZE, page_size)

    @classmethod
    def page_token(cls, page_token: str) -> 'ListOption':
        """ Cursor of the page to start listing from """
        return cls(OptionType.PAGE_TOKEN, page_token)

    @classmethod
    def filter(cls, expression: str) -> 'ListOption':
        """ Server-side filter expression (database sessions only) """
        return cls(OptionType.FILTER, expression)

    def __eq__(self, other):
        return isinstance(other, ListOption) \
            and self.option_type == other.option_type \
            and self.value == other.value

    def __hash__(self):
        return hash((self.option_type, self.value))

    def __repr__(self):
        return f'ListOption({self.option_type!s}={self.value!r})'


class OptionMap(Mapping):
    """ Immutable mapping from option type to value for one listing call chain """

    __slots__ = ('__options',)

    def __init__(self, options: Optional[Mapping[OptionType, Any]] = None):
        self.__options: Mapping[OptionType, Any] = MappingProxyType(dict(options or {}))

    @classmethod
    def build(cls, *options: ListOption) -> 'OptionMap':
        merged: Dict[OptionType, Any] = dict()
        for option in options:
            if option.option_type in merged:
                raise DuplicateOptionError(option.option_type)
            merged[option.option_type] = option.value
        return cls(merged)

    def get(self, option_type: OptionType, default: Any = None) -> Any:
        return self.__options.get(option_type, default)

    def with_page_token(self, page_token: Optional[str]) -> 'OptionMap':
        """ Copy of this map with the cursor replaced, or removed when ``page_token`` is None """
        options = dict(self.__options)
        options.pop(OptionType.PAGE_TOKEN, None)
        if page_token is not None:
            options[OptionType.PAGE_TOKEN] = page_token
        return OptionMap(options)

    def items_in_order(self) -> Tuple[Tuple[OptionType, Any], ...]:
        return tuple((option_type, self.__options[option_type])
                     for option_type in OptionType
                     if option_type in self.__options)

    def __getitem__(self, option_type: OptionType) -> Any:
        return self.__options[option_type]

    def __iter__(self) -> Iterator[OptionType]:
        return iter(self.__options)

    def __len__(self) -> int:
        return len(self.__options)

    def __eq__(self, other):
        if isinstance(other, Mapping):
            return dict(self.__options) == dict(other)
        return NotImplemented

    def __hash__(self):
        return hash(self.items_in_order())

    def __repr__(self):
        return f'OptionMap({", ".join(f"{k!s}={v!r}" for k, v in self.items_in_order())})'

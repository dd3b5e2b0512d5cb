""" Cursor-based pagination

    Listing is implemented once, here. A resource kind only describes its listing with a ``ListingSpec``, i.e., how to
    build the request, how to invoke the channel and how to read the values and the next-page token out of the
    response. Everything else (cursor handling, continuation, blocking and non-blocking access) is shared.
"""
from concurrent.futures import Future
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from cloud_admin.client.exceptions import ClosedServiceError, InvalidOptionError
from cloud_admin.client.futures import completed, failed, transform, wait_for
from cloud_admin.client.options import OptionMap, OptionType
from cloud_admin.client.result_iterator import InactiveLoaderError, ResultIterator, ResultLoader
from cloud_admin.rpc.channel import RpcChannel

if TYPE_CHECKING:
    from cloud_admin.client.base_client import BaseServiceClient

T = TypeVar('T')
RequestT = TypeVar('RequestT')
ResponseT = TypeVar('ResponseT')

PAGING_OPTIONS: FrozenSet[OptionType] = frozenset({OptionType.PAGE_SIZE, OptionType.PAGE_TOKEN})


@dataclass(frozen=True)
class ListingSpec(Generic[RequestT, ResponseT, T]):
    name: str

    build_request: Callable[[str, Optional[str], OptionMap], RequestT]
    """ (project ID, parent resource name or None, options) → request """

    invoke: Callable[[RpcChannel, RequestT], 'Future[ResponseT]']

    unmarshal: Callable[[ResponseT], Tuple[Optional[Iterable[T]], Optional[str]]]
    """ response → (values or None, raw next-page token) """

    accepted_options: FrozenSet[OptionType] = PAGING_OPTIONS
    """ The option types the request builder reads. Any other option is rejected. """

    def check_options(self, options: OptionMap):
        unsupported = [option_type for option_type in OptionType
                       if option_type in options and option_type not in self.accepted_options]
        if unsupported:
            raise InvalidOptionError(f'Listing {self.name} does not support '
                                     f'{", ".join(str(option_type) for option_type in unsupported)}')


@dataclass(frozen=True)
class NextPageFetcher(Generic[T]):
    """ Everything needed to fetch a page without any state from the caller """
    listing: ListingSpec
    binding: 'BaseServiceClient'
    parent: Optional[str]
    request_options: OptionMap
    cursor: Optional[str] = None

    @classmethod
    def first(cls,
              listing: ListingSpec,
              binding: 'BaseServiceClient',
              parent: Optional[str],
              request_options: OptionMap) -> 'NextPageFetcher[T]':
        return cls(listing, binding, parent, request_options, request_options.get(OptionType.PAGE_TOKEN))

    def advance(self, cursor: Optional[str]) -> 'NextPageFetcher[T]':
        """ Fetcher for the page at ``cursor``. The other options are carried over unchanged. """
        return replace(self, request_options=self.request_options.with_page_token(cursor), cursor=cursor)

    def fetch(self) -> 'Future[Page[T]]':
        return fetch_page(self)


class Page(Generic[T]):
    """ One batch of listing results

        A page never changes. Fetching the next page yields a new page with its own continuation, so a page can be
        kept, shared between threads or dropped at any time.
    """

    __slots__ = ('__values', '__next_page_token', '__fetcher')

    def __init__(self, values: Iterable[T], next_page_token: Optional[str], fetcher: NextPageFetcher[T]):
        self.__values: Tuple[T, ...] = tuple(values)
        self.__next_page_token = next_page_token
        self.__fetcher = fetcher

    @property
    def values(self) -> Tuple[T, ...]:
        return self.__values

    @property
    def next_page_token(self) -> Optional[str]:
        """ The cursor of the next page, or None if this is the last page """
        return self.__next_page_token

    @property
    def fetcher(self) -> NextPageFetcher[T]:
        return self.__fetcher

    def has_next_page(self) -> bool:
        return self.__next_page_token is not None

    def get_next_page_async(self) -> 'Future[Page[T]]':
        if not self.has_next_page():
            # The service already reported the end of the list. Asking again from no cursor would restart the
            # listing from the first page.
            try:
                self.__fetcher.binding.get_rpc()
            except ClosedServiceError as e:
                return failed(e)
            return completed(Page((), None, self.__fetcher))
        return self.__fetcher.fetch()

    def get_next_page(self) -> 'Page[T]':
        return wait_for(self.get_next_page_async())

    def iterate_all(self) -> Iterator[T]:
        """ Iterate over the values of this page and of every page after it, fetching pages on demand """
        return ResultIterator(PageResultLoader(self))

    def __repr__(self):
        return f'Page({self.__fetcher.listing.name}, values={len(self.__values)}, ' \
               f'next_page_token={self.__next_page_token!r})'


class PageResultLoader(ResultLoader[T]):
    """ Walk a chain of pages, starting with (and including) the given page """

    def __init__(self, first_page: Page[T]):
        self.__current_page: Optional[Page[T]] = None
        self.__first_page = first_page

    def has_more(self) -> bool:
        return self.__current_page is None or self.__current_page.has_next_page()

    def load(self) -> List[T]:
        if self.__current_page is None:
            self.__current_page = self.__first_page
        elif self.__current_page.has_next_page():
            self.__current_page = self.__current_page.get_next_page()
        else:
            raise InactiveLoaderError(self.__current_page.fetcher.listing.name)

        self.logger.debug(f'Loaded {len(self.__current_page.values)} value(s) '
                          f'(next page: {self.__current_page.next_page_token})')

        return list(self.__current_page.values)


def fetch_page(fetcher: NextPageFetcher[T]) -> 'Future[Page[T]]':
    """ Issue the listing request described by ``fetcher`` and resolve it into a page """
    listing = fetcher.listing
    binding = fetcher.binding

    try:
        rpc = binding.get_rpc()
    except ClosedServiceError as e:
        return failed(e)

    binding.logger.debug(f'{listing.name}: requesting page (parent: {fetcher.parent}, cursor: {fetcher.cursor})')

    def _to_page(response: Any) -> Page[T]:
        values, raw_next_page_token = listing.unmarshal(response)
        # An empty token is how the service reports the end of the list.
        cursor = raw_next_page_token if raw_next_page_token else None
        return Page(values if values is not None else (), cursor, fetcher.advance(cursor))

    try:
        request = listing.build_request(binding.project_id, fetcher.parent, fetcher.request_options)
        pending = listing.invoke(rpc, request)
    except Exception as e:
        binding.logger.debug(f'{listing.name}: request failed before it was sent ({type(e).__name__}: {e})')
        return failed(e)

    return transform(pending, _to_page)

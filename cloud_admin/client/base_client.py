from abc import ABC
from concurrent.futures import Future
from threading import Lock
from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar
from uuid import uuid4

from cloud_admin.client.exceptions import ClosedServiceError
from cloud_admin.client.futures import failed, transform
from cloud_admin.client.models import ServiceOptions
from cloud_admin.client.options import ListOption, OptionMap
from cloud_admin.client.page import ListingSpec, NextPageFetcher, Page
from cloud_admin.common.logger import TraceableLogger, get_logger
from cloud_admin.common.tracing import Span
from cloud_admin.feature_flags import in_global_debug_mode
from cloud_admin.rpc.channel import RpcChannel
from cloud_admin.rpc.messages import Empty, Policy, TestIamPermissionsResponse

R = TypeVar('R')
T = TypeVar('T')


def empty_to_boolean(response: Optional[Empty]) -> bool:
    return response is not None


def empty_to_none(response: Optional[Empty]) -> None:
    return None


def policy_from_pb(policy: Optional[Policy]) -> Optional[Policy]:
    # Policy records are handed over as they are. Their marshalling belongs to the channel.
    return policy


def permissions_from_pb(permissions: Sequence[str]) -> Callable[[TestIamPermissionsResponse], List[bool]]:
    """ Map the held permissions reported by the service back onto the requested permissions, in request order """
    requested = list(permissions)

    def _answer(response: TestIamPermissionsResponse) -> List[bool]:
        held = set(response.permissions or [])
        return [permission in held for permission in requested]

    return _answer


class BaseServiceClient(ABC):
    """ The base class for all clients

        Every operation comes in two forms. The asynchronous form returns a future and never blocks. The synchronous
        form waits for the future of its asynchronous twin.
    """

    def __init__(self, options: ServiceOptions):
        self._uuid = str(uuid4())
        self._options = options
        self._logger = get_logger(f'{type(self).__name__}/{self._options.project_id}'
                                  if in_global_debug_mode
                                  else type(self).__name__)
        self.__close_lock = Lock()
        self.__closed = False

    @property
    def options(self) -> ServiceOptions:
        return self._options

    @property
    def project_id(self) -> str:
        return self._options.project_id

    @property
    def logger(self) -> TraceableLogger:
        return self._logger

    @property
    def closed(self) -> bool:
        return self.__closed

    def get_rpc(self) -> RpcChannel:
        """ The channel to use for the next call, unless the client is closed """
        if self.__closed:
            raise ClosedServiceError(type(self).__name__)
        return self._options.rpc

    def close(self):
        """ Close the client and its channel. Closing an already-closed client does nothing. """
        with self.__close_lock:
            if self.__closed:
                return
            self.__closed = True

        self._logger.debug('Closing the channel')
        self._options.rpc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @classmethod
    def make(cls, rpc: RpcChannel, project_id: Optional[str] = None):
        """ Create this class with the given channel and project """
        return cls(ServiceOptions.make(rpc, project_id))

    def _call(self,
              operation: str,
              invoke: Callable[[RpcChannel], 'Future[Any]'],
              function: Callable[[Any], R],
              trace: Optional[Span] = None) -> 'Future[R]':
        trace = trace or Span(origin=self)
        local_logger = trace.create_span_logger(self._logger)

        try:
            rpc = self.get_rpc()
        except ClosedServiceError as e:
            local_logger.debug(f'{operation}: rejected ({e})')
            return failed(e)

        local_logger.debug(operation)

        try:
            pending = invoke(rpc)
        except Exception as e:
            local_logger.debug(f'{operation}: failed before it was sent ({type(e).__name__}: {e})')
            return failed(e)

        return transform(pending, function)

    def _list(self,
              listing: ListingSpec,
              parent: Optional[str],
              options: Iterable[ListOption]) -> 'Future[Page[T]]':
        # Invalid options are rejected here, before anything is sent.
        request_options = OptionMap.build(*options)
        listing.check_options(request_options)
        return NextPageFetcher.first(listing, self, parent, request_options).fetch()

from abc import ABC, abstractmethod
from collections import deque
from logging import Logger
from threading import Lock
from typing import Deque, Generic, Iterator, List, Optional, TypeVar
from uuid import uuid4

from cloud_admin.common.logger import get_logger

T = TypeVar('T')


class InactiveLoaderError(StopIteration):
    """ Raised when the loader has nothing more to load """


class ResultLoader(ABC, Generic[T]):
    __uuid__: Optional[str] = None
    __logger__: Optional[Logger] = None

    @property
    def uuid(self):
        if not self.__uuid__:
            self.__uuid__ = str(uuid4())
        return self.__uuid__

    @property
    def logger(self):
        if not self.__logger__:
            self.__logger__ = get_logger(f'{type(self).__name__}/{self.uuid}')
        return self.__logger__

    @abstractmethod
    def load(self) -> List[T]:
        raise NotImplementedError()

    @abstractmethod
    def has_more(self) -> bool:
        raise NotImplementedError()


class ResultIterator(Iterator[T]):
    """ Iterate over the values provided by a loader, one batch at a time

        Batches are only loaded when the buffered values are consumed. Iteration is thread-safe.
    """

    def __init__(self, loader: ResultLoader[T]):
        self.__read_lock = Lock()
        self.__loader = loader
        self.__buffer: Deque[T] = deque()
        self.__depleted = False

    def __iter__(self):
        return self

    def __next__(self) -> T:
        with self.__read_lock:
            while not self.__buffer:
                if self.__depleted:
                    raise StopIteration('Already depleted')

                if not self.__loader.has_more():
                    self.__depleted = True
                    raise StopIteration('No more result to iterate')

                try:
                    self.__buffer.extend(self.__loader.load())
                except StopIteration:
                    self.__depleted = True
                    raise

            return self.__buffer.popleft()

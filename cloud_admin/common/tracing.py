import random
import time
from typing import Any, Dict, List, Optional

from cloud_admin.common.logger import TraceableLogger


def _generate_span_id() -> str:
    """ Random 64-bit identifier, as 16 hex characters """
    return f"{random.getrandbits(64):016x}"


def _generate_trace_id() -> str:
    """ 128-bit identifier, as 32 hex characters

        The upper 32 bits are the current time in epoch seconds and the lower 96 bits are random.
    """
    t = int(time.time())
    lower_96 = random.getrandbits(96)
    return f"{(t << 96) | lower_96:032x}"


class Span:
    """ Tracing span for one client operation

        A span only tags log lines. It is never sent over the channel.
    """

    def __init__(self,
                 trace_id: Optional[str] = None,
                 span_id: Optional[str] = None,
                 parent: Optional['Span'] = None,
                 origin: Any = None,
                 metadata: Optional[Dict[str, Any]] = None):
        self.__parent = parent
        self.__trace_id = (parent.trace_id if parent is not None else trace_id) or _generate_trace_id()
        self.__span_id = span_id or _generate_span_id()
        self.__children: List[Span] = []
        self.__metadata = metadata or dict()
        self.__active = True

        if parent is not None:
            self.__origin = parent.origin
        elif origin is None or isinstance(origin, str):
            self.__origin = origin
        else:
            self.__origin = f'{type(origin).__module__}.{type(origin).__name__}'

        self.__logger = TraceableLogger.make(f'Span(origin={self.__origin})' if self.__origin else 'Span',
                                             trace_id=self.__trace_id,
                                             span_id=self.__span_id)
        self.__logger.debug('Begin')

    @property
    def active(self) -> bool:
        return self.__active

    @property
    def origin(self) -> Optional[str]:
        return self.__origin

    @property
    def parent(self) -> Optional['Span']:
        return self.__parent

    @property
    def trace_id(self) -> str:
        return self.__trace_id

    @property
    def span_id(self) -> str:
        return self.__span_id

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.__metadata

    @property
    def children(self) -> List['Span']:
        return list(self.__children)

    def __enter__(self):
        assert self.__active, 'This span has already been deactivated.'
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def new_span(self, metadata: Optional[Dict[str, Any]] = None) -> 'Span':
        child_span = Span(parent=self, metadata=metadata)
        self.__children.append(child_span)
        return child_span

    def create_span_logger(self, parent_logger: TraceableLogger) -> TraceableLogger:
        return parent_logger.fork(trace_id=self.trace_id, span_id=self.span_id)

    def close(self):
        self.__active = False
        self.__logger.debug('End')

    def __str__(self):
        attrs = [
            f'{k}={v}'
            for k, v in [
                ('trace_id', self.trace_id),
                ('span_id', self.span_id),
                ('parent_span_id', self.parent.span_id if self.parent else None),
                ('origin', self.origin),
                ('metadata', self.metadata),
            ]
            if v
        ]
        return f'Span({", ".join(attrs)})'

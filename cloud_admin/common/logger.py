import logging
from sys import stderr
from typing import Optional

from cloud_admin.common.environments import env
from cloud_admin.feature_flags import in_global_debug_mode

logging_format = '[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'
overriding_logging_level_name = env(
    'CLOUD_ADMIN_LOG_LEVEL',
    description='Default library log level. In the debug mode, the log level will be overridden to DEBUG',
    required=False
)
default_logging_level = getattr(logging, overriding_logging_level_name) \
    if overriding_logging_level_name in ('DEBUG', 'INFO', 'WARNING', 'ERROR') \
    else logging.WARNING

if in_global_debug_mode:
    default_logging_level = logging.DEBUG


class TraceableLogger(logging.Logger):
    def __init__(self, name, level=logging.NOTSET, trace_id: Optional[str] = None, span_id: Optional[str] = None):
        super().__init__(name, level)

        self.actual_name = name
        self.trace_id = trace_id
        self.span_id = span_id

        # Override the name of the logger.
        if self.trace_id and self.span_id:
            self.name = f'{self.actual_name},{self.trace_id},{self.span_id}'

    def fork(self, level: Optional[int] = None, trace_id: Optional[str] = None, span_id: Optional[str] = None):
        return self.make(self.actual_name, level or self.level, trace_id, span_id)

    @classmethod
    def make(cls, name, level: Optional[int] = None, trace_id: Optional[str] = None, span_id: Optional[str] = None):
        log_level = level or default_logging_level

        formatter = logging.Formatter(logging_format)

        handler = logging.StreamHandler(stderr)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

        logger = cls(name, level=log_level, trace_id=trace_id, span_id=span_id)
        logger.setLevel(log_level)
        logger.addHandler(handler)

        return logger


def get_logger(name: str, level: Optional[int] = None) -> TraceableLogger:
    return TraceableLogger.make(name, level)

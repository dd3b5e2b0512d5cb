import json
import logging
import os
from sys import stderr

from typing import Any, Callable, Optional, Set

__shown_env_description_list: Set[str] = set()

# This logger only reports how environment variables are resolved. Everything else should use "get_logger" from
# cloud_admin.common.logger, which depends on this module for its own configuration.
__log_format = '[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'
__log_level = logging.DEBUG if str(os.getenv('CLOUD_ADMIN_DEBUG') or '').lower() in ['1', 'true'] else logging.INFO
__log_formatter = logging.Formatter(__log_format)

__log_handler = logging.StreamHandler(stderr)
__log_handler.setLevel(__log_level)
__log_handler.setFormatter(__log_formatter)

__env_logger = logging.Logger('environment', level=__log_level)
__env_logger.setLevel(__log_level)
__env_logger.addHandler(__log_handler)


def __boolean_flag(v: str):
    return str(v or '').lower() in ['1', 'true']


class EnvironmentVariableRequired(RuntimeError):
    def __init__(self, environment_variable_name: str, hint: Optional[str]):
        feedback = f'Environment variable required: {environment_variable_name}'

        if hint:
            feedback += f' ({hint})'

        super(EnvironmentVariableRequired, self).__init__(feedback)

        self.environment_variable_name = environment_variable_name


def env(key: str,
        default: Any = None,
        required: bool = False,
        transform: Optional[Callable] = None,
        hint: Optional[str] = None,
        env_type: Optional[str] = None,
        description: Optional[str] = None) -> Any:
    """ Read an environment variable

        The resolved value is reported once per key at the debug level.
    """
    if key not in os.environ and required:
        __env_logger.error(f'Missing {(env_type or "var").upper()} "{key}" ({description})')
        raise EnvironmentVariableRequired(key, hint)

    original_value = os.getenv(key)

    if original_value is None:
        returning_value = default
    else:
        returning_value = transform(original_value) if transform else original_value

    if key not in __shown_env_description_list:
        __shown_env_description_list.add(key)
        json_value = json.dumps(returning_value)

        if description:
            __env_logger.debug(f'{(env_type or "env").upper()} "{key}" ({description}) → {json_value}')
        else:
            __env_logger.debug(f'{(env_type or "env").upper()} "{key}" → {json_value}')

    return returning_value


def flag(key: str, description: Optional[str] = None) -> bool:
    return bool(env(key, default=False, transform=__boolean_flag, env_type='flag', description=description))

from typing import Any, Optional

from cloud_admin.feature_flags import detailed_error, in_global_debug_mode


class InvalidOptionError(ValueError):
    """ Raised when the call-time options are not acceptable. No remote call has been made. """


class DuplicateOptionError(InvalidOptionError):
    """ Raised when two or more options of the same kind are given to one call. """

    def __init__(self, option_type: Any):
        super(DuplicateOptionError, self).__init__(f'Duplicate option {option_type!s}')
        self.option_type = option_type


class ClosedServiceError(RuntimeError):
    """ Raised when the client is used after being closed. """

    def __init__(self, client_name: str):
        super(ClosedServiceError, self).__init__(f'{client_name} has been closed')


class RemoteCallError(RuntimeError):
    """ Raised by the channel when the remote call fails

        The client never wraps this error. Whatever the channel raises is what the caller gets.
    """

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None):
        super(RemoteCallError, self).__init__(message)
        self.__message = message
        self.__code = code
        self.__details = details

    @property
    def message(self):
        return self.__message

    @property
    def code(self):
        return self.__code

    @property
    def details(self):
        return self.__details

    def __str__(self):
        blocks = [f'{self.code}: {self.message}' if self.code else self.message]

        if (in_global_debug_mode or detailed_error) and self.details:
            blocks.append(f'\nDetails:\n{self.details}')

        return '\n'.join(blocks)

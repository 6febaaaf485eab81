"""Host-side exceptions for Swisp.

These never cross the public ``parse``/``evaluate`` boundary: the reader and
the builtin dispatcher turn them into ``Error`` values.
"""


class SwispError(Exception):
    """ Base class for all Swisp errors"""
    pass


class ReaderError(SwispError):
    """ Raised when the input text is malformed"""


class ArityError(SwispError):
    """ Raised when the number of arguments passed to a builtin is incorrect"""


class ArgumentTypeError(SwispError):
    """ Raised when an argument passed to a builtin has the wrong type"""


class EmptyListError(SwispError):
    """ Raised when a builtin is given {} where a non-empty list is required"""


class BuiltinError(SwispError):
    """ Raised for any other invalid use of a builtin"""


class LoadError(SwispError):
    """ Raised when a source file cannot be found or read"""

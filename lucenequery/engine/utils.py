import abc
import re
from collections.abc import Iterable

# reserved characters of the query grammar, optionally including blanks
RESERVED = re.compile(r'[+\\&|!(){}\[\]^~?*:; ]')
RESERVED_NO_BLANKS = re.compile(r'[+\\&|!(){}\[\]^~?*:;]')
HYPHENS = re.compile(r'-')
HYPHENS_AND_BLANKS = re.compile(r'[- ]')
QUOTES = re.compile(r'"')


class Atomic(metaclass=abc.ABCMeta):
    """Abstract base class to distinguish singleton values from other iterables."""

    @classmethod
    def __subclasshook__(cls, other):
        return not issubclass(other, Iterable) or NotImplemented


for cls in (str, bytes):
    Atomic.register(cls)


def escape_input(text, escape_blanks: bool = True) -> str:
    """Return text with reserved characters backslash-escaped.

    Hyphens are removed first; blanks are escaped if `escape_blanks`, otherwise removed as well.
    """
    if text is None:
        return ''
    if escape_blanks:
        return RESERVED.sub(r'\\\g<0>', HYPHENS.sub('', text))
    return RESERVED_NO_BLANKS.sub(r'\\\g<0>', HYPHENS_AND_BLANKS.sub('', text))


def escape_quotes(text) -> str:
    """Return text with double quotes backslash-escaped."""
    return '' if text is None else QUOTES.sub(r'\\"', text)


def remove_quotes(text) -> str:
    """Return text without double quotes."""
    return '' if text is None else QUOTES.sub('', text)


def escape_all(text) -> str:
    """Return text with reserved characters, blanks and quotes escaped."""
    return escape_quotes(escape_input(text, True))


def is_blank(text) -> bool:
    return text is None or not str(text).strip()

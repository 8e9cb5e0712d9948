import datetime
import enum
from typing import Optional
from .utils import Atomic

DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S'


class StringMode(enum.Enum):
    """How a string value is analyzed by the index."""

    STRING = 'string'  # not tokenized; suited to sorting and ids
    TEXT = 'text'  # tokenized and stemmed; suited to searching
    SPLIT = 'split'  # split on blanks; suited to sets of values


class Suffixes:
    """Suffixes of dynamic fields, by value type.

    Defaults follow the conventional dynamic fields of a solr schema, and may be overridden by keyword.
    """

    integer = '_i'
    long = '_l'
    boolean = '_b'
    double = '_d'
    float = '_f'
    date = '_dt'
    collection = '_tw'
    string = '_s'
    text = '_t'

    def __init__(self, **suffixes: str):
        for name in suffixes:
            if not hasattr(type(self), name):
                raise AttributeError(f"'Suffixes' object has no suffix '{name}'")
        self.__dict__.update(suffixes)

    def __repr__(self):
        names = ('integer', 'long', 'boolean', 'double', 'float', 'date', 'collection', 'string', 'text')
        return f"{type(self).__name__}({', '.join(f'{name}={getattr(self, name)!r}' for name in names)})"

    def string_suffix(self, mode: StringMode) -> str:
        return {StringMode.STRING: self.string, StringMode.TEXT: self.text, StringMode.SPLIT: self.collection}[mode]

    def suffix(self, value, mode: Optional[StringMode] = None) -> str:
        """Return suffix for a value, or a type of value."""
        tp = value if isinstance(value, type) else type(value)
        if issubclass(tp, bool):
            return self.boolean
        if issubclass(tp, int):
            return self.long if isinstance(value, int) and not -(2**31) <= value < 2**31 else self.integer
        if issubclass(tp, float):
            return self.double
        if issubclass(tp, datetime.date):
            return self.date
        if issubclass(tp, str):
            return self.string_suffix(mode or StringMode.STRING)
        if not issubclass(tp, Atomic):
            return self.collection
        raise TypeError(f'no dynamic field suffix for {tp.__name__}')


def dynamic_name(name: str, value, mode: Optional[StringMode] = None, suffixes: Suffixes = Suffixes()) -> str:
    """Return the dynamic field name for a value, or a type of value.

    >>> dynamic_name('dtype', str)
    'dtype_s'
    """
    return name + suffixes.suffix(value, mode)


def format_datetime(value: datetime.date) -> str:
    """Return date in solr's utc format with milliseconds."""
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    elif value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return f'{value.strftime(DATETIME_FORMAT)}.{value.microsecond // 1000:03d}Z'


def format_value(value) -> str:
    """Return value in the textual form of the index."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime.date):
        return format_datetime(value)
    return str(value)


class Document(dict):
    """Multi-valued mapping of field names to textual values, for indexing.

    Args:
        suffixes: dynamic field suffixes
    """

    def __init__(self, suffixes: Suffixes = Suffixes()):
        super().__init__()
        self.suffixes = suffixes

    def add(self, name: str, value) -> bool:
        """Add a formatted value to a field; return whether it was added."""
        if value is None:
            return False
        self.setdefault(name, []).append(format_value(value))
        return True

    def getlist(self, name: str) -> list:
        return list(self.get(name, []))

    def add_dynamic(self, name: str, value, mode: Optional[StringMode] = None) -> bool:
        """Add a value to the dynamic field of its type; return whether it was added.

        Iterables are joined with blanks into a single collection value.
        """
        if value is None:
            return False
        name = dynamic_name(name, value, mode, self.suffixes)
        if not isinstance(value, Atomic):
            value = ' '.join(format_value(item) for item in value if item is not None)
        return self.add(name, value)

    def add_multi(self, name: str, values) -> bool:
        """Add each value to a multi-valued field, splitting strings on blanks; return whether any was added."""
        if values is None:
            return False
        if isinstance(values, str):
            values = values.split(' ')
        elif isinstance(values, Atomic):
            values = [values]
        return any([self.add(name, value) for value in values])

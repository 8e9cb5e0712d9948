import warnings
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Optional, Union
from .modifiers import DEFAULT_FUZZINESS, QueryModifier, TermModifier, check_fuzziness
from .utils import Atomic, escape_all, escape_quotes, is_blank

MAX = 10_000_000
MAX_BOOST = 10_000_000.0

Modifier = Union[QueryModifier, bool, None]
Argument = Union[str, 'QueryBuilder', tuple, Iterable, object, None]


def _escape(value) -> str:
    """Return escaped term, which is empty if nothing searchable remains."""
    return '' if is_blank(value) else escape_all(value)


class QueryBuilder:
    """Mutable accumulator of lucene query text, and the request parameters which accompany it.

    Methods which add to the query return the builder itself, to allow chaining.
    Missing or blank values, empty collections, and missing keys are silently ignored.

    Every `modifier` argument may be a [QueryModifier][lucenequery.engine.modifiers.QueryModifier],
    a bool which marks the default modifier as required (or not), or None for the default modifier.

    Args:
        modifier: default QueryModifier
        start: offset of the first result
        rows: maximum number of results, by default `max_rows`
        max_rows: upper bound of rows
    """

    reserved = {
        'q': 'the request parameter q cannot be assigned directly, use the add methods',
        'start': 'the request parameter start cannot be assigned directly, use start',
        'rows': 'the request parameter rows cannot be assigned directly, use rows',
    }

    def __init__(
        self,
        modifier: QueryModifier = QueryModifier.DEFAULT,  # type: ignore
        start: int = 0,
        rows: Optional[int] = None,
        max_rows: int = MAX,
    ):
        if not 0 <= max_rows <= MAX:
            raise ValueError(f'max_rows must be a non-negative integer, at most {MAX}: {max_rows}')
        self.default_modifier = modifier
        self.max_rows = max_rows
        self._parts: list = []
        self._params: dict = {}
        self.start = start
        self.rows = max_rows if rows is None else rows

    def __str__(self):
        return self.query

    def __repr__(self):
        return f'{type(self).__name__}({self.query!r})'

    @property
    def query(self) -> str:
        """accumulated query text"""
        if len(self._parts) > 1:
            self._parts[:] = [''.join(self._parts)]
        return ''.join(self._parts)

    @property
    def default_modifier(self) -> QueryModifier:
        """QueryModifier used when none is given"""
        return self._default_modifier

    @default_modifier.setter
    def default_modifier(self, modifier: QueryModifier):
        if not isinstance(modifier, QueryModifier):
            raise TypeError(f'default modifier must be a QueryModifier, not {type(modifier).__name__}')
        self._default_modifier = modifier

    @property
    def wildcarded(self) -> bool:
        """whether the default modifier is wildcarded"""
        return self.default_modifier.wildcarded

    @wildcarded.setter
    def wildcarded(self, wildcarded: bool):
        self.default_modifier = self.default_modifier.replace(wildcarded=wildcarded)

    def copy(self) -> 'QueryBuilder':
        """Return an independent builder with the same query, parameters, and settings."""
        other = type(self)(self.default_modifier, max_rows=self.max_rows)
        other._parts = [self.query]
        other._params = {name: set(value) if isinstance(value, set) else value for name, value in self._params.items()}
        return other

    # text buffer

    def _append(self, *texts: str):
        self._parts.extend(text for text in texts if text)

    def _endswith(self, suffix: str) -> bool:
        return bool(self._parts) and self._parts[-1].endswith(suffix)

    def _truncate(self):
        text = self._parts.pop()[:-1]
        if text:
            self._parts.append(text)

    def _modifier(self, modifier: Modifier) -> QueryModifier:
        if modifier is None:
            return self.default_modifier
        if isinstance(modifier, bool):
            return self.default_modifier.mandatory(modifier)
        if isinstance(modifier, QueryModifier):
            return modifier
        raise TypeError(f'modifier must be a QueryModifier or bool, not {type(modifier).__name__}')

    @staticmethod
    def _fuzziness(modifier: QueryModifier, fuzziness: Optional[float]) -> float:
        if fuzziness is None:
            fuzziness = modifier.fuzziness if modifier.fuzzy_enabled else DEFAULT_FUZZINESS
        return check_fuzziness(fuzziness)

    def _boost(self, boost: Optional[float]) -> 'QueryBuilder':
        return self if boost is None else self.add_boost(boost)

    # arguments

    def add_argument(self, value: Argument, modifier: Modifier = None) -> 'QueryBuilder':
        """Add a value of any supported shape.

        Strings are added as terms, builders as subqueries, tuples as arrays, other iterables as collections,
        and any other value as its string representation.
        A missing modifier means the builder's default modifier, rather than adding nothing.
        """
        if value is None:
            return self
        if isinstance(value, str):
            return self.add_term(value, modifier)
        if isinstance(value, QueryBuilder):
            return self.add_subquery(value, modifier)
        if isinstance(value, tuple):
            return self.add_argument_array(value, modifier)
        if isinstance(value, Atomic):
            return self.add_term(str(value), modifier)
        return self.add_argument_collection(value, modifier)

    def add_term(self, value: Optional[str], modifier: Modifier = None) -> 'QueryBuilder':
        """Add an escaped term, which a wildcarded modifier expands into an exact phrase or a prefix."""
        escaped = _escape(value)
        if not escaped:
            return self
        modifier = self._modifier(modifier)
        self._append(modifier.prefix)
        if modifier.wildcarded:
            # prefixes don't match the exact value on text fields
            self._append('("', escape_quotes(value), '"^2 ', escaped, '*)')
        else:
            self._append(escaped)
        self._append(' ')
        return self

    def add_fuzzy_argument(
        self, value: Optional[str], modifier: Modifier = None, fuzziness: Optional[float] = None
    ) -> 'QueryBuilder':
        """Add an escaped term with a fuzziness in [0, 1).

        Fuzziness defaults to the modifier's, and otherwise to `DEFAULT_FUZZINESS`.
        """
        modifier = self._modifier(modifier)
        fuzziness = self._fuzziness(modifier, fuzziness)
        escaped = _escape(value)
        if not escaped:
            return self
        self._append(modifier.prefix, '(', escaped, '~', str(fuzziness), ')')
        return self

    def _add_group(self, values: Iterable, modifier: QueryModifier) -> 'QueryBuilder':
        self._append('(')
        value_modifier = modifier.field_value_modifier()
        for value in values:
            self.add_argument(value, value_modifier)
        if self._endswith('('):
            # every value was blank
            self._truncate()
        else:
            self._append(') ')
        return self

    def add_argument_collection(self, values: Optional[Iterable], modifier: Modifier = None) -> 'QueryBuilder':
        """Add a group of values, which are required unless the modifier is disjunct."""
        if values is None:
            return self
        values = [values] if isinstance(values, Atomic) else list(values)
        return self._add_group(values, self._modifier(modifier)) if values else self

    def add_argument_array(self, values: Optional[Sequence], modifier: Modifier = None) -> 'QueryBuilder':
        """Add a group of values from a fixed-size sequence; see `add_argument_collection`."""
        if not values:
            return self
        return self._add_group(values, self._modifier(modifier))

    def add_subquery(self, subquery: Union['QueryBuilder', str, None], modifier: Modifier = None) -> 'QueryBuilder':
        """Add the unescaped text of another builder, or raw query text, as a group."""
        text = '' if subquery is None else str(subquery)
        if not text:
            return self
        self._append(self._modifier(modifier).prefix, '(', text, ') ')
        return self

    def add_unescaped(self, text: Optional[str], mandatory: bool = False) -> 'QueryBuilder':
        """Add raw text, which may produce invalid syntax if it contains reserved characters."""
        if not text:
            return self
        self._append('+' if mandatory else '', str(text), ' ')
        return self

    def add_unescaped_field(self, key: Optional[str], text: Optional[str], mandatory: bool = False) -> 'QueryBuilder':
        """Add a field with raw text; see `add_unescaped`."""
        if key is None or not text:
            return self
        self._append('+' if mandatory else '', key, ':', str(text), ' ')
        return self

    # fields

    def start_field(self, name: Optional[str], modifier: Modifier = None) -> 'QueryBuilder':
        """Open a field scope, which must be closed with `end_field`."""
        if is_blank(name):
            return self
        self._append(self._modifier(modifier).prefix, name, ':(')
        return self

    def end_field(self) -> 'QueryBuilder':
        """Close the current field scope; an empty field matches the empty string."""
        if self._endswith('('):
            self._append('""')
        self._append(') ')
        return self

    def add_field(
        self, key: Optional[str], value: Argument, modifier: Modifier = None, boost: Optional[float] = None
    ) -> 'QueryBuilder':
        """Add a field scoped value of any supported shape, with an optional boost.

        A string containing blanks also matches its individual words, at half the weight.
        """
        if value is None:
            return self
        if isinstance(value, str):
            return self._add_text_field(key, value, modifier, boost)
        if isinstance(value, QueryBuilder):
            if is_blank(key) or not str(value):
                return self
            modifier = self._modifier(modifier)
            return self.start_field(key, modifier).add_subquery(value, modifier).end_field()._boost(boost)
        if isinstance(value, tuple):
            return self.add_field_array(key, value, modifier, boost)
        if isinstance(value, Atomic):
            return self._add_text_field(key, str(value), modifier, boost)
        return self.add_field_collection(key, value, modifier, boost)

    def _add_text_field(self, key, value: str, modifier: Modifier, boost: Optional[float]) -> 'QueryBuilder':
        if is_blank(key) or not _escape(value):
            return self
        modifier = self._modifier(modifier)
        self.start_field(key, modifier)
        self.add_term(value, modifier)
        if ' ' in value:
            self._append('(')
            for token in value.split(' '):
                self.add_term(token, modifier)
            self._append(')^0.5')
        return self.end_field()._boost(boost)

    def add_fuzzy_field(
        self,
        key: Optional[str],
        value: Optional[str],
        modifier: Modifier = None,
        fuzziness: Optional[float] = None,
        boost: Optional[float] = None,
    ) -> 'QueryBuilder':
        """Add a field scoped fuzzy value; see `add_fuzzy_argument` and `add_field`."""
        if is_blank(key) or not _escape(value):
            return self
        modifier = self._modifier(modifier)
        fuzziness = self._fuzziness(modifier, fuzziness)
        value_modifier = modifier.merge(TermModifier.NONE)
        self.start_field(key, modifier)
        self.add_fuzzy_argument(value, value_modifier, fuzziness)
        if ' ' in value:  # type: ignore
            self._append('(')
            for token in value.split(' '):  # type: ignore
                self.add_fuzzy_argument(token, value_modifier, fuzziness)
            self._append(')^0.5')
        return self.end_field()._boost(boost)

    def add_field_collection(
        self, key: Optional[str], values: Optional[Iterable], modifier: Modifier = None, boost: Optional[float] = None
    ) -> 'QueryBuilder':
        """Add a field scoped group of values; see `add_argument_collection`."""
        if is_blank(key) or values is None:
            return self
        values = [values] if isinstance(values, Atomic) else list(values)
        if not values:
            return self
        modifier = self._modifier(modifier)
        self.start_field(key, modifier)
        self.add_argument_collection(values, modifier)
        return self.end_field()._boost(boost)

    def add_field_array(
        self, key: Optional[str], values: Optional[Sequence], modifier: Modifier = None, boost: Optional[float] = None
    ) -> 'QueryBuilder':
        """Add a field scoped group of values from a fixed-size sequence."""
        if is_blank(key) or not values:
            return self
        modifier = self._modifier(modifier)
        self.start_field(key, modifier)
        self.add_argument_array(values, modifier)
        return self.end_field()._boost(boost)

    def add_field_values(
        self,
        key: Optional[str],
        values: Optional[Iterable],
        mandatory_key: bool = False,
        mandatory_values: bool = False,
        boost: Optional[float] = None,
    ) -> 'QueryBuilder':
        """Add a field scoped group of values with separate requirements for the field and its values."""
        modifier = QueryModifier(
            TermModifier.REQUIRED if mandatory_key else TermModifier.NONE,
            disjunct=not mandatory_values,
            wildcarded=self.wildcarded,
        )
        return self.add_field_collection(key, values, modifier, boost)

    def add_boost(self, factor: float) -> 'QueryBuilder':
        """Boost the preceding element by a factor in (0, 10,000,000), truncated to 2 decimal places."""
        if not 0.0 < factor < MAX_BOOST:
            raise ValueError(f'boost factor must be greater than 0 and less than 10,000,000: {factor}')
        if factor != 1.0:
            if self._endswith(':('):
                warnings.warn('boost added to a field without any values', stacklevel=2)
            self._append('^', str(int(factor * 100.0) / 100.0), ' ')
        return self

    # request parameters

    @property
    def start(self) -> int:
        """offset of the first result"""
        return self._params['start']

    @start.setter
    def start(self, start: int):
        if start < 0:
            raise ValueError(f'start must be a non-negative integer: {start}')
        self._params['start'] = start

    @property
    def rows(self) -> int:
        """maximum number of results"""
        return self._params['rows']

    @rows.setter
    def rows(self, rows: int):
        if not 0 <= rows <= self.max_rows:
            raise ValueError(f'rows must be a non-negative integer, at most {self.max_rows}: {rows}')
        self._params['rows'] = rows

    max = rows

    @property
    def fields(self) -> str:
        """comma separated selected fields"""
        return self._params.get('fl', '*')

    def select_fields(self, *names: str) -> 'QueryBuilder':
        """Select stored fields to return."""
        self._params['fl'] = ','.join(names)
        return self

    @property
    def sort(self) -> Optional[str]:
        """comma separated sort specification"""
        return self._params.get('sort')

    def sort_fields(self, *specs: str) -> 'QueryBuilder':
        """Sort results by fields, e.g., `'price asc'`."""
        self._params['sort'] = ','.join(specs)
        return self

    def set_param(self, name: str, value) -> 'QueryBuilder':
        """Set an auxiliary request parameter; `q`, `start`, and `rows` are reserved."""
        if name.lower() in self.reserved:
            raise ValueError(self.reserved[name.lower()])
        self._params[name] = value
        return self

    def add_facet_fields(self, *names: str) -> 'QueryBuilder':
        """Register fields for faceting, enabling facets."""
        names = tuple(name for name in names if name is not None)  # type: ignore
        if not names:
            return self
        facets = self._params.get('facet.field')
        if facets is None:
            facets = self._params['facet.field'] = set()
            self._params['facet'] = True
        elif not isinstance(facets, set):
            warnings.warn(f'facet.field is not a set of fields: {facets!r}', stacklevel=2)
            return self
        facets.update(names)
        return self

    @property
    def params(self) -> Mapping:
        """read-only request parameters, including the query text as `q`"""
        params = {name: frozenset(value) if isinstance(value, set) else value for name, value in self._params.items()}
        params['q'] = self.query
        return MappingProxyType(params)

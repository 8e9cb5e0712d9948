import dataclasses
import enum
from typing import Optional, Union

DEFAULT_FUZZINESS = 0.5


class TermModifier(enum.Enum):
    """Requirement of a term, field or group; the value is its textual prefix."""

    NONE = ''
    REQUIRED = '+'
    PROHIBITED = '-'

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union['TermModifier', str]) -> 'TermModifier':
        """Return TermModifier from an instance, a name, or a prefix."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f'term modifier must be a TermModifier or str, not {type(value).__name__}')
        if value in cls._value2member_map_:
            return cls(value)
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f'unknown term modifier: {value!r}') from None


def check_fuzziness(fuzziness: float) -> float:
    if not 0.0 <= fuzziness < 1.0:
        raise ValueError(f'fuzziness must be between 0 (inclusive) and 1 (exclusive): {fuzziness}')
    return float(fuzziness)


@dataclasses.dataclass(frozen=True, init=False, repr=False)
class QueryModifier:
    """Immutable settings which affect how arguments and fields are added to a query.

    Args:
        term_modifier: requirement prefix of the term or field
        disjunct: expanded values are optional (OR) instead of required (AND)
        wildcarded: single values also match as a prefix, with the exact phrase boosted
        fuzziness: optional edit-distance tolerance in [0, 1)
    """

    term_modifier: TermModifier = TermModifier.NONE
    disjunct: bool = False
    wildcarded: bool = False
    _fuzziness: Optional[float] = None

    def __init__(self, term_modifier=TermModifier.NONE, disjunct=False, wildcarded=False, fuzziness=None):
        if fuzziness is not None:
            fuzziness = check_fuzziness(fuzziness)
        object.__setattr__(self, 'term_modifier', TermModifier.parse(term_modifier))
        object.__setattr__(self, 'disjunct', bool(disjunct))
        object.__setattr__(self, 'wildcarded', bool(wildcarded))
        object.__setattr__(self, '_fuzziness', fuzziness)

    def __repr__(self):
        settings = [self.term_modifier.name]
        settings += [name for name in ('disjunct', 'wildcarded') if getattr(self, name)]
        if self.fuzzy_enabled:
            settings.append(f'fuzziness={self._fuzziness}')
        return f"{type(self).__name__}({', '.join(settings)})"

    @property
    def prefix(self) -> str:
        """textual prefix of the term modifier"""
        return self.term_modifier.prefix

    @property
    def fuzzy_enabled(self) -> bool:
        return self._fuzziness is not None

    @property
    def fuzziness(self) -> float:
        """fuzziness of a fuzzy search; raises RuntimeError if disabled"""
        if self._fuzziness is None:
            raise RuntimeError('fuzziness is not enabled')
        return self._fuzziness

    def replace(self, **changes) -> 'QueryModifier':
        """Return a copy with changed settings."""
        settings = {
            'term_modifier': self.term_modifier,
            'disjunct': self.disjunct,
            'wildcarded': self.wildcarded,
            'fuzziness': self._fuzziness,
        }
        for name in changes:
            if name not in settings:
                raise TypeError(f"'QueryModifier' has no setting '{name}'")
        return type(self)(**{**settings, **changes})

    def merge(self, term_modifier: Union[TermModifier, str]) -> 'QueryModifier':
        """Return a copy with another term modifier."""
        term_modifier = TermModifier.parse(term_modifier)
        return self if term_modifier is self.term_modifier else self.replace(term_modifier=term_modifier)

    def mandatory(self, flag: bool) -> 'QueryModifier':
        """Return a copy which is required if flag, otherwise unmodified."""
        return self.merge(TermModifier.REQUIRED if flag else TermModifier.NONE)

    def field_value_modifier(self) -> 'QueryModifier':
        """Return the modifier for the values of an expanded field or collection."""
        return self.merge(TermModifier.NONE if self.disjunct else TermModifier.REQUIRED)


QueryModifier.DEFAULT = QueryModifier()  # type: ignore
QueryModifier.REQUIRED = QueryModifier(TermModifier.REQUIRED)  # type: ignore
QueryModifier.PROHIBITED = QueryModifier(TermModifier.PROHIBITED)  # type: ignore
QueryModifier.WILDCARDED = QueryModifier(wildcarded=True)  # type: ignore
QueryModifier.ID = QueryModifier(TermModifier.REQUIRED, disjunct=True)  # type: ignore

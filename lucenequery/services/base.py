from collections.abc import Iterable, Mapping
from typing import Optional
from .. import engine


class QueryService:
    """Dispatch root which compiles clauses into request parameters.

    A clause is a mapping which describes a single addition to the query:

     * `field`: optional field name
     * `value`, `values`, `clauses` (a subquery), or `unescaped`: what to add
     * `modifier` (none, required, prohibited) or `mandatory`: term requirement
     * `disjunct`, `wildcarded`: modifier settings
     * `fuzziness`: fuzzy matching of a value
     * `boost`: boost factor of the added element
    """

    def __init__(self, type_field: str = 'dtype_s', wildcarded: bool = True, max_rows: int = engine.MAX):
        self.factory = engine.QueryFactory(type_field, wildcarded, max_rows)

    @staticmethod
    def modifier(builder: engine.QueryBuilder, clause: Mapping) -> engine.QueryModifier:
        """Return QueryModifier of a clause, derived from the builder's default."""
        modifier = builder.default_modifier
        if clause.get('modifier') is not None:
            modifier = modifier.merge(clause['modifier'])
        elif clause.get('mandatory') is not None:
            modifier = modifier.mandatory(clause['mandatory'])
        changes = {name: clause[name] for name in ('disjunct', 'wildcarded') if clause.get(name) is not None}
        return modifier.replace(**changes) if changes else modifier

    def add(self, builder: engine.QueryBuilder, clause: Mapping) -> engine.QueryBuilder:
        """Add a clause to a builder."""
        field, value = clause.get('field'), clause.get('value')
        modifier = self.modifier(builder, clause)
        text = builder.query
        if clause.get('unescaped') is not None:
            mandatory = modifier.term_modifier is engine.TermModifier.REQUIRED
            if field is None:
                builder.add_unescaped(clause['unescaped'], mandatory)
            else:
                builder.add_unescaped_field(field, clause['unescaped'], mandatory)
        elif clause.get('clauses') is not None:
            subquery = self.build(clause['clauses'])
            if field is None:
                builder.add_subquery(subquery, modifier)
            else:
                builder.add_field(field, subquery, modifier)
        elif clause.get('values') is not None:
            if field is None:
                builder.add_argument_collection(clause['values'], modifier)
            else:
                builder.add_field_collection(field, clause['values'], modifier)
        elif clause.get('fuzziness') is not None:
            if field is None:
                builder.add_fuzzy_argument(value, modifier, clause['fuzziness'])
            else:
                builder.add_fuzzy_field(field, value, modifier, clause['fuzziness'])
        elif field is None:
            builder.add_term(value, modifier)
        else:
            builder.add_field(field, value, modifier)
        if clause.get('boost') is not None and builder.query != text:
            builder.add_boost(clause['boost'])
        return builder

    def build(self, clauses: Iterable[Mapping], dtype: Optional[str] = None) -> engine.QueryBuilder:
        """Return builder seeded with the optional document type, and with clauses added."""
        builder = self.factory.create(dtype)
        for clause in clauses:
            self.add(builder, clause)
        return builder

    @staticmethod
    def params(builder: engine.QueryBuilder) -> dict:
        """Return json compatible request parameters."""
        return {name: sorted(value) if isinstance(value, frozenset) else value for name, value in builder.params.items()}

    def compile(
        self,
        clauses: Iterable[Mapping],
        dtype: Optional[str] = None,
        start: int = 0,
        rows: Optional[int] = None,
        fields: Iterable[str] = (),
        sort: Iterable[str] = (),
        facets: Iterable[str] = (),
    ) -> dict:
        """Return request parameters for clauses, including the query text as `q`."""
        builder = self.build(clauses, dtype)
        builder.start = start
        if rows is not None:
            builder.rows = rows
        if fields:
            builder.select_fields(*fields)
        if sort:
            builder.sort_fields(*sort)
        builder.add_facet_fields(*facets)
        return self.params(builder)

    @staticmethod
    def escape(text: str, blanks: bool = True) -> str:
        """Return text with reserved characters and quotes escaped."""
        return engine.escape_quotes(engine.escape_input(text, blanks))

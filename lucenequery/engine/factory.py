from typing import Union
from .modifiers import QueryModifier
from .queries import MAX, QueryBuilder
from .utils import escape_all, is_blank


class QueryFactory:
    """Create [QueryBuilders][lucenequery.engine.queries.QueryBuilder] with common settings.

    Builders may be seeded with the query of a prototype, such as one which requires a document type.

    Args:
        type_field: name of the field which discriminates document types
        wildcarded: whether created builders add wildcarded terms by default
        max_rows: upper bound, and default, of rows
    """

    def __init__(self, type_field: str = 'dtype_s', wildcarded: bool = True, max_rows: int = MAX):
        self.type_field = type_field
        self.wildcarded = wildcarded
        self.max_rows = max_rows
        self.prototypes: dict = {}

    def prototype(self, dtype: str) -> str:
        """Return cached query text which requires the document type."""
        if is_blank(dtype) or not escape_all(dtype):
            raise ValueError(f'a document type is required: {dtype!r}')
        if dtype not in self.prototypes:
            builder = QueryBuilder(QueryModifier.ID, max_rows=self.max_rows)  # type: ignore
            builder.start_field(self.type_field).add_subquery(escape_all(dtype), False).end_field()
            self.prototypes[dtype] = builder.query
        return self.prototypes[dtype]

    def create(self, seed: Union[str, QueryBuilder, None] = None) -> QueryBuilder:
        """Return a new builder, optionally seeded with a document type or the query of another builder."""
        modifier = QueryModifier.DEFAULT.replace(wildcarded=self.wildcarded)  # type: ignore
        builder = QueryBuilder(modifier, start=0, rows=self.max_rows, max_rows=self.max_rows)
        if seed is None:
            return builder
        text = seed.query if isinstance(seed, QueryBuilder) else self.prototype(seed)
        return builder.add_unescaped(text)


create = QueryFactory().create

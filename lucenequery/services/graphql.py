import dataclasses
from typing import Optional
import strawberry.asgi
from starlette.applications import Starlette
from strawberry.scalars import JSON
from .settings import DEBUG, MAX_ROWS, TYPE_FIELD, WILDCARDED
from .base import QueryService

root = QueryService(TYPE_FIELD, WILDCARDED, MAX_ROWS)
app = Starlette(debug=DEBUG)


@strawberry.input(description="single addition to a query")
class Clause:
    field: Optional[str] = None
    value: Optional[str] = None
    values: Optional[list[str]] = None
    clauses: Optional[list['Clause']] = None
    unescaped: Optional[str] = None
    modifier: Optional[str] = None
    mandatory: Optional[bool] = None
    disjunct: Optional[bool] = None
    wildcarded: Optional[bool] = None
    fuzziness: Optional[float] = None
    boost: Optional[float] = None


@strawberry.type(description="request parameters")
class Params:
    q: str
    params: JSON


@strawberry.type
class Query:
    @strawberry.field(description="Return query text and request parameters.")
    def build(
        self,
        clauses: list[Clause],
        dtype: Optional[str] = None,
        start: int = 0,
        rows: Optional[int] = None,
        fields: list[str] = [],
        sort: list[str] = [],
        facets: list[str] = [],
    ) -> Params:
        clauses = [dataclasses.asdict(clause) for clause in clauses]  # type: ignore
        params = root.compile(clauses, dtype, start, rows, fields, sort, facets)  # type: ignore
        return Params(q=params.pop('q'), params=params)

    @strawberry.field(description="Return text with reserved characters and quotes escaped.")
    def escape(self, text: str, blanks: bool = True) -> str:
        return root.escape(text, blanks)


schema = strawberry.Schema(query=Query)
app.add_route('/graphql', strawberry.asgi.GraphQL(schema, debug=DEBUG))

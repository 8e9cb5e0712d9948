import time
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from .settings import DEBUG, MAX_ROWS, TYPE_FIELD, WILDCARDED
from .base import QueryService

root = QueryService(TYPE_FIELD, WILDCARDED, MAX_ROWS)
app = FastAPI(debug=DEBUG)


class Clause(BaseModel):
    """single addition to a query"""

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


Clause.model_rebuild()


class Search(BaseModel):
    """query clauses and request parameters"""

    clauses: list[Clause] = []
    dtype: Optional[str] = None
    start: int = 0
    rows: Optional[int] = None
    fields: list[str] = []
    sort: list[str] = []
    facets: list[str] = []


@app.post('/query', response_description="{`q`: `query`, `start`: `start`, `rows`: `rows`, ...}")
def query(search: Search) -> dict:
    """Return request parameters, including the query text as `q`."""
    clauses = [clause.model_dump(exclude_none=True) for clause in search.clauses]
    return root.compile(clauses, search.dtype, search.start, search.rows, search.fields, search.sort, search.facets)


app.get('/escape', response_description="escaped text")(root.escape)


@app.exception_handler(ValueError)
async def invalid(request: Request, exc: ValueError):
    return JSONResponse({'detail': str(exc)}, status_code=400)


@app.middleware('http')
async def headers(request, call_next):
    start = time.time()
    response = await call_next(request)
    response.headers['x-response-time'] = str(time.time() - start)
    return response

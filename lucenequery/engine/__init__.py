"""
Pythonic builder of [lucene](https://lucene.apache.org/core/) query syntax, as accepted by solr.

Provides incremental construction of escaped, grouped, and boosted query text,
abstracting away the query parser's grammar.
"""

from .documents import Document, StringMode, Suffixes, dynamic_name
from .factory import QueryFactory
from .modifiers import DEFAULT_FUZZINESS, QueryModifier, TermModifier
from .queries import MAX, QueryBuilder
from .utils import escape_all, escape_input, escape_quotes, remove_quotes

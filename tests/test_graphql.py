import pytest
from starlette import testclient
from lucenequery import engine


class TestClient(testclient.TestClient):
    def execute(self, query, **variables):
        response = self.post('/graphql', json={'query': query, 'variables': variables})
        response.raise_for_status()
        result = response.json()
        for error in result.get('errors', []):
            raise ValueError(error)
        return result['data']


@pytest.fixture
def client(environ):
    from lucenequery.services.graphql import app

    return TestClient(app)


def test_build(client):
    data = client.execute(
        '{ build(clauses: [{field: "name", value: "coffee", mandatory: true}], dtype: "shop", facets: ["city"]) '
        '{ q params } }'
    )
    assert data['build']['q'] == '+dtype_s:((shop) )  +name:(+coffee ) '
    assert data['build']['params'] == {
        'start': 0,
        'rows': engine.MAX,
        'facet.field': ['city'],
        'facet': True,
    }
    query = """query($clauses: [Clause!]!) { build(clauses: $clauses, rows: 5, sort: ["id desc"]) { q params } }"""
    clauses = [
        {'clauses': [{'value': 'a'}, {'value': 'b'}], 'modifier': 'prohibited'},
        {'field': 'tags', 'values': ['a', 'b'], 'boost': 1.5},
    ]
    data = client.execute(query, clauses=clauses)
    assert data['build'] == {
        'q': '-(a b ) tags:((+a +b ) ) ^1.5 ',
        'params': {'start': 0, 'rows': 5, 'sort': 'id desc'},
    }


def test_errors(client):
    with pytest.raises(ValueError, match='rows'):
        client.execute('{ build(clauses: [], rows: -1) { q } }')
    with pytest.raises(ValueError, match='term modifier'):
        client.execute('{ build(clauses: [{value: "a", modifier: "optional"}]) { q } }')


def test_escape(client):
    assert client.execute('{ escape(text: "a:b") }') == {'escape': r'a\:b'}
    assert client.execute('{ escape(text: "a-b c", blanks: false) }') == {'escape': 'abc'}

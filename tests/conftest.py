import re
import sys
import pytest

ESCAPED = re.compile(r'\\.')


def is_balanced(text: str) -> bool:
    depth = 0
    for char in ESCAPED.sub('', text):
        depth += {'(': 1, ')': -1}.get(char, 0)
        if depth < 0:
            return False
    return depth == 0


@pytest.fixture
def balanced():
    """Return predicate of whether unescaped parentheses are balanced."""
    return is_balanced


@pytest.fixture
def environ(monkeypatch):
    monkeypatch.setenv('WILDCARDED', 'false')
    for name in ('settings', 'rest', 'graphql'):
        sys.modules.pop(f'lucenequery.services.{name}', None)

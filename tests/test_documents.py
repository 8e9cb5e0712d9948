import datetime
import pytest
from lucenequery.engine import Document, StringMode, Suffixes, dynamic_name
from lucenequery.engine.documents import format_datetime


def test_suffixes():
    suffixes = Suffixes()
    assert suffixes.suffix(True) == suffixes.suffix(bool) == '_b'
    assert suffixes.suffix(1) == suffixes.suffix(int) == '_i'
    assert suffixes.suffix(2**31) == suffixes.suffix(-(2**31) - 1) == '_l'
    assert suffixes.suffix(0.5) == suffixes.suffix(float) == '_d'
    assert suffixes.suffix(datetime.date.today()) == suffixes.suffix(datetime.datetime) == '_dt'
    assert suffixes.suffix('') == '_s'
    assert suffixes.suffix('', StringMode.TEXT) == '_t'
    assert suffixes.suffix(str, StringMode.SPLIT) == suffixes.suffix(['a']) == '_tw'
    with pytest.raises(TypeError):
        suffixes.suffix(object())
    suffixes = Suffixes(string='_str')
    assert suffixes.string == '_str' and Suffixes.string == '_s'
    assert "string='_str'" in repr(suffixes)
    with pytest.raises(AttributeError):
        Suffixes(str='_str')


def test_dynamic_name():
    assert dynamic_name('dtype', str) == 'dtype_s'
    assert dynamic_name('name', 'x', StringMode.TEXT) == 'name_t'
    assert dynamic_name('count', 3, suffixes=Suffixes(integer='_int')) == 'count_int'


def test_format_datetime():
    value = datetime.datetime(2020, 1, 2, 3, 4, 5, 678901)
    assert format_datetime(value) == '2020-01-02T03:04:05.678Z'
    assert format_datetime(datetime.date(2020, 1, 2)) == '2020-01-02T00:00:00.000Z'
    zone = datetime.timezone(datetime.timedelta(hours=2))
    assert format_datetime(value.replace(tzinfo=zone)) == '2020-01-02T01:04:05.678Z'


def test_document():
    doc = Document()
    assert not doc.add('name', None)
    assert doc.add('name', 'x') and doc.add('name', 1)
    assert doc.getlist('name') == ['x', '1'] and doc.getlist('missing') == []
    assert doc.add_dynamic('flag', False) and doc['flag_b'] == ['false']
    assert doc.add_dynamic('tags', ['a', None, 'b']) and doc['tags_tw'] == ['a b']
    assert doc.add_dynamic('title', 'a b', StringMode.TEXT) and doc['title_t'] == ['a b']
    assert not doc.add_dynamic('other', None)
    assert doc.add_multi('city', 'a b')
    assert doc.add_multi('city', 3)
    assert not doc.add_multi('city', [None]) and not doc.add_multi('city', None)
    assert doc['city'] == ['a', 'b', '3']
    doc = Document(Suffixes(boolean='_bool'))
    doc.add_dynamic('flag', True)
    assert doc == {'flag_bool': ['true']}

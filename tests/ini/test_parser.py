import pytest

from initree import parse_string
from initree.ini import (
    DuplicateKey,
    IniDocument,
    IniSyntaxError,
    SectionNotFound,
    StrictIniReader
)

SAMPLE = '''
key1 = value

# comment

test = bar ; comment

[section 1]
key1 = new key
num = 151
empty


[ various   ]
"quoted key"= VALUE 123

quote_multiline = """
  this is value
"""

escape_sequences = "yay\\nboo"
escaped_newlines = abcd \\
efg
'''


def test_parser_sample():
    ini = parse_string(SAMPLE)
    assert ini.root.get_key('key1') == 'value'
    assert ini.root.get_key('test') == 'bar ; comment'

    assert 'section 1' in ini
    section = ini['section 1']
    assert section['key1'] == 'new key'
    assert section['num'] == '151'
    assert section['empty'] == ''

    various = ini['various']
    assert various['quoted key'] == 'VALUE 123'
    assert various['quote_multiline'] == '\n  this is value\n'
    assert various['escape_sequences'] == 'yay\nboo'
    assert various['escaped_newlines'] == 'abcd efg'


def test_parser_with_strict_reader():
    ini = parse_string('path=C:\\Path\n[ s ]\na=1\n', reader=StrictIniReader)
    assert ini.root['path'] == 'C:\\Path'
    assert ini[' s ']['a'] == '1'


def test_parser_empty_section_name():
    ini = parse_string('[]\na=1\n')
    assert ini['']['a'] == '1'


def test_parser_duplicate_key():
    data = '[sect]\nuser=u1\npass=pppp\nuser=u2\n'
    with pytest.raises(DuplicateKey) as e:
        parse_string(data)
    assert e.value.section == 'sect'
    assert e.value.key == 'user'
    assert e.value.line_number == 4


def test_parser_repeated_header_makes_new_section():
    ini = parse_string('[a]\nuser=u1\n[a]\nuser=u2\n')
    assert list(ini) == ['a', 'a']
    first, second = ini.root.sections
    assert ini['a'] == first
    assert first['user'] == 'u1'
    assert second['user'] == 'u2'


def test_parser_duplicate_key_only_within_one_header():
    with pytest.raises(DuplicateKey):
        parse_string('[a]\nx=1\n[a]\nx=2\nx=3\n')


def test_parser_full_inheritance():
    ini = parse_string('[foo]\na=b\nc=d\n[bar : foo]\n')
    assert ini['foo'].get_key('c') == 'd'
    assert dict(ini['foo']) == dict(ini['bar'])


def test_parser_inheritance_chain():
    data = '''
[foo]
user=u1
a=b

[bar : foo]
pass=pppp
user=u2

[baz : bar]
user=u3
'''
    ini = parse_string(data)
    assert ini['foo']['user'] == 'u1'
    assert ini['bar']['user'] == 'u2'
    assert ini['baz']['user'] == 'u3'

    assert ini['foo']['a'] == 'b'
    assert ini['bar']['a'] == 'b'
    assert ini['baz']['a'] == 'b'

    assert not ini['foo'].has_key('pass')
    assert ini['bar']['pass'] == 'pppp'
    assert ini['baz']['pass'] == 'pppp'


def test_parser_inherit_undeclared():
    with pytest.raises(SectionNotFound) as e:
        parse_string('[child : later]\n[later]\n')
    assert e.value.line_number == 1


def test_parser_inherit_nothing():
    with pytest.raises(IniSyntaxError):
        parse_string('[child : ]\n')


def test_parser_nested_sections():
    ini = parse_string('[db]\nhost=a\n[db.replica]\nhost=b\n[x.y.z]\nk=v\n')
    assert ini['db']['host'] == 'a'
    assert ini['db'].get_section('replica')['host'] == 'b'
    assert ini.root.get_section_ex('x.y.z')['k'] == 'v'
    # intermediate sections are plain and empty.
    assert len(ini['x']) == 0
    assert list(ini) == ['db', 'x']


def test_parser_nested_inheritance_scope():
    data = '''
[common]
timeout=30

[db.primary]
host=p
port=5432

[db.replica : primary]
host=r

[db.backup : .common]
'''
    ini = parse_string(data)
    replica = ini.root.get_section_ex('db.replica')
    assert dict(replica) == {'host': 'r', 'port': '5432'}
    backup = ini.root.get_section_ex('db.backup')
    assert dict(backup) == {'timeout': '30'}
    # only the leaf inherits.
    assert len(ini['db']) == 0


def test_parser_relative_parent_is_nesting_point():
    with pytest.raises(SectionNotFound):
        parse_string('[common]\n[db.backup : common]\n')


def test_parser_lookups():
    data = '[api]\nendpoint=http://test\nuser_url=%endpoint%/users\n'
    assert parse_string(data)['api']['user_url'] == 'http://test/users'
    raw = parse_string(data, lookups=False)
    assert raw['api']['user_url'] == '%endpoint%/users'


def test_parser_lookups_through_inheritance():
    data = '''
[def]
name1=value1
name2=value2

[foo : def]
name1=Name1 from foo. Lookup for def.name2: %name2%
'''
    ini = parse_string(data)
    assert ini['foo']['name1'] == \
        'Name1 from foo. Lookup for def.name2: value2'


def test_parser_into_existing_document():
    ini = IniDocument()
    ini.root.add_section('env')['home'] = '/home/u'
    parse_string('[app]\ncfg=%.env.home%/.app\n[env.extra]\nk=v\n', ins=ini)
    assert ini['app']['cfg'] == '/home/u/.app'
    # dotted headers descend into existing sections.
    assert list(ini) == ['env', 'app']
    assert ini['env'].get_section('extra')['k'] == 'v'


def test_parser_inject_before_lookups():
    ini = parse_string('[section]\nname=%value%\n', lookups=False)
    ini['section']['value'] = 'verify'
    ini.resolve_lookups()
    assert ini['section']['name'] == 'verify'


def test_parser_parse_string_classmethod():
    ini = IniDocument.parse_string('a=%b%\nb=1\n', lookups=False)
    assert ini.root['a'] == '%b%'
    ini.root['b'] = '2'
    ini.resolve_lookups()
    assert ini.root['a'] == '2'

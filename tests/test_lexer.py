'''
stak lexer tests
'''

import sys

import regex

from stak.util import InvalidIndex
from stak.lexer import Lexer

from pytest import raises, mark


def test_skips_repeated_spaces():
    l = Lexer()
    assert list(l.lex('1  2   +')) == ['1', '2', '+']


def test_trailing_newline():
    l = Lexer()
    assert list(l.lex(' 3 4 <>\n')) == ['3', '4', '<>']


def test_blank_line():
    l = Lexer()
    assert list(l.lex('   ')) == []
    assert list(l.lex('')) == []


def test_compound_prefixes():
    l = Lexer()
    for token, prefix, suffix in [('~', '~', ''),
                                  ('~3', '~', '3'),
                                  ('<<', '<<', ''),
                                  ('<<12', '<<', '12'),
                                  ('>>2', '>>', '2'),
                                  ('<<<', '<<', '<')]:
        match = l.compound(token)
        assert match.group('prefix') == prefix
        assert match.group('suffix') == suffix


def test_not_compound():
    l = Lexer()
    assert l.compound('<>') is None
    assert l.compound('sum') is None
    assert l.compound('3~') is None


def test_index():
    l = Lexer()
    assert l.index('') is None
    assert l.index('0') == 0
    assert l.index('42') == 42
    assert l.index('+2') == 2


def test_bad_index():
    l = Lexer()
    for suffix in 'abc', '-1', '1.5', '+', '++2', '1_0', '~':
        with raises(InvalidIndex, match=regex.escape(suffix)) as e:
            l.index(suffix)
        assert e.value.text == suffix


@mark.skipif(not getattr(sys, 'get_int_max_str_digits', lambda: 0)(),
             reason='int() has no digit limit')
def test_index_too_long():
    l = Lexer()
    suffix = '9' * 5000
    with raises(InvalidIndex) as e:
        l.index(suffix)
    assert e.value.text == suffix

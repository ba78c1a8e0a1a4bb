'''
Keystroke lexer tests
'''

import regex

from rpcalc.util import RPCalcError
from rpcalc.lexer import Lexer

from pytest import raises


def test_spaced_keys():
    l = Lexer()
    assert l.keys('5 ent 3 +') == ['5', 'ent', '3', '+']


def test_run_together_keys():
    l = Lexer()
    assert l.keys('5ent3+') == ['5', 'ent', '3', '+']
    assert l.keys('e^xln') == ['e^x', 'ln']


def test_digits_are_single_keys():
    l = Lexer()
    assert l.keys('1.5 exp 12') == ['1', '.', '5', 'exp', '1', '2']


def test_longest_key_wins():
    l = Lexer()
    assert l.keys('x<>y x^2 r< r> <-') == ['x<>y', 'x^2', 'r<', 'r>', '<-']
    assert l.keys('rcip rcl') == ['rcip', 'rcl']


def test_case_insensitive():
    l = Lexer()
    assert l.keys('PI Sqrt ENT') == ['pi', 'sqrt', 'ent']


def test_whitespace_only():
    l = Lexer()
    assert l.keys(' \t\n') == []


def test_unknown_key():
    l = Lexer()
    with raises(RPCalcError, match=regex.escape("Couldn't lex foo")):
        l.keys('5 foo')


def test_lexes_up_to_unknown_key():
    l = Lexer()
    matches = l.lex('5 ent ?')
    assert next(matches).group('key') == '5'
    assert next(matches).group('space') == ' '
    assert next(matches).group('key') == 'ent'
    next(matches)
    with raises(RPCalcError, match=regex.escape("Couldn't lex ?")):
        next(matches)

'''
Key lexer tests
'''

import regex

from pocketcalc.util import CalcError
from pocketcalc.lexer import Lexer
from pocketcalc.machine import Action, DECIMAL, EQUALS, CLEAR, DELETE, \
                               TOGGLE_SIGN, PERCENT

from pytest import raises


def test_keypad():
    l = Lexer()
    assert list(l.actions('12.5*3=')) == [Action.digit(1),
                                          Action.digit(2),
                                          DECIMAL,
                                          Action.digit(5),
                                          Action.operator('*'),
                                          Action.digit(3),
                                          EQUALS]


def test_operators():
    l = Lexer()
    assert [a.arg.value for a in l.actions('+-*/')] == ['+', '-', '*', '/']


def test_space_is_ignored():
    l = Lexer()
    assert list(l.actions(' 1 +\t2\n')) == list(l.actions('1+2'))


def test_keyboard_keys():
    l = Lexer()
    assert list(l.actions('<Enter><Backspace><Escape>')) == [EQUALS,
                                                             DELETE,
                                                             CLEAR]


def test_button_names():
    l = Lexer()
    actions = l.actions('<clear><delete><equals><decimal>'
                        '<toggleSign><percent>')
    assert list(actions) == [CLEAR, DELETE, EQUALS, DECIMAL,
                             TOGGLE_SIGN, PERCENT]


def test_key_groups():
    l = Lexer()
    match, = l.lex('<Enter>')
    assert l.matchedgroups(match) == {'key': '<Enter>', '__key__': 'Enter'}


def test_space_is_not_feedable():
    l = Lexer()
    match, = l.lex('  ')
    assert not l.isfeedable(match)


def test_unknown_character():
    l = Lexer()
    with raises(CalcError, match=regex.escape("Couldn't lex x3")):
        list(l.actions('2x3'))


def test_keys_before_bad_text_are_lexed():
    l = Lexer()
    actions = l.actions('12x')
    assert next(actions) == Action.digit(1)
    assert next(actions) == Action.digit(2)
    with raises(CalcError):
        next(actions)


def test_unknown_key():
    l = Lexer()
    with raises(CalcError, match=regex.escape('No such key <Tab>')):
        list(l.actions('<Tab>'))


def test_unclosed_key():
    l = Lexer()
    with raises(CalcError, match=regex.escape("Couldn't lex <Enter")):
        list(l.actions('1<Enter'))

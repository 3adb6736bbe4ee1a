from functools import reduce
import operator

import regex

from .util import CalcError, wrap_user_errors
from . import machine
from .machine import Action, Machine


class Lexer:
    '''
    Lexer for calculator key text.

    A line of text is a run of keys: digits, operators, ., =, and named keys
    in angle brackets, e.g. <Backspace> or <toggleSign>. Whitespace between
    keys is ignored.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    DIGIT = r'[0-9]'
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, Machine.OPERATORS)) + r')'
    DECIMAL = r'\.'
    EQUALS = r'='
    # <Enter>, <toggleSign>, ...
    KEY = r'''
           <
           (?<__key__>
               \w+
           )
           >
           '''
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<digit>' + DIGIT + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<decimal>' + DECIMAL + r')|' \
             r'(?<equals>' + EQUALS + r')|' \
             r'(?<key>' + KEY + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Named keys: keyboard keys first, then the names of calculator buttons.
    KEYS = {
        'Enter': machine.EQUALS,
        'Backspace': machine.DELETE,
        'Escape': machine.CLEAR,

        'clear': machine.CLEAR,
        'delete': machine.DELETE,
        'equals': machine.EQUALS,
        'decimal': machine.DECIMAL,
        'toggleSign': machine.TOGGLE_SIGN,
        'percent': machine.PERCENT,
    }

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Yields every lexeme up to the first bad one, then raises CalcError.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the groups a lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def parse(self, groups):
        '''
        Turn matched groups into the action they stand for.
        '''
        if 'digit' in groups:
            return Action.digit(groups['digit'])
        elif 'operator' in groups:
            return Action.operator(groups['operator'])
        elif 'decimal' in groups:
            return machine.DECIMAL
        elif 'equals' in groups:
            return machine.EQUALS
        elif 'key' in groups:
            return self.key(groups['__key__'])
        raise CalcError('Not a key {}'.format(repr(groups)))

    @wrap_user_errors('No such key <{1}>')
    def key(self, name):
        '''
        Look up a named key.
        '''
        return type(self).KEYS[name]

    def actions(self, line):
        '''
        Yield the action of every key on a line.
        '''
        for match in self.lex(line):
            if self.isfeedable(match):
                yield self.parse(self.matchedgroups(match))

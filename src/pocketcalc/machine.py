from collections import namedtuple
from enum import Enum
import operator
import math

from .util import ERROR, CalcError, format_number, parse_number, \
                  wrap_user_errors


class Op(Enum):
    '''
    Binary operators, valued by the key that selects them.
    '''
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'


class Kind(Enum):
    '''
    Everything a calculator key can do.
    '''
    DIGIT = 'digit'
    DECIMAL = 'decimal'
    OPERATOR = 'operator'
    EQUALS = 'equals'
    CLEAR = 'clear'
    DELETE = 'delete'
    TOGGLE_SIGN = 'toggleSign'
    PERCENT = 'percent'


class Action(namedtuple('Action', ['kind', 'arg'])):
    '''
    One key press: its Kind, plus the digit or Op it carries, if any.

    Digits and operators need their argument, every other kind takes none.
    Anything else is rejected on construction, so a Machine can trust any
    Action it is given.
    '''
    __slots__ = ()

    DIGITS = '0123456789'

    def __new__(cls, kind, arg=None):
        kind = cls._kind(kind)
        if kind is Kind.DIGIT:
            arg = cls._digit(arg)
        elif kind is Kind.OPERATOR:
            arg = cls._operator(arg)
        elif arg is not None:
            raise CalcError('{} takes no argument'.format(kind.value))
        return super().__new__(cls, kind, arg)

    @staticmethod
    @wrap_user_errors('No such action {0!r}')
    def _kind(kind):
        return Kind(kind)

    @classmethod
    def _digit(cls, d):
        if d is None:
            raise CalcError('Missing digit')
        d = str(d)
        if len(d) != 1 or d not in cls.DIGITS:
            raise CalcError('Not a digit {}'.format(repr(d)))
        return d

    @staticmethod
    @wrap_user_errors('No such operator {0!r}')
    def _operator(op):
        return Op(op)

    @classmethod
    def digit(cls, d):
        return cls(Kind.DIGIT, d)

    @classmethod
    def operator(cls, op):
        return cls(Kind.OPERATOR, op)

    def __str__(self):
        if self.arg is None:
            return self.kind.value
        return '{} {}'.format(self.kind.value, getattr(self.arg, 'value',
                                                      self.arg))


DECIMAL = Action(Kind.DECIMAL)
EQUALS = Action(Kind.EQUALS)
CLEAR = Action(Kind.CLEAR)
DELETE = Action(Kind.DELETE)
TOGGLE_SIGN = Action(Kind.TOGGLE_SIGN)
PERCENT = Action(Kind.PERCENT)


View = namedtuple('View', ['display', 'history'])


ARITHMETIC = {
    Op.ADD: operator.__add__,
    Op.SUBTRACT: operator.__sub__,
    Op.MULTIPLY: operator.__mul__,
    Op.DIVIDE: operator.__truediv__,
}


def compute(a, op, b):
    '''
    Apply op to a and b. Division by zero gives NaN rather than raising.
    '''
    try:
        return ARITHMETIC[op](a, b)
    except ArithmeticError:
        return math.nan


class State:
    '''
    Everything the calculator remembers between key presses.

    previous and operator are set and cleared together.
    '''
    __slots__ = 'current', 'previous', 'operator', 'reset_on_next_digit'

    def __init__(self):
        self.current = '0'
        self.previous = None
        self.operator = None
        # Next digit starts a new operand instead of extending current.
        self.reset_on_next_digit = False

    def __repr__(self):
        return '{}(current={!r}, previous={!r}, operator={}, ' \
               'reset_on_next_digit={})'.format(type(self).__name__,
                                                self.current,
                                                self.previous,
                                                self.operator,
                                                self.reset_on_next_digit)


class Machine:
    '''
    Two operand calculator (the kind with four functions and a percent key).

    Takes actions one at a time and keeps the state they build up. Holds at
    most one pending operator; chained operators are resolved left to right
    as they are entered, with no precedence. Never raises on an action:
    bad arithmetic shows up as the Error display, and meaningless actions do
    nothing.

    Not safe to feed from several threads at once.
    '''

    # Display symbols of pending operators.
    SYMBOLS = {
        Op.ADD: '+',
        Op.SUBTRACT: '\N{MINUS SIGN}',
        Op.MULTIPLY: '\N{MULTIPLICATION SIGN}',
        Op.DIVIDE: '\N{DIVISION SIGN}',
    }

    def __init__(self):
        self.state = State()

    def apply(self, action):
        '''
        Run action against the current state.
        '''
        handler = type(self).HANDLERS[action.kind]
        if action.arg is None:
            handler(self)
        else:
            handler(self, action.arg)

    def view(self):
        '''
        Return what to show: the display, and the pending operation, if any.
        '''
        state = self.state
        if state.previous is None or state.operator is None:
            history = ''
        else:
            history = '{} {}'.format(format_number(state.previous),
                                     type(self).SYMBOLS[state.operator])
        return View(display=state.current, history=history)

    def _iserror(self):
        return self.state.current == ERROR

    def digit(self, d):
        state = self.state
        if self._iserror():
            state.current = '0'
            state.previous = None
            state.operator = None
        if state.reset_on_next_digit:
            state.current = d
            state.reset_on_next_digit = False
        elif state.current == '0':
            state.current = d
        else:
            state.current += d

    def decimal(self):
        state = self.state
        if self._iserror():
            return
        if state.reset_on_next_digit:
            state.current = '0.'
            state.reset_on_next_digit = False
        elif '.' not in state.current:
            state.current += '.'

    def clear(self):
        '''
        Forget everything, back to a zero display.
        '''
        state = self.state
        state.current = '0'
        state.previous = None
        state.operator = None
        state.reset_on_next_digit = False

    def delete(self):
        '''
        Backspace over the operand being typed.

        Clears instead if showing Error. Does nothing to a computed result.
        '''
        state = self.state
        if self._iserror():
            return self.clear()
        if state.reset_on_next_digit:
            return
        current = state.current
        if len(current) <= 1 or \
           len(current) == 2 and current.startswith('-'):
            state.current = '0'
        else:
            state.current = current[:-1]

    def toggle_sign(self):
        state = self.state
        if self._iserror() or state.current == '0':
            return
        if state.current.startswith('-'):
            state.current = state.current[1:]
        else:
            state.current = '-' + state.current

    def percent(self):
        state = self.state
        if self._iserror():
            return
        x = parse_number(state.current)
        if not math.isfinite(x):
            return
        state.current = format_number(x / 100)

    def operator(self, op):
        '''
        Choose op as the pending operator.

        If an operand was typed since the last operator, the operation
        pending before it is resolved first, so 2 + 3 + shows 5. Pressing
        operators back to back only swaps the pending one.
        '''
        state = self.state
        if self._iserror():
            return
        x = parse_number(state.current)
        if not math.isfinite(x):
            return
        if state.operator is not None and state.previous is not None and \
           not state.reset_on_next_digit:
            state.previous = compute(state.previous, state.operator, x)
            state.current = format_number(state.previous)
        elif state.previous is None:
            state.previous = x
        state.operator = op
        state.reset_on_next_digit = True

    def equals(self):
        state = self.state
        if self._iserror():
            return
        if state.operator is None or state.previous is None:
            return
        b = parse_number(state.current)
        if not math.isfinite(b):
            return
        result = compute(state.previous, state.operator, b)
        state.current = format_number(result)
        state.previous = None
        state.operator = None
        state.reset_on_next_digit = True

    # Action kind to handler; every kind needs one.
    HANDLERS = {
        Kind.DIGIT: digit,
        Kind.DECIMAL: decimal,
        Kind.OPERATOR: operator,
        Kind.EQUALS: equals,
        Kind.CLEAR: clear,
        Kind.DELETE: delete,
        Kind.TOGGLE_SIGN: toggle_sign,
        Kind.PERCENT: percent,
    }
    assert HANDLERS.keys() == set(Kind)

    # Key to operator, for lexers.
    OPERATORS = {op.value: op for op in Op}

'''
Four function calculator.

The engine behind the usual pocket calculator keypad: digits, a decimal
point, + − × ÷, equals, clear, backspace, sign toggle and percent. One
pending operator at a time, chained left to right as you go, so 2 + 3 × 4 =
is 20, like the real thing, not 14.

Machine is the engine; feed it Actions and read back its View. Lexer turns
key text such as "12*3=" or "5<Backspace>" into Actions, and CLI drives a
Machine from the command line, a pipe, or an interactive prompt.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Action, Kind, Op, View
from .util import CalcError


__all__ = 'Machine', 'Action', 'Kind', 'Op', 'View', 'Lexer', 'CLI', \
          'CalcError'

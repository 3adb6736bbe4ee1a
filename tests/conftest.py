from typing import Callable

from pytest import Item, fixture

from pocketcalc.lexer import Lexer
from pocketcalc.machine import Machine, View


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, to audit which key sequences were checked.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def press(machine: Machine) -> Callable[[str], View]:
    '''
    Press a line of keys on the machine, as typed at the prompt.

    Returns the view afterwards.
    '''
    lexer = Lexer()

    def press(keys: str) -> View:
        for action in lexer.actions(keys):
            machine.apply(action)
        return machine.view()
    return press

from pytest import Item, fixture

from rpcalc.display import TerminalDisplay
from rpcalc.lexer import Lexer
from rpcalc.machine import Machine
from rpcalc.persistence import MemoryStore


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def display():
    return TerminalDisplay()


@fixture
def store():
    return MemoryStore()


@fixture
def machine(display, store):
    return Machine(display=display, store=store)


@fixture
def run(machine):
    '''
    Press the keys typed in a line, e.g. run('5 ent 3 +').
    '''
    lexer = Lexer()

    def run(line):
        machine.feed(lexer.keys(line))
        return machine
    return run

'''
Calculator keys: digits and the evaluator functions.

Control keys act on the whole machine and are defined along with it.

Evaluators follow IEEE floating-point semantics: domain errors give nan,
overflow and division by zero give signed infinities, nothing raises.
'''

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional
import math


inf = math.inf
nan = math.nan


def _ieee(f):
    '''
    Turn math module domain and range errors into nan and inf.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return f(*args)
        except OverflowError:
            return inf
        except ValueError:
            return nan
    return wrapped


def _odd(n):
    return math.isfinite(n) and n == int(n) and int(n) % 2 == 1


def divide(y, x):
    '''
    y / x, with infinities for division by zero.
    '''
    if x == 0:
        if y == 0 or math.isnan(y):
            return nan
        return math.copysign(inf, y) * math.copysign(1.0, x)
    return y / x


def power(y, x):
    '''
    y raised to x.
    '''
    try:
        return math.pow(y, x)
    except OverflowError:
        return -inf if y < 0 and _odd(x) else inf
    except ValueError:
        # Zero to a negative power, or negative base to a fractional one.
        if y == 0:
            return math.copysign(inf, y) if _odd(x) else inf
        return nan


def root(y, x):
    '''
    x-th root of y.
    '''
    return power(y, divide(1.0, x))


def reciprocal(x):
    return divide(1.0, x)


def square(x):
    return x * x


def sqrt(x):
    return nan if x < 0 else math.sqrt(x)


def ln(x):
    if x == 0:
        return -inf
    return nan if x < 0 else math.log(x)


def log10(x):
    if x == 0:
        return -inf
    return nan if x < 0 else math.log10(x)


@_ieee
def exp(x):
    return math.exp(x)


def ten_power(x):
    return power(10.0, x)


@dataclass(frozen=True)
class Key:
    '''
    Named, immutable key.
    '''
    label: str

    # Keys that leave a transient display override in place.
    transient = False

    @property
    def isdigit(self):
        '''
        True for 0 to 9, the keys that answer register and places prompts.
        '''
        return len(self.label) == 1 and self.label.isdigit()

    def execute(self, machine):
        raise NotImplementedError


@dataclass(frozen=True)
class DigitKey(Key):
    '''
    Digit or decimal point; types into the X entry buffer.
    '''

    def execute(self, machine):
        machine.digit(self.label)


@dataclass(frozen=True)
class BinaryKey(Key):
    '''
    Replaces X and Y with function(Y, X).
    '''
    function: Optional[Callable[[float, float], float]] = None

    def __call__(self, y, x):
        return self.function(y, x)

    def execute(self, machine):
        machine.evaluated(self(machine.stack.y, machine.stack.x), arity=2)


@dataclass(frozen=True)
class UnaryKey(Key):
    '''
    Replaces X with function(X).

    Trigonometric keys scale their argument (angle_in) or their result
    (angle_out) by the current angle unit.
    '''
    function: Optional[Callable[[float], float]] = None
    angle_in: bool = False
    angle_out: bool = False

    def __call__(self, x, unit):
        if self.angle_in:
            x = x * unit.radians
        result = self.function(x)
        if self.angle_out:
            result = result / unit.radians
        return result

    def execute(self, machine):
        machine.evaluated(self(machine.stack.x, machine.settings.angle_unit),
                          arity=1)


DIGITS = {
    label: DigitKey(label)
    for label
    in '0123456789.'
}


EVALUATORS = {
    key.label: key
    for key
    in [
        # Arithmetic
        BinaryKey('+', lambda y, x: y + x),
        BinaryKey('-', lambda y, x: y - x),
        BinaryKey('*', lambda y, x: y * x),
        BinaryKey('/', divide),
        BinaryKey('y^x', power),
        BinaryKey('xrt', root),
        UnaryKey('x^2', square),
        UnaryKey('sqrt', sqrt),
        UnaryKey('rcip', reciprocal),

        # Trigonometric
        UnaryKey('sin', _ieee(math.sin), angle_in=True),
        UnaryKey('cos', _ieee(math.cos), angle_in=True),
        UnaryKey('tan', _ieee(math.tan), angle_in=True),
        UnaryKey('asin', _ieee(math.asin), angle_out=True),
        UnaryKey('acos', _ieee(math.acos), angle_out=True),
        UnaryKey('atan', _ieee(math.atan), angle_out=True),

        # Logarithmic
        UnaryKey('ln', ln),
        UnaryKey('log', log10),
        UnaryKey('e^x', exp),
        UnaryKey('tn^x', ten_power),
    ]
}


@dataclass(frozen=True)
class ControlKey(Key):
    '''
    Key with an arbitrary effect on the machine: action(machine).
    '''
    action: Optional[Callable] = None
    transient: bool = False

    def execute(self, machine):
        self.action(machine)

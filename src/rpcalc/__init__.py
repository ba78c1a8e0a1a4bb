'''
Four register RPN calculator.

Keys go in one at a time, as on a pocket calculator: digits build up X,
evaluators consume X (and Y), and a handful of control keys shuffle the
stack, store and recall the ten memory registers, and switch between fixed
and scientific notation, decimal places and angle units.

Settings, memory and, optionally, the stack outlive the session.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Mode


__all__ = 'Machine', 'Mode', 'Lexer', 'CLI'

'''
The key driven calculator engine.
'''

from enum import Enum
import logging
import math

from .display import Display
from .formatter import EXPONENT_MARK, format_full, is_number
from .keys import ControlKey, DIGITS, EVALUATORS
from .persistence import MemoryStore
from .settings import AngleUnit, clamp_places
from .stack import Stack
from .util import RPCalcError, wrap_user_errors


logger = logging.getLogger(__name__)


class Mode(Enum):
    ENTRY = 'entry'            # typing X, digits append
    SAVE = 'save'              # after a result, next number pushes it to Y
    REPLACE = 'replace'        # after enter, next number replaces X
    EXPONENT = 'exponent'      # typing the exponent of X
    MEM_STORE = 'mem_store'    # waiting for a register digit to store into
    MEM_RECALL = 'mem_recall'  # waiting for a register digit to recall
    DEC_PLACES = 'dec_places'  # waiting for a decimal places digit


# Modes in which only the digits 0 to 9 are accepted.
PROMPT_MODES = frozenset({Mode.MEM_STORE, Mode.MEM_RECALL, Mode.DEC_PLACES})


class Machine:
    '''
    Four register RPN calculator.

    Takes key names, one at a time, and runs them against the stack, the
    memory registers and the settings. Display and persistence are
    collaborators, given at creation.
    '''

    REGISTER_PROMPT = 'Reg 0-9:'
    PLACES_PROMPT = 'Places 0-9:'

    def __init__(self, display=None, store=None):
        '''
        Create machine, restoring settings, memory and stack from store.

        :param display: Display to render to. Default renders nowhere.
        :param store: Persistence for settings, memory and stack. Default
                      keeps them in memory only.
        '''
        self.display = Display() if display is None else display
        self.store = MemoryStore() if store is None else store
        self.settings, self.memory = self.store.load_settings()
        self.stack = Stack(self.settings)
        if self.settings.persist_stack:
            values = self.store.load_stack()
            if values is not None:
                self.stack.restore(values)
        self.mode = Mode.SAVE
        # Showing full precision X instead of the entry buffer.
        self.peeking = False
        self._saved_stack = tuple(self.stack.values)
        self.refresh()
        self.update_status()

    def press(self, name):
        '''
        Run key with name.

        Returns False if the key is not accepted in the current mode, which
        leaves everything unchanged.
        '''
        key = type(self).KEYS.get(name.lower())
        if key is None:
            raise RPCalcError('No such key {!r}'.format(name))
        if self.mode in PROMPT_MODES and not key.isdigit:
            logger.debug('Ignoring %r in %s mode', key.label, self.mode.name)
            return False
        if not key.transient:
            self.peeking = False
        mode = self.mode
        key.execute(self)
        if self.mode is not mode:
            logger.debug('%r: %s -> %s', key.label, mode.name, self.mode.name)
        self.refresh()
        return True

    def feed(self, names):
        '''
        Press all keys in order.
        '''
        for name in names:
            self.press(name)

    def peek(self):
        '''
        Return X with all its significant digits.
        '''
        return format_full(self.stack.x)

    def status(self):
        return self.settings.status()

    def refresh(self):
        '''
        Render stack to the display, and persist it if it changed.
        '''
        if self.peeking:
            self.display.render_x(self.peek())
            return
        if self.settings.show_registers:
            self.display.render_registers(self.stack.registers())
        else:
            self.display.render_registers('')
        self.display.render_x(self.stack.xstr)
        self.save_stack()

    def update_status(self):
        self.display.render_status(self.status())

    def save_settings(self):
        self.store.save_settings(self.settings, self.memory)

    def save_stack(self):
        values = tuple(self.stack.values)
        if self.settings.persist_stack and values != self._saved_stack:
            self.store.save_stack(list(values))
            self._saved_stack = values

    def evaluated(self, result, arity):
        '''
        Put result of an evaluator key in place of its arguments.
        '''
        if arity == 2:
            self.stack.replace_top_two(result)
        else:
            self.stack.replace_top(result)
        self.mode = Mode.SAVE

    def digit(self, label):
        '''
        Digit or decimal point, according to mode.
        '''
        stack = self.stack
        if self.mode is Mode.ENTRY:
            # Drop keystrokes that would make X unreadable, e.g. a second '.'
            if is_number(stack.xstr + label):
                stack.xstr += label
                stack.update_x()
        elif self.mode in (Mode.SAVE, Mode.REPLACE):
            if self.mode is Mode.SAVE:
                stack.enter()
            stack.xstr = label
            stack.update_x()
            self.mode = Mode.ENTRY
        elif self.mode is Mode.EXPONENT:
            if label == '.':
                return
            mantissa, mark, exponent = stack.xstr.partition(EXPONENT_MARK)
            digits = exponent.lstrip('-')
            sign = exponent[:len(exponent) - len(digits)]
            if digits == '0':
                digits = ''
            stack.xstr = mantissa + mark + sign + digits + label
            stack.update_x()
        elif self.mode is Mode.MEM_STORE:
            self.memory.store(int(label), stack.x)
            stack.update_buffer()
            self.mode = Mode.SAVE
            self.save_settings()
        elif self.mode is Mode.MEM_RECALL:
            stack.push(self.memory.recall(int(label)))
            self.mode = Mode.SAVE
        elif self.mode is Mode.DEC_PLACES:
            self.settings.places = int(label)
            stack.update_buffer()
            self.mode = Mode.SAVE
            self.update_status()
            self.save_settings()

    def enter(self):
        '''
        Duplicate X into Y; the next number replaces X.
        '''
        self.stack.enter()
        self.mode = Mode.REPLACE

    def store_prompt(self):
        self.stack.xstr = type(self).REGISTER_PROMPT
        self.mode = Mode.MEM_STORE

    def recall_prompt(self):
        self.stack.xstr = type(self).REGISTER_PROMPT
        self.mode = Mode.MEM_RECALL

    def places_prompt(self):
        self.stack.xstr = type(self).PLACES_PROMPT
        self.mode = Mode.DEC_PLACES

    def roll_down(self):
        self.stack.roll_down()
        self.mode = Mode.SAVE

    def roll_up(self):
        self.stack.roll_up()
        self.mode = Mode.SAVE

    def swap(self):
        self.stack.swap()
        self.mode = Mode.SAVE

    def clear(self):
        self.stack.clear()
        self.mode = Mode.SAVE

    def pi(self):
        self.stack.push(math.pi)
        self.mode = Mode.SAVE

    def show(self):
        '''
        Toggle full precision X until the next key.
        '''
        self.peeking = not self.peeking

    def toggle_registers(self):
        self.settings.show_registers = not self.settings.show_registers
        self.save_settings()

    def toggle_scientific(self):
        self.settings.scientific = not self.settings.scientific
        self.stack.update_buffer()
        self.mode = Mode.SAVE
        self.update_status()
        self.save_settings()

    def cycle_angle_unit(self):
        self.settings.angle_unit = self.settings.angle_unit.next()
        self.update_status()
        self.save_settings()

    def exponent(self):
        '''
        Start typing the exponent of X, with a mantissa of 1 unless one is
        being typed.
        '''
        if self.mode is Mode.EXPONENT:
            return
        if self.mode is Mode.SAVE:
            self.stack.enter()
        if self.mode is not Mode.ENTRY:
            self.stack.xstr = '1'
        self.stack.xstr += EXPONENT_MARK + '0'
        self.stack.update_x()
        self.mode = Mode.EXPONENT

    def change_sign(self):
        '''
        Negate the exponent while typing one, X otherwise.
        '''
        stack = self.stack
        if self.mode is Mode.EXPONENT:
            mantissa, mark, exponent = stack.xstr.partition(EXPONENT_MARK)
            if exponent.startswith('-'):
                exponent = exponent[1:]
            else:
                exponent = '-' + exponent
            stack.xstr = mantissa + mark + exponent
        elif stack.xstr.startswith('-'):
            stack.xstr = stack.xstr[1:]
        else:
            stack.xstr = '-' + stack.xstr
        stack.update_x()

    def backspace(self):
        '''
        Undo the last keystroke of an entry, or zero X.
        '''
        stack = self.stack
        if (self.mode is Mode.ENTRY and len(stack.xstr) > 1 and
                stack.xstr[-2] != '-'):
            stack.xstr = stack.xstr[:-1]
            stack.update_x()
        elif self.mode is Mode.EXPONENT:
            mantissa, mark, exponent = stack.xstr.partition(EXPONENT_MARK)
            digits = exponent.lstrip('-')
            sign = exponent[:len(exponent) - len(digits)]
            if len(digits) > 1:
                digits = digits[:-1]
            elif digits != '0':
                digits = '0'
            else:
                # Exponent already gone, drop the suffix too.
                stack.xstr = mantissa
                stack.update_x()
                self.mode = Mode.ENTRY
                return
            stack.xstr = mantissa + mark + sign + digits
            stack.update_x()
        else:
            stack.replace_top(0.0)
            self.mode = Mode.REPLACE

    @wrap_user_errors('Bad decimal places {1}')
    def _places(self, places):
        return clamp_places(places)

    @wrap_user_errors('No such angle unit {1}')
    def _angle_unit(self, name):
        return AngleUnit(name)

    def apply_options(self, show_registers=None, scientific=None,
                      persist_stack=None, places=None, angle_unit=None):
        '''
        Change several settings at once. None leaves a setting as is.

        :param places: Decimal places, clamped to 0 to 9.
        :param angle_unit: AngleUnit, or its label: deg, rad or grad.
        '''
        # Validate everything before changing anything.
        if places is not None:
            places = self._places(places)
        if angle_unit is not None:
            angle_unit = self._angle_unit(angle_unit)
        self.peeking = False
        for name, value in [('show_registers', show_registers),
                            ('scientific', scientific),
                            ('persist_stack', persist_stack),
                            ('places', places),
                            ('angle_unit', angle_unit)]:
            if value is not None:
                setattr(self.settings, name, value)
        logger.info('Options now %s', self.settings)
        self.stack.update_buffer()
        self.mode = Mode.SAVE
        self.refresh()
        self.update_status()
        self.save_settings()

    CONTROLS = {
        key.label: key
        for key
        in [
            ControlKey('ent', enter),
            ControlKey('sto', store_prompt),
            ControlKey('rcl', recall_prompt),
            ControlKey('plcs', places_prompt),
            ControlKey('r<', roll_down),
            ControlKey('r>', roll_up),
            ControlKey('x<>y', swap),
            ControlKey('show', show, transient=True),
            ControlKey('reg', toggle_registers),
            ControlKey('sci', toggle_scientific),
            ControlKey('deg', cycle_angle_unit),
            ControlKey('clr', clear),
            ControlKey('pi', pi),
            ControlKey('exp', exponent),
            ControlKey('chs', change_sign),
            ControlKey('<-', backspace),
        ]
    }

    # Every key, by name.
    KEYS = dict()
    for namespace in DIGITS, EVALUATORS, CONTROLS:
        KEYS.update(namespace)

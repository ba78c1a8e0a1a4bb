'''
Saving and restoring settings, memory registers and the stack.

Restoring never fails: whatever is missing or malformed falls back to its
default, field by field.
'''

from numbers import Real
from pathlib import Path
import json
import logging

from .memory import MemoryBank, SLOTS
from .settings import AngleUnit, FormatSettings, MIN_PLACES, MAX_PLACES
from .stack import DEPTH


logger = logging.getLogger(__name__)


FLAGS = 'scientific', 'show_registers', 'persist_stack'


def _numbers(value, count):
    '''
    Return value as a list of count floats, or None if it isn't one.
    '''
    if not isinstance(value, list) or len(value) != count:
        return None
    # bool is a Real too.
    if not all(isinstance(item, Real) and not isinstance(item, bool)
               for item
               in value):
        return None
    return [float(item) for item in value]


def restore_settings(data):
    '''
    Build settings and memory from saved data, defaulting what's invalid.
    '''
    settings = FormatSettings()
    memory = MemoryBank()

    if 'angle_unit' in data:
        try:
            settings.angle_unit = AngleUnit(data['angle_unit'])
        except ValueError:
            logger.warning('Ignoring saved angle unit %r', data['angle_unit'])

    if 'places' in data:
        places = data['places']
        if (isinstance(places, int) and not isinstance(places, bool) and
                MIN_PLACES <= places <= MAX_PLACES):
            settings.places = places
        else:
            logger.warning('Ignoring saved decimal places %r', places)

    for flag in FLAGS:
        if flag in data:
            if isinstance(data[flag], bool):
                setattr(settings, flag, data[flag])
            else:
                logger.warning('Ignoring saved %s %r', flag, data[flag])

    if 'memory' in data:
        values = _numbers(data['memory'], SLOTS)
        if values is None:
            logger.warning('Ignoring saved memory %r', data['memory'])
        else:
            memory = MemoryBank(values)

    return settings, memory


def dump_settings(settings, memory):
    '''
    Return settings and memory as JSON compatible data.
    '''
    data = {flag: getattr(settings, flag) for flag in FLAGS}
    data['angle_unit'] = settings.angle_unit.value
    data['places'] = settings.places
    data['memory'] = list(memory.values)
    return data


class Store:
    '''
    Persistence for the machine.

    Subclasses provide _read() and _write(); both deal in one dict.
    '''

    def _read(self):
        raise NotImplementedError

    def _write(self, data):
        raise NotImplementedError

    def load_settings(self):
        '''
        Return saved FormatSettings and MemoryBank, or defaults.
        '''
        return restore_settings(self._read())

    def save_settings(self, settings, memory):
        data = self._read()
        data.update(dump_settings(settings, memory))
        self._write(data)

    def load_stack(self):
        '''
        Return the four saved stack values, X first, or None.
        '''
        data = self._read()
        if 'stack' not in data:
            return None
        values = _numbers(data['stack'], DEPTH)
        if values is None:
            logger.warning('Ignoring saved stack %r', data['stack'])
        return values

    def save_stack(self, values):
        data = self._read()
        data['stack'] = list(values)
        self._write(data)


class MemoryStore(Store):
    '''
    Keep everything in a dict, for the length of the process.
    '''

    def __init__(self, data=None):
        self.data = dict() if data is None else data

    def _read(self):
        return dict(self.data)

    def _write(self, data):
        self.data = data


class JSONStore(Store):
    '''
    Keep everything in a JSON file.
    '''

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def _read(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as fp:
                data = json.load(fp)
        except FileNotFoundError:
            return dict()
        except (OSError, ValueError) as e:
            logger.warning('Cannot read %s: %s', self.path, e)
            return dict()
        if not isinstance(data, dict):
            logger.warning('Ignoring %s, not a JSON object', self.path)
            return dict()
        return data

    def _write(self, data):
        # Write aside and rename, so a crash never leaves half a file.
        tmp = self.path.with_name('.tmp-' + self.path.name)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as fp:
                json.dump(data, fp, indent=4)
            tmp.replace(self.path)
        except OSError as e:
            logger.warning('Cannot save to %s: %s', self.path, e)

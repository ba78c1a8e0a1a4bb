'''
Display and angle settings.
'''

import math
from dataclasses import dataclass
from enum import Enum


# Size of one unit of each kind, in radians.
_UNIT_RADIANS = {
    'deg': math.pi / 180,
    'rad': 1.0,
    'grad': math.pi / 200,
}


class AngleUnit(Enum):
    '''
    Unit of trigonometric arguments and results, valued by its status label.
    '''
    DEGREES = 'deg'
    RADIANS = 'rad'
    GRADIANS = 'grad'

    @property
    def radians(self):
        '''
        Size of one unit, in radians.
        '''
        return _UNIT_RADIANS[self.value]

    def next(self):
        '''
        Return the unit after this one: degrees, radians, gradians, degrees.
        '''
        units = list(type(self))
        return units[(units.index(self) + 1) % len(units)]


MIN_PLACES = 0
MAX_PLACES = 9


@dataclass
class FormatSettings:
    angle_unit: AngleUnit = AngleUnit.DEGREES
    places: int = 4
    scientific: bool = False
    show_registers: bool = True
    persist_stack: bool = True

    def status(self):
        '''
        Return the status line, e.g. 'fix 4 deg'.
        '''
        return '{} {} {}'.format('sci' if self.scientific else 'fix',
                                 self.places,
                                 self.angle_unit.value)


def clamp_places(places):
    '''
    Limit decimal places to what the display supports.
    '''
    return max(MIN_PLACES, min(MAX_PLACES, int(places)))

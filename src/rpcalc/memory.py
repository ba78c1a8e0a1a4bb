'''
Numbered memory registers.
'''

SLOTS = 10


class MemoryBank:
    '''
    Ten numeric registers, addressed by digit.
    '''

    def __init__(self, values=None):
        self.values = [0.0] * SLOTS if values is None else list(values)
        if len(self.values) != SLOTS:
            raise ValueError('Memory needs {} registers, got {}'
                             .format(SLOTS, len(self.values)))

    def store(self, slot, value):
        '''
        Store value into register slot, 0 to 9.
        '''
        self._check(slot)
        self.values[slot] = value

    def recall(self, slot):
        '''
        Return value of register slot, 0 to 9.
        '''
        self._check(slot)
        return self.values[slot]

    def _check(self, slot):
        # Negative indices would silently wrap around.
        if not 0 <= slot < SLOTS:
            raise IndexError('No memory register {}'.format(slot))

    def __eq__(self, other):
        if not isinstance(other, MemoryBank):
            return NotImplemented
        return self.values == other.values

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.values)

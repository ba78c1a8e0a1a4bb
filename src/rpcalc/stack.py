'''
The four register stack: X, Y, Z and T.
'''

from collections import deque

from .formatter import format_number, parse


DEPTH = 4


class Stack:
    '''
    Fixed depth stack, X (top) first, plus the X entry buffer.

    Every mutation re-renders the buffer from X. While a number is being
    typed the buffer leads instead, and X follows it through update_x().
    '''

    def __init__(self, settings):
        '''
        Create zeroed stack.

        :param settings: FormatSettings used to render X.
        '''
        self.settings = settings
        # Pushing at the top drops T off the bottom.
        self.values = deque([0.0] * DEPTH, maxlen=DEPTH)
        self.xstr = ''
        self.update_buffer()

    @property
    def x(self):
        return self.values[0]

    @property
    def y(self):
        return self.values[1]

    def numstr(self, number):
        '''
        Render number with the current settings.
        '''
        return format_number(number,
                             self.settings.places,
                             self.settings.scientific)

    def update_buffer(self):
        '''
        Render X into the entry buffer.
        '''
        self.xstr = self.numstr(self.values[0])

    def update_x(self):
        '''
        Set X from the entry buffer, unless the buffer isn't a number.
        '''
        try:
            self.values[0] = parse(self.xstr)
        except ValueError:
            pass

    def replace_top_two(self, number):
        '''
        Consume X and Y with number; Z and T drop, T is duplicated.
        '''
        self.values.popleft()
        self.values[0] = number
        self.values.append(self.values[-1])
        self.update_buffer()

    def replace_top(self, number):
        '''
        Replace X only.
        '''
        self.values[0] = number
        self.update_buffer()

    def enter(self):
        '''
        Duplicate X into Y, pushing the rest down; T is lost.
        '''
        self.values.appendleft(self.values[0])
        self.update_buffer()

    def push(self, number):
        '''
        Insert number as X without consuming the old X; T is lost.
        '''
        self.values.appendleft(number)
        self.update_buffer()

    def swap(self):
        '''
        Exchange X and Y.
        '''
        self.values[0], self.values[1] = self.values[1], self.values[0]
        self.update_buffer()

    def roll_down(self):
        '''
        Roll stack so X = old Y, and old X ends up in T.
        '''
        self.values.rotate(-1)
        self.update_buffer()

    def roll_up(self):
        '''
        Roll stack so X = old T.
        '''
        self.values.rotate(1)
        self.update_buffer()

    def clear(self):
        '''
        Zero all registers.
        '''
        self.restore([0.0] * DEPTH)

    def restore(self, numbers):
        '''
        Replace all registers, X first.
        '''
        numbers = list(numbers)
        if len(numbers) != DEPTH:
            raise ValueError('Stack needs {} values, got {}'
                             .format(DEPTH, len(numbers)))
        self.values = deque(numbers, maxlen=DEPTH)
        self.update_buffer()

    def registers(self):
        '''
        Return rendered T, Z and Y, one per line, T first.
        '''
        return '\n'.join(self.numstr(number)
                         for number
                         in reversed(list(self.values)[1:]))

    def __len__(self):
        return len(self.values)

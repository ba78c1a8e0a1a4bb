'''
Display sinks: where the machine renders X, the registers and the status.
'''


class Display:
    '''
    Display that shows nothing. Subclass and override what you show.
    '''

    def render_x(self, text):
        pass

    def render_registers(self, text):
        pass

    def render_status(self, text):
        pass


class TerminalDisplay(Display):
    '''
    Keep the last rendered text, for a line oriented terminal to print.
    '''

    def __init__(self):
        self.x = ''
        self.registers = ''
        self.status = ''

    def render_x(self, text):
        self.x = text

    def render_registers(self, text):
        self.registers = text

    def render_status(self, text):
        self.status = text

    def lines(self):
        '''
        Return registers, T first, then X; each a line.
        '''
        lines = self.registers.splitlines() if self.registers else []
        lines.append(self.x)
        return lines

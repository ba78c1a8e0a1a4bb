from functools import reduce
import operator

import regex

from .util import RPCalcError
from .machine import Machine


class Lexer:
    '''
    Lexer for typed calculator keystrokes.

    Key names may be separated by whitespace or run together: '5ent3+' is
    the same as '5 ent 3 +'.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Any key name. POSIX matching takes the longest one, so 'x<>y' is never
    # cut short, and order doesn't matter.
    KEY = r'(?:' + r'|'.join(map(regex.escape, Machine.KEYS)) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<key>' + KEY + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.IGNORECASE,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises on the first text that isn't a key, after yielding the keys
        before it.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise RPCalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return lexeme matches.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def keys(self, line):
        '''
        Return names of all keys in line, lower case.
        '''
        return [match.group('key').lower()
                for match
                in self.lex(line)
                if self.isfeedable(match)]

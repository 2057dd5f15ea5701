from functools import reduce
import operator

import regex

from .util import ExpressionSyntaxError
from .operators import OPERATORS


class Lexer:
    '''
    Lexer for the infix expression grammar.

    Lexemes are regular; nesting (parentheses, function calls) is the
    evaluator's business. Bound to an operator table, since operators are
    whatever the table says they are.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      (?:
                          _\d{1,3}
                      )*
                  )
                  '''
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    \d+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2, 0.2
                      {INTEGRAL}?
                      \.
                      {FRACTIONAL}
                  )
              )
              {EXPONENT}?
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)
    # Double quoted text, backslash escapes the next character.
    TEXT = r'''
            "
            (?<__text__>
                (?:
                    [^"\\]
                    |
                    \\.
                )*
            )
            "
            '''
    # Names of variables and functions. st.skill is one name.
    IDENTIFIER = r'''
                  [^\W\d]\w*
                  (?:
                      \.
                      [^\W\d]\w*
                  )*
                  '''
    OPEN = r'\('
    CLOSE = r'\)'
    # Only meaningful between function arguments, which the evaluator
    # hands over unlexed.
    COMMA = r','
    SPACE = r'\s+'
    # Anything else that looks like punctuation; reported as an unknown
    # operator rather than a lexing failure.
    SYMBOL = r'[^\w\s"(),]'

    KINDS = ('number', 'text', 'identifier', 'operator',
             'open', 'close', 'comma', 'space', 'symbol')

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, operators=OPERATORS):
        # Alternation is ordered, so longest operators go first: <= before <.
        symbols = sorted(operators, key=len, reverse=True)
        self.OPERATOR = r'(?:' + r'|'.join(map(regex.escape, symbols)) + r')'
        # All possible lexemes.
        self.LEXEME = r'(?<number>' + self.NUMBER + r')|' \
                      r'(?<text>' + self.TEXT + r')|' \
                      r'(?<identifier>' + self.IDENTIFIER + r')|' \
                      r'(?<operator>' + self.OPERATOR + r')|' \
                      r'(?<open>' + self.OPEN + r')|' \
                      r'(?<close>' + self.CLOSE + r')|' \
                      r'(?<comma>' + self.COMMA + r')|' \
                      r'(?<space>' + self.SPACE + r')|' \
                      r'(?<symbol>' + self.SYMBOL + r')'
        self.pattern = regex.compile(self.LEXEME, flags=self.FLAGS)

    def match(self, line, position=0):
        '''
        Match the single lexeme starting at position.

        Raises ExpressionSyntaxError if nothing lexes there.
        '''
        match = self.pattern.match(line, position)
        if match is None:
            raise ExpressionSyntaxError(
                "Couldn't lex {0}".format(line[position:].strip()))
        return match

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        position = 0
        while position < len(line):
            match = self.match(line, position)
            yield match
            position = match.end()

    def kind(self, match):
        '''
        Return the name of the lexeme group that matched.
        '''
        for kind in self.KINDS:
            if match.group(kind) is not None:
                return kind

    def isfeedable(self, match):
        '''
        Return True if lexeme means anything to the evaluator.
        '''
        return self.kind(match) != 'space'

    @staticmethod
    def number(match):
        return float(match.group('number').replace('_', ''))

    @staticmethod
    def text(match):
        return regex.sub(r'\\(.)', r'\1', match.group('__text__'),
                         flags=regex.DOTALL)

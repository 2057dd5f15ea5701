from .util import (ArgumentCountMismatch, ExhaustedArguments,
                   ExpressionSyntaxError)


QUOTE = '"'
ESCAPE = '\\'


def _scan(text, start, stop_at_comma):
    '''
    Walk text from start, tracking parenthesis depth and quotes.

    Returns the index of the first top-level comma (if stop_at_comma), or
    of the parenthesis that brings depth below zero, or len(text).
    '''
    depth = 0
    quoted = False
    i = start
    while i < len(text):
        c = text[i]
        if quoted:
            if c == ESCAPE:
                i += 1
            elif c == QUOTE:
                quoted = False
        elif c == QUOTE:
            quoted = True
        elif c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
            if depth < 0:
                return i
        elif c == ',' and depth == 0 and stop_at_comma:
            return i
        i += 1
    if quoted:
        raise ExpressionSyntaxError('Unterminated text in {}'.format(text))
    if depth > 0:
        raise ExpressionSyntaxError('Unbalanced parentheses in {}'.format(text))
    return i


def find_closing(text, start):
    '''
    Return index of the parenthesis closing the one at text[start].
    '''
    assert text[start] == '('
    end = _scan(text, start + 1, stop_at_comma=False)
    if end == len(text):
        raise ExpressionSyntaxError('Unbalanced parentheses in {}'.format(text))
    return end


class ArgumentTokenizer:
    '''
    Cursor over the top-level, comma separated arguments of a function call.

    Commas within parentheses or quoted text don't split. Tokens are handed
    out as unevaluated text; whether to evaluate them is up to the caller.
    '''

    def __init__(self, arguments):
        self.arguments = arguments
        self.position = 0
        self.exhausted = not arguments.strip()

    def has_more_tokens(self):
        return not self.exhausted

    def next_token(self):
        '''
        Return next argument text, stripped, advancing past it.
        '''
        if self.exhausted:
            raise ExhaustedArguments(
                'Not enough arguments in ({})'.format(self.arguments))
        end = _scan(self.arguments, self.position, stop_at_comma=True)
        if end < len(self.arguments) and self.arguments[end] == ')':
            raise ExpressionSyntaxError(
                'Unbalanced parentheses in {}'.format(self.arguments))
        token = self.arguments[self.position:end]
        if end == len(self.arguments):
            self.exhausted = True
        self.position = end + 1
        return token.strip()

    def skip(self):
        '''
        Advance past next argument without handing it out.
        '''
        self.next_token()

    def ensure_exhausted(self):
        if self.has_more_tokens():
            raise ArgumentCountMismatch(
                'Too many arguments in ({})'.format(self.arguments))

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_more_tokens():
            raise StopIteration
        return self.next_token()

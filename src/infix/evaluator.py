'''
Precedence climbing evaluator for infix expressions.
'''

from .functions import FUNCTIONS
from .lexer import Lexer
from .operators import OPERATORS
from .tokenizer import find_closing
from .util import (EvaluationError, ExpressionSyntaxError,
                   RecursionLimitExceeded, UnknownFunction,
                   UnknownIdentifier, UnknownOperator)
from .values import normalize


def mapping_resolver(mapping):
    '''
    Return an identifier resolver looking names up in mapping.
    '''
    def resolve(name):
        try:
            return mapping[name]
        except KeyError:
            raise UnknownIdentifier('Unknown identifier {}'.format(name))
    return resolve


class Evaluator:
    '''
    Evaluates expressions to a Value (float or str).

    Nested expressions (parenthesized groups, function arguments) each get
    their own child evaluator, sharing this one's resolver, operators and
    functions, one level deeper.
    '''

    DEFAULT_MAX_DEPTH = 64

    def __init__(self, resolver=None, *, operators=OPERATORS,
                 functions=FUNCTIONS, max_depth=None, depth=0, lexer=None):
        '''
        :param resolver: Callable returning the value of an identifier.
        :param max_depth: How deep expressions may nest.
        '''
        self.resolver = resolver
        self.operators = operators
        self.functions = functions
        self.max_depth = (type(self).DEFAULT_MAX_DEPTH
                          if max_depth is None
                          else max_depth)
        self.depth = depth
        if lexer is None:
            lexer = (_DEFAULT_LEXER
                     if operators is OPERATORS
                     else Lexer(operators))
        self.lexer = lexer

    def child(self):
        '''
        Return a fresh evaluator for a nested expression.
        '''
        return type(self)(self.resolver,
                          operators=self.operators,
                          functions=self.functions,
                          max_depth=self.max_depth,
                          depth=self.depth + 1,
                          lexer=self.lexer)

    def resolve(self, name):
        '''
        Return the value of identifier name, as told by the resolver.
        '''
        if self.resolver is None:
            raise UnknownIdentifier('Unknown identifier {}'.format(name))
        try:
            value = self.resolver(name)
        except KeyError as e:
            raise UnknownIdentifier('Unknown identifier {}'.format(name),
                                    e) from e
        return normalize(value)

    def evaluate(self, expression):
        '''
        Evaluate expression, returning its value.

        Raises EvaluationError (or a subclass) on failure.
        '''
        if self.depth > self.max_depth:
            raise RecursionLimitExceeded(
                'Expression nested deeper than {}'.format(self.max_depth))
        if self.depth:
            return self._evaluate(expression)
        try:
            return self._evaluate(expression)
        except RecursionError as e:
            raise RecursionLimitExceeded('Expression nested too deeply',
                                         e) from e

    def _evaluate(self, expression):
        operands = []
        operators = []
        unaries = []
        expect_operand = True
        position = 0
        while position < len(expression):
            match = self.lexer.match(expression, position)
            kind = self.lexer.kind(match)
            position = match.end()
            if kind == 'space':
                continue
            elif kind == 'symbol':
                raise UnknownOperator(
                    'Unknown operator {}'.format(match.group(0)))
            elif kind == 'comma':
                raise ExpressionSyntaxError(
                    'Unexpected , in {}'.format(expression))
            elif kind == 'close':
                raise ExpressionSyntaxError(
                    'Unbalanced parentheses in {}'.format(expression))
            elif kind == 'operator':
                operator = self.operators.get(match.group(0))
                if operator is None:
                    raise UnknownOperator(
                        'Unknown operator {}'.format(match.group(0)))
                if expect_operand:
                    if operator.unary is None:
                        raise ExpressionSyntaxError(
                            'Missing operand before {} in {}'
                            .format(operator.symbol, expression))
                    unaries.append(operator)
                    continue
                if operator.binary is None:
                    raise ExpressionSyntaxError(
                        '{} is not a binary operator'.format(operator.symbol))
                self._reduce(operands, operators, operator)
                operators.append(operator)
                expect_operand = True
                continue
            if not expect_operand:
                raise ExpressionSyntaxError(
                    'Missing operator before {} in {}'
                    .format(match.group(0).strip(), expression))
            value, position = self._operand(expression, match, kind,
                                            position)
            # Innermost (rightmost) unary applies first.
            while unaries:
                value = unaries.pop().evaluate_unary(value)
            operands.append(value)
            expect_operand = False
        if expect_operand:
            if unaries or operators:
                raise ExpressionSyntaxError(
                    'Missing operand at end of {}'.format(expression))
            raise ExpressionSyntaxError('Empty expression')
        self._reduce(operands, operators, None)
        assert len(operands) == 1
        return operands[0]

    def _operand(self, expression, match, kind, position):
        '''
        Return value of the operand matched, and where lexing resumes.
        '''
        if kind == 'number':
            return self.lexer.number(match), position
        elif kind == 'text':
            return self.lexer.text(match), position
        elif kind == 'open':
            close = find_closing(expression, match.start())
            inner = expression[position:close]
            return self.child().evaluate(inner), close + 1
        assert kind == 'identifier'
        name = match.group(0)
        after = position
        while after < len(expression) and expression[after].isspace():
            after += 1
        if after < len(expression) and expression[after] == '(':
            close = find_closing(expression, after)
            return self.call(name, expression[after + 1:close]), close + 1
        return self.resolve(name), position

    def call(self, name, arguments):
        '''
        Run function name on the unevaluated arguments text.
        '''
        try:
            function = self.functions[name]
        except KeyError:
            raise UnknownFunction('Unknown function {}'.format(name))
        return normalize(function.execute(self, arguments))

    @staticmethod
    def _reduce(operands, operators, incoming):
        '''
        Apply stacked operators that bind tighter than incoming.

        With incoming None, apply all of them.
        '''
        while operators and (incoming is None or
                             operators[-1].yields_to(incoming)):
            operator = operators.pop()
            right = operands.pop()
            left = operands.pop()
            operands.append(operator.evaluate_binary(left, right))


_DEFAULT_LEXER = Lexer()


def evaluate(expression, resolver=None, **kwargs):
    '''
    Evaluate expression with a fresh top-level evaluator.
    '''
    return Evaluator(resolver, **kwargs).evaluate(expression)


__all__ = 'Evaluator', 'EvaluationError', 'evaluate', 'mapping_resolver'

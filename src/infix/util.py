from functools import wraps


class EvaluationError(Exception):
    '''
    Any failure to evaluate an expression.

    args[0] is the human readable message, args[1], if present, the
    underlying cause.
    '''
    def __init__(self, message, cause=None):
        if cause is None:
            super().__init__(message)
        else:
            super().__init__(message, cause)
            self.__cause__ = cause

    @property
    def message(self):
        return self.args[0]

    @property
    def cause(self):
        return self.args[1] if len(self.args) > 1 else None

    def __str__(self):
        return self.message


class ExpressionSyntaxError(EvaluationError):
    pass


class UnknownOperator(EvaluationError):
    pass


class UnknownFunction(EvaluationError):
    pass


class UnknownIdentifier(EvaluationError):
    pass


class ArgumentCountMismatch(EvaluationError):
    pass


class ExhaustedArguments(ArgumentCountMismatch):
    pass


class NotNumeric(EvaluationError):
    pass


class InvalidArguments(EvaluationError):
    pass


class RecursionLimitExceeded(EvaluationError):
    pass


def wrap_user_errors(fmt, error=InvalidArguments):
    '''
    Decorator re-raising every exception as error, with the original as cause.

    fmt is formatted with the wrapped function's arguments to make the
    message. Errors already of the target type pass through untouched, as
    does running out of nesting depth, which is never the arguments' fault.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (error, RecursionLimitExceeded):
                raise
            except RecursionError as e:
                raise RecursionLimitExceeded('Expression nested too deeply',
                                             e) from e
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator

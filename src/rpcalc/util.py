from functools import wraps


class RPCalcError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to user errors.

    Passes through RPCalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPCalcError:
                raise
            except Exception as e:
                raise RPCalcError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator

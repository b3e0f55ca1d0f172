from functools import wraps

from .patch import patch_snowflake


def mock_snowflake(func):
    """
    Decorator that runs the wrapped function against the resource monitor emulator.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        with patch_snowflake():
            return func(*args, **kwargs)

    return wrapper

"""Helpers for the Weir package."""

__all__ = [
    'bind_kwargs',
    'default_iterable',
    'identity',
    ]


def bind_kwargs(function, kwargs=None):
    """Bind keyword arguments to function.

    Returns a callable, which when called, in turn calls function.  The call
    adds keyword arguments as specified.

    It passes on any positional arguments to function, as well as the given
    keyword arguments.

    :param function: Any callable.
    :param kwargs: Keyword arguments, or None.
    :return: A callable.
    """
    if kwargs is None or kwargs == {}:
        return function
    else:
        return lambda *args: function(*args, **kwargs)


def identity(arg):
    """Return arg."""
    return arg


def default_iterable(iterable):
    """Return iterable, or an empty tuple if it is None."""
    if iterable is None:
        return ()
    return iterable

""" Default connection parameters, and the environment variables that
    override them. Explicit arguments to :class:`tinyq.Client` always take
    precedence over anything established here.

    ========================  ===========  ================================
    Variable                  Default      Meaning
    ========================  ===========  ================================
    TINYQ_ADDRESS             localhost    Server hostname or address
    TINYQ_PORT                7878         Server TCP port
    TINYQ_CONNECT_TIMEOUT     5            Seconds to wait for a connection
    TINYQ_TIMEOUT             (none)       Seconds to wait for a response
    ========================  ===========  ================================
"""

import os


default_address = 'localhost'
default_port = 7878
default_connect_timeout = 5.0
default_timeout = None



def _environment(name, default, convert):
    """ Return the converted value of environment variable *name*, or
        *default* if it is unset or empty.
    """

    value = os.environ.get(name)

    if value is None or value.strip() == '':
        return default

    try:
        return convert(value)
    except ValueError:
        raise ValueError('invalid %s: %r' % (name, value))



def _seconds(value):

    value = float(value)
    if value < 0:
        raise ValueError('negative duration')

    return value



def address(override=None):
    if override:
        return override
    return _environment('TINYQ_ADDRESS', default_address, str)


def port(override=None):
    if override is not None:
        return int(override)
    return _environment('TINYQ_PORT', default_port, int)


def connect_timeout(override=None):
    if override is not None:
        return _seconds(override)
    return _environment('TINYQ_CONNECT_TIMEOUT', default_connect_timeout, _seconds)


def timeout(override=None):
    if override is not None:
        return _seconds(override)
    return _environment('TINYQ_TIMEOUT', default_timeout, _seconds)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

""" Configuration for whatever harness drives a bus. The protocol core takes
    no configuration at all; these values only select a scheduler, a step
    cadence, an optional observation port, and the routes fed to a
    :class:`routebus.service.PlanSource`.

    Configuration lives in a single JSON file, ``routebus.json``, in the
    directory returned by :func:`directory`.
"""

import os
import threading

from . import json
from .errors import ConfigError
from .route import Route


filename = 'routebus.json'

defaults = {
    'scheduler': 'pipeline',
    'seed': None,
    'period': 0.1,
    'max_steps': 100,
    'publish_port': None,
    'log_level': 'WARNING',
    'routes': [],
}

_cache = dict()
_cache_lock = threading.Lock()


class Configuration:
    """ A read-only mapping of configuration values. Every key in
        :data:`defaults` is always present; values loaded from disk replace
        the defaults, and are validated as they are loaded.
    """

    def __init__(self, values=None):

        self._values = dict(defaults)
        self.filename = None

        if values:
            self.update(values)


    def __contains__(self, key):
        return key in self._values


    def __getitem__(self, key):
        try:
            return self._values[key]
        except KeyError:
            raise KeyError('unknown configuration key: ' + str(key))


    def __iter__(self):
        return iter(self._values)


    def __len__(self):
        return len(self._values)


    def __repr__(self):
        return 'config.Configuration: ' + repr(self._values)


    def get(self, key, default=None):
        return self._values.get(key, default)


    def keys(self):
        return self._values.keys()


    def load(self, filename):
        """ Load and validate the JSON contents of *filename*. A missing file
            is not an error; the current values are retained.
        """

        try:
            with open(filename, 'rb') as contents:
                raw = contents.read()
        except FileNotFoundError:
            return

        try:
            values = json.loads(raw)
        except json.DecodeError as exc:
            raise ConfigError("cannot parse %s: %s" % (filename, exc)) from exc

        if isinstance(values, dict):
            pass
        else:
            raise ConfigError(filename + ' must contain a JSON object')

        self.update(values)
        self.filename = filename


    def routes(self):
        """ Return the configured routes as :class:`Route` instances.
        """

        return [Route.from_pair(pair) for pair in self._values['routes']]


    def update(self, values):
        """ Validate and apply the *values* dictionary. Values of None are
            ignored, so that unset command-line options do not clobber
            anything.
        """

        for key, value in values.items():
            if key not in defaults:
                raise ConfigError('unknown configuration key: ' + repr(key))

            if value is None:
                continue

            validator = _validators[key]

            try:
                value = validator(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError("bad value for %s: %r (%s)" % (key, value, exc)) from exc

            self._values[key] = value


# end of class Configuration



def _scheduler(value):
    from . import schedule

    value = str(value).lower()
    if value not in schedule.policies:
        raise ValueError('expected one of ' + ', '.join(sorted(schedule.policies)))
    return value


def _positive_float(value):
    value = float(value)
    if value <= 0:
        raise ValueError('must be positive')
    return value


def _positive_int(value):
    value = int(value)
    if value <= 0:
        raise ValueError('must be positive')
    return value


def _port(value):
    value = int(value)
    if value < 1 or value > 65535:
        raise ValueError('not a valid port number')
    return value


def _log_level(value):
    value = str(value).upper()
    if value not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        raise ValueError('not a logging level')
    return value


def _routes(value):
    routes = list()
    for pair in value:
        route = Route.from_pair(pair)
        if route.empty:
            raise ValueError('routes must contain at least one waypoint')
        routes.append(list(route.as_pair()))
    return routes


_validators = {
    'scheduler': _scheduler,
    'seed': int,
    'period': _positive_float,
    'max_steps': _positive_int,
    'publish_port': _port,
    'log_level': _log_level,
    'routes': _routes,
}



def directory(default=None):
    """ Return the directory location where configuration is loaded from.
        This defaults to ``$HOME/.routebus``, but can be overridden by calling
        this method with a valid path, or by setting the ``ROUTEBUS_HOME``
        environment variable. Changes to the environment variable are ignored
        unless it is set prior to the first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        os.environ['ROUTEBUS_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['ROUTEBUS_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise ConfigError('ROUTEBUS_HOME and HOME environment variables not set, cannot determine configuration directory')

    found = os.path.join(home, '.routebus')

    directory.found = found
    return found

directory.found = None



def get(home=None):
    """ Retrieve the cached :class:`Configuration` for the configuration
        directory *home*, loading it on first use. If *home* is None the
        result of :func:`directory` is used.
    """

    if home is None:
        home = directory()

    try:
        return _cache[home]
    except KeyError:
        pass

    with _cache_lock:
        try:
            config = _cache[home]
        except KeyError:
            config = Configuration()
            config.load(os.path.join(home, filename))
            _cache[home] = config

    return config


def clear():
    """ Forget any cached configuration, and the resolved directory.
    """

    with _cache_lock:
        _cache.clear()

    directory.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

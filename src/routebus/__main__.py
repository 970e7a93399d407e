""" Command-line runner: build a bus from configuration, run it for a
    number of steps, and print every non-empty broadcast.

    python -m routebus --route 0 2 --route 5 7 --steps 20 --check
"""

import argparse
import logging
import sys

from . import config
from . import schedule
from .bus import Bus
from .check import TraceChecker
from .errors import ProtocolError, TraceError
from .service import PlanSource


def parse_arguments(argv=None):

    parser = argparse.ArgumentParser(prog='routebus', description='Run the route execution protocol.')

    parser.add_argument('--home', help='configuration directory (default: $ROUTEBUS_HOME or ~/.routebus)')
    parser.add_argument('--steps', type=int, help='number of steps to run')
    parser.add_argument('--scheduler', choices=sorted(schedule.policies), help='token assignment policy')
    parser.add_argument('--seed', type=int, help='seed for the seeded scheduler')
    parser.add_argument('--route', nargs=2, type=int, action='append', metavar=('FIRST', 'LAST'),
                        help='a route to plan; may be repeated')
    parser.add_argument('--publish', type=int, metavar='PORT', help='republish broadcasts on this port')
    parser.add_argument('--check', action='store_true', help='verify protocol properties while running')
    parser.add_argument('--verbose', '-v', action='store_true', help='log at DEBUG level')

    return parser.parse_args(argv)


def configure(arguments):
    """ Return the :class:`config.Configuration` with command-line overrides
        applied on top of whatever was loaded from disk.
    """

    if arguments.home:
        config.directory(arguments.home)

    configuration = config.get()

    overrides = dict()
    overrides['max_steps'] = arguments.steps
    overrides['scheduler'] = arguments.scheduler
    overrides['seed'] = arguments.seed
    overrides['routes'] = arguments.route
    overrides['publish_port'] = arguments.publish

    if arguments.verbose:
        overrides['log_level'] = 'DEBUG'

    configuration.update(overrides)
    return configuration


def main(argv=None):

    arguments = parse_arguments(argv)

    try:
        configuration = configure(arguments)
    except ProtocolError as exc:
        print('routebus: ' + str(exc), file=sys.stderr)
        return 2

    logging.basicConfig(level=configuration['log_level'],
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    source = PlanSource(configuration.routes())
    scheduler = schedule.by_name(configuration['scheduler'], configuration['seed'])
    bus = Bus(source, scheduler)

    if arguments.check:
        bus.register(TraceChecker())

    server = None
    if configuration['publish_port'] is not None:
        from .protocol import publish
        server = publish.Server(configuration['publish_port'])
        bus.register(server)

    status = 0

    try:
        for _ in range(configuration['max_steps']):
            record = bus.step()
            if not record.broadcast.empty:
                print("%5d  %-9s  %r" % (record.step, record.writer.value, record.broadcast))
    except TraceError as exc:
        # The message already names the committed step.
        print('routebus: ' + str(exc), file=sys.stderr)
        status = 1
    except ProtocolError as exc:
        print("routebus: step %d: %s" % (bus.step_count + 1, exc), file=sys.stderr)
        status = 1
    finally:
        if server is not None:
            server.stop()

    return status


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

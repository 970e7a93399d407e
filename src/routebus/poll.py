""" Call a method on a fixed cadence from a background thread. This is how
    a bus is driven in real time; tests and batch runs step it directly.
"""

import threading
import time
import weakref

active = dict()


def _key(method):
    """ Return the key used to track a poller for *method*. Bound methods
        are created anew on every attribute access, so they are keyed by
        their instance and function rather than by their own identity.
    """

    try:
        return (id(method.__self__), id(method.__func__))
    except AttributeError:
        return id(method)



def _reference(method):
    """ Return a weak reference to *method*, whether it is a plain function
        or a bound method.
    """

    try:
        method.__func__
        method.__self__
    except AttributeError:
        return weakref.ref(method)
    else:
        return weakref.WeakMethod(method)



def period(method):
    """ Return the currently set polling period for the provided *method*.
        Returns None if no polling is presently active for that method.
    """

    method_id = _key(method)

    try:
        poller = active[method_id]
    except KeyError:
        return None

    return poller.interval



def start(method, period):
    """ Call the provided *method* every *period* seconds. If a poller is
        already active for the method, its period is updated instead of
        starting a second one. A *period* of None or zero stops polling.
    """

    if period is None or period == 0:
        stop(method)
        return

    method_id = _key(method)

    poller = active.get(method_id)

    # A poller that is shutting down will never call the method again.

    if poller is None or poller.shutdown == True:
        poller = _Poller(method)

    poller.period(period)



def stop(method):
    """ Discontinue calling the provided *method*.
    """

    method_id = _key(method)

    try:
        poller = active[method_id]
    except KeyError:
        return

    del active[method_id]
    poller.stop()



class _Poller:
    """ Background thread to invoke a single polled method.
    """

    def __init__(self, method):

        self.method_id = _key(method)
        active[self.method_id] = self

        self.interval = None
        self.reference = _reference(method)
        self.shutdown = False

        self.alarm = threading.Event()
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def period(self, period):
        """ Update the polling interval to *period* seconds.
        """

        period = float(period)
        if period <= 0:
            raise ValueError('the polling period must be positive')

        self.interval = period
        self.wake()


    def run(self):

        interval = None
        next = time.time()

        # Initial wait for someone to call self.period().

        while self.interval is None and self.shutdown == False:
            self.alarm.wait(1)

        while True:
            begin = time.time()

            if self.shutdown == True:
                break

            if self.alarm.is_set() == True:
                self.alarm.clear()

                # A new interval starts an entirely new cadence.

                interval = self.interval
                next = begin + interval

            else:
                # Keep the cadence constant, regardless of when we woke up.
                next += interval

            method = self.reference()

            if method is None:
                break

            method()
            del method

            delay = next - time.time()
            if delay > 0:
                self.alarm.wait(delay)

        if active.get(self.method_id) is self:
            del active[self.method_id]


    def stop(self):
        """ Halt the thread. Unless called from the polled method itself,
            wait for any call in progress to return.
        """

        self.shutdown = True
        self.wake()

        if threading.current_thread() is not self.thread:
            self.thread.join()


    def wake(self):
        self.alarm.set()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

""" Republish the channel over ZeroMQ PUB/SUB, so that processes outside the
    bus can watch the protocol run. The bus never depends on this: a
    :class:`Server` is attached as an ordinary observer.
"""

import queue
import threading
import traceback
import zmq

from ..errors import ProtocolError
from .fields import Kind
from . import wire

minimum_port = 10139
maximum_port = 13679
zmq_context = zmq.Context()


class PortError(ProtocolError):
    """No suitable port could be bound."""


class Client:
    """ Establish a ZeroMQ SUB connection to a :class:`Server` and receive
        channel messages. By default every kind is received; call
        :func:`subscribe` with a :class:`Kind` to narrow the subscription.
    """

    def __init__(self, address, port, kind=None):

        port = int(port)
        self.port = port
        self.address = address
        server = "tcp://%s:%d" % (address, port)

        self.socket = zmq_context.socket(zmq.SUB)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.socket.connect(server)

        self.poller = zmq.Poller()
        self.poller.register(self.socket, zmq.POLLIN)

        self.subscribe(kind)


    def subscribe(self, kind=None):
        """ Receive messages of the given *kind*, or all messages if *kind*
            is None.
        """

        if kind is None:
            topic = b''
        else:
            topic = wire.topic(Kind(kind))

        self.socket.setsockopt(zmq.SUBSCRIBE, topic)


    def recv(self, timeout=None):
        """ Return the next :class:`routebus.protocol.message.Message`, or
            None if nothing arrives within *timeout* seconds. A *timeout* of
            None blocks indefinitely.
        """

        if timeout is not None:
            timeout = timeout * 1000

        ready = dict(self.poller.poll(timeout))

        if self.socket in ready:
            parts = self.socket.recv_multipart()
            return wire.from_frames(parts)

        return None


    def close(self):
        self.socket.close()


# end of class Client



class Server:
    """ Bind a ZeroMQ PUB socket and send every message handed to
        :func:`send`. If no *port* is specified the first available port in
        the default range is used. Sends are queued and performed on a
        background thread, so :func:`send` is safe to call from any thread.

        An instance is callable with a :class:`routebus.bus.StepRecord`,
        which makes it directly usable as a bus observer; only non-empty
        broadcasts are published.
    """

    def __init__(self, port=None, avoid=None):

        avoid = avoid or set()

        self.socket = zmq_context.socket(zmq.PUB)
        self.socket.setsockopt(zmq.LINGER, 0)

        if port is None:
            minimum = minimum_port
            maximum = maximum_port
        else:
            port = int(port)
            minimum = port
            maximum = port

        self.port = None
        trial = minimum

        while trial <= maximum:
            if port is None and trial in avoid:
                trial += 1
                continue

            try:
                self.socket.bind('tcp://*:' + str(trial))
            except zmq.ZMQError:
                trial += 1
                continue

            self.port = trial
            break

        if self.port is None:
            self.socket.close()
            if port is None:
                raise PortError("no ports available in range %d:%d" % (minimum, maximum))
            raise PortError("port already in use: %d" % (port))

        self._queue = queue.SimpleQueue()

        internal = "inproc://publish.Server:signal:%d" % (id(self))
        self._sig_rx = zmq_context.socket(zmq.PAIR)
        self._sig_rx.bind(internal)
        self._sig_tx = zmq_context.socket(zmq.PAIR)
        self._sig_tx.connect(internal)
        self._sig_lock = threading.Lock()

        self.shutdown = False
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def __call__(self, record):
        if record.broadcast.empty:
            return
        self.send(record.broadcast)


    def send(self, message):
        """ Queue *message* for publication.
        """

        self._queue.put(message)

        # PAIR sockets are not thread safe; serialize the wakeup signal.

        with self._sig_lock:
            self._sig_tx.send(b'')


    def _send_one(self):
        self._sig_rx.recv(flags=zmq.NOBLOCK)
        message = self._queue.get(block=False)
        frames = wire.to_frames(message)
        self.socket.send_multipart(frames)


    def run(self):

        poller = zmq.Poller()
        poller.register(self._sig_rx, zmq.POLLIN)

        while self.shutdown == False:
            sockets = poller.poll(1000)
            for active, flag in sockets:
                if active == self._sig_rx:
                    try:
                        self._send_one()
                    except Exception:
                        traceback.print_exc()

        self.socket.close()
        self._sig_rx.close()


    def stop(self):
        self.shutdown = True
        self.thread.join()
        self._sig_tx.close()


# end of class Server


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

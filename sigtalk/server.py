"""Receiving side: rebuilds messages from SIGUSR1/SIGUSR2 and prints them."""

from __future__ import annotations

import argparse
import os
import signal
import time
from typing import BinaryIO, Sequence

from .protocol import Decoder, bit_for_signal

REPLY_DELAY = 0.00025
_SIGNALS = {signal.SIGUSR1, signal.SIGUSR2}


class Server:
    """Decodes bits from signals and writes each finished message to *stream*.

    Every complete byte is acknowledged to its sender with SIGUSR1.  When
    *acknowledge_end* is true, the end of a message is also acknowledged
    with SIGUSR2, sent before the byte acknowledgement.
    """

    def __init__(self, stream: BinaryIO, acknowledge_end: bool = False) -> None:
        self.stream = stream
        self.acknowledge_end = acknowledge_end
        self._decoder = Decoder()

    def receive(self, signum: int, sender: int) -> tuple[int, ...]:
        """Handle one signal from process *sender*; return the replies sent to it."""
        step = self._decoder.feed(bit_for_signal(signum))
        if step.byte is None:
            return ()
        replies: list[int] = []
        if step.message is not None:
            self.stream.write(step.message)
            self.stream.flush()
            if self.acknowledge_end:
                os.kill(sender, signal.SIGUSR2)
                replies.append(signal.SIGUSR2)
        time.sleep(REPLY_DELAY)
        os.kill(sender, signal.SIGUSR1)
        replies.append(signal.SIGUSR1)
        return tuple(replies)

    def serve(self) -> None:
        """Print this process's id, then handle incoming signals forever."""
        self.stream.write(f"{os.getpid()}\n".encode("ascii"))
        self.stream.flush()
        previous = signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)
        try:
            while True:
                info = signal.sigwaitinfo(_SIGNALS)
                self.receive(info.si_signo, info.si_pid)
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a server on standard output until interrupted."""
    import sys

    parser = argparse.ArgumentParser(
        prog="sigtalk-server",
        description="Receive messages sent one signal per bit.",
    )
    parser.add_argument(
        "-a",
        "--acknowledge-end",
        action="store_true",
        help="tell the sender with SIGUSR2 when a whole message has arrived",
    )
    args = parser.parse_args(argv)
    server = Server(sys.stdout.buffer, args.acknowledge_end)
    try:
        server.serve()
    except KeyboardInterrupt:
        return 0
    return 0
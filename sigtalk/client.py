"""Sending side: transmits a message to a server process one signal per bit."""

from __future__ import annotations

import os
import signal
import sys
import time
from typing import Sequence

from .protocol import Message, encode_message, signal_for_bit
from .strutil import atoi

BIT_DELAY = 0.00025
RECEIPT_TIMEOUT = 1.0
RECEIPT_NOTICE = "the string has been received"
PID_ERROR = "Inapropriate use of PID"
_SIGNALS = {signal.SIGUSR1, signal.SIGUSR2}


def parse_pid(text: str) -> int:
    """Parse a process id; raise ValueError unless it is at least 1."""
    pid = atoi(text)
    if pid < 1:
        raise ValueError(PID_ERROR)
    return pid


def _discard_pending() -> None:
    for signum in _SIGNALS:
        handler = signal.signal(signum, signal.SIG_IGN)
        if handler is not None:
            signal.signal(signum, handler)


class Client:
    """Sends *message* to process *pid*, waiting for an acknowledgement per byte.

    With *announce*, the client waits a short while after the message for the
    server's end-of-message signal and reports that the string was received.
    """

    def __init__(self, pid: int, message: Message, announce: bool = False) -> None:
        if pid < 1:
            raise ValueError(PID_ERROR)
        self.pid = pid
        self.announce = announce
        self._frames = list(encode_message(message))

    def run(self) -> None:
        """Transmit the whole message, terminator included."""
        previous = signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)
        try:
            for index, frame in enumerate(self._frames):
                if index:
                    self._await_ack()
                self._send(frame)
            if self.announce:
                self._await_receipt()
        finally:
            _discard_pending()
            signal.pthread_sigmask(signal.SIG_SETMASK, previous)

    def _send(self, frame: tuple[int, ...]) -> None:
        for bit in frame:
            os.kill(self.pid, signal_for_bit(bit))
            time.sleep(BIT_DELAY)

    def _await_ack(self) -> None:
        while True:
            signum = signal.sigwait(_SIGNALS)
            if signum == signal.SIGUSR1:
                return
            if self.announce:
                self._notify()

    def _await_receipt(self) -> bool:
        deadline = time.monotonic() + RECEIPT_TIMEOUT
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            info = signal.sigtimedwait(_SIGNALS, remaining)
            if info is None:
                return False
            if info.si_signo == signal.SIGUSR2:
                self._notify()
                return True

    @staticmethod
    def _notify() -> None:
        sys.stdout.write(RECEIPT_NOTICE)
        sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Send a message: ``[--announce] PID MESSAGE``."""
    args = list(sys.argv[1:] if argv is None else argv)
    announce = bool(args) and args[0] == "--announce"
    if announce:
        args = args[1:]
    if len(args) != 2:
        sys.stdout.write("error\n")
        sys.stdout.flush()
        return 0
    pid_text, message = args
    try:
        pid = parse_pid(pid_text)
    except ValueError as exc:
        sys.stdout.write(str(exc))
        sys.stdout.flush()
        return 1
    for signum in _SIGNALS:
        signal.signal(signum, lambda *_: None)
    Client(pid, os.fsencode(message), announce).run()
    return 0
"""Bit-level wire protocol carried over SIGUSR1/SIGUSR2.

Each byte is sent most significant bit first, one signal per bit:
SIGUSR1 stands for a 1 bit and SIGUSR2 for a 0 bit.  A message ends
with a NUL byte.  The receiver acknowledges every complete byte.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass
from typing import Iterator, Union

BITS_PER_BYTE = 8
TERMINATOR = 0

Message = Union[str, bytes, bytearray]


def _as_bytes(message: Message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def _frames(payload: bytes) -> Iterator[tuple[int, ...]]:
    for byte in (*payload, TERMINATOR):
        yield tuple((byte >> shift) & 1 for shift in range(BITS_PER_BYTE - 1, -1, -1))


def encode_message(message: Message) -> Iterator[tuple[int, ...]]:
    """Yield one 8-bit frame per byte of *message*, MSB first, then the NUL frame.

    Raises ValueError if the message itself holds a NUL byte, since that
    byte would end the message early on the receiving side.
    """
    payload = _as_bytes(message)
    if TERMINATOR in payload:
        raise ValueError("message must not contain a NUL byte")
    return _frames(payload)


def signal_for_bit(bit: int) -> int:
    """Return the signal that carries *bit*."""
    if bit == 1:
        return signal.SIGUSR1
    if bit == 0:
        return signal.SIGUSR2
    raise ValueError(f"not a bit: {bit!r}")


def bit_for_signal(signum: int) -> int:
    """Return the bit carried by signal *signum*."""
    if signum == signal.SIGUSR1:
        return 1
    if signum == signal.SIGUSR2:
        return 0
    raise ValueError(f"signal {signum!r} carries no bit")


@dataclass(frozen=True)
class Step:
    """Outcome of feeding one bit to a Decoder.

    ``byte`` is set once eight bits have arrived (0 for the terminator);
    ``message`` is set when the terminator completes a message.
    """

    byte: int | None = None
    message: bytes | None = None


class Decoder:
    """Reassembles bytes and NUL-terminated messages from a stream of bits."""

    def __init__(self) -> None:
        self._bits: list[int] = []
        self._buffer = bytearray()

    def feed(self, bit: int) -> Step:
        """Take one bit and report whether a byte or a message is complete."""
        if bit not in (0, 1):
            raise ValueError(f"not a bit: {bit!r}")
        self._bits.append(int(bit))
        if len(self._bits) < BITS_PER_BYTE:
            return Step()
        value = 0
        for received in self._bits:
            value = (value << 1) | received
        self._bits.clear()
        if value == TERMINATOR:
            message = bytes(self._buffer)
            self._buffer.clear()
            return Step(byte=value, message=message)
        self._buffer.append(value)
        return Step(byte=value)

    def reset(self) -> None:
        """Drop any partial byte and partial message."""
        self._bits.clear()
        self._buffer.clear()
# sigtalk

sigtalk passes a text message from one process to another using only the two
user signals. Each byte is sent as eight bits, with the most significant bit
first. `SIGUSR1` stands for 1 and `SIGUSR2` stands for 0. A NUL byte ends the
message. The server answers every complete byte with `SIGUSR1`, and the client
waits for that answer before it sends the next byte.

The server waits with `signal.sigwaitinfo`, and the client's `--announce` wait
uses `signal.sigtimedwait`. Both are available on Linux but not on every POSIX
system.

## Installation

```
pip install .
```

## Usage

Start the server. It prints its process id on a line of its own and then waits
for signals:

```
sigtalk-server
```

In another terminal, send a message to that process id:

```
sigtalk-client 12345 "hello there"
```

When the server has received a whole message, it writes the message bytes to
standard output as they are, with no newline added.

### Options

- `sigtalk-server -a` / `--acknowledge-end`: when a message is complete, the
  server also sends `SIGUSR2` to the sender, before the usual `SIGUSR1` byte
  acknowledgement.
- `sigtalk-client --announce PID MESSAGE`: `--announce` must come first. After
  the message has been sent, the client waits up to one second for the server's
  `SIGUSR2`. When it arrives, the client prints `the string has been received`,
  with no newline.

### Errors

When the client is not given exactly a PID and a message, it prints `error`
and exits with status 0. When the PID does not parse to a number of at least 1,
it prints `Inapropriate use of PID` and exits with status 1. The PID is read
like C's `atoi`: leading whitespace and one sign are allowed, and reading stops
at the first character that is not a digit.

## Library use

`sigtalk.protocol` defines the wire format:

- `encode_message(message)` takes a `str`, which is encoded as UTF-8, or
  bytes. It yields one tuple of eight bits for each byte, followed by the NUL
  terminator. It raises `ValueError` if the message contains a NUL byte.
- `signal_for_bit(bit)` and `bit_for_signal(signum)` convert between bits and
  `SIGUSR1`/`SIGUSR2`. Any other value raises `ValueError`.
- `Decoder.feed(bit)` returns a `Step`. Its `byte` is set once eight bits have
  arrived. Its `message` is set when the terminator completes a message.
  `Decoder.reset()` discards any partial byte and any partial message.

`sigtalk.server.Server(stream, acknowledge_end=False)` writes each finished
message to a binary stream. `receive(signum, sender)` handles one signal and
returns the signals it sent back. `serve()` prints the process id and then
handles signals until it is interrupted.

`sigtalk.client.Client(pid, message, announce=False)` sends a message when
`run()` is called. `parse_pid(text)` parses a process id and raises
`ValueError` if the value is not positive.

`sigtalk.strutil` provides small text helpers:

- `atoi`: C-style parsing, wrapped to 32 bits.
- `itoa`
- `split`: splits on one character and drops empty words.
- `strtrim`
- `substr`
- `strnstr`: returns an index or `None`.
- `format_printf`: supports `%c %s %p %d %i %u %x %X %%`.

## Limitations

- The server keeps a single decoder. If two clients send at the same time,
  their bits are mixed together.
- Messages cannot contain NUL bytes. Nothing separates one printed message
  from the next.
- Nothing is retransmitted. A lost signal corrupts the rest of the message, and
  the client can wait forever for an acknowledgement that never comes.

## Development

```
pip install .[test]
pytest
```
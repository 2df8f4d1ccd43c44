import signal
from types import SimpleNamespace
from unittest import mock

import pytest

from sigtalk.client import Client, main, parse_pid
from sigtalk.protocol import Decoder, bit_for_signal

TARGET = 4242


def decode_sent(kill):
    decoder = Decoder()
    messages = []
    for call in kill.call_args_list:
        step = decoder.feed(bit_for_signal(call.args[1]))
        if step.message is not None:
            messages.append(step.message)
    return messages


def test_parse_pid_plain():
    assert parse_pid("4242") == 4242


def test_parse_pid_with_whitespace_and_sign():
    assert parse_pid("  +4242") == 4242


@pytest.mark.parametrize("text", ["0", "-5", "abc", ""])
def test_parse_pid_rejects_non_positive(text):
    with pytest.raises(ValueError, match="Inapropriate use of PID"):
        parse_pid(text)


def test_client_rejects_bad_pid():
    with pytest.raises(ValueError):
        Client(0, "hi", False)


def test_client_rejects_nul_in_message():
    with pytest.raises(ValueError):
        Client(TARGET, b"a\0b", False)


@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_run_sends_message_that_decodes_back(kill, sigwait):
    Client(TARGET, "hello", False).run()
    assert decode_sent(kill) == [b"hello"]
    assert all(call.args[0] == TARGET for call in kill.call_args_list)


@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_run_waits_for_ack_between_bytes(kill, sigwait):
    Client(TARGET, "abc", False).run()
    assert decode_sent(kill) == [b"abc"]
    assert sigwait.call_count == 3
    assert kill.call_count == 8 * 4


@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_run_sends_terminator_as_sigusr2(kill, sigwait):
    Client(TARGET, "A", False).run()
    sent = [call.args[1] for call in kill.call_args_list]
    assert sent[-8:] == [signal.SIGUSR2] * 8
    assert decode_sent(kill) == [b"A"]


@mock.patch("signal.sigtimedwait", create=True)
@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_announce_reports_receipt(kill, sigwait, sigtimedwait, capsys):
    sigtimedwait.return_value = SimpleNamespace(si_signo=signal.SIGUSR2, si_pid=TARGET)
    Client(TARGET, "hi", True).run()
    assert capsys.readouterr().out == "the string has been received"
    assert decode_sent(kill) == [b"hi"]


@mock.patch("signal.sigtimedwait", return_value=None, create=True)
@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_announce_silent_without_receipt(kill, sigwait, sigtimedwait, capsys):
    Client(TARGET, "hi", True).run()
    assert capsys.readouterr().out == ""
    assert sigtimedwait.call_count == 1


@mock.patch("signal.sigtimedwait", create=True)
@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_without_announce_no_receipt_wait(kill, sigwait, sigtimedwait, capsys):
    Client(TARGET, "hi", False).run()
    assert sigtimedwait.call_count == 0
    assert capsys.readouterr().out == ""


def test_main_wrong_argument_count(capsys):
    assert main(["4242"]) == 0
    assert capsys.readouterr().out == "error\n"


def test_main_bad_pid(capsys):
    assert main(["0", "hello"]) == 1
    assert capsys.readouterr().out == "Inapropriate use of PID"


@mock.patch("signal.sigwait", return_value=signal.SIGUSR1)
@mock.patch("os.kill")
def test_main_sends_message(kill, sigwait):
    previous = {s: signal.getsignal(s) for s in (signal.SIGUSR1, signal.SIGUSR2)}
    try:
        assert main(["4242", "yo"]) == 0
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    assert decode_sent(kill) == [b"yo"]
"""Tests for ifgraph.terminal.Terminal driven over a pseudo-terminal pair."""

from __future__ import annotations

import io
import os
import pty
import signal
import termios
import threading
import time

import pytest
from rich.text import Text

from ifgraph.exceptions import IfgraphError
from ifgraph.terminal import ENTER_SCREEN, LEAVE_SCREEN, Terminal, split_keys


@pytest.fixture()
def pty_pair():
    """``(master_fd, slave_file)``; the slave plays the part of stdin."""
    master, slave = pty.openpty()
    slave_file = os.fdopen(slave, "rb", buffering=0)
    yield master, slave_file
    slave_file.close()
    os.close(master)


@pytest.fixture()
def terminal(pty_pair):
    _, slave = pty_pair
    return Terminal(stdin=slave, stdout=io.StringIO())


@pytest.fixture()
def winch_handler():
    """A Python-level SIGWINCH handler, so the wakeup fd sees the signal."""
    received = []
    previous = signal.signal(signal.SIGWINCH, lambda signum, frame: received.append(signum))
    yield received
    signal.signal(signal.SIGWINCH, previous)


def _current_wakeup_fd() -> int:
    fd = signal.set_wakeup_fd(-1)
    signal.set_wakeup_fd(fd)
    return fd


class TestSplitKeys:
    def test_plain_keys(self):
        assert split_keys("qq") == ["q", "q"]
        assert split_keys("sp") == ["s", "p"]

    def test_escape_sequences_stay_whole(self):
        assert split_keys("\033[Aq") == ["\033[A", "q"]
        assert split_keys("\033[1;5C\033OP") == ["\033[1;5C", "\033OP"]
        assert split_keys("\033x") == ["\033x"]

    def test_lone_and_truncated_escape(self):
        assert split_keys("s\033") == ["s", "\033"]
        assert split_keys("\033[12") == ["\033[12"]

    def test_empty(self):
        assert split_keys("") == []


class TestSession:
    def test_enter_sets_cbreak_and_exit_restores(self, pty_pair, terminal):
        _, slave = pty_pair
        before = termios.tcgetattr(slave.fileno())
        with terminal:
            inside = termios.tcgetattr(slave.fileno())
            assert not inside[3] & termios.ICANON
            assert not inside[3] & termios.ECHO
        assert termios.tcgetattr(slave.fileno()) == before

    def test_restores_after_exception(self, pty_pair, terminal):
        _, slave = pty_pair
        before = termios.tcgetattr(slave.fileno())
        wakeup_before = _current_wakeup_fd()
        with pytest.raises(RuntimeError):
            with terminal:
                assert _current_wakeup_fd() != wakeup_before
                raise RuntimeError("boom")
        assert termios.tcgetattr(slave.fileno()) == before
        assert _current_wakeup_fd() == wakeup_before

    def test_screen_switch_sequences(self, pty_pair):
        _, slave = pty_pair
        out = io.StringIO()
        with Terminal(stdin=slave, stdout=out):
            assert out.getvalue() == ENTER_SCREEN
        assert out.getvalue().endswith(LEAVE_SCREEN)

    def test_non_tty_stdin_is_a_clean_error(self):
        terminal = Terminal(stdin=io.StringIO(), stdout=io.StringIO())
        with pytest.raises(IfgraphError, match="stdin is not a terminal"):
            with terminal:
                pass


class TestWaitKey:
    def test_timeout_returns_none(self, terminal):
        with terminal:
            assert terminal.wait_key(0.01) is None

    def test_single_key(self, pty_pair, terminal):
        master, _ = pty_pair
        with terminal:
            os.write(master, b"q")
            assert terminal.wait_key(1.0) == "q"

    def test_keys_read_together_come_back_one_at_a_time(self, pty_pair, terminal):
        """A paste or fast typing must not turn 'qq' into one unknown key."""
        master, _ = pty_pair
        with terminal:
            os.write(master, b"sp\033[Aq")
            keys = [terminal.wait_key(1.0) for _ in range(4)]
            assert keys == ["s", "p", "\033[A", "q"]
            assert terminal.wait_key(0.01) is None

    def test_sigwinch_interrupts_the_wait(self, terminal, winch_handler):
        """A resize mid-wait returns None long before the timeout expires."""
        with terminal:
            timer = threading.Timer(0.1, signal.pthread_kill, (threading.main_thread().ident, signal.SIGWINCH))
            timer.start()
            try:
                started = time.monotonic()
                assert terminal.wait_key(5.0) is None
                assert time.monotonic() - started < 2.0
            finally:
                timer.join()
            assert winch_handler == [signal.SIGWINCH]

    def test_wakeup_pipe_is_drained(self, terminal, winch_handler):
        with terminal:
            os.kill(os.getpid(), signal.SIGWINCH)
            os.kill(os.getpid(), signal.SIGWINCH)
            assert terminal.wait_key(1.0) is None
            with pytest.raises(BlockingIOError):
                os.read(terminal._wake_r, 1)
            started = time.monotonic()
            assert terminal.wait_key(0.2) is None
            assert time.monotonic() - started >= 0.15


class TestDraw:
    def test_cursor_home_then_clear_to_end(self, pty_pair):
        _, slave = pty_pair
        out = io.StringIO()
        with Terminal(stdin=slave, stdout=out) as terminal:
            start = len(out.getvalue())
            terminal.draw([Text("first"), Text("second")])
            frame = out.getvalue()[start:]
        assert frame.startswith("\033[H")
        assert frame.endswith("\033[J")
        assert "first" in frame and "second" in frame
        assert frame.index("first") < frame.index("second")
        assert frame.count("\n") == 1


"""End-to-end runs of the wipe against an in-memory terminal."""

from __future__ import annotations

import io
import os
import signal
import sys

import pytest

from asciiwipe.cli.main import run_wipe
from asciiwipe.models import AnimationConfig
from asciiwipe.utils.shutdown import is_stop_requested, request_stop
from asciiwipe.wipe.animation import StopReason
from asciiwipe.wipe.art import ArtImage
from asciiwipe.wipe.color import JITTER_MAX, JITTER_MIN
from asciiwipe.wipe.palette import ROTATION_MAX_INDEX, ROTATION_MIN_INDEX

pytestmark = [pytest.mark.integration]

ALT_SCREEN_ON = "\x1b[?1049h"
ALT_SCREEN_OFF = "\x1b[?1049l"
CURSOR_SHOW = "\x1b[?25h"


@pytest.fixture
def image():
    return ArtImage.from_text("AB\nCD\n")


def test_single_pass(image, terminal_console, sequence_random):
    rng = sequence_random(default=2)
    delays = []

    result = run_wipe(
        image,
        AnimationConfig(),
        console=terminal_console,
        stdin=io.StringIO(),
        rng=rng,
        sleep=delays.append,
    )

    assert result.reason == StopReason.COMPLETED
    assert result.frames == 5
    assert result.rotations == 1
    assert delays == [0.05] * 5

    # One jitter draw per cell per frame and one rotation draw
    assert rng.calls.count((JITTER_MIN, JITTER_MAX)) == 20
    assert rng.calls.count((ROTATION_MIN_INDEX, ROTATION_MAX_INDEX)) == 1

    output = terminal_console.file.getvalue()
    assert ALT_SCREEN_ON in output
    assert output.count("\x1b[2J") == 5
    # 2x2 image centred on a 100x30 terminal
    assert "\x1b[15;50H" in output
    assert "\x1b[16;50H" in output
    assert output.rfind(ALT_SCREEN_OFF) > output.rfind("\x1b[2J")
    assert output.rfind(CURSOR_SHOW) > output.rfind("\x1b[2J")


def test_interrupt_handler_stops_loop(image, terminal_console, sequence_random):
    previous = signal.getsignal(signal.SIGINT)

    def interrupting_sleep(delay):
        handler = signal.getsignal(signal.SIGINT)
        handler(signal.SIGINT, None)

    result = run_wipe(
        image,
        AnimationConfig(forever=True),
        console=terminal_console,
        stdin=io.StringIO(),
        rng=sequence_random(),
        sleep=interrupting_sleep,
    )

    assert result.reason == StopReason.INTERRUPTED
    assert result.frames == 1
    assert is_stop_requested()
    assert signal.getsignal(signal.SIGINT) is previous
    assert ALT_SCREEN_OFF in terminal_console.file.getvalue()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
def test_real_sigint(image, terminal_console, sequence_random):
    def signalling_sleep(delay):
        os.kill(os.getpid(), signal.SIGINT)

    result = run_wipe(
        image,
        AnimationConfig(forever=True),
        console=terminal_console,
        stdin=io.StringIO(),
        rng=sequence_random(),
        sleep=signalling_sleep,
    )

    assert result.reason == StopReason.INTERRUPTED
    assert result.frames == 1
    assert CURSOR_SHOW in terminal_console.file.getvalue()


def test_restores_terminal_when_loop_raises(image, terminal_console, sequence_random):
    previous = signal.getsignal(signal.SIGINT)

    def broken_sleep(delay):
        raise RuntimeError("clock failure")

    with pytest.raises(RuntimeError, match="clock failure"):
        run_wipe(
            image,
            AnimationConfig(),
            console=terminal_console,
            stdin=io.StringIO(),
            rng=sequence_random(),
            sleep=broken_sleep,
        )

    output = terminal_console.file.getvalue()
    assert ALT_SCREEN_OFF in output
    assert CURSOR_SHOW in output
    assert signal.getsignal(signal.SIGINT) is previous


def test_clears_stale_stop_request(image, terminal_console, sequence_random):
    request_stop()

    result = run_wipe(
        image,
        AnimationConfig(),
        console=terminal_console,
        stdin=io.StringIO(),
        rng=sequence_random(),
        sleep=lambda delay: None,
    )

    assert result.reason == StopReason.COMPLETED

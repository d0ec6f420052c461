"""Signal handling utilities for the dir2toc CLI.

SIGPIPE (when the reader of our stdout goes away, e.g. `dir2toc | head`) and SIGINT
are recorded rather than acted on immediately, so the writer can stop cleanly and
the CLI can exit with the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

# SIGPIPE does not exist on Windows
SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records SIGPIPE and SIGINT so output can be stopped gracefully.

    Each handler fires once: after recording the signal it restores the original
    handler, so a second Ctrl+C behaves as usual.

    Attributes:
        sigpipe_received: Event set when SIGPIPE has been received.
        sigint_received: Event set when SIGINT has been received.
        original_sigpipe_handler: SIGPIPE handler in place before setup, if any.
        original_sigint_handler: SIGINT handler in place before setup.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    def interrupted(self) -> bool:
        """Whether either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def exit_code(self) -> Optional[int]:
        """Conventional exit status for a received signal, or None if none was received."""
        if self.sigpipe_received.is_set():
            return 141
        if self.sigint_received.is_set():
            return 130
        return None


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (where available) and SIGINT handlers."""
    if SIGPIPE is not None:
        signal.signal(SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Redirect stdout to the null device after an interruption.

    Registered with atexit so interpreter shutdown does not print a second error
    when flushing a stdout whose reader is gone.
    """
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)

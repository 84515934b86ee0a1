import asyncio
import functools
import shlex
import shutil
import subprocess
import sys
import threading
from enum import Enum
from typing import Callable, List, Optional

# Seconds the "copied" acknowledgment stays visible
COPY_ACK_DELAY = 2.0

# Tried in order, first one found on PATH wins
CLIPBOARD_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class ClipboardUnavailable(RuntimeError):
    pass


def find_clipboard_command(override: Optional[str] = None) -> Optional[List[str]]:
    """Pick the clipboard command to use, honouring an explicit override"""
    if override:
        return shlex.split(override)

    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


class SystemClipboard:
    """Writes text to the OS clipboard through a helper command"""

    def __init__(self, command: Optional[List[str]] = None, timeout: float = 5):
        self.command = command if command is not None else find_clipboard_command()
        self.timeout = timeout

    def write(self, text: str):
        if not self.command:
            raise ClipboardUnavailable(
                "No clipboard command found (install pbcopy, wl-copy, xclip or xsel)"
            )

        try:
            subprocess.run(
                self.command,
                input=text.encode("utf-8"),
                check=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ClipboardUnavailable(f"Command not found: {e.filename}") from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode(errors="replace").strip() if e.stderr else str(e)
            raise ClipboardUnavailable(f"Clipboard command failed: {stderr}") from e
        except subprocess.TimeoutExpired as e:
            raise ClipboardUnavailable(f"Clipboard command timed out after {self.timeout}s") from e


class CopyState(str, Enum):
    IDLE = "idle"
    COPIED = "copied"


class _ThreadScheduler:
    def call_later(self, delay: float, callback: Callable[[], None]):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


def _default_scheduler():
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return _ThreadScheduler()


class CopyAcknowledgment:
    """idle -> copied on a successful copy, copied -> idle once the delay expires.

    A new copy while already copied cancels the pending revert and starts a
    fresh delay. The scheduler only needs ``call_later(delay, callback)``
    returning something with ``cancel()``, which asyncio loops provide.
    Each revert carries the generation it was scheduled for, so one that
    fires after a newer copy is ignored even if ``cancel()`` came too late.
    """

    def __init__(
        self,
        delay: float = COPY_ACK_DELAY,
        scheduler=None,
        on_change: Optional[Callable[[CopyState], None]] = None,
    ):
        self.delay = delay
        self.scheduler = scheduler
        self.on_change = on_change
        self._state = CopyState.IDLE
        self._pending = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def state(self) -> CopyState:
        return self._state

    def acknowledge(self):
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            self._set_state(CopyState.COPIED)
            scheduler = self.scheduler or _default_scheduler()
            self._pending = scheduler.call_later(
                self.delay, functools.partial(self._expire, self._generation)
            )

    def reset(self):
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            self._set_state(CopyState.IDLE)

    def _expire(self, generation: int):
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
            self._set_state(CopyState.IDLE)

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _set_state(self, state: CopyState):
        changed = state is not self._state
        self._state = state
        if changed and self.on_change:
            self.on_change(state)


class ClipboardPublisher:
    """Copies generated prompts and drives the copy acknowledgment"""

    def __init__(self, clipboard=None, acknowledgment: Optional[CopyAcknowledgment] = None):
        self.clipboard = clipboard if clipboard is not None else SystemClipboard()
        self.acknowledgment = acknowledgment or CopyAcknowledgment()

    def publish(self, text: str) -> bool:
        """Copy text to the clipboard. Returns False when the clipboard can't be used."""
        if not text:
            raise ValueError("Nothing to copy")

        try:
            self.clipboard.write(text)
        except ClipboardUnavailable as e:
            print(f"⚠ Clipboard unavailable, prompt left on screen: {e}", file=sys.stderr)
            return False

        self.acknowledgment.acknowledge()
        return True

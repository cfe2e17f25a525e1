"""Player action log, kept in memory and written to a CSV file in the background."""

from __future__ import annotations

import atexit
import csv
import os
import queue
import threading
from datetime import datetime
from pathlib import Path

from hammerclock.config import (
    DEFAULT_LOG_DATETIME_FORMAT,
    DEFAULT_LOG_FILE_NAME,
    DEFAULT_LOG_FILE_PATH,
)
from hammerclock.model import LogEntry, Model, Player

_HEADER = ("DateTime", "PlayerName", "Turn", "Phase", "Message")
_STOP = object()


class CsvLogWriter:
    """Appends log entries to a CSV file from a bounded queue on a worker thread.

    Entries sent while the queue is full are dropped so the interface never waits.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None, capacity: int = 100):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if path is None:
            path = os.path.join(DEFAULT_LOG_FILE_PATH, DEFAULT_LOG_FILE_NAME)
        self.path = path
        self.capacity = capacity
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        """Whether the background writer is active."""
        return self._thread is not None

    def start(self) -> None:
        """Start the background writer; does nothing if it is already running."""
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(
                target=self._drain, name="hammerclock-log", daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        """Write out every queued entry and stop the background writer."""
        with self._lock:
            if self._thread is None:
                return
            self._queue.put(_STOP)
            self._thread.join()
            self._thread = None

    def send(self, entry: LogEntry) -> bool:
        """Queue an entry for writing; return False if it was dropped."""
        try:
            self._queue.put_nowait(entry)
        except queue.Full:
            return False
        return True

    def write_entry(self, entry: LogEntry) -> None:
        """Append one entry to the CSV file, writing the header to a new file.

        Raises OSError when the file cannot be written.
        """
        path = Path(self.path)
        is_new = not path.exists()
        with path.open("a", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            if is_new:
                writer.writerow(_HEADER)
            writer.writerow(
                [entry.date_time, entry.player_name, str(entry.turn), entry.phase, entry.message]
            )

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            try:
                self.write_entry(item)  # type: ignore[arg-type]
            except Exception as exc:  # keep the writer alive whatever goes wrong
                print(f"Error writing log entry: {exc}")


_default_writer = CsvLogWriter()


def initialise() -> None:
    """Start the shared background log writer."""
    _default_writer.start()


def cleanup() -> None:
    """Flush and stop the shared background log writer."""
    _default_writer.stop()


atexit.register(cleanup)


def add_log_entry(player: Player, model: Model, message: str) -> LogEntry:
    """Record an action for a player in their log and in the CSV file."""
    phases = model.current_rules().phases
    phase = phases[player.current_phase] if 0 <= player.current_phase < len(phases) else ""
    entry = LogEntry(
        date_time=datetime.now().astimezone().strftime(DEFAULT_LOG_DATETIME_FORMAT),
        player_name=player.name,
        turn=player.turn_count,
        phase=phase,
        message=message,
    )
    # Rebind rather than append so copies of the player keep their own log.
    player.action_log = [*player.action_log, entry]
    initialise()
    _default_writer.send(entry)
    return entry
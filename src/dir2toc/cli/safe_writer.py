"""Signal-aware output writing for the dir2toc CLI.

Output to a file is staged in a temporary file next to the destination and moved
into place only when the writer is closed without error, so an interrupted or failed
run never leaves a truncated table of contents behind.
"""

import errno
import os
import tempfile
import types
from pathlib import Path
from typing import IO, Optional, Type, Union

from dir2toc.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes output to a file descriptor or, atomically, to a file path.

    Attributes:
        file: The file descriptor or destination path given at construction.
        fd: The file descriptor actually written to.
    """

    def __init__(self, file: Union[int, str, "os.PathLike[str]"]):
        """Initialize the safe writer.

        Args:
            file: A file descriptor, or a path for the output file.

        Raises:
            TypeError: If file is neither an int nor path-like.
            OSError: If the temporary file cannot be created next to the destination.
        """
        self.file = file
        self._closed = False
        self._file_obj: Optional[IO[bytes]] = None
        self._destination: Optional[Path] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._destination = Path(file)
            directory = self._destination.parent
            self._file_obj = tempfile.NamedTemporaryFile(
                "wb", dir=directory, prefix=f".{self._destination.name}.", suffix=".tmp", delete=False
            )
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    @property
    def temporary_path(self) -> Optional[Path]:
        """Path of the staging file, or None when writing to a file descriptor."""
        if self._file_obj is None:
            return None
        return Path(self._file_obj.name)

    def write(self, data: str) -> None:
        """Write data unless an interrupting signal has been received.

        Args:
            data: String data to write, encoded as UTF-8.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted():
            raise BrokenPipeError()

        payload = data.encode("utf-8")
        try:
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self, commit: bool = True) -> None:
        """Close the writer.

        For file output the staging file is renamed over the destination when
        commit is True and removed otherwise. Closing twice does nothing.

        Args:
            commit: Whether to publish the staged file output.
        """
        if self._closed:
            return
        self._closed = True

        if self._file_obj is None or self._destination is None:
            return

        temporary_path = Path(self._file_obj.name)
        try:
            self._file_obj.close()
            if commit:
                os.chmod(temporary_path, 0o644)
                os.replace(temporary_path, self._destination)
        finally:
            if temporary_path.exists():
                temporary_path.unlink()

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, publishing file output only if the block succeeded.

        If closing fails while an exception from the block is already propagating,
        the original exception wins.
        """
        try:
            self.close(commit=exc_type is None)
        except OSError:
            if exc_type is None:
                raise

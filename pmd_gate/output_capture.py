# pmd_gate/output_capture.py

import io
import logging
import sys
import threading
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Callable, List, NamedTuple, Optional

from pmd_gate.config import OK_RETURN_CODES

logger = logging.getLogger(__name__)

# sys.stdout / sys.stderr are shared by every thread: hold this while redirecting or writing to them.
streams_lock = threading.RLock()


class AnalyzerOutput(NamedTuple):
    stdout: str
    stderr: str
    returncode: Optional[int] = None


class CapturedOutput:
    """Buffers that receive everything written to sys.stdout / sys.stderr inside capture_output()."""

    def __init__(self):
        self._out = io.StringIO()
        self._err = io.StringIO()

    @property
    def stdout(self) -> str:
        return self._out.getvalue()

    @property
    def stderr(self) -> str:
        return self._err.getvalue()


@contextmanager
def capture_output():
    """
    Redirect the process-wide output streams into private buffers.

    The module lock is held from the redirect until the original streams are back,
    and the originals are restored on every exit path, exceptions included.

    Yields:
        CapturedOutput: the buffers filled during the block.
    """
    captured = CapturedOutput()
    with streams_lock:
        with redirect_stdout(captured._out), redirect_stderr(captured._err):
            yield captured


class InProcessAnalyzer:
    """
    Adapts a ``main(argv)`` style entry point that reports through sys.stdout and
    sys.stderr to the analyzer contract ``analyzer(arguments) -> AnalyzerOutput``.
    """

    def __init__(self, main: Callable[[List[str]], Optional[int]]):
        self.main = main

    def __call__(self, arguments: List[str]) -> AnalyzerOutput:
        logger.debug(f"Running in-process analyzer {getattr(self.main, '__name__', self.main)!r} with {arguments}")
        returncode = None
        with capture_output() as captured:
            try:
                returncode = self.main(list(arguments))
            except SystemExit as e:
                returncode = _exit_code(e.code)

        stderr = captured.stderr
        if returncode is not None and returncode not in OK_RETURN_CODES:
            logger.error(f"In-process analyzer failed with return code {returncode}")
            if not stderr.strip():
                stderr = f"Analyzer exited with return code {returncode}\n"
        return AnalyzerOutput(captured.stdout, stderr, returncode)


def _exit_code(code) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    # sys.exit("message") prints the message to stderr and exits with 1
    print(code, file=sys.stderr)
    return 1

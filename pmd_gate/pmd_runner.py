# pmd_gate/pmd_runner.py

import logging
import os
import subprocess
from typing import List, Optional

from pmd_gate.config import DEFAULT_PMD_PATH, OK_RETURN_CODES
from pmd_gate.errors import AnalyzerTimeoutError, ResourceNotFoundError
from pmd_gate.output_capture import AnalyzerOutput

logger = logging.getLogger(__name__)


def build_pmd_command(arguments: List[str], pmd_path: str = DEFAULT_PMD_PATH) -> List[str]:
    """
    Map the analyzer arguments ``[target_dir, report_format, ruleset]`` onto the PMD command line.

    Args:
        arguments (list): absolute folder to check, report format and rule set locator.
        pmd_path (str): PMD launcher (``pmd`` when it is on PATH).

    Returns:
        list: the command for subprocess.run.
    """
    target_dir, report_format, ruleset = arguments
    return [
        pmd_path,
        "check",
        "-d", target_dir,
        "-f", report_format,
        "-R", ruleset,
        "--no-cache",
        "--no-progress",
    ]


def run_pmd(arguments: List[str], pmd_path: str = DEFAULT_PMD_PATH, timeout: Optional[float] = None) -> AnalyzerOutput:
    """
    Run PMD in a child process and collect its report.

    The child's output is captured through pipes, so the current process's
    sys.stdout / sys.stderr are never touched.

    Args:
        arguments (list): ``[target_dir, report_format, ruleset]``.
        pmd_path (str): PMD launcher.
        timeout (float): seconds to wait for PMD, None to wait until it exits.

    Returns:
        AnalyzerOutput: stdout, stderr and the PMD return code.
    """
    command = build_pmd_command(arguments, pmd_path)

    # JAVA_OPTS from the caller's shell can turn on incremental analysis and other noise
    env = os.environ.copy()
    if "JAVA_OPTS" in env:
        del env["JAVA_OPTS"]

    logger.debug(f"Running PMD: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            env=env,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ResourceNotFoundError(f"PMD executable not found at: {pmd_path}") from None
    except subprocess.TimeoutExpired:
        raise AnalyzerTimeoutError(f"PMD did not finish within {timeout} seconds: {' '.join(command)}") from None

    stdout = result.stdout or ""
    stderr = result.stderr or ""
    if result.returncode not in OK_RETURN_CODES:
        logger.error(f"PMD execution failed with return code {result.returncode}")
        if not stderr.strip():
            stderr = f"PMD exited with return code {result.returncode}\n"
    else:
        logger.debug(f"PMD finished with return code {result.returncode}")

    return AnalyzerOutput(stdout, stderr, result.returncode)


class PmdAnalyzer:
    """The default analyzer: PMD launched out-of-process."""

    def __init__(self, pmd_path: str = DEFAULT_PMD_PATH, timeout: Optional[float] = None):
        self.pmd_path = pmd_path
        self.timeout = timeout

    def __call__(self, arguments: List[str]) -> AnalyzerOutput:
        return run_pmd(arguments, pmd_path=self.pmd_path, timeout=self.timeout)

    def __repr__(self):
        return f"PmdAnalyzer(pmd_path={self.pmd_path!r}, timeout={self.timeout!r})"

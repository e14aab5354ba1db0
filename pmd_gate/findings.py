# pmd_gate/findings.py

import re
from typing import Iterable, List

# Lines PMD prints that are not findings. Matched as exact, case-sensitive substrings.
NOISE_MARKERS = (
    "suppressed by Annotation",
    "No problems found!",
    "Error while processing",
)

_LINE_SPLIT = re.compile(r"\r?\n")


def is_noise(line: str, markers: Iterable[str] = NOISE_MARKERS) -> bool:
    return any(marker in line for marker in markers)


def filter_findings(output: str, extra_markers: Iterable[str] = ()) -> List[str]:
    """
    Split the analyzer's text report into lines and keep only the real findings.

    Args:
        output (str): captured standard output of the analyzer.
        extra_markers (Iterable[str]): markers to ignore on top of NOISE_MARKERS.

    Returns:
        list: non-empty lines that contain none of the markers, in report order.
    """
    markers = NOISE_MARKERS + tuple(extra_markers)
    return [line for line in _LINE_SPLIT.split(output) if line and not is_noise(line, markers)]


def format_findings_message(findings: List[str]) -> str:
    message = f"{len(findings)} errors\n"
    for finding in findings:
        message += finding + "\n"
    return message

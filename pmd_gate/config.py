# pmd_gate/config.py

import os
from typing import NamedTuple, Optional, Tuple

from pmd_gate.errors import ConfigurationError

PMD_PATH_ENV = "PMD_GATE_PMD_PATH"
TIMEOUT_ENV = "PMD_GATE_TIMEOUT"
EXTRA_NOISE_MARKERS_ENV = "PMD_GATE_EXTRA_NOISE_MARKERS"

DEFAULT_PMD_PATH = "pmd"

# PMD exit codes: 0 = no violations, 4 = violations found, anything else = the analyzer failed
OK_RETURN_CODES = (0, 4)


class GateConfig(NamedTuple):
    pmd_path: str = DEFAULT_PMD_PATH
    timeout: Optional[float] = None
    extra_noise_markers: Tuple[str, ...] = ()


def parse_timeout(raw_timeout: str, source: str = TIMEOUT_ENV) -> float:
    """Seconds as a positive float; ``source`` names the setting in the error message."""
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"{source} must be a number of seconds, got '{raw_timeout}'") from None
    if timeout <= 0:
        raise ConfigurationError(f"{source} must be positive, got '{raw_timeout}'")
    return timeout


def load_noise_markers(environ=None) -> Tuple[str, ...]:
    if environ is None:
        environ = os.environ
    raw_markers = environ.get(EXTRA_NOISE_MARKERS_ENV, "")
    return tuple(m for m in raw_markers.split(os.pathsep) if m)


def load_config(environ=None) -> GateConfig:
    """
    Read the gate defaults from environment variables.

    Args:
        environ (Mapping): variables to read, ``os.environ`` when omitted.

    Returns:
        GateConfig: PMD launcher, timeout in seconds (None = wait forever)
                    and extra noise markers.

    Raises:
        ConfigurationError: the timeout is not a positive number.
    """
    if environ is None:
        environ = os.environ

    pmd_path = environ.get(PMD_PATH_ENV, "").strip() or DEFAULT_PMD_PATH

    timeout = None
    raw_timeout = environ.get(TIMEOUT_ENV, "").strip()
    if raw_timeout:
        timeout = parse_timeout(raw_timeout)

    return GateConfig(pmd_path=pmd_path, timeout=timeout, extra_noise_markers=load_noise_markers(environ))

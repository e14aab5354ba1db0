# pmd_gate/cli.py

import argparse
import logging
import os
import sys

from pmd_gate import findings_gate
from pmd_gate.config import PMD_PATH_ENV, TIMEOUT_ENV, load_config, parse_timeout
from pmd_gate.errors import AnalyzerErrorOutputError, ConfigurationError, FindingsPresentError, GateError
from pmd_gate.pmd_runner import PmdAnalyzer

logger = logging.getLogger(__name__)


class _CommandLine:
    """Caller for the gate; the rule set path is made absolute before the lookup."""


def _positive_seconds(value):
    try:
        return parse_timeout(value, source="--timeout")
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run PMD on a folder and fail if it reports any findings.")
    parser.add_argument("folder", help="Folder with the sources to check.")
    parser.add_argument("-r", "--ruleset", required=True, help="Path to the PMD ruleset XML file.")
    parser.add_argument("--pmd-path", default=None,
                        help=f"PMD launcher (default: ${PMD_PATH_ENV} or 'pmd').")
    parser.add_argument("--timeout", type=_positive_seconds, default=None,
                        help=f"Seconds to wait for PMD before giving up (default: ${TIMEOUT_ENV}, else no limit).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    if args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    pmd_path = args.pmd_path
    timeout = args.timeout
    if pmd_path is None or timeout is None:
        try:
            config = load_config()
        except ConfigurationError as e:
            logger.critical(str(e))
            return 2
        pmd_path = pmd_path or config.pmd_path
        timeout = timeout if timeout is not None else config.timeout

    ruleset_path = os.path.abspath(os.path.expanduser(args.ruleset))
    analyzer = PmdAnalyzer(pmd_path=pmd_path, timeout=timeout)

    try:
        findings_gate.run(_CommandLine(), args.folder, ruleset_path, analyzer=analyzer)
    except (FindingsPresentError, AnalyzerErrorOutputError) as e:
        logger.error(f"PMD check failed: {e}")
        return 1
    except GateError as e:
        logger.critical(str(e))
        return 2

    logger.info("PMD check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

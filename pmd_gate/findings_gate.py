# pmd_gate/findings_gate.py

import logging
import os

from pmd_gate.config import load_config, load_noise_markers
from pmd_gate.errors import AnalyzerErrorOutputError, FindingsPresentError, ResourceNotFoundError
from pmd_gate.findings import filter_findings, format_findings_message
from pmd_gate.output_capture import streams_lock
from pmd_gate.pmd_runner import PmdAnalyzer
from pmd_gate.ruleset import describe_ruleset, resolve_rule_file

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "text"


def run(test_instance, folder_to_check, rule_file_name, analyzer=None, extra_noise_markers=()):
    """
    Run PMD on a folder with a rule set stored next to the test and fail if anything is reported.

    Args:
        test_instance: the running test case (or its class); the rule set is looked up
                       in the folder of the module that defines it.
        folder_to_check (str | os.PathLike): folder to analyze.
        rule_file_name (str): rule set file name in the test's folder.
        analyzer (callable): ``analyzer(arguments) -> AnalyzerOutput``; PMD from the
                             environment configuration when omitted.
        extra_noise_markers (Iterable[str]): report lines to ignore on top of the defaults.

    Raises:
        ResourceNotFoundError: the folder or the rule set does not exist.
        InvalidRuleSetError: the rule set is not a PMD rule set document.
        FindingsPresentError: PMD reported findings.
        AnalyzerErrorOutputError: PMD wrote to its error channel.
    """
    folder = os.path.abspath(os.fspath(folder_to_check))

    with streams_lock:
        print(f"Starting PMD code analyzer test on folder '{folder}'.")

    if not os.path.exists(folder):
        raise ResourceNotFoundError(f"The folder to check '{folder}' does not exist.")
    if not os.path.isdir(folder):
        raise ResourceNotFoundError(f"The folder to check '{folder}' is not a directory.")

    rule_path = resolve_rule_file(test_instance, rule_file_name)
    ruleset_info = describe_ruleset(rule_path)
    logger.info(f"Using ruleset '{ruleset_info.name}' ({len(ruleset_info.rules)} rules) from {rule_path}")

    if analyzer is None:
        config = load_config()
        analyzer = PmdAnalyzer(pmd_path=config.pmd_path, timeout=config.timeout)
    extra_noise_markers = load_noise_markers() + tuple(extra_noise_markers)

    arguments = [folder, OUTPUT_FORMAT, str(rule_path)]
    output = analyzer(arguments)

    findings = filter_findings(output.stdout, extra_noise_markers)

    # Another run may have sys.stdout redirected right now; wait until it is restored
    with streams_lock:
        print(f"Found {len(findings)} errors")
        for finding in findings:
            print(finding + "\n")

        if output.stderr:
            print("Errors:")
            print(output.stderr)

    if findings:
        raise FindingsPresentError(format_findings_message(findings), findings)
    if output.stderr.strip():
        raise AnalyzerErrorOutputError(output.stderr.strip())

# pmd_gate/ruleset.py

import inspect
import logging
from pathlib import Path
from typing import List, NamedTuple

from lxml import etree

from pmd_gate.errors import InvalidRuleSetError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class RuleSetInfo(NamedTuple):
    name: str
    rules: List[str]


def caller_directory(test_instance) -> Path:
    """
    Directory of the source file that defines the caller's class.

    Args:
        test_instance: a test case instance, or the class itself.
    """
    cls = test_instance if inspect.isclass(test_instance) else type(test_instance)
    try:
        source = inspect.getfile(cls)
    except TypeError:
        raise ResourceNotFoundError(f"Cannot locate the source file of '{cls.__name__}'.") from None
    return Path(source).resolve().parent


def resolve_rule_file(test_instance, rule_file_name) -> Path:
    """
    Find a rule set file in the same folder as the caller's class.

    An absolute ``rule_file_name`` is used as is.

    Returns:
        Path: absolute path of the existing rule set file.
    """
    rule_path = caller_directory(test_instance) / rule_file_name
    if not rule_path.is_file():
        cls = test_instance if inspect.isclass(test_instance) else type(test_instance)
        raise ResourceNotFoundError(
            f"The rule set file '{rule_file_name}' does not exist in the same folder as '{cls.__name__}'."
        )
    return rule_path


def describe_ruleset(rule_path) -> RuleSetInfo:
    """
    Read the name and rules of a PMD rule set XML file.

    Rules are reported by their ``name`` attribute, or by their ``ref`` when they
    reference a rule or a whole category from another rule set.

    Raises:
        InvalidRuleSetError: the file is not well-formed XML or its root is not <ruleset>.
    """
    try:
        root_elem = etree.parse(str(rule_path)).getroot()
    except etree.XMLSyntaxError as e:
        raise InvalidRuleSetError(f"The rule set file '{rule_path}' is not valid XML: {e}") from e

    if etree.QName(root_elem).localname != "ruleset":
        raise InvalidRuleSetError(
            f"The rule set file '{rule_path}' has root element <{etree.QName(root_elem).localname}>, expected <ruleset>."
        )

    rules = []
    for rule_elem in root_elem:
        if not isinstance(rule_elem.tag, str) or etree.QName(rule_elem).localname != "rule":
            continue
        rule = rule_elem.get("name") or rule_elem.get("ref")
        if rule:
            rules.append(rule)

    return RuleSetInfo(root_elem.get("name", ""), rules)

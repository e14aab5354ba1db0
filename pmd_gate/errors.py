# pmd_gate/errors.py


class GateError(Exception):
    """Base class for everything the findings gate raises."""


class ResourceNotFoundError(GateError, FileNotFoundError):
    """A folder, rule set or PMD executable could not be found."""


class InvalidRuleSetError(GateError, ValueError):
    """The rule set file exists but is not a PMD rule set document."""


class ConfigurationError(GateError, ValueError):
    """An environment setting has a value the gate cannot use."""


class AnalyzerTimeoutError(GateError, TimeoutError):
    """The analyzer did not finish within the configured timeout."""


class FindingsPresentError(GateError, AssertionError):
    """The analyzer reported findings after noise filtering."""

    def __init__(self, message: str, findings: list = None):
        super().__init__(message)
        self.findings = list(findings) if findings is not None else []

    def __reduce__(self):
        return type(self), (str(self), self.findings)


class AnalyzerErrorOutputError(GateError, AssertionError):
    """The analyzer wrote something to its error channel."""

    def __init__(self, stderr: str = ""):
        super().__init__(stderr)
        self.stderr = stderr

    def __reduce__(self):
        return type(self), (self.stderr,)

"""Error types raised while classifying requests and assembling team reports."""


class TeamReportError(Exception):
    """Base class for report agent errors."""


class InputMissing(TeamReportError):
    """The incoming message carried no request text."""


class ClassificationFailure(TeamReportError):
    """The check-in type could not be extracted from the request."""


class InvalidCheckInType(ClassificationFailure):
    """A check-in type was produced but is not one of the supported values."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unsupported check-in type: {value!r}")


class DecodeFailure(TeamReportError):
    """An update's encoded answers could not be decoded."""


class GenerationFailure(TeamReportError):
    """The analyst model failed to produce a productivity analysis."""


class StoreFailure(TeamReportError):
    """Fetching memories from the store failed."""


class ReportParseError(TeamReportError, ValueError):
    """An update carries a timestamp that cannot be parsed."""

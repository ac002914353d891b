"""Exceptions raised around the scorer: loading uploads and fetching stored analyses.

The scorer itself never raises for a decoded document.
"""


class SpecQualityError(Exception):
    """Base exception for all spec-quality errors."""


class UnsupportedFormatError(SpecQualityError):
    """Raised when an upload is not JSON, YAML, or a JAR."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"Unsupported file format: {file_name}")
        self.file_name = file_name


class SpecDecodeError(SpecQualityError):
    """Raised when upload content cannot be decoded into a specification mapping."""

    def __init__(self, message: str, source_name: str = "") -> None:
        super().__init__(message)
        self.source_name = source_name


class NoSpecFoundError(SpecQualityError):
    """Raised when a JAR contains no api-docs specification files."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"No API specification files found in {file_name}")
        self.file_name = file_name


class AnalysisNotFoundError(SpecQualityError, LookupError):
    """Raised when no stored analysis has the requested id."""

    def __init__(self, analysis_id: str) -> None:
        super().__init__(f"Analysis not found: {analysis_id}")
        self.analysis_id = analysis_id

"""Exception hierarchy raised at the request level.

Field- and row-level anomalies never raise; they resolve to defaults. Only
structural problems with a whole request surface as one of these.
"""

from __future__ import annotations

from collections.abc import Sequence


class AnalyzerError(Exception):
    """Base class for every error the analyzer raises deliberately."""


class MalformedInputError(AnalyzerError):
    """A sheet cannot be read as a sequence of row mappings."""

    def __init__(self, message: str, source_label: str | None = None, sheet: str | None = None) -> None:
        self.source_label = source_label
        self.sheet = sheet
        self.detail = message
        prefix = f"{source_label}: " if source_label else ""
        super().__init__(f"{prefix}{message}")

    def with_source(self, source_label: str) -> "MalformedInputError":
        return MalformedInputError(self.detail, source_label=source_label, sheet=self.sheet)


class EmptyInputError(AnalyzerError):
    """Nothing to analyze: no recognised sheets, or no sources at all."""


class SourceFailure(AnalyzerError):
    """One entry of a comparison failed; ``failures`` lists every failed entry."""

    def __init__(
        self,
        index: int,
        source_label: str,
        cause: BaseException,
        failures: Sequence[tuple[int, str, BaseException]] = (),
    ) -> None:
        self.index = index
        self.source_label = source_label
        self.cause = cause
        self.failures = tuple(failures) or ((index, source_label, cause),)
        super().__init__(f"Source #{index + 1} ({source_label}) failed: {cause}")


class ConfigError(AnalyzerError):
    """Analyzer configuration could not be loaded or does not fit the column tables."""

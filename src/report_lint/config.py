from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from report_lint.core import Hyperparameters
from report_lint.dictionary import DEFAULT_DICTIONARY, DictionaryEntry, load_dictionary


class ReportLintConfig(BaseModel):
    """Options accepted by the report rule.

    Attributes:
        allows: Substrings that exempt a text segment from every segment-level
            check when the segment contains any of them.
        dictionary_path: JSON file of ``{"incorrect", "correct"}`` rows. Replaces
            the built-in table when set.
        max_uncertainty_significant_figures: Significant figures allowed in the
            uncertainty of a ``value \\pm uncertainty`` expression.
        max_integer_digits: Integer digits above which both numbers of an
            uncertainty expression should use ×10^n notation.
        italic_include_punctuation: Opt in to also treating Japanese punctuation, ASCII period
            and comma, and whitespace as neighbours in the italic check.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    allows: list[str] = Field(default_factory=list, description="Substrings that exempt a segment from checks")
    dictionary_path: Path | None = Field(default=None, description="JSON dictionary replacing the built-in table")
    max_uncertainty_significant_figures: int = Field(default=2, ge=0, description="Allowed significant figures in an uncertainty")
    max_integer_digits: int = Field(default=2, ge=0, description="Integer digits before ×10^n notation is suggested")
    italic_include_punctuation: bool = Field(default=False, description="Widen the italic check's neighbour set")

    def hyperparameters(self) -> Hyperparameters:
        return Hyperparameters(
            max_uncertainty_significant_figures=self.max_uncertainty_significant_figures,
            max_integer_digits=self.max_integer_digits,
            italic_include_punctuation=self.italic_include_punctuation,
        )

    def dictionary(self) -> tuple[DictionaryEntry, ...]:
        if self.dictionary_path is None:
            return DEFAULT_DICTIONARY
        return load_dictionary(self.dictionary_path)

# Proofreading checks for LaTeX-flavoured Japanese reports.
#
# Two passes: a document pass over the full source text (duplicate captions,
# mixed inline-math delimiters) and a segment pass over each literal text run
# (empty braces, unformatted variables, uncertainty formatting, dictionary).
# Every check is a stateless regex scan returning advisory diagnostics.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import partial, reduce
from typing import Callable, Iterable

from report_lint.dictionary import DEFAULT_DICTIONARY, DictionaryEntry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Thresholds used by the uncertainty and italic checks."""

    max_uncertainty_significant_figures: int = 2
    max_integer_digits: int = 2
    italic_include_punctuation: bool = False


DEFAULT_HYPERPARAMETERS = Hyperparameters()


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Diagnostic:
    """One advisory finding.

    ``start``/``end`` are half-open ``str`` offsets into the exact text that was
    scanned: the full document for document-pass rules, the segment text for
    segment-pass rules.
    """

    rule: str
    message: str
    start: int
    end: int

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)

    def to_payload(self) -> dict[str, object]:
        return {
            "type": "Diagnostic",
            "rule": self.rule,
            "message": self.message,
            "range": [self.start, self.end],
        }


@dataclass(frozen=True)
class _SegmentContext:
    text: str
    dictionary: tuple[DictionaryEntry, ...]
    hp: Hyperparameters


_Rule = Callable[[str, Hyperparameters], list[Diagnostic]]
_SegmentRule = Callable[[_SegmentContext], list[Diagnostic]]

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_CAPTION_RE = re.compile(r"\\caption\{(.*?)\}")
_DOLLAR_MATH_RE = re.compile(r"\$(.*?)\$")
_PAREN_MATH_RE = re.compile(r"\\\((.*?)\\\)")
_EMPTY_BRACE_RE = re.compile(r"\{\}")

_JAPANESE_CHARS = "ぁ-んァ-ヶｱ-ﾝﾞﾟ一-龥々ー"
_JAPANESE_PUNCTUATION = "、。，．・「」『』（）"
_STRICT_NEIGHBOUR = f"[{_JAPANESE_CHARS}]"
_REFINED_NEIGHBOUR = f"[{_JAPANESE_CHARS}{_JAPANESE_PUNCTUATION}.,\\s]"
_VARIABLE_STRICT_RE = re.compile(f"{_STRICT_NEIGHBOUR}([a-zA-Z]){_STRICT_NEIGHBOUR}")
_VARIABLE_REFINED_RE = re.compile(f"{_REFINED_NEIGHBOUR}([a-zA-Z]){_REFINED_NEIGHBOUR}")

_UNCERTAINTY_RE = re.compile(r"([0-9]+)(?:\.([0-9]+))?\s*\\(?:pm|mp)\s*([0-9]+)(?:\.([0-9]+))?")

# ---------------------------------------------------------------------------
# Document rules
# ---------------------------------------------------------------------------


def _rule_duplicate_captions(text: str, _hp: Hyperparameters) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    seen: set[str] = set()
    for m in _CAPTION_RE.finditer(text):
        caption = m.group(1)
        if caption in seen:
            diagnostics.append(Diagnostic("duplicate_caption", f'重複したキャプション: "{caption}"', m.start(), m.end()))
        else:
            seen.add(caption)
    return diagnostics


def _rule_mixed_math_delimiters(text: str, _hp: Hyperparameters) -> list[Diagnostic]:
    dollar_matches = list(_DOLLAR_MATH_RE.finditer(text))
    paren_matches = list(_PAREN_MATH_RE.finditer(text))
    dollar_count = len(dollar_matches)
    paren_count = len(paren_matches)
    if dollar_count == 0 or paren_count == 0:
        return []
    # Equal counts flag the dollar style.
    targets = dollar_matches if dollar_count <= paren_count else paren_matches
    message = f"\\(...\\) と $...$ が混在しています。({paren_count}回 / {dollar_count}回)"
    return [Diagnostic("mixed_math_delimiter", message, m.start(), m.end()) for m in targets]


# ---------------------------------------------------------------------------
# Segment rules
# ---------------------------------------------------------------------------


def _rule_empty_braces(ctx: _SegmentContext) -> list[Diagnostic]:
    return [
        Diagnostic("empty_brace", "空欄になっています。", m.start(), m.end())
        for m in _EMPTY_BRACE_RE.finditer(ctx.text)
    ]


def _rule_italic_variables(ctx: _SegmentContext) -> list[Diagnostic]:
    """Flag a lone Latin letter sandwiched between Japanese text.

    Best effort: unit symbols and abbreviations written inline are flagged too,
    and letters next to other scripts are missed.
    """
    pattern = _VARIABLE_REFINED_RE if ctx.hp.italic_include_punctuation else _VARIABLE_STRICT_RE
    return [
        Diagnostic("italic_variable", f"斜体にしていない可能性が高い文字: {m.group(1)}", m.start(1), m.end(1))
        for m in pattern.finditer(ctx.text)
    ]


def _rule_uncertainty(ctx: _SegmentContext) -> list[Diagnostic]:
    hp = ctx.hp
    diagnostics: list[Diagnostic] = []
    for m in _UNCERTAINTY_RE.finditer(ctx.text):
        int1, frac1, int2, frac2 = (g or "" for g in m.groups())
        expr = m.group(0)
        if len(frac1) != len(frac2):
            diagnostics.append(Diagnostic("uncertainty_decimal_places", f"小数点以下の桁数が揃っていません: {expr}", m.start(), m.end()))

        trimmed = frac2.lstrip("0")
        limit = hp.max_uncertainty_significant_figures
        if (int2 == "0" and len(trimmed) > limit) or (int2 != "0" and len(frac2) > limit):
            diagnostics.append(Diagnostic(
                "uncertainty_significant_figures",
                f"不確かさの有効数字が多すぎる可能性があります ({len(trimmed)}桁): {expr}",
                m.start(), m.end(),
            ))

        if len(int1) > hp.max_integer_digits and len(int2) > hp.max_integer_digits:
            diagnostics.append(Diagnostic("uncertainty_exponent_notation", f"×10^n の表記を使ってください: {expr}", m.start(), m.end()))
    return diagnostics


def _rule_dictionary(ctx: _SegmentContext) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for entry in ctx.dictionary:
        message = f'"{entry.incorrect}" -?> "{entry.correct}"'
        for m in entry.pattern.finditer(ctx.text):
            diagnostics.append(Diagnostic("dictionary", message, m.start(), m.end()))
    return diagnostics


# ---------------------------------------------------------------------------
# Pipeline wiring
# ---------------------------------------------------------------------------

_DOCUMENT_PIPELINE: list[_Rule] = [
    _rule_duplicate_captions,
    _rule_mixed_math_delimiters,
]

_SEGMENT_PIPELINE: list[_SegmentRule] = [
    _rule_empty_braces,
    _rule_italic_variables,
    _rule_uncertainty,
    _rule_dictionary,
]


def _run_pipeline(steps: list[Callable[[], list[Diagnostic]]]) -> list[Diagnostic]:
    def _merge(acc: tuple[Diagnostic, ...], step: Callable[[], list[Diagnostic]]) -> tuple[Diagnostic, ...]:
        return acc + tuple(step())

    return list(reduce(_merge, steps, ()))


def is_allowed(text: str, allows: Iterable[str]) -> bool:
    """Return True if any allow-list entry occurs in ``text``."""
    return any(allow in text for allow in allows)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_document(text: str, hyperparameters: Hyperparameters | None = None) -> list[Diagnostic]:
    """Run the whole-document checks.

    Args:
        text: Full source text of one document.
        hyperparameters: Optional tuning overrides.

    Returns:
        Diagnostics in pipeline order (duplicate captions first), each ranged
        against ``text``.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    diagnostics = _run_pipeline([partial(rule, text, hp) for rule in _DOCUMENT_PIPELINE])
    logger.debug(f"document pass: {len(text)} chars, {len(diagnostics)} diagnostics")
    return diagnostics


def analyze_segment(
    text: str,
    allows: Iterable[str] = (),
    dictionary: Iterable[DictionaryEntry] | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> list[Diagnostic]:
    """Run the checks local to one text segment.

    Args:
        text: The segment's own text.
        allows: Substrings that exempt the whole segment when present.
        dictionary: Compiled dictionary entries. Defaults to the built-in table.
        hyperparameters: Optional tuning overrides.

    Returns:
        Diagnostics ranged against ``text``; empty if the segment is allow-listed.
    """
    if is_allowed(text, allows):
        return []
    ctx = _SegmentContext(
        text=text,
        dictionary=tuple(DEFAULT_DICTIONARY if dictionary is None else dictionary),
        hp=hyperparameters or DEFAULT_HYPERPARAMETERS,
    )
    diagnostics = _run_pipeline([partial(rule, ctx) for rule in _SEGMENT_PIPELINE])
    logger.debug(f"segment pass: {len(text)} chars, {len(diagnostics)} diagnostics")
    return diagnostics

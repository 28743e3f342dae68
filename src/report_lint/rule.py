from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from report_lint.config import ReportLintConfig
from report_lint.core import Diagnostic, analyze_document, analyze_segment

logger = logging.getLogger(__name__)

DOCUMENT = "Document"
STR = "Str"


class RuleContext(Protocol):
    """What the host traversal provides to the rule."""

    def source_text_of(self, node: Any) -> str: ...

    def report(self, node: Any, message: str, start: int, end: int) -> None: ...


class ReportRule:
    """Binds the document and segment passes to a host traversal.

    The host calls ``on_document`` once per document, then ``on_text_segment``
    for each text leaf in document order. Each call is independent; nothing is
    carried over between calls or between lint runs.
    """

    def __init__(self, context: RuleContext, config: ReportLintConfig | None = None) -> None:
        self.context = context
        self.config = config or ReportLintConfig()
        self.allows = tuple(self.config.allows)
        self.dictionary = self.config.dictionary()
        self.hp = self.config.hyperparameters()
        logger.info(f"report rule ready: {len(self.allows)} allow entries, {len(self.dictionary)} dictionary entries")

    def on_document(self, node: Any) -> None:
        text = self.context.source_text_of(node)
        self._emit(node, analyze_document(text, self.hp))

    def on_text_segment(self, node: Any) -> None:
        text = self.context.source_text_of(node)
        self._emit(node, analyze_segment(text, self.allows, self.dictionary, self.hp))

    def handlers(self) -> dict[str, Callable[[Any], None]]:
        return {DOCUMENT: self.on_document, STR: self.on_text_segment}

    def _emit(self, node: Any, diagnostics: list[Diagnostic]) -> None:
        for d in diagnostics:
            self.context.report(node, d.message, d.start, d.end)

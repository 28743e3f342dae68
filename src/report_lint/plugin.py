from __future__ import annotations

from typing import Any, Callable, Mapping

from report_lint.config import ReportLintConfig
from report_lint.rule import ReportRule, RuleContext


def create_rule(context: RuleContext, options: Mapping[str, Any] | None = None) -> dict[str, Callable[[Any], None]]:
    """Entry point for the host: validate options and return node handlers."""
    config = ReportLintConfig.model_validate(dict(options or {}))
    return ReportRule(context, config).handlers()

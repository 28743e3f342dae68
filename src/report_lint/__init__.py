# SPDX-License-Identifier: Apache-2.0
"""Proofreading rule for LaTeX-flavoured Japanese science reports.

Flags duplicated captions, mixed ``$...$``/``\\(...\\)`` math, empty ``{}``,
Latin letters that probably need italics, badly formatted ``\\pm``
uncertainties, and phrases from a correction dictionary. All findings are
advisory; nothing is rewritten.

Usage::

    from report_lint import create_rule

    handlers = create_rule(host_context, {"allows": ["\\\\url"]})
    handlers["Document"](document_node)
    for node in text_nodes:
        handlers["Str"](node)
"""

from report_lint.config import ReportLintConfig
from report_lint.core import Diagnostic, Hyperparameters, analyze_document, analyze_segment
from report_lint.dictionary import DEFAULT_DICTIONARY, DictionaryEntry, compile_dictionary, load_dictionary
from report_lint.plugin import create_rule
from report_lint.rule import ReportRule, RuleContext

__all__ = [
    "ReportLintConfig",
    "Diagnostic",
    "Hyperparameters",
    "analyze_document",
    "analyze_segment",
    "DEFAULT_DICTIONARY",
    "DictionaryEntry",
    "compile_dictionary",
    "load_dictionary",
    "create_rule",
    "ReportRule",
    "RuleContext",
]

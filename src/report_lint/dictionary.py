"""Incorrect-to-correct phrase table for the dictionary check."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Union

from pydantic import BaseModel, TypeAdapter

logger = logging.getLogger(__name__)


class DictionaryPair(BaseModel):
    """Raw table row as it appears in a dictionary file."""

    incorrect: str
    correct: str


@dataclass(frozen=True)
class DictionaryEntry:
    incorrect: str
    correct: str
    pattern: re.Pattern[str]


_PairLike = Union[DictionaryPair, Mapping[str, str], tuple[str, str]]

_PAIRS_ADAPTER = TypeAdapter(list[DictionaryPair])

# Common kana-for-kanji slips and colloquialisms in lab reports.
_BUILTIN_PAIRS: list[tuple[str, str]] = [
    ("しょうかい", "紹介"),
    ("じっけん", "実験"),
    ("そくてい", "測定"),
    ("けっか", "結果"),
    ("こうさつ", "考察"),
    ("ごさ", "誤差"),
    ("すうち", "数値"),
    ("かんさつ", "観察"),
    ("けいさん", "計算"),
    ("みたいな", "のような"),
    ("なので", "であるため"),
    ("じゃない", "ではない"),
    ("いっぱい", "多く"),
    ("ちょっと", "少し"),
    ("すごく", "非常に"),
    ("とても", "非常に"),
    ("だいたい", "おおよそ"),
    ("思います", "考えられる"),
    ("重さ", "質量"),
    ("電気の流れ", "電流"),
    ("グラフ[1-9１-９]", "図"),
    ("表を見ると", "表より"),
    ("有効桁数", "有効数字"),
]


def _as_pair(item: _PairLike) -> DictionaryPair:
    if isinstance(item, DictionaryPair):
        return item
    if isinstance(item, tuple):
        incorrect, correct = item
        return DictionaryPair(incorrect=incorrect, correct=correct)
    return DictionaryPair.model_validate(item)


def compile_dictionary(pairs: Iterable[_PairLike]) -> tuple[DictionaryEntry, ...]:
    """Compile table rows into reusable matchers, preserving order.

    Raises:
        re.error: if any ``incorrect`` pattern is malformed. Nothing is returned
            for the rows before it.
    """
    entries = []
    for item in pairs:
        pair = _as_pair(item)
        entries.append(DictionaryEntry(pair.incorrect, pair.correct, re.compile(pair.incorrect)))
    return tuple(entries)


def load_dictionary(path: Path | str) -> tuple[DictionaryEntry, ...]:
    """Load a JSON array of ``{"incorrect": ..., "correct": ...}`` objects."""
    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    entries = compile_dictionary(_PAIRS_ADAPTER.validate_python(raw))
    logger.info(f"Loaded {len(entries)} dictionary entries from {path}")
    return entries


DEFAULT_DICTIONARY = compile_dictionary(_BUILTIN_PAIRS)

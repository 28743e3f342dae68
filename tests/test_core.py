import logging

from report_lint.core import Hyperparameters, analyze_document, analyze_segment
from report_lint.dictionary import compile_dictionary


REPORT_TEXT = (
    "\\section{結果}\n"
    "\\caption{温度と抵抗の関係}\n"
    "抵抗 $R$ は温度 \\(T\\) とともに増加した。\n"
    "\\caption{電圧の時間変化}\n"
    "\\caption{温度と抵抗の関係}\n"
    "比例定数 \\(k\\) を求めた。\n"
    "\\caption{温度と抵抗の関係}\n"
)

NO_DICTIONARY = ()


def _rules(diagnostics):
    return [d.rule for d in diagnostics]


class TestDuplicateCaptions:
    def test_reports_every_repeat_after_the_first(self):
        result = [d for d in analyze_document(REPORT_TEXT) if d.rule == "duplicate_caption"]
        caption = "\\caption{温度と抵抗の関係}"
        first = REPORT_TEXT.index(caption)
        second = REPORT_TEXT.index(caption, first + 1)
        third = REPORT_TEXT.index(caption, second + 1)
        assert [d.range for d in result] == [
            (second, second + len(caption)),
            (third, third + len(caption)),
        ]
        assert all(d.message == '重複したキャプション: "温度と抵抗の関係"' for d in result)

    def test_single_caption_is_clean(self):
        assert analyze_document("\\caption{図1}\\caption{図2}") == []

    def test_comparison_is_case_sensitive(self):
        assert analyze_document("\\caption{Setup}\\caption{setup}") == []

    def test_caption_stops_at_first_closing_brace(self):
        text = "\\caption{a}b}\\caption{a}c}"
        result = analyze_document(text)
        assert _rules(result) == ["duplicate_caption"]
        assert result[0].range == (13, 24)


class TestMixedMathDelimiters:
    def test_minority_dollar_style_is_flagged(self):
        result = [d for d in analyze_document(REPORT_TEXT) if d.rule == "mixed_math_delimiter"]
        start = REPORT_TEXT.index("$R$")
        assert [d.range for d in result] == [(start, start + 3)]
        assert result[0].message == "\\(...\\) と $...$ が混在しています。(2回 / 1回)"

    def test_minority_paren_style_is_flagged(self):
        text = "$a$ と $b$ と \\(c\\)"
        result = analyze_document(text)
        start = text.index("\\(c\\)")
        assert [d.range for d in result] == [(start, start + 5)]
        assert result[0].message == "\\(...\\) と $...$ が混在しています。(1回 / 2回)"

    def test_tie_flags_dollar_style(self):
        text = "$a$ と \\(b\\)"
        result = analyze_document(text)
        assert [d.range for d in result] == [(0, 3)]

    def test_single_style_is_clean(self):
        assert analyze_document("$a$ と $b$") == []
        assert analyze_document("\\(a\\) と \\(b\\)") == []


class TestEmptyBraces:
    def test_each_occurrence_reported(self):
        result = analyze_segment("\\textbf{}と{}{}", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["empty_brace"] * 3
        assert [d.range for d in result] == [(7, 9), (10, 12), (12, 14)]
        assert result[0].message == "空欄になっています。"

    def test_allow_list_suppresses_segment(self):
        assert analyze_segment("Fig{}", allows=["Fig"]) == []
        assert [d.range for d in analyze_segment("Fig{}")] == [(3, 5)]


class TestItalicVariables:
    def test_letter_between_kana(self):
        result = analyze_segment("長さlを測定した", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["italic_variable"]
        assert result[0].range == (2, 3)
        assert result[0].message == "斜体にしていない可能性が高い文字: l"

    def test_refined_neighbours_include_spaces_and_punctuation(self):
        text = "値 a を求め、bと比べた"
        refined = analyze_segment(text, dictionary=NO_DICTIONARY, hyperparameters=Hyperparameters(italic_include_punctuation=True))
        assert [d.range for d in refined] == [(2, 3), (8, 9)]

        assert analyze_segment(text, dictionary=NO_DICTIONARY) == []

    def test_english_sentence_is_clean_by_default(self):
        assert analyze_segment("This is a pen.", dictionary=NO_DICTIONARY) == []

    def test_windows_do_not_overlap(self):
        result = analyze_segment("とaとbと", dictionary=NO_DICTIONARY)
        assert [d.range for d in result] == [(1, 2)]

    def test_words_are_not_flagged(self):
        assert analyze_segment("これはLaTeXの文書", dictionary=NO_DICTIONARY) == []


class TestUncertainty:
    def test_decimal_places_mismatch(self):
        text = "1.23 \\pm 4.5"
        result = analyze_segment(text, dictionary=NO_DICTIONARY)
        assert _rules(result) == ["uncertainty_decimal_places"]
        assert result[0].range == (0, len(text))

    def test_leading_zeros_are_not_significant(self):
        result = analyze_segment("0 \\pm 0.001", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["uncertainty_decimal_places"]

    def test_aligned_expression_is_clean(self):
        assert analyze_segment("0.0012 \\pm 0.0034", dictionary=NO_DICTIONARY) == []
        assert analyze_segment("3.0 \\mp 0.1", dictionary=NO_DICTIONARY) == []

    def test_too_many_significant_figures(self):
        result = analyze_segment("1.234 \\pm 0.123", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["uncertainty_significant_figures"]
        assert "(3桁)" in result[0].message

        result = analyze_segment("1.234 \\pm 1.234", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["uncertainty_significant_figures"]

    def test_large_integers_suggest_exponent_notation(self):
        result = analyze_segment("123 \\pm 456", dictionary=NO_DICTIONARY)
        assert _rules(result) == ["uncertainty_exponent_notation"]

    def test_all_checks_fire_together(self):
        text = "1234.5\\pm567.891"
        result = analyze_segment(text, dictionary=NO_DICTIONARY)
        assert _rules(result) == [
            "uncertainty_decimal_places",
            "uncertainty_significant_figures",
            "uncertainty_exponent_notation",
        ]
        assert {d.range for d in result} == {(0, len(text))}

    def test_custom_thresholds(self):
        hp = Hyperparameters(max_uncertainty_significant_figures=3, max_integer_digits=3)
        assert analyze_segment("1.234 \\pm 0.123", dictionary=NO_DICTIONARY, hyperparameters=hp) == []
        assert analyze_segment("123 \\pm 456", dictionary=NO_DICTIONARY, hyperparameters=hp) == []

    def test_only_ascii_digits_are_checked(self):
        assert analyze_segment("１.２３ \\pm ４", dictionary=NO_DICTIONARY) == []
        assert analyze_segment("١.٢٣ \\pm ٤", dictionary=NO_DICTIONARY) == []


class TestDictionary:
    def test_every_occurrence_reported(self):
        text = "しょうかいとしょうかい"
        result = analyze_segment(text)
        assert _rules(result) == ["dictionary", "dictionary"]
        assert [d.range for d in result] == [(0, 5), (6, 11)]
        assert {d.message for d in result} == {'"しょうかい" -?> "紹介"'}

    def test_entries_run_in_declared_order(self):
        dictionary = compile_dictionary([("B", "b"), ("A", "a")])
        result = analyze_segment("A B", dictionary=dictionary)
        assert [d.message for d in result] == ['"B" -?> "b"', '"A" -?> "a"']

    def test_segment_checks_run_in_order(self):
        text = "{}長さlは1.2 \\pm 0.35でしょうかい"
        result = analyze_segment(text)
        assert _rules(result) == [
            "empty_brace",
            "italic_variable",
            "uncertainty_decimal_places",
            "dictionary",
        ]


class TestRepeatability:
    def test_repeated_runs_are_identical(self):
        first = [d.to_payload() for d in analyze_document(REPORT_TEXT)]
        second = [d.to_payload() for d in analyze_document(REPORT_TEXT)]
        assert first == second

    def test_payload_shape(self):
        payload = analyze_segment("{}")[0].to_payload()
        assert payload == {"type": "Diagnostic", "rule": "empty_brace", "message": "空欄になっています。", "range": [0, 2]}


class TestLogging:
    def test_segment_pass_logs_diagnostic_count(self, caplog):
        caplog.set_level(logging.DEBUG, logger="report_lint.core")
        analyze_segment("{}{}", dictionary=NO_DICTIONARY)
        assert "segment pass: 4 chars, 2 diagnostics" in caplog.text

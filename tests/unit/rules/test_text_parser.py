"""Unit tests for the plain text catalog parser."""

import pytest
from structlog.testing import capture_logs
from hypothesis import given, strategies as st

from phonorules.domain.errors import (
    CatalogFormatError,
    CatalogNotFoundError,
    ConfigurationError,
    IncludeCycleError,
    IncludeDepthError,
)
from phonorules.domain.rules import Rule
from phonorules.domain.rules.engine import DiagnosticKind, RuleTextParser, strip_quotes
from tests.fakes import FakeCatalogSource


class TestStripQuotes:
    """At most one leading and one trailing double quote are removed."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('"abc"', "abc"),
            ('"abc', "abc"),
            ('abc"', "abc"),
            ("abc", "abc"),
            ('""', ""),
            ('"', ""),
            ('""abc""', '"abc"'),
            ('"a"b"', 'a"b'),
        ],
    )
    def test_strip_quotes(self, raw: str, expected: str):
        assert strip_quotes(raw) == expected

    @given(st.text(alphabet=st.characters(blacklist_characters='"'), max_size=20))
    def test_interior_untouched(self, body: str):
        """Wrapping any quote-free body in quotes round-trips to the body."""
        assert strip_quotes(f'"{body}"') == body


class TestRuleLines:
    """Four-field rule lines."""

    def test_parses_quoted_fields_in_order(self, parser: RuleTextParser):
        rules = parser.parse_text('"sch" "^" "[ei]" "S"')

        assert rules == (Rule("sch", "^", "[ei]", "S"),)

    def test_unquoted_fields(self, parser: RuleTextParser):
        rules = parser.parse_text("a b c d")

        assert rules == (Rule("a", "b", "c", "d"),)

    def test_empty_quoted_fields(self, parser: RuleTextParser):
        rules = parser.parse_text('"a" "" "" "o"')

        assert rules[0].left_context == ""
        assert rules[0].right_context == ""

    def test_parsed_rules_have_no_language_restriction(self, parser: RuleTextParser):
        rule = parser.parse_text('"a" "" "" "o"')[0]

        assert rule.languages == frozenset()
        assert rule.logical == ""

    def test_fields_split_on_any_whitespace(self, parser: RuleTextParser):
        rules = parser.parse_text('  "a"\t"b"   "c" \t "d"  ')

        assert rules == (Rule("a", "b", "c", "d"),)

    @pytest.mark.parametrize("char", ["\xa0", "\u2003", "\x1c", "\x1e"])
    def test_non_ascii_whitespace_stays_inside_fields(self, parser: RuleTextParser, char: str):
        rules = parser.parse_text(f'"a{char}b" "" "" "x{char}y"')

        assert rules == (Rule(f"a{char}b", "", "", f"x{char}y"),)
        assert parser.diagnostics == ()

    @pytest.mark.parametrize("char", ["\f", "\x0b"])
    def test_ascii_control_whitespace_separates_fields(self, parser: RuleTextParser, char: str):
        rules = parser.parse_text(f'"a"{char}""{char}""{char}"x"\n"b" "" "" "y"')

        assert [rule.phoneme for rule in rules] == ["x", "y"]
        assert parser.stats.lines_read == 2

    @pytest.mark.parametrize("terminator", ["\n", "\r\n", "\r", "\u2028", "\u2029", "\x85"])
    def test_line_terminators(self, parser: RuleTextParser, terminator: str):
        rules = parser.parse_text(terminator.join(['"a" "" "" "1"', '"b"', '"c" "" "" "3"']) + terminator)

        assert [rule.phoneme for rule in rules] == ["1", "3"]
        assert parser.diagnostics[0].line_number == 2
        assert parser.stats.lines_read == 3

    def test_trims_control_characters_at_line_ends(self, parser: RuleTextParser):
        rules = parser.parse_text('\x1c"a" "" "" "o"\x1f')

        assert rules == (Rule("a", "", "", "o"),)

    def test_preserves_textual_order(self, parser: RuleTextParser):
        rules = parser.parse_text('"a" "" "" "1"\n"b" "" "" "2"\n"c" "" "" "3"')

        assert [rule.phoneme for rule in rules] == ["1", "2", "3"]

    def test_invalid_context_expression_is_fatal(self, parser: RuleTextParser):
        with pytest.raises(CatalogFormatError, match="line 2"):
            parser.parse_text('"a" "" "" "1"\n"b" "[" "" "2"')


class TestComments:
    """Single-line comments, multi-line comments and blank lines."""

    def test_end_of_line_comment_truncates(self, parser: RuleTextParser):
        rules = parser.parse_text('"a" "" "" "o" // becomes o')

        assert rules == (Rule("a", "", "", "o"),)

    def test_multiline_comment_skips_until_terminator(self, parser: RuleTextParser):
        text = "\n".join([
            '"a" "" "" "1"',
            "/* start",
            '"b" "" "" "2"',
            "end */",
            '"c" "" "" "3"',
        ])

        assert [rule.pattern for rule in parser.parse_text(text)] == ["a", "c"]

    def test_opening_line_does_not_close_comment(self, parser: RuleTextParser):
        """Only lines after the opener are checked for the terminator."""
        text = "\n".join([
            "/* one line comment */",
            '"b" "" "" "2"',
            "*/",
            '"c" "" "" "3"',
        ])

        assert [rule.pattern for rule in parser.parse_text(text)] == ["c"]

    def test_multiline_opener_must_start_line(self, parser: RuleTextParser):
        """An indented /* is not a comment opener and becomes a malformed line."""
        rules = parser.parse_text('  /* not comment\n"a" "" "" "1"')

        assert len(rules) == 1
        assert parser.diagnostics[0].kind is DiagnosticKind.MALFORMED_RULE

    def test_counts_comment_lines(self, parser: RuleTextParser):
        parser.parse_text("// one\n/*\ntwo\n*/\n\n")

        assert parser.stats.comment_lines == 4
        assert parser.stats.lines_read == 5

    @given(
        st.lists(
            st.sampled_from([
                "",
                "   ",
                "// comment",
                '   // "a" "b" "c" "d"',
                '/* block\n"a" "" "" "x"\nstill */',
                "/*\n*/",
            ]),
            max_size=12,
        )
    )
    def test_comment_only_catalog_yields_no_rules(self, chunks):
        parser = RuleTextParser(FakeCatalogSource())

        assert parser.parse_text("\n".join(chunks)) == ()


class TestMalformedLines:
    """Malformed lines are diagnosed and skipped, never fatal."""

    VALID = ['"a" "" "" "1"', '"b" "" "" "2"', '"c" "" "" "3"']

    @pytest.mark.parametrize("malformed", ['"x" "y"', '"x" "y" "z"', '"v" "w" "x" "y" "z"'])
    def test_malformed_rule_dropped(self, parser: RuleTextParser, malformed: str):
        text = "\n".join([self.VALID[0], malformed, *self.VALID[1:]])

        rules = parser.parse_text(text, name="catalog")

        assert len(rules) == len(self.VALID)
        assert len(parser.diagnostics) == 1
        diagnostic = parser.diagnostics[0]
        assert diagnostic.kind is DiagnosticKind.MALFORMED_RULE
        assert diagnostic.source == "catalog"
        assert diagnostic.line_number == 2
        assert diagnostic.raw_line == malformed

    def test_each_malformed_line_drops_one_rule(self, parser: RuleTextParser):
        text = "\n".join(['"x"', self.VALID[0], "a b c", self.VALID[1], "1 2 3 4 5"])

        assert len(parser.parse_text(text)) == 2
        assert len(parser.diagnostics) == 3

    def test_include_with_embedded_whitespace(self, parser: RuleTextParser, catalog_source):
        rules = parser.parse_text("#include two names\n" + self.VALID[0])

        assert len(rules) == 1
        assert parser.diagnostics[0].kind is DiagnosticKind.MALFORMED_INCLUDE
        assert catalog_source.opened == []

    def test_include_without_name(self, parser: RuleTextParser):
        parser.parse_text("#include")

        assert parser.diagnostics[0].kind is DiagnosticKind.MALFORMED_INCLUDE

    def test_diagnostics_logged_as_warnings(self, catalog_source):
        with capture_logs() as logs:
            RuleTextParser(catalog_source).parse_text('"a" "b"', name="catalog")

        warnings = [log for log in logs if log["event"] == "rule_catalog_malformed_line"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["catalog"] == "catalog"
        assert warnings[0]["line_number"] == 1

    def test_diagnostics_reset_between_loads(self, parser: RuleTextParser):
        parser.parse_text('"a" "b"')
        parser.parse_text('"a" "" "" "o"')

        assert parser.diagnostics == ()


class TestIncludes:
    """Include directives splice catalogs in place."""

    def test_include_splices_in_order(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("b", '"b1" "" "" "1"\n"b2" "" "" "2"')
        catalog_source.add("a", '"a1" "" "" "1"\n#include b\n"a2" "" "" "2"')

        rules = parser.load("a")

        assert [rule.pattern for rule in rules] == ["a1", "b1", "b2", "a2"]
        assert parser.stats.includes_resolved == 1
        assert parser.stats.catalogs_read == 2

    def test_include_with_trailing_comment(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("common", '"c" "" "" "k"')

        rules = parser.parse_text("#include common // shared rules")

        assert rules == (Rule("c", "", "", "k"),)

    def test_nested_includes(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("c", '"c" "" "" "3"')
        catalog_source.add("b", '"b" "" "" "2"\n#include c')
        catalog_source.add("a", '#include b\n"a" "" "" "1"')

        assert [rule.pattern for rule in parser.load("a")] == ["b", "c", "a"]

    def test_same_catalog_included_twice(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        """Repeated, non-circular includes are allowed."""
        catalog_source.add("b", '"b" "" "" "2"')
        catalog_source.add("a", "#include b\n#include b")

        assert len(parser.load("a")) == 2

    def test_missing_include_is_fatal(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("a", "#include nowhere")

        with pytest.raises(CatalogNotFoundError, match="nowhere"):
            parser.load("a")

    def test_missing_catalog_is_fatal(self, parser: RuleTextParser):
        with pytest.raises(ConfigurationError):
            parser.load("absent")

    def test_self_include_is_cycle(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("a", "#include a")

        with pytest.raises(IncludeCycleError) as exc_info:
            parser.load("a")

        assert exc_info.value.chain == ("a", "a")

    def test_transitive_cycle(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("a", "#include b")
        catalog_source.add("b", "#include c")
        catalog_source.add("c", "#include a")

        with pytest.raises(IncludeCycleError, match="a -> b -> c -> a"):
            parser.load("a")

    def test_depth_limit(self, catalog_source: FakeCatalogSource):
        for level in range(5):
            catalog_source.add(f"level{level}", f"#include level{level + 1}")
        catalog_source.add("level5", '"x" "" "" "y"')

        assert len(RuleTextParser(catalog_source, max_include_depth=6).load("level0")) == 1
        with pytest.raises(IncludeDepthError):
            RuleTextParser(catalog_source, max_include_depth=5).load("level0")

    def test_rejects_non_positive_depth(self, catalog_source: FakeCatalogSource):
        with pytest.raises(ValueError):
            RuleTextParser(catalog_source, max_include_depth=0)

    def test_diagnostics_from_included_catalog(self, parser: RuleTextParser, catalog_source: FakeCatalogSource):
        catalog_source.add("b", '"ok" "" "" "1"\n"bad"')
        catalog_source.add("a", "#include b")

        parser.load("a")

        assert parser.diagnostics[0].source == "b"
        assert parser.diagnostics[0].line_number == 2

"""Unit tests for engines.sql.parser (placeholder scanning)."""

from oraquery.engines.sql.parser import (
    has_placeholder,
    parse_parameters,
    replace_placeholder,
)


class TestHasPlaceholder:
    def test_exact_token(self):
        assert has_placeholder("SELECT * FROM t WHERE a = :cat", "cat")

    def test_prefix_of_longer_token_is_not_a_match(self):
        assert not has_placeholder("SELECT * FROM t WHERE a = :category", "cat")

    def test_followed_by_punctuation(self):
        assert has_placeholder("WHERE a IN (:cat)", "cat")
        assert has_placeholder("WHERE a = :cat;", "cat")

    def test_colon_after_identifier_is_not_a_placeholder(self):
        # e.g. time format masks
        assert not has_placeholder("SELECT x:cat FROM t", "cat")

    def test_inside_string_literal_ignored(self):
        assert not has_placeholder("SELECT ':cat' FROM dual", "cat")

    def test_inside_escaped_string_literal_ignored(self):
        assert not has_placeholder("SELECT 'it''s :cat' FROM dual", "cat")

    def test_inside_q_quote_ignored(self):
        assert not has_placeholder("SELECT q'[it's :cat]' FROM dual", "cat")
        assert not has_placeholder("SELECT nq'{:cat}' FROM dual", "cat")

    def test_inside_comments_ignored(self):
        assert not has_placeholder("SELECT 1 FROM dual -- :cat\n", "cat")
        assert not has_placeholder("SELECT /* :cat */ 1 FROM dual", "cat")

    def test_inside_quoted_identifier_ignored(self):
        assert not has_placeholder('SELECT ":cat" FROM t', "cat")

    def test_code_after_literal_still_scanned(self):
        assert has_placeholder("SELECT 'x' FROM t WHERE a = :cat", "cat")

    def test_case_insensitive(self):
        assert has_placeholder("WHERE a = :CAT", "cat")
        assert has_placeholder("WHERE a = :Cat", "CAT")
        assert not has_placeholder("WHERE a = :CATEGORY", "cat")


class TestReplacePlaceholder:
    def test_replaces_case_variants(self):
        sql = "WHERE a IN :IDS OR b IN :ids"
        assert replace_placeholder(sql, "ids", "(:x)") == "WHERE a IN (:x) OR b IN (:x)"

    def test_replaces_every_occurrence(self):
        sql = "SELECT * FROM t WHERE a IN (:ids) OR b IN (:ids)"
        assert (
            replace_placeholder(sql, "ids", "(:x,:y)")
            == "SELECT * FROM t WHERE a IN ((:x,:y)) OR b IN ((:x,:y))"
        )

    def test_does_not_corrupt_longer_token(self):
        sql = "WHERE a = :cat AND b = :category"
        assert replace_placeholder(sql, "cat", "(:c1)") == "WHERE a = (:c1) AND b = :category"

    def test_literal_untouched(self):
        sql = "SELECT ':ids' AS label FROM t WHERE id IN :ids"
        assert replace_placeholder(sql, "ids", "(:a)") == (
            "SELECT ':ids' AS label FROM t WHERE id IN (:a)"
        )

    def test_replacement_taken_literally(self):
        assert replace_placeholder("a = :p", "p", r"\1") == r"a = \1"

    def test_absorb_parens_reuses_wrapping_parentheses(self):
        sql = "WHERE a IN ( :ids ) AND b IN :ids"
        assert replace_placeholder(sql, "ids", "(:x,:y)", absorb_parens=True) == (
            "WHERE a IN (:x,:y) AND b IN (:x,:y)"
        )

    def test_absorb_parens_leaves_other_lists_alone(self):
        sql = "WHERE a IN (:ids, 5)"
        assert replace_placeholder(sql, "ids", "(:x)", absorb_parens=True) == (
            "WHERE a IN ((:x), 5)"
        )

    def test_no_match_returns_input(self):
        assert replace_placeholder("SELECT 1 FROM dual", "p", "(:a)") == "SELECT 1 FROM dual"


class TestParseParameters:
    def test_order_of_first_appearance(self):
        sql = "SELECT * FROM t WHERE b = :beta AND a = :alpha AND c = :beta"
        assert parse_parameters(sql) == ["beta", "alpha"]

    def test_skips_literals_and_comments(self):
        sql = "SELECT ':x' /* :y */ FROM t WHERE d = TO_DATE(:d, 'HH24:MI:SS') -- :z"
        assert parse_parameters(sql) == ["d"]

    def test_case_variants_listed_once(self):
        assert parse_parameters("WHERE a = :Id OR b = :ID OR c = :x") == ["Id", "x"]

    def test_ignores_plsql_assignment(self):
        assert parse_parameters("BEGIN :out := 1; END;") == ["out"]

    def test_empty(self):
        assert parse_parameters("") == []

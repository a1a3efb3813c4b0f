from pytest import raises

from rscan import IterableSource, UnmatchedInputError, Token
from rscan.__main__ import main
from rscan.sql import sql_rules, extract_aliases, SelectListError

from .utils import splits, pairs


QUERY = 'select a as "b", c from t'


class TestSqlRules(object):
    def test_end_to_end(self):
        assert pairs(sql_rules().scan(QUERY)) == [
            ("KEYWORD", "select"), ("TEXT", "a"), ("KEYWORD", "as"), ("TEXT", "b"),
            ("COMMA", ","), ("TEXT", "c"), ("KEYWORD", "from"), ("TEXT", "t"),
        ]

    def test_fragment_independence(self):
        expected = pairs(sql_rules().scan(QUERY))
        for fragments in splits(QUERY):
            assert pairs(sql_rules().scan(IterableSource(fragments))) == expected, fragments

    def test_keywords_ignore_case(self):
        tokens = list(sql_rules().scan("SELECT x AS y FROM z"))
        assert tokens[0] == Token("KEYWORD", "select")
        assert tokens[2] == Token("KEYWORD", "as")

    def test_keyword_prefix_is_text(self):
        assert pairs(sql_rules().scan("ascending")) == [("TEXT", "ascending")]

    def test_paren_deltas_and_ops(self):
        assert pairs(sql_rules().scan("(a+'q')*2")) == [
            ("PAREN_OPEN", 1), ("TEXT", "a"), ("OP", "+"), ("TEXT", "q"),
            ("PAREN_CLOSE", -1), ("OP", "*"), ("TEXT", "2"),
        ]

    def test_unmatched_character(self):
        scanner = sql_rules().scan("select @x")
        assert scanner.next() == Token("KEYWORD", "select")
        with raises(UnmatchedInputError) as excinfo:
            scanner.next()
        assert excinfo.value.source_pos.idx == 7
        assert excinfo.value.snippet == "@x"


class TestExtractAliases(object):
    def test_explicit_and_implicit(self):
        assert extract_aliases(QUERY) == [("a", "b"), ("c", "c")]

    def test_expressions(self):
        sql = "select count(x) n, a + b, max(y) as top, 'lit' from t"
        assert extract_aliases(sql) == [
            ("count(x)", "n"), ("a + b", None), ("max(y)", "top"), ("lit", "lit"),
        ]

    def test_nested_commas(self):
        assert extract_aliases("select f(a, b) as g from t") == [("f(a, b)", "g")]

    def test_missing_from(self):
        with raises(SelectListError):
            extract_aliases("select a, b")

    def test_not_select(self):
        with raises(SelectListError):
            extract_aliases("from t")

    def test_alias_must_be_text(self):
        with raises(SelectListError):
            extract_aliases("select a as , b from t")

    def test_unbalanced(self):
        with raises(SelectListError):
            extract_aliases("select a) from t")


class TestCommandLine(object):
    def test_tokens(self, tmp_path, capsys):
        path = tmp_path / "q.sql"
        path.write_text(QUERY, encoding="utf-8")
        assert main([str(path)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[:3] == ["KEYWORD:select", "TEXT:a", "KEYWORD:as"]
        assert len(out) == 8

    def test_aliases(self, tmp_path, capsys):
        path = tmp_path / "q.sql"
        path.write_text("select a + 1, b x from t", encoding="utf-8")
        assert main(["--aliases", str(path)]) == 0
        assert capsys.readouterr().out.splitlines() == ["-\ta + 1", "x\tb"]

    def test_error_exit_status(self, tmp_path, capsys):
        path = tmp_path / "q.sql"
        path.write_text("select # from t", encoding="utf-8")
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert "rscan: error: no rule matches" in captured.err

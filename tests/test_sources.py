import io

from pytest import raises

from rscan import (InputSource, StringSource, IterableSource, FileSource, as_source,
                   RuleSet, Scanner)
from rscan.transforms import skip

from .utils import pairs


class TestSources(object):
    def test_string_source_chunks(self):
        source = StringSource("abcdefg", chunk_size=3)
        assert list(source) == ["abc", "def", "g"]
        assert source.read() is None

    def test_string_source_empty(self):
        assert StringSource("").read() is None
        with raises(ValueError):
            StringSource("abc", chunk_size=0)

    def test_iterable_source(self):
        source = IterableSource(x for x in ["a", "", "b"])
        assert source.read() == "a"
        assert source.read() == ""
        assert source.read() == "b"
        assert source.read() is None
        assert source.read() is None

    def test_iterable_source_type_check(self):
        source = IterableSource([b"bytes"])
        with raises(TypeError):
            source.read()

    def test_file_source(self):
        f = io.StringIO("hello world")
        source = FileSource(f, chunk_size=4)
        assert list(source) == ["hell", "o wo", "rld"]
        assert not f.closed

    def test_file_source_binary(self):
        with raises(TypeError):
            FileSource(io.BytesIO(b"abc")).read()

    def test_as_source(self):
        assert isinstance(as_source("abc"), StringSource)
        assert isinstance(as_source(io.StringIO("abc")), FileSource)
        assert isinstance(as_source(["a", "b"]), IterableSource)
        source = StringSource("x")
        assert as_source(source) is source
        with raises(TypeError):
            as_source(42)

    def test_base_read(self):
        with raises(NotImplementedError):
            InputSource().read()


class TestScannerSources(object):
    RULES = RuleSet([("WORD", r"\w+"), ("SPACE", r"\s+", skip)])

    def test_file(self):
        scanner = Scanner(self.RULES, FileSource(io.StringIO("alpha beta\ngamma"), chunk_size=2))
        assert pairs(scanner) == [("WORD", "alpha"), ("WORD", "beta"), ("WORD", "gamma")]

    def test_generator(self):
        def lines():
            yield "one two"
            yield " three"

        assert [t.value for t in self.RULES.scan(lines())] == ["one", "two", "three"]

    def test_infinite_source(self):
        def forever():
            while True:
                yield "ab "

        scanner = self.RULES.scan(forever())
        assert [scanner.next().value for _ in range(5)] == ["ab"] * 5

    def test_non_string_fragment(self):
        class Broken(InputSource):
            def read(self):
                return 1

        with raises(TypeError):
            self.RULES.scan(Broken()).next()

    def test_bad_fragment_is_fatal(self):
        scanner = RuleSet([("WORD", r"\w+")]).scan(IterableSource(["ab", b"x", "cd"]))
        with raises(TypeError) as first:
            scanner.next()
        with raises(TypeError) as second:
            scanner.next()
        assert second.value is first.value
        with raises(TypeError):
            scanner.peek()

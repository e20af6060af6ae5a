"""Tests for hush.http.url — immutable Url and QueryParameter."""

import pytest

from hush.http.url import QueryParameter, Url


def _params(*pairs: str) -> tuple[QueryParameter, ...]:
    return tuple(QueryParameter(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2))


class TestParse:
    def test_segments_and_query(self) -> None:
        url = Url.parse("foo/bar/baz?a=4&b=5")
        assert url.segments == ("foo", "bar", "baz")
        assert url.query_parameters == _params("a", "4", "b", "5")

    def test_empty_segment_and_bare_names(self) -> None:
        url = Url.parse("foo/bar//baz?=4&6")
        assert url.segments == ("foo", "bar", "", "baz")
        assert url.query_parameters == _params("", "4", "6", "")

    def test_double_leading_slash(self) -> None:
        url = Url.parse("//foo/bar/")
        assert url.segments == ("", "", "foo", "bar", "")
        assert url.query_parameters == ()

    def test_trailing_slashes(self) -> None:
        url = Url.parse("/foo/bar//")
        assert url.segments == ("", "foo", "bar", "", "")

    def test_percent_decoding(self) -> None:
        url = Url.parse("foo/b%3Dr/b%26z/x%3F?a=b&x%3F%264=y%3Dz")
        assert url.segments == ("foo", "b=r", "b&z", "x?")
        assert url.query_parameters == _params("a", "b", "x?&4", "y=z")

    def test_empty(self) -> None:
        url = Url.parse("")
        assert url.segments == ()
        assert url.query_parameters == ()

    def test_query_only(self) -> None:
        url = Url.parse("?a=b")
        assert url.segments == ()
        assert url.query_parameters == _params("a", "b")

    def test_root(self) -> None:
        assert Url.parse("/").segments == ("", "")
        assert Url.parse("/?a=b").query_parameters == _params("a", "b")

    def test_fragment_dropped(self) -> None:
        url = Url.parse("a/b?x=1#section")
        assert url.segments == ("a", "b")
        assert url.query_parameters == _params("x", "1")

    def test_plus_in_query_is_space(self) -> None:
        url = Url.parse("a?q=hello+world")
        assert url.query_value("q") == "hello world"

    def test_full_url(self) -> None:
        url = Url.parse("https://example.com:8443/a/b?x=1")
        assert url.protocol == "https"
        assert url.host == "example.com"
        assert url.port == 8443
        assert url.segments == ("a", "b")
        assert url.is_absolute is True

    def test_full_url_without_path(self) -> None:
        url = Url.parse("http://example.com")
        assert url.host == "example.com"
        assert url.port is None
        assert url.segments == ()

    def test_bad_port_raises(self) -> None:
        with pytest.raises(ValueError):
            Url.parse("http://example.com:abc/a")


class TestRender:
    def test_escaping(self) -> None:
        url = Url(
            ("foo", "b=r", "b&z", "x?"),
            _params("a", "b", "x?&4", "y=z"),
        )
        assert str(url) == "foo/b=r/b&z/x%3F?a=b&x?%264=y%3Dz"

    @pytest.mark.parametrize("text", ["/absolute/url", "//absolute/url", "/", "a/b?x=1&y"])
    def test_round_trip(self, text: str) -> None:
        assert str(Url.parse(text)) == text

    def test_slash_in_segment_is_escaped(self) -> None:
        url = Url(("a/b", "c"))
        assert str(url) == "a%2Fb/c"
        assert Url.parse(str(url)) == url

    def test_space_in_query(self) -> None:
        assert str(Url(("a",), _params("q", "x y"))) == "a?q=x+y"

    def test_full_url(self) -> None:
        url = Url(("a",), protocol="https", host="example.com", port=8443)
        assert str(url) == "https://example.com:8443/a"

    def test_path_property(self) -> None:
        assert Url.parse("a/b?x=1").path == "a/b"


class TestFlags:
    def test_relative_is_not_absolute(self) -> None:
        url = Url.parse("abc/efg")
        assert url.is_absolute is False
        assert url.is_context_absolute is False

    def test_context_absolute(self) -> None:
        assert Url.parse("/").is_context_absolute is True
        assert Url.parse("/abc/efg").is_context_absolute is True
        assert Url.parse("").is_context_absolute is False

    def test_full_url_is_absolute(self) -> None:
        url = Url.parse("https://example.com/abc")
        assert url.is_absolute is True
        assert url.is_context_absolute is False


class TestImmutability:
    def test_frozen(self) -> None:
        url = Url.parse("a/b")
        with pytest.raises(AttributeError):
            url.segments = ("c",)  # type: ignore[misc]

    def test_lists_become_tuples(self) -> None:
        url = Url(["a", "b"], [QueryParameter("x", "1")])
        assert url.segments == ("a", "b")
        assert isinstance(url.query_parameters, tuple)

    def test_equality(self) -> None:
        assert Url.parse("a/b?x=1") == Url(("a", "b"), _params("x", "1"))


class TestQueryHelpers:
    def test_query_parameter_first_match(self) -> None:
        url = Url.parse("a?x=1&x=2")
        assert url.query_parameter("x") == QueryParameter("x", "1")
        assert url.query_parameter("missing") is None

    def test_query_value_default(self) -> None:
        url = Url.parse("a?x=1")
        assert url.query_value("x") == "1"
        assert url.query_value("missing") is None
        assert url.query_value("missing", "d") == "d"

    def test_with_query_parameter_replaces(self) -> None:
        url = Url.parse("a?x=1&y=2&x=3").with_query_parameter("x", "9")
        assert str(url) == "a?y=2&x=9"

    def test_without_query_parameter(self) -> None:
        url = Url.parse("a?x=1&y=2&x=3").without_query_parameter("x")
        assert str(url) == "a?y=2"

    def test_with_segments(self) -> None:
        url = Url.parse("a/b?x=1").with_segments(["c"])
        assert str(url) == "c?x=1"

    def test_bare_parameter_renders_name_only(self) -> None:
        assert str(QueryParameter("3-1.0-link")) == "3-1.0-link"


class TestResolve:
    def test_sibling(self) -> None:
        assert Url.parse("abc/efg").resolve("xx/yy") == Url.parse("abc/xx/yy")

    def test_dot_segments(self) -> None:
        assert Url.parse("abc/efg").resolve("./../xx/yy") == Url.parse("xx/yy")

    def test_excess_parent_kept_on_relative_base(self) -> None:
        assert Url.parse("abc/efg").resolve("../../../xx/yy") == Url.parse("../../xx/yy")

    def test_directory_base(self) -> None:
        assert Url.parse("abc/efg/").resolve("xx/yy") == Url.parse("abc/efg/xx/yy")

    def test_trailing_parent_is_directory(self) -> None:
        assert Url.parse("abc/efg/").resolve("..") == Url.parse("abc/")
        assert Url.parse("fff/abc/efg/xxx").resolve("..") == Url.parse("fff/abc/")
        assert Url.parse("fff/abc/efg/xxx").resolve("../..") == Url.parse("fff/")

    def test_climb_to_empty(self) -> None:
        assert Url.parse("abc/efg/").resolve("../..") == Url.parse("")

    def test_never_above_context_root(self) -> None:
        assert Url.parse("/a/b").resolve("../../../c") == Url.parse("/c")
        assert Url.parse("/a").resolve("..") == Url.parse("/")

    def test_takes_reference_query(self) -> None:
        assert Url.parse("a/b?x=1").resolve("c?y=2") == Url.parse("a/c?y=2")

    def test_query_only_reference(self) -> None:
        assert Url.parse("a/b?x=1").resolve("?y=2") == Url.parse("a/b?y=2")

    def test_context_absolute_reference_replaces_path(self) -> None:
        assert Url.parse("a/b").resolve("/c/d") == Url.parse("/c/d")

    def test_context_absolute_reference_on_full_base(self) -> None:
        base = Url.parse("https://example.com/a/b")
        assert base.resolve("/c") == Url.parse("https://example.com/c")

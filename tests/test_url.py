from urllib.parse import parse_qsl

from api_tag_client.request.url import (
    build_url,
    join_url,
    path_escape,
    substitute_path,
    to_query_string,
    unresolved_placeholders,
)


class TestJoinUrl:
    def test_both_slashes(self):
        assert join_url("http://testurl/root/", "/user") == "http://testurl/root/user"

    def test_no_slashes(self):
        assert join_url("http://testurl/root", "user") == "http://testurl/root/user"

    def test_mixed(self):
        assert join_url("http://testurl/root/", "user") == "http://testurl/root/user"
        assert join_url("http://testurl/root", "/user") == "http://testurl/root/user"

    def test_strips_at_most_one_slash(self):
        assert join_url("http://h//", "//x") == "http://h///x"


class TestSubstitutePath:
    def test_replaces_placeholder(self):
        assert substitute_path("http://h/user/<id>", {"id": "7"}) == "http://h/user/7"

    def test_escapes_value(self):
        assert substitute_path("/u/<name>", {"name": "a b"}) == "/u/a%20b"
        assert substitute_path("/u/<name>", {"name": "a/b"}) == "/u/a%2Fb"
        assert substitute_path("/u/<name>", {"name": "a?b#c"}) == "/u/a%3Fb%23c"

    def test_keeps_segment_safe_chars(self):
        assert path_escape("user@host:1") == "user@host:1"
        assert path_escape("a~b-c_d.e") == "a~b-c_d.e"

    def test_multiple_keys_any_order(self):
        url = "/orgs/<org>/repos/<repo>"
        assert substitute_path(url, {"org": "o", "repo": "r"}) == "/orgs/o/repos/r"
        assert substitute_path(url, {"repo": "r", "org": "o"}) == "/orgs/o/repos/r"

    def test_every_occurrence_replaced(self):
        assert substitute_path("/<id>/copy/<id>", {"id": "9"}) == "/9/copy/9"

    def test_unmatched_placeholder_left_verbatim(self):
        assert substitute_path("/user/<id>/<other>", {"id": "1"}) == "/user/1/<other>"

    def test_key_is_not_a_pattern(self):
        assert substitute_path("/x/<aXb>", {"a.b": "v"}) == "/x/<aXb>"
        assert substitute_path("/x/<a.b>", {"a.b": "v"}) == "/x/v"

    def test_value_with_backslash_is_literal(self):
        assert substitute_path("/x/<id>", {"id": "\\1"}) == "/x/%5C1"


class TestQueryString:
    def test_empty(self):
        assert to_query_string({}) == ""

    def test_escapes_keys_and_values(self):
        qs = to_query_string({"q": "a b&c", "sort by": "name"})
        assert set(qs.split("&")) == {"q=a+b%26c", "sort+by=name"}

    def test_decoded_pairs_match(self):
        queries = {"limit": "10", "offset": "5", "name": "é=x"}
        assert dict(parse_qsl(to_query_string(queries))) == queries


class TestBuildUrl:
    def test_no_query_no_question_mark(self):
        assert build_url("http://h/user/<id>", {"id": "7"}, {}) == "http://h/user/7"

    def test_appends_query(self):
        url = build_url("http://h/items", {}, {"limit": "10", "offset": "5"})
        base, qs = url.split("?")
        assert base == "http://h/items"
        assert sorted(qs.split("&")) == ["limit=10", "offset=5"]


class TestUnresolvedPlaceholders:
    def test_lists_names(self):
        assert unresolved_placeholders("/a/<x>/b/<y>") == ["x", "y"]

    def test_none(self):
        assert unresolved_placeholders("/a/b") == []

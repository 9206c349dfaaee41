"""Unit tests for request assembly (URL, headers, body rules)."""

from __future__ import annotations

from reqbuilder.assembler import assemble, build_headers, build_query_string
from reqbuilder.entries import CounterIds, KeyValueList
from reqbuilder.models import BuilderState, HttpMethod


def _state(
    method: HttpMethod = HttpMethod.GET,
    url: str = "https://api.example.com/items",
    params: list[tuple[str, str]] | None = None,
    headers: list[tuple[str, str]] | None = None,
    body: str = "",
) -> BuilderState:
    ids = CounterIds()
    return BuilderState(
        method=method,
        base_url=url,
        query_params=KeyValueList(params, id_factory=ids),
        headers=KeyValueList(headers if headers is not None else [("Content-Type", "application/json")], id_factory=ids),
        body_text=body,
    )


def test_url_with_single_query_param() -> None:
    req = assemble(_state(params=[("limit", "10")]))
    assert req.url == "https://api.example.com/items?limit=10"
    assert req.method == HttpMethod.GET
    assert req.headers == {"Content-Type": "application/json"}


def test_empty_key_params_are_dropped() -> None:
    req = assemble(_state(url="https://x.test/p", params=[("", "x"), ("a", "b")]))
    assert req.url == "https://x.test/p?a=b"


def test_no_params_leaves_url_untouched() -> None:
    assert assemble(_state(params=[])).url == "https://api.example.com/items"
    assert assemble(_state(params=[(" ", "v")])).url == "https://api.example.com/items"


def test_query_values_are_form_encoded() -> None:
    kv = KeyValueList([("q", "a b"), ("sym", "&=?"), ("utf", "é")])
    assert build_query_string(kv) == "q=a+b&sym=%26%3D%3F&utf=%C3%A9"


def test_duplicate_query_keys_keep_last_value_first_position() -> None:
    kv = KeyValueList([("a", "1"), ("b", "2"), ("a", "3")])
    assert build_query_string(kv) == "a=3&b=2"


def test_base_url_used_verbatim() -> None:
    assert assemble(_state(url="not a url", params=[("k", "v")])).url == "not a url?k=v"


def test_empty_key_headers_are_dropped() -> None:
    req = assemble(_state(headers=[("", "ignored"), ("X-Token", "abc")]))
    assert req.headers == {"X-Token": "abc"}


def test_header_names_trimmed() -> None:
    assert build_headers(KeyValueList([("  X-A  ", "1")])) == {"X-A": "1"}


def test_duplicate_headers_last_write_wins_case_insensitive() -> None:
    kv = KeyValueList([("Accept", "text/html"), ("X-B", "1"), ("accept", "application/json")])
    headers = build_headers(kv)
    assert headers == {"accept": "application/json", "X-B": "1"}
    assert list(headers) == ["accept", "X-B"]


def test_get_never_carries_body() -> None:
    assert assemble(_state(method=HttpMethod.GET, body='{"a":1}')).body is None


def test_body_suppressed_for_non_body_methods() -> None:
    for method in (HttpMethod.DELETE, HttpMethod.OPTIONS, HttpMethod.HEAD):
        assert assemble(_state(method=method, body="x")).body is None


def test_post_body_passed_through_verbatim() -> None:
    assert assemble(_state(method=HttpMethod.POST, body='{"a":1}')).body == '{"a":1}'


def test_body_not_validated_or_reencoded() -> None:
    raw = '{ "a": 1, broken'
    assert assemble(_state(method=HttpMethod.PATCH, body=raw)).body == raw
    spaced = '\n  {"a": 1}\n'
    assert assemble(_state(method=HttpMethod.PUT, body=spaced)).body == spaced


def test_blank_body_is_omitted() -> None:
    assert assemble(_state(method=HttpMethod.POST, body="   \n ")).body is None


def test_assemble_is_pure() -> None:
    state = _state(method=HttpMethod.POST, params=[("a", "1")], body="{}")
    first = assemble(state)
    second = assemble(state)
    assert first == second
    assert first.headers is not second.headers
    assert len(state.query_params) == 1

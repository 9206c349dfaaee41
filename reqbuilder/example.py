"""Canned builder states: the startup default and the demonstration request."""

from __future__ import annotations

import orjson

from .entries import IdFactory, KeyValueList
from .models import BuilderState, HttpMethod

DEFAULT_URL = "https://jsonplaceholder.typicode.com/posts/1"
EXAMPLE_URL = "https://jsonplaceholder.typicode.com/posts"
EXAMPLE_TOKEN_PLACEHOLDER = "Bearer YOUR_TOKEN_HERE"
EXAMPLE_PAYLOAD = {"title": "foo", "body": "bar", "userId": 1}

JSON_CONTENT_TYPE = ("Content-Type", "application/json")


def default_state(id_factory: IdFactory | None = None) -> BuilderState:
    """Startup state: GET of a sample post with a JSON Content-Type header."""
    return BuilderState(
        method=HttpMethod.GET,
        base_url=DEFAULT_URL,
        query_params=KeyValueList(id_factory=id_factory),
        headers=KeyValueList([JSON_CONTENT_TYPE], id_factory=id_factory),
        body_text="",
    )


def load_example(id_factory: IdFactory | None = None) -> BuilderState:
    """Demonstration POST with two headers and a JSON body.

    Identical on every call apart from the entry ids.
    """
    return BuilderState(
        method=HttpMethod.POST,
        base_url=EXAMPLE_URL,
        query_params=KeyValueList(id_factory=id_factory),
        headers=KeyValueList(
            [JSON_CONTENT_TYPE, ("Authorization", EXAMPLE_TOKEN_PLACEHOLDER)],
            id_factory=id_factory,
        ),
        body_text=orjson.dumps(EXAMPLE_PAYLOAD, option=orjson.OPT_INDENT_2).decode("utf-8"),
    )

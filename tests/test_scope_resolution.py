"""Member reference qualification in initializers."""

import pytest

from analog_sfc.frontend.parse import named_children
from analog_sfc.middleend.scope import (
    is_signal_factory,
    resolve_initializer,
    root_identifier,
)

MEMBERS = {"route", "store", "items", "ready$"}


def initializer(parse, source: str):
    script = parse(source)
    declarator = named_children(script.statements()[0])[0]
    return script, declarator.child_by_field_name("value")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("const a = route;", "this.route"),
        ("const a = other;", "other"),
        ("const a = route.snapshot.data;", "this.route.snapshot.data"),
        ("const a = store.select(items);", "this.store.select(this.items)"),
        ("const a = store.get<Item>(route.id);", "this.store.get<Item>(this.route.id)"),
        ("const a = load(items, route.params.id, 'x', 42);", "load(this.items, this.route.params.id, 'x', 42)"),
        ("const a = wrap(store.current());", "wrap(this.store.current())"),
        ("const a = items.length + 1;", "items.length + 1"),
        ("const a = [items];", "[items]"),
        ("const a = signal(items);", "signal(items)"),
        ("const a = input.required<string>();", "input.required<string>()"),
        ("const a = outputFromObservable(ready$);", "outputFromObservable(this.ready$)"),
    ],
)
def test_resolve_initializer(parse, source: str, expected: str):
    script, node = initializer(parse, source)
    assert resolve_initializer(node, script, MEMBERS) == expected


def test_root_identifier(parse):
    script, node = initializer(parse, "const a = route.snapshot.params.id;")
    assert script.text(root_identifier(node)) == "route"


def test_is_signal_factory():
    assert is_signal_factory("computed")
    assert is_signal_factory("viewChild.required")
    assert not is_signal_factory("inject")

"""Environment chain tests."""

import pytest

from mukadex.environment import Environment
from mukadex.errors import UndefinedVariableError
from mukadex.tokens import Token, TokenType


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 1)


def test_define_overwrites_local_binding():
    env = Environment()
    env.define("a", 1)
    env.define("a", 2)
    assert env.get(name("a")) == 2


def test_get_searches_enclosing_chain():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(Environment(outer))
    assert inner.get(name("a")) == "outer"


def test_get_undefined_faults_with_token():
    token = name("missing")
    with pytest.raises(UndefinedVariableError) as info:
        Environment(Environment()).get(token)
    assert info.value.token is token
    assert info.value.message == "Undefined variable 'missing'."


def test_assign_mutates_the_declaring_scope():
    outer = Environment()
    outer.define("a", 1)
    inner = Environment(outer)
    inner.assign(name("a"), 5)
    assert outer.values["a"] == 5
    assert "a" not in inner.values


def test_assign_never_creates_a_binding():
    env = Environment()
    with pytest.raises(UndefinedVariableError):
        env.assign(name("a"), 1)
    assert env.values == {}


def test_get_at_and_assign_at_target_exact_scope():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(outer)
    inner.define("a", "inner")

    assert inner.get_at(0, "a") == "inner"
    assert inner.get_at(1, "a") == "outer"

    inner.assign_at(1, name("a"), "changed")
    assert outer.values["a"] == "changed"
    assert inner.values["a"] == "inner"


def test_ancestor_walks_links():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    assert leaf.ancestor(0) is leaf
    assert leaf.ancestor(2) is root

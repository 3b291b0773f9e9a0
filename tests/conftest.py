"""Global pytest configuration and shared symbol fixtures."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from symsize.model.symbol import Symbol


@pytest.fixture
def make_symbol() -> Callable[..., Symbol]:
    """Return a factory producing Symbols with sequential ids."""
    counter = {"n": 0}

    def _make(name: Any = "main", **kwargs: Any) -> Symbol:
        counter["n"] += 1
        kwargs.setdefault("id", f"sym_{counter['n']}")
        kwargs.setdefault("size", 0)
        return Symbol(name=name, **kwargs)

    return _make

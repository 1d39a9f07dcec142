"""Shared test fixtures for depscope tests."""

from pathlib import Path

import pytest

from depscope.graph.models import DependencyFact, DependencyGraph, Entity, EntityKind


def pytest_configure(config):
    """Configure markers."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def fact(source: str, target: str) -> DependencyFact:
    return DependencyFact(Entity(source, EntityKind.guess(source)), Entity(target, EntityKind.guess(target)))


@pytest.fixture
def make_graph():
    """Build a graph from ``"A->B"`` style edge strings."""

    def _make(*edges: str) -> DependencyGraph:
        facts = []
        for edge in edges:
            source, target = edge.split("->")
            facts.append(fact(source.strip(), target.strip()))
        return DependencyGraph.build(facts)

    return _make


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A tiny package with a protocol, an abstract base and two classes."""
    pkg = tmp_path / "shop"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("")
    (pkg / "base.py").write_text(
        "from abc import ABC, abstractmethod\n"
        "from typing import Protocol\n"
        "\n"
        "\n"
        "class Priced(Protocol):\n"
        "    def price(self) -> int: ...\n"
        "\n"
        "\n"
        "class Item(ABC):\n"
        "    @abstractmethod\n"
        "    def price(self) -> int: ...\n"
    )
    (pkg / "models.py").write_text(
        "import json\n"
        "\n"
        "from .base import Item, Priced\n"
        "\n"
        "\n"
        "class Book(Item):\n"
        "    def price(self) -> int:\n"
        "        return 10\n"
        "\n"
        "\n"
        "class Cart:\n"
        "    def __init__(self, items: list[Priced]):\n"
        "        self.items = items\n"
        "\n"
        "    def dump(self) -> str:\n"
        "        return json.dumps([Book().price()])\n"
    )
    return tmp_path

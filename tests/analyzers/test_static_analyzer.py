"""Tests for the ast-based static analyzer."""

from pathlib import Path

import pytest

from depscope.analyzers.static import AnalysisResult, StaticAnalyzer, module_name_for
from depscope.exceptions import InvalidPathError, SourceSyntaxError
from depscope.graph.models import EntityKind


@pytest.fixture
def analyzer():
    return StaticAnalyzer()


def analyse_snippet(analyzer: StaticAnalyzer, source: str):
    result = analyzer.analyse_source(source, module="mod")
    assert result.ok, result.error
    return result.graph


class TestModuleNames:
    """Test module_name_for."""

    def test_plain_file(self, tmp_path):
        path = tmp_path / "tool.py"
        path.write_text("")
        assert module_name_for(path) == "tool"

    def test_package_module(self, project):
        assert module_name_for(project / "shop" / "models.py") == "shop.models"

    def test_package_init(self, project):
        assert module_name_for(project / "shop" / "__init__.py") == "shop"


class TestProjectAnalysis:
    """Analyse the sample project on disk."""

    def test_inheritance_and_kinds(self, analyzer, project):
        files = sorted((project / "shop").glob("*.py"))
        result = analyzer.analyse(files)
        assert result.ok
        graph = result.graph
        assert graph.weight("shop.models.Book", "shop.base.Item") == 1
        assert graph.entity("shop.base.Item").kind is EntityKind.ABSTRACT_CLASS
        assert graph.entity("shop.base.Priced").kind is EntityKind.INTERFACE

    def test_calls_annotations_and_modules(self, analyzer, project):
        graph = analyzer.analyse(sorted((project / "shop").glob("*.py"))).graph
        cart_deps = graph.dependencies_of("shop.models.Cart")
        assert {"shop.base.Priced", "shop.models.Book", "json.dumps", "builtins.list"} <= cart_deps
        assert graph.weight("shop.base.Priced", "typing.Protocol") == 1
        assert graph.weight("shop.base.Item", "abc.ABC") == 1

    def test_syntax_error_is_returned(self, analyzer, tmp_path):
        good = tmp_path / "good.py"
        good.write_text("class A:\n    pass\n")
        bad = tmp_path / "bad.py"
        bad.write_text("def broken(:\n")
        result = analyzer.analyse([good, bad])
        assert not result.ok
        assert isinstance(result.error, SourceSyntaxError)
        assert "bad.py" in str(result.error)
        assert result.graph.is_empty()

    def test_unreadable_file_raises(self, analyzer, tmp_path):
        with pytest.raises(InvalidPathError):
            analyzer.analyse([tmp_path / "missing.py"])

    def test_no_files(self, analyzer):
        result = analyzer.analyse([])
        assert result.ok
        assert result.graph.is_empty()


class TestReferences:
    """Reference resolution inside a single module."""

    def test_self_references_are_skipped(self, analyzer):
        graph = analyse_snippet(
            analyzer, "class Node:\n    def child(self) -> 'Node':\n        return Node()\n"
        )
        assert graph.is_empty()

    def test_unresolved_names_are_ignored(self, analyzer):
        graph = analyse_snippet(analyzer, "def run(x):\n    return helper(x)\n")
        assert graph.is_empty()

    def test_local_function_call(self, analyzer):
        graph = analyse_snippet(analyzer, "def helper():\n    pass\ndef run():\n    helper()\n")
        assert graph.weight("mod.run", "mod.helper") == 1
        assert graph.entity("mod.helper").kind is EntityKind.FUNCTION

    def test_repeated_references_add_weight(self, analyzer):
        graph = analyse_snippet(
            analyzer, "from lib import B\ndef run():\n    B()\n    B()\n"
        )
        assert graph.weight("mod.run", "lib.B") == 2

    def test_module_reference_is_namespace(self, analyzer):
        graph = analyse_snippet(analyzer, "import os\ndef run():\n    return os\n")
        assert graph.entity("os").kind is EntityKind.NAMESPACE

    def test_abc_metaclass_is_abstract(self, analyzer):
        graph = analyse_snippet(
            analyzer,
            "from abc import ABCMeta\nclass Base(metaclass=ABCMeta):\n    pass\n"
            "class Impl(Base):\n    pass\n",
        )
        assert graph.entity("mod.Base").kind is EntityKind.ABSTRACT_CLASS

    def test_relative_import_from_own_package(self, analyzer):
        result = analyzer.analyse_source(
            "from . import thing\ndef f():\n    return thing\n", module="pkg.mod"
        )
        assert result.graph.weight("pkg.mod.f", "pkg.thing") == 1

    def test_relative_import_from_parent_package(self, analyzer):
        result = analyzer.analyse_source(
            "from ..other import X\ndef f():\n    return X()\n", module="app.pkg.mod"
        )
        assert result.graph.weight("app.pkg.mod.f", "app.other.X") == 1

    def test_relative_import_beyond_top_level_is_ignored(self, analyzer):
        result = analyzer.analyse_source(
            "from .. import thing\ndef f():\n    return thing\n", module="pkg.mod"
        )
        assert result.ok
        assert result.graph.is_empty()

    def test_syntax_error_in_snippet(self, analyzer):
        result = analyzer.analyse_source("class:\n", module="mod")
        assert not result.ok
        assert result.error.lineno == 1


class TestAnalysisResult:
    def test_success_and_failure(self):
        error = SourceSyntaxError(Path("x.py"), "invalid syntax", 3)
        assert AnalysisResult.failure(error).ok is False
        assert AnalysisResult.success(AnalysisResult().graph).ok is True
        assert str(error) == "Syntax error in x.py:3: invalid syntax"

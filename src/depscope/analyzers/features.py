"""Language features the static analyzer is expected to detect.

Used by the ``test-features`` command to show, without touching any user
sources, which kinds of references turn into dependencies.
"""

from dataclasses import dataclass

from .static import StaticAnalyzer


MODULE = "feature"


@dataclass(frozen=True)
class Feature:
    description: str
    source: str
    expected: tuple[str, str]
    # Relative imports need a module that lives inside a package
    module: str = MODULE


FEATURES: tuple[Feature, ...] = (
    Feature(
        "inheriting from a class",
        "from lib import Base\nclass A(Base):\n    pass\n",
        ("feature.A", "lib.Base"),
    ),
    Feature(
        "creating objects",
        "from lib import B\nclass A:\n    def run(self):\n        return B()\n",
        ("feature.A", "lib.B"),
    ),
    Feature(
        "parameter annotations",
        "from lib import B\ndef handle(item: B):\n    pass\n",
        ("feature.handle", "lib.B"),
    ),
    Feature(
        "return annotations",
        "from lib import B\ndef make() -> B:\n    pass\n",
        ("feature.make", "lib.B"),
    ),
    Feature(
        "string forward references",
        "def make() -> 'Later':\n    pass\nclass Later:\n    pass\n",
        ("feature.make", "feature.Later"),
    ),
    Feature(
        "class attribute annotations",
        "from lib import B\nclass A:\n    item: B\n",
        ("feature.A", "lib.B"),
    ),
    Feature(
        "decorators",
        "from lib import register\n@register\nclass A:\n    pass\n",
        ("feature.A", "lib.register"),
    ),
    Feature(
        "calling class methods",
        "from lib import B\ndef run():\n    B.create()\n",
        ("feature.run", "lib.B"),
    ),
    Feature(
        "module attribute access",
        "import lib.sub\ndef run():\n    lib.sub.Thing()\n",
        ("feature.run", "lib.sub.Thing"),
    ),
    Feature(
        "aliased imports",
        "import lib.sub as s\ndef run():\n    s.Thing()\n",
        ("feature.run", "lib.sub.Thing"),
    ),
    Feature(
        "raising exceptions",
        "from lib import Failure\ndef run():\n    raise Failure()\n",
        ("feature.run", "lib.Failure"),
    ),
    Feature(
        "catching exceptions",
        "from lib import Failure\ndef run():\n    try:\n        pass\n    except Failure:\n        pass\n",
        ("feature.run", "lib.Failure"),
    ),
    Feature(
        "isinstance checks",
        "from lib import B\ndef check(x):\n    return isinstance(x, B)\n",
        ("feature.check", "lib.B"),
    ),
    Feature(
        "builtin classes",
        "class Failure(Exception):\n    pass\n",
        ("feature.Failure", "builtins.Exception"),
    ),
    Feature(
        "relative imports",
        "from .sibling import B\ndef run():\n    return B()\n",
        ("pkg.feature.run", "pkg.sibling.B"),
        module="pkg.feature",
    ),
    Feature(
        "imports inside functions",
        "def run():\n    from lib import B\n    return B()\n",
        ("feature.run", "lib.B"),
    ),
    Feature(
        "generic subscripts",
        "from lib import B\ndef run(items: list[B]):\n    pass\n",
        ("feature.run", "lib.B"),
    ),
)


def check_features(analyzer: StaticAnalyzer) -> list[tuple[Feature, bool]]:
    """Run every feature snippet and report whether its dependency was found."""
    results = []
    for feature in FEATURES:
        outcome = analyzer.analyse_source(feature.source, module=feature.module)
        source, target = feature.expected
        detected = outcome.ok and outcome.graph.weight(source, target) > 0
        results.append((feature, detected))
    return results

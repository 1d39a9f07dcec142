"""The analyzer must detect every advertised language feature."""

import pytest

from depscope.analyzers.features import FEATURES, check_features
from depscope.analyzers.static import StaticAnalyzer


@pytest.mark.parametrize("feature", FEATURES, ids=lambda f: f.description)
def test_feature_is_detected(feature):
    result = StaticAnalyzer().analyse_source(feature.source, module=feature.module)
    assert result.ok, result.error
    source, target = feature.expected
    assert result.graph.weight(source, target) > 0, sorted(
        (s.name, t.name) for s, t, _ in result.graph.edges()
    )


def test_check_features_reports_all():
    results = check_features(StaticAnalyzer())
    assert len(results) == len(FEATURES)
    assert all(detected for _, detected in results)

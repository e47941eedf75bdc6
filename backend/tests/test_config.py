"""Tests for settings-driven ranking and linking configuration"""

from findaly.config import Settings, RankingConfig, LinkingLimits
from findaly.services.alternatives import AlternativesService


def test_defaults_match_config_models():
    settings = Settings()

    assert settings.ranking_config() == RankingConfig()
    assert settings.linking_limits() == LinkingLimits()


def test_ranking_weights_read_from_environment(monkeypatch):
    monkeypatch.setenv("RANKING_USE_CASE_WEIGHT", "10")
    monkeypatch.setenv("RANKING_CURATED_BONUS", "0")
    monkeypatch.setenv("RANKING_MAX_RESULTS", "3")

    config = Settings().ranking_config()

    assert config.use_case_weight == 10.0
    assert config.curated_bonus == 0.0
    assert config.max_results == 3
    assert config.features_weight == 25.0


def test_link_limits_read_from_environment(monkeypatch):
    monkeypatch.setenv("LINK_TOOL_ALT_TOOLS", "2")
    monkeypatch.setenv("LINK_BEST_COMPARISONS", "3")

    limits = Settings().linking_limits()

    assert limits.tool.alt_tools == 2
    assert limits.tool.comparisons == 3
    assert limits.best.comparisons == 3
    assert limits.category.tools == 24


def test_overridden_weight_changes_scores(catalog):
    catalog.tool("acme", use_cases=["sales"])
    catalog.tool("beta", use_cases=["sales"])

    config = Settings(RANKING_USE_CASE_WEIGHT=10).ranking_config()
    result = AlternativesService(catalog.store, config).rank_alternatives("acme")

    assert result.alternatives[0].score == 10.0

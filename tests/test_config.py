from pathlib import Path

from portfolio_site.config import (
    DEFAULT_ANALYTICS_HOST,
    PRODUCTION_ANALYTICS_DOMAIN,
    AnalyticsConfig,
    BuildPaths,
    is_http_origin,
)


class TestAnalyticsConfig:
    def test_disabled_by_default(self):
        config = AnalyticsConfig.from_env({})
        assert not config.enabled
        assert config.host == DEFAULT_ANALYTICS_HOST

    def test_production_fallback(self):
        config = AnalyticsConfig.from_env({"NODE_ENV": "production"})
        assert config.domain == PRODUCTION_ANALYTICS_DOMAIN

    def test_explicit_domain_and_host(self):
        config = AnalyticsConfig.from_env(
            {"ANALYTICS_DOMAIN": " example.com ", "ANALYTICS_HOST": "https://stats.example/", "NODE_ENV": "production"}
        )
        assert config.domain == "example.com"
        assert config.origin == "https://stats.example"

    def test_blank_host_uses_default(self):
        assert AnalyticsConfig.from_env({"ANALYTICS_HOST": "  "}).host == DEFAULT_ANALYTICS_HOST


class TestBuildPaths:
    def test_defaults(self, tmp_path):
        paths = BuildPaths.from_root(tmp_path)
        assert paths.out_dir == tmp_path.resolve() / "dist"
        assert paths.content_index_dir == tmp_path.resolve() / "src" / "generated"
        assert paths.assets_dir.name == "assets"
        assert paths.images_dir.name == "images"
        assert paths.content_dir.name == "content"

    def test_overrides(self, tmp_path):
        paths = BuildPaths.from_root(tmp_path, tmp_path / "public", tmp_path / "idx")
        assert paths.out_dir == (tmp_path / "public").resolve()
        assert paths.content_index_dir == Path(tmp_path / "idx").resolve()


class TestAnalyticsHostValidation:
    def test_accepts_origins(self):
        for host in ("https://plausible.io", "https://stats.example/", "http://localhost:8000"):
            assert is_http_origin(host), host

    def test_rejects_non_origins(self):
        for host in ('https://h.io/"><script>', "javascript:alert(1)", "plausible.io", "https://h.io/js?x=1", "https://a b.io"):
            assert not is_http_origin(host), host

    def test_markup_in_host_falls_back_to_default(self):
        config = AnalyticsConfig.from_env({"ANALYTICS_DOMAIN": "example.com", "ANALYTICS_HOST": 'https://h.io/"><script>'})
        assert config.host == DEFAULT_ANALYTICS_HOST

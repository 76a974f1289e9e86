"""
Test suite configuration management.

Provides timeouts, wait intervals and target settings for the API and
browser suites. All values can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _apply_int_overrides(config: object, env_mappings: Dict[str, str]) -> None:
    for env_var, attr in env_mappings.items():
        value = os.getenv(env_var)
        if value:
            try:
                setattr(config, attr, int(value))
            except ValueError:
                pass  # Keep default if invalid


@dataclass
class TimeoutConfig:
    """Timeout configuration in milliseconds."""

    default: int = 30000
    navigation: int = 30000
    element: int = 10000
    short: int = 5000
    long: int = 60000

    @classmethod
    def from_env(cls) -> "TimeoutConfig":
        """Create config from environment variables."""
        config = cls()
        _apply_int_overrides(
            config,
            {
                "QA_TIMEOUT_DEFAULT": "default",
                "QA_TIMEOUT_NAVIGATION": "navigation",
                "QA_TIMEOUT_ELEMENT": "element",
                "QA_TIMEOUT_SHORT": "short",
                "QA_TIMEOUT_LONG": "long",
            },
        )
        return config


@dataclass
class WaitConfig:
    """Polling intervals and retry settings in milliseconds."""

    # Bounding box sampling tick for the stability detector
    stability_tick: int = 100

    # Hold time before an element counts as stable
    stable_time: int = 500

    # Poll interval of the minimum-count waiter
    min_count_interval: int = 200

    # Poll interval for custom conditions, text and attribute waits
    condition_interval: int = 200

    # Settle time after an element becomes visible before animation checks
    animation_settle: int = 300

    retry_attempts: int = 3
    retry_delay: int = 1000

    @classmethod
    def from_env(cls) -> "WaitConfig":
        """Create config from environment variables."""
        config = cls()
        _apply_int_overrides(
            config,
            {
                "QA_WAIT_STABILITY_TICK": "stability_tick",
                "QA_WAIT_STABLE_TIME": "stable_time",
                "QA_WAIT_MIN_COUNT_INTERVAL": "min_count_interval",
                "QA_WAIT_CONDITION_INTERVAL": "condition_interval",
                "QA_WAIT_ANIMATION_SETTLE": "animation_settle",
                "QA_RETRY_ATTEMPTS": "retry_attempts",
                "QA_RETRY_DELAY": "retry_delay",
            },
        )
        return config


@dataclass
class ApiConfig:
    """ServeRest API configuration."""

    base_url: str = "http://localhost:3000"

    # Milliseconds
    request_timeout: int = 10000
    default_timeout: int = 30000

    cleanup_enabled: bool = True
    delete_users: bool = True
    delete_products: bool = True
    delete_carts: bool = True

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Create config from environment variables."""
        config = cls(
            base_url=os.getenv("API_BASE_URL", "http://localhost:3000"),
            cleanup_enabled=_env_flag("QA_API_CLEANUP", "true"),
        )
        _apply_int_overrides(
            config,
            {
                "QA_API_REQUEST_TIMEOUT": "request_timeout",
                "QA_API_DEFAULT_TIMEOUT": "default_timeout",
            },
        )
        return config


@dataclass
class Viewport:
    width: int = 1920
    height: int = 1080


@dataclass
class Selectors:
    """Selectors shared by the GE page objects."""

    cookies_accept: str = 'button:has-text("Aceitar"), button:has-text("Continuar")'
    news_article: str = 'article, [class*="feed-post"], [class*="bastian-feed-item"]'
    news_title: str = 'h2, h3, [class*="title"]'
    news_image: str = 'img[src*="s.glbimg.com"], picture img'
    news_summary: str = 'p, [class*="summary"], [class*="description"]'
    news_link: str = 'a[href*="/futebol/"]'


@dataclass
class AcceptanceCriteria:
    min_news_count: int = 10
    min_team_news_count: int = 1
    min_content_length: int = 100


SERIE_A_TEAMS: List[str] = [
    "flamengo",
    "palmeiras",
    "atletico-mg",
    "corinthians",
    "sao-paulo",
    "fluminense",
    "internacional",
    "atletico-pr",
    "santos",
    "botafogo",
    "gremio",
    "bahia",
    "cruzeiro",
    "vasco",
    "fortaleza",
    "bragantino",
    "cuiaba",
    "goias",
    "coritiba",
    "america-mg",
]


@dataclass
class WebConfig:
    """Browser suite configuration."""

    base_url: str = "https://ge.globo.com"
    browser: str = "chromium"
    headless: bool = True
    slow_mo: int = 50
    viewport: Viewport = field(default_factory=Viewport)
    locale: str = "pt-BR"
    timezone_id: str = "America/Sao_Paulo"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    screenshot_dir: str = "reports/screenshots"
    selectors: Selectors = field(default_factory=Selectors)
    acceptance: AcceptanceCriteria = field(default_factory=AcceptanceCriteria)
    serie_a_teams: List[str] = field(default_factory=lambda: list(SERIE_A_TEAMS))

    @classmethod
    def from_env(cls) -> "WebConfig":
        """Create config from environment variables."""
        return cls(
            base_url=os.getenv("QA_WEB_BASE_URL", "https://ge.globo.com"),
            browser=os.getenv("BROWSER", "chromium"),
            headless=os.getenv("HEADLESS", "true").lower() != "false",
            screenshot_dir=os.getenv("QA_SCREENSHOT_DIR", "reports/screenshots"),
        )


@dataclass
class SuiteConfig:
    """Main test suite configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    web: WebConfig = field(default_factory=WebConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    waits: WaitConfig = field(default_factory=WaitConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "SuiteConfig":
        """Create config from environment variables."""
        return cls(
            api=ApiConfig.from_env(),
            web=WebConfig.from_env(),
            timeouts=TimeoutConfig.from_env(),
            waits=WaitConfig.from_env(),
            debug=_env_flag("QA_DEBUG", "false"),
        )


# Global config instance (lazy loaded)
_config: Optional[SuiteConfig] = None


def get_config() -> SuiteConfig:
    """Get the global suite configuration."""
    global _config
    if _config is None:
        _config = SuiteConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    _config = None

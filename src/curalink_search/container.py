"""
Application DI Container (dependency-injector).

Centralizes creation of the providers, scorer, ranker and search engine.

Usage::

    from curalink_search.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "api_base_url": "http://localhost:8080/api/v1",
        "discussions_path": "~/.curalink/forum.json",
    })

    engine = container.engine()
    result = await engine.search("immunotherapy", QueryContext(condition="Glioblastoma"))

    # In tests — override any provider:
    container.expert_provider.override(providers.Object(fake_provider))
"""

from __future__ import annotations

import logging
import os

from dependency_injector import containers, providers

from curalink_search.shared.exceptions import ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, object] = {
    "api_base_url": "http://localhost:8080/api/v1",
    "timeout": 10.0,
    "provider_timeout": None,
    "provider_limit": 40,
    "min_score": 8,
    "max_results": 10,
    "failure_policy": "all_or_nothing",
    "discussions_path": None,
    "scoring_config_path": None,
}

# Environment variable -> (config key, converter)
ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "CURALINK_API_BASE_URL": ("api_base_url", str),
    "CURALINK_TIMEOUT": ("timeout", float),
    "CURALINK_PROVIDER_TIMEOUT": ("provider_timeout", float),
    "CURALINK_DISCUSSIONS_PATH": ("discussions_path", str),
    "CURALINK_SCORING_CONFIG": ("scoring_config_path", str),
    "CURALINK_FAILURE_POLICY": ("failure_policy", str),
}


def _create_scoring_config(path: str | None) -> object:
    """Lazy factory for ScoringConfig (YAML file or defaults)."""
    from curalink_search.application.search import ScoringConfig

    if path:
        return ScoringConfig.from_yaml(path)
    return ScoringConfig.default()


def _create_discussion_repository(path: str | None) -> object:
    """JSON-backed repository when a path is configured, in-memory otherwise."""
    from curalink_search.infrastructure.discussions import (
        InMemoryDiscussionRepository,
        JsonFileDiscussionRepository,
    )

    if path:
        return JsonFileDiscussionRepository(path)
    return InMemoryDiscussionRepository()


def _create_settings(
    provider_limit: int,
    min_score: int,
    max_results: int,
    provider_timeout: float | None,
    failure_policy: str,
) -> object:
    """Lazy factory for SearchSettings."""
    from curalink_search.application.search import FailurePolicy, SearchSettings
    from curalink_search.shared.exceptions import ConfigurationError

    try:
        policy = FailurePolicy(failure_policy)
    except ValueError:
        msg = f"Unknown failure policy {failure_policy!r} (expected all_or_nothing or partial)"
        raise ConfigurationError(msg) from None

    return SearchSettings(
        provider_limit=int(provider_limit),
        min_score=int(min_score),
        max_results=int(max_results),
        provider_timeout=float(provider_timeout) if provider_timeout is not None else None,
        failure_policy=policy,
    )


def _create_expert_provider(base_url: str, timeout: float) -> object:
    from curalink_search.infrastructure.providers import HttpExpertProvider

    return HttpExpertProvider(base_url, timeout=float(timeout))


def _create_trial_provider(base_url: str, timeout: float) -> object:
    from curalink_search.infrastructure.providers import HttpTrialProvider

    return HttpTrialProvider(base_url, timeout=float(timeout))


def _create_scorer(scoring_config: object) -> object:
    from curalink_search.application.search import CandidateScorer

    return CandidateScorer(scoring_config)  # type: ignore[arg-type]


def _create_ranker() -> object:
    from curalink_search.application.search import LocationRanker

    return LocationRanker()


def _create_engine(
    expert_provider: object,
    trial_provider: object,
    discussion_repository: object,
    scorer: object,
    ranker: object,
    settings: object,
) -> object:
    from curalink_search.application.search import UnifiedSearchEngine

    return UnifiedSearchEngine(
        expert_provider,  # type: ignore[arg-type]
        trial_provider,  # type: ignore[arg-type]
        discussion_repository,  # type: ignore[arg-type]
        scorer=scorer,  # type: ignore[arg-type]
        ranker=ranker,  # type: ignore[arg-type]
        settings=settings,  # type: ignore[arg-type]
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for Curalink Search.

    Manages creation and lifecycle of:
    - ``expert_provider`` / ``trial_provider``: HTTP candidate providers
    - ``discussion_repository``: forum thread store
    - ``scoring_config`` / ``scorer`` / ``ranker``: ranking components
    - ``engine``: the UnifiedSearchEngine
    """

    config = providers.Configuration()

    scoring_config = providers.Singleton(
        _create_scoring_config,
        path=config.scoring_config_path,
    )

    settings = providers.Singleton(
        _create_settings,
        provider_limit=config.provider_limit,
        min_score=config.min_score,
        max_results=config.max_results,
        provider_timeout=config.provider_timeout,
        failure_policy=config.failure_policy,
    )

    expert_provider = providers.Singleton(
        _create_expert_provider,
        base_url=config.api_base_url,
        timeout=config.timeout,
    )

    trial_provider = providers.Singleton(
        _create_trial_provider,
        base_url=config.api_base_url,
        timeout=config.timeout,
    )

    discussion_repository = providers.Singleton(
        _create_discussion_repository,
        path=config.discussions_path,
    )

    scorer = providers.Singleton(_create_scorer, scoring_config=scoring_config)

    ranker = providers.Singleton(_create_ranker)

    engine = providers.Singleton(
        _create_engine,
        expert_provider=expert_provider,
        trial_provider=trial_provider,
        discussion_repository=discussion_repository,
        scorer=scorer,
        ranker=ranker,
        settings=settings,
    )


def load_env_config(environ: dict[str, str] | None = None) -> dict[str, object]:
    """Defaults overlaid with CURALINK_* environment variables."""
    environ = dict(os.environ if environ is None else environ)
    config = dict(DEFAULT_CONFIG)
    for var, (key, convert) in ENV_OVERRIDES.items():
        value = environ.get(var, "").strip()
        if value:
            try:
                config[key] = convert(value)
            except ValueError:
                msg = f"Invalid value for {var}: {value!r}"
                raise ConfigurationError(msg, context=ErrorContext(input_value=value)) from None
            logger.debug(f"Config {key} set from {var}")
    return config


def create_container(overrides: dict[str, object] | None = None) -> ApplicationContainer:
    """Build a container from defaults, environment and explicit overrides."""
    container = ApplicationContainer()
    config = load_env_config()
    config.update({k: v for k, v in (overrides or {}).items() if v is not None})
    container.config.from_dict(config)
    return container


__all__ = [
    "ApplicationContainer",
    "DEFAULT_CONFIG",
    "create_container",
    "load_env_config",
]

"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from engage.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked by default.

    Args:
        unmock: Components that should use their production provider.
                Unmocking "persistence" needs PostgreSQL reachable at
                DATABASE__URL with migrations applied.

    Returns:
        Configured test container

    Raises:
        ValueError: If unmock names an unknown component

    Examples:
        # Unit tests - in-memory store, recording publisher
        container = build_test_container()

        # Integration tests - real PostgreSQL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component = base.__mock_component__
        if component is None:
            provider_class = get_provider(base, use_mock=False)
        else:
            provider_class = get_provider(base, use_mock=component not in unmock)
        provider_instances.append(provider_class())

    return make_async_container(*provider_instances, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject component names that no provider declares."""
    known = {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

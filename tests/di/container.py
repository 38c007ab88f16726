"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, Provider, make_async_container

from tutor.util.di import PROVIDERS, Component, get_provider, is_component


def build_test_container(
    unmock: set[Component] | None = None, *extra_providers: Provider
) -> AsyncContainer:
    """Build a container where every component is in-memory unless unmocked.

    Unmocking "persistence" needs a migrated PostgreSQL at DATABASE__URL.
    Settings come from the environment, as in production.

    Args:
        unmock: Components to build from their production providers
        extra_providers: Additional providers, e.g. FastapiProvider for API tests

    Raises:
        ValueError: If ``unmock`` names an unknown component

    Examples:
        # Unit tests
        container = build_test_container()

        # Repository tests against PostgreSQL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    known = {base.__mock_component__ for base in PROVIDERS if is_component(base)}
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [
        get_provider(
            base,
            use_mock=is_component(base) and base.__mock_component__ not in unmock,
        )()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, *extra_providers)

"""
Shared pytest fixtures for Git ECA tests.

Engines built here run against in-memory fakes of the Eclipse APIs and a
fresh cache per test.
"""

from typing import Callable

import pytest

from git_eca.config import MailConfig, MailPolicy
from git_eca.services import CachingService
from git_eca.validation import (
    AutomationAuthority,
    CommitValidationEngine,
    IdentityResolver,
)

from .fixtures import (
    FakeCatalog,
    FakeDirectory,
    FakeRegistry,
    sample_bots,
    sample_projects,
    sample_users,
)


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory(sample_users())


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry(sample_bots())


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog(sample_projects())


@pytest.fixture
def cache() -> CachingService:
    return CachingService(ttl_seconds=600, max_entries=1000)


@pytest.fixture
def mail_policy() -> MailPolicy:
    return MailPolicy.from_config(MailConfig())


@pytest.fixture
def engine_factory(
    directory, registry, catalog, cache, mail_policy
) -> Callable[..., CommitValidationEngine]:
    """Build engines over the fakes, sharing one cache per test."""

    def _factory(**overrides) -> CommitValidationEngine:
        automation = AutomationAuthority(
            overrides.get("registry", registry), cache, mail_policy
        )
        return CommitValidationEngine(
            projects=overrides.get("catalog", catalog),
            resolver=IdentityResolver(
                overrides.get("directory", directory), cache, mail_policy
            ),
            automation=automation,
        )

    return _factory


@pytest.fixture
def engine(engine_factory) -> CommitValidationEngine:
    return engine_factory()

"""Tests for bot and allow-list checks."""

import pytest

from git_eca.api_clients import NetworkError
from git_eca.validation import AutomationAuthority, bot_matches

from ...fixtures import sample_bots, sample_projects


@pytest.fixture
def automation(registry, cache, mail_policy):
    return AutomationAuthority(registry, cache, mail_policy)


def _project(project_id):
    return next(p for p in sample_projects() if p.project_id == project_id)


class TestBotMatches:
    def test_owned_bot_matches(self):
        assert bot_matches(sample_bots(), "1.bot@eclipse.org", ["sample.proj"])

    def test_project_id_is_case_insensitive(self):
        assert bot_matches(sample_bots(), "1.bot@eclipse.org", ["SAMPLE.PROJ"])

    def test_bot_of_other_project_does_not_match(self):
        assert not bot_matches(sample_bots(), "1.bot@eclipse.org", ["sample.proto"])

    def test_alias_mail_matches(self):
        assert bot_matches(
            sample_bots(), "2.bot-github@eclipse.org", ["sample.proto"]
        )

    def test_alias_mail_of_other_project_does_not_match(self):
        assert not bot_matches(
            sample_bots(), "2.bot-github@eclipse.org", ["sample.proj"]
        )

    def test_no_projects_checks_every_bot(self):
        assert bot_matches(sample_bots(), "3.bot@eclipse.org", [])
        assert not bot_matches(sample_bots(), "rando@nowhere.co", None)


class TestAutomationAuthority:
    def test_allow_list_is_exact(self, automation):
        assert automation.is_allowed("noreply@github.com")
        assert not automation.is_allowed("NOREPLY@github.com")
        assert not automation.is_allowed(None)

    @pytest.mark.parametrize("mail", [None, "", "   "])
    def test_blank_mail_is_never_automation(self, automation, registry, mail):
        assert automation.is_automation(mail, []) is False
        assert registry.calls == 0

    def test_is_trusted_checks_project_bots(self, automation):
        projects = [_project("sample.proj")]

        assert automation.is_trusted("1.bot@eclipse.org", projects)
        assert not automation.is_trusted("2.bot@eclipse.org", projects)

    def test_bots_are_cached(self, automation, registry):
        automation.get_bots()
        automation.get_bots()

        assert registry.calls == 1

    def test_registry_failure_means_no_bots(self, automation, registry):
        registry.error = NetworkError("down")

        assert automation.get_bots() == []
        assert automation.is_automation("1.bot@eclipse.org", []) is False

    def test_registry_failure_is_retried(self, automation, registry):
        registry.error = NetworkError("down")
        automation.get_bots()

        registry.error = None

        assert len(automation.get_bots()) == 3

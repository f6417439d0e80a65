import pytest

from standup_app.core.config import (
    ConfigurationError,
    JiraCredentials,
    load_anthropic_key,
    load_jira_credentials,
)
from standup_app.core.holidays import load_holidays, normalize_holidays


def test_credentials_from_jira_section():
    secrets = {"jira": {"JIRA_SERVER": "https://x.atlassian.net", "JIRA_EMAIL": "a@x", "JIRA_TOKEN": "t"}}
    creds = load_jira_credentials(secrets, environ={})
    assert creds == JiraCredentials("https://x.atlassian.net", "a@x", "t")
    assert creds.require() is creds


def test_credentials_fall_back_to_environment():
    env = {"JIRA_URL": "https://env.atlassian.net", "JIRA_EMAIL": "env@x", "JIRA_API_TOKEN": "e"}
    creds = load_jira_credentials({"JIRA_EMAIL": "top@x"}, environ=env)
    assert creds.server == "https://env.atlassian.net"
    assert creds.email == "top@x"
    assert creds.token == "e"


def test_missing_credentials_raise_before_connecting():
    creds = load_jira_credentials({}, environ={"JIRA_EMAIL": "a@x"})
    assert creds.missing() == ["server", "token"]
    with pytest.raises(ConfigurationError, match="server, token"):
        creds.require()


def test_anthropic_key_lookup():
    assert load_anthropic_key({"ANTHROPIC_API_KEY": "k1"}, environ={}) == "k1"
    assert load_anthropic_key({}, environ={"CLAUDE_API_KEY": "k2"}) == "k2"
    assert load_anthropic_key({}, environ={}) is None


def test_normalize_holidays_sorts_and_dedupes():
    assert normalize_holidays(["2024-12-25", "2024-01-01", "2024-12-25", " "]) == ["2024-01-01", "2024-12-25"]
    with pytest.raises(ConfigurationError):
        normalize_holidays(["25/12/2024"])


def test_load_holidays_from_yaml(tmp_path):
    path = tmp_path / "holidays.yaml"
    path.write_text("holidays:\n  - 2024-12-25\n  - '2024-01-01'\n")
    assert load_holidays(path) == ["2024-01-01", "2024-12-25"]


def test_load_holidays_missing_file(tmp_path):
    assert load_holidays(tmp_path / "absent.yaml") == []

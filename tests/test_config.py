import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mailjet_mailer import InvalidArgument, MailjetSender
from mailjet_mailer.config import load_from_env

_VARS = (
    "MAILJET_API_KEY",
    "MAILJET_API_SECRET",
    "MJ_APIKEY_PUBLIC",
    "MJ_APIKEY_PRIVATE",
    "MAILJET_API_SECURE",
    "MAILJET_API_HOSTNAME",
    "MAILJET_API_PORT",
    "MAILJET_API_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_credentials_raise() -> None:
    with pytest.raises(InvalidArgument):
        load_from_env()


def test_defaults_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAILJET_API_KEY", "key")
    monkeypatch.setenv("MAILJET_API_SECRET", "secret")

    api_key, api_secret, options = load_from_env()

    assert (api_key, api_secret) == ("key", "secret")
    assert options.secure is True
    assert options.hostname == "api.mailjet.com"
    assert options.port == 443
    assert options.timeout is None


def test_aliases_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MJ_APIKEY_PUBLIC", "public")
    monkeypatch.setenv("MJ_APIKEY_PRIVATE", "private")
    monkeypatch.setenv("MAILJET_API_SECURE", "false")
    monkeypatch.setenv("MAILJET_API_HOSTNAME", "localhost")
    monkeypatch.setenv("MAILJET_API_TIMEOUT", "1.5")

    sender = MailjetSender.from_env()

    assert sender.api_key == "public"
    assert sender.base_url == "http://localhost:80"
    assert sender.options.timeout == 1.5


def test_primary_name_wins_over_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAILJET_API_KEY", "primary")
    monkeypatch.setenv("MJ_APIKEY_PUBLIC", "alias")
    monkeypatch.setenv("MAILJET_API_SECRET", "secret")
    monkeypatch.setenv("MAILJET_API_PORT", "8443")

    sender = MailjetSender.from_env()

    assert sender.api_key == "primary"
    assert sender.options.port == 8443


@pytest.mark.parametrize(
    "name, value",
    [("MAILJET_API_PORT", "https"), ("MAILJET_API_TIMEOUT", "soon"), ("MAILJET_API_SECURE", "maybe")],
)
def test_malformed_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv("MAILJET_API_KEY", "key")
    monkeypatch.setenv("MAILJET_API_SECRET", "secret")
    monkeypatch.setenv(name, value)
    with pytest.raises(InvalidArgument):
        load_from_env()

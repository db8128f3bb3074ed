import pytest

from altibox_expense.config import Config, DEFAULT_INVOICE_URL, DEFAULT_LOGIN_URL


REQUIRED_ENV = {
    "ALTIBOX_USERNAME": "kunde@example.no",
    "ALTIBOX_PASSWORD": "hemmelig",
    "VISMA_EMAIL": "expense@visma.example.com",
    "RESEND_API_KEY": "re_test_key",
    "RESEND_EMAIL_FROM": "invoices@example.com",
}


def test_defaults_applied_when_only_required_vars_set():
    cfg = Config.from_env(dict(REQUIRED_ENV))

    assert cfg.altibox_username == "kunde@example.no"
    assert cfg.browser_headless is True
    assert cfg.browser_slow_mo_ms == 1000
    assert cfg.altibox_login_url == DEFAULT_LOGIN_URL
    assert cfg.altibox_invoice_url == DEFAULT_INVOICE_URL
    assert cfg.download_dir == "./downloads"
    assert cfg.invoice_locale == "nb_NO"
    assert cfg.discord_webhook_url is None


def test_missing_required_vars_are_all_named():
    env = dict(REQUIRED_ENV)
    del env["ALTIBOX_PASSWORD"]
    env["RESEND_API_KEY"] = "   "

    with pytest.raises(EnvironmentError) as excinfo:
        Config.from_env(env)

    assert "ALTIBOX_PASSWORD" in str(excinfo.value)
    assert "RESEND_API_KEY" in str(excinfo.value)


@pytest.mark.parametrize("raw,expected", [
    ("false", False), ("0", False), ("No", False), ("TRUE", True), ("on", True),
])
def test_headless_flag_parsing(raw, expected):
    cfg = Config.from_env({**REQUIRED_ENV, "BROWSER_HEADLESS": raw})
    assert cfg.browser_headless is expected


@pytest.mark.parametrize("overrides", [
    {"BROWSER_HEADLESS": "maybe"},
    {"ALTIBOX_LOGIN_URL": "not a url"},
    {"ALTIBOX_INVOICE_URL": "ftp://www.altibox.no/faktura"},
    {"DISCORD_WEBHOOK_URL": "discord.com/webhook"},
    {"VISMA_EMAIL": "visma"},
    {"BROWSER_SLOW_MO_MS": "-5"},
    {"BROWSER_SLOW_MO_MS": "fast"},
    {"INVOICE_LOCALE": "xx_INVALID"},
])
def test_malformed_values_rejected(overrides):
    with pytest.raises(EnvironmentError):
        Config.from_env({**REQUIRED_ENV, **overrides})


def test_blank_webhook_disables_channel():
    cfg = Config.from_env({**REQUIRED_ENV, "DISCORD_WEBHOOK_URL": ""})
    assert cfg.discord_webhook_url is None


def test_config_is_immutable_and_hides_secrets():
    cfg = Config.from_env(dict(REQUIRED_ENV))

    with pytest.raises(AttributeError):
        cfg.altibox_username = "someone-else"
    assert "hemmelig" not in repr(cfg)
    assert "re_test_key" not in repr(cfg)

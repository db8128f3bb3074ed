from datetime import date

import pytest

from altibox_expense.config import Config

TODAY = date(2025, 10, 17)


@pytest.fixture
def cfg(tmp_path):
    return Config(
        altibox_username="kunde@example.no",
        altibox_password="hemmelig",
        visma_email="expense@visma.example.com",
        resend_api_key="re_test_key",
        resend_email_from="invoices@example.com",
        altibox_login_url="https://auth.altibox.no/login",
        altibox_invoice_url="https://www.altibox.no/minesider/konto/faktura",
        discord_webhook_url="https://discord.com/api/webhooks/1/abc",
        download_dir=str(tmp_path),
    )


@pytest.fixture
def today():
    return lambda: TODAY

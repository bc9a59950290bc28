"""
Unit tests for the frames-manifest command line tool in
social.farcaster.quickstart.app.cli

Tests drive realMain with patched prompts and a patched directory lookup.
"""

import asyncio
import json
from unittest.mock import AsyncMock, patch

from social.farcaster.quickstart.app import cli
from social.farcaster.quickstart.manifest.association import (
    AccountAssociation,
    decode_payload,
)
from social.farcaster.quickstart.errors import (
    InvalidPhrase,
    NotFound,
    SigningError,
    TransportOrServerError,
)
from tests.test_helpers import (
    TEST_ADDRESS,
    TEST_PHRASE,
    recover_association_signer,
)


def run_cli(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr("sys.argv", ["frames-manifest", *argv])
    return asyncio.run(cli.realMain())


class TestDescribeFailure:
    """Test suite for retry prompt messages."""

    def test_messages(self):
        assert "order" in cli.describe_failure(InvalidPhrase())
        assert "custody account" in cli.describe_failure(NotFound(TEST_ADDRESS))
        assert "502" in cli.describe_failure(
            TransportOrServerError("FID lookup failed with status 502", status=502)
        )


class TestDeriveCommand:
    """Test suite for the derive command."""

    def test_derive_from_environment(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)

        assert run_cli(monkeypatch, "derive") == 0
        assert capsys.readouterr().out.strip() == TEST_ADDRESS

    @patch("social.farcaster.quickstart.app.cli.getpass.getpass")
    def test_derive_prompts(self, mock_getpass, clean_env, monkeypatch, capsys):
        mock_getpass.return_value = TEST_PHRASE

        assert run_cli(monkeypatch, "derive") == 0
        assert capsys.readouterr().out.strip() == TEST_ADDRESS

    @patch("social.farcaster.quickstart.app.cli.getpass.getpass")
    def test_derive_invalid_phrase(self, mock_getpass, clean_env, monkeypatch, capsys):
        mock_getpass.return_value = "test test test"

        assert run_cli(monkeypatch, "derive") == 1
        assert "Invalid seed phrase" in capsys.readouterr().err


class TestSignCommand:
    """Test suite for the sign command."""

    @patch(
        "social.farcaster.quickstart.resolve.fid.resolve_fid",
        new_callable=AsyncMock,
    )
    def test_sign_writes_signed_metadata(self, mock_resolve_fid, clean_env, monkeypatch):
        mock_resolve_fid.return_value = 1
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)
        monkeypatch.setenv("NEYNAR_API_KEY", "api-key")
        output = clean_env / "farcaster.json"

        assert run_cli(monkeypatch, "sign", "https://example.com/", "--output", str(output)) == 0

        document = json.loads(output.read_text())
        association = AccountAssociation.model_validate(document["accountAssociation"])
        assert decode_payload(association).domain == "example.com"
        assert recover_association_signer(association) == TEST_ADDRESS
        assert document["frame"]["webhookUrl"] == "https://example.com/api/webhook"
        assert mock_resolve_fid.call_args.args[1] == TEST_ADDRESS
        assert mock_resolve_fid.call_args.args[2] == "api-key"

    @patch("social.farcaster.quickstart.app.cli.getpass.getpass")
    def test_sign_blank_phrase_is_unsigned(self, mock_getpass, clean_env, monkeypatch, capsys):
        mock_getpass.return_value = ""

        assert run_cli(monkeypatch, "sign", "example.com", "--env-line") == 0

        out = capsys.readouterr().out.strip()
        assert out.startswith("FRAME_METADATA=")
        assert "accountAssociation" not in json.loads(out.removeprefix("FRAME_METADATA="))

    def test_sign_without_api_key_is_unsigned(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)

        assert run_cli(monkeypatch, "sign", "example.com") == 0

        captured = capsys.readouterr()
        assert "accountAssociation" not in json.loads(captured.out)
        assert "NEYNAR_API_KEY" in captured.err

    @patch("social.farcaster.quickstart.app.cli.getpass.getpass")
    @patch(
        "social.farcaster.quickstart.resolve.fid.resolve_fid",
        new_callable=AsyncMock,
    )
    def test_sign_declined_after_not_found(
        self, mock_resolve_fid, mock_getpass, clean_env, monkeypatch, capsys
    ):
        mock_resolve_fid.side_effect = NotFound(TEST_ADDRESS)
        mock_getpass.return_value = ""
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)
        monkeypatch.setenv("NEYNAR_API_KEY", "api-key")

        assert run_cli(monkeypatch, "sign", "example.com") == 0

        assert "accountAssociation" not in json.loads(capsys.readouterr().out)
        mock_getpass.assert_called_once_with(cli.RETRY_PROMPT)

    @patch("social.farcaster.quickstart.app.cli.build_signed_frame_metadata")
    @patch(
        "social.farcaster.quickstart.resolve.fid.resolve_fid",
        new_callable=AsyncMock,
    )
    def test_sign_signing_error_exits(
        self, mock_resolve_fid, mock_build, clean_env, monkeypatch, capsys
    ):
        mock_resolve_fid.return_value = 1
        mock_build.side_effect = SigningError("Unable to sign account association")
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)
        monkeypatch.setenv("NEYNAR_API_KEY", "api-key")
        output = clean_env / "farcaster.json"

        assert run_cli(monkeypatch, "sign", "example.com", "--output", str(output)) == 1

        assert not output.exists()
        assert "Unable to sign" in capsys.readouterr().err

    def test_sign_invalid_domain(self, clean_env, monkeypatch, capsys):
        assert run_cli(monkeypatch, "sign", "not a domain") == 2
        assert "Invalid domain format" in capsys.readouterr().err


class TestSignWebhook:
    """Test suite for webhook URL selection in the sign command."""

    @patch(
        "social.farcaster.quickstart.resolve.fid.resolve_fid",
        new_callable=AsyncMock,
    )
    def test_neynar_client_id_selects_neynar_webhook(
        self, mock_resolve_fid, clean_env, monkeypatch, capsys
    ):
        mock_resolve_fid.return_value = 1
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)
        monkeypatch.setenv("NEYNAR_API_KEY", "k")
        monkeypatch.setenv("NEYNAR_CLIENT_ID", "abc")

        assert run_cli(monkeypatch, "sign", "example.com") == 0

        document = json.loads(capsys.readouterr().out)
        assert document["frame"]["webhookUrl"] == "https://api.neynar.com/f/app/abc/event"
        assert "accountAssociation" in document

    @patch(
        "social.farcaster.quickstart.resolve.fid.resolve_fid",
        new_callable=AsyncMock,
    )
    def test_explicit_webhook_url_wins(
        self, mock_resolve_fid, clean_env, monkeypatch, capsys
    ):
        mock_resolve_fid.return_value = 1
        monkeypatch.setenv("SEED_PHRASE", TEST_PHRASE)
        monkeypatch.setenv("NEYNAR_API_KEY", "k")
        monkeypatch.setenv("NEYNAR_CLIENT_ID", "abc")

        assert (
            run_cli(
                monkeypatch,
                "sign",
                "example.com",
                "--webhook-url",
                "https://hooks.example.net/frame",
            )
            == 0
        )

        document = json.loads(capsys.readouterr().out)
        assert document["frame"]["webhookUrl"] == "https://hooks.example.net/frame"

    @patch("social.farcaster.quickstart.app.cli.getpass.getpass")
    def test_unsigned_frame_uses_domain_webhook(
        self, mock_getpass, clean_env, monkeypatch, capsys
    ):
        mock_getpass.return_value = ""
        monkeypatch.setenv("NEYNAR_CLIENT_ID", "abc")

        assert run_cli(monkeypatch, "sign", "example.com") == 0

        document = json.loads(capsys.readouterr().out)
        assert document["frame"]["webhookUrl"] == "https://example.com/api/webhook"


class TestAskRetry:
    """Test suite for the interactive retry prompt."""

    @patch("social.farcaster.quickstart.app.cli.asyncio.to_thread", new_callable=AsyncMock)
    def test_prompt_runs_off_the_event_loop(self, mock_to_thread, capsys):
        mock_to_thread.return_value = TEST_PHRASE

        answer = asyncio.run(cli.ask_retry(NotFound(TEST_ADDRESS)))

        assert answer == TEST_PHRASE
        mock_to_thread.assert_awaited_once_with(cli.getpass.getpass, cli.RETRY_PROMPT)
        assert "custody account" in capsys.readouterr().err

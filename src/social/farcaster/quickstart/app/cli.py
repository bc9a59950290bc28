import argparse
import asyncio
import getpass
import json
import logging
import os
import sys
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Dict, Optional

import aiohttp
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.farcaster.quickstart.account.custody import derive_account
from social.farcaster.quickstart.app.config import Settings
from social.farcaster.quickstart.errors import (
    InvalidPhrase,
    MissingCredential,
    NotFound,
    ResolutionError,
    SigningError,
    TransportOrServerError,
)
from social.farcaster.quickstart.manifest.domain import normalize_domain
from social.farcaster.quickstart.manifest.frame import (
    FarcasterMetadata,
    build_frame_metadata,
    build_signed_frame_metadata,
)
from social.farcaster.quickstart.resolve.fid import Resolved, resolve_with_retry

logger = logging.getLogger(__name__)

SEED_PHRASE_PROMPT = (
    "Enter your Farcaster custody account seed phrase to sign the frame manifest\n"
    "(optional -- leave blank to create an unsigned frame)\n\nSeed phrase: "
)
RETRY_PROMPT = "Enter a different seed phrase to retry (leave blank to continue unsigned): "


def configure_logging(debug: bool = False):
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def configure_sentry(settings: Settings):
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=False,
            integrations=[AioHttpIntegration()],
        )


def describe_failure(error: ResolutionError) -> str:
    if isinstance(error, InvalidPhrase):
        return f"{error}. Check the words and their order."
    if isinstance(error, NotFound):
        return f"{error}. Make sure this is your custody account, not a connected wallet."
    if isinstance(error, TransportOrServerError):
        return f"Could not look up your FID: {error}"
    return str(error)


async def ask_retry(error: ResolutionError) -> Optional[str]:
    print(f"\n{describe_failure(error)}", file=sys.stderr)
    return await asyncio.to_thread(getpass.getpass, RETRY_PROMPT)


async def signMetadata(
    settings: Settings,
    domain: str,
    webhook_url: Optional[str],
    seed_phrase: Optional[str],
) -> FarcasterMetadata:
    frame_config = settings.frame_config()
    if webhook_url is None:
        webhook_url = settings.webhook_url(domain)

    if not seed_phrase:
        logger.info("No seed phrase given, building an unsigned frame")
        return build_frame_metadata(frame_config, domain, webhook_url)

    async with aiohttp.ClientSession() as session:
        outcome = await resolve_with_retry(
            session,
            seed_phrase,
            settings.api_key(),
            ask_retry,
            settings.neynar_api_base,
            settings.lookup_timeout,
        )

    if not isinstance(outcome, Resolved):
        if isinstance(outcome.reason, MissingCredential):
            print(
                "\nNEYNAR_API_KEY is not set, so your FID cannot be looked up.",
                file=sys.stderr,
            )
        return build_frame_metadata(frame_config, domain, webhook_url)

    return build_signed_frame_metadata(
        outcome.fid, outcome.account, domain, webhook_url, frame_config
    )


def writeMetadata(
    metadata: FarcasterMetadata, output: Optional[str], env_line: bool
) -> None:
    text = metadata.to_env_line() if env_line else metadata.to_json(indent=2)
    if output is None:
        print(text)
        return
    Path(output).write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote frame metadata to %s", output)


async def realMain() -> int:
    parser = argparse.ArgumentParser(
        prog="frames-manifest", description="Frame manifest utilities"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    _ = subparsers.add_parser(
        "derive", help="Print the custody address for a seed phrase"
    )
    sign = subparsers.add_parser(
        "sign", help="Build frame metadata with a signed account association"
    )

    sign.add_argument("domain", help="The domain the frame will be deployed on.")
    sign.add_argument(
        "--webhook-url",
        default=None,
        help=(
            "The webhook URL for frame events (default: the Neynar app webhook when "
            "NEYNAR_API_KEY and NEYNAR_CLIENT_ID are set, else https://<domain>/api/webhook)."
        ),
    )
    sign.add_argument(
        "--output", default=None, help="Write the metadata to this file instead of stdout."
    )
    sign.add_argument(
        "--env-line",
        action="store_true",
        help="Emit a FRAME_METADATA=<json> line instead of a JSON document.",
    )

    args: Dict[str, Any] = vars(parser.parse_args())
    command = args.get("command", None)

    settings = Settings()  # type: ignore
    configure_logging(settings.debug)
    configure_sentry(settings)

    seed_phrase = settings.recovery_phrase()

    if command == "derive":
        if not seed_phrase:
            seed_phrase = getpass.getpass("Seed phrase: ")
        try:
            account = derive_account(seed_phrase)
        except InvalidPhrase as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(account.address)
        return 0

    try:
        domain = normalize_domain(args.get("domain", ""))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not seed_phrase:
        seed_phrase = getpass.getpass(SEED_PHRASE_PROMPT)

    try:
        metadata = await signMetadata(
            settings, domain, args.get("webhook_url"), seed_phrase
        )
    except SigningError as e:
        sentry_sdk.capture_exception(e)
        logger.exception("Unable to sign frame manifest")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    writeMetadata(metadata, args.get("output"), args.get("env_line", False))
    if metadata.signed:
        print("Frame manifest generated and signed", file=sys.stderr)
    else:
        print("Frame manifest generated without a signature", file=sys.stderr)
    return 0


def main() -> None:
    sys.exit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()

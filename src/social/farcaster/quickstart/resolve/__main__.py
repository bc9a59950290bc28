from typing import List
import argparse
import aiohttp
import asyncio
import logging

logger = logging.getLogger(__name__)

from social.farcaster.quickstart.app.config import Settings
from social.farcaster.quickstart.errors import ResolutionError
from social.farcaster.quickstart.resolve.fid import resolve_fid


async def realMain() -> None:
    parser = argparse.ArgumentParser(
        prog="frames-resolve", description="Resolve custody addresses to FIDs"
    )
    parser.add_argument("address", nargs="+", help="The custody address(es) to resolve.")
    parser.add_argument(
        "--api-base",
        default=None,
        help="The Neynar API base URL to use for custody address lookups.",
    )

    args = vars(parser.parse_args())

    settings = Settings()
    api_base = args.get("api_base") or settings.neynar_api_base
    addresses: List[str] = args.get("address", [])

    async with aiohttp.ClientSession() as session:
        for address in addresses:
            try:
                fid = await resolve_fid(
                    session,
                    address,
                    settings.api_key(),
                    api_base,
                    settings.lookup_timeout,
                )
                print(f"{address} fid {fid}")
            except ResolutionError:
                logging.exception("Exception resolving custody address %s", address)


def main() -> None:
    asyncio.run(realMain())


if __name__ == "__main__":
    main()

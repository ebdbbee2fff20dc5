#!/usr/bin/env python3
"""Poll the car finder service once and print the channel snapshot.

Settings are read from ``CARNET_*`` environment variables (see
``CarNetConfig.from_env``); command line options override them.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyconnectedcar import (  # noqa: E402
    CarNetClient,
    CarNetConfig,
    ChannelStore,
    ConfigError,
    ThingStatus,
    VehicleHandler,
)


def _jsonable(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--vin", help="Vehicle VIN (default: CARNET_VIN)")
    parser.add_argument("--brand", help="Brand path segment (default: CARNET_BRAND or VW)")
    parser.add_argument("--country", help="Country path segment (default: CARNET_COUNTRY or DE)")
    parser.add_argument("--geocode", action="store_true", help="Resolve addresses via Nominatim")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


async def _run(config: CarNetConfig) -> int:
    store = ChannelStore()
    async with CarNetClient(config) as client:
        handler = VehicleHandler.for_client(client, store)
        handler.initialize()
        updated = await handler.refresh()

    report = {
        "thing": handler.thing_id,
        "status": str(handler.status),
        "detail": str(handler.status_detail),
        "message": handler.status_message,
        "updated": updated,
        "channels": {uid: _jsonable(value) for uid, value in store.snapshot(handler.thing_id).items()},
    }
    print(json.dumps(report, indent=2))
    return 0 if handler.status == ThingStatus.ONLINE else 1


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    for name in ("vin", "brand", "country"):
        value = getattr(args, name)
        if value:
            overrides[name] = value
    if args.geocode:
        overrides["geocoding_enabled"] = True

    try:
        config = CarNetConfig.from_env(**overrides)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    return asyncio.run(_run(config))


if __name__ == "__main__":
    sys.exit(main())

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterator, Tuple

from dotenv import load_dotenv

from streetview_master import MasterConfig, StreetviewMaster

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Replay recorded Street View messages through the master"
    )
    p.add_argument(
        "messages",
        type=str,
        nargs="?",
        default=None,
        help='JSON-lines file of {"channel": ..., "message": ...} records (stdin if omitted)',
    )
    p.add_argument("--active", action="store_true", help="Handle input device events")
    p.add_argument("--config", type=str, default=None, help="JSON configuration file")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


def read_records(lines: Iterator[str]) -> Iterator[Tuple[str, Any]]:
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping line %d: %s", line_number, exc)
            continue
        if not isinstance(record, dict) or "channel" not in record:
            logger.warning("Skipping line %d: missing 'channel'", line_number)
            continue
        yield str(record["channel"]), record.get("message", {})


def load_config(path: str | None) -> MasterConfig:
    # Load .env for STREETVIEW_* overrides if present
    load_dotenv()

    if path is None:
        return MasterConfig.from_env()

    with open(Path(path), "r", encoding="utf-8") as f:
        return MasterConfig.from_dict(json.load(f))


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = load_config(args.config)

    def publish(channel: str, payload: Any) -> None:
        print(json.dumps({"channel": channel, "message": payload}))

    master = StreetviewMaster(config=config, publisher=publish)
    if args.active:
        master.activate()

    if args.messages is None:
        records = read_records(iter(sys.stdin))
        for channel, message in records:
            master.handle_message(channel, message)
    else:
        with open(args.messages, "r", encoding="utf-8") as f:
            for channel, message in read_records(iter(f)):
                master.handle_message(channel, message)

    logger.info("Finished at pano=%s pov=%s", master.pano, master.pov)


if __name__ == "__main__":
    main()

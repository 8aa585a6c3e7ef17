"""Extract a structured SEO record from a saved narrative and print it as JSON."""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from seo_extract import client
from seo_extract.domains.registry import Domain, extract


def read_narrative(source: str) -> str:
    """Read narrative text from a file path, or from stdin when *source* is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run(source: str, domain: str, use_api: bool) -> dict:
    narrative = read_narrative(source)
    if use_api:
        response = client.extract_narrative(narrative, domain)
        return response.get("record", {})
    return extract(narrative, domain).as_dict()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", nargs="?", default="-", help="narrative file, or - for stdin")
    parser.add_argument("--domain", choices=[d.value for d in Domain], required=True)
    parser.add_argument("--api", action="store_true", help="extract via the HTTP API at $API_URL")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    record = run(args.source, args.domain, args.api)
    if not record:
        sys.exit(1)
    print(json.dumps(record, indent=2))

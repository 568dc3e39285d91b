#!/usr/bin/env python3
"""
Sandbox entrypoint for solana-wingman.
Reads scan parameters from stdin JSON, scans Rust sources for gotchas, outputs JSON to stdout.
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from solana_wingman.models import ScanInput
from solana_wingman.scanner import scan_directory

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        sys.exit(1)

    if not isinstance(input_data, dict):
        print(json.dumps({"error": "Input must be a JSON object", "example": {"path": "."}}))
        sys.exit(1)

    if "directory" in input_data and "path" not in input_data:
        input_data["path"] = input_data.pop("directory")

    try:
        scan_input = ScanInput(**input_data)
    except ValidationError as e:
        print(json.dumps({"error": f"Invalid input: {e}"}))
        sys.exit(1)

    try:
        report = scan_directory(scan_input.path)
    except Exception as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)

    print(json.dumps(report.model_dump(mode="json")))
    if scan_input.strict and report.issues:
        sys.exit(1)


if __name__ == "__main__":
    main()

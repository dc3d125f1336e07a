#!/usr/bin/env python3
"""
Sandbox entrypoint for superrez-analyzer.
Reads scan parameters from stdin JSON, scans a local directory, outputs JSON to stdout.

Input:
{
  "path": ".",                  // or "directory"
  "analyzer": "security",       // security | performance, default security
  "format": "json",             // json | text, default json
  "options": {                  // optional AnalyzerConfig overrides
    "extra_exclude_dirs": ["fixtures"],
    "complexity_high": 20
  }
}
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from superrez_analyzer.config import AnalyzerConfig
from superrez_analyzer.engine import ANALYZERS
from superrez_analyzer.report import format_results

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)

VALID_FORMATS = {"json", "text"}


def _fail(payload: dict) -> None:
    print(json.dumps(payload))
    sys.exit(1)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        _fail({"error": f"Invalid JSON input: {e}"})

    if not isinstance(input_data, dict):
        _fail({"error": "Input must be a JSON object"})

    local_path = input_data.get("path") or input_data.get("directory")
    if not local_path:
        _fail(
            {
                "error": "Missing required input. Provide 'path' or 'directory' (local path)",
                "examples": {"local": {"path": ".", "analyzer": "security"}},
            }
        )

    analyzer = input_data.get("analyzer", "security")
    if analyzer not in ANALYZERS:
        _fail({"error": f"Invalid analyzer '{analyzer}'", "valid_analyzers": sorted(ANALYZERS)})

    output_format = input_data.get("format", "json")
    if output_format not in VALID_FORMATS:
        _fail({"error": f"Invalid format '{output_format}'", "valid_formats": sorted(VALID_FORMATS)})

    try:
        config = AnalyzerConfig.model_validate(input_data.get("options") or {})
    except ValidationError as e:
        _fail({"error": f"Invalid options: {e}"})

    scan_path = Path(local_path).resolve()
    if not scan_path.is_dir():
        _fail({"error": f"Path is not a directory: {local_path}"})

    result = asyncio.run(ANALYZERS[analyzer](scan_path, config))

    if output_format == "text":
        print(format_results(result))
    else:
        print(json.dumps(result.model_dump(mode="json")))


if __name__ == "__main__":
    main()

"""
Analyze a single document from the command line.

Runs the full verification pipeline on a local file and prints the
AnalysisResult as JSON. Intended for development and threshold tuning.

Usage:
    # Land certificate scan
    python scripts/analyze_document.py deed.jpg --address "14 Adeola Odeku Street, Lagos" --hint certificate

    # PDF with a custom config and JSON report
    python scripts/analyze_document.py bill.pdf --address "12 Broad Street" --config my.yaml --output out/bill.json
"""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from docverify import DocumentAnalyzer, DocumentInput  # noqa: E402
from docverify.exceptions import DocVerifyError  # noqa: E402
from docverify.utils.io import save_json  # noqa: E402

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run document verification on a PDF or image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=str, help="Path to the document (PDF or image)")
    parser.add_argument(
        "--address",
        type=str,
        default="",
        help="Declared address to corroborate (default: empty)",
    )
    parser.add_argument(
        "--hint",
        type=str,
        default=None,
        choices=["certificate", "id", "utility", "generic"],
        help="Document type hint (default: generic)",
    )
    parser.add_argument(
        "--mime",
        type=str,
        default=None,
        help="MIME type (default: guessed from the file extension)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML (default: bundled config.yaml)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the JSON result to this path",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    file_path = Path(args.file)
    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        return 1

    mime_type = args.mime or mimetypes.guess_type(file_path.name)[0]
    if mime_type is None:
        logger.error(f"Cannot guess MIME type for {file_path.name}; pass --mime")
        return 1

    try:
        config_path = Path(args.config) if args.config else None
        analyzer = DocumentAnalyzer(config_path=config_path)
        document = DocumentInput.create(file_path.read_bytes(), mime_type, args.hint)
    except (DocVerifyError, FileNotFoundError) as e:
        logger.error(f"Cannot analyze {file_path}: {e}")
        return 1

    result = analyzer.analyze(document, args.address)
    report = result.to_dict()

    print(json.dumps(report, indent=2, ensure_ascii=False))

    if args.output:
        save_json(report, Path(args.output))
        logger.info(f"Saved result to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

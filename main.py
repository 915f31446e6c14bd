import os
import sys
import json
import logging
import argparse

from core.config_loader import load_config
from core.scorer.service import get_analysis_types
from database.models import AnalysisStatus
from etl.resume import RawDocument
from pipeline.runner import run_analysis

logger = logging.getLogger(__name__)


def load_parameters(raw: str | None) -> dict:
    """Parse the --params JSON object."""
    if not raw:
        return {}
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON in --params: {e}")
    if not isinstance(params, dict):
        raise SystemExit("--params must be a JSON object")
    return params


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CV Analyzer: score a resume document")
    parser.add_argument('file', help='Path to the resume (pdf, doc, docx, txt or rtf)')
    parser.add_argument('--type', dest='analysis_type', default='overall',
                        help=f"Analysis type: {', '.join(get_analysis_types())} (default: overall)")
    parser.add_argument('--format', dest='doc_format', default=None,
                        help='Declared document format; defaults to the file extension')
    parser.add_argument('--config', default='config.yaml', help='Path to config YAML')
    parser.add_argument('--params', default=None, help='Analysis parameters as a JSON object')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format
    )

    doc_format = args.doc_format or os.path.splitext(args.file)[1].lstrip('.')
    document = RawDocument(format=doc_format, path=args.file)
    logger.info(f"Running {args.analysis_type} analysis on {args.file}")

    record = run_analysis(
        document,
        analysis_type=args.analysis_type,
        parameters=load_parameters(args.params),
        config=config,
    )

    print(json.dumps(record.to_dict(), indent=2, default=str))
    return 0 if record.status is AnalysisStatus.COMPLETED else 1


if __name__ == "__main__":
    sys.exit(main())

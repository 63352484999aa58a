from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, IngestConfig, load_config
from ..logging.init import log_summary, setup_logging
from ..parsing.lines import accept_any_line, is_likely_data_line, segment_lines, split_columns
from ..services.orchestrator import ProcessingError, process_all, scan_listing_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Parse every configured listing into staging rows and export them for review
- Log a SUMMARY line and exit with a code the caller can act on
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_NEEDS_ATTENTION = 2  # blocking ERROR rows or failed files

CONFIG_ENV_VAR = "LISTING_IMPORT_CONFIG"
INSPECT_SAMPLE_LINES = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a failure only warns."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pasted ABT / vaccination listing -> reviewable staging rows")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected columns of the first data lines then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: IngestConfig) -> int:
    try:
        files = scan_listing_files(Path(cfg.source_directory), cfg.sources)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no listing files")
        return EXIT_SUCCESS_ALL
    for path, source in files:
        print(f"FILE: {path.name} variant={source.variant}")
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            print(f"  read_error: {e}")
            continue
        detector = is_likely_data_line if source.variant == "abt" else accept_any_line
        lines = segment_lines(raw, detector)
        if not lines:
            print("  no data lines")
            continue
        for line in lines[:INSPECT_SAMPLE_LINES]:
            print(f"  cols={split_columns(line)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = args.config or Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing listings from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # render_summary_line は "SUMMARY " 付きなので除いて SUMMARY レベルで出力
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.blocking_rows:
        logger.warning(f"{result.blocking_rows} row(s) with errors must be fixed or skipped before commit")
    if result.failed_files or result.blocking_rows:
        return EXIT_NEEDS_ATTENTION
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

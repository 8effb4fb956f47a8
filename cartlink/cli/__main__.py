from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from cartlink.config.loader import DEFAULT_CONFIG_PATH, CartLinkConfig, ConfigError, resolve_config
from cartlink.logging.error_log import ErrorLogBuffer
from cartlink.logging.init import enable_debug, log_summary, setup_logging
from cartlink.services.batch import process_files
from cartlink.services.summary import render_outcome_line, render_summary_line
from cartlink.tabular.delimited import parse_delimited
from cartlink.tabular.detect import TabularFormat, detect_format
from cartlink.tabular.spreadsheet import parse_spreadsheet

"""CLI entrypoint.

Builds one cart link per order file given on the command line:
- Load .env, then config (file / CARTLINK_SHOP_DOMAIN / --shop-domain)
- Process files in order, print one line per file
- Print the SUMMARY line, flush the failed-upload log
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env via python-dotenv.

    override=False: variables already set in the process win over .env.
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="cartlink", description="Order file (CSV / Excel) -> cart deep-link"
    )
    p.add_argument("files", nargs="*", type=Path, help="Order files (.csv, .xlsx, .xls)")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--shop-domain", help="Storefront domain (overrides config and env)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--json", action="store_true", help="Print each outcome as JSON")
    p.add_argument("--inspect-data", action="store_true", help="Print columns & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(files: list[Path]) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        fmt = detect_format(f.name)
        if fmt is None:
            print("  unsupported file type")
            continue
        try:
            if fmt is TabularFormat.DELIMITED:
                rows = parse_delimited(f.read_text(encoding="utf-8-sig"))
            else:
                rows = parse_spreadsheet(f.read_bytes())
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        columns = list(rows[0].values) if rows else []
        print(f"  format={fmt.value} rows={len(rows)} cols={columns}")
        print("    sample_rows=", [r.values for r in rows[:3]])
    return EXIT_SUCCESS_ALL


def _print_outcomes(outcomes, as_json: bool) -> None:
    for outcome in outcomes:
        if as_json:
            print(json.dumps({"file": outcome.file_name, **outcome.to_dict()}, ensure_ascii=False))
        else:
            print(render_outcome_line(outcome))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    if not args.files:
        logger.error("no input files given")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files)

    _load_env_file(Path(".env"))
    try:
        cfg: CartLinkConfig = resolve_config(args.config, shop_domain=args.shop_domain)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"shop_domain={cfg.shop_domain} files={len(args.files)}")

    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))
    result, outcomes = process_files(args.files, cfg, error_log=error_log)
    _print_outcomes(outcomes, args.json)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    # log_summary が "SUMMARY " を付与するので接頭辞を除いて渡す
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Command-line interface for the caption editor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from .codec import (
    detect_format,
    load_captions,
    parse_captions,
    read_caption_text,
    save_captions,
    validate_caption_file,
)
from .config import EditorConfig
from .exceptions import CaptionEditorError
from .models import CaptionFormat
from .stats import calculate_stats
from .text_utils import format_duration
from .validator import validate_captions


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="caption-editor",
        description="Validate, inspect and convert SRT/WebVTT captions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s check video.srt                  # Timing and readability report
  %(prog)s check *.srt --strict             # Fail on warnings too
  %(prog)s stats video.vtt                  # Caption statistics
  %(prog)s convert video.srt -f vtt         # Writes video.vtt
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate caption files")
    check.add_argument("paths", nargs="+", help="Caption files (.srt or .vtt)")
    check.add_argument("--max-cps", dest="max_cps", type=float, default=None)
    check.add_argument("--max-line-length", dest="max_line_length", type=int, default=None)
    check.add_argument("--strict", action="store_true", help="Treat warnings as failures")

    stats = subparsers.add_parser("stats", help="Show caption statistics")
    stats.add_argument("path", help="Caption file")

    convert = subparsers.add_parser("convert", help="Convert between SRT and WebVTT")
    convert.add_argument("input_path", help="Input caption file")
    convert.add_argument("output_path", nargs='?', default=None, help="Output caption file")
    convert.add_argument("-f", "--format", dest="output_format", choices=["srt", "vtt"], default=None)

    return parser.parse_args(argv)


def run_check(paths: List[str], config: EditorConfig, strict: bool = False) -> int:
    """Validate each file and print its problems. Returns the exit code."""
    logger = logging.getLogger(__name__)
    failed = 0

    for raw_path in tqdm(paths, desc="Checking", unit="file", disable=len(paths) < 2):
        path = Path(raw_path).expanduser().resolve()
        error = validate_caption_file(path)
        if error:
            logger.error(error)
            failed += 1
            continue

        try:
            captions = load_captions(path)
        except CaptionEditorError as e:
            logger.error(f"{path.name}: {e}")
            failed += 1
            continue

        result = validate_captions(captions, config.rules)
        for message in result.errors:
            tqdm.write(f"{path.name}: ERROR {message}")
        for message in result.warnings:
            tqdm.write(f"{path.name}: WARNING {message}")

        ok = result.is_valid and not (strict and result.warnings)
        if not ok:
            failed += 1
        tqdm.write(
            f"{path.name}: {'OK' if ok else 'FAILED'} "
            f"({len(captions)} captions, {len(result.errors)} errors, {len(result.warnings)} warnings)"
        )

    logger.info(f"Checked {len(paths)} files, {failed} failed")
    return 1 if failed else 0


def run_stats(path_str: str) -> int:
    """Print statistics for one file."""
    logger = logging.getLogger(__name__)
    path = Path(path_str).expanduser().resolve()
    error = validate_caption_file(path)
    if error:
        logger.error(error)
        return 1

    stats = calculate_stats(load_captions(path))
    print(f"Captions:         {stats.count}")
    print(f"Total duration:   {format_duration(stats.total_duration)}")
    print(f"Average duration: {stats.average_duration / 1000:.2f}s")
    print(f"Average CPS:      {stats.average_cps:.1f}")
    print(f"Longest caption:  {stats.longest} chars")
    print(f"Shortest caption: {stats.shortest} chars")
    return 0


def run_convert(input_path: str, output_path: str | None, config: EditorConfig, explicit_format: bool) -> int:
    """Convert one file between formats."""
    logger = logging.getLogger(__name__)
    in_path = Path(input_path).expanduser().resolve()
    error = validate_caption_file(in_path)
    if error:
        logger.error(error)
        return 1

    content = read_caption_text(in_path)
    source = detect_format(content)

    if explicit_format or output_path is None:
        target = CaptionFormat.coerce(config.default_format)
        if not explicit_format and source is not CaptionFormat.UNKNOWN:
            # Without -f, convert to the other format
            target = CaptionFormat.VTT if source is CaptionFormat.SRT else CaptionFormat.SRT
    else:
        target = CaptionFormat.coerce(Path(output_path).suffix.lstrip('.'))

    out_path = Path(output_path) if output_path else in_path.with_suffix(target.suffix)
    if out_path.resolve() == in_path:
        logger.error(f"Refusing to overwrite input file: {in_path}")
        return 1

    captions = parse_captions(content)
    save_captions(captions, out_path, target)
    logger.info(f"Converted {source.value} -> {target.value}: {out_path}")
    return 0


def main(argv: List[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        config = EditorConfig.from_args(args)
        error = config.validate()
        if error:
            logging.error(error)
            sys.exit(1)

        if args.command == "check":
            exit_code = run_check(args.paths, config, strict=args.strict)
        elif args.command == "stats":
            exit_code = run_stats(args.path)
        else:
            exit_code = run_convert(
                args.input_path, args.output_path, config,
                explicit_format=args.output_format is not None,
            )
        sys.exit(exit_code)
    except CaptionEditorError as e:
        logging.error(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

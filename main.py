"""Command-line interface for extracting text from directories of images."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Callable

from config import AppConfig, configure_logging, load_config, parse_languages, parse_log_level
from errors import OcrToolError
from pipeline import RunSummary, run_directory_to_files, run_directory_to_stdout, run_nested_to_jsonl
from providers import ENGINE_NAMES, create_engine

MODES: tuple[str, ...] = ("files", "jsonl", "stdout")


def _add_common_options(parser: argparse.ArgumentParser) -> None:
	parser.add_argument("--engine", choices=ENGINE_NAMES, default=None, help="OCR engine to use")
	parser.add_argument("--languages", default=None, help="Comma-separated recognition languages")
	parser.add_argument(
		"--recognition-level",
		choices=["accurate", "fast"],
		default=None,
		help="Vision recognition level",
	)
	parser.add_argument("--min_conf", type=float, default=None, help="Minimum confidence threshold for detections")
	parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG or WARNING")


def _add_mode_arguments(parser: argparse.ArgumentParser, mode: str) -> None:
	parser.add_argument("input_directory", help="The path to a directory of image files to extract text from")
	if mode == "files":
		parser.add_argument("output_directory", help="The path to a directory where output JSON files should be saved")
	elif mode == "jsonl":
		parser.add_argument("output_file", help="The path of the JSON-Lines file to create")
	_add_common_options(parser)


def build_mode_parser(mode: str) -> argparse.ArgumentParser:
	"""Build the parser for a single run mode's standalone entry point."""
	descriptions = {
		"files": "Write one pretty JSON file of detections per image",
		"jsonl": "Write one JSON line of detections per image across subdirectories",
		"stdout": "Print a JSON object mapping each image to its detections",
	}
	parser = argparse.ArgumentParser(prog=f"ocr-to-{mode}", description=descriptions[mode])
	_add_mode_arguments(parser, mode)
	parser.set_defaults(mode=mode)
	return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
	"""Parse command-line arguments for the subcommand dispatcher."""
	parser = argparse.ArgumentParser(description="Directory OCR text extraction CLI")
	subparsers = parser.add_subparsers(dest="mode", required=True)
	for mode in MODES:
		_add_mode_arguments(subparsers.add_parser(mode, help=f"Run in {mode} mode"), mode)
	return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace, config: AppConfig) -> AppConfig:
	"""Overlay command-line options on the environment configuration."""
	overrides: dict[str, object] = {}
	if args.engine:
		overrides["engine"] = args.engine
	if args.languages is not None:
		overrides["languages"] = parse_languages(args.languages)
	if args.recognition_level:
		overrides["recognition_level"] = args.recognition_level
	if args.min_conf is not None:
		overrides["min_conf"] = args.min_conf
	if args.log_level:
		overrides["log_level"] = parse_log_level(args.log_level)
	return replace(config, **overrides)


def run(args: argparse.Namespace, config: AppConfig) -> RunSummary:
	"""Execute the selected run mode."""
	engine = create_engine(config)
	if args.mode == "files":
		return run_directory_to_files(args.input_directory, args.output_directory, engine, config.min_conf)
	if args.mode == "jsonl":
		return run_nested_to_jsonl(args.input_directory, args.output_file, engine, config.min_conf)
	return run_directory_to_stdout(args.input_directory, engine, min_conf=config.min_conf)


def _execute(args: argparse.Namespace) -> int:
	configure_logging()
	try:
		config = resolve_config(args, load_config())
		configure_logging(config.log_level)
		run(args, config)
	except OcrToolError as exc:
		logging.exception("OCR run aborted [%s]: %s", exc.kind, exc)
		return 1
	except Exception as exc:  # noqa: BLE001
		logging.exception("OCR processing failed: %s", exc)
		return 1
	return 0


def main(argv: list[str] | None = None) -> int:
	"""Entry point for the subcommand CLI."""
	return _execute(parse_arguments(argv))


def _mode_entry(mode: str) -> Callable[[list[str] | None], int]:
	def entry(argv: list[str] | None = None) -> int:
		return _execute(build_mode_parser(mode).parse_args(argv))

	entry.__name__ = f"{mode}_main"
	entry.__doc__ = f"Entry point for the standalone {mode} mode."
	return entry


files_main = _mode_entry("files")
jsonl_main = _mode_entry("jsonl")
stdout_main = _mode_entry("stdout")


if __name__ == "__main__":
	raise SystemExit(main())

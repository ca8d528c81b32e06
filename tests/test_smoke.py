"""Smoke tests for schema and CLI scaffolding."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from main import build_mode_parser, parse_arguments
from schemas import Detection, FileDetection, Rect


def test_schema_construction() -> None:
	"""Ensure schemas can be instantiated and serialize with stable field names."""
	detection = Detection(text="hello", bounding_box=Rect(min_x=1, min_y=2, max_x=3, max_y=4), confidence=0.9)
	assert detection.bounding_box.width == 2
	record = FileDetection(
		text="hello", x=1, y=2, w=2, h=2, rel_x=0.1, rel_y=0.2, rel_w=0.2, rel_h=0.2, confidence=0.9
	)
	assert list(record.model_dump(by_alias=True)) == [
		"text", "x", "y", "w", "h", "relX", "relY", "relW", "relH", "confidence",
	]


def test_rect_rejects_inverted_corners() -> None:
	"""Rect requires min <= max on both axes."""
	with pytest.raises(ValidationError):
		Rect(min_x=5, min_y=0, max_x=1, max_y=1)


def test_detection_is_immutable() -> None:
	"""Detections cannot be mutated after creation."""
	detection = Detection(text="a", bounding_box=Rect(min_x=0, min_y=0, max_x=0, max_y=0), confidence=0.5)
	with pytest.raises(ValidationError):
		detection.text = "b"


def test_cli_parser_subcommands() -> None:
	"""Validate the dispatcher accepts each mode with its positionals and switches."""
	args = parse_arguments(["files", "in", "out", "--engine", "tesseract", "--min_conf", "0.7"])
	assert args.mode == "files"
	assert args.input_directory == "in"
	assert args.output_directory == "out"
	assert args.engine == "tesseract"
	assert args.min_conf == 0.7

	args = parse_arguments(["jsonl", "in", "out.jsonl", "--languages", "en-US,fr-FR"])
	assert args.output_file == "out.jsonl"
	assert args.languages == "en-US,fr-FR"

	args = parse_arguments(["stdout", "in", "--recognition-level", "fast"])
	assert args.recognition_level == "fast"


def test_mode_parser_requires_output_directory() -> None:
	"""The standalone files entry point needs both directories."""
	with pytest.raises(SystemExit):
		build_mode_parser("files").parse_args(["in"])
	args = build_mode_parser("stdout").parse_args(["in"])
	assert args.mode == "stdout"

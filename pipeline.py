"""Run driver: enumerate images, recognize text, and emit records per output mode.

Every mode is the same sequential pipeline (load, recognize, normalize, emit)
with a different enumeration strategy and emitter. The first failure aborts the
run; outputs already written for earlier images stay on disk.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Protocol

from providers.base import OcrEngine
from schemas import Detection, FileDetection, ImageDetection, RawDetection
from utils.geometry import relative
from utils.image_io import (
	ensure_input_directory,
	ensure_output_directory,
	list_images,
	list_subdirectories,
	load_image,
)
from utils.io_json import JsonlWriter, dump_json_atomic, format_json

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".txt"


@dataclass(frozen=True)
class ImageResult:
	"""Detections recognized on one image, with the image's pixel size."""
	name: str
	width: int
	height: int
	detections: list[Detection]


@dataclass
class RunSummary:
	"""Counts of images processed and detections emitted in one run."""
	images: int = 0
	detections: int = 0


class Emitter(Protocol):
	"""Output strategy: receives each image result, then finishes the run."""

	def emit(self, result: ImageResult) -> None: ...

	def finish(self) -> None: ...


def to_file_detection(detection: Detection, width: int, height: int) -> FileDetection:
	"""Build the per-image file record with absolute and relative box fields."""
	rect = detection.bounding_box
	rel = relative(rect, width, height)
	return FileDetection(
		text=detection.text,
		x=rect.min_x,
		y=rect.min_y,
		w=rect.width,
		h=rect.height,
		rel_x=rel.rel_x,
		rel_y=rel.rel_y,
		rel_w=rel.rel_w,
		rel_h=rel.rel_h,
		confidence=detection.confidence,
	)


def to_image_detection(image: str, detection: Detection, width: int, height: int) -> ImageDetection:
	"""Build the JSON-Lines record, prefixed with the source image name."""
	record = to_file_detection(detection, width, height)
	return ImageDetection(image=image, **record.model_dump())


def to_raw_detection(detection: Detection) -> RawDetection:
	"""Build the stdout record carrying the raw pixel corners."""
	rect = detection.bounding_box
	return RawDetection(
		text=detection.text,
		min_x=rect.min_x,
		max_x=rect.max_x,
		min_y=rect.min_y,
		max_y=rect.max_y,
		confidence=detection.confidence,
	)


def _dump(records: Iterable[Any]) -> list[dict[str, Any]]:
	"""Serialize records with their JSON field names."""
	return [record.model_dump(by_alias=True) for record in records]


class DirectoryFileEmitter:
	"""Writes ``<output_dir>/<image>.txt`` holding ``{"detections": [...]}``."""

	def __init__(self, output_dir: Path) -> None:
		self.output_dir = output_dir

	def emit(self, result: ImageResult) -> None:
		records = [to_file_detection(d, result.width, result.height) for d in result.detections]
		target = self.output_dir / f"{result.name}{OUTPUT_SUFFIX}"
		dump_json_atomic({"detections": _dump(records)}, target)
		logger.debug("Wrote %s", target)

	def finish(self) -> None:
		return None


class JsonlEmitter:
	"""Writes one ``{"detections": [...]}`` line per image that has detections."""

	def __init__(self, writer: JsonlWriter) -> None:
		self.writer = writer

	def emit(self, result: ImageResult) -> None:
		if not result.detections:
			logger.debug("No detections in %s; skipping line", result.name)
			return
		records = [to_image_detection(result.name, d, result.width, result.height) for d in result.detections]
		self.writer.write({"detections": _dump(records)})

	def finish(self) -> None:
		return None


@dataclass
class StdoutEmitter:
	"""Collects every image's raw detections and prints one JSON object at the end."""
	stream: IO[str] = field(default_factory=lambda: sys.stdout)
	collected: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

	def emit(self, result: ImageResult) -> None:
		self.collected[result.name] = _dump(to_raw_detection(d) for d in result.detections)

	def finish(self) -> None:
		self.stream.write(format_json(self.collected))
		self.stream.write("\n")
		self.stream.flush()


def process_image(path: Path, engine: OcrEngine, min_conf: float = 0.0) -> ImageResult:
	"""Load one image, run the engine on it and keep detections at or above ``min_conf``."""
	logger.info('Processing "%s"', path)
	image = load_image(path)
	try:
		detections = engine.recognize(image)
	finally:
		image.close()
	kept = [d for d in detections if d.confidence >= min_conf]
	return ImageResult(name=image.name, width=image.width, height=image.height, detections=kept)


def run_pipeline(
	targets: Iterable[Path],
	engine: OcrEngine,
	emitter: Emitter,
	min_conf: float = 0.0,
) -> RunSummary:
	"""Process targets strictly in order, emitting each result before the next image."""
	summary = RunSummary()
	for path in targets:
		result = process_image(path, engine, min_conf)
		emitter.emit(result)
		summary.images += 1
		summary.detections += len(result.detections)
	emitter.finish()
	logger.info("Processed %d images with %d detections", summary.images, summary.detections)
	return summary


def iter_nested_images(root: Path) -> Iterator[Path]:
	"""Yield images of each top-level entry of ``root``, treating every entry as a directory."""
	for subdirectory in list_subdirectories(root):
		yield from list_images(subdirectory)


def run_directory_to_files(
	input_dir: str | Path,
	output_dir: str | Path,
	engine: OcrEngine,
	min_conf: float = 0.0,
) -> RunSummary:
	"""Mode 1: write one pretty JSON file per image into the output directory."""
	logger.info("Input directory: %s", input_dir)
	logger.info("Output directory: %s", output_dir)
	source = ensure_input_directory(input_dir)
	target = ensure_output_directory(output_dir)
	return run_pipeline(list_images(source), engine, DirectoryFileEmitter(target), min_conf)


def run_nested_to_jsonl(
	input_dir: str | Path,
	output_file: str | Path,
	engine: OcrEngine,
	min_conf: float = 0.0,
) -> RunSummary:
	"""Mode 2: write one JSON line per image with detections, across subdirectories."""
	logger.info("Input directory: %s", input_dir)
	logger.info("Output file: %s", output_file)
	source = ensure_input_directory(input_dir)
	with JsonlWriter(Path(output_file).expanduser()) as writer:
		return run_pipeline(iter_nested_images(source), engine, JsonlEmitter(writer), min_conf)


def run_directory_to_stdout(
	input_dir: str | Path,
	engine: OcrEngine,
	stream: IO[str] | None = None,
	min_conf: float = 0.0,
) -> RunSummary:
	"""Mode 3: print one JSON object mapping each image to its raw detections."""
	logger.info("Input directory: %s", input_dir)
	source = ensure_input_directory(input_dir)
	emitter = StdoutEmitter(stream=stream) if stream is not None else StdoutEmitter()
	return run_pipeline(list_images(source), engine, emitter, min_conf)

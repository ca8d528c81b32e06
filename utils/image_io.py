"""Utility helpers for locating and decoding input images."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from errors import CouldNotCreateOutputError, InvalidImageError, NotDirectoryError, NotFoundError

IMAGE_SUFFIXES: tuple[str, ...] = (".jpg", ".png")

logger = logging.getLogger(__name__)


@dataclass
class DecodedImage:
	"""An in-memory bitmap owned by the run for the duration of one file."""
	path: Path
	width: int
	height: int
	bitmap: Image.Image

	@property
	def name(self) -> str:
		return self.path.name

	def close(self) -> None:
		self.bitmap.close()


def ensure_input_directory(directory: str | Path) -> Path:
	"""Validate that the provided path exists and points to a directory."""
	path = Path(directory).expanduser()
	if not path.exists():
		raise NotFoundError(f"Input directory not found: {path}", path)
	if not path.is_dir():
		raise NotDirectoryError(f"Input path is not a directory: {path}", path)
	return path


def ensure_output_directory(directory: str | Path) -> Path:
	"""Create the output directory if needed; refuse paths taken by a non-directory."""
	path = Path(directory).expanduser()
	if not path.exists():
		logger.info("Creating output directory")
		try:
			path.mkdir(parents=True, exist_ok=True)
		except OSError as exc:
			raise CouldNotCreateOutputError(f"Could not create output directory {path}: {exc}", path) from exc
	elif path.is_dir():
		logger.info("Output directory already exists")
	else:
		raise CouldNotCreateOutputError(f"Output path exists and is not a directory: {path}", path)
	return path


def list_images(directory: str | Path) -> list[Path]:
	"""Return the ``.jpg``/``.png`` entries of a directory in listing order."""
	path = ensure_input_directory(directory)
	return [path / name for name in os.listdir(path) if name.endswith(IMAGE_SUFFIXES)]


def list_subdirectories(root: str | Path) -> list[Path]:
	"""Return every immediate entry of ``root``; each is expected to be a directory."""
	path = ensure_input_directory(root)
	return [path / name for name in os.listdir(path)]


def load_image(path: Path) -> DecodedImage:
	"""Decode an image file into its upright frame and read its pixel dimensions."""
	try:
		bitmap = Image.open(path)
	except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as exc:
		raise InvalidImageError(f"Could not decode image {path}: {exc}", path) from exc
	try:
		bitmap.load()
	except (OSError, Image.DecompressionBombError) as exc:
		bitmap.close()
		raise InvalidImageError(f"Could not decode image {path}: {exc}", path) from exc
	width, height = bitmap.size
	if width <= 0 or height <= 0:
		bitmap.close()
		raise InvalidImageError(f"Image has no pixels: {path} ({width}x{height})", path)
	upright = ImageOps.exif_transpose(bitmap)
	if upright is not bitmap:
		bitmap.close()
	width, height = upright.size
	return DecodedImage(path=path, width=width, height=height, bitmap=upright)

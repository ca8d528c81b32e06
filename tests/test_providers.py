"""Tests for provider-specific parsing that does not need a live engine."""
from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

from errors import UnsupportedPlatformError
from providers.tesseract_ocr import TesseractOcrEngine
from utils.image_io import load_image

IMAGE_TO_DATA = {
	"text": ["", "Hello", "world", "  ", "Second"],
	"conf": ["-1", "90", "70", "-1", "50"],
	"block_num": [1, 1, 1, 1, 1],
	"par_num": [1, 1, 1, 1, 1],
	"line_num": [0, 1, 1, 1, 2],
	"left": [0, 60, 10, 0, 20],
	"top": [0, 10, 12, 0, 50],
	"width": [200, 40, 40, 0, 60],
	"height": [100, 10, 8, 0, 10],
}


def test_tesseract_groups_words_into_lines() -> None:
	engine = TesseractOcrEngine.__new__(TesseractOcrEngine)
	observations = engine._group_lines(IMAGE_TO_DATA, 200, 100)
	assert len(observations) == 2

	first = observations[0]
	top = first.top_candidate()
	assert top is not None
	assert top.text == "world Hello"
	assert top.confidence == pytest.approx(0.8)
	box = first.locate(top.text)
	assert (box.x, box.y, box.w, box.h) == pytest.approx((0.05, 0.1, 0.45, 0.1))

	second = observations[1].top_candidate()
	assert second is not None
	assert second.text == "Second"
	assert second.confidence == pytest.approx(0.5)


@pytest.mark.skipif(sys.platform == "darwin", reason="Vision is available on macOS")
def test_vision_engine_unsupported_off_macos() -> None:
	from providers.vision_ocr import VisionOcrEngine

	with pytest.raises(UnsupportedPlatformError) as info:
		VisionOcrEngine()
	assert info.value.kind == "UnsupportedPlatform"


class _FakeQuartz:
	"""Records the encoded payload instead of building a CGImage."""

	def __init__(self) -> None:
		self.payload = b""

	def CGImageSourceCreateWithData(self, data: bytes, options: object) -> bytes:
		self.payload = data
		return data

	def CGImageSourceCreateImageAtIndex(self, source: bytes, index: int, options: object) -> str:
		return "cg-image"


class _FakeNSData:
	@staticmethod
	def dataWithBytes_length_(payload: bytes, length: int) -> bytes:
		return payload[:length]


def test_vision_encodes_cmyk_jpeg_for_core_graphics(
	tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
	"""CMYK photos are converted to RGB before the PNG hand-off instead of aborting."""
	from providers import vision_ocr

	target = tmp_path / "cmyk.jpg"
	Image.new("CMYK", (20, 10)).save(target, format="JPEG")
	quartz = _FakeQuartz()
	monkeypatch.setattr(vision_ocr, "Quartz", quartz)
	monkeypatch.setattr(vision_ocr, "NSData", _FakeNSData)
	engine = vision_ocr.VisionOcrEngine.__new__(vision_ocr.VisionOcrEngine)

	image = load_image(target)
	try:
		assert image.bitmap.mode == "CMYK"
		assert engine._to_cg_image(image) == "cg-image"
	finally:
		image.close()
	with Image.open(io.BytesIO(quartz.payload)) as encoded:
		assert encoded.format == "PNG"
		assert encoded.mode == "RGB"
		assert encoded.size == (20, 10)

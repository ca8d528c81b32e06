"""Apple Vision text recognition provider (macOS 10.15+ through PyObjC)."""


import io
from dataclasses import dataclass, field
from typing import Any

from PIL import Image

from errors import ImagePreparationError, ProcessError, UnsupportedPlatformError
from providers.base import OcrEngine, TextCandidate, TextObservation
from schemas import NormalizedBox
from utils.image_io import DecodedImage

try:
	import Quartz
	import Vision
	from Foundation import NSData, NSMakeRange
except ImportError:
	Quartz = None  # type: ignore[assignment]
	Vision = None  # type: ignore[assignment]
	NSData = None  # type: ignore[assignment]
	NSMakeRange = None  # type: ignore[assignment]

MAXIMUM_CANDIDATES = 1
PNG_MODES: tuple[str, ...] = ("1", "L", "LA", "P", "RGB", "RGBA")


def _utf16_length(text: str) -> int:
	return len(text.encode("utf-16-le")) // 2


def _png_compatible(bitmap: Image.Image) -> Image.Image:
	"""Convert modes PNG cannot store, such as CMYK or YCbCr, to RGB(A)."""
	if bitmap.mode in PNG_MODES:
		return bitmap
	return bitmap.convert("RGBA" if "A" in bitmap.mode else "RGB")


@dataclass
class VisionOcrEngine(OcrEngine):
	"""Runs ``VNRecognizeTextRequest`` on each decoded image."""

	recognition_level: str = "accurate"
	languages: list[str] = field(default_factory=list)
	language_correction: bool = True

	name = "vision"

	def __post_init__(self) -> None:
		super().__init__()
		if Vision is None or Quartz is None:
			raise UnsupportedPlatformError(
				"Apple Vision is unavailable. It requires macOS with pyobjc-framework-Vision installed."
			)
		if not hasattr(Vision, "VNRecognizeTextRequest"):
			raise UnsupportedPlatformError("VNRecognizeTextRequest requires macOS 10.15 or newer.")

	def _observe(self, image: DecodedImage) -> list[TextObservation]:
		cg_image = self._to_cg_image(image)
		handler = Vision.VNImageRequestHandler.alloc().initWithCGImage_options_(cg_image, None)
		request = self._build_request()
		success, error = handler.performRequests_error_([request], None)
		if not success:
			raise ProcessError(f"Vision text recognition failed for {image.path}: {error}", image.path)
		return [self._to_observation(result) for result in (request.results() or [])]

	def _build_request(self) -> Any:
		request = Vision.VNRecognizeTextRequest.alloc().init()
		if self.recognition_level == "fast":
			request.setRecognitionLevel_(Vision.VNRequestTextRecognitionLevelFast)
		else:
			request.setRecognitionLevel_(Vision.VNRequestTextRecognitionLevelAccurate)
		request.setUsesLanguageCorrection_(self.language_correction)
		if self.languages:
			request.setRecognitionLanguages_(self.languages)
		return request

	def _to_cg_image(self, image: DecodedImage) -> Any:
		buffer = io.BytesIO()
		try:
			_png_compatible(image.bitmap).save(buffer, format="PNG")
		except (OSError, ValueError) as exc:
			raise ImagePreparationError(f"Could not encode bitmap for {image.path}: {exc}", image.path) from exc
		payload = buffer.getvalue()
		data = NSData.dataWithBytes_length_(payload, len(payload))
		source = Quartz.CGImageSourceCreateWithData(data, None)
		cg_image = Quartz.CGImageSourceCreateImageAtIndex(source, 0, None) if source is not None else None
		if cg_image is None:
			raise ImagePreparationError(f"Could not create CGImage for {image.path}", image.path)
		return cg_image

	def _to_observation(self, result: Any) -> TextObservation:
		ranked = list(result.topCandidates_(MAXIMUM_CANDIDATES))
		candidates = [TextCandidate(text=str(c.string()), confidence=float(c.confidence())) for c in ranked]

		def locate(text: str) -> NormalizedBox | None:
			box_observation, _error = ranked[0].boundingBoxForRange_error_(NSMakeRange(0, _utf16_length(text)), None)
			if box_observation is None:
				return None
			rect = box_observation.boundingBox()
			return NormalizedBox(x=rect.origin.x, y=rect.origin.y, w=rect.size.width, h=rect.size.height)

		return TextObservation(candidates=candidates, locate=locate)

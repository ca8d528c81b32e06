"""Tesseract provider built on pytesseract, grouping words into text lines."""


from dataclasses import dataclass, field
from typing import Any

from errors import ProcessError, UnsupportedPlatformError
from providers.base import OcrEngine, TextCandidate, TextObservation
from schemas import NormalizedBox
from utils.image_io import DecodedImage

try:
	import pytesseract
	from pytesseract import Output
except ImportError:
	pytesseract = None  # type: ignore[assignment]
	Output = None  # type: ignore[assignment]

LineKey = tuple[int, int, int]


def _safe_float(value: Any) -> float:
	try:
		return float(value)
	except (TypeError, ValueError):
		return -1.0


@dataclass
class TesseractOcrEngine(OcrEngine):
	"""Runs ``image_to_data`` and reports one observation per text line."""

	languages: list[str] = field(default_factory=list)
	psm: int = 3

	name = "tesseract"

	def __post_init__(self) -> None:
		super().__init__()
		if pytesseract is None:
			raise UnsupportedPlatformError("pytesseract is not installed. Please install pytesseract.")
		try:
			pytesseract.get_tesseract_version()
		except pytesseract.TesseractNotFoundError as exc:
			raise UnsupportedPlatformError("The tesseract binary was not found on PATH.") from exc

	def _observe(self, image: DecodedImage) -> list[TextObservation]:
		lang = "+".join(self.languages) or None
		try:
			data = pytesseract.image_to_data(
				image.bitmap.convert("RGB"),
				lang=lang,
				config=f"--psm {self.psm}",
				output_type=Output.DICT,
			)
		except (pytesseract.TesseractError, RuntimeError, OSError) as exc:
			raise ProcessError(f"Tesseract failed for {image.path}: {exc}", image.path) from exc
		return self._group_lines(data, image.width, image.height)

	def _group_lines(self, data: dict[str, list[Any]], width: int, height: int) -> list[TextObservation]:
		groups: dict[LineKey, list[int]] = {}
		for index, raw_text in enumerate(data.get("text", [])):
			if not str(raw_text or "").strip():
				continue
			if _safe_float(data["conf"][index]) < 0:
				continue
			key = (int(data["block_num"][index]), int(data["par_num"][index]), int(data["line_num"][index]))
			groups.setdefault(key, []).append(index)

		observations: list[TextObservation] = []
		for indices in groups.values():
			indices.sort(key=lambda j: int(data["left"][j]))
			text = " ".join(str(data["text"][j]).strip() for j in indices)
			confidence = sum(_safe_float(data["conf"][j]) for j in indices) / len(indices) / 100.0
			left = min(int(data["left"][j]) for j in indices)
			top = min(int(data["top"][j]) for j in indices)
			right = max(int(data["left"][j]) + int(data["width"][j]) for j in indices)
			bottom = max(int(data["top"][j]) + int(data["height"][j]) for j in indices)
			box = NormalizedBox(x=left / width, y=top / height, w=(right - left) / width, h=(bottom - top) / height)
			observations.append(
				TextObservation(
					candidates=[TextCandidate(text=text, confidence=min(confidence, 1.0))],
					locate=lambda _text, box=box: box,
				)
			)
		return observations

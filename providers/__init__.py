"""OCR engine providers."""

from config import AppConfig
from providers.base import OcrEngine

ENGINE_NAMES: tuple[str, ...] = ("vision", "tesseract")


def create_engine(config: AppConfig) -> OcrEngine:
	"""Instantiate the engine named in the configuration."""
	if config.engine == "vision":
		from providers.vision_ocr import VisionOcrEngine

		return VisionOcrEngine(
			recognition_level=config.recognition_level,
			languages=list(config.languages),
			language_correction=config.language_correction,
		)
	if config.engine == "tesseract":
		from providers.tesseract_ocr import TesseractOcrEngine

		return TesseractOcrEngine(languages=list(config.languages))
	raise ValueError(f"Unknown OCR engine: {config.engine}")

"""Engine-neutral OCR invocation: top candidate selection and pixel conversion."""


import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from schemas import Detection, NormalizedBox
from utils.geometry import pixel_rect
from utils.image_io import DecodedImage

EMPTY_BOX = NormalizedBox()


@dataclass(frozen=True)
class TextCandidate:
	"""One reading of a text region, ranked by the engine."""
	text: str
	confidence: float


@dataclass(frozen=True)
class TextObservation:
	"""A recognized text region as reported by an engine.

	``locate`` computes the normalized bounding box of the given substring of the
	top candidate; it may return ``None`` or raise when the box is unavailable.
	"""
	candidates: list[TextCandidate]
	locate: Callable[[str], NormalizedBox | None] = field(default=lambda text: None)

	def top_candidate(self) -> TextCandidate | None:
		return self.candidates[0] if self.candidates else None


class OcrEngine(ABC):
	"""Capability interface: ``recognize(image) -> [Detection]``."""

	name = "base"

	def __init__(self) -> None:
		self._logger = logging.getLogger(self.__class__.__name__)

	def recognize(self, image: DecodedImage) -> list[Detection]:
		observations = self._observe(image)
		detections: list[Detection] = []
		for observation in observations:
			candidate = observation.top_candidate()
			if candidate is None:
				continue
			box = self._bounding_box(observation, candidate)
			detections.append(
				Detection(
					text=candidate.text,
					bounding_box=pixel_rect(box, image.width, image.height),
					confidence=candidate.confidence,
				)
			)
		self._logger.debug("%s: %d detections", image.name, len(detections))
		return detections

	def _bounding_box(self, observation: TextObservation, candidate: TextCandidate) -> NormalizedBox:
		try:
			box = observation.locate(candidate.text)
		except Exception as exc:  # noqa: BLE001
			self._logger.debug("No bounding box for %r: %s", candidate.text, exc)
			return EMPTY_BOX
		return box if box is not None else EMPTY_BOX

	@abstractmethod
	def _observe(self, image: DecodedImage) -> list[TextObservation]:
		"""Run the underlying engine; raise ``ProcessError`` on engine failure."""
		raise NotImplementedError

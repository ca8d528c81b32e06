"""Pydantic schemas for detections and their serialized output records."""


from pydantic import BaseModel, ConfigDict, Field, model_validator


class Rect(BaseModel):
	"""Axis-aligned rectangle in pixel units."""
	model_config = ConfigDict(frozen=True)

	min_x: float
	min_y: float
	max_x: float
	max_y: float

	@model_validator(mode="after")
	def _check_order(self) -> "Rect":
		if self.min_x > self.max_x or self.min_y > self.max_y:
			raise ValueError(f"Rect corners out of order: {self!r}")
		return self

	@property
	def width(self) -> float:
		return self.max_x - self.min_x

	@property
	def height(self) -> float:
		return self.max_y - self.min_y


class NormalizedBox(BaseModel):
	"""Bounding box in 0..1 image units as reported by an engine."""
	model_config = ConfigDict(frozen=True)

	x: float = 0.0
	y: float = 0.0
	w: float = 0.0
	h: float = 0.0


class RelativeBox(BaseModel):
	"""Rectangle expressed as fractions of the image dimensions."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	rel_x: float = Field(alias="relX")
	rel_y: float = Field(alias="relY")
	rel_w: float = Field(alias="relW")
	rel_h: float = Field(alias="relH")


class Detection(BaseModel):
	"""A single recognized text span on one source image."""
	model_config = ConfigDict(frozen=True)

	text: str
	bounding_box: Rect
	confidence: float = Field(ge=0.0, le=1.0)


class FileDetection(BaseModel):
	"""Record written to the per-image ``.txt`` files."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	text: str
	x: float
	y: float
	w: float
	h: float
	rel_x: float = Field(alias="relX")
	rel_y: float = Field(alias="relY")
	rel_w: float = Field(alias="relW")
	rel_h: float = Field(alias="relH")
	confidence: float


class ImageDetection(BaseModel):
	"""Record written to the JSON-Lines file; carries its source image name."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	image: str
	text: str
	x: float
	y: float
	w: float
	h: float
	rel_x: float = Field(alias="relX")
	rel_y: float = Field(alias="relY")
	rel_w: float = Field(alias="relW")
	rel_h: float = Field(alias="relH")
	confidence: float


class RawDetection(BaseModel):
	"""Record printed to stdout with the raw pixel corners."""
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	text: str
	min_x: float = Field(alias="minX")
	max_x: float = Field(alias="maxX")
	min_y: float = Field(alias="minY")
	max_y: float = Field(alias="maxY")
	confidence: float

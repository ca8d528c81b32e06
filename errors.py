"""Error kinds raised while extracting text from image directories."""


class OcrToolError(Exception):
	"""Base class for every terminal failure of an extraction run."""

	kind = "OcrToolError"

	def __init__(self, message: str, path: object | None = None) -> None:
		super().__init__(message)
		self.path = path


class NotFoundError(OcrToolError):
	"""The input directory does not exist."""

	kind = "NotFound"


class NotDirectoryError(OcrToolError):
	"""An input path exists but is not a directory."""

	kind = "NotDirectory"


class CouldNotCreateOutputError(OcrToolError):
	"""The output path is occupied by a non-directory or cannot be created."""

	kind = "CouldNotCreateOutput"


class InvalidImageError(OcrToolError):
	"""An image file could not be read or decoded."""

	kind = "InvalidImage"


class ImagePreparationError(OcrToolError):
	"""The decoded bitmap could not be converted into the engine's image type."""

	kind = "CGImage"


class ProcessError(OcrToolError):
	"""The recognition engine reported a failure."""

	kind = "ProcessError"


class UnsupportedPlatformError(OcrToolError):
	"""The requested engine is not available on this host."""

	kind = "UnsupportedPlatform"

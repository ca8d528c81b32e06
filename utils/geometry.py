"""Coordinate conversions between engine, pixel and relative spaces."""

from schemas import NormalizedBox, Rect, RelativeBox


def pixel_rect(box: NormalizedBox, width: int, height: int) -> Rect:
	"""Scale a normalized box to pixel units for an image of the given size.

	The engine's origin and axis orientation are kept as-is; no clamping is applied.
	"""
	return Rect(
		min_x=box.x * width,
		min_y=box.y * height,
		max_x=(box.x + box.w) * width,
		max_y=(box.y + box.h) * height,
	)


def relative(rect: Rect, width: int, height: int) -> RelativeBox:
	"""Express a pixel rectangle as fractions of the image dimensions."""
	if width <= 0 or height <= 0:
		raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
	return RelativeBox(
		rel_x=rect.min_x / width,
		rel_y=rect.min_y / height,
		rel_w=(rect.max_x - rect.min_x) / width,
		rel_h=(rect.max_y - rect.min_y) / height,
	)

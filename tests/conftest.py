"""Shared fixtures for Pillow-generated images."""
from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


@pytest.fixture
def make_image() -> Callable[..., Path]:
	"""Write a solid-colour image of the given size and return its path."""

	def _make(path: Path, size: tuple[int, int] = (200, 100)) -> Path:
		path.parent.mkdir(parents=True, exist_ok=True)
		fmt = "PNG" if path.suffix == ".png" else "JPEG"
		Image.new("RGB", size, color=(255, 255, 255)).save(path, format=fmt)
		return path

	return _make

"""Application configuration management for the directory OCR CLI."""


import logging
import os
from dataclasses import dataclass
from typing import Final

from dotenv import load_dotenv

ENV_FILE: Final[str] = ".env"
DEFAULT_ENGINE: Final[str] = "vision"
DEFAULT_RECOGNITION_LEVEL: Final[str] = "accurate"
DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
	"""Aggregate configuration for the CLI runtime."""
	engine: str = DEFAULT_ENGINE
	languages: tuple[str, ...] = ()
	recognition_level: str = DEFAULT_RECOGNITION_LEVEL
	language_correction: bool = True
	min_conf: float = 0.0
	log_level: int = DEFAULT_LOG_LEVEL


def load_config() -> AppConfig:
	"""Load environment-based configuration values.

	Returns:
		AppConfig: Parsed configuration; every value falls back to its default.
	"""
	load_dotenv(ENV_FILE)
	return AppConfig(
		engine=os.getenv("OCR_ENGINE", DEFAULT_ENGINE).strip().lower(),
		languages=parse_languages(os.getenv("OCR_LANGUAGES", "")),
		recognition_level=os.getenv("OCR_RECOGNITION_LEVEL", DEFAULT_RECOGNITION_LEVEL).strip().lower(),
		language_correction=_parse_bool(os.getenv("OCR_LANGUAGE_CORRECTION"), default=True),
		min_conf=float(os.getenv("OCR_MIN_CONF", "0.0")),
		log_level=parse_log_level(os.getenv("OCR_LOG_LEVEL")),
	)


def configure_logging(level: int = DEFAULT_LOG_LEVEL) -> None:
	"""Configure the root logger; records go to stderr so stdout stays machine-readable."""
	logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def parse_languages(value: str) -> tuple[str, ...]:
	"""Split a comma-separated language list, dropping blanks."""
	return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_log_level(value: str | None) -> int:
	"""Map a level name such as ``debug`` to its logging constant."""
	if not value:
		return DEFAULT_LOG_LEVEL
	level = logging.getLevelName(value.strip().upper())
	if not isinstance(level, int):
		raise ValueError(f"Unknown log level: {value}")
	return level


def _parse_bool(value: str | None, default: bool) -> bool:
	if value is None or not value.strip():
		return default
	return value.strip().lower() in {"1", "true", "yes", "on"}

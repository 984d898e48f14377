from __future__ import annotations
import logging

from pythonjsonlogger import jsonlogger

from .settings import Settings


class _JsonFormatter(jsonlogger.JsonFormatter):
	def __init__(self) -> None:
		super().__init__(
			fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
			datefmt="%Y-%m-%dT%H:%M:%S",
		)

	def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
		super().add_fields(log_record, record, message_dict)
		log_record["level"] = record.levelname
		log_record["module"] = record.name


def setup_logging(config: Settings) -> None:
	"""Configure the root logger from settings (LOG_LEVEL, LOG_FORMAT=text|json)."""
	level = getattr(logging, str(config.log_level).upper(), logging.INFO)
	root = logging.getLogger()
	root.setLevel(level)

	# Replace handlers so a reload does not double every line
	for handler in root.handlers[:]:
		root.removeHandler(handler)

	handler = logging.StreamHandler()
	handler.setLevel(level)
	if config.log_format == "json":
		handler.setFormatter(_JsonFormatter())
	else:
		handler.setFormatter(logging.Formatter(
			fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
			datefmt="%Y-%m-%d %H:%M:%S",
		))
	root.addHandler(handler)

	logging.getLogger(__name__).info(
		"logging initialised: level=%s format=%s diagnostic=%s",
		config.log_level, config.log_format, config.diagnostic_mode,
	)

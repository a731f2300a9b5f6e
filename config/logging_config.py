import json
import logging
import sys
import traceback
import uuid
from datetime import datetime
from decimal import Decimal
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config.settings import Settings


class CustomJSONEncoder(json.JSONEncoder):
	def default(self, o):
		if isinstance(o, datetime):
			return o.isoformat()
		if isinstance(o, Decimal):
			return str(o)
		if isinstance(o, uuid.UUID):
			return str(o)
		return super().default(o)


class JSONFormatter(logging.Formatter):
	"""
	Formatter that outputs structured JSON logs.
	"""

	def format(self, record: logging.LogRecord) -> str:
		log_entry = {
			'timestamp': datetime.now().isoformat(),
			'level': record.levelname,
			'logger': record.name,
			'message': record.getMessage(),
			'module': record.module,
			'function': record.funcName,
			'line': record.lineno,
		}

		if record.exc_info and record.exc_info[0] is not None:
			log_entry['exception'] = {
				'type': record.exc_info[0].__name__,
				'message': str(record.exc_info[1]),
				'traceback': traceback.format_exception(*record.exc_info),
			}

		if hasattr(record, 'extra_data'):
			log_entry['data'] = record.extra_data

		return json.dumps(log_entry, ensure_ascii=False, cls=CustomJSONEncoder)


def setup_logging(
	settings: Settings,
	max_file_size: int = 10 * 1024 * 1024,
	backup_count: int = 5,
) -> None:
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
	root_logger.setLevel(level)

	logging.getLogger('httpx').setLevel(logging.WARNING)
	logging.getLogger('aiosqlite').setLevel(logging.WARNING)

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setLevel(level)
	if settings.LOG_JSON:
		console_handler.setFormatter(JSONFormatter())
	else:
		console_format = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
		console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
	root_logger.addHandler(console_handler)

	if settings.LOG_DIRECTORY:
		log_directory = Path(settings.LOG_DIRECTORY)
		log_directory.mkdir(parents=True, exist_ok=True)

		file_handler = RotatingFileHandler(
			log_directory / 'app.log',
			maxBytes=max_file_size,
			backupCount=backup_count,
			encoding='utf-8',
		)
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(JSONFormatter())
		root_logger.addHandler(file_handler)

		error_handler = RotatingFileHandler(
			log_directory / 'errors.log',
			maxBytes=max_file_size,
			backupCount=backup_count,
			encoding='utf-8',
		)
		error_handler.setLevel(logging.WARNING)
		error_handler.setFormatter(JSONFormatter())
		root_logger.addHandler(error_handler)

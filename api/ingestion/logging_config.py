"""
Centralized logging configuration for the ingestion module.

Quietens third-party libraries (model download progress, HTTP connection
pool chatter) that would otherwise flood logs with non-actionable messages.

Import triggers configuration - no function call needed.
"""
import logging

_SUPPRESSED_LOGGERS = [
    'sentence_transformers',
    'transformers',
    'urllib3',
    'httpx',
    'filelock',
]

for _logger_name in _SUPPRESSED_LOGGERS:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)

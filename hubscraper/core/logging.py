"""
Logging System for the Hub Scraper

Provides logging with file rotation, console output and an optional
structured (JSON lines) format carrying per-event context.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import json


LOGGER_NAME = 'hubscraper'


class JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'level': record.levelname.lower(),
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'message': record.getMessage(),
            'logger': record.name
        }

        context = getattr(record, 'context', None)
        if isinstance(context, dict):
            payload.update(context)

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload['error'] = {
                'name': exc_type.__name__ if exc_type else None,
                'message': str(exc_value),
                'stack': self.formatException(record.exc_info)
            }

        return json.dumps(payload, default=str)


class LoggingManager:
    """
    Centralized logging manager with file rotation and structured logging
    """

    def __init__(self):
        self.logger: Optional[logging.Logger] = None
        self.file_handler: Optional[logging.handlers.RotatingFileHandler] = None
        self.console_handler: Optional[logging.StreamHandler] = None
        self._setup_complete = False

    def setup_logging(self, level: str = "INFO", log_file: str = "./logs/hubscraper.log",
                      max_size: str = "10MB", backup_count: int = 5, fmt: str = "text") -> None:
        """
        Set up logging system with file rotation and console output

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file
            max_size: Maximum size before rotation (e.g., "10MB")
            backup_count: Number of backup files to keep
            fmt: "text" for human readable lines, "json" for structured lines
        """
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = self._parse_size(max_size)

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)

        # Close handlers from a previous setup before replacing them
        self.close()
        self.logger.handlers.clear()

        if fmt == "json":
            detailed_formatter = JsonFormatter()
            console_formatter = JsonFormatter()
        else:
            detailed_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_formatter = logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s',
                datefmt='%H:%M:%S'
            )

        self.file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
        self.file_handler.setLevel(logging.DEBUG)
        self.file_handler.setFormatter(detailed_formatter)
        self.logger.addHandler(self.file_handler)

        self.console_handler = logging.StreamHandler(sys.stderr)
        self.console_handler.setLevel(getattr(logging, level.upper()))
        self.console_handler.setFormatter(console_formatter)
        self.logger.addHandler(self.console_handler)

        self._setup_complete = True
        self.logger.debug("Logging system initialized")

    def _parse_size(self, size_str: str) -> int:
        """Parse size string like '10MB' to bytes"""
        size_str = str(size_str).upper().strip()

        if size_str.endswith('KB'):
            return int(size_str[:-2]) * 1024
        elif size_str.endswith('MB'):
            return int(size_str[:-2]) * 1024 * 1024
        elif size_str.endswith('GB'):
            return int(size_str[:-2]) * 1024 * 1024 * 1024
        else:
            # Assume bytes
            return int(size_str)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger instance"""
        if not self._setup_complete or not self.logger:
            raise RuntimeError("Logging not set up. Call setup_logging() first.")
        return self.logger

    def log_url_result(self, url: str, success: bool, processing_time: float,
                       error_message: Optional[str] = None) -> None:
        """Log the result of processing a single URL"""
        if not self.logger:
            return

        context = {'context': {'url': url, 'duration': round(processing_time, 3)}}
        if success:
            self.logger.info(f"Successfully processed {url} in {processing_time:.2f}s", extra=context)
        else:
            self.logger.error(f"Failed to process {url} after {processing_time:.2f}s: {error_message}",
                              extra=context)

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Log an error with context information"""
        if not self.logger:
            return

        context_str = ""
        if context:
            context_str = f" | Context: {json.dumps(context, default=str)}"

        self.logger.error(f"Error: {str(error)}{context_str}", exc_info=error,
                          extra={'context': context or {}})

    def log_warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log a warning with optional context"""
        if not self.logger:
            return

        context_str = ""
        if context:
            context_str = f" | Context: {json.dumps(context, default=str)}"

        self.logger.warning(f"{message}{context_str}", extra={'context': context or {}})

    def log_progress(self, current: int, total: int, message: str = "") -> None:
        """Log progress information"""
        if not self.logger:
            return

        percentage = (current / total) * 100 if total > 0 else 0
        progress_msg = f"Progress: {current}/{total} ({percentage:.1f}%)"
        if message:
            progress_msg += f" - {message}"

        self.logger.info(progress_msg)

    def generate_summary_report(self, stats: Dict[str, Any]) -> str:
        """Generate and log a summary report of a batch run"""
        report_lines = [
            "=" * 60,
            "SCRAPING SESSION SUMMARY",
            "=" * 60,
            f"Request ID: {stats.get('request_id', 'Unknown')}",
            f"Total Duration: {stats.get('duration', 0):.2f}s",
            "",
            "URL PROCESSING:",
            f"  Total URLs: {stats.get('total_urls', 0)}",
            f"  Successful: {stats.get('successful_urls', 0)}",
            f"  Failed: {stats.get('failed_urls', 0)}",
            f"  Validation Warnings: {stats.get('warnings', 0)}",
        ]

        if stats.get('errors'):
            report_lines.extend([
                "",
                "ERRORS ENCOUNTERED:",
            ])
            for error in stats.get('errors', [])[:10]:  # Show first 10 errors
                report_lines.append(f"  - {error}")

            if len(stats.get('errors', [])) > 10:
                report_lines.append(f"  ... and {len(stats.get('errors', [])) - 10} more errors")

        report_lines.append("=" * 60)

        report = "\n".join(report_lines)
        if self.logger:
            self.logger.info(f"Session Summary:\n{report}")

        return report

    def close(self) -> None:
        """Close logging handlers"""
        for handler in (self.file_handler, self.console_handler):
            if handler:
                if self.logger:
                    self.logger.removeHandler(handler)
                handler.close()
        self.file_handler = None
        self.console_handler = None


# Global logging manager instance
logging_manager = LoggingManager()


def get_logger() -> logging.Logger:
    """Get the global logger instance"""
    return logging_manager.get_logger()


def setup_logging(level: str = "INFO", log_file: str = "./logs/hubscraper.log",
                  max_size: str = "10MB", backup_count: int = 5, fmt: str = "text") -> None:
    """Set up global logging system"""
    logging_manager.setup_logging(level, log_file, max_size, backup_count, fmt)

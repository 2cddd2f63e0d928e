"""
Logging configuration for Malta Auctions.

Provides structured JSON logging and audit events for compliance
screening, storage and ingestion.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict, List, Optional, TextIO

request_id_var: ContextVar[str] = ContextVar('request_id', default='')


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One JSON object per line, suitable for log aggregation.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class AuditLogger:
    """
    Specialized logger for compliance audit events.

    Records screening verdicts, storage writes, bidder eligibility
    decisions and connector runs.
    """

    def __init__(self, name: str = "malta_auctions.audit"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, event_type: str, **kwargs) -> None:
        extra = {
            "event_type": event_type,
            "request_id": request_id_var.get(),
            **kwargs
        }

        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "",
            0,
            f"{event_type}: {kwargs.get('message', '')}",
            (),
            None
        )
        record.extra_fields = extra
        self._logger.handle(record)

    def asset_classified(
        self,
        asset_type: str,
        source: str,
        disposition: str,
        purpose: str
    ) -> None:
        """Log a sanctions screening verdict."""
        level = logging.INFO if disposition == "CLEAR" else logging.WARNING
        self._log(
            level,
            "ASSET_CLASSIFIED",
            asset_type=asset_type,
            source=source,
            disposition=disposition,
            purpose=purpose,
            message=f"{asset_type} from {source} classified {disposition}"
        )

    def asset_stored(self, asset_id: int, asset_type: str, compliant: bool) -> None:
        self._log(
            logging.INFO,
            "ASSET_STORED",
            asset_id=asset_id,
            asset_type=asset_type,
            un_sanctions_compliance=compliant,
            message=f"Stored {asset_type} asset {asset_id}"
        )

    def eligibility_decision(
        self,
        asset_type: str,
        disposition: str,
        eligible: bool,
        verification_level: int,
        reason: Optional[str] = None
    ) -> None:
        """Log a bidder eligibility decision. Bidder country is not logged."""
        level = logging.INFO if eligible else logging.WARNING
        self._log(
            level,
            "ELIGIBILITY_DECISION",
            asset_type=asset_type,
            disposition=disposition,
            eligible=eligible,
            verification_level=verification_level,
            reason=reason,
            message=f"Bidder {'eligible' if eligible else 'ineligible'} for {disposition} asset"
        )

    def ingestion_complete(
        self,
        connector: str,
        asset_count: int,
        errors: Optional[List[str]] = None
    ) -> None:
        level = logging.ERROR if errors else logging.INFO
        self._log(
            level,
            "INGESTION_COMPLETE",
            connector=connector,
            asset_count=asset_count,
            errors=errors or [],
            message=f"{connector} produced {asset_count} assets"
        )


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
    stream: TextIO = sys.stdout
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting (recommended for production)
        log_file: Optional file path for log output
        stream: Console stream; the CLI passes stderr to keep stdout for JSON
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the request ID for the current context.

    Args:
        request_id: Request ID to set, or None to generate one

    Returns:
        The request ID that was set
    """
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


audit_log = AuditLogger()

import logging
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "cafe-menu"


def setup_logging(log_level: str = "INFO", project_id: str | None = None) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if root_logger.handlers:
        root_logger.handlers.clear()

    static_fields = {"service": SERVICE_NAME}
    if project_id:
        static_fields["project_id"] = project_id

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
        static_fields=static_fields,
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Quiet per-request access lines and SQL echo; handlers log their own events
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "opentelemetry"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

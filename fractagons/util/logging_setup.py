import logging
import logging.handlers
from typing import Callable, Optional

_LOGGER_NAME = "fractagons"

def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

def shape_label(params) -> str:
    return f"fgon{params.polygon_order}V{params.variation}"

class ShapeContext(logging.Filter):
    """Stamps each record with the shape being drawn, e.g. ``fgon5V12``."""

    def __init__(self):
        super().__init__()
        self.source: Optional[Callable] = None

    def filter(self, record: logging.LogRecord) -> bool:
        params = self.source() if self.source is not None else None
        record.shape = shape_label(params) if params is not None else "-"
        return True

_CONTEXT = ShapeContext()

def bind_params(source: Optional[Callable]) -> None:
    """Log lines report the parameters `source()` returns at emit time."""
    _CONTEXT.source = source

def _file_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03dZ %(levelname)s [%(shape)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

def _console_formatter() -> logging.Formatter:
    return logging.Formatter(fmt="%(levelname)-7s [%(shape)s] %(message)s")

def configure_root_logging(
    *,
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = "fractagons.log",
    rotate_bytes: int = 5 * 1024 * 1024,
    rotate_count: int = 5,
) -> logging.Logger:
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    handlers = []
    if console:
        ch = logging.StreamHandler()
        ch.setFormatter(_console_formatter())
        handlers.append(ch)
    if log_file:
        fh = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        )
        fh.setFormatter(_file_formatter())
        handlers.append(fh)
    for h in handlers:
        h.setLevel(level)
        h.addFilter(_CONTEXT)
        logger.addHandler(h)
    return logger

def format_state(params, *, only_set: bool = True) -> str:
    """One field per line, sorted; with only_set, falsy fields are left out."""
    items = sorted(params.as_dict().items())
    if only_set:
        items = [(k, v) for k, v in items if v]
    return "\n".join(f"  {k} = {v}" for k, v in items)

# healthledger_core/logger.py
import logging, json, sys, time, os

# One JSON object per line; operators grep on "name" (HL.<Component>).
_LINE_FORMAT = json.dumps({
    "ts": "%(asctime)s",
    "level": "%(levelname)s",
    "name": "%(name)s",
    "msg": "%(message)s",
})


def _resolve_level(level):
    if level is not None:
        return level
    resolved = logging.getLevelName(os.getenv("HLEDGER_LOG_LEVEL", "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _ledger_formatter() -> logging.Formatter:
    formatter = logging.Formatter(fmt=_LINE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ")
    formatter.converter = time.gmtime
    return formatter


def get_logger(name="healthledger", level=None, to_file=None):
    """Ledger component logger.

    Handlers are attached once per logger name: stdout always, plus a file
    when ``to_file`` or HLEDGER_LOG_FILE is set. HLEDGER_LOG_LEVEL applies
    when ``level`` is omitted; unknown level names fall back to INFO.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    if logger.handlers:
        return logger

    formatter = _ledger_formatter()
    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    log_file = to_file or os.getenv("HLEDGER_LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

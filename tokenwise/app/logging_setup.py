import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Chatty SDK loggers stay at WARNING unless the app itself runs at DEBUG.
QUIET_LOGGERS = ("botocore", "boto3", "urllib3")

_HANDLER_NAME = "tokenwise-stdout"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send every tokenwise.* record to stdout; safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    sdk_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)

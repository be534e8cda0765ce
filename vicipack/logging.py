import logging
import sys
from typing import Union

from vicipack.domain.value import ItemList, Section

REDACTED = b"***"

# Names whose values hold credentials in VICI load-shared, load-key and similar commands.
SECRET_NAMES = frozenset({"secret", "secrets", "data", "password", "passphrase", "private-key", "psk"})


class DetailsFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        details = getattr(record, "details", None)
        if details:
            text += " " + " ".join(f"{key}={value}" for key, value in details.items())
        return text


def create_logger(name: str, level: Union[int, str] = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stderr)
    formatter = DetailsFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def redact(section: Section) -> Section:
    cleaned = Section()
    for name, value in section.items():
        if name.lower() in SECRET_NAMES:
            if isinstance(value, ItemList):
                cleaned[name] = ItemList(REDACTED for _ in value)
            elif isinstance(value, Section):
                cleaned[name] = Section((key, REDACTED) for key in value)
            else:
                cleaned[name] = REDACTED
        elif isinstance(value, Section):
            cleaned[name] = redact(value)
        else:
            cleaned[name] = value
    return cleaned

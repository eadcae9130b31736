"""Example program showing every tintlog feature with colors.

Run with:
    python examples/basic_example.py

Output:
    One line per call on stdout, colored when stdout is a terminal.
    The last block routes Python's own logging module through the same
    handler.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import timedelta

from tintlog import Level, TintLoggingHandler, attr, group, new_logger


@dataclass
class User:
    ID: int
    Name: str
    Roles: list[str]
    _password: str = "secret"


logger = new_logger(sys.stdout.buffer, level=Level.DEBUG, add_source=True)

logger.debug("Debug message")
logger.info("Info message", "user_id", 12345)
logger.warn("Warning message", attr("ip_address", "192.168.1.100"))
logger.error("Error message", "error", FileNotFoundError("file does not exist"))

# With attributes and groups
logger_with_attrs = logger.with_("service", "auth", "version", "v1.2.3")
logger_with_attrs.info("User authenticated")

group_logger = logger.with_group("request")
group_logger.info("Request received", "method", "GET", "path", "/api/users")

# Structured values
logger.info(
    "Loaded user",
    "user",
    User(7, "Ada", ["admin", "dev"]),
    "limits",
    {"rps": 100, "burst": 20},
    "took",
    timedelta(milliseconds=1500),
)
logger.info("Nested group", group("http", "status", 200, group("timing", "ms", 12.5)))

# Python logging routed through the same handler
std_logger = logging.getLogger("example")
std_logger.addHandler(TintLoggingHandler(logger.handler))
std_logger.setLevel(logging.DEBUG)
std_logger.propagate = False
std_logger.warning("From the logging module", extra={"retries": 3})

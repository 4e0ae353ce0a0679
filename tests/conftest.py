import logging
import sys
from pathlib import Path

import pytest

# Add src to sys.path so tests run without installing the package
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from edifact_core.config import DelimiterConfig  # noqa: E402
from edifact_core.logger import LOGGER_NAME  # noqa: E402


INVOIC_SHORT = "UNH+1+INVOIC:D:93A:UN'BGM+380+INV1'UNT+2+1'"

IFTMBF = """UNH+1+IFTMBF:D:93A:UN'
BGM+335+BOOK123456'
NAD+CA+++BOOKING PARTY LTD'
NAD+CN+++CONSIGNEE INC'
TDT+20++VESSELNAME+VOY123'
LOC+9+SGSIN:139:6'
LOC+11+NLRTM:139:6'
EQD+CN+CONT1234567'
UNT+9+1'"""

ORDERS = """UNH+1+ORDERS:D:93A:UN'
BGM+220+ORD123456'
DTM+4:20231201:102'
NAD+BY+++BUYER COMPANY'
NAD+SU+++SUPPLIER COMPANY'
LIN+1++ABC123:EN'
QTY+21:5'
UNT+7+1'"""

INTERCHANGE = (
    "UNB+UNOA:2+SENDER+RECEIVER+231201:1430+12345+++INVOIC'"
    "UNH+1+INVOIC:D:97A:UN'BGM+380+INV12346+9'DTM+137:20231201:102'"
    "NAD+BY+++ACME CORP'LIN+1++ITEM001:EN'QTY+12:100:PCE'UNT+7+1'UNZ+1+12345'"
)


@pytest.fixture
def delimiters():
    """Default UNOA delimiter set."""
    return DelimiterConfig()


@pytest.fixture
def invoic_short():
    return INVOIC_SHORT


@pytest.fixture
def iftmbf():
    return IFTMBF


@pytest.fixture
def orders():
    return ORDERS


@pytest.fixture
def interchange():
    return INTERCHANGE


@pytest.fixture
def clean_env(monkeypatch):
    """Make sure configuration environment variables are unset and restored afterwards."""
    for name in ("EDIFACT_CONFIG", "EDIFACT_OUTPUT_SHAPE", "EDIFACT_LOG_DIR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def reset_logger():
    """Detach handlers added by setup_logger()."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

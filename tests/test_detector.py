"""
Unit Tests for MessageTypeDetector
"""
import pytest

from edifact_core.builder import Reader
from edifact_core.detector import MessageTypeDetector
from edifact_core.errors import DetectionError


def _read(raw):
    return Reader().read_string(raw)


class TestDetect:

    def test_detect_when_standard_header_then_returns_all_parts(self):
        message = _read("UNH+1+INVOIC:D:97A:UN'BGM+380+12345678+9'")
        info = MessageTypeDetector().detect(message)

        assert info.message_type == "INVOIC"
        assert info.release == "D"
        assert info.version == "97A"
        assert info.controlling_agency == "UN"
        assert info.reference == "1"
        assert info.association_code == ""
        assert str(info) == "INVOIC D:97A (UN)"

    def test_detect_when_association_code_then_reads_fifth_component(self):
        info = MessageTypeDetector().detect(_read("UNH+ME001+ORDERS:D:96A:UN:EAN008'"))

        assert info.association_code == "EAN008"
        assert info.reference == "ME001"

    def test_detect_when_run_twice_then_identical(self, orders):
        detector = MessageTypeDetector()
        message = _read(orders)
        assert detector.detect(message) == detector.detect(message)

    def test_detect_when_header_not_first_then_finds_it(self, interchange):
        assert MessageTypeDetector().detect_message_type(_read(interchange)) == "INVOIC"

    def test_detect_when_no_header_then_raises(self):
        with pytest.raises(DetectionError, match="no header segment") as excinfo:
            MessageTypeDetector().detect(_read("BGM+380+1'"))
        assert excinfo.value.phase == "detect"

    @pytest.mark.parametrize("raw", [
        "UNH+1'",
        "UNH+1+INVOIC'",
        "UNH+1+:D:97A:UN'",
    ])
    def test_detect_when_descriptor_malformed_then_raises(self, raw):
        with pytest.raises(DetectionError, match="malformed type descriptor"):
            MessageTypeDetector().detect(_read(raw))

    def test_detect_when_custom_header_tag_then_uses_it(self):
        info = MessageTypeDetector("HDR").detect(_read("HDR+7+DESADV:D:01B:UN'"))
        assert info.message_type == "DESADV"


class TestDetectInterchange:

    def test_detect_interchange_when_unb_present_then_extracts_fields(self, interchange):
        info = MessageTypeDetector().detect_interchange(_read(interchange))

        assert info.syntax_identifier == "UNOA"
        assert info.syntax_version == "2"
        assert info.sender == "SENDER"
        assert info.recipient == "RECEIVER"
        assert info.preparation_date == "231201"
        assert info.preparation_time == "1430"
        assert info.control_reference == "12345"

    def test_detect_interchange_when_no_unb_then_none(self, orders):
        assert MessageTypeDetector().detect_interchange(_read(orders)) is None

"""
Test cases for the notification validation and the bulk load trigger.
"""

from urllib.parse import parse_qs, urlparse

import pytest

from bliphelper.blip.BlipRequest import Command
from bliphelper.blip.BlipResponse import BlipResponse, LOCAL_ERROR_STATUS
from bliphelper.bulkload.BulkLoadTrigger import BulkLoadTrigger
from bliphelper.bulkload.validation import (is_valid_callback_url,
                                            is_valid_email,
                                            is_valid_email_list,
                                            validate_notifications)

S3_PATH = "s3://blip-uploads/brand/acme/upload.csv.gz"


class TestValidation:
    """Test cases for the email and callback validation helpers."""

    @pytest.mark.parametrize("address", ["a@b.com", "first.last+tag@sub.acme.org", "o'brien@pubs.ie"])
    def test_valid_email(self, address: str) -> None:
        """Common address forms are accepted."""
        assert is_valid_email(address)

    @pytest.mark.parametrize("address", ["bad", "", "a@b", "@b.com", "a@@b.com", "a b@c.com", "a..b@c.com", "a@-b.com", "a.@b.com", ".a@b.com"])
    def test_invalid_email(self, address: str) -> None:
        """Malformed addresses are rejected."""
        assert not is_valid_email(address)

    def test_email_list(self) -> None:
        """Every element of a comma separated list must be valid."""
        assert is_valid_email_list("a@b.com,c@d.org")
        assert is_valid_email_list("a@b.com, c@d.org")
        assert not is_valid_email_list("a@b.com,bad")
        assert not is_valid_email_list("a@b.com,")

    @pytest.mark.parametrize("url", ["https://x.com/hook", "http://localhost:8080/done?job=1", "HTTPS://X.COM", "http://127.0.0.1:9000/hook", "http://[::1]:8080/hook"])
    def test_valid_callback(self, url: str) -> None:
        """http and https URLs with a host are accepted."""
        assert is_valid_callback_url(url)

    @pytest.mark.parametrize("url", ["ftp://x.com", "x.com/hook", "https://", "mailto:a@b.com", "https://x.com/a hook", "http://[::1", "http://x.com:99999/hook", "https://-bad-.com/hook", "https://bad-.example.com"])
    def test_invalid_callback(self, url: str) -> None:
        """Other schemes and malformed URLs are rejected."""
        assert not is_valid_callback_url(url)

    def test_validate_notifications_skips_empty(self) -> None:
        """Missing or empty parameters are not validated."""
        assert validate_notifications() is None
        assert validate_notifications("", "", "", "") is None

    def test_validate_notifications_names_field(self) -> None:
        """The error message names the offending parameter."""
        assert "failEmail" in validate_notifications(fail_email="nope")
        assert "successCallback" in validate_notifications(success_callback="ftp://x.com")


class TestBulkLoadTrigger:
    """Test cases for BulkLoadTrigger."""

    def test_trigger_builds_query(self, recording_request) -> None:
        """The trigger passes the s3 location and the load options as query parameters."""
        request = recording_request(BlipResponse(202, "accepted"))

        response = BulkLoadTrigger(request).trigger("acme", "franchise-feed", S3_PATH,
                                                    implicit_delete=True, expected_record_count=42)

        assert response == BlipResponse(202, "accepted")
        command, path, content = request.calls[0]
        assert command == Command.GET
        assert content is None

        parsed = urlparse(path)
        assert parsed.path == "/brand/acme/bulkLoad"
        assert parse_qs(parsed.query) == {
            "s3Path": [S3_PATH],
            "source": ["franchise-feed"],
            "implicitDelete": ["true"],
            "expectedRecordCount": ["42"],
        }

    def test_trigger_appends_notifications(self, recording_request) -> None:
        """Given notification parameters are appended by name."""
        request = recording_request(BlipResponse(202, "accepted"))

        BulkLoadTrigger(request).trigger("acme", "feed", S3_PATH,
                                         success_email="a@b.com,c@d.org",
                                         fail_email="ops@acme.com",
                                         success_callback="https://x.com/hook",
                                         fail_callback="http://x.com/fail")

        query = parse_qs(urlparse(request.paths[0]).query)
        assert query["implicitDelete"] == ["false"]
        assert query["expectedRecordCount"] == ["0"]
        assert query["successEmail"] == ["a@b.com,c@d.org"]
        assert query["failEmail"] == ["ops@acme.com"]
        assert query["successCallback"] == ["https://x.com/hook"]
        assert query["failCallback"] == ["http://x.com/fail"]

    def test_invalid_email_makes_no_request(self, recording_request) -> None:
        """An invalid email fails locally without contacting BLIP."""
        request = recording_request()

        response = BulkLoadTrigger(request).trigger("acme", "feed", S3_PATH, success_email="a@b.com,bad")

        assert response.status_code == LOCAL_ERROR_STATUS
        assert "a@b.com,bad" in response.body
        assert request.calls == []

    def test_invalid_callback_makes_no_request(self, recording_request) -> None:
        """An ftp callback fails locally without contacting BLIP."""
        request = recording_request()

        response = BulkLoadTrigger(request).trigger("acme", "feed", S3_PATH, fail_callback="ftp://x.com")

        assert response.status_code == LOCAL_ERROR_STATUS
        assert not response.is_success
        assert request.calls == []

    def test_out_of_range_port_makes_no_request(self, recording_request) -> None:
        """A callback with an impossible port never reaches BLIP."""
        request = recording_request()

        response = BulkLoadTrigger(request).trigger("acme", "feed", S3_PATH, fail_callback="http://x.com:99999/hook")

        assert response.status_code == LOCAL_ERROR_STATUS
        assert "failCallback" in response.body
        assert request.calls == []

    def test_rejection_is_returned_verbatim(self, recording_request) -> None:
        """A rejected trigger is returned unchanged."""
        rejected = BlipResponse(409, "A bulk load is already running for this source")
        request = recording_request(rejected)

        assert BulkLoadTrigger(request).trigger("acme", "feed", S3_PATH) is rejected

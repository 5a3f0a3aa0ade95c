"""Unit tests for core/exceptions.py."""

import pytest

from core.exceptions import (
    ConfigurationError,
    RateLimitedError,
    RequestServiceError,
    TransportError,
    UpstreamError,
    ValidationError,
)


class TestRequestServiceError:
    """Tests for the base exception class."""

    def test_message_attribute(self):
        err = RequestServiceError("something went wrong")
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    def test_details_default_empty(self):
        assert RequestServiceError("msg").details == {}

    def test_details_provided(self):
        err = RequestServiceError("msg", details={"key": "val"})
        assert err.details == {"key": "val"}

    def test_default_status_code(self):
        assert RequestServiceError("msg").status_code == 500


@pytest.mark.parametrize(
    "cls, status_code",
    [
        (ValidationError, 400),
        (ConfigurationError, 500),
        (TransportError, 502),
    ],
    ids=lambda v: getattr(v, "__name__", str(v)),
)
class TestSimpleSubclasses:
    def test_inherits_from_base(self, cls, status_code):
        assert isinstance(cls("test"), RequestServiceError)

    def test_status_code(self, cls, status_code):
        assert cls("test").status_code == status_code


class TestUpstreamErrors:
    def test_upstream_carries_status(self):
        err = UpstreamError("upstream broke", status=500)
        assert err.status == 500
        assert err.status_code == 502
        assert err.details == {"status": 500}

    def test_rate_limited_is_upstream(self):
        err = RateLimitedError("slow down", status=429)
        assert isinstance(err, UpstreamError)
        assert err.status == 429
        assert err.status_code == 503

    def test_extra_details_merged(self):
        err = UpstreamError("x", status=404, details={"url": "https://example.com"})
        assert err.details == {"status": 404, "url": "https://example.com"}

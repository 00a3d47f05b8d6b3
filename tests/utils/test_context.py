"""Tests for request context helpers."""

from bagster.utils.context import (
    clear_all_context,
    generate_correlation_id,
    get_correlation_id,
    get_request_context,
    set_api_client_id,
    set_correlation_id,
    set_shipper_id,
)


class TestRequestContext:
    """Test suite for the request context variables."""

    def setup_method(self):
        clear_all_context()

    def teardown_method(self):
        clear_all_context()

    def test_empty_context(self):
        assert get_correlation_id() is None
        assert get_request_context() == {}

    def test_set_and_read(self):
        set_correlation_id("req-1")
        set_shipper_id("shipper-9")
        set_api_client_id("client-3")

        assert get_request_context() == {
            "correlation_id": "req-1",
            "shipper_id": "shipper-9",
            "api_client_id": "client-3",
        }

    def test_empty_correlation_id_ignored(self):
        set_correlation_id("req-1")
        set_correlation_id("")

        assert get_correlation_id() == "req-1"

    def test_generate_correlation_id(self):
        correlation_id = generate_correlation_id()

        assert correlation_id
        assert get_correlation_id() == correlation_id

    def test_clear(self):
        set_correlation_id("req-1")
        set_shipper_id("shipper-9")

        clear_all_context()

        assert get_request_context() == {}

"""Unit tests for the failure taxonomy."""

from envelope_client.errors import (
    BusinessError,
    ContractViolationError,
    EnvelopeClientError,
    NetworkError,
    RequestAbortedError,
    TransportStatusError,
    UnknownRequestError,
)


class TestErrorHierarchy:
    def test_all_subclass_base_error(self):
        for cls in (
            BusinessError,
            ContractViolationError,
            NetworkError,
            RequestAbortedError,
            TransportStatusError,
            UnknownRequestError,
        ):
            assert issubclass(cls, EnvelopeClientError)

    def test_abort_is_network_error(self):
        assert issubclass(RequestAbortedError, NetworkError)

    def test_default_messages(self):
        assert BusinessError().message == "Request failed"
        assert NetworkError().message == "Network error"
        assert RequestAbortedError().message == "canceled(ERR_CANCELED)"
        assert UnknownRequestError().message == "Unknown error"

    def test_custom_message_and_code(self):
        err = BusinessError("Name taken(10001)", code=10001, status_code=200)

        assert str(err) == "Name taken(10001)"
        assert err.code == 10001
        assert err.details == {"status_code": 200}

    def test_transport_status_error_code_is_status(self):
        err = TransportStatusError("Bad gateway(502)", status_code=502)

        assert err.status_code == 502
        assert err.code == 502

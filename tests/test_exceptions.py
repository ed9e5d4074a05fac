from easytiming import AwaitableError, SinkError, TimingError
from easytiming.utils.error_codes import get_error_info


def test_registered_code_uses_description():
    err = SinkError("ET-SNK-0001")
    assert err.code == "ET-SNK-0001"
    assert err.detail == "Unsupported sink kind"
    assert str(err) == "ET-SNK-0001: Unsupported sink kind"
    assert isinstance(err, TimingError)


def test_message_overrides_description():
    err = AwaitableError("ET-FUT-0001", "int is not awaitable")
    assert err.detail == "int is not awaitable"
    assert isinstance(err, TypeError)


def test_unknown_code_falls_back():
    info = get_error_info("ET-XXX-9999")
    assert info.code == "ET-XXX-9999"
    assert info.description == "Unknown easytiming error code"

from voidsync.config import settings
from voidsync.utils.api_errors import bad_request, error_detail, method_not_allowed, payload_too_large


def test_bad_request_shape():
    err = bad_request("Invalid JSON body", "Expecting value")
    assert err.status_code == 400
    assert err.detail == {"error": "Invalid JSON body", "message": "Expecting value"}


def test_method_not_allowed_has_no_message():
    err = method_not_allowed()
    assert err.status_code == 405
    assert err.detail == {"error": "Method not allowed"}


def test_payload_too_large_mentions_limit():
    err = payload_too_large(1024)
    assert err.status_code == 413
    assert "1024" in err.detail["message"]


def test_error_detail_follows_environment():
    settings.expose_internal_error_details = False
    settings.app_env = "production"
    assert error_detail(ValueError("boom")) is None
    assert bad_request("Invalid payload", error_detail(ValueError("boom"))).detail == {"error": "Invalid payload"}
    settings.app_env = "test"
    assert error_detail(ValueError("boom")) == "boom"
    settings.app_env = "production"
    settings.expose_internal_error_details = True
    assert error_detail(ValueError("boom")) == "boom"

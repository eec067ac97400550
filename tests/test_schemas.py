from app.schemas.account import SignupRequest, ChangePasswordRequest
from app.schemas.address import AddAddressRequest


def test_request_examples_are_published():
    assert SignupRequest.model_json_schema()["example"]["username"] == "jdoe"
    assert "combinedAddress" in AddAddressRequest.model_json_schema()["example"]


def test_change_password_reads_camel_case_keys():
    payload = ChangePasswordRequest.model_validate({"currentPassword": "a", "newPassword": "b"})
    assert (payload.current_password, payload.new_password) == ("a", "b")

from rowtrack.exceptions import ErrorCode, invalid_credentials, not_found, already_exists, validation_error, store_unavailable, StoreError


def test_every_error_code_is_raised_somewhere():
    raised = {
        invalid_credentials().error_code,
        not_found("User", 1).error_code,
        already_exists("taken").error_code,
        validation_error("bad").error_code,
        store_unavailable(StoreError("down")).error_code,
    }
    declared = {value for name, value in vars(ErrorCode).items() if name.isupper()}
    assert declared == raised


def test_status_codes():
    assert invalid_credentials().status_code == 401
    assert not_found("User", 1).status_code == 404
    assert already_exists("taken").status_code == 409
    assert validation_error("bad").status_code == 400
    assert store_unavailable(StoreError("down")).status_code == 503

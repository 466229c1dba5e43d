import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from gobarber.auth import jwt_handler
from gobarber.auth.dependencies import get_current_user_id


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def test_get_current_user_id_reads_subject() -> None:
    token = jwt_handler.create_access_token(subject='7')

    assert get_current_user_id(_credentials(token)) == 7


def test_get_current_user_id_rejects_expired_token() -> None:
    token = jwt_handler.create_access_token(subject='7', expires_minutes=-1)

    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(_credentials(token))

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid token'


def test_get_current_user_id_rejects_non_numeric_subject() -> None:
    token = jwt_handler.create_access_token(subject='nurse@example.com')

    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(_credentials(token))

    assert exception_info.value.detail == 'Invalid token subject'


def test_print_access_token_writes_decodable_token(capsys: pytest.CaptureFixture) -> None:
    from gobarber.print_access_token import main

    main(['12'])

    token = capsys.readouterr().out.strip()
    assert jwt_handler.decode_access_token(token)['sub'] == '12'


def test_print_access_token_requires_numeric_user_id(capsys: pytest.CaptureFixture) -> None:
    from gobarber.print_access_token import main

    with pytest.raises(SystemExit) as exit_info:
        main(['ana'])

    assert exit_info.value.code == 1
    assert 'Usage' in capsys.readouterr().err

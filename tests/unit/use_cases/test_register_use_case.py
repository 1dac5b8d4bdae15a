import pytest

from tenantgram.app.services.email_service import EmailError
from tenantgram.app.services.passwords import verify_password
from tenantgram.app.services.tokens import hash_token
from tenantgram.app.use_cases.auth import RegisterCommand, RegisterUseCase
from tenantgram.domain.entities import AuthProvider, UserRole


def command(**overrides):
    data = {
        "first_name": "Alice",
        "last_name": "Liddell",
        "email": "  Alice@Example.com ",
        "password": "Passw0rd!",
    }
    data.update(overrides)
    return RegisterCommand(**data)


@pytest.mark.asyncio
async def test_successful_registration(mock_uow, jwt_service, email_service):
    """New users are PENDING, unverified and get a token right away"""
    mock_uow.users.exists_by_email.return_value = False

    use_case = RegisterUseCase(mock_uow, jwt_service, email_service, "api.example.com")
    result = await use_case.execute(command())

    assert result.is_ok()
    response = result.value
    assert response.user.email == "alice@example.com"
    assert response.user.role == UserRole.PENDING
    assert response.user.provider == AuthProvider.EMAIL
    assert response.user.email_verified is False
    assert jwt_service.subject(response.token) == "alice@example.com"

    created = mock_uow.users.create.call_args[0][0]
    assert created.password_hash != "Passw0rd!"
    assert verify_password("Passw0rd!", created.password_hash)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_verification_link_is_emailed_and_token_stored_hashed(
    mock_uow, jwt_service, email_service
):
    mock_uow.users.exists_by_email.return_value = False

    use_case = RegisterUseCase(mock_uow, jwt_service, email_service, "api.example.com")
    await use_case.execute(command())

    recipient, subject, body = email_service.send_email.call_args[0]
    assert recipient == "alice@example.com"
    assert "https://api.example.com/v1/auth/verify-email?token=" in body

    raw_token = body.split("token=")[1].strip()
    stored = mock_uow.email_verification_tokens.create.call_args[0][0]
    assert stored.token_hash == hash_token(raw_token)
    assert stored.token_hash != raw_token


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(mock_uow, jwt_service, email_service):
    mock_uow.users.exists_by_email.return_value = True

    use_case = RegisterUseCase(mock_uow, jwt_service, email_service, "api.example.com")
    result = await use_case.execute(command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.exists_by_email.assert_called_once_with("alice@example.com")
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_weak_password_rejected(mock_uow, jwt_service, email_service):
    mock_uow.users.exists_by_email.return_value = False

    use_case = RegisterUseCase(mock_uow, jwt_service, email_service, "api.example.com")
    result = await use_case.execute(command(password="password"))

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    assert "uppercase" in result.error.message
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_email_failure_does_not_fail_registration(mock_uow, jwt_service, email_service):
    mock_uow.users.exists_by_email.return_value = False
    email_service.send_email.side_effect = EmailError("provider down")

    use_case = RegisterUseCase(mock_uow, jwt_service, email_service, "api.example.com")
    result = await use_case.execute(command())

    assert result.is_ok()
    assert result.value.token

from datetime import timedelta

import pytest

from tenantgram.app.services.email_service import EmailError
from tenantgram.app.services.tokens import hash_token
from tenantgram.app.use_cases.auth import ResendVerificationUseCase, VerifyEmailUseCase
from tenantgram.domain.base import utc_now
from tenantgram.domain.entities import EmailVerificationToken, User


def verification_token(expires_in=timedelta(hours=1)):
    return EmailVerificationToken(
        user_id="user-1", token_hash=hash_token("raw"), expires_at=utc_now() + expires_in
    )


@pytest.mark.asyncio
async def test_verify_marks_email_verified(mock_uow):
    user = User(id="user-1", email="alice@example.com", email_verified=False)
    token = verification_token()
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = token
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyEmailUseCase(mock_uow).execute("raw")

    assert result.is_ok()
    assert user.email_verified is True
    mock_uow.email_verification_tokens.delete.assert_called_once_with(token)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_verify_unknown_token(mock_uow):
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = None

    result = await VerifyEmailUseCase(mock_uow).execute("raw")

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_verify_expired_token(mock_uow):
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = verification_token(
        expires_in=timedelta(seconds=-1)
    )

    result = await VerifyEmailUseCase(mock_uow).execute("raw")

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_resend_replaces_previous_token(mock_uow, email_service):
    user = User(id="user-1", email="alice@example.com", email_verified=False)
    previous = verification_token()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.email_verification_tokens.get_by_user_id.return_value = previous

    use_case = ResendVerificationUseCase(mock_uow, email_service, "api.example.com")
    result = await use_case.execute("alice@example.com")

    assert result.is_ok()
    mock_uow.email_verification_tokens.delete.assert_called_once_with(previous)
    created = mock_uow.email_verification_tokens.create.call_args[0][0]
    assert created.token_hash != previous.token_hash
    email_service.send_email.assert_called_once()


@pytest.mark.asyncio
async def test_resend_for_verified_user(mock_uow, email_service):
    mock_uow.users.get_by_email.return_value = User(email="alice@example.com", email_verified=True)

    use_case = ResendVerificationUseCase(mock_uow, email_service, "api.example.com")
    result = await use_case.execute("alice@example.com")

    assert result.error.code == "ALREADY_VERIFIED"
    email_service.send_email.assert_not_called()


@pytest.mark.asyncio
async def test_resend_email_failure(mock_uow, email_service):
    mock_uow.users.get_by_email.return_value = User(email="alice@example.com")
    mock_uow.email_verification_tokens.get_by_user_id.return_value = None
    email_service.send_email.side_effect = EmailError("down")

    use_case = ResendVerificationUseCase(mock_uow, email_service, "api.example.com")
    result = await use_case.execute("alice@example.com")

    assert result.error.code == "EMAIL_SEND_FAILED"

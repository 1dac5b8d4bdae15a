import pytest
from unittest.mock import AsyncMock, MagicMock

from tenantgram.app.services.email_service import EmailError
from tenantgram.app.services.media import UnsupportedMediaType
from tenantgram.app.services.passwords import hash_password, verify_password
from tenantgram.app.use_cases.users import (
    InviteUserUseCase,
    ListUsersUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
)
from tenantgram.domain.entities import Business, FileMetadata, ProfileStatus, User, UserRole


@pytest.fixture
def file_service():
    async def commit(uow, *stored):
        await uow.commit()

    service = MagicMock()
    service.commit = AsyncMock(side_effect=commit)
    service.discard = AsyncMock()
    service.store = AsyncMock()
    return service


def member(**overrides):
    fields = dict(
        id="user-2",
        email="bob@example.com",
        role=UserRole.DEFAULT,
        business_id="biz-1",
        password_hash=hash_password("Secret1!"),
    )
    fields.update(overrides)
    return User(**fields)


# ============================================================================
# ListUsersUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_super_admin_lists_everyone(mock_uow, make_principal):
    mock_uow.users.list_all.return_value = [member(), member(id="user-3", business_id="biz-2")]

    result = await ListUsersUseCase(mock_uow).execute(
        make_principal(role=UserRole.SUPER_ADMIN, business_id="")
    )

    assert len(result.value) == 2
    mock_uow.users.list_by_business.assert_not_called()


@pytest.mark.asyncio
async def test_admin_lists_own_business(mock_uow, make_principal):
    mock_uow.users.list_by_business.return_value = [member()]

    result = await ListUsersUseCase(mock_uow).execute(make_principal(role=UserRole.ADMIN))

    assert [u.id for u in result.value] == ["user-2"]
    mock_uow.users.list_by_business.assert_called_once_with("biz-1")


@pytest.mark.asyncio
async def test_default_member_cannot_list(mock_uow, make_principal):
    result = await ListUsersUseCase(mock_uow).execute(make_principal())

    assert result.error.code == "INSUFFICIENT_ROLE"


# ============================================================================
# UpdateUserUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_self_update_of_personal_fields(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target
    command = UpdateUserCommand(first_name="Bob", phone_number="+1 555", email="new@example.com")

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(user_id="user-2"), "user-2", command
    )

    assert result.is_ok()
    assert target.first_name == "Bob"
    assert target.phone_number == "+1 555"
    assert target.email == "bob@example.com"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_member_cannot_update_someone_else(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member()

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(user_id="user-1"), "user-2", UpdateUserCommand(first_name="X")
    )

    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admin_of_other_business_is_refused(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member(business_id="biz-2")

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", UpdateUserCommand(first_name="X")
    )

    assert result.error.code == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
async def test_admin_promotes_member(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", UpdateUserCommand(role=UserRole.ADMIN)
    )

    assert result.is_ok()
    assert target.role == UserRole.ADMIN


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.SUPER_ADMIN, UserRole.PENDING])
async def test_unassignable_roles(mock_uow, make_principal, file_service, role):
    mock_uow.users.get_by_id.return_value = member()

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.SUPER_ADMIN, business_id=""),
        "user-2",
        UpdateUserCommand(role=role),
    )

    assert result.error.code == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_member_cannot_change_own_role(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member()

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(user_id="user-2"), "user-2", UpdateUserCommand(role=UserRole.ADMIN)
    )

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_only_super_admin_changes_profile_status(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target
    command = UpdateUserCommand(profile_status=ProfileStatus.SUSPENDED)
    use_case = UpdateUserUseCase(mock_uow, file_service)

    refused = await use_case.execute(make_principal(role=UserRole.ADMIN), "user-2", command)
    allowed = await use_case.execute(
        make_principal(role=UserRole.SUPER_ADMIN, business_id=""), "user-2", command
    )

    assert refused.error.code == "INSUFFICIENT_ROLE"
    assert allowed.is_ok()
    assert target.profile_status == ProfileStatus.SUSPENDED


@pytest.mark.asyncio
async def test_admin_binds_unassigned_user_to_own_business(mock_uow, make_principal, file_service):
    target = member(business_id="", role=UserRole.PENDING)
    mock_uow.users.get_by_id.return_value = target

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", UpdateUserCommand(business_id="biz-1")
    )

    assert result.is_ok()
    assert target.business_id == "biz-1"


@pytest.mark.asyncio
async def test_admin_cannot_bind_to_foreign_business(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member(business_id="")

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", UpdateUserCommand(business_id="biz-9")
    )

    assert result.error.code == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "command",
    [
        UpdateUserCommand(password="Hijack3d!"),
        UpdateUserCommand(role=UserRole.ADMIN),
        UpdateUserCommand(first_name="Mallory"),
    ],
)
async def test_admin_cannot_change_unbound_user(mock_uow, make_principal, file_service, command):
    target = member(business_id="", role=UserRole.PENDING)
    mock_uow.users.get_by_id.return_value = target
    original_hash = target.password_hash

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", command
    )

    assert result.error.code == "CROSS_TENANT_ACCESS"
    assert target.role == UserRole.PENDING
    assert target.password_hash == original_hash
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admin_binds_and_names_unbound_user_together(mock_uow, make_principal, file_service):
    target = member(business_id="", role=UserRole.PENDING)
    mock_uow.users.get_by_id.return_value = target

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN),
        "user-2",
        UpdateUserCommand(business_id="biz-1", first_name="Bob"),
    )

    assert result.is_ok()
    assert target.business_id == "biz-1"
    assert target.first_name == "Bob"


@pytest.mark.asyncio
async def test_super_admin_unbinds_user(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.SUPER_ADMIN, business_id=""),
        "user-2",
        UpdateUserCommand(business_id=""),
    )

    assert result.is_ok()
    assert target.business_id == ""


@pytest.mark.asyncio
async def test_self_password_change_needs_current_password(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target
    use_case = UpdateUserUseCase(mock_uow, file_service)
    caller = make_principal(user_id="user-2")

    wrong = await use_case.execute(
        caller, "user-2", UpdateUserCommand(password="N3wPass!", current_password="nope")
    )
    right = await use_case.execute(
        caller, "user-2", UpdateUserCommand(password="N3wPass!", current_password="Secret1!")
    )

    assert wrong.error.code == "INVALID_CREDENTIALS"
    assert right.is_ok()
    assert verify_password("N3wPass!", target.password_hash)


@pytest.mark.asyncio
async def test_weak_new_password(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member()

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(role=UserRole.ADMIN), "user-2", UpdateUserCommand(password="short")
    )

    assert result.error.code == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_profile_picture_is_stored_public(mock_uow, make_principal, file_service):
    target = member()
    mock_uow.users.get_by_id.return_value = target
    file_service.store.return_value = FileMetadata(
        original_filename="me.png",
        stored_filename="stored.png",
        mime_type="image/png",
        file_size=3,
        file_hash="abc",
        business_id="biz-1",
        uploaded_by="user-2",
    )
    command = UpdateUserCommand(profile_picture=b"png", profile_picture_filename="me.png")

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(user_id="user-2"), "user-2", command
    )

    assert result.value.profile_picture == "stored.png"
    kwargs = file_service.store.call_args.kwargs
    assert kwargs["public_access"] is True
    assert kwargs["require_image"] is True


@pytest.mark.asyncio
async def test_rejected_profile_picture(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = member()
    file_service.store.side_effect = UnsupportedMediaType("Only images are allowed")
    command = UpdateUserCommand(profile_picture=b"%PDF", profile_picture_filename="doc.pdf")

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(user_id="user-2"), "user-2", command
    )

    assert result.error.code == "UNSUPPORTED_MEDIA_TYPE"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_unknown_user(mock_uow, make_principal, file_service):
    mock_uow.users.get_by_id.return_value = None

    result = await UpdateUserUseCase(mock_uow, file_service).execute(
        make_principal(), "missing", UpdateUserCommand()
    )

    assert result.error.code == "USER_NOT_FOUND"


# ============================================================================
# InviteUserUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_invite_binds_user_and_sends_email(mock_uow, make_principal, email_service):
    invitee = member(business_id="", role=UserRole.PENDING)
    mock_uow.users.get_by_email.return_value = invitee
    mock_uow.businesses.get_by_id.return_value = Business(id="biz-1", name="Acme")

    result = await InviteUserUseCase(mock_uow, email_service).execute(
        make_principal(role=UserRole.ADMIN), "bob@example.com"
    )

    assert result.is_ok()
    assert invitee.business_id == "biz-1"
    subject = email_service.send_email.call_args[0][1]
    assert subject.endswith("Acme")


@pytest.mark.asyncio
async def test_invite_already_assigned(mock_uow, make_principal, email_service):
    mock_uow.users.get_by_email.return_value = member(business_id="biz-2")

    result = await InviteUserUseCase(mock_uow, email_service).execute(
        make_principal(role=UserRole.ADMIN), "bob@example.com"
    )

    assert result.error.code == "ALREADY_ASSIGNED"
    email_service.send_email.assert_not_called()


@pytest.mark.asyncio
async def test_invite_requires_admin(mock_uow, make_principal, email_service):
    result = await InviteUserUseCase(mock_uow, email_service).execute(
        make_principal(), "bob@example.com"
    )

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invite_unknown_user(mock_uow, make_principal, email_service):
    mock_uow.users.get_by_email.return_value = None

    result = await InviteUserUseCase(mock_uow, email_service).execute(
        make_principal(role=UserRole.ADMIN), "ghost@example.com"
    )

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_invite_email_failure_keeps_binding(mock_uow, make_principal, email_service):
    invitee = member(business_id="")
    mock_uow.users.get_by_email.return_value = invitee
    mock_uow.businesses.get_by_id.return_value = Business(id="biz-1", name="Acme")
    email_service.send_email.side_effect = EmailError("down")

    result = await InviteUserUseCase(mock_uow, email_service).execute(
        make_principal(role=UserRole.ADMIN), "bob@example.com"
    )

    assert result.error.code == "EMAIL_SEND_FAILED"
    mock_uow.commit.assert_called_once()

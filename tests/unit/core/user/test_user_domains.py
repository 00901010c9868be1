import pytest
from pydantic import ValidationError

from teamportal.core.user import MemberRead, UserCreate, UserRead, UserRoleEnum, UserUpdate


def test_display_label_prefers_display_name():
    user = UserRead(id='user-1', email='dana@example.com', display_name='Dana')
    assert user.display_label == 'Dana'
    assert MemberRead.from_user(user).display_name == 'Dana'


def test_display_label_falls_back_to_email():
    user = UserRead(id='user-1', email='dana@example.com')
    assert user.display_label == 'dana@example.com'
    assert MemberRead.from_user(user).display_name == 'dana@example.com'


def test_is_admin():
    assert UserRead(id='user-1', email='a@example.com', role=UserRoleEnum.ADMIN).is_admin
    assert not UserRead(id='user-2', email='b@example.com').is_admin


def test_create_strips_display_name():
    user = UserCreate(email='dana@example.com', display_name='  Dana  ')
    assert user.display_name == 'Dana'
    assert user.id.startswith('user-')
    assert user.role == UserRoleEnum.MEMBER


@pytest.mark.parametrize('display_name', ['   ', '', '\t\n', None])
def test_blank_display_name_is_none(display_name):
    assert UserCreate(email='dana@example.com', display_name=display_name).display_name is None
    assert UserUpdate(display_name=display_name).display_name is None


def test_email_is_validated():
    with pytest.raises(ValidationError):
        UserCreate(email='not-an-email')

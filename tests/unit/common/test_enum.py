from sqlalchemy import Enum

from teamportal.app.time_blocks import TimeBlockLabel
from teamportal.core.user import UserRoleEnum


def test_has_matches_values_exactly():
    assert TimeBlockLabel.has('Sleep')
    assert TimeBlockLabel.has(TimeBlockLabel.IDLE)
    assert not TimeBlockLabel.has('sleep')
    assert not TimeBlockLabel.has('SLEEP')
    assert not TimeBlockLabel.has(None)


def test_list_all_keeps_declaration_order():
    assert TimeBlockLabel.list_all() == ['Work', 'Sleep', 'Idle', 'Absent']
    assert UserRoleEnum.list_all() == ['member', 'admin']


def test_column_type_stores_values():
    column_type = UserRoleEnum.as_column_type('userrole')
    assert isinstance(column_type, Enum)
    assert column_type.name == 'userrole'
    assert column_type.enums == ['member', 'admin']


def test_str_is_value():
    assert str(TimeBlockLabel.WORK) == 'Work'
    assert f'{UserRoleEnum.ADMIN}' == 'admin'

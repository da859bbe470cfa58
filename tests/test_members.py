import pytest

from kickoff.exceptions import ValidationError
from kickoff.models import Member
from kickoff.services.credentials import verify_password
from kickoff.services.members import create_member, set_member_active, change_password, authenticate


def test_create_member_with_temporary_password(app):
    member, password = create_member('Anna', ' Anna@Test.de ')

    assert member.email == 'anna@test.de'
    assert member.must_change_password is True
    assert member.is_active is True
    assert member.is_admin is False
    assert len(password) == 12
    assert verify_password(password, member.password_hash)


def test_duplicate_email_rejected(app):
    create_member('Anna', 'anna@test.de')
    with pytest.raises(ValidationError):
        create_member('Anna 2', 'ANNA@test.de')
    assert Member.query.count() == 1


@pytest.mark.parametrize('nickname, email', [('', 'a@test.de'), ('Anna', ''), ('Anna', 'no-at-sign')])
def test_missing_fields_rejected(app, nickname, email):
    with pytest.raises(ValidationError):
        create_member(nickname, email)


def test_change_password_clears_flag(app):
    member, _ = create_member('Anna', 'anna@test.de')

    change_password(member, 'neuesPW', 'neuesPW')

    assert member.must_change_password is False
    assert authenticate('anna@test.de', 'neuesPW') == member


def test_change_password_validation_keeps_old_hash(app):
    member, password = create_member('Anna', 'anna@test.de')

    with pytest.raises(ValidationError):
        change_password(member, 'kurz', 'kurz')

    assert member.must_change_password is True
    assert authenticate('anna@test.de', password) == member


def test_authenticate_rejects_wrong_password(app):
    create_member('Anna', 'anna@test.de')
    assert authenticate('anna@test.de', 'wrong') is None
    assert authenticate('nobody@test.de', 'wrong') is None


def test_deactivate_and_reactivate(app, make_member):
    tom = make_member('Tom')

    set_member_active(tom, False)
    assert Member.roster() == []

    set_member_active(tom, True)
    assert Member.roster() == [tom]

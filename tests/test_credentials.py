import pytest

from kickoff.exceptions import ValidationError
from kickoff.services.credentials import generate_password, hash_password, verify_password, validate_new_password


def test_generated_password_length():
    assert len(generate_password()) == 12
    assert len(generate_password(20)) == 20


def test_generated_passwords_differ():
    assert generate_password() != generate_password()


def test_hash_and_verify():
    hashed = hash_password('TestPassword123!')

    assert hashed != 'TestPassword123!'
    assert verify_password('TestPassword123!', hashed) is True
    assert verify_password('WrongPassword', hashed) is False
    assert verify_password('', hashed) is False


def test_short_password_rejected():
    with pytest.raises(ValidationError):
        validate_new_password('abc12', 'abc12')


def test_mismatch_rejected():
    with pytest.raises(ValidationError):
        validate_new_password('abcdef', 'abcdeg')


def test_six_characters_accepted():
    validate_new_password('abcdef', 'abcdef')

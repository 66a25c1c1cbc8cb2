"""Tests for User and NewUser schemas."""

import pytest
from pydantic import ValidationError

from userstore.models.user import NewUser, User


class TestUser:
    """Tests for the User result shape."""

    def test_accepts_column_aliases(self) -> None:
        """lastName and from map onto last_name and origin."""
        user = User.model_validate(
            {"id": 1, "name": "Ana", "lastName": "Silva", "from": "Porto", "age": 30}
        )

        assert user.last_name == "Silva"
        assert user.origin == "Porto"
        assert user.key is None

    def test_dumps_with_column_names(self) -> None:
        """by_alias output matches the stored column names."""
        user = User(id=1, name="Ana", last_name="Silva", age=30, key="vip")

        assert user.model_dump(by_alias=True) == {
            "id": 1,
            "name": "Ana",
            "lastName": "Silva",
            "from": None,
            "age": 30,
            "key": "vip",
        }

    def test_is_immutable(self) -> None:
        """Returned users are read-only."""
        user = User(id=1, name="Ana", last_name="Silva", age=30)

        with pytest.raises(ValidationError):
            user.age = 31


class TestNewUser:
    """Tests for batch insert elements."""

    def test_accepts_caller_keys(self) -> None:
        """Callers send lastName."""
        new_user = NewUser.model_validate({"name": "Ana", "lastName": "Silva", "age": 30})

        assert (new_user.name, new_user.last_name, new_user.age) == ("Ana", "Silva", 30)

    def test_keeps_whitespace_and_quotes(self) -> None:
        """Values are stored verbatim."""
        new_user = NewUser(name=" O'Brien ", last_name="D'Arcy", age=1)

        assert new_user.name == " O'Brien "

    @pytest.mark.parametrize(
        "payload",
        [
            {"lastName": "Silva", "age": 30},
            {"name": "", "lastName": "Silva", "age": 30},
            {"name": "Ana", "lastName": "Silva", "age": -5},
            {"name": "Ana", "lastName": "Silva", "age": 3.5},
            {"name": "Ana", "lastName": "Silva", "age": False},
        ],
    )
    def test_rejects_malformed_entries(self, payload: dict) -> None:
        """Missing fields and wrong types fail validation."""
        with pytest.raises(ValidationError):
            NewUser.model_validate(payload)

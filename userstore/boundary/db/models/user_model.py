"""
User ORM model.

Maps the ``Users`` table. Column names follow the existing schema
(``lastName``, ``from``) while Python attributes use snake_case.

Dependencies: sqlalchemy, userstore.boundary.db.base
System role: Persistence shape of the Users entity
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from userstore.boundary.db.base import Base


class UserModel(Base):
    """
    Users table row.

    Attributes:
        id: Integer primary key assigned by the store on insert
        name: First name, looked up by exact match
        last_name: Family name (column ``lastName``)
        origin: Place of origin (column ``from``, a reserved word the
                compiler always quotes)
        age: Age in years
        settings: Serialized JSON document; only its ``key`` field is read
    """

    __tablename__ = "Users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column("lastName", String(255), nullable=False)
    origin: Mapped[str | None] = mapped_column("from", String(255), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    settings: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel id={self.id} name={self.name!r} age={self.age}>"

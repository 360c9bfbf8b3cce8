"""ORM models. Importing this package registers every table with Base.metadata."""

from notekeeper.models.note import Note
from notekeeper.models.user import User

__all__ = ["Note", "User"]

"""Factory Boy definition for :class:`blog.models.user.User`."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from blog.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd1"


class UserFactory(BaseFactory):
    """Build persisted users; ``password`` is hashed, never stored raw."""

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    nickname = factory.Sequence(lambda n: f"writer{n}")
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))

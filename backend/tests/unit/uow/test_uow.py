import pytest
from sqlalchemy import text

from blog.models.user import User
from blog.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from blog.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        assert session.query(User).count() == 1

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert session.query(User).count() == 0


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_blocks_core_dml(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(text("DELETE FROM users"))

    def test_allows_reads(self, session):
        UserFactory()
        with ROuow() as uow:
            assert uow.users.count() == 1

    def test_guards_are_removed_on_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert session.query(User).count() == 1

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

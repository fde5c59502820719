"""Integration tests for the SQLAlchemy repositories with Testcontainers PostgreSQL."""

from uuid import UUID, uuid4

import pytest

from bookshelf.domain.catalog import Author, DuplicateIsbnError, Publisher
from bookshelf.domain.user import EmailAlreadyExistsError, User, UserStatus
from bookshelf.infrastructure.persistence.sqlalchemy.repositories import (
    AuthorRepositorySQLAlchemy,
    BookRepositorySQLAlchemy,
    PublisherRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import TEST_EMAIL, make_book


def _new_user(email: str = TEST_EMAIL) -> User:
    return User.create(
        name="Ada",
        surname="Lovelace",
        email=email,
        password_hash="hashed_password",  # NOQA: S106
    )


@pytest.fixture
def user_repo(db_session):
    return UserRepositorySQLAlchemy(db_session)


@pytest.fixture
async def catalog(db_session):
    """Persist one author and one publisher; returns their ids."""
    author = await AuthorRepositorySQLAlchemy(db_session).save(
        Author(name="Ursula K. Le Guin", country="US"),
    )
    publisher = await PublisherRepositorySQLAlchemy(db_session).save(
        Publisher(name="Harper & Row", country="US"),
    )
    return author.id, publisher.id


@pytest.mark.integration
class TestUserRepositorySQLAlchemy:
    """Integration tests for UserRepositorySQLAlchemy."""

    async def test_save_and_find_by_id(self, user_repo):
        user = _new_user()

        await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert isinstance(found.id, UUID)
        assert found.email == TEST_EMAIL
        assert found.status == UserStatus.PENDING
        assert found.created_at.tzinfo is not None

    async def test_find_by_email_case_insensitive(self, user_repo):
        await user_repo.save(_new_user())

        found = await user_repo.find_by_email("ADA@EXAMPLE.COM")

        assert found is not None
        assert await user_repo.exists_by_email("Ada@Example.com")

    async def test_find_missing(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None
        assert await user_repo.find_by_email("nobody@example.com") is None

    async def test_status_change_is_persisted(self, user_repo):
        user = _new_user()
        await user_repo.save(user)

        user.activate()
        await user_repo.save(user)

        found = await user_repo.find_by_id(user.id)
        assert found.status == UserStatus.ACTIVE

    async def test_unique_email_is_enforced_by_the_database(self, user_repo):
        await user_repo.save(_new_user())

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.save(_new_user())


@pytest.mark.integration
class TestBookRepositorySQLAlchemy:
    """Integration tests for BookRepositorySQLAlchemy."""

    async def test_find_by_isbn_joins_relations(self, db_session, catalog):
        author_id, publisher_id = catalog
        repo = BookRepositorySQLAlchemy(db_session)
        book = make_book(author_id=author_id, publisher_id=publisher_id)
        await repo.save(book)

        by_isbn10 = await repo.find_by_isbn10(book.isbn10)
        by_isbn13 = await repo.find_by_isbn13(book.isbn13)

        assert by_isbn10.book.id == by_isbn13.book.id == book.id
        assert by_isbn10.author.name == "Ursula K. Le Guin"
        assert by_isbn13.publisher.name == "Harper & Row"

    async def test_counts_by_author_and_publisher(self, db_session, catalog):
        author_id, publisher_id = catalog
        repo = BookRepositorySQLAlchemy(db_session)
        await repo.save(make_book(author_id, publisher_id, isbn_pair=0))
        await repo.save(make_book(author_id, publisher_id, isbn_pair=1))

        assert await repo.count() == 2
        assert await repo.count_by_author(author_id) == 2
        assert await repo.count_by_publisher(publisher_id) == 2
        assert await repo.count_by_author(author_id + 1) == 0

    async def test_duplicate_isbn_is_enforced_by_the_database(
        self,
        db_session,
        catalog,
    ):
        author_id, publisher_id = catalog
        repo = BookRepositorySQLAlchemy(db_session)
        await repo.save(make_book(author_id, publisher_id))

        with pytest.raises(DuplicateIsbnError):
            await repo.save(make_book(author_id, publisher_id))

    async def test_page_is_ordered_by_title(self, db_session, catalog):
        author_id, publisher_id = catalog
        repo = BookRepositorySQLAlchemy(db_session)
        first = make_book(author_id, publisher_id, isbn_pair=0)
        second = make_book(author_id, publisher_id, isbn_pair=1)
        second.update(title="A Wizard of Earthsea")
        await repo.save(first)
        await repo.save(second)

        page = await repo.find_page(offset=0, limit=1)

        assert [item.book.title for item in page] == ["A Wizard of Earthsea"]

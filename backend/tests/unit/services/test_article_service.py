"""Article and comment services."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from blog.models import ArticleLike, Comment
from blog.services._shared.errors import ForbiddenError, NotFoundError, ValidationError
from blog.services.articles import ArticleCreateIn, ArticleService
from blog.services.comments import CommentService
from blog.services.engagement import LikeService
from tests.factories.article import ArticleFactory, CommentFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def articles() -> ArticleService:
    return ArticleService()


@pytest.fixture()
def comments() -> CommentService:
    return CommentService()


class TestArticleService:
    def test_create_and_get(self, articles):
        author = UserFactory()
        created = articles.create(author.email, ArticleCreateIn(title=" Hello ", content="World"))

        fetched = articles.get(created.id)
        assert fetched.title == "Hello"
        assert fetched.user_id == author.id
        assert fetched.like_count == 0

    @pytest.mark.parametrize("title, content", [("", "body"), ("title", "   ")])
    def test_create_rejects_blank_fields(self, articles, title, content):
        author = UserFactory()
        with pytest.raises(ValidationError):
            articles.create(author.email, ArticleCreateIn(title=title, content=content))

    def test_get_unknown(self, articles):
        with pytest.raises(NotFoundError):
            articles.get(424242)

    def test_list_by_author(self, articles):
        author = UserFactory()
        ArticleFactory.create_batch(2, author=author)
        ArticleFactory()

        assert len(articles.list_by_author(author.email)) == 2

    def test_only_author_may_delete(self, articles):
        article = ArticleFactory()
        intruder = UserFactory()
        with pytest.raises(ForbiddenError):
            articles.delete(article.id, intruder.email)

    def test_delete_removes_dependents(self, articles, session):
        author = UserFactory()
        fan = UserFactory()
        article = ArticleFactory(author=author)
        article_id = article.id
        CommentFactory(author=fan, article=article)
        LikeService(base_delay=0).add(article_id, fan.email)

        articles.delete(article_id, author.email)

        with pytest.raises(NotFoundError):
            articles.get(article_id)
        assert session.execute(select(func.count(Comment.id))).scalar_one() == 0
        assert session.execute(select(func.count(ArticleLike.id))).scalar_one() == 0


class TestCommentService:
    def test_create_and_list(self, comments):
        article = ArticleFactory()
        reader = UserFactory()
        comments.create(reader.email, article.id, "First!")
        comments.create(reader.email, article.id, "Second")

        listed = comments.list_for_article(article.id)
        assert [c.content for c in listed] == ["First!", "Second"]
        assert all(c.user_id == reader.id for c in listed)

    def test_create_on_unknown_article(self, comments):
        reader = UserFactory()
        with pytest.raises(NotFoundError):
            comments.create(reader.email, 31337, "hello")

    def test_blank_comment_rejected(self, comments):
        article = ArticleFactory()
        with pytest.raises(ValidationError):
            comments.create("anyone@example.com", article.id, "  ")

import pytest

from pagebuilder import create_app
from pagebuilder.extensions import db
from pagebuilder.domain.components import Component, ComponentKind
from pagebuilder.domain.page import Page
from pagebuilder.repositories.memory import InMemoryPageRepository
from pagebuilder.repositories.sql import SqlAlchemyPageRepository


@pytest.fixture
def repository():
    return InMemoryPageRepository()


@pytest.fixture
def app(repository):
    app = create_app("testing", page_repository=repository)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app():
    app = create_app("testing", page_repository=SqlAlchemyPageRepository())
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def sql_repository(sql_app):
    return sql_app.extensions["page_repository"]


@pytest.fixture
def text_and_card_page():
    """A page holding [TextComponent order=1, CardComponent order=2]."""
    page = Page()
    page.add_component(Component.create_default(ComponentKind.TEXT, order=1))
    page.add_component(Component.create_default(ComponentKind.CARD, order=2))
    return page

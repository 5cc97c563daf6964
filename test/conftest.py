"""Shared fixtures for page tree tests."""

import pytest
from django.conf import settings
from django.utils import translation

from apps.pages.models import Page
from apps.pages.services import ResolutionContext


@pytest.fixture(autouse=True)
def default_locale():
    """Run every test in the default locale and reset it afterwards."""
    translation.activate(settings.LANGUAGE_CODE)
    yield
    translation.deactivate()


@pytest.fixture
def context() -> ResolutionContext:
    """Default-locale context with marketable URLs on."""
    return ResolutionContext(
        locale="en",
        default_locale="en",
        marketable_urls=True,
        reserved_words=tuple(settings.PAGES_RESERVED_WORDS),
    )


@pytest.fixture
def flat_context(context: ResolutionContext) -> ResolutionContext:
    """Default-locale context with marketable URLs off."""
    return ResolutionContext(
        locale=context.locale,
        default_locale=context.default_locale,
        marketable_urls=False,
        reserved_words=context.reserved_words,
    )


@pytest.fixture
def ru_context(context: ResolutionContext) -> ResolutionContext:
    """Russian-locale context with marketable URLs on."""
    return ResolutionContext(
        locale="ru",
        default_locale=context.default_locale,
        marketable_urls=True,
        reserved_words=context.reserved_words,
    )


@pytest.fixture
def page(db) -> Page:
    """A deletable top-level page."""
    return Page.objects.create(title="Pytest is great for testing too", deletable=True)


@pytest.fixture
def child(page: Page) -> Page:
    """A child of ``page``."""
    return page.children.create(title="The child page")

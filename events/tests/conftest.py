"""Shared test fixtures for the events app."""

from collections.abc import Callable
from typing import Any

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AbstractUser

from events.models import Event


@pytest.fixture()
def make_event() -> Callable[..., Event]:
    """
    Return a factory for unsaved events.

    Pure functions work on unsaved instances, so most tests need no database.
    """

    def factory(**fields: Any) -> Event:
        fields.setdefault("title", "Summit")
        return Event(**fields)

    return factory


@pytest.fixture()
def staff_user() -> AbstractUser:
    """Create a privileged user."""
    return get_user_model().objects.create_user(
        username="staff",
        email="staff@example.com",
        password="staff-password-123",
        is_staff=True,
        is_superuser=True,
    )


@pytest.fixture()
def regular_user() -> AbstractUser:
    """Create a non-privileged user."""
    return get_user_model().objects.create_user(
        username="regular",
        email="regular@example.com",
        password="regular-password-123",
    )

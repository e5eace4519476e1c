"""Tests for the seed/reset command."""

import pytest
from users_api.config import Settings
from users_api.seed import SAMPLE_USERS, main, seed_users
from users_common.services import UserService

pytestmark = pytest.mark.unit


def test_seed_replaces_existing_users(service: UserService) -> None:
    service.create_user({"name": "Old", "email": "old@example.com", "password": "password123"})

    created = seed_users(service)

    assert [u.email for u in created] == [u["email"] for u in SAMPLE_USERS]
    assert service.count_users() == (len(SAMPLE_USERS), len(SAMPLE_USERS))


def test_seed_goes_through_validation(service: UserService) -> None:
    users = seed_users(service, [{"name": " Padded ", "email": "MIXED@Example.com", "password": "password123"}])

    assert (users[0].name, users[0].email) == ("Padded", "mixed@example.com")


@pytest.mark.parametrize("argv", [[], ["--reset"]])
def test_main_runs_against_memory_store(settings: Settings, argv: list[str]) -> None:
    main(argv, settings=settings)

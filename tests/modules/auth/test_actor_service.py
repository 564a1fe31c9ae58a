# -*- coding: utf-8 -*-
import pytest

from app.modules.auth.services import ANONYMOUS_ACTOR, actor_from_user, resolve_actor
from app.modules.auth.models import AppUser


@pytest.mark.asyncio
async def test_known_user_is_resolved(store, seed):
    await seed.user("u-1", "ana@radio.test", "Ana", "Pérez", role="admin")

    actor = await resolve_actor(store, " u-1 ")

    assert actor.user_id == "u-1"
    assert actor.email == "ana@radio.test"
    assert actor.name == "Ana Pérez"
    assert actor.role == "admin"
    assert actor.is_anonymous is False


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [None, "", "   ", "ghost"])
async def test_missing_or_unknown_user_is_anonymous(store, user_id):
    assert await resolve_actor(store, user_id) is ANONYMOUS_ACTOR


@pytest.mark.asyncio
async def test_offline_store_is_anonymous(offline_store):
    actor = await resolve_actor(offline_store, "u-1")

    assert actor.is_anonymous
    assert actor.email == "anonymous@unknown.com"
    assert actor.role == "visitor"


def test_user_without_names_falls_back_to_email():
    actor = actor_from_user(AppUser(id="u-2", email="sin.nombre@radio.test", role="user"))

    assert actor.name == "sin.nombre@radio.test"

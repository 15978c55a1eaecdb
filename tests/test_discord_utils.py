from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from franky.util import discord_utils


class FakeMember:
    def __init__(self, **permissions):
        self.guild_permissions = SimpleNamespace(**permissions)


@pytest.fixture(autouse=True)
def fake_member_type(monkeypatch):
    monkeypatch.setattr(discord_utils.discord, "Member", FakeMember)


def test_has_permissions_requires_every_flag():
    ctx = SimpleNamespace(author=FakeMember(ban_members=True, manage_messages=False))

    assert discord_utils.has_permissions(ctx, ban_members=True)
    assert not discord_utils.has_permissions(ctx, ban_members=True, manage_messages=True)


def test_has_permissions_rejects_non_members():
    ctx = SimpleNamespace(author=SimpleNamespace(guild_permissions=SimpleNamespace(administrator=True)))

    assert not discord_utils.has_permissions(ctx, administrator=True)


def test_is_administrator():
    assert discord_utils.is_administrator(FakeMember(administrator=True))
    assert not discord_utils.is_administrator(FakeMember(administrator=False))
    assert not discord_utils.is_administrator(SimpleNamespace())


def test_bot_can_manage_messages():
    allowed = SimpleNamespace(permissions_for=lambda me: SimpleNamespace(read_messages=True, manage_messages=True))
    denied = SimpleNamespace(permissions_for=lambda me: SimpleNamespace(read_messages=True, manage_messages=False))
    guild = SimpleNamespace(me=object())

    assert discord_utils.bot_can_manage_messages(allowed, guild)
    assert not discord_utils.bot_can_manage_messages(denied, guild)
    assert not discord_utils.bot_can_manage_messages(allowed, None)


@pytest.mark.asyncio
async def test_safe_delete_message_success():
    message = SimpleNamespace(id=1, delete=AsyncMock())

    assert await discord_utils.safe_delete_message(message) is True


@pytest.mark.asyncio
async def test_safe_delete_message_forbidden():
    message = SimpleNamespace(id=1, delete=AsyncMock(side_effect=discord.Forbidden(MagicMock(), "missing access")))

    assert await discord_utils.safe_delete_message(message) is False

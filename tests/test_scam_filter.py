import pytest

from franky.moderation.scam_filter import SCAM_KEYWORDS, is_scam_or_spam


@pytest.mark.parametrize(
    "message",
    [
        "FREE NITRO for everyone, click now",
        "Please share your Seed Phrase to verify",
        "connect wallet to claim your prize",
    ],
)
def test_scam_messages_are_detected(message):
    assert is_scam_or_spam(message)


def test_normal_chat_passes():
    assert not is_scam_or_spam("Did anyone watch the new Frieren episode?")


def test_custom_keywords():
    assert is_scam_or_spam("buy cheap followers", keywords=["Cheap Followers"])
    assert not is_scam_or_spam("free nitro", keywords=["cheap followers"])


def test_default_list_is_not_empty():
    assert "free nitro" in SCAM_KEYWORDS

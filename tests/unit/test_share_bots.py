"""Unit tests for link-preview crawler detection."""

import pytest

from app.services.share_preview.bots import classify_user_agent, is_preview_bot
from app.services.share_preview.render_models import Classification


@pytest.mark.parametrize(
    "user_agent",
    [
        "facebookexternalhit/1.1",
        "Facebot",
        "meta-externalagent/1.1 (+https://developers.facebook.com/docs/sharing/webmasters/crawler)",
        "Twitterbot/1.0",
        "Slackbot-LinkExpanding 1.0 (+https://api.slack.com/robots)",
        "LinkedInBot/1.0 (compatible; Mozilla/5.0; Apache-HttpClient +http://www.linkedin.com)",
        "WhatsApp/2.23.20.0 A",
        "TelegramBot (like TwitterBot)",
        "Mozilla/5.0 (compatible; Discordbot/2.0; +https://discordapp.com)",
        "Mozilla/5.0 (compatible; Google-InspectionTool/1.0)",
        "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
        "SkypeUriPreview Preview/0.5",
    ],
)
def test_known_crawlers_are_bots(user_agent):
    assert classify_user_agent(user_agent) is Classification.bot


@pytest.mark.parametrize(
    "user_agent",
    [
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Safari/604.1",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/124.0 Safari/537.36",
        "curl/8.4.0",
        "",
        None,
    ],
)
def test_browsers_and_unknown_agents_are_human(user_agent):
    assert classify_user_agent(user_agent) is Classification.human


def test_matching_is_case_insensitive():
    assert is_preview_bot("FACEBOOKEXTERNALHIT/1.1")
    assert is_preview_bot("twitterbot/1.0")

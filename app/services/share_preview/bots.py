"""Link-preview crawler detection by User-Agent."""

import re

from app.services.share_preview.render_models import Classification

# Platforms that fetch a URL only to build a preview card
_PREVIEW_BOT_RE = re.compile(
    r"("
    r"facebookexternalhit|facebot|facebookcatalog|meta-externalagent"
    r"|twitterbot|slackbot|linkedinbot"
    r"|whatsapp|telegrambot|discordbot|skypeuripreview|vkshare"
    r"|pinterest|quora link preview|redditbot|embedly|iframely"
    r"|applebot|google-inspectiontool|googlebot|bingbot|bingpreview"
    r"|google.*snippet"
    r")",
    re.IGNORECASE,
)


def is_preview_bot(user_agent: str | None) -> bool:
    return bool(user_agent) and bool(_PREVIEW_BOT_RE.search(user_agent or ""))


def classify_user_agent(user_agent: str | None) -> Classification:
    """Classify a request as crawler or human.

    Missing or unrecognized agents count as human so real visitors are
    always redirected to the site.
    """
    if is_preview_bot(user_agent):
        return Classification.bot
    return Classification.human

import re

MENTION_PATTERN = re.compile(r"@(\S+)")

# Stripped from the end of a token: "ping @bob@example.com," -> bob@example.com
TRAILING_PUNCTUATION = ".,;:!?)]}>'\""


def extract_mentions(content):
    """
    Mentioned emails in order of first appearance, without duplicates.
    """
    seen = []
    for token in MENTION_PATTERN.findall(content or ""):
        token = token.rstrip(TRAILING_PUNCTUATION)
        if token and token not in seen:
            seen.append(token)
    return seen

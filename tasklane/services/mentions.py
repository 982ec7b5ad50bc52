import re
from typing import List, Optional

# "@name" at the start of the text or right after whitespace/punctuation.
# Email addresses and "foo@bar" style tokens are not mentions.
MENTION_PATTERN = re.compile(r"(?:^|[\s.,!?;:()\[\]{}])@(\w+)", re.ASCII)


def parse_mentions(text: Optional[str]) -> List[str]:
    """Return mentioned usernames in first-seen order, deduplicated case-insensitively.

    The original casing of the first occurrence is kept. Whether the usernames
    exist is not checked here.
    """
    if not text:
        return []

    mentions: List[str] = []
    seen = set()
    for match in MENTION_PATTERN.finditer(text):
        username = match.group(1)
        key = username.lower()
        if key in seen:
            continue
        seen.add(key)
        mentions.append(username)
    return mentions

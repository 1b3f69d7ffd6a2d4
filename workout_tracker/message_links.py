"""
Split chat text into literal text, video links and plain hyperlinks.
"""

import re
from dataclasses import dataclass


# A URL runs until whitespace or the start of the next URL.
URL_RE = re.compile(r"https?://(?:(?!https?://)\S)+")
YOUTUBE_WATCH_RE = re.compile(r"^https://www\.youtube\.com/watch\?v=([\w-]+)")

EMBED_URL_TEMPLATE = "https://www.youtube.com/embed/{video_id}?autoplay=1&rel=0"


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class Hyperlink:
    url: str


@dataclass(frozen=True)
class VideoLink:
    url: str
    video_id: str


def classify_url(url):
    """Return a VideoLink for YouTube watch URLs, a Hyperlink otherwise."""
    match = YOUTUBE_WATCH_RE.match(url)
    if match:
        return VideoLink(url=url, video_id=match.group(1))
    return Hyperlink(url=url)


def split_message_links(text):
    """
    Break message text into ordered segments.

    Joining the text of every segment (``TextSegment.text`` or ``url``)
    reproduces the input exactly. Empty text between adjacent URLs is
    dropped.
    """
    segments = []
    position = 0
    for match in URL_RE.finditer(text or ""):
        if match.start() > position:
            segments.append(TextSegment(text[position:match.start()]))
        segments.append(classify_url(match.group(0)))
        position = match.end()

    if text and position < len(text):
        segments.append(TextSegment(text[position:]))
    return segments


def embed_url(video_id):
    return EMBED_URL_TEMPLATE.format(video_id=video_id)

"""Catalog schema validation tests"""
import pytest
from pydantic import ValidationError

from faris.schemas.catalog import ExplanationCreateRequest


def make_explanation(video_url: str) -> ExplanationCreateRequest:
    return ExplanationCreateRequest(title="شرح المبتدأ", grade="sec_2", video_url=video_url)


@pytest.mark.parametrize(
    "video_url",
    [
        "https://www.youtube.com/watch?v=abc123",
        "https://youtube.com/watch?v=abc123",
        "https://m.youtube.com/watch?v=abc123",
        "https://youtu.be/abc123",
        "https://WWW.YouTube.com/watch?v=abc123",
    ],
)
def test_youtube_hosts_accepted(video_url):
    assert make_explanation(video_url).video_url == video_url


@pytest.mark.parametrize(
    "video_url",
    [
        "https://youtube.com.evil.net/watch?v=abc123",
        "https://notyoutube.com/watch?v=abc123",
        "https://evil.net/youtube.com",
        "https://vimeo.com/123",
        "ftp://youtube.com/watch?v=abc123",
        "youtube.com/watch?v=abc123",
    ],
)
def test_other_hosts_rejected(video_url):
    with pytest.raises(ValidationError):
        make_explanation(video_url)

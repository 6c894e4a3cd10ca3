"""TMDB image URLs."""

from __future__ import annotations

from taxaoverlap.shared.constants import TMDB, ImageSize


def image_url(
    path: str | None,
    size: str = ImageSize.PROFILE,
    base_url: str = TMDB.IMAGE_BASE_URL,
) -> str | None:
    """Absolute CDN URL of an image path; None when there is no image.

    >>> image_url("/abc.jpg", "w92")
    'https://image.tmdb.org/t/p/w92/abc.jpg'
    """
    if not path:
        return None
    return f"{base_url.rstrip('/')}/{size}{path}"


__all__ = ["image_url"]

"""
Read-only media lookup used by the publication checklist.
"""

from typing import Any, Dict, Optional

from .models import Media


def fetch_media_by_id(media_id: Any) -> Optional[Dict[str, Any]]:
    """
    Return ``{"alt": ...}`` for the media item, or None when it does not exist.

    Only the alt column is read; relations are never followed. A malformed id
    raises (``ValidationError``/``ValueError`` from the UUID field) and is left
    to the caller to degrade.
    """
    return Media.objects.filter(pk=media_id).values('alt').first()

"""Icon references for mention candidates."""

from dataclasses import replace
from enum import IntEnum

from .models import DocumentEntity, IconKind, IconRef, UserEntity

PROFILE_PICTURE_ALT = "Profile picture"


class AvatarSize(IntEnum):
    """Avatar pixel sizes used by the menu and toasts."""

    SMALL = 16
    TOAST = 18
    MEDIUM = 24
    LARGE = 32


def initials(name: str) -> str:
    """Return the fallback initial shown when a user has no avatar image."""
    name = name.strip()
    return name[0].upper() if name else ""


def avatar_icon(user: UserEntity, size: AvatarSize = AvatarSize.SMALL) -> IconRef:
    """Build an avatar reference for a user."""
    return IconRef(
        kind=IconKind.AVATAR,
        value=user.avatar_url,
        color=user.color,
        size=int(size),
        initials=initials(user.name),
        alt=PROFILE_PICTURE_ALT,
    )


def resize_avatar(icon: IconRef, size: AvatarSize) -> IconRef:
    """Return the same avatar at a different size."""
    return replace(icon, size=int(size))


def document_icon(document: DocumentEntity) -> IconRef:
    """Use the document's own icon if it has one, else the default glyph."""
    if document.icon:
        return IconRef(kind=IconKind.CUSTOM, value=document.icon, color=document.color)
    return IconRef(kind=IconKind.DOCUMENT)

"""Access classification for JVM modifier bitmasks."""

from __future__ import annotations

from enum import Enum

ACC_PUBLIC = 0x0001
ACC_PRIVATE = 0x0002
ACC_PROTECTED = 0x0004
# ASM pseudo access flag for the Deprecated attribute.
ACC_DEPRECATED = 0x20000


class Access(str, Enum):
    """Visibility level of a class, field or method."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    DEFAULT = "default"

    @classmethod
    def from_flags(cls, code: int) -> Access:
        """Classify a raw access-flag bitmask.

        Uses first-match-wins semantics: PUBLIC, then PROTECTED, then
        PRIVATE, otherwise DEFAULT (package-private).
        """
        if code & ACC_PUBLIC:
            return cls.PUBLIC
        if code & ACC_PROTECTED:
            return cls.PROTECTED
        if code & ACC_PRIVATE:
            return cls.PRIVATE
        return cls.DEFAULT


def is_deprecated(code: int) -> bool:
    return bool(code & ACC_DEPRECATED)


__all__ = [
    "ACC_DEPRECATED",
    "ACC_PRIVATE",
    "ACC_PROTECTED",
    "ACC_PUBLIC",
    "Access",
    "is_deprecated",
]

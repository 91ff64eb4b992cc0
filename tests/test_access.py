from __future__ import annotations

import pytest

from domain.access import (
    ACC_DEPRECATED,
    ACC_PRIVATE,
    ACC_PROTECTED,
    ACC_PUBLIC,
    Access,
    is_deprecated,
)

ACC_STATIC = 0x0008
ACC_FINAL = 0x0010


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        (ACC_PUBLIC, Access.PUBLIC),
        (ACC_PROTECTED, Access.PROTECTED),
        (ACC_PRIVATE, Access.PRIVATE),
        (0, Access.DEFAULT),
    ],
)
def test_single_visibility_bit_classifies_directly(flags: int, expected: Access) -> None:
    assert Access.from_flags(flags | ACC_STATIC | ACC_FINAL) is expected


def test_public_and_private_together_classifies_as_public() -> None:
    assert Access.from_flags(ACC_PUBLIC | ACC_PRIVATE) is Access.PUBLIC


def test_protected_wins_over_private() -> None:
    assert Access.from_flags(ACC_PROTECTED | ACC_PRIVATE) is Access.PROTECTED


def test_all_visibility_bits_set_is_public() -> None:
    assert Access.from_flags(ACC_PUBLIC | ACC_PROTECTED | ACC_PRIVATE) is Access.PUBLIC


def test_access_values_are_lowercase_names() -> None:
    assert [a.value for a in Access] == ["public", "protected", "private", "default"]


def test_deprecated_pseudo_flag() -> None:
    assert is_deprecated(ACC_DEPRECATED | ACC_PUBLIC) is True
    assert is_deprecated(ACC_PUBLIC | ACC_FINAL) is False

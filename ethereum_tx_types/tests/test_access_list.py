"""
Test suite for the access list conversions.
"""

from typing import Any

import pytest

from ethereum_tx_exceptions import TypeMismatchError, ValidationError

from ..access_list import (
    Access,
    is_access_list,
    is_access_list_buffer,
    normalize_access_list,
    to_positional_form,
    to_struct_form,
)

ADDRESS = "0x" + "de" * 20
KEY_0 = "0x" + "00" * 32
KEY_1 = "0x" + "00" * 31 + "01"

STRUCT_FORM = [
    {"address": ADDRESS, "storageKeys": [KEY_1, KEY_0]},
    {"address": "0x" + "00" * 20, "storageKeys": []},
]
POSITIONAL_FORM = [
    (bytes.fromhex("de" * 20), [bytes.fromhex(KEY_1[2:]), bytes.fromhex(KEY_0[2:])]),
    (bytes(20), []),
]


def test_round_trip():
    """
    Test that converting to positional form and back yields the same list.
    """
    assert to_positional_form(STRUCT_FORM) == POSITIONAL_FORM
    assert to_struct_form(to_positional_form(STRUCT_FORM)) == STRUCT_FORM


def test_round_trip_normalizes_case():
    """
    Test that hex strings come back in lower case.
    """
    upper = [{"address": "0x" + "DE" * 20, "storageKeys": ["0x" + "AB" * 32]}]
    assert to_struct_form(to_positional_form(upper)) == [
        {"address": ADDRESS, "storageKeys": ["0x" + "ab" * 32]}
    ]


@pytest.mark.parametrize(
    "access_list, exception",
    [
        pytest.param(
            [{"address": ADDRESS, "storageKeys": ["0x" + "00" * 31]}],
            ValidationError,
            id="short_storage_key",
        ),
        pytest.param(
            [{"address": ADDRESS, "storageKeys": ["0x" + "00" * 33]}],
            ValidationError,
            id="long_storage_key",
        ),
        pytest.param(
            [{"address": "0x" + "de" * 19, "storageKeys": []}],
            ValidationError,
            id="short_address",
        ),
        pytest.param(
            [{"address": ADDRESS, "storageKeys": ["0x" + "1" * 63]}],
            ValidationError,
            id="odd_length_storage_key",
        ),
        pytest.param(
            [{"address": "0x" + "a" * 39, "storageKeys": []}],
            ValidationError,
            id="odd_length_address",
        ),
        pytest.param(
            [{"address": ADDRESS, "storageKeys": ["0x" + "zz" * 32]}],
            ValidationError,
            id="malformed_hex",
        ),
        pytest.param([{"storageKeys": []}], ValidationError, id="missing_address"),
        pytest.param([{"address": ADDRESS, "storageKeys": KEY_0}], TypeMismatchError, id="keys_str"),
        pytest.param([ADDRESS], TypeMismatchError, id="bare_address"),
        pytest.param("0x", TypeMismatchError, id="not_a_list"),
    ],
)
def test_to_positional_form_rejections(access_list: Any, exception: type):
    """
    Test that malformed struct-form access lists are rejected.
    """
    with pytest.raises(exception):
        to_positional_form(access_list)


@pytest.mark.parametrize(
    "access_list, is_buffer",
    [
        pytest.param([], True, id="empty"),
        pytest.param((), True, id="empty_tuple"),
        pytest.param(STRUCT_FORM, False, id="struct_form"),
        pytest.param(POSITIONAL_FORM, True, id="positional_form"),
        pytest.param([[bytes(20), []]], True, id="positional_form_lists"),
        pytest.param([Access(address=ADDRESS)], False, id="access_entries"),
    ],
)
def test_classification(access_list: Any, is_buffer: bool):
    """
    Test that the form of an access list is decided by its first element.
    """
    assert is_access_list_buffer(access_list) is is_buffer
    assert is_access_list(access_list) is not is_buffer


def test_classification_rejects_unknown_items():
    """
    Test that an access list of unrecognized items cannot be classified.
    """
    with pytest.raises(TypeMismatchError):
        is_access_list_buffer([1, 2])
    with pytest.raises(TypeMismatchError):
        is_access_list_buffer(None)


@pytest.mark.parametrize(
    "access_list",
    [
        pytest.param(STRUCT_FORM, id="struct_form"),
        pytest.param(POSITIONAL_FORM, id="positional_form"),
        pytest.param(
            [{"address": ADDRESS, "storage_keys": [KEY_1, KEY_0]}, {"address": bytes(20)}],
            id="snake_case_keys",
        ),
    ],
)
def test_normalize(access_list: Any):
    """
    Test that both forms normalize to the same entries.
    """
    normalized = normalize_access_list(access_list)
    assert normalized == (
        Access(address=ADDRESS, storage_keys=(KEY_1, KEY_0)),
        Access(address="0x" + "00" * 20),
    )
    assert [entry.to_buffer_item() for entry in normalized] == POSITIONAL_FORM


def test_normalize_empty():
    """
    Test that a missing or empty access list normalizes to no entries.
    """
    assert normalize_access_list(None) == ()
    assert normalize_access_list([]) == ()


def test_access_json():
    """
    Test that access entries render in struct form.
    """
    entry = Access(address=ADDRESS, storage_keys=[KEY_1])
    assert entry.serialize(mode="json", by_alias=True) == {
        "address": ADDRESS,
        "storageKeys": [KEY_1],
    }

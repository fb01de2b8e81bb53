"""
Active-revision message hashes checked against starknet-py, an independent
SNIP-12 implementation, so layout changes in strings, enums, merkle trees or
presets cannot pass unnoticed.
"""

import copy

import pytest
from starknet_py.utils.typed_data import TypedData as ReferenceTypedData

from snip12.typed_data import get_message_hash

ACCOUNT = "0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826"


def _reference_hash(doc):
    return hex(ReferenceTypedData.from_dict(copy.deepcopy(doc)).message_hash(int(ACCOUNT, 16)))


@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello",
        "a" * 31,
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor",
    ],
    ids=["empty", "short", "exact-31", "long"],
)
def test_base_types(base_types, text):
    doc = base_types(text)
    assert get_message_hash(doc, ACCOUNT) == _reference_hash(doc)


def test_enum(enum_doc):
    assert get_message_hash(enum_doc, ACCOUNT) == _reference_hash(enum_doc)


def test_session_with_merkletree_and_presets(session):
    assert get_message_hash(session, ACCOUNT) == _reference_hash(session)


def test_string_layouts_differ(base_types):
    hashes = {get_message_hash(base_types(t), ACCOUNT) for t in ("", "a" * 31, "a" * 32)}
    assert len(hashes) == 3

import pytest

from snip12.config import EncoderConfig
from snip12.constants import PRIME
from snip12.errors import (ConversionError, MaxDepthExceeded,
                           MerkleShapeError, RangeViolation, TypeMismatch,
                           UnsupportedType)
from snip12.revision import Revision
from snip12.typed_data import (FieldKind, classify_type, encode_value,
                               get_struct_hash, get_type_hash)
from snip12.types import Context
from snip12.utils.hash import (compute_pedersen_hash,
                               compute_pedersen_hash_on_elements,
                               compute_poseidon_hash,
                               compute_poseidon_hash_on_elements,
                               get_selector_from_name)
from snip12.utils.merkle import MerkleTree

ACTIVE = Revision.ACTIVE


def _active(type_name, value, types=None, ctx=None):
    return encode_value(types or {}, type_name, value, ctx, ACTIVE)


# --- classification -----------------------------------------------------------


def test_classify_type(mail):
    types = mail["types"]
    assert classify_type(types, "Person") is FieldKind.STRUCT
    assert classify_type(types, "felt*") is FieldKind.ARRAY
    assert classify_type(types, "u256", ACTIVE) is FieldKind.PRESET
    assert classify_type(types, "u256") is FieldKind.SCALAR
    assert classify_type(types, "timestamp", ACTIVE) is FieldKind.U128
    assert classify_type(types, "shortstring", ACTIVE) is FieldKind.FELT
    assert classify_type(types, "u64", ACTIVE) is FieldKind.UNSUPPORTED
    assert classify_type(types, "u64") is FieldKind.SCALAR
    # selector and merkletree are interpreted by both revisions
    assert classify_type(types, "selector") is FieldKind.SELECTOR
    assert classify_type(types, "merkletree") is FieldKind.MERKLE_TREE


# --- integers -----------------------------------------------------------------


def test_i128_negative_wraps_into_field():
    assert _active("i128", -1) == ("i128", hex(PRIME - 1))
    assert _active("i128", "-1")[1] == _active("felt", PRIME - 1)[1]
    assert _active("i128", 5) == ("i128", "0x5")


def test_i128_bounds():
    assert _active("i128", -(2**127))[1] == hex(PRIME - 2**127)
    assert _active("i128", 2**127 - 1)[1] == hex(2**127 - 1)
    with pytest.raises(RangeViolation):
        _active("i128", -(2**127) - 1)
    with pytest.raises(RangeViolation):
        _active("i128", 2**127)


@pytest.mark.parametrize("tag", ["u128", "timestamp"])
def test_u128_bounds(tag):
    assert _active(tag, 2**128 - 1) == (tag, hex(2**128 - 1))
    assert _active(tag, "1000") == (tag, "0x3e8")
    with pytest.raises(RangeViolation):
        _active(tag, 2**128)
    with pytest.raises(RangeViolation):
        _active(tag, -1)


def test_felt_accepts_short_strings():
    assert _active("felt", "hello") == ("felt", "0x68656c6c6f")
    assert _active("shortstring", "SN_MAIN") == ("shortstring", "0x534e5f4d41494e")
    assert _active("felt", PRIME - 1) == ("felt", hex(PRIME - 1))


def test_felt_range():
    with pytest.raises(RangeViolation):
        _active("felt", PRIME)
    with pytest.raises(RangeViolation):
        _active("felt", "-1")


def test_address_requires_numeric_value():
    assert _active("ContractAddress", "0x49d") == ("ContractAddress", "0x49d")
    assert _active("ClassHash", 7) == ("ClassHash", "0x7")
    with pytest.raises(ConversionError):
        _active("ContractAddress", "alice")
    with pytest.raises(RangeViolation):
        _active("ClassHash", PRIME)


def test_legacy_scalars_are_best_effort():
    assert encode_value({}, "ContractAddress", "alice") == ("ContractAddress", "0x616c696365")
    assert encode_value({}, "u128", 2**200) == ("u128", hex(2**200))
    assert encode_value({}, "i128", "7") == ("i128", "0x7")
    assert encode_value({}, "u64", 5) == ("u64", "0x5")
    assert encode_value({}, "string", "123") == ("string", "0x7b")


# --- bool / string / selector -------------------------------------------------


def test_bool():
    assert _active("bool", True) == ("bool", "0x1")
    assert _active("bool", False) == ("bool", "0x0")
    with pytest.raises(TypeMismatch):
        _active("bool", "true")
    with pytest.raises(TypeMismatch):
        _active("bool", 1)
    assert encode_value({}, "bool", "true") == ("bool", "0x74727565")


def test_active_string_hashes_byte_array():
    assert _active("string", "hello") == (
        "string",
        compute_poseidon_hash_on_elements([0, "0x68656c6c6f", 5]),
    )
    long_text = "a" * 31 + "bc"
    expected = compute_poseidon_hash_on_elements([1, hex(int.from_bytes(b"a" * 31, "big")), "0x6263", 2])
    assert _active("string", long_text) == ("string", expected)
    with pytest.raises(TypeMismatch):
        _active("string", 12)


def test_selector():
    transfer = get_selector_from_name("transfer")
    assert _active("selector", "transfer") == ("felt", transfer)
    assert encode_value({}, "selector", "transfer") == ("felt", transfer)
    assert _active("selector", "0x1234") == ("felt", "0x1234")


def test_unsupported_active_type():
    with pytest.raises(UnsupportedType) as ei:
        _active("u64", 5)
    assert ei.value.type_name == "u64"


# --- arrays / structs / presets -----------------------------------------------


def test_array_hash():
    assert encode_value({}, "felt*", [1, "0x2"]) == (
        "felt*",
        compute_pedersen_hash_on_elements(["0x1", "0x2"]),
    )
    assert _active("u128*", [3]) == ("u128*", compute_poseidon_hash_on_elements([3]))
    with pytest.raises(TypeMismatch):
        encode_value({}, "felt*", "0x1")


def test_struct_value(mail):
    types = mail["types"]
    bob = mail["message"]["to"]
    assert encode_value(types, "Person", bob) == ("Person", get_struct_hash(types, "Person", bob))
    people = encode_value(types, "Person*", [bob, bob])
    assert people[1] == compute_pedersen_hash_on_elements([get_struct_hash(types, "Person", bob)] * 2)


def test_u256_preset():
    type_hash = get_type_hash({}, "u256", ACTIVE)
    assert _active("u256", {"low": 1, "high": "0x0"}) == (
        "u256",
        compute_poseidon_hash_on_elements([type_hash, 1, 0]),
    )
    with pytest.raises(RangeViolation):
        _active("u256", {"low": 2**128, "high": 0})


def test_token_amount_preset():
    amount = {"low": 5, "high": 0}
    amount_hash = _active("u256", amount)[1]
    type_hash = get_type_hash({}, "TokenAmount", ACTIVE)
    assert _active("TokenAmount", {"token_address": "0x49d", "amount": amount}) == (
        "TokenAmount",
        compute_poseidon_hash_on_elements([type_hash, "0x49d", amount_hash]),
    )


# --- enums --------------------------------------------------------------------


def test_enum_variant_encoding(enum_doc):
    types = enum_doc["types"]
    ctx = Context(parent="Example", key="someEnum")
    inner = compute_poseidon_hash_on_elements([0, 1])
    assert _active("enum", {"Variant 2": [2, [0, 1]]}, types, ctx) == (
        "enum",
        compute_poseidon_hash_on_elements([1, "0x2", inner]),
    )
    assert _active("enum", {"Variant 3": [9]}, types, ctx) == (
        "enum",
        compute_poseidon_hash_on_elements([2, "0x9"]),
    )


def test_unit_variant_contributes_zero(enum_doc):
    ctx = Context(parent="Example", key="someEnum")
    assert _active("enum", {"Variant 1": []}, enum_doc["types"], ctx) == (
        "enum",
        compute_poseidon_hash_on_elements([0, 0]),
    )


def test_enum_errors(enum_doc):
    types = enum_doc["types"]
    ctx = Context(parent="Example", key="someEnum")
    with pytest.raises(TypeMismatch):
        _active("enum", {"Variant 9": []}, types, ctx)
    with pytest.raises(TypeMismatch):
        _active("enum", {"Variant 1": [], "Variant 3": [1]}, types, ctx)
    with pytest.raises(TypeMismatch):
        _active("enum", {"Variant 3": []}, types, ctx)
    with pytest.raises(TypeMismatch):
        _active("enum", {"Variant 3": [1]}, types)
    with pytest.raises(RangeViolation):
        _active("enum", {"Variant 3": [-1]}, types, ctx)


def test_legacy_enum_is_opaque():
    assert encode_value({}, "enum", "0x3") == ("enum", "0x3")


# --- merkle trees -------------------------------------------------------------


def test_merkletree_of_structs(session):
    types = session["types"]
    policies = session["message"]["allowed_methods"]
    leaves = [get_struct_hash(types, "Policy", p, ACTIVE) for p in policies]
    root = MerkleTree(leaves, compute_poseidon_hash).root

    ctx = Context(parent="Session", key="allowed_methods")
    assert _active("merkletree", policies, types, ctx) == ("felt", root)


def test_merkletree_without_context_uses_raw_leaves():
    root = MerkleTree(["0x1", "0x2", "0x3"], compute_pedersen_hash).root
    assert encode_value({}, "merkletree", [1, 2, 3]) == ("felt", root)
    # "raw" is not a type the active revision knows
    with pytest.raises(UnsupportedType):
        _active("merkletree", [1, 2, 3])


def test_merkletree_shape_errors(session):
    types = session["types"]
    with pytest.raises(MerkleShapeError):
        _active("merkletree", [], types, Context(parent="Session", key="key"))
    with pytest.raises(MerkleShapeError):
        _active("merkletree", [], types, Context(parent="Session", key="allowed_methods"))

    types["Session"][2] = {"name": "allowed_methods", "type": "merkletree", "contains": "Policy*"}
    with pytest.raises(MerkleShapeError):
        _active("merkletree", [{}], types, Context(parent="Session", key="allowed_methods"))

    types["Session"][2] = {"name": "allowed_methods", "type": "merkletree"}
    with pytest.raises(MerkleShapeError):
        _active("merkletree", [{}], types, Context(parent="Session", key="allowed_methods"))


# --- depth guard --------------------------------------------------------------


def test_max_depth():
    nested = [[1]]
    assert encode_value({}, "felt**", nested, config=EncoderConfig(max_depth=2))[0] == "felt**"
    with pytest.raises(MaxDepthExceeded) as ei:
        encode_value({}, "felt**", nested, config=EncoderConfig(max_depth=1))
    assert ei.value.depth == 2

from typing import Any, Dict

import pytest


ACTIVE_DOMAIN_FIELDS = [
    {"name": "name", "type": "shortstring"},
    {"name": "version", "type": "shortstring"},
    {"name": "chainId", "type": "shortstring"},
    {"name": "revision", "type": "shortstring"},
]


def mail_document() -> Dict[str, Any]:
    """Legacy (revision 0) mail example."""
    return {
        "types": {
            "StarkNetDomain": [
                {"name": "name", "type": "felt"},
                {"name": "version", "type": "felt"},
                {"name": "chainId", "type": "felt"},
            ],
            "Person": [
                {"name": "name", "type": "felt"},
                {"name": "wallet", "type": "felt"},
            ],
            "Mail": [
                {"name": "from", "type": "Person"},
                {"name": "to", "type": "Person"},
                {"name": "contents", "type": "felt"},
            ],
        },
        "primaryType": "Mail",
        "domain": {"name": "StarkNet Mail", "version": "1", "chainId": 1},
        "message": {
            "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
            "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
            "contents": "Hello, Bob!",
        },
    }


def enum_document() -> Dict[str, Any]:
    """Active (revision 1) document with an enum field."""
    return {
        "types": {
            "StarknetDomain": ACTIVE_DOMAIN_FIELDS,
            "Example": [{"name": "someEnum", "type": "enum", "contains": "MyEnum"}],
            "MyEnum": [
                {"name": "Variant 1", "type": "()"},
                {"name": "Variant 2", "type": "(u128,u128*)"},
                {"name": "Variant 3", "type": "(u128)"},
            ],
        },
        "primaryType": "Example",
        "domain": {"name": "StarkNet Mail", "version": "1", "chainId": "1", "revision": "1"},
        "message": {"someEnum": {"Variant 2": [2, [0, 1]]}},
    }


def session_document() -> Dict[str, Any]:
    """Active document with a merkletree field and preset types."""
    return {
        "types": {
            "StarknetDomain": ACTIVE_DOMAIN_FIELDS,
            "Session": [
                {"name": "key", "type": "felt"},
                {"name": "expires_at", "type": "timestamp"},
                {"name": "allowed_methods", "type": "merkletree", "contains": "Policy"},
                {"name": "allowance", "type": "TokenAmount"},
            ],
            "Policy": [
                {"name": "contract_address", "type": "ContractAddress"},
                {"name": "selector", "type": "selector"},
            ],
        },
        "primaryType": "Session",
        "domain": {"name": "Sessions", "version": "1", "chainId": "SN_MAIN", "revision": 1},
        "message": {
            "key": "0x2a",
            "expires_at": 1700000000,
            "allowed_methods": [
                {"contract_address": "0x1", "selector": "transfer"},
                {"contract_address": "0x2", "selector": "approve"},
                {"contract_address": "0x3", "selector": "0x1234"},
            ],
            "allowance": {"token_address": "0x49d", "amount": {"low": "1000", "high": "0"}},
        },
    }


@pytest.fixture
def mail() -> Dict[str, Any]:
    return mail_document()


@pytest.fixture
def enum_doc() -> Dict[str, Any]:
    return enum_document()


@pytest.fixture
def session() -> Dict[str, Any]:
    return session_document()


def base_types_document(text: str) -> Dict[str, Any]:
    """Active document with one field of every scalar tag; `text` fills the string field."""
    return {
        "types": {
            "StarknetDomain": ACTIVE_DOMAIN_FIELDS,
            "Example": [
                {"name": "n0", "type": "felt"},
                {"name": "n1", "type": "bool"},
                {"name": "n2", "type": "string"},
                {"name": "n3", "type": "selector"},
                {"name": "n4", "type": "u128"},
                {"name": "n5", "type": "i128"},
                {"name": "n6", "type": "ContractAddress"},
                {"name": "n7", "type": "ClassHash"},
                {"name": "n8", "type": "timestamp"},
                {"name": "n9", "type": "shortstring"},
            ],
        },
        "primaryType": "Example",
        "domain": {"name": "StarkNet Mail", "version": "1", "chainId": "1", "revision": "1"},
        "message": {
            "n0": "0x3e8",
            "n1": True,
            "n2": text,
            "n3": "transfer",
            "n4": "0x3e8",
            "n5": -170141183460469231731687303715884105727,
            "n6": "0x3e8",
            "n7": "0x3e8",
            "n8": 1000,
            "n9": "transfer",
        },
    }


@pytest.fixture
def base_types():
    return base_types_document

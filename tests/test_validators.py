import pytest

from clusters_mcp.errors import InvalidParametersError
from clusters_mcp.tools.clusters import add_wallets, generate_wallet
from clusters_mcp.tools.registration import get_registration_sign_data
from clusters_mcp.tools.validators import validate_params


def test_unknown_fields_are_dropped():
    params = {
        "wallets": [{"address": "0xA", "name": "n", "isPrivate": False, "extra": 1}],
        "authKey": "tok",
        "unrelated": "ignored",
    }
    cleaned = validate_params(add_wallets.params, params)
    assert cleaned == {
        "wallets": [{"address": "0xA", "name": "n", "isPrivate": False}],
        "authKey": "tok",
    }


def test_optional_fields_absent_and_none_treated_as_absent():
    cleaned = validate_params(
        get_registration_sign_data.params,
        {"network": "solana", "sender": "S", "names": [{"name": "a"}], "referralClusterId": None},
    )
    assert "referralClusterId" not in cleaned
    assert "testnet" not in cleaned
    assert cleaned["names"] == [{"name": "a"}]


def test_missing_required_field():
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(generate_wallet.params, {"type": "evm", "name": "n", "isPrivate": True})
    assert excinfo.value.field == "authKey"


@pytest.mark.parametrize("value", ["true", 1, 0, None])
def test_boolean_must_be_bool(value):
    params = {"type": "evm", "name": "n", "isPrivate": value, "authKey": "tok"}
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(generate_wallet.params, params)
    assert excinfo.value.field == "isPrivate"


def test_enum_rejects_unknown_choice():
    params = {"type": "bitcoin", "name": "n", "isPrivate": True, "authKey": "tok"}
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(generate_wallet.params, params)
    assert excinfo.value.field == "type"


def test_string_rejects_numbers():
    params = {"type": "evm", "name": 5, "isPrivate": True, "authKey": "tok"}
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(generate_wallet.params, params)
    assert excinfo.value.field == "name"


def test_nested_field_path_is_reported():
    params = {
        "wallets": [
            {"address": "0xA", "name": "n", "isPrivate": False},
            {"address": "0xB", "name": "m"},
        ],
        "authKey": "tok",
    }
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(add_wallets.params, params)
    assert excinfo.value.field == "wallets[1].isPrivate"


def test_array_items_must_be_objects():
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(add_wallets.params, {"wallets": ["0xA"], "authKey": "tok"})
    assert excinfo.value.field == "wallets[0]"


def test_array_required_type():
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(add_wallets.params, {"wallets": {"address": "0xA"}, "authKey": "tok"})
    assert excinfo.value.field == "wallets"


def test_params_must_be_mapping():
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(add_wallets.params, ["not", "a", "dict"])  # type: ignore[arg-type]
    assert excinfo.value.field == "params"


def test_none_params_means_empty():
    assert validate_params((), None) == {}


@pytest.mark.parametrize("auth_key", ["tök", "tok\r\nX-Injected: 1", "tok\n", "\x00"])
def test_auth_key_must_be_a_valid_header_value(auth_key):
    with pytest.raises(InvalidParametersError) as excinfo:
        validate_params(add_wallets.params, {"wallets": [], "authKey": auth_key})
    assert excinfo.value.field == "authKey"
    assert excinfo.value.reason == "must be printable ASCII"


def test_printable_auth_key_passes():
    cleaned = validate_params(add_wallets.params, {"wallets": [], "authKey": "eyJ.abc-123_~ +/="})
    assert cleaned["authKey"] == "eyJ.abc-123_~ +/="


def test_non_header_strings_accept_unicode():
    cleaned = validate_params(generate_wallet.params, {"type": "evm", "name": "tök", "isPrivate": False, "authKey": "tok"})
    assert cleaned["name"] == "tök"

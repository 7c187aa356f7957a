from vibefid_server.card_utils.card_validation import expected_card_values, validate_card_traits


def test_expected_values_for_early_fid():
    assert expected_card_values(50, 0.95) == {
        "rarity": "Legendary", "foil": "Prize", "wear": "Pristine", "power": 6480,
    }


def test_server_values_validate():
    result = validate_card_traits(50, 0.95, "Legendary", "Prize", "Pristine", 6480)
    assert result.valid
    assert result.errors == []


def test_power_has_one_point_tolerance():
    assert validate_card_traits(50, 0.95, "Legendary", "Prize", "Pristine", 6481).valid
    result = validate_card_traits(50, 0.95, "Legendary", "Prize", "Pristine", 6482)
    assert not result.valid
    assert result.errors == ["Invalid power: client=6482, expected=6480"]


def test_each_tampered_field_is_reported():
    result = validate_card_traits(50, 0.5, "Mythic", "Standard", "Mint", 99999)
    assert not result.valid
    assert len(result.errors) == 4
    assert result.errors[0].startswith("Invalid rarity: client=Mythic, expected=Common")
    assert "Invalid foil: client=Standard, expected=Prize" in result.errors
    assert "Invalid wear: client=Mint, expected=Pristine" in result.errors


def test_corrected_values_always_returned():
    result = validate_card_traits(4000, 0.72, "Rare", "Prize", "Pristine", 540)
    assert result.to_dict() == {
        "valid": True,
        "errors": [],
        "corrected_values": {"rarity": "Rare", "foil": "Prize", "wear": "Pristine", "power": 540},
    }

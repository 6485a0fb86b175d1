from common.nominal_codes.matching import (
    is_well_formed,
    rule_in_scope,
    rule_matches_description,
    split_keywords,
)
from common.nominal_codes.models import NominalCodeItemType


def test_split_keywords_trims_lowercases_and_drops_empties():
    assert split_keywords(" Brake , PADS,,  ,disc ") == ["brake", "pads", "disc"]
    assert split_keywords("") == []
    assert split_keywords(None) == []
    assert split_keywords(" , , ") == []


def test_wildcard_matches_any_description(make_rule):
    rule = make_rule(keywords="")
    for description in ("Front brake pads", "", "12V battery", "MOT TEST"):
        assert rule_matches_description(rule, description)


def test_blank_keyword_tokens_still_count_as_wildcard(make_rule):
    assert rule_matches_description(make_rule(keywords=" , "), "anything at all")


def test_keyword_match_is_case_insensitive_substring(make_rule):
    rule = make_rule(keywords="BRAKE, oil")
    assert rule_matches_description(rule, "front brakes")
    assert rule_matches_description(rule, "Engine OIL 5W30")
    assert not rule_matches_description(rule, "Wiper blades")


def test_exclusion_wins_over_keyword_and_wildcard(make_rule):
    assert not rule_matches_description(make_rule(keywords="brake", exclude_keywords="fluid"), "Brake Fluid DOT4")
    assert not rule_matches_description(make_rule(keywords="", exclude_keywords="FLUID"), "brake fluid")
    assert rule_matches_description(make_rule(keywords="brake", exclude_keywords="fluid"), "Brake pads")


def test_scope_requires_type_and_entity(make_rule, make_item):
    item = make_item("Pads", entity_id="e1")
    assert rule_in_scope(make_rule(entity_id="all"), item)
    assert rule_in_scope(make_rule(entity_id="e1"), item)
    assert not rule_in_scope(make_rule(entity_id="e2"), item)
    assert not rule_in_scope(make_rule(item_type="Labor"), item)


def test_well_formed_requires_type_and_code(make_rule):
    assert is_well_formed(make_rule())
    assert not is_well_formed(make_rule(item_type=None))
    assert not is_well_formed(make_rule(nominal_code_id=""))
    assert not is_well_formed(make_rule(nominal_code_id="   "))


def test_blank_or_unknown_item_type_becomes_malformed(make_rule, caplog):
    assert make_rule(item_type="").item_type is None
    assert make_rule(item_type="  ").item_type is None
    assert make_rule(item_type="Tyres").item_type is None
    assert "Tyres" in caplog.text
    assert make_rule(item_type=" MOT ").item_type == NominalCodeItemType.MOT
    assert not is_well_formed(make_rule(item_type=""))

"""
Tests for jurisdiction profiles: schema validation, loading, registry and
selection.

Validates:
- validate_profile reports problems structurally and never raises
- Malformed YAML/JSON fails with ProfileLoadError
- Invalid documents fail with ProfileValidationError carrying the errors
- Schema version mismatch is rejected in strict mode
- Registry is read-only, total, and reports fallback
- Location/address selection
"""
import json
import logging
import math

import pytest
import yaml

from casepriority.exceptions import (
    DuplicateProfileError,
    FallbackProfileMissingError,
    ProfileLoadError,
    ProfileValidationError,
    ProfileVersionMismatch,
)
from casepriority.models import BoundingBox, ProfileLanguage, ServiceArea
from casepriority.profiles import (
    ProfileLoader,
    ProfileRegistry,
    build_default_registry,
    load_builtin_profiles,
    load_profile_from_string,
    profile_to_document,
    resolve_profile,
    select_by_address,
    select_by_location,
    validate_profile,
)

from tests.conftest import make_profile, make_profile_doc, make_registry


# =============================================================================
# Schema Validation
# =============================================================================

class TestValidateProfile:
    """Tests for validate_profile()."""

    def test_valid_document(self, profile_doc):
        result = validate_profile(profile_doc)
        assert result.valid is True
        assert result.errors == []

    @pytest.mark.parametrize("candidate", [None, [], "profile", 42])
    def test_non_object(self, candidate):
        result = validate_profile(candidate)
        assert result.valid is False
        assert result.errors == ["Profile must be an object"]

    def test_missing_required_fields_reported_together(self, profile_doc):
        del profile_doc["contacts"]
        del profile_doc["priorityWeights"]
        result = validate_profile(profile_doc)
        assert result.valid is False
        assert "Missing required field: contacts" in result.errors
        assert "Missing required field: priorityWeights" in result.errors

    def test_bad_id_pattern(self, profile_doc):
        profile_doc["id"] = "QC-SPVM"
        result = validate_profile(profile_doc)
        assert result.valid is False
        assert any(e.startswith("id:") for e in result.errors)

    def test_bad_language(self, profile_doc):
        profile_doc["language"] = "de"
        result = validate_profile(profile_doc)
        assert result.valid is False
        assert any(e.startswith("language:") for e in result.errors)

    def test_weight_out_of_range(self, profile_doc):
        profile_doc["priorityWeights"]["ageUnder12"] = 150
        result = validate_profile(profile_doc)
        assert result.valid is False
        assert any("100" in e for e in result.errors)

    def test_float_weight_rejected(self, profile_doc):
        profile_doc["priorityWeights"]["suicidalRisk"] = 35.5
        assert validate_profile(profile_doc).valid is False

    def test_missing_weight_rejected(self, profile_doc):
        del profile_doc["priorityWeights"]["adverseWeather"]
        assert validate_profile(profile_doc).valid is False

    def test_thresholds_must_ascend(self, profile_doc):
        profile_doc["priorityWeights"]["thresholds"]["priority2"] = 70
        result = validate_profile(profile_doc)
        assert result.valid is False
        assert any("ascending" in e for e in result.errors)

    def test_integration_must_be_bool(self, profile_doc):
        profile_doc["integrations"]["hospitalRegistry"] = "yes"
        assert validate_profile(profile_doc).valid is False

    def test_unknown_key_rejected(self, profile_doc):
        profile_doc["priorityWeights"]["favouriteColour"] = 5
        assert validate_profile(profile_doc).valid is False

    def test_snake_case_document_accepted(self):
        doc = profile_to_document(make_profile())
        assert validate_profile(doc).valid is True

    def test_does_not_mutate_input(self, profile_doc):
        before = json.dumps(profile_doc, sort_keys=True)
        validate_profile(profile_doc)
        assert json.dumps(profile_doc, sort_keys=True) == before

    def test_result_to_dict(self):
        assert validate_profile(None).to_dict() == {
            "valid": False,
            "errors": ["Profile must be an object"],
        }


# =============================================================================
# Loader
# =============================================================================

class TestProfileLoader:
    """Tests for ProfileLoader."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "one.yaml"
        path.write_text(yaml.safe_dump(make_profile_doc(id="one_v1")), encoding="utf-8")
        profile = ProfileLoader().load(path)
        assert profile.id == "one_v1"
        assert profile.language == ProfileLanguage.EN
        assert profile.priority_weights.suspected_abduction == 40
        assert profile.thresholds.priority3 == 20

    def test_load_json(self, tmp_path):
        path = tmp_path / "two.json"
        path.write_text(json.dumps(make_profile_doc(id="two_v1")), encoding="utf-8")
        assert ProfileLoader().load(path).id == "two_v1"

    def test_service_area_converted(self, tmp_path):
        doc = make_profile_doc(
            id="area_v1",
            serviceArea={
                "boundingBox": {"minLat": 1.0, "maxLat": 2.0, "minLng": 3.0, "maxLng": 4.0},
                "cities": ["springfield"],
            },
        )
        path = tmp_path / "area.yaml"
        path.write_text(yaml.safe_dump(doc), encoding="utf-8")
        profile = ProfileLoader().load(path)
        assert profile.service_area.cities == ("springfield",)
        assert profile.service_area.bounding_box.contains(1.5, 3.5)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("id: [unclosed\n  name: x", encoding="utf-8")
        with pytest.raises(ProfileLoadError):
            ProfileLoader().load(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ProfileLoadError):
            ProfileLoader().load(path)

    @pytest.mark.parametrize("name,raw", [
        ("latin1.yaml", b"id: caf\xe9\n"),
        ("latin1.json", b'{"id": "caf\xe9"}'),
    ])
    def test_invalid_utf8(self, tmp_path, name, raw):
        path = tmp_path / name
        path.write_bytes(raw)
        with pytest.raises(ProfileLoadError) as exc_info:
            ProfileLoader().load(path)
        assert exc_info.value.details["path"] == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileLoadError) as exc_info:
            ProfileLoader().load(tmp_path / "nope.yaml")
        assert "nope.yaml" in exc_info.value.details["path"]

    def test_invalid_document(self, tmp_path):
        doc = make_profile_doc()
        del doc["contacts"]
        path = tmp_path / "invalid.yaml"
        path.write_text(yaml.safe_dump(doc), encoding="utf-8")
        with pytest.raises(ProfileValidationError) as exc_info:
            ProfileLoader().load(path)
        assert exc_info.value.errors == ["Missing required field: contacts"]

    def test_version_mismatch_strict(self):
        loader = ProfileLoader(strict_version=True)
        with pytest.raises(ProfileVersionMismatch):
            loader.load_dict(make_profile_doc(schema_version="2.0.0"))

    def test_version_mismatch_lenient(self):
        loader = ProfileLoader(strict_version=False)
        profile = loader.load_dict(make_profile_doc(schema_version="2.0.0"))
        assert profile.schema_version == "2.0.0"

    def test_minor_version_accepted(self):
        assert ProfileLoader().load_dict(make_profile_doc(schema_version="1.4.0")).id == "test_jurisdiction"

    def test_load_directory_sorted_and_filtered(self, tmp_path):
        (tmp_path / "b.yaml").write_text(yaml.safe_dump(make_profile_doc(id="b_v1")), encoding="utf-8")
        (tmp_path / "a.json").write_text(json.dumps(make_profile_doc(id="a_v1")), encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignore me", encoding="utf-8")
        profiles = ProfileLoader().load_directory(tmp_path)
        assert [p.id for p in profiles] == ["a_v1", "b_v1"]

    def test_load_from_string(self):
        profile = load_profile_from_string(json.dumps(make_profile_doc(id="str_v1")), format="json")
        assert profile.id == "str_v1"

    def test_load_from_bad_string(self):
        with pytest.raises(ProfileLoadError):
            load_profile_from_string("{oops", format="json")

    def test_load_logs_info(self, tmp_path, caplog):
        path = tmp_path / "logged.yaml"
        path.write_text(yaml.safe_dump(make_profile_doc(id="logged_v1")), encoding="utf-8")
        with caplog.at_level(logging.INFO, logger="casepriority"):
            ProfileLoader().load(path)
        assert "logged_v1" in caplog.text


class TestBuiltinProfiles:
    """The profiles shipped with the package."""

    def test_builtin_ids(self):
        assert sorted(p.id for p in load_builtin_profiles()) == ["generic", "qc_spvm_v1"]

    def test_spvm_weights(self, builtin_registry):
        weights = builtin_registry.get("qc_spvm_v1").priority_weights
        assert weights.age_under_12 == 30
        assert weights.suicidal_risk == 35
        assert weights.suspected_abduction == 40
        assert weights.missing_over_72_hours == 30
        assert weights.thresholds.priority0 == 80

    def test_spvm_is_bilingual(self, builtin_registry):
        assert builtin_registry.get("qc_spvm_v1").language == ProfileLanguage.BOTH

    def test_builtin_profiles_revalidate(self, builtin_registry):
        results = builtin_registry.validate_all()
        assert all(r.valid for r in results.values()), results


# =============================================================================
# Registry
# =============================================================================

class TestProfileRegistry:
    """Tests for ProfileRegistry."""

    def test_duplicate_ids_rejected(self):
        with pytest.raises(DuplicateProfileError):
            ProfileRegistry([make_profile(id="generic"), make_profile(id="generic")])

    def test_fallback_required(self):
        with pytest.raises(FallbackProfileMissingError):
            ProfileRegistry([make_profile(id="only_one")])

    def test_resolve_known(self, builtin_registry):
        assert builtin_registry.resolve("qc_spvm_v1").id == "qc_spvm_v1"

    @pytest.mark.parametrize("jurisdiction_id", ["on_tps_v1", "", None, 42, "QC_SPVM_V1"])
    def test_resolve_unknown_returns_fallback(self, builtin_registry, jurisdiction_id):
        resolution = builtin_registry.resolve_with_status(jurisdiction_id)
        assert resolution.profile.id == "generic"
        assert resolution.fallback_used is True

    def test_resolve_never_returns_none(self, builtin_registry):
        assert builtin_registry.resolve("nothing") is builtin_registry.fallback

    def test_fallback_logs_warning(self, builtin_registry, caplog):
        with caplog.at_level(logging.WARNING, logger="casepriority"):
            builtin_registry.resolve("on_tps_v1")
        assert "on_tps_v1" in caplog.text

    def test_known_id_not_flagged(self, builtin_registry):
        resolution = builtin_registry.resolve_with_status("generic")
        assert resolution.fallback_used is False
        assert resolution.requested_id == "generic"

    def test_get_is_exact(self, builtin_registry):
        assert builtin_registry.get("on_tps_v1") is None
        assert builtin_registry.get(None) is None

    def test_enumeration(self, builtin_registry):
        assert builtin_registry.ids() == ["generic", "qc_spvm_v1"]
        assert len(builtin_registry) == 2
        assert "qc_spvm_v1" in builtin_registry
        assert [p.id for p in builtin_registry] == ["generic", "qc_spvm_v1"]

    def test_profiles_list_is_a_copy(self, builtin_registry):
        builtin_registry.profiles().clear()
        assert len(builtin_registry) == 2

    def test_with_profiles_returns_new_registry(self):
        original = make_registry(make_profile(id="alpha"))
        updated = original.with_profiles(make_profile(id="beta"))
        assert "beta" in updated
        assert "beta" not in original

    def test_with_profiles_replaces_version(self):
        original = make_registry(make_profile(id="alpha", version="1"))
        updated = original.with_profiles(make_profile(id="alpha", version="2"))
        assert updated.get("alpha").version == "2"
        assert original.get("alpha").version == "1"

    def test_custom_fallback(self):
        registry = ProfileRegistry([make_profile(id="national")], fallback_id="national")
        assert registry.resolve("anything").id == "national"

    def test_resolve_profile_helper(self):
        registry = make_registry(make_profile(id="alpha"))
        assert resolve_profile("alpha", registry).id == "alpha"
        assert resolve_profile("zzz", registry).id == "generic"


class TestDefaultRegistry:
    """build_default_registry() and environment configuration."""

    def test_builtins_only(self, monkeypatch):
        monkeypatch.delenv("CASEPRIORITY_PROFILES_DIR", raising=False)
        assert build_default_registry().ids() == ["generic", "qc_spvm_v1"]

    def test_extra_profiles_dir(self, monkeypatch, tmp_path):
        (tmp_path / "on.yaml").write_text(
            yaml.safe_dump(make_profile_doc(id="on_tps_v1")), encoding="utf-8"
        )
        monkeypatch.setenv("CASEPRIORITY_PROFILES_DIR", str(tmp_path))
        registry = build_default_registry()
        assert "on_tps_v1" in registry
        assert "qc_spvm_v1" in registry

    def test_extra_dir_overrides_builtin(self, monkeypatch, tmp_path):
        doc = make_profile_doc(id="generic", version="2")
        (tmp_path / "generic.yaml").write_text(yaml.safe_dump(doc), encoding="utf-8")
        monkeypatch.setenv("CASEPRIORITY_PROFILES_DIR", str(tmp_path))
        assert build_default_registry().fallback.version == "2"


# =============================================================================
# Selection
# =============================================================================

class TestSelectByLocation:

    def test_inside_montreal(self, builtin_registry):
        resolution = select_by_location(builtin_registry, 45.5017, -73.5673)
        assert resolution.profile.id == "qc_spvm_v1"
        assert resolution.fallback_used is False

    def test_outside_any_area(self, builtin_registry):
        resolution = select_by_location(builtin_registry, 43.6532, -79.3832)
        assert resolution.profile.id == "generic"
        assert resolution.fallback_used is True

    @pytest.mark.parametrize("lat,lng", [(math.nan, -73.5), (None, None), ("45.5", "-73.5")])
    def test_invalid_coordinates(self, builtin_registry, lat, lng):
        assert select_by_location(builtin_registry, lat, lng).fallback_used is True


class TestSelectByAddress:

    @pytest.fixture
    def registry(self, builtin_registry):
        ontario = make_profile(
            id="on_tps_v1",
            service_area=ServiceArea(cities=("toronto",), provinces=("ontario", "on")),
        )
        return builtin_registry.with_profiles(ontario)

    @pytest.mark.parametrize("city", ["Montreal", "MONTRÉAL", "Montréal-Nord"])
    def test_city_match(self, registry, city):
        assert select_by_address(registry, city=city).profile.id == "qc_spvm_v1"

    def test_province_match(self, registry):
        resolution = select_by_address(registry, city="Hamilton", province="Ontario")
        assert resolution.profile.id == "on_tps_v1"
        assert resolution.fallback_used is False

    def test_country_filter(self, registry):
        assert select_by_address(registry, city="Montreal", country="US").fallback_used is True

    def test_no_match(self, registry):
        resolution = select_by_address(registry, city="Vancouver", province="BC")
        assert resolution.profile.id == "generic"
        assert resolution.fallback_used is True

    def test_nothing_supplied(self, registry):
        assert select_by_address(registry).fallback_used is True

    def test_bounding_box_profile(self):
        area = ServiceArea(bounding_box=BoundingBox(min_lat=0, max_lat=1, min_lng=0, max_lng=1))
        registry = make_registry(make_profile(id="square", service_area=area))
        assert select_by_location(registry, 0.5, 0.5).profile.id == "square"

"""
Unit tests for the per-key build settings merge.
"""
import pytest

from ocr_xcode.manifest import PADDLE_OCR_SETTINGS
from ocr_xcode.settings import (
    INHERITED,
    DefaultIfAbsent,
    Replace,
    Scalar,
    apply_setting,
    apply_settings,
    inherited_list,
    merge_target_settings,
)

from pbxproj_fixtures import as_list


class TestPolicies:
    """Tests for each policy applied to a plain dict."""

    def test_replace_overwrites_existing_list(self):
        settings = {"HEADER_SEARCH_PATHS": ["/old/path"]}

        assert apply_setting(settings, "HEADER_SEARCH_PATHS", Replace(inherited_list("/new")))
        assert settings["HEADER_SEARCH_PATHS"] == [INHERITED, "/new"]

    def test_replace_sets_missing_key(self):
        settings = {}

        apply_setting(settings, "LIBRARY_SEARCH_PATHS", Replace(inherited_list("/lib")))

        assert settings["LIBRARY_SEARCH_PATHS"] == [INHERITED, "/lib"]

    def test_scalar_overwrites(self):
        settings = {"CLANG_CXX_LANGUAGE_STANDARD": "gnu++0x"}

        apply_setting(settings, "CLANG_CXX_LANGUAGE_STANDARD", Scalar("c++17"))

        assert settings["CLANG_CXX_LANGUAGE_STANDARD"] == "c++17"

    def test_default_if_absent_initializes_missing_key(self):
        settings = {}

        assert apply_setting(settings, "GCC_PREPROCESSOR_DEFINITIONS", DefaultIfAbsent(inherited_list()))
        assert settings["GCC_PREPROCESSOR_DEFINITIONS"] == [INHERITED]

    def test_default_if_absent_treats_none_as_missing(self):
        settings = {"GCC_PREPROCESSOR_DEFINITIONS": None}

        apply_setting(settings, "GCC_PREPROCESSOR_DEFINITIONS", DefaultIfAbsent(inherited_list()))

        assert settings["GCC_PREPROCESSOR_DEFINITIONS"] == [INHERITED]

    def test_default_if_absent_keeps_operator_values(self):
        """Values added by other integrations must survive."""
        settings = {"GCC_PREPROCESSOR_DEFINITIONS": ["DEBUG=1", "COCOAPODS=1", INHERITED]}

        assert not apply_setting(settings, "GCC_PREPROCESSOR_DEFINITIONS", DefaultIfAbsent(inherited_list()))
        assert settings["GCC_PREPROCESSOR_DEFINITIONS"] == ["DEBUG=1", "COCOAPODS=1", INHERITED]

    def test_unknown_policy_rejected(self):
        with pytest.raises(TypeError):
            apply_setting({}, "KEY", "c++17")


class TestApplySettings:
    """Tests for applying a whole table to one configuration."""

    def test_returns_written_keys(self):
        settings = {"GCC_PREPROCESSOR_DEFINITIONS": ["DEBUG=1"]}

        written = apply_settings(settings, PADDLE_OCR_SETTINGS)

        assert "GCC_PREPROCESSOR_DEFINITIONS" not in written
        assert "HEADER_SEARCH_PATHS" in written
        assert len(written) == len(PADDLE_OCR_SETTINGS) - 1

    def test_idempotent(self):
        settings = {"OTHER_LDFLAGS": ["-ObjC"], "ENABLE_BITCODE": "YES"}

        apply_settings(settings, PADDLE_OCR_SETTINGS)
        first = dict(settings)
        apply_settings(settings, PADDLE_OCR_SETTINGS)

        assert settings == first

    def test_search_paths_start_with_inherited(self):
        settings = {}

        apply_settings(settings, PADDLE_OCR_SETTINGS)

        for key in ("HEADER_SEARCH_PATHS", "LIBRARY_SEARCH_PATHS",
                    "FRAMEWORK_SEARCH_PATHS", "OTHER_LDFLAGS"):
            assert settings[key][0] == INHERITED

    def test_paddle_scalars(self):
        settings = {}

        apply_settings(settings, PADDLE_OCR_SETTINGS)

        assert settings["CLANG_CXX_LANGUAGE_STANDARD"] == "c++17"
        assert settings["ENABLE_BITCODE"] == "NO"
        assert settings["OTHER_CPLUSPLUSFLAGS"] == "$(inherited) -fmodules -fcxx-modules"
        assert settings["OTHER_LDFLAGS"] == [INHERITED, "-lc++", "-lz"]


class TestMergeTargetSettings:
    """Tests for merging into every configuration of a loaded target."""

    def test_every_configuration_updated(self, model, target):
        results = merge_target_settings(model, target, {"LANG_STD": Scalar("v1")})

        assert set(results) == {"Debug", "Release"}
        for configuration in model.configurations(target):
            assert model.build_settings(configuration)["LANG_STD"] == "v1"

    def test_project_level_configurations_untouched(self, model, target):
        merge_target_settings(model, target, {"LANG_STD": Scalar("v1")})

        project_list = model.get("97C146E91CF9000F007C117D")
        for config_id in project_list.buildConfigurations:
            assert "LANG_STD" not in model.build_settings(model.get(config_id))

    def test_existing_definitions_preserved(self, model, target):
        merge_target_settings(model, target, PADDLE_OCR_SETTINGS)

        by_name = {str(c.name): model.build_settings(c) for c in model.configurations(target)}
        assert as_list(by_name["Debug"]["GCC_PREPROCESSOR_DEFINITIONS"]) == ["DEBUG=1", INHERITED]
        assert as_list(by_name["Release"]["GCC_PREPROCESSOR_DEFINITIONS"]) == [INHERITED]

    def test_replace_lists_in_loaded_project(self, model, target):
        merge_target_settings(model, target, PADDLE_OCR_SETTINGS)

        for configuration in model.configurations(target):
            settings = model.build_settings(configuration)
            assert as_list(settings["OTHER_LDFLAGS"]) == [INHERITED, "-lc++", "-lz"]
            assert settings["ENABLE_BITCODE"] == "NO"

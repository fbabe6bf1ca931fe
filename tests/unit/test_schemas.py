"""Unit tests for request models and preset defaults."""

import pytest
from pydantic import ValidationError

from astrolab.presets import (DEFAULT_PRESET, PRESET_DEFAULTS,
                              apply_preset_defaults, get_preset_defaults)
from astrolab.schemas import SLIDER_FIELDS, EditParams, SliderValues


class TestPresetDefaults:
    def test_all_presets_present(self):
        assert set(PRESET_DEFAULTS) == {
            "nebula", "galaxy", "cluster", "widefield", "planetary", "lunar", "solar", "generic",
        }
        assert DEFAULT_PRESET == "nebula"

    def test_nebula_values(self):
        nebula = PRESET_DEFAULTS["nebula"]

        assert nebula.sliders == SliderValues(
            background_neutralization=65,
            sky_darkening=10,
            stretch_strength=62,
            noise_strength=52,
            star_reduction=55,
            saturation=55,
        )
        assert nebula.scientific_mode is True
        assert nebula.star_correction_mode == "moderate_reduction"

    @pytest.mark.parametrize("preset_id", ["planetary", "lunar", "solar"])
    def test_bright_targets_skip_star_work(self, preset_id):
        assert PRESET_DEFAULTS[preset_id].star_correction_mode == "none"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PRESET_DEFAULTS["nebula"] = PRESET_DEFAULTS["generic"]

    def test_entries_are_frozen(self):
        with pytest.raises(ValidationError):
            PRESET_DEFAULTS["lunar"].sliders.saturation = 99

    def test_unknown_preset_gets_generic(self):
        assert get_preset_defaults("comet") is PRESET_DEFAULTS["generic"]


class TestApplyPresetDefaults:
    def test_fills_missing_fields_from_preset(self):
        filled = apply_preset_defaults({"preset_id": "lunar"})

        assert filled["sky_darkening"] == 82
        assert filled["star_reduction"] == 80
        assert filled["saturation"] == 15
        assert filled["star_correction_mode"] == "none"
        assert filled["scientific_mode"] is True

    def test_explicit_values_win(self):
        filled = apply_preset_defaults({
            "preset_id": "lunar",
            "sky_darkening": 3,
            "scientific_mode": False,
            "star_correction_mode": "starless_emphasis",
        })

        assert filled["sky_darkening"] == 3
        assert filled["scientific_mode"] is False
        assert filled["star_correction_mode"] == "starless_emphasis"
        assert filled["saturation"] == 15

    def test_zero_is_not_treated_as_missing(self):
        filled = apply_preset_defaults({"preset_id": "nebula", "saturation": 0})

        assert filled["saturation"] == 0

    def test_missing_preset_uses_default(self):
        filled = apply_preset_defaults({})

        assert filled["preset_id"] == DEFAULT_PRESET
        assert filled["stretch_strength"] == 62

    def test_does_not_mutate_input(self):
        payload = {"preset_id": "galaxy"}

        apply_preset_defaults(payload)

        assert payload == {"preset_id": "galaxy"}


class TestEditParams:
    def base_payload(self, **overrides):
        payload = apply_preset_defaults({"preset_id": "generic"})
        payload.update(overrides)
        return payload

    @pytest.mark.parametrize("field", SLIDER_FIELDS)
    @pytest.mark.parametrize("value", [-1, 101])
    def test_sliders_bounded(self, field, value):
        with pytest.raises(ValidationError):
            EditParams.model_validate(self.base_payload(**{field: value}))

    @pytest.mark.parametrize("field", SLIDER_FIELDS)
    @pytest.mark.parametrize("value", [0, 100])
    def test_slider_bounds_inclusive(self, field, value):
        params = EditParams.model_validate(self.base_payload(**{field: value}))

        assert getattr(params, field) == value

    def test_blank_object_name_is_none(self):
        assert EditParams.model_validate(self.base_payload(object_name="   ")).object_name is None

    def test_object_name_trimmed(self):
        assert EditParams.model_validate(self.base_payload(object_name=" M42 ")).object_name == "M42"

    def test_defaults(self):
        params = EditParams.model_validate(self.base_payload())

        assert params.aspect_ratio == "auto"
        assert params.image_size == "2K"
        assert params.object_name is None

    @pytest.mark.parametrize("field,value", [
        ("aspect_ratio", "7:5"),
        ("image_size", "8K"),
        ("star_correction_mode", "obliterate"),
    ])
    def test_enumerations_enforced(self, field, value):
        with pytest.raises(ValidationError):
            EditParams.model_validate(self.base_payload(**{field: value}))

    def test_unknown_preset_accepted(self):
        params = EditParams.model_validate(apply_preset_defaults({"preset_id": "comet"}))

        assert params.preset_id == "comet"
        assert params.sky_darkening == PRESET_DEFAULTS["generic"].sliders.sky_darkening

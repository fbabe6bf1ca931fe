"""
Per-preset starting values for the sliders and mode flags.

Presets only seed the controls. Once a request carries its own slider
values those values are used as-is, whatever preset is selected.
"""
from types import MappingProxyType
from typing import Any, Dict

from astrolab.schemas import SLIDER_FIELDS, PresetDefaults, SliderValues

DEFAULT_PRESET = "nebula"
FALLBACK_PRESET = "generic"

PRESET_DEFAULTS = MappingProxyType({
    "nebula": PresetDefaults(
        label="Emission / reflection nebula",
        description="Balanced defaults for Ha/OIII nebulae like NGC 281, with decent contrast but not overcooked reds.",
        sliders=SliderValues(
            background_neutralization=65,
            sky_darkening=10,
            stretch_strength=62,
            noise_strength=52,
            star_reduction=55,
            saturation=55,
        ),
        scientific_mode=True,
        # Starless is opt-in; moderate reduction keeps some star field context.
        star_correction_mode="moderate_reduction",
    ),
    "galaxy": PresetDefaults(
        label="Galaxy",
        description="Preserves cores, arms and dust lanes with a clean but not crushed background.",
        sliders=SliderValues(
            background_neutralization=60,
            sky_darkening=25,
            stretch_strength=55,
            noise_strength=45,
            star_reduction=35,
            saturation=45,
        ),
        scientific_mode=True,
        star_correction_mode="mild_reduction",
    ),
    "cluster": PresetDefaults(
        label="Open / globular cluster",
        description="Keeps stars as the main feature, with clean colour and gentle background control.",
        sliders=SliderValues(
            background_neutralization=45,
            sky_darkening=40,
            stretch_strength=48,
            noise_strength=38,
            star_reduction=25,
            saturation=52,
        ),
        scientific_mode=True,
        star_correction_mode="mild_reduction",
    ),
    "widefield": PresetDefaults(
        label="Wide-field Milky Way",
        description="Good for tracked or untracked Milky Way shots: natural sky glow, not overcooked.",
        sliders=SliderValues(
            background_neutralization=65,
            sky_darkening=20,
            stretch_strength=65,
            noise_strength=55,
            star_reduction=30,
            saturation=55,
        ),
        scientific_mode=True,
        star_correction_mode="mild_reduction",
    ),
    "planetary": PresetDefaults(
        label="Planets (Jupiter, Saturn, etc.)",
        description="Emphasises belts, storms and rings, with a clean black background.",
        sliders=SliderValues(
            background_neutralization=40,
            sky_darkening=80,
            stretch_strength=55,
            noise_strength=50,
            # Read as edge / fine-detail sharpness for planets.
            star_reduction=70,
            saturation=45,
        ),
        scientific_mode=True,
        star_correction_mode="none",
    ),
    "lunar": PresetDefaults(
        label="Moon / lunar surface",
        description="Sharpened lunar detail with a properly black sky and subtle colour.",
        sliders=SliderValues(
            background_neutralization=50,
            sky_darkening=82,
            stretch_strength=50,
            noise_strength=45,
            # Read as microcontrast / crater sharpness.
            star_reduction=80,
            saturation=15,
        ),
        scientific_mode=True,
        star_correction_mode="none",
    ),
    "solar": PresetDefaults(
        label="Sun / solar disc",
        description="Emphasises granulation and spots, keeps the disc shape and limb darkening intact.",
        sliders=SliderValues(
            background_neutralization=60,
            sky_darkening=85,
            stretch_strength=55,
            noise_strength=50,
            # Read as limb & fine-structure sharpness.
            star_reduction=75,
            saturation=40,
        ),
        scientific_mode=True,
        star_correction_mode="none",
    ),
    "generic": PresetDefaults(
        label="Generic deep-sky",
        description="Safe defaults when you're not sure what the object is; moderate in all directions.",
        sliders=SliderValues(
            background_neutralization=58,
            sky_darkening=18,
            stretch_strength=60,
            noise_strength=50,
            star_reduction=45,
            saturation=50,
        ),
        scientific_mode=True,
        star_correction_mode="moderate_reduction",
    ),
})


def get_preset_defaults(preset_id: str) -> PresetDefaults:
    return PRESET_DEFAULTS.get(preset_id, PRESET_DEFAULTS[FALLBACK_PRESET])


def apply_preset_defaults(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of a raw parameters payload with every omitted slider and
    mode flag filled in from the selected preset. Keys already present in the
    payload are left untouched.
    """
    filled = dict(payload)
    preset_id = filled.get("preset_id") or DEFAULT_PRESET
    filled["preset_id"] = preset_id
    defaults = get_preset_defaults(preset_id if isinstance(preset_id, str) else FALLBACK_PRESET)

    for field in SLIDER_FIELDS:
        if filled.get(field) is None:
            filled[field] = getattr(defaults.sliders, field)
    if filled.get("scientific_mode") is None:
        filled["scientific_mode"] = defaults.scientific_mode
    if filled.get("star_correction_mode") is None:
        filled["star_correction_mode"] = defaults.star_correction_mode
    return filled

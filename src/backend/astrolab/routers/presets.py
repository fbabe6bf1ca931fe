from fastapi import APIRouter
from starlette.responses import JSONResponse

from astrolab.presets import DEFAULT_PRESET, PRESET_DEFAULTS

router = APIRouter()


@router.get("")
def list_presets():
    return {
        "default_preset": DEFAULT_PRESET,
        "presets": {preset_id: preset.model_dump() for preset_id, preset in PRESET_DEFAULTS.items()},
    }


@router.get("/{preset_id}")
def get_preset(preset_id: str):
    preset = PRESET_DEFAULTS.get(preset_id)
    if preset is None:
        return JSONResponse({"error": f"Unknown preset '{preset_id}'."}, status_code=404)
    return {"preset_id": preset_id, **preset.model_dump()}

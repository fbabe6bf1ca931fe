from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PresetId = Literal[
    "nebula",
    "galaxy",
    "cluster",
    "widefield",
    "planetary",
    "lunar",
    "solar",
    "generic",
]

AspectRatio = Literal[
    "auto",
    "1:1",
    "2:3",
    "3:2",
    "3:4",
    "4:3",
    "4:5",
    "5:4",
    "9:16",
    "16:9",
    "21:9",
]

ImageSize = Literal["1K", "2K", "4K"]

# Ordered from least to most aggressive.
StarCorrectionMode = Literal[
    "none",
    "mild_reduction",
    "moderate_reduction",
    "strong_reduction",
    "starless_emphasis",
]

SLIDER_FIELDS = (
    "background_neutralization",
    "sky_darkening",
    "stretch_strength",
    "noise_strength",
    "star_reduction",
    "saturation",
)


class SliderValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    background_neutralization: int = Field(ge=0, le=100)
    sky_darkening: int = Field(ge=0, le=100)
    stretch_strength: int = Field(ge=0, le=100)
    noise_strength: int = Field(ge=0, le=100)
    star_reduction: int = Field(ge=0, le=100)
    saturation: int = Field(ge=0, le=100)


class PresetDefaults(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    sliders: SliderValues
    scientific_mode: bool = True
    star_correction_mode: StarCorrectionMode


class EditParams(BaseModel):
    object_name: Optional[str] = None
    # Free text on purpose: unknown presets get the generic guidance.
    preset_id: str = "nebula"
    aspect_ratio: AspectRatio = "auto"
    image_size: ImageSize = "2K"

    background_neutralization: int = Field(ge=0, le=100)
    sky_darkening: int = Field(ge=0, le=100)
    stretch_strength: int = Field(ge=0, le=100)
    noise_strength: int = Field(ge=0, le=100)
    star_reduction: int = Field(ge=0, le=100)
    saturation: int = Field(ge=0, le=100)

    scientific_mode: bool = True
    star_correction_mode: StarCorrectionMode = "moderate_reduction"

    @field_validator("object_name")
    @classmethod
    def blank_name_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class AstroFacts(BaseModel):
    object_name: str
    object_type: str
    canonical_colors: str
    key_structures_to_preserve: List[str] = []
    unrealistic_edits_to_avoid: List[str] = []


class ProcessImageResponse(BaseModel):
    edited_image_base64: str
    astro_facts: Optional[AstroFacts] = None


class PromptPreviewRequest(BaseModel):
    params: dict
    astro_facts: Optional[AstroFacts] = None


class PromptPreviewResponse(BaseModel):
    preset_id: str
    prompt: str


class ErrorResponse(BaseModel):
    error: str

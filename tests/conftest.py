"""Shared pytest fixtures for AstroLab backend tests."""

import os

# astrolab.config refuses to import without a key.
os.environ.setdefault("GEMINI_API_KEY", "test-api-key")

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.genai import types

from astrolab.presets import apply_preset_defaults
from astrolab.schemas import AstroFacts, EditParams
from astrolab.services import AstroEditService

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-payload"
EDITED_BYTES = b"\x89PNG\r\n\x1a\nedited-png-payload"

M42_FACTS_JSON = """
{
  "object_name": "Orion Nebula (M42)",
  "object_type": "emission nebula",
  "canonical_colors": "red H-alpha with blue-green OIII core",
  "key_structures_to_preserve": ["Trapezium cluster", "dark dust lanes"],
  "unrealistic_edits_to_avoid": ["neon magenta tint"]
}
"""


def _image_response(data=EDITED_BYTES, mime_type="image/png"):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part(text="Here is the processed image."),
                        types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
                    ],
                )
            )
        ]
    )


@pytest.fixture
def fake_genai_client() -> MagicMock:
    """A genai client whose ``models.generate_content`` is a MagicMock."""
    return MagicMock()


@pytest.fixture
def sleeps() -> list:
    """Records every backoff delay instead of sleeping."""
    return []


@pytest.fixture
def service(fake_genai_client, sleeps) -> AstroEditService:
    return AstroEditService(
        fake_genai_client,
        text_model="text-model",
        image_model="image-model",
        retries=3,
        retry_delay=1.0,
        sleep=sleeps.append,
    )


@pytest.fixture
def nebula_params() -> EditParams:
    """M42 with the nebula preset defaults."""
    return EditParams.model_validate(
        apply_preset_defaults({"object_name": "M42", "preset_id": "nebula"})
    )


@pytest.fixture
def m42_facts() -> AstroFacts:
    return AstroFacts.model_validate_json(M42_FACTS_JSON)


@pytest.fixture
def text_response():
    """Factory for text model replies; only ``.text`` is read from them."""
    return lambda text: SimpleNamespace(text=text)


@pytest.fixture
def image_response():
    """Factory for image model replies with a text part and one inline image part."""
    return _image_response


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def edited_bytes() -> bytes:
    return EDITED_BYTES


@pytest.fixture
def m42_facts_json() -> str:
    return M42_FACTS_JSON

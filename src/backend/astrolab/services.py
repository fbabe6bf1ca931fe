import base64
import logging
import time
from typing import Callable, Optional

from google.genai import types
from pydantic import ValidationError

from astrolab.config import settings
from astrolab.dependencies import get_genai_client
from astrolab.prompts import build_edit_prompt, build_facts_prompt
from astrolab.retry import retry_with_backoff
from astrolab.schemas import AstroFacts, EditParams, ProcessImageResponse

logger = logging.getLogger(__name__)

AUTO_ASPECT_RATIO = "auto"


class ImageEditError(RuntimeError):
    """The image model answered, but without an image to return."""


def should_lookup_facts(object_name: Optional[str]) -> bool:
    return bool(object_name) and len(object_name.strip()) > 1


def build_image_config(image_size: str, aspect_ratio: Optional[str]) -> types.ImageConfig:
    # With "auto" the model keeps the proportions of the uploaded image.
    if aspect_ratio and aspect_ratio != AUTO_ASPECT_RATIO:
        return types.ImageConfig(image_size=image_size, aspect_ratio=aspect_ratio)
    return types.ImageConfig(image_size=image_size)


def parse_astro_facts(text: Optional[str]) -> Optional[AstroFacts]:
    if not text:
        return None
    try:
        return AstroFacts.model_validate_json(text)
    except ValidationError as e:
        logger.warning(f"Could not parse astro facts response, continuing without them. Error: {e}")
        return None


class AstroEditService:
    def __init__(
            self,
            genai_client,
            text_model: str,
            image_model: str,
            retries: int = 3,
            retry_delay: float = 1.0,
            sleep: Optional[Callable[[float], None]] = None,
    ):
        self.genai_client = genai_client
        self.text_model = text_model
        self.image_model = image_model
        self.retries = retries
        self.retry_delay = retry_delay
        self.sleep = sleep

    def _with_backoff(self, operation):
        return retry_with_backoff(operation, retries=self.retries, delay=self.retry_delay, sleep=self.sleep)

    def fetch_astro_facts(self, object_name: str) -> Optional[AstroFacts]:
        """
        Looks the object up with Google Search grounding and returns its facts.

        Returns None when the reply is not the expected JSON shape. Remote
        errors other than rate limiting are raised to the caller.
        """
        logger.info(f"Looking up astro facts for '{object_name}' using model {self.text_model}.")
        prompt = build_facts_prompt(object_name)
        contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type="application/json",
        )

        def lookup():
            response = self.genai_client.models.generate_content(
                model=self.text_model,
                contents=contents,
                config=config,
            )
            return parse_astro_facts(response.text)

        facts = self._with_backoff(lookup)
        if facts:
            logger.info(f"Resolved '{object_name}' as '{facts.object_name}' ({facts.object_type}).")
        return facts

    def run_astro_edit(
            self,
            image_bytes: bytes,
            mime_type: str,
            params: EditParams,
            facts: Optional[AstroFacts],
    ) -> bytes:
        prompt = build_edit_prompt(params, facts)
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=prompt),
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ],
            )
        ]
        config = types.GenerateContentConfig(
            image_config=build_image_config(params.image_size, params.aspect_ratio),
        )

        def edit():
            response = self.genai_client.models.generate_content(
                model=self.image_model,
                contents=contents,
                config=config,
            )
            candidate = response.candidates[0] if response.candidates else None
            if candidate is None or candidate.content is None:
                raise ImageEditError("No candidates returned from the image model.")

            for part in candidate.content.parts or []:
                if part.inline_data and part.inline_data.data:
                    return part.inline_data.data
            raise ImageEditError("No image part returned from the image model.")

        logger.info(
            f"Requesting astro edit from {self.image_model} "
            f"(preset={params.preset_id}, size={params.image_size}, aspect_ratio={params.aspect_ratio})."
        )
        start_time = time.time()
        edited = self._with_backoff(edit)
        logger.info(f"Astro edit finished in {time.time() - start_time:.1f}s.")
        return edited

    def process_image(self, image_bytes: bytes, mime_type: str, params: EditParams) -> ProcessImageResponse:
        facts = None
        if should_lookup_facts(params.object_name):
            facts = self.fetch_astro_facts(params.object_name.strip())
        else:
            logger.info("No usable object name provided. Skipping astro facts lookup.")

        edited = self.run_astro_edit(image_bytes, mime_type, params, facts)
        return ProcessImageResponse(
            edited_image_base64=base64.b64encode(edited).decode("ascii"),
            astro_facts=facts,
        )


def get_astro_edit_service() -> AstroEditService:
    return AstroEditService(
        get_genai_client(),
        text_model=settings.TEXT_MODEL,
        image_model=settings.IMAGE_MODEL,
        retries=settings.RETRY_ATTEMPTS,
        retry_delay=settings.RETRY_BASE_DELAY_SECONDS,
    )

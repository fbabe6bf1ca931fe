from functools import lru_cache

import google.genai as genai

from astrolab.config import settings


@lru_cache()
def get_genai_client():
    return genai.Client(api_key=settings.GEMINI_API_KEY)

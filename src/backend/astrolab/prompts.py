from typing import List, Optional

from astrolab.schemas import AstroFacts, EditParams

UNKNOWN = "unknown"

ASTRO_FACTS_PROMPT = """
You are an astrophysics assistant. Use Google Search to look up the deep sky object "{object_name}".

Return ONLY valid JSON with this exact structure:

{{
  "object_name": string,                      // Common name + catalog if available
  "object_type": string,                      // e.g. "emission nebula", "spiral galaxy", "open cluster"
  "canonical_colors": string,                 // Typical broadband RGB colours
  "key_structures_to_preserve": [string, ...],
  "unrealistic_edits_to_avoid": [string, ...]
}}

If you are unsure about the object, respond with:

{{
  "object_name": "{object_name}",
  "object_type": "unknown",
  "canonical_colors": "unknown",
  "key_structures_to_preserve": [],
  "unrealistic_edits_to_avoid": []
}}
""".strip()


EDIT_PROMPT_ROLE = (
    "You are an expert deep-sky astrophotography image processing assistant.",
    "You receive a single stacked image from a smart telescope, and your job is to emulate a standard astrophotography post-processing workflow.",
)

NO_FACTS_FALLBACK = "\nIf you cannot identify the object, treat it as generic deep-sky data and avoid obviously non-physical changes."


WORKFLOW = """
Conceptual workflow you should emulate:

1. Background & gradients
   - Remove light pollution gradients and vignetting.
   - Neutralise the sky background to a very dark grey, not pure black.
   - Do not erase real nebulosity, galaxy halos, or dust lanes.

2. Stretch
   - Apply a non-linear stretch to reveal faint structures.
   - Protect bright cores and star colours from clipping.

3. Noise reduction
   - Target mainly background and faint nebulosity.
   - Avoid smearing stars, small galaxies, or small-scale details.

4. Star control
   - Optionally reduce star sizes based on the slider.
   - Keep star shapes natural. Preserve colours.

5. Local contrast & colour
   - Gently enhance contrast in real structures.
   - Apply colour saturation according to the slider while keeping a tasteful appearance.

6. Integrity constraints
   - Do NOT invent large new structures.
   - Do NOT substantially move, remove, or reposition stars or nebulae.
   - Do NOT rotate, flip, crop, or add overlays.
""".strip()


SKY_DARKNESS_RUBRIC = """
Interpret "Sky darkness / black point" as how strongly to push the background towards pure black:

- 0–20: keep a natural dark grey sky and preserve the faintest stars.
- 20–60: moderately darker background while still avoiding obvious clipping.
- 60–100: very dark, inky background; only do this where the background truly should be black and avoid eating into real signal.
""".strip()


STAR_CORRECTION_RUBRIC = """
Interpret "Star correction" and "Star/edge control" as follows:

- When star_correction_mode = "none":
  * Preserve star sizes and brightness; only fix obvious artifacts or halos.
- When "mild_reduction":
  * Gently shrink stars by roughly 10–20% and slightly reduce overpowering star halos.
- When "moderate_reduction":
  * Noticeably reduce star sizes (about 20–40%) so the main target stands out,
    but keep the star field looking believable.
- When "strong_reduction":
  * Strongly reduce star sizes (up to ~50%) and de-emphasise background stars;
    avoid making stars vanish completely or look like pin-pricks.
- When "starless_emphasis":
  * Substantially suppress or remove most stars in the style of starless processing
    tools (e.g. StarNet++), primarily for nebula images. Do NOT hallucinate new
    nebulosity; treat it as a cosmetic star mask.
""".strip()


STAR_STRENGTH_RUBRIC = """
Use the "Star/edge control" value (0–100) as the strength within the chosen star_correction_mode:
- 0–20: very subtle
- 20–40: mild
- 40–60: medium
- 60–80: strong
- 80–100: very strong (use with care to avoid artifacts)
""".strip()


SCIENTIFIC_MODE_ON = """
Scientific mode is ON:

- Prioritise physically plausible colours and brightness.
- Avoid clipping highlights and shadows.
- Keep noise reduction conservative and detail-preserving.
- Avoid halos and oversharpening artifacts.
""".strip()


SCIENTIFIC_MODE_OFF = """
Scientific mode is OFF (more artistic):

- You may use stronger stretch and saturation and a slightly darker background.
- Still avoid neon colours and obviously fake structures.
""".strip()


NEBULA_GUIDANCE = """
- This is an emission/reflection nebula. Stars are important but the nebula is the main subject.
- When star_correction_mode is "moderate_reduction" (the default), shrink stars enough
  to reveal the nebula structure but keep some star field context.
- Only use "starless_emphasis" if the user selected it; in that case, strongly suppress
  stars but still return a clean, artifact-free background.
- Emphasise faint outer nebulosity and dark dust lanes.
- Preserve bright core detail.
- Maintain differences between reddish H-alpha regions and bluer reflection/OIII regions.
- Only use strong sky darkening if there is no real faint nebulosity in the background.
- If "Sky darkness / black point" is >50, be extremely careful not to clip faint nebula or tiny stars.
""".strip()

GALAXY_GUIDANCE = """
- Preserve spiral arms, dust lanes and halo.
- Maintain contrast between yellowish bulge and bluer disk.
- Avoid over-smoothing small satellite galaxies.
""".strip()

CLUSTER_GUIDANCE = """
- Focus on clean star shapes and colour separation.
- Only mild star size reduction.
- Keep the background clean but not fully black.
""".strip()

WIDEFIELD_GUIDANCE = """
- Emphasise Milky Way dust lanes and diffuse emission.
- Remove strong gradients from light pollution while keeping natural sky glow.
- Maintain rich, dense star fields.
""".strip()

PLANETARY_GUIDANCE = """
- Emphasise small-scale details (rings, belts, crater rims).
- Use strong local contrast with careful noise reduction.
- Maintain crisp edges without ringing.
""".strip()

LUNAR_GUIDANCE = """
- This is a high-resolution lunar image (Moon). Treat it as a bright, nearby body, not a faint deep-sky object.
- Prioritise sharp, crisp detail along the terminator, crater rims and rilles.
- Use the star/edge sharpness slider as a control for microcontrast and sharpening of small-scale lunar details:
  - 0–30: almost no extra sharpening, only gentle clarity.
  - 30–70: moderate, natural sharpening suitable for most lunar images.
  - 70–100: aggressive sharpening; still avoid halos and ringing.
- Preserve the natural phase and terminator geometry; do not move or reshape the illuminated part.
- Background should be a clean, neutral black or very dark grey, with no large gradients or banding.
- Keep colour very subtle: Moon is mostly grey with slight warm/cool variations. Avoid turning it neon or strongly tinted.
- Use "Sky darkness / black point" to make the background essentially black:
  - At values >60, remove virtually all background glow and noise so the sky looks black,
    but do NOT eat into the lunar limb or any faint limb haze.
- If needed, slightly expand the dynamic range of the Moon itself rather than letting the
  background stay grey.
""".strip()

SOLAR_GUIDANCE = """
- This is a solar image (Sun). Treat it as a bright disc with fine surface texture, not a faint deep-sky object.
- Do NOT add artificial flares, prominences or sunspots that are not present.
- Use the star/edge sharpness slider as a control for fine structure:
  - 0–30: very gentle enhancement; preserve smooth gradations.
  - 30–70: moderate emphasis of granulation, sunspots, penumbrae and limb detail.
  - 70–100: strong local contrast; avoid halos and harsh rings around features.
- Preserve the circular shape and limb darkening; do not distort the disc.
- If the source is white-light broadband:
  - Keep colours roughly neutral white to warm yellow, with natural limb darkening.
  - Avoid cartoonish yellows/oranges.
- If the source appears narrowband (e.g. H-alpha):
  - Respect the existing colour cast; do not force it to white-light yellow.
  - Emphasise prominences and filaments that are actually visible.
- Background should be uniform and clean; remove gradients or banding without changing the disc geometry.
- Use "Sky darkness / black point" to make areas outside the disc clean, uniform and very dark.
- Do not shrink the disc or nibble away the limb to make the background darker.
- If the telescope has internal scatter or subtle glow, remove that in the background but
  preserve true limb darkening and any real structures at the edge.
""".strip()

GENERIC_GUIDANCE = "- Use a balanced, general-purpose deep-sky processing approach."

PRESET_GUIDANCE = {
    "nebula": NEBULA_GUIDANCE,
    "galaxy": GALAXY_GUIDANCE,
    "cluster": CLUSTER_GUIDANCE,
    "widefield": WIDEFIELD_GUIDANCE,
    "planetary": PLANETARY_GUIDANCE,
    "lunar": LUNAR_GUIDANCE,
    "solar": SOLAR_GUIDANCE,
    "generic": GENERIC_GUIDANCE,
}

CLOSING_INSTRUCTION = "\nReturn ONLY the edited astro image content; no borders, text labels, or watermarks."


def build_facts_prompt(object_name: str) -> str:
    return ASTRO_FACTS_PROMPT.format(object_name=object_name)


def preset_guidance(preset_id: str) -> str:
    return PRESET_GUIDANCE.get(preset_id, GENERIC_GUIDANCE)


def _astro_context_lines(facts: AstroFacts) -> List[str]:
    lines = [
        "\nAstrophysical context (grounded via Google Search):",
        f"- Interpreted name: {facts.object_name}",
        f"- Object type: {facts.object_type}",
    ]
    if facts.canonical_colors.lower() != UNKNOWN:
        lines.append(
            f"- Canonical broadband colours: {facts.canonical_colors}. Keep the result broadly consistent."
        )
    if facts.key_structures_to_preserve:
        lines.append("\nImportant physical structures to preserve:")
        lines.extend(f"- {item}" for item in facts.key_structures_to_preserve)
    if facts.unrealistic_edits_to_avoid:
        lines.append("\nUnrealistic edits to avoid:")
        lines.extend(f"- {item}" for item in facts.unrealistic_edits_to_avoid)
    return lines


def build_edit_prompt(params: EditParams, facts: Optional[AstroFacts] = None) -> str:
    """
    Assembles the instruction text sent alongside the image to the image model.

    Sections are always emitted in the same order, so identical params and
    facts give identical text. Exactly one scientific-mode block and exactly
    one preset block are included; unknown presets get the generic block.
    """
    lines: List[str] = list(EDIT_PROMPT_ROLE)

    if params.object_name:
        lines.append(f'\nTarget object (user input): "{params.object_name}".')

    if facts is not None:
        lines.extend(_astro_context_lines(facts))
    else:
        lines.append(NO_FACTS_FALLBACK)

    lines.append(WORKFLOW)

    lines.append("\nSlider values (0 = none, 100 = very strong):")
    lines.append(f"- Background / gradient neutralisation: {params.background_neutralization}/100")
    lines.append(f"- Stretch strength: {params.stretch_strength}/100")
    lines.append(f"- Noise reduction: {params.noise_strength}/100")
    lines.append(f"- Star / edge sharpness control: {params.star_reduction}/100 (interpreted per preset)")
    lines.append(f"- Colour saturation: {params.saturation}/100")
    lines.append(f"- Sky darkness / black point: {params.sky_darkening}/100")

    lines.append(SKY_DARKNESS_RUBRIC)
    lines.append(f"\nSelected star_correction_mode: \"{params.star_correction_mode}\"")
    lines.append(STAR_CORRECTION_RUBRIC)
    lines.append(STAR_STRENGTH_RUBRIC)

    lines.append(SCIENTIFIC_MODE_ON if params.scientific_mode else SCIENTIFIC_MODE_OFF)

    lines.append(f"\nPreset: {params.preset_id}")
    lines.append(preset_guidance(params.preset_id))

    lines.append(CLOSING_INSTRUCTION)
    return "\n".join(lines)

"""
LLM breed matching service.

Shows a photo to a multimodal model and asks which breed the person in it
resembles. Supports Gemini (preferred) and Groq as providers, with a fake
mode for development and testing.
"""
import hashlib
import json
from typing import Any

import google.generativeai as genai
from groq import AsyncGroq
from pydantic import ValidationError

from ..config import get_settings
from ..models import BreedMatch
from ..utils.logging import get_logger
from .catalog import AnimalMode
from .data_url import DecodedImage

logger = get_logger(__name__)


MIN_MATCH_PERCENTAGE = 50
MAX_MATCH_PERCENTAGE = 99

# Cached clients
_groq_client = None
_gemini_model = None


class BreedMatchError(Exception):
    """The language model could not produce a usable breed match."""


def _get_groq_client():
    """Get or create the Groq client."""
    global _groq_client
    if _groq_client is None:
        settings = get_settings()
        if settings.groq_api_key:
            _groq_client = AsyncGroq(api_key=settings.groq_api_key)
    return _groq_client


def _get_gemini_model():
    """Get or create the Gemini model."""
    global _gemini_model
    if _gemini_model is None:
        settings = get_settings()
        if settings.gemini_api_key:
            genai.configure(api_key=settings.gemini_api_key)
            _gemini_model = genai.GenerativeModel(
                settings.gemini_model,
                generation_config={"response_mime_type": "application/json"},
            )
    return _gemini_model


def _build_prompt(mode: AnimalMode) -> str:
    """Build the matching prompt for a dog or cat lookalike."""
    animal = mode.value
    return f"""You are a fun, lighthearted AI that matches people (or vibes) to their {animal} breed lookalike. Look at this photo and determine which {animal} breed the person most resembles.

Rules:
- Be creative, kind, and complimentary - never insulting
- Focus on positive traits like "warm eyes", "friendly smile", "elegant features", "adventurous energy"
- If there is no clear face in the photo, match the overall vibe, mood, or aesthetic of the image to a {animal} breed
- The matchPercentage should feel realistic but flattering, typically between 70 and 95
- Pick a real, recognizable {animal} breed - not a made-up one
- The breedEmoji should be a single emoji (use a {animal} emoji if nothing more specific fits)
- Keep the funFact genuinely interesting and specific to the breed

Respond with ONLY valid JSON in this exact format (no markdown, no extra text):
{{
    "breed": "The {animal} breed the person most resembles",
    "breedEmoji": "🐾",
    "similarityReason": "A fun, kind, and complimentary 1-2 sentence explanation",
    "funFact": "An interesting fun fact about this breed, 1 sentence",
    "matchPercentage": 85
}}"""


def _parse_response(response_text: str) -> BreedMatch:
    """Parse and validate the model's JSON answer."""
    text = response_text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        data: Any = json.loads(text)
        if not isinstance(data, dict):
            raise BreedMatchError("LLM answer is not a JSON object")

        if "matchPercentage" in data:
            percentage = int(round(float(data["matchPercentage"])))
            data["matchPercentage"] = max(MIN_MATCH_PERCENTAGE, min(MAX_MATCH_PERCENTAGE, percentage))

        return BreedMatch.model_validate(data)

    except (json.JSONDecodeError, ValidationError, TypeError, ValueError) as e:
        raise BreedMatchError(f"Could not parse LLM answer: {e}") from e


# (breed, emoji, reason, fun fact)
_FAKE_MATCHES = {
    AnimalMode.DOG: [
        ("Golden Retriever", "🐕",
         "That warm, open smile radiates the same easygoing friendliness goldens are famous for.",
         "Golden Retrievers have a 'soft mouth' and can carry a raw egg without cracking it."),
        ("Labrador Retriever", "🦮",
         "You give off dependable, up-for-anything energy, just like everyone's favourite Lab.",
         "Labradors have webbed toes that make them excellent swimmers."),
        ("German Shepherd", "🐕‍🦺",
         "Those focused eyes and confident posture say loyal, sharp, and ready to lead.",
         "A German Shepherd named Strongheart was one of Hollywood's first canine film stars."),
        ("Siberian Husky", "🐺",
         "Striking features and an adventurous spark make you a natural Husky.",
         "Huskies can change their metabolism to run for hours without tapping fat reserves."),
        ("Pembroke Welsh Corgi", "🐶",
         "Cheerful, charming, and impossible not to smile at - pure Corgi energy.",
         "Corgis were originally bred to herd cattle by nipping at their heels."),
    ],
    AnimalMode.CAT: [
        ("Russian Blue", "🐈",
         "Calm, elegant, and quietly observant - you share the Russian Blue's graceful poise.",
         "Russian Blues have a double coat so dense it stands out from their body."),
        ("Maine Coon", "🦁",
         "A big, warm presence with a gentle heart, exactly like a Maine Coon.",
         "Maine Coons often chirp and trill instead of meowing."),
        ("Siamese", "😺",
         "Expressive and full of personality, you'd hold your own in any Siamese conversation.",
         "Siamese kittens are born white; their points darken with cooler body temperature."),
        ("Bengal", "🐆",
         "That bold, adventurous look has real Bengal wildness to it.",
         "Many Bengals love water and will happily play in a running tap."),
        ("Ragdoll", "🐱",
         "Relaxed, kind eyes and a soft demeanour make you a true Ragdoll.",
         "Ragdolls are named for their habit of going limp when picked up."),
    ],
}


def _fake_match(image: DecodedImage, mode: AnimalMode) -> BreedMatch:
    """Generate a deterministic fake match from the image bytes."""
    h = hashlib.md5(image.data).hexdigest()
    pool = _FAKE_MATCHES[mode]
    breed, emoji, reason, fact = pool[int(h[:2], 16) % len(pool)]

    # Flattering but believable, 70-95
    percentage = 70 + int(h[2:4], 16) % 26

    return BreedMatch(
        breed=breed,
        breed_emoji=emoji,
        similarity_reason=reason,
        fun_fact=fact,
        match_percentage=percentage,
    )


async def match_breed(image: DecodedImage, mode: AnimalMode = AnimalMode.DOG) -> BreedMatch:
    """
    Ask the LLM which breed the person in the photo resembles.

    Args:
        image: The decoded upload
        mode: Whether to match against dog or cat breeds

    Raises:
        BreedMatchError: provider not configured, call failed, or the answer
            could not be understood.
    """
    settings = get_settings()
    mode = AnimalMode(mode)

    if settings.llm_provider == "fake":
        return _fake_match(image, mode)

    prompt = _build_prompt(mode)

    try:
        if settings.llm_provider == "gemini":
            model = _get_gemini_model()
            if not model:
                raise BreedMatchError("Gemini API key not configured")
            response = await model.generate_content_async(
                [prompt, {"mime_type": image.media_type, "data": image.data}]
            )
            return _parse_response(response.text)

        client = _get_groq_client()
        if not client:
            raise BreedMatchError("Groq API key not configured")
        response = await client.chat.completions.create(
            model=settings.groq_model,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image.to_data_url()}},
                ],
            }],
            response_format={"type": "json_object"},
            max_tokens=512,
            temperature=0.7,
        )
        return _parse_response(response.choices[0].message.content or "")

    except BreedMatchError:
        raise
    except Exception as e:
        logger.warning(f"{settings.llm_provider} breed matching failed: {e}")
        raise BreedMatchError(f"LLM request failed: {e}") from e


async def test_llm_connection() -> tuple[bool, str]:
    """Test if the configured LLM provider is reachable."""
    settings = get_settings()

    if settings.llm_provider == "fake":
        return True, "Fake LLM mode enabled"

    try:
        if settings.llm_provider == "gemini":
            model = _get_gemini_model()
            if not model:
                return False, "Gemini API key not configured"
            response = await model.generate_content_async('Reply with {"ok": true}')
            return True, f"Gemini working: {response.text[:30]}"

        client = _get_groq_client()
        if not client:
            return False, "Groq API key not configured"
        response = await client.chat.completions.create(
            model=settings.groq_model,
            messages=[{"role": "user", "content": "Say woof"}],
            max_tokens=10,
        )
        return True, f"Groq working: {response.choices[0].message.content[:30]}"

    except Exception as e:
        return False, f"LLM error: {e}"

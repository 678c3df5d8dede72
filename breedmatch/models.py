"""
Pydantic models for API request/response schemas.

All models use camelCase for JSON serialization to match what the web page
expects (e.g., breed_emoji → breedEmoji).
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .services.catalog import AnimalMode


class CamelCaseModel(BaseModel):
    """
    Base model that converts snake_case to camelCase for JSON serialization.

    Also accepts snake_case in request bodies for client convenience.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


# ============================================================================
# Core Domain Models
# ============================================================================

class BreedMatch(CamelCaseModel):
    """What the language model thinks the person looks like."""
    breed: str = Field(min_length=1, description="The breed the person most resembles")
    breed_emoji: str = Field(description="A single emoji that best represents this breed")
    similarity_reason: str = Field(
        description="A fun, kind, complimentary 1-2 sentence explanation of the resemblance"
    )
    fun_fact: str = Field(description="An interesting fun fact about this breed, 1 sentence")
    match_percentage: int = Field(ge=50, le=99, description="How close the match is, 50-99")


# ============================================================================
# API Request Models
# ============================================================================

class AnalyzeRequest(CamelCaseModel):
    """Request to analyze an uploaded photo."""
    image: str = Field(min_length=1, description="Photo as a data URL (data:image/jpeg;base64,...)")
    mode: AnimalMode = AnimalMode.DOG


# ============================================================================
# API Response Models
# ============================================================================

class AnalyzeResponse(BreedMatch):
    """Breed match plus a real photo of that breed, when one could be found."""
    image_url: Optional[str] = None


class HealthResponse(CamelCaseModel):
    """Health check response."""
    status: str = "ok"
    version: str = "1.0.0"


class ErrorResponse(CamelCaseModel):
    """Standard error response."""
    code: Literal["VALIDATION", "UPSTREAM", "SERVER_ERROR"]
    message: str

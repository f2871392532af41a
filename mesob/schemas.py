"""
Pydantic Schemas for Request/Response Validation

Bodies of the utility API endpoints.

Author: Mesob Platform Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DeliveryEstimateRequest(BaseModel):
    """Restaurant and customer coordinates for a delivery estimate."""
    origin_lat: float = Field(..., examples=[40.7128])
    origin_lng: float = Field(..., examples=[-74.0060])
    dest_lat: float = Field(..., examples=[40.7580])
    dest_lng: float = Field(..., examples=[-73.9855])
    preparation_minutes: Optional[int] = Field(None, ge=0, le=600, examples=[15])


class SlugRequest(BaseModel):
    text: str = Field(..., max_length=500, examples=["Mama's Kitchen"])


class ValidationRequest(BaseModel):
    """Fields to check; any may be omitted."""
    email: Optional[str] = Field(None, examples=["john@example.com"])
    phone: Optional[str] = Field(None, examples=["+14155552671"])
    password: Optional[str] = Field(None)
    object_id: Optional[str] = Field(None, examples=["507f1f77bcf86cd799439011"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class DeliveryEstimateResponse(BaseModel):
    distance_meters: float
    travel_minutes: int
    preparation_minutes: int
    total_minutes: int
    formatted_distance: str


class OrderNumberResponse(BaseModel):
    order_number: str


class SlugResponse(BaseModel):
    slug: str


class PasswordCheck(BaseModel):
    is_valid: bool
    message: str


class ValidationResponse(BaseModel):
    """Result per submitted field; omitted fields stay null."""
    email: Optional[bool] = None
    phone: Optional[bool] = None
    password: Optional[PasswordCheck] = None
    object_id: Optional[bool] = None
    all_valid: bool = True


class LoyaltyTierResponse(BaseModel):
    lifetime_points: int
    tier: str
    next_tier: Optional[str]
    points_to_next_tier: int
    progress: float


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    version: str
    timestamp: datetime

"""
Common Pydantic models for the EcoToken API
"""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List, Optional

class HealthResponse(BaseModel):
    """
    Health check response model
    """
    status: str
    message: str
    timestamp: datetime
    version: str

class ErrorResponse(BaseModel):
    """
    Error response model
    """
    success: bool = False
    error: str
    message: str
    # Per-field messages, only present for validation failures
    fields: Optional[Dict[str, List[str]]] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

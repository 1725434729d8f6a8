"""
Topic schemas.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class TopicResponse(BaseModel):
    """Topic response schema."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CreateTopicRequest(BaseModel):
    """Request schema for creating a topic."""
    name: str = Field(..., min_length=1, max_length=100)


class UpdateTopicRequest(BaseModel):
    """Request schema for renaming a topic."""
    name: str = Field(..., min_length=1, max_length=100)


class TopicsResponse(BaseModel):
    """Response schema for topics list."""
    topics: List[TopicResponse]

"""
Pydantic schemas for the chatdrive HTTP API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialsPayload(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: Optional[str] = None
    password: Optional[str] = None


class ChatMessagePayload(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    user: Optional[str] = None
    text: Optional[str] = None


class UserAccount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    username: Optional[str] = None
    password: Optional[str] = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    user: str
    text: str


class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: Literal[True] = True

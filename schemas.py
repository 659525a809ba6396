# schemas.py

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON keys are camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Credentials(CamelModel):
    email: str
    password: str


class RefreshRequest(CamelModel):
    refresh_token: str


class RegisterResponse(CamelModel):
    message: str
    user_id: str


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    user_id: str
    email: str


class RefreshResponse(CamelModel):
    access_token: str
    refresh_token: str


class MessageResponse(CamelModel):
    message: str


class ChatRequest(CamelModel):
    prompt: str


class ChatResponse(CamelModel):
    id: str
    prompt: str
    response: str
    timestamp: datetime


class HistoryResponse(CamelModel):
    messages: List[ChatResponse]

"""
HTTP routes for the chatdrive API.

Each route performs a single store operation. Store failures are not caught
here and surface as a 500 from the framework.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from chatdrive.db import DbClient
from chatdrive.dependencies import get_db_client
from chatdrive.schemas import (
    ChatMessage,
    ChatMessagePayload,
    CredentialsPayload,
    MessageResponse,
    SuccessResponse,
    UserAccount,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def _read_body(request: Request) -> dict:
    """Return the request body as a dict, accepting JSON or form encoding."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be an object")
    return data


async def credentials_payload(request: Request) -> CredentialsPayload:
    try:
        return CredentialsPayload.model_validate(await _read_body(request))
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request body")


async def chat_message_payload(request: Request) -> ChatMessagePayload:
    try:
        return ChatMessagePayload.model_validate(await _read_body(request))
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid message")


def _content_disposition(filename: str) -> str:
    if not filename.isascii():
        return f"attachment; filename*=utf-8''{quote(filename)}"
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    return f'attachment; filename="{escaped}"'


# Users


@router.get("/users", response_model=list[UserAccount])
async def list_users(db: DbClient = Depends(get_db_client)):
    users = await db.list_users()
    return [UserAccount(**user.as_dict()) for user in users]


@router.post("/register", response_model=MessageResponse)
async def register(
    payload: CredentialsPayload = Depends(credentials_payload),
    db: DbClient = Depends(get_db_client),
):
    await db.create_user(payload.username, payload.password)
    return MessageResponse(message="User created")


@router.post("/login", response_model=UserAccount)
async def login(
    payload: CredentialsPayload = Depends(credentials_payload),
    db: DbClient = Depends(get_db_client),
):
    user = None
    if payload.username is not None and payload.password is not None:
        user = await db.find_user(payload.username, payload.password)
    if not user:
        logger.info("Rejected login for username %r", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return UserAccount(**user.as_dict())


# Files


@router.get("/files", response_model=list[str])
async def list_files(db: DbClient = Depends(get_db_client)):
    return await db.list_filenames()


@router.post("/upload", response_model=MessageResponse)
async def upload_file(
    file: UploadFile | None = File(None),
    username: str | None = Form(None),
    db: DbClient = Depends(get_db_client),
):
    if not username:
        raise HTTPException(status_code=400, detail="Username required")
    if file is None:
        raise HTTPException(status_code=400, detail="File required")

    data = await file.read()
    filename = f"{username}:{file.filename or ''}"
    await db.create_file(filename, data, file.content_type or DEFAULT_CONTENT_TYPE)
    logger.info("Stored %s (%d bytes)", filename, len(data))
    return MessageResponse(message="File uploaded successfully")


@router.get("/download/{name}")
async def download_file(name: str, db: DbClient = Depends(get_db_client)):
    record = await db.find_file(name)
    if not record:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(
        content=record.data,
        headers={
            "Content-Disposition": _content_disposition(record.filename),
            "Content-Type": record.content_type,
        },
    )


@router.delete("/delete/{name}", response_model=MessageResponse)
async def delete_file(name: str, db: DbClient = Depends(get_db_client)):
    deleted = await db.delete_file(name)
    logger.info("Delete %s removed %d document(s)", name, deleted)
    return MessageResponse(message="File deleted")


# Chat


@router.get("/chat", response_model=list[ChatMessage])
async def list_chat(db: DbClient = Depends(get_db_client)):
    messages = await db.list_chat_messages()
    return [ChatMessage(**message.as_dict()) for message in messages]


@router.post("/chat", response_model=SuccessResponse)
async def post_chat(
    payload: ChatMessagePayload = Depends(chat_message_payload),
    db: DbClient = Depends(get_db_client),
):
    if not payload.user or not payload.text:
        raise HTTPException(status_code=400, detail="Invalid message")
    await db.create_chat_message(payload.user, payload.text)
    return SuccessResponse()

"""
Document store abstraction for MongoDB and an in-memory test implementation.

Three independent collections are used: ``users``, ``files`` and ``chats``.
Documents are converted to typed records at this boundary so the HTTP layer
never handles raw store documents.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from pymongo import AsyncMongoClient

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
FILES_COLLECTION = "files"
CHATS_COLLECTION = "chats"
DEFAULT_DB_NAME = "chatdrive"


class DbClient(Protocol):
    """Interface for document store access."""

    async def create_user(
        self, username: Optional[str], password: Optional[str]
    ) -> "UserRecord":
        ...

    async def list_users(self) -> list["UserRecord"]:
        ...

    async def find_user(self, username: str, password: str) -> Optional["UserRecord"]:
        ...

    async def create_file(
        self, filename: str, data: bytes, content_type: str
    ) -> "FileRecord":
        ...

    async def list_filenames(self) -> list[str]:
        ...

    async def find_file(self, filename: str) -> Optional["FileRecord"]:
        ...

    async def delete_file(self, filename: str) -> int:
        ...

    async def create_chat_message(self, user: str, text: str) -> "ChatMessageRecord":
        ...

    async def list_chat_messages(self) -> list["ChatMessageRecord"]:
        ...


@dataclass
class UserRecord:
    username: Optional[str]
    password: Optional[str]
    id: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "_id": self.id,
            "username": self.username,
            "password": self.password,
        }


@dataclass
class FileRecord:
    filename: str
    data: bytes
    content_type: str
    id: Optional[str] = None


@dataclass
class ChatMessageRecord:
    user: str
    text: str
    id: Optional[str] = None

    def as_dict(self) -> dict:
        return {"_id": self.id, "user": self.user, "text": self.text}


@dataclass
class InMemoryDbClient:
    """Simple in-memory document store for development and tests."""

    users: List[UserRecord] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)
    chats: List[ChatMessageRecord] = field(default_factory=list)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.files.clear()
        self.chats.clear()

    async def create_user(
        self, username: Optional[str], password: Optional[str]
    ) -> UserRecord:
        record = UserRecord(username=username, password=password, id=uuid.uuid4().hex)
        self.users.append(record)
        return record

    async def list_users(self) -> list[UserRecord]:
        return list(self.users)

    async def find_user(self, username: str, password: str) -> Optional[UserRecord]:
        for user in self.users:
            if user.username == username and user.password == password:
                return user
        return None

    async def create_file(
        self, filename: str, data: bytes, content_type: str
    ) -> FileRecord:
        record = FileRecord(
            filename=filename,
            data=bytes(data),
            content_type=content_type,
            id=uuid.uuid4().hex,
        )
        self.files.append(record)
        return record

    async def list_filenames(self) -> list[str]:
        return [record.filename for record in self.files]

    async def find_file(self, filename: str) -> Optional[FileRecord]:
        for record in self.files:
            if record.filename == filename:
                return record
        return None

    async def delete_file(self, filename: str) -> int:
        for index, record in enumerate(self.files):
            if record.filename == filename:
                del self.files[index]
                return 1
        return 0

    async def create_chat_message(self, user: str, text: str) -> ChatMessageRecord:
        record = ChatMessageRecord(user=user, text=text, id=uuid.uuid4().hex)
        self.chats.append(record)
        return record

    async def list_chat_messages(self) -> list[ChatMessageRecord]:
        return list(self.chats)


def _str_id(doc: Dict[str, Any]) -> Optional[str]:
    value = doc.get("_id")
    return str(value) if value is not None else None


def _to_user_record(doc: Dict[str, Any]) -> UserRecord:
    return UserRecord(
        username=doc.get("username"),
        password=doc.get("password"),
        id=_str_id(doc),
    )


def _to_file_record(doc: Dict[str, Any]) -> FileRecord:
    return FileRecord(
        filename=doc.get("filename", ""),
        data=bytes(doc.get("data") or b""),
        content_type=doc.get("contentType") or "application/octet-stream",
        id=_str_id(doc),
    )


def _to_chat_record(doc: Dict[str, Any]) -> ChatMessageRecord:
    return ChatMessageRecord(
        user=doc.get("user", ""),
        text=doc.get("text", ""),
        id=_str_id(doc),
    )


class MongoDbClient:
    """
    MongoDB-backed implementation using the asyncio driver shipped with pymongo.

    The client connects lazily; the first awaited operation opens the pool.
    """

    def __init__(self, mongo_uri: str, db_name: Optional[str] = None):
        if not mongo_uri:
            raise ValueError("MONGO_URI is required for MongoDbClient")
        self.client: AsyncMongoClient = AsyncMongoClient(mongo_uri)
        if db_name:
            self.db = self.client[db_name]
        else:
            self.db = self.client.get_default_database(default=DEFAULT_DB_NAME)
        self.users = self.db[USERS_COLLECTION]
        self.files = self.db[FILES_COLLECTION]
        self.chats = self.db[CHATS_COLLECTION]
        logger.info("Using MongoDB database %r", self.db.name)

    async def create_user(
        self, username: Optional[str], password: Optional[str]
    ) -> UserRecord:
        result = await self.users.insert_one(
            {"username": username, "password": password}
        )
        return UserRecord(
            username=username, password=password, id=str(result.inserted_id)
        )

    async def list_users(self) -> list[UserRecord]:
        docs = await self.users.find().to_list(None)
        return [_to_user_record(doc) for doc in docs]

    async def find_user(self, username: str, password: str) -> Optional[UserRecord]:
        doc = await self.users.find_one({"username": username, "password": password})
        if not doc:
            return None
        return _to_user_record(doc)

    async def create_file(
        self, filename: str, data: bytes, content_type: str
    ) -> FileRecord:
        result = await self.files.insert_one(
            {"filename": filename, "data": data, "contentType": content_type}
        )
        return FileRecord(
            filename=filename,
            data=data,
            content_type=content_type,
            id=str(result.inserted_id),
        )

    async def list_filenames(self) -> list[str]:
        docs = await self.files.find({}, {"data": 0, "contentType": 0}).to_list(None)
        return [doc.get("filename") for doc in docs]

    async def find_file(self, filename: str) -> Optional[FileRecord]:
        doc = await self.files.find_one({"filename": filename})
        if not doc:
            return None
        return _to_file_record(doc)

    async def delete_file(self, filename: str) -> int:
        result = await self.files.delete_one({"filename": filename})
        return result.deleted_count

    async def create_chat_message(self, user: str, text: str) -> ChatMessageRecord:
        result = await self.chats.insert_one({"user": user, "text": text})
        return ChatMessageRecord(user=user, text=text, id=str(result.inserted_id))

    async def list_chat_messages(self) -> list[ChatMessageRecord]:
        docs = await self.chats.find().to_list(None)
        return [_to_chat_record(doc) for doc in docs]

from __future__ import annotations

from datetime import datetime, timezone

from launchpad.api.schemas.signups import SignupCreate, SignupOut
from launchpad.repositories.timestamps import to_iso
from launchpad.store.base import Document, DocumentStore

SIGNUPS = "signups"


def from_document(doc: Document) -> SignupOut:
    data = {**doc.data, "id": doc.id, "createdAt": to_iso(doc.data.get("createdAt"))}
    return SignupOut.model_validate(data)


class SignupRepository:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def create(self, record: SignupCreate) -> SignupOut:
        data = record.model_dump(by_alias=True, exclude_none=True)
        data["createdAt"] = datetime.now(timezone.utc)
        return from_document(self._store.insert(SIGNUPS, data))

"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the document-store contract (collection-oriented, equality filters,
  single-field ordering) consumed by the repositories.
- Define typed repository contracts for Users, Forms and Submissions.
- Keep application/domain independent from Firestore or in-memory storage.

Collaborators
- domain.entities: Form, Submission
- identity.users: User
- domain.value_objects: FormFilter, SubmissionFilter, UserFilter
- infrastructure.store: FirestoreDocumentStore, InMemoryDocumentStore
- infrastructure.repositories: Store*Repository implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports.
- All I/O is async (collaborator calls suspend only the calling request).
- List operations return records ordered by created_at DESC.

Notes
- `changes` mappings use entity attribute names; repositories translate to
  persisted record keys.
- update/delete on a missing record raise RecordNotFoundError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol

from ..identity.users import User
from .entities import Form, Submission
from .value_objects import FormFilter, SubmissionFilter, UserFilter


class RecordNotFoundError(LookupError):
    """update/delete sobre un registro inexistente."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection}/{record_id} not found")


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True, slots=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.DESCENDING


Record = Dict[str, Any]


class DocumentStore(Protocol):
    """
    R: Collection-oriented store (Firestore semantics).

    Records returned by query/get include their id under the "id" key.
    """

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order_by: Optional[OrderBy] = None,
    ) -> List[Record]:
        """R: Equality-filtered query, optionally ordered by a single field."""
        ...

    async def get(self, collection: str, record_id: str) -> Optional[Record]:
        ...

    async def insert(self, collection: str, record: Mapping[str, Any]) -> str:
        """R: Insert with a generated id; returns the id."""
        ...

    async def put(
        self, collection: str, record_id: str, record: Mapping[str, Any]
    ) -> None:
        """R: Create or replace a record under a caller-chosen id."""
        ...

    async def update(
        self, collection: str, record_id: str, changes: Mapping[str, Any]
    ) -> None:
        ...

    async def delete(self, collection: str, record_id: str) -> None:
        ...

    async def ping(self) -> bool:
        ...


class UserRepository(Protocol):
    """R: Interface for User accounts (collection `usuarios`, keyed by subject id)."""

    async def get_user(self, subject_id: str) -> Optional[User]:
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    async def list_users(self, filters: UserFilter) -> List[User]:
        ...

    async def create_user(self, user: User) -> User:
        ...

    async def update_user(self, subject_id: str, changes: Mapping[str, Any]) -> None:
        ...

    async def record_last_access(self, subject_id: str, at: datetime) -> None:
        ...


class FormRepository(Protocol):
    """R: Interface for Forms (collection `formularios`)."""

    async def get_form(self, form_id: str) -> Optional[Form]:
        ...

    async def list_forms(self, filters: FormFilter) -> List[Form]:
        ...

    async def create_form(self, form: Form) -> Form:
        """R: Persist a new form; the returned copy carries the generated id."""
        ...

    async def update_form(self, form_id: str, changes: Mapping[str, Any]) -> None:
        ...

    async def delete_form(self, form_id: str) -> None:
        ...


class SubmissionRepository(Protocol):
    """R: Interface for Submissions (collection `tramites`)."""

    async def get_submission(self, submission_id: str) -> Optional[Submission]:
        ...

    async def list_submissions(self, filters: SubmissionFilter) -> List[Submission]:
        ...

    async def create_submission(self, submission: Submission) -> Submission:
        ...

    async def update_submission(
        self, submission_id: str, changes: Mapping[str, Any]
    ) -> None:
        ...

    async def delete_submission(self, submission_id: str) -> None:
        ...

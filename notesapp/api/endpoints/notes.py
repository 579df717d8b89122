"""
Note Endpoints

CRUD for notes within the caller's tenant.

RBAC:
- List/view notes: any authenticated user
- Create/update/delete: member role or higher
Creation is additionally subject to the free-tier quota.

TENANT_ISOLATION: Handlers only talk to TenantScope, which filters every
query by the principal's tenant. A note id from another tenant is a 404.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from notesapp.api.deps import get_member_scope, get_tenant_scope
from notesapp.core.scoping import TenantScope
from notesapp.schemas.note import MessageResponse, NoteResponse, NoteWrite
from notesapp.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=List[NoteResponse])
def list_notes(scope: TenantScope = Depends(get_tenant_scope)):
    """List the tenant's notes, newest first."""
    notes = scope.list_notes()
    logger.debug(f"Listed {len(notes)} notes for tenant {scope.tenant_id}")
    return notes


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    note_data: NoteWrite,
    scope: TenantScope = Depends(get_member_scope)
):
    """
    Create a note.

    Free tenants get 403 with ``quota_exceeded: true`` once they hold
    FREE_TIER_NOTE_LIMIT notes.
    """
    return scope.create_note(title=note_data.title, content=note_data.content)


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(note_id: str, scope: TenantScope = Depends(get_tenant_scope)):
    return scope.get_note(note_id)


@router.put("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: str,
    note_data: NoteWrite,
    scope: TenantScope = Depends(get_member_scope)
):
    """Replace a note's title and content."""
    return scope.update_note(note_id, title=note_data.title, content=note_data.content)


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(note_id: str, scope: TenantScope = Depends(get_member_scope)):
    scope.delete_note(note_id)
    return MessageResponse(message="Note deleted successfully")

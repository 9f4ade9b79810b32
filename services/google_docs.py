"""
Google Docs / Drive Service

Applies compiled document operations to a Google Doc and shares it.

- Operation → Docs API v1 request, one-to-one
- documents.create + documents.batchUpdate (single batch, applied atomically by Google)
- Drive v3 reader permissions per student email

Calls go through google-api-python-client with the educator's OAuth access
token. The client is blocking, so every execute() runs in a worker thread.
Pass a prebuilt service to reuse it (or one built on HttpMockSequence in tests).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from generation.document_builder import Content, build_operations
from generation.schemas import (
    DocumentLink,
    InsertText,
    Operation,
    SetListBullets,
    SetParagraphStyle,
    SetTextStyle,
)

log = logging.getLogger(__name__)

DOC_LINK_TEMPLATE = "https://docs.google.com/document/d/{doc_id}/edit"


class GoogleAPIError(RuntimeError):
    """A Google API call returned a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# ─── Operation mapping ─────────────────────────────────────────────────────────

def _range(start: int, end: int) -> Dict[str, int]:
    return {"startIndex": start, "endIndex": end}


def to_docs_request(operation: Operation) -> Dict[str, Any]:
    """Translate one operation into its Docs API batchUpdate request."""
    if isinstance(operation, InsertText):
        return {"insertText": {"location": {"index": operation.index}, "text": operation.text}}
    if isinstance(operation, SetParagraphStyle):
        return {
            "updateParagraphStyle": {
                "range": _range(operation.start, operation.end),
                "paragraphStyle": {"namedStyleType": operation.style_name},
                "fields": "namedStyleType",
            }
        }
    if isinstance(operation, SetListBullets):
        return {
            "createParagraphBullets": {
                "range": _range(operation.start, operation.end),
                "bulletPreset": operation.preset,
            }
        }
    if isinstance(operation, SetTextStyle):
        return {
            "updateTextStyle": {
                "range": _range(operation.start, operation.end),
                "textStyle": {
                    "weightedFontFamily": {
                        "fontFamily": operation.font_family,
                        "weight": operation.weight,
                    }
                },
                "fields": "weightedFontFamily",
            }
        }
    raise TypeError(f"Unsupported operation: {type(operation).__name__}")


def to_docs_requests(operations: Sequence[Operation]) -> List[Dict[str, Any]]:
    return [to_docs_request(op) for op in operations]


# ─── Client helpers ────────────────────────────────────────────────────────────

def google_credentials(access_token: str) -> Credentials:
    """Wrap a bare OAuth access token. No refresh token: it is the caller's session."""
    if not access_token:
        raise ValueError("Missing Google access token.")
    return Credentials(token=access_token)


def google_service(name: str, version: str, access_token: str):
    """Build a discovery client from the bundled (static) discovery document."""
    return build(name, version, credentials=google_credentials(access_token), cache_discovery=False)


async def execute(request, action: str) -> Dict[str, Any]:
    """Run a prepared API request off the event loop; HttpError → GoogleAPIError."""
    try:
        return await asyncio.to_thread(request.execute) or {}
    except HttpError as e:
        log.error(f"[DOCS] {action} failed ({e.status_code}): {e.reason}")
        raise GoogleAPIError(f"{action} failed: {e.reason}", status_code=e.status_code) from e


# ─── Docs API ──────────────────────────────────────────────────────────────────

async def create_document(title: str, access_token: str, docs=None) -> str:
    """Create an empty Google Doc. Returns its documentId."""
    if docs is None:
        docs = google_service("docs", "v1", access_token)
    data = await execute(docs.documents().create(body={"title": title}), "Create document")
    doc_id = data.get("documentId")
    if not doc_id:
        raise GoogleAPIError("Google Docs API failed to return a valid documentId")
    return doc_id


async def apply_operations(
    doc_id: str,
    operations: Sequence[Operation],
    access_token: str,
    docs=None,
) -> Dict[str, Any]:
    """Send every operation in one documents.batchUpdate call."""
    if docs is None:
        docs = google_service("docs", "v1", access_token)
    requests = to_docs_requests(operations)
    log.info(f"[DOCS] Applying {len(requests)} formatting requests to {doc_id}")
    return await execute(
        docs.documents().batchUpdate(documentId=doc_id, body={"requests": requests}),
        "Format document",
    )


async def create_google_doc(
    title: str,
    content: Content,
    access_token: str,
    docs=None,
) -> DocumentLink:
    """
    Create a Google Doc titled `title` and fill it with formatted `content`.

    `content` may be an AssignmentRecord, assignment JSON or markdown; see
    generation.document_builder.
    """
    google_credentials(access_token)
    result = build_operations(content)
    if docs is None:
        docs = google_service("docs", "v1", access_token)

    doc_id = await create_document(title, access_token, docs)
    doc_link = DOC_LINK_TEMPLATE.format(doc_id=doc_id)
    log.info(f"[DOCS] Google Doc created: {doc_link}")

    await apply_operations(doc_id, result.operations, access_token, docs)
    log.info(f"[DOCS] Content formatted (final index {result.final_cursor})")
    return DocumentLink(doc_id=doc_id, doc_link=doc_link)


# ─── Drive API ─────────────────────────────────────────────────────────────────

async def share_google_doc(
    doc_id: str,
    student_emails: Sequence[str],
    access_token: str,
    drive=None,
) -> str:
    """Grant each student read-only access. Returns a confirmation message."""
    if drive is None:
        drive = google_service("drive", "v3", access_token)
    for email in student_emails:
        await execute(
            drive.permissions().create(
                fileId=doc_id,
                body={"role": "reader", "type": "user", "emailAddress": email},
                fields="id",
            ),
            f"Share document with {email}",
        )
        log.info(f"[DOCS] Shared {doc_id} with {email}")
    return f"Google Doc shared with {len(student_emails)} students."

"""
Site Schemas

Operational logs and the admin-curated site content: text blocks,
settings, translations and uploaded media metadata.
"""

from datetime import datetime
from typing import Optional

from guttakrutt.shared.schemas.common import BaseSchema, RowSchema


# ═══════════════════════════════════════════════════════════════════════════════
# WEB LOGS
# ═══════════════════════════════════════════════════════════════════════════════


class WebLogCreate(BaseSchema):
    operation: str
    status: str
    details: Optional[str] = None
    user_id: Optional[int] = None
    duration: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    # JSON-encoded string, stored as text
    metadata: Optional[str] = None


class WebLog(RowSchema):
    """Append-only operational log row."""

    operation: str
    status: str
    details: Optional[str] = None
    timestamp: Optional[datetime] = None
    user_id: Optional[int] = None
    duration: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    metadata: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# SITE CONTENT
# ═══════════════════════════════════════════════════════════════════════════════


class WebsiteContentCreate(BaseSchema):
    key: str
    title: str
    content: str
    content_en: str
    content_no: Optional[str] = None
    is_published: Optional[bool] = None
    updated_by: Optional[int] = None


class WebsiteContent(RowSchema):
    key: str
    title: str
    content: str
    content_en: str
    content_no: Optional[str] = None
    is_published: Optional[bool] = True
    last_updated: Optional[datetime] = None
    updated_by: Optional[int] = None


class WebsiteSettingCreate(BaseSchema):
    key: str
    value: str
    type: str = "string"
    category: str = "general"
    description: Optional[str] = None
    updated_by: Optional[int] = None


class WebsiteSetting(RowSchema):
    key: str
    value: str
    description: Optional[str] = None
    type: str
    category: str
    last_updated: Optional[datetime] = None
    updated_by: Optional[int] = None


class TranslationCreate(BaseSchema):
    key: str
    en_text: str
    no_text: Optional[str] = None
    context: Optional[str] = None


class Translation(RowSchema):
    key: str
    en_text: str
    no_text: Optional[str] = None
    context: Optional[str] = None
    last_updated: Optional[datetime] = None


class MediaFileCreate(BaseSchema):
    filename: str
    path: str
    file_type: str
    mime_type: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    uploaded_by: Optional[int] = None


class MediaFile(RowSchema):
    filename: str
    path: str
    file_type: str
    mime_type: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    uploaded_by: Optional[int] = None

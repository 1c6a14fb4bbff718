from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ConfigEntry(BaseModel):
    key: str
    value: str
    label: Optional[str] = None
    type: str = "string"
    category: str = "general"


class ConfigEntryRead(ConfigEntry):
    id: str
    tenant_id: str

    class Config:
        from_attributes = True


class ConfigUpsert(BaseModel):
    entries: List[ConfigEntry]


class StorefrontConfig(BaseModel):
    tenant_id: str
    tenant_name: str
    tenant_slug: Optional[str] = None
    logo: Optional[str] = None
    site_name: str
    theme: Dict[str, Any] = {}
    landing_page: Dict[str, Any] = {}
    footer: Dict[str, Any] = {}

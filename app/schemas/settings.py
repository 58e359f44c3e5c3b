from pydantic import BaseModel, Field


class SettingUpdate(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str


class SettingsUpdateRequest(BaseModel):
    updates: list[SettingUpdate]
    updated_by: str | None = None


class EmailTemplatePreviewRequest(BaseModel):
    template: str
    local_part: str


class EmailTemplatePreview(BaseModel):
    matched: bool
    first_name: str | None = None
    last_name: str | None = None

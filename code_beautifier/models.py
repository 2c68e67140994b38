from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TrailingComma = Literal["none", "es5", "all"]


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class StyleOptions(BaseModel):
    tab_width: int = Field(default=2, ge=1, le=8)
    use_tabs: bool = False
    semicolons: bool = True
    single_quote: bool = False
    trailing_comma: TrailingComma = "es5"
    print_width: int = Field(default=80, ge=40, le=200)
    auto_format: bool = False


class StyleSettings(BaseModel):
    tab_width: int | None = Field(default=None, ge=1, le=8)
    use_tabs: bool | None = None
    semicolons: bool | None = None
    single_quote: bool | None = None
    trailing_comma: TrailingComma | None = None
    print_width: int | None = Field(default=None, ge=40, le=200)
    auto_format: bool | None = None


class StyleSettingsResponse(BaseModel):
    style: StyleOptions


class StyleSettingsPutRequest(BaseModel):
    style: StyleSettings = Field(default_factory=StyleSettings)


class FormatRequest(BaseModel):
    text: str
    language: str
    style: StyleOptions | None = None


class FormatResponse(BaseModel):
    text: str
    language: str
    changed: bool


class DownloadRequest(BaseModel):
    text: str
    language: str


class LanguageOut(BaseModel):
    id: str
    label: str
    extension: str


class LanguageListResponse(BaseModel):
    languages: list[LanguageOut]


class FileReadResponse(BaseModel):
    filename: str
    text: str
    language: str | None = None

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class FormatRequest(BaseModel):
    text: str = ""


class FormatResponse(BaseModel):
    text: str
    stats: dict[str, int] = Field(default_factory=dict)


class SampleOut(BaseModel):
    input: str
    output: str


class SamplesResponse(BaseModel):
    samples: list[SampleOut]


class ClipboardStateOut(BaseModel):
    current_text: str
    formatted_text: str
    auto_format: bool
    revision: int
    watching: bool


class ClipboardStateResponse(BaseModel):
    clipboard: ClipboardStateOut


class CopyRequest(BaseModel):
    # Defaults to the current formatted text.
    text: str | None = None


class ActionResponse(BaseModel):
    ok: bool
    clipboard: ClipboardStateOut | None = None


class Settings(BaseModel):
    auto_format: bool | None = None


class SettingsResponse(BaseModel):
    settings: Settings


class SettingsPutRequest(BaseModel):
    settings: Settings = Field(default_factory=Settings)

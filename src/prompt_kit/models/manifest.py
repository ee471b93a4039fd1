"""Pydantic models for the per-prompt tprompts.json manifest."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MANIFEST_FILENAME = "tprompts.json"

RuleKind = Literal["file", "directory"]


class FileRule(BaseModel):
    """Where one file or directory of a prompt is installed for an editor.

    ``location`` is relative to the install root. For a directory source it is
    the destination directory; for a file source it is the destination file.
    ``kind`` optionally pins which of the two the rule expects.
    """

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., min_length=1)
    prefix: str | None = None
    suffix: str | None = None
    kind: RuleKind | None = None

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        """Validate location is a non-blank string."""
        if not v.strip():
            raise ValueError("location must be a non-empty string")
        return v


class PromptManifest(BaseModel):
    """Parsed tprompts.json."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str | None = None
    version: str | None = None
    editors: dict[str, dict[str, FileRule]]

    def editor_names(self) -> list[str]:
        return list(self.editors.keys())

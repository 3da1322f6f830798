"""
Models for the enterprise policy documentation data.

The per-tree readme data keeps two versions of every README chunk:
"upstream" (refreshed from mozilla/policy-templates on every run) and an
optional hand-written "override". An override of "skip" hides the chunk.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SKIP = "skip"


class ReadmeEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    upstream: Any = None
    override: Any = None

    def resolved(self) -> Any:
        """Override if set, else upstream; None when the entry is skipped."""
        content = self.override or self.upstream
        if not content or content == SKIP:
            return None
        return content


class PolicyReadme(BaseModel):
    """Header rows and detail chunks of the policy README for one tree."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mozilla_reference_templates: str | None = Field(
        default=None, alias="mozillaReferenceTemplates"
    )
    name: str = ""
    desc: list[str] = Field(default_factory=list)
    # policy name -> markdown table row
    headers: dict[str, ReadmeEntry] = Field(default_factory=dict)
    # policy name -> markdown lines of the detail section
    policies: dict[str, ReadmeEntry] = Field(default_factory=dict)


class SchemaRevision(BaseModel):
    """One downloaded revision of policies-schema.json."""

    model_config = ConfigDict(populate_by_name=True)

    revision: str
    version: str
    schema_data: dict[str, Any] = Field(default_factory=dict, alias="schema")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> SchemaRevision:
        """Build from a cached schema file, which stores revision/version inline."""
        return cls(
            revision=str(document.get("revision", "")),
            version=str(document.get("version", "")),
            schema=document,
        )

"""Dependency records produced by the graph resolver."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DependencyRecord(BaseModel):
    """One entry of a module's flattened dependency list."""

    id: str = Field(description="Module id, or the verbatim specifier if opaque")
    path: str = Field(description="Debug source path, or the verbatim specifier if opaque")
    combined: bool = Field(description="Inlined into the requester's artifact")
    external: str | None = Field(
        default=None,
        description="Id of the required module whose artifact already contains this one",
    )


__all__ = ["DependencyRecord"]

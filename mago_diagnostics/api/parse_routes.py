from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from mago_diagnostics.core.containers import build_diagnostics_service
from mago_diagnostics.services.diagnostics_service import (
    CheckResult,
    OutputTooLargeError,
    UnknownToolError,
)

router = APIRouter(prefix="/api", tags=["diagnostics"])

# Build once at module level
diagnostics_service = build_diagnostics_service()


# ── Request / Response schemas ────────────────────────────────────
class _ParseRequest(BaseModel):
    tool: str = Field("mago", description="Name of the tool that produced the output.")
    command: Literal["lint", "analyze"] = Field("lint", description="mago sub-command that was run.")
    output: str = Field(..., description="Captured stdout + stderr of one tool run.")


class FileParseRequest(_ParseRequest):
    """Output of a single-file run."""

    file_path: str = Field(
        ...,
        description="File the run targeted; every diagnostic is attached to it.",
        json_schema_extra={"examples": ["/srv/app/src/Controller.php"]},
    )


class ProjectParseRequest(_ParseRequest):
    """Output of a whole-project run."""

    workspace_root: str = Field(
        ...,
        description="Root that relative paths in the output are resolved against.",
        json_schema_extra={"examples": ["/srv/app"]},
    )


class FailureInfo(BaseModel):
    kind: str
    line: int | None = None
    column: int | None = None
    error_lines: list[str] = []


class CheckResponse(BaseModel):
    """Parsed diagnostics grouped by file, plus a one-line outcome."""

    tool: str
    command: str
    target: str
    outcome: str = Field(..., description="issues_found, no_issues, unparsed_output or tool_error.")
    summary: str
    total: int
    files: int
    skipped_lines: int
    failure: FailureInfo | None = None
    diagnostics: dict[str, list[dict[str, Any]]]


class CollectionResponse(BaseModel):
    """Everything currently held in the diagnostics collection."""

    files: int
    total: int
    diagnostics: dict[str, list[dict[str, Any]]]


# ── Endpoints ─────────────────────────────────────────────────────
@router.get(
    "/parsers",
    summary="List available parsers",
    response_description="Tool names with a registered output parser",
)
def list_parsers() -> list[str]:
    return diagnostics_service.registry.list()


@router.post(
    "/parse/file",
    response_model=CheckResponse,
    summary="Parse single-file output",
    response_description="Diagnostics for the targeted file",
)
def parse_file(req: FileParseRequest) -> dict[str, Any]:
    """Parse the output of `mago lint <file>` / `mago analyze <file>`.

    Diagnostics are merged into the in-memory collection under `file_path`.
    """
    return _run(
        lambda: diagnostics_service.check_file(req.tool, req.output, req.file_path, req.command)
    )


@router.post(
    "/parse/project",
    response_model=CheckResponse,
    summary="Parse whole-project output",
    response_description="Diagnostics grouped by resolved file path",
)
def parse_project(req: ProjectParseRequest) -> dict[str, Any]:
    """Parse the output of `mago lint .` / `mago analyze .` run in `workspace_root`.

    Paths reported by mago are made absolute (relative ones are joined onto
    `workspace_root`, Windows `\\\\?\\` prefixes are dropped) and used as
    grouping keys.
    """
    return _run(
        lambda: diagnostics_service.check_project(
            req.tool, req.output, req.workspace_root, req.command
        )
    )


@router.get(
    "/diagnostics",
    response_model=CollectionResponse,
    summary="Get collected diagnostics",
    response_description="All diagnostics gathered since the last clear",
)
def get_diagnostics() -> dict[str, Any]:
    snapshot = diagnostics_service.collection.snapshot()
    return {
        "files": len(snapshot),
        "total": sum(len(d) for d in snapshot.values()),
        "diagnostics": {f: [d.to_dict() for d in diags] for f, diags in snapshot.items()},
    }


@router.delete(
    "/diagnostics",
    summary="Clear collected diagnostics",
    response_description="Confirmation",
)
def clear_diagnostics() -> dict[str, str]:
    diagnostics_service.collection.clear()
    return {"status": "cleared"}


@router.delete(
    "/diagnostics/file",
    summary="Drop diagnostics for one file",
    response_description="Confirmation",
)
def delete_file_diagnostics(path: str = Query(..., description="File path as used in the collection.")) -> dict[str, str]:
    if not diagnostics_service.collection.delete(path):
        raise HTTPException(status_code=404, detail="No diagnostics for file")
    return {"status": "deleted"}


def _run(check) -> dict[str, Any]:
    try:
        result: CheckResult = check()
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OutputTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    return result.to_dict()

"""Reusable CLI option definitions."""

from pathlib import Path
from typing import Annotated

import typer

from apistudio.models.requests import HttpMethod
from apistudio.services.codegen import CodeTarget

# Global options
DataDirOption = Annotated[
    Path | None,
    typer.Option(
        "--data-dir",
        help="Directory holding collections.json and environments.json",
        envvar="APISTUDIO_DATA_DIR",
    ),
]

CollectionOption = Annotated[
    str | None,
    typer.Option(
        "--collection",
        "-c",
        help="Collection name or ID",
    ),
]

EnvOption = Annotated[
    str | None,
    typer.Option(
        "--env",
        "-E",
        help="Environment to use instead of the active one",
    ),
]

# Request definition options
MethodOption = Annotated[
    HttpMethod,
    typer.Option(
        "--method",
        "-X",
        help="HTTP method",
        case_sensitive=False,
    ),
]

HeaderOption = Annotated[
    list[str] | None,
    typer.Option(
        "--header",
        "-H",
        help="Header as 'Key: Value' (repeatable)",
    ),
]

ParamOption = Annotated[
    list[str] | None,
    typer.Option(
        "--param",
        "-p",
        help="Query parameter as 'key=value' (repeatable)",
    ),
]

BodyOption = Annotated[
    str | None,
    typer.Option(
        "--body",
        "-d",
        help="Request body",
    ),
]

BodyTypeOption = Annotated[
    str,
    typer.Option(
        "--body-type",
        help="Body type: json, text, xml, html, urlencoded or form",
    ),
]

BearerOption = Annotated[
    str | None,
    typer.Option(
        "--bearer",
        help="Bearer token",
    ),
]

BasicOption = Annotated[
    str | None,
    typer.Option(
        "--basic",
        help="Basic credentials as 'username:password'",
    ),
]

ApiKeyOption = Annotated[
    str | None,
    typer.Option(
        "--api-key",
        help="API key header as 'Header-Name:value'",
    ),
]

# Execution options
TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        help="Timeout in seconds (default: none)",
        envvar="APISTUDIO_TIMEOUT",
    ),
]

TargetOption = Annotated[
    CodeTarget,
    typer.Option(
        "--target",
        "-t",
        help="Snippet target: curl, fetch, python or axios",
        case_sensitive=False,
    ),
]

# Output options
PrettyOption = Annotated[
    bool,
    typer.Option(
        "--pretty",
        help="Pretty-print JSON bodies",
    ),
]

TruncateOption = Annotated[
    int | None,
    typer.Option(
        "--truncate",
        help="Truncate bodies to N characters",
    ),
]

ShowSecretsOption = Annotated[
    bool,
    typer.Option(
        "--show-secrets",
        help="Do not mask Authorization, API key and cookie headers",
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Enable debug logging to stderr",
    ),
]

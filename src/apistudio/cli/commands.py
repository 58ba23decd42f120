"""CLI command definitions."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from apistudio.cli.help import get_help
from apistudio.cli.options import (
    ApiKeyOption,
    BasicOption,
    BearerOption,
    BodyOption,
    BodyTypeOption,
    CollectionOption,
    DataDirOption,
    DebugOption,
    EnvOption,
    HeaderOption,
    MethodOption,
    ParamOption,
    PrettyOption,
    ShowSecretsOption,
    TargetOption,
    TimeoutOption,
    TruncateOption,
)
from apistudio.models.environments import EnvironmentVariable
from apistudio.models.output import FormatOptions
from apistudio.models.requests import (
    ApiKeyAuth,
    ApiRequest,
    Auth,
    BasicAuth,
    BearerAuth,
    Body,
    FormBody,
    Header,
    HttpMethod,
    NoAuth,
    NoBody,
    Param,
    RawBody,
    UrlEncodedBody,
)
from apistudio.models.responses import ExecutionResult
from apistudio.repositories.http import HttpExecutor
from apistudio.repositories.storage import StorageError, StorageRepository
from apistudio.services import collections as collection_service
from apistudio.services import environments as environment_service
from apistudio.services.codegen import CodeTarget, emit
from apistudio.services.executor import ExecutionService
from apistudio.services.formatter import FormatterService
from apistudio.services.materializer import materialize
from apistudio.settings import settings

console = Console()
err_console = Console(stderr=True)

RAW_TYPES = ("json", "text", "xml", "html")

env_app = typer.Typer(help="Manage environments", no_args_is_help=True)


def _get_repository(data_dir: Path | None) -> StorageRepository:
    """Get the storage repository, preferring CLI option over settings."""
    return StorageRepository(data_dir if data_dir is not None else settings.data_dir)


def _load_variables(repo: StorageRepository, env: str | None) -> list[EnvironmentVariable]:
    """Variables of the named environment, or of the active one."""
    environments = repo.load_environments()
    if env is not None:
        return list(environment_service.find_environment(environments, env).variables)
    return environment_service.active_variables(environments)


def _split_pair(item: str, separator: str, what: str) -> tuple[str, str]:
    """Split 'key<sep>value', stripping whitespace around both parts."""
    key, sep, value = item.partition(separator)
    if not sep or not key.strip():
        raise ValueError(f"Invalid {what}: {item!r}. Use 'key{separator}value'")
    return key.strip(), value.strip()


def _build_body(body: str | None, body_type: str) -> Body:
    """Build a body descriptor from CLI options."""
    body_type = body_type.lower()
    if body is None:
        return NoBody()
    if body_type in RAW_TYPES:
        return RawBody(content=body, raw_type=body_type)  # type: ignore[arg-type]
    if body_type == "urlencoded":
        return UrlEncodedBody(content=body)
    if body_type == "form":
        return FormBody(content=body)
    raise ValueError(f"Invalid body type: {body_type}. Use json, text, xml, html, urlencoded or form")


def _build_auth(bearer: str | None, basic: str | None, api_key: str | None) -> Auth:
    """Build an auth descriptor from CLI options."""
    given = [option for option in (bearer, basic, api_key) if option is not None]
    if len(given) > 1:
        raise ValueError("Use only one of --bearer, --basic and --api-key")

    if bearer is not None:
        return BearerAuth(token=bearer)
    if basic is not None:
        username, _, password = basic.partition(":")
        return BasicAuth(username=username, password=password)
    if api_key is not None:
        key, value = _split_pair(api_key, ":", "API key")
        return ApiKeyAuth(key=key, value=value)
    return NoAuth()


def _build_format_options(
    pretty: bool = False,
    truncate: int | None = None,
    show_secrets: bool = False,
    debug: bool = False,
) -> FormatOptions:
    """Build FormatOptions from CLI options."""
    return FormatOptions(
        pretty_print=pretty,
        truncate=truncate,
        mask_secrets=not show_secrets,
        debug=debug,
    )


async def _execute(
    request: ApiRequest,
    variables: list[EnvironmentVariable],
    timeout: float | None,
    debug: bool,
) -> ExecutionResult:
    """Send one request through a fresh executor."""
    async with HttpExecutor(timeout=timeout, debug=debug) as executor:
        service = ExecutionService(executor, debug=debug)
        return await service.send(request, variables)


def list_requests(data_dir: DataDirOption = None) -> None:
    """List collections and their requests."""
    try:
        collections = _get_repository(data_dir).load_collections()
        if not collections:
            err_console.print("No collections yet. Save one with: apistudio add <name> <url>")
            raise typer.Exit(1)
        console.print(FormatterService().format_collections(collections), markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None


def add_request(
    name: Annotated[str, typer.Argument(help="Request name")],
    url: Annotated[str, typer.Argument(help="URL template, may contain {{variables}}")],
    method: MethodOption = HttpMethod.GET,
    header: HeaderOption = None,
    param: ParamOption = None,
    body: BodyOption = None,
    body_type: BodyTypeOption = "json",
    bearer: BearerOption = None,
    basic: BasicOption = None,
    api_key: ApiKeyOption = None,
    collection: CollectionOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Save a new request."""
    try:
        headers = [Header(key=k, value=v) for k, v in (_split_pair(h, ":", "header") for h in header or [])]
        params = [Param(key=k, value=v) for k, v in (_split_pair(p, "=", "param") for p in param or [])]
        request = collection_service.new_request(name).model_copy(
            update={
                "method": method,
                "url": url,
                "headers": headers,
                "params": params,
                "body": _build_body(body, body_type),
                "auth": _build_auth(bearer, basic, api_key),
            }
        )

        repo = _get_repository(data_dir)
        collections = repo.load_collections()
        collection_id = None
        if collection is not None:
            try:
                collection_id = collection_service.find_collection(collections, collection).id
            except ValueError:
                created = collection_service.new_collection(collection)
                collections = [*collections, created]
                collection_id = created.id

        collections = collection_service.save_request(
            collections,
            request,
            collection_id,
            default_collection=settings.default_collection,
        )
        repo.save_collections(collections)
        console.print(f"Saved {request.method} {request.name} ({request.id})", markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


def remove_request(
    request_ref: Annotated[str, typer.Argument(help="Request name or ID")],
    collection: CollectionOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Delete a saved request."""
    try:
        repo = _get_repository(data_dir)
        collections = repo.load_collections()
        _, request = collection_service.find_request(collections, request_ref, collection)
        repo.save_collections(collection_service.delete_request(collections, request.id))
        console.print(f"Removed {request.name} ({request.id})", markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


def show_request(
    request_ref: Annotated[str, typer.Argument(help="Request name or ID")],
    collection: CollectionOption = None,
    env: EnvOption = None,
    pretty: PrettyOption = False,
    show_secrets: ShowSecretsOption = False,
    data_dir: DataDirOption = None,
) -> None:
    """Show a request as it would be sent."""
    try:
        repo = _get_repository(data_dir)
        _, request = collection_service.find_request(repo.load_collections(), request_ref, collection)
        materialized = materialize(request, _load_variables(repo, env))
        format_options = _build_format_options(pretty, show_secrets=show_secrets)
        secret_headers = [request.auth.key] if isinstance(request.auth, ApiKeyAuth) else []
        console.print(
            FormatterService().format_materialized(materialized, format_options, secret_headers),
            markup=False,
        )

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


def send_request(
    request_ref: Annotated[str, typer.Argument(help="Request name or ID")],
    collection: CollectionOption = None,
    env: EnvOption = None,
    timeout: TimeoutOption = None,
    pretty: PrettyOption = False,
    truncate: TruncateOption = None,
    show_secrets: ShowSecretsOption = False,
    debug: DebugOption = False,
    data_dir: DataDirOption = None,
) -> None:
    """Send a saved request and show the response."""
    try:
        repo = _get_repository(data_dir)
        _, request = collection_service.find_request(repo.load_collections(), request_ref, collection)
        variables = _load_variables(repo, env)
        format_options = _build_format_options(pretty, truncate, show_secrets, debug)
        effective_timeout = timeout if timeout is not None else settings.timeout

        if debug:
            err_console.print("[dim][DEBUG] Debug mode enabled[/dim]")
            err_console.print(
                f"[dim][DEBUG] Sending {request.id} with {len(variables)} variable(s), "
                f"timeout={effective_timeout}[/dim]"
            )

        result = asyncio.run(_execute(request, variables, effective_timeout, debug))

        if result.error is not None:
            err_console.print(f"Error: {result.error}", markup=False)
            raise typer.Exit(1)

        console.print(FormatterService().format_result(result, format_options), markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


def generate_code(
    request_ref: Annotated[str, typer.Argument(help="Request name or ID")],
    target: TargetOption = CodeTarget.CURL,
    collection: CollectionOption = None,
    env: EnvOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Generate a code snippet for a saved request."""
    try:
        repo = _get_repository(data_dir)
        _, request = collection_service.find_request(repo.load_collections(), request_ref, collection)
        console.print(
            emit(target, request, _load_variables(repo, env)),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


@env_app.command("list")
def list_environments(
    show_secrets: ShowSecretsOption = False,
    data_dir: DataDirOption = None,
) -> None:
    """List environments and their variables."""
    try:
        environments = _get_repository(data_dir).load_environments()
        if not environments:
            err_console.print("No environments yet. Create one with: apistudio env add <name>")
            raise typer.Exit(1)
        console.print(
            FormatterService().format_environments(environments, mask_secrets=not show_secrets),
            markup=False,
        )

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None


@env_app.command("add")
def add_environment(
    name: Annotated[str, typer.Argument(help="Environment name")],
    var: Annotated[
        list[str] | None,
        typer.Option("--var", "-v", help="Variable as 'key=value' (repeatable)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Create an environment."""
    try:
        draft = environment_service.begin_edit()
        draft = draft.model_copy(
            update={"environment": draft.environment.model_copy(update={"name": name})}
        )
        for item in var or []:
            key, value = _split_pair(item, "=", "variable")
            draft = environment_service.set_variable(draft, key, value)

        repo = _get_repository(data_dir)
        environment = environment_service.commit(draft)
        repo.save_environments(
            environment_service.save_environment(repo.load_environments(), environment)
        )
        console.print(f"Created environment {environment.name} ({environment.id})", markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


@env_app.command("set")
def set_environment_variable(
    env: Annotated[str, typer.Argument(help="Environment name or ID")],
    key: Annotated[str, typer.Argument(help="Variable name")],
    value: Annotated[str, typer.Argument(help="Variable value")],
    disabled: Annotated[
        bool,
        typer.Option("--disabled", help="Store the variable but exclude it from substitution"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Set a variable in an environment."""
    try:
        repo = _get_repository(data_dir)
        environments = repo.load_environments()
        draft = environment_service.begin_edit(environment_service.find_environment(environments, env))
        draft = environment_service.set_variable(draft, key, value, enabled=not disabled)
        repo.save_environments(
            environment_service.save_environment(environments, environment_service.commit(draft))
        )
        console.print(f"Set {key} in {draft.environment.name}", markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


@env_app.command("activate")
def activate_environment(
    env: Annotated[str, typer.Argument(help="Environment name or ID")],
    data_dir: DataDirOption = None,
) -> None:
    """Make an environment the active one."""
    try:
        repo = _get_repository(data_dir)
        environments = repo.load_environments()
        environment = environment_service.find_environment(environments, env)
        repo.save_environments(environment_service.activate(environments, environment.id))
        console.print(f"Active environment: {environment.name}", markup=False)

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None
    except ValueError as e:
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from None


@env_app.command("deactivate")
def deactivate_environments(data_dir: DataDirOption = None) -> None:
    """Deactivate all environments."""
    try:
        repo = _get_repository(data_dir)
        repo.save_environments(environment_service.activate(repo.load_environments(), None))
        console.print("No active environment")

    except StorageError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(1) from None


def show_help(
    command: Annotated[
        str | None,
        typer.Argument(help="Command to get help for"),
    ] = None,
) -> None:
    """Show detailed help and examples."""
    help_text = get_help(command)
    console.print(help_text, markup=False)

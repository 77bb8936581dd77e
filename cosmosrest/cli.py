"""
cosmosrest Command-Line Interface

Provides commands to create, read, replace, delete and query documents
against a Cosmos DB endpoint or the LocalZure emulator.

Author: LocalZure Team
Date: 2025-12-18
"""

import sys
import json
import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import click
from pydantic import ValidationError

from cosmosrest import __version__
from cosmosrest.auth.exceptions import AuthenticationError
from cosmosrest.core.config_manager import ClientConfig, ConfigManager
from cosmosrest.core.logging_config import configure_logging, get_logger
from cosmosrest.documents.client import DocumentClient
from cosmosrest.documents.constants import ConsistencyLevel, IndexingDirective
from cosmosrest.documents.exceptions import CosmosClientError
from cosmosrest.documents.models import Query, QueryParameter
from cosmosrest.documents.options import (
    CreateDocumentOptions,
    DeleteDocumentOptions,
    GetDocumentOptions,
    ReplaceDocumentOptions,
    default_query_document_options,
)
from cosmosrest.documents.transport import DocumentTransport, create_http_transport

logger = get_logger("cosmosrest.cli")

TransportFactory = Callable[[ClientConfig], DocumentTransport]


@click.group()
@click.version_option(version=__version__, prog_name="cosmosrest")
@click.option(
    "--endpoint",
    help="Account endpoint URL (default: https://localhost:8081)",
)
@click.option(
    "--key",
    "master_key",
    help="Base64-encoded master key",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def cli(ctx, endpoint: Optional[str], master_key: Optional[str], config: Optional[Path], log_level: Optional[str]):
    """
    cosmosrest - Cosmos DB document REST client

    Work with documents of a Cosmos DB account from the command line.
    """
    ctx.ensure_object(dict)

    overrides: Dict[str, Any] = {}
    if endpoint:
        overrides["endpoint"] = endpoint
    if master_key:
        overrides["master_key"] = master_key
    if log_level:
        overrides["logging"] = {"level": log_level.upper()}

    try:
        client_config = ConfigManager().load(
            config_file=str(config) if config else None,
            cli_overrides=overrides,
        )
    except (ValidationError, ValueError) as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    configure_logging(client_config.logging)

    ctx.obj["config"] = client_config
    ctx.obj.setdefault("transport_factory", create_http_transport)


@cli.group()
def docs():
    """Document operations."""
    pass


def _load_json(value: str) -> Any:
    """Parse a JSON argument, reading stdin for '-'."""
    text = sys.stdin.read() if value == "-" else value
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}")


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, default=str))


def _run(ctx: click.Context, operation: Callable[[DocumentClient], Awaitable[Any]]) -> Any:
    """Run one client operation, turning client errors into exit status 1."""
    config: ClientConfig = ctx.obj["config"]
    factory: TransportFactory = ctx.obj["transport_factory"]

    async def runner() -> Any:
        transport = factory(config)
        try:
            return await operation(DocumentClient(transport))
        finally:
            aclose = getattr(transport, "aclose", None)
            if aclose is not None:
                await aclose()

    try:
        return asyncio.run(runner())
    except (CosmosClientError, AuthenticationError) as e:
        logger.debug(f"Operation failed: {e}", exc_info=True)
        click.echo(f"[ERROR] {e.error_code}: {e.message}", err=True)
        sys.exit(1)


@docs.command()
@click.argument("database")
@click.argument("collection")
@click.argument("document")
@click.option("--partition-key", default="", help="Partition key value")
@click.option("--upsert", is_flag=True, help="Replace the document if it exists")
@click.option(
    "--indexing-directive",
    type=click.Choice([d.value for d in IndexingDirective]),
    help="Include or exclude the document from indexing",
)
@click.option("--pre-trigger", "pre_triggers", multiple=True, help="Pre-trigger to run (repeatable)")
@click.option("--post-trigger", "post_triggers", multiple=True, help="Post-trigger to run (repeatable)")
@click.pass_context
def create(ctx, database: str, collection: str, document: str, partition_key: str, upsert: bool,
           indexing_directive: Optional[str], pre_triggers: tuple, post_triggers: tuple):
    """
    Create a document.

    DOCUMENT is a JSON object, or '-' to read it from stdin.

    Examples:
        cosmosrest docs create shop orders '{"id": "1", "customer": "c1"}' --partition-key c1
    """
    body = _load_json(document)
    options = CreateDocumentOptions(
        partition_key_value=partition_key,
        is_upsert=upsert,
        indexing_directive=indexing_directive,
        pre_triggers_include=list(pre_triggers),
        post_triggers_include=list(post_triggers),
    )

    resource = _run(ctx, lambda client: client.create_document(database, collection, body, options))
    _echo_json(resource.model_dump(by_alias=True))


@docs.command()
@click.argument("database")
@click.argument("collection")
@click.argument("document_id")
@click.option("--partition-key", default="", help="Partition key value")
@click.option("--if-none-match", is_flag=True, help="Conditional read")
@click.option(
    "--consistency-level",
    type=click.Choice([c.value for c in ConsistencyLevel]),
    help="Consistency level for this read",
)
@click.option("--session-token", default="", help="Session token")
@click.pass_context
def get(ctx, database: str, collection: str, document_id: str, partition_key: str,
        if_none_match: bool, consistency_level: Optional[str], session_token: str):
    """
    Read a document.

    Examples:
        cosmosrest docs get shop orders 1 --partition-key c1
    """
    options = GetDocumentOptions(
        if_none_match=if_none_match,
        partition_key_value=partition_key,
        consistency_level=consistency_level,
        session_token=session_token,
    )

    document = _run(ctx, lambda client: client.get_document(database, collection, document_id, options))
    _echo_json(document)


@docs.command()
@click.argument("database")
@click.argument("collection")
@click.argument("document_id")
@click.argument("document")
@click.option("--partition-key", default="", help="Partition key value")
@click.option("--if-match", default="", help="ETag the stored document must carry")
@click.option(
    "--indexing-directive",
    type=click.Choice([d.value for d in IndexingDirective]),
    help="Include or exclude the document from indexing",
)
@click.option("--pre-trigger", "pre_triggers", multiple=True, help="Pre-trigger to run (repeatable)")
@click.option("--post-trigger", "post_triggers", multiple=True, help="Post-trigger to run (repeatable)")
@click.pass_context
def replace(ctx, database: str, collection: str, document_id: str, document: str, partition_key: str,
            if_match: str, indexing_directive: Optional[str], pre_triggers: tuple, post_triggers: tuple):
    """
    Replace a document.

    Examples:
        cosmosrest docs replace shop orders 1 '{"id": "1", "customer": "c1"}' --if-match '"etag"'
    """
    body = _load_json(document)
    options = ReplaceDocumentOptions(
        partition_key_value=partition_key,
        indexing_directive=indexing_directive,
        pre_triggers_include=list(pre_triggers),
        post_triggers_include=list(post_triggers),
        if_match=if_match,
    )

    resource = _run(
        ctx, lambda client: client.replace_document(database, collection, document_id, body, options)
    )
    _echo_json(resource.model_dump(by_alias=True))


@docs.command()
@click.argument("database")
@click.argument("collection")
@click.argument("document_id")
@click.option("--partition-key", default="", help="Partition key value")
@click.option("--pre-trigger", "pre_triggers", multiple=True, help="Pre-trigger to run (repeatable)")
@click.option("--post-trigger", "post_triggers", multiple=True, help="Post-trigger to run (repeatable)")
@click.pass_context
def delete(ctx, database: str, collection: str, document_id: str, partition_key: str,
           pre_triggers: tuple, post_triggers: tuple):
    """
    Delete a document.

    Examples:
        cosmosrest docs delete shop orders 1 --partition-key c1
    """
    options = DeleteDocumentOptions(
        partition_key_value=partition_key,
        pre_triggers_include=list(pre_triggers),
        post_triggers_include=list(post_triggers),
    )

    _run(ctx, lambda client: client.delete_document(database, collection, document_id, options))
    click.echo(f"[OK] Document '{document_id}' deleted")


@docs.command()
@click.argument("database")
@click.argument("collection")
@click.argument("sql")
@click.option("--param", "params", multiple=True, help="Query parameter as @name=JSON (repeatable)")
@click.option("--partition-key", default="", help="Restrict the query to one partition")
@click.option("--max-item-count", default=0, type=int, help="Page size")
@click.option("--continuation", default="", help="Continuation token of the page to fetch")
@click.option("--cross-partition", is_flag=True, help="Enable cross-partition query")
@click.option(
    "--consistency-level",
    type=click.Choice([c.value for c in ConsistencyLevel]),
    help="Consistency level for this query",
)
@click.option("--session-token", default="", help="Session token")
@click.pass_context
def query(ctx, database: str, collection: str, sql: str, params: tuple, partition_key: str,
          max_item_count: int, continuation: str, cross_partition: bool,
          consistency_level: Optional[str], session_token: str):
    """
    Query documents with SQL.

    Examples:
        cosmosrest docs query shop orders "SELECT * FROM c WHERE c.customer = @c" --param @c='"c1"'
    """
    parameters = []
    for param in params:
        if "=" not in param:
            raise click.BadParameter(f"Expected @name=value, got: {param}")
        name, value = param.split("=", 1)
        parameters.append(QueryParameter(name=name, value=_load_json(value)))

    options = default_query_document_options(
        partition_key_value=partition_key,
        max_item_count=max_item_count,
        continuation=continuation,
        enable_cross_partition=cross_partition,
        consistency_level=consistency_level,
        session_token=session_token,
    )
    qry = Query(query=sql, parameters=parameters)

    response = _run(ctx, lambda client: client.query_documents(database, collection, qry, options=options))
    _echo_json({
        "Documents": response.documents,
        "_count": response.count,
        "continuation": response.continuation,
    })


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()

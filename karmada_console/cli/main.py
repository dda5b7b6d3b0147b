"""Click commands: run the API server or print an application resource tree."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
from kubernetes_asyncio.client.rest import ApiException  # type: ignore[import-untyped]

from karmada_console.config import load_config
from karmada_console.errors import ConsoleError
from karmada_console.models.config import ConsoleConfig
from karmada_console.observability.logging import setup_logging


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override KARMADA_CONSOLE_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Karmada console backend."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    if log_level:
        config.log.level = log_level.lower()
    ctx.obj = config


@cli.command()
@click.option("--port", type=int, default=None, help="Override KARMADA_CONSOLE_API_PORT.")
@click.pass_obj
def serve(config: ConsoleConfig, port: int | None) -> None:
    """Run the REST API until SIGTERM/SIGINT."""
    from karmada_console.app import main

    if port is not None:
        config.api.port = port
    asyncio.run(main(config))


@cli.command()
@click.argument("cluster")
@click.argument("application")
@click.option("--flat", is_flag=True, help="Print one line per node instead of nested JSON.")
@click.pass_obj
def tree(config: ConsoleConfig, cluster: str, application: str, flat: bool) -> None:
    """Print the resource tree of APPLICATION on member CLUSTER."""
    setup_logging(config.log.level)
    try:
        result = asyncio.run(_load_tree(config, cluster, application))
    except ConsoleError as exc:
        raise click.ClickException(str(exc)) from exc
    except ApiException as exc:
        raise click.ClickException(f"member cluster API returned {exc.status}: {exc.reason}") from exc
    if not flat:
        click.echo(json.dumps(result["resources"], indent=2))
        return
    for depth, node in _walk(result["resources"]):
        health = node.get("health", {}).get("status", "")
        suffix = f" ({health})" if health else ""
        click.echo(f"{'  ' * depth}{node['kind']}/{node['name']} {node['status']}{suffix}")


async def _load_tree(config: ConsoleConfig, cluster: str, application: str) -> dict[str, Any]:
    from karmada_console.argocd import ApplicationService
    from karmada_console.kube import load_client_factory

    factory = await load_client_factory(config.karmada)
    async with factory.member(cluster) as client:
        return await ApplicationService(config).get_application_detail(client, application)


def _walk(nodes: list[dict[str, Any]], depth: int = 0) -> list[tuple[int, dict[str, Any]]]:
    rows: list[tuple[int, dict[str, Any]]] = []
    for node in nodes:
        rows.append((depth, node))
        rows.extend(_walk(node.get("children", []), depth + 1))
    return rows

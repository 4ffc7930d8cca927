"""CLI entry point for api-tag-client."""

import json
import logging
from pathlib import Path
from typing import Any

import click

from api_tag_client.client import ApiClient
from api_tag_client.config import ClientConfig, load_config
from api_tag_client.errors import ApiClientError
from api_tag_client.params.classifier import ClassifiedParameters, ParamsBuilder


def _split_pairs(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    pairs = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'", param_hint=option)
        pairs.append((name, value))
    return pairs


def _collect_params(
    path_params: tuple[str, ...],
    queries: tuple[str, ...],
    headers: tuple[str, ...],
    cookies: tuple[str, ...],
    body: str | None,
) -> ClassifiedParameters:
    builder = ParamsBuilder()
    for name, value in _split_pairs(path_params, "--path-param"):
        builder.path(name, value)
    for name, value in _split_pairs(queries, "--query"):
        builder.query(name, value)
    for name, value in _split_pairs(headers, "--header"):
        builder.header(name, value)
    for name, value in _split_pairs(cookies, "--cookie"):
        builder.cookie(name, value)
    if body is not None:
        try:
            builder.body(json.loads(body))
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--body")
    return builder.build()


def _make_client(base_url: str, config_path: Path | None) -> ApiClient:
    try:
        config = load_config(config_path) if config_path else ClientConfig.from_env()
    except ApiClientError as e:
        raise click.ClickException(str(e))
    return ApiClient("cli", base_url, config=config)


def request_options(func):
    """Options shared by ``build`` and ``call``."""
    options = [
        click.argument("path"),
        click.option("--base-url", required=True, help="Base URL the path is joined to."),
        click.option("-X", "--method", default="", help="HTTP method (default GET)."),
        click.option("-p", "--path-param", "path_params", multiple=True, help="Path placeholder value, NAME=VALUE."),
        click.option("-q", "--query", "queries", multiple=True, help="Query parameter, NAME=VALUE."),
        click.option("-H", "--header", "headers", multiple=True, help="Request header, NAME=VALUE."),
        click.option("-b", "--cookie", "cookies", multiple=True, help="Cookie, NAME=VALUE."),
        click.option("--body", default=None, help="Request body as a JSON document."),
        click.option("--consume", default="", help="Request body content type."),
        click.option("--produce", default="", help="Expected response content type."),
        click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML client configuration."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Tag Client — build and send HTTP requests from tagged parameters."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@request_options
def build(path: str, base_url: str, method: str, path_params, queries, headers, cookies,
          body: str | None, consume: str, produce: str, config_path: Path | None):
    """Print the resolved request without sending it."""
    params = _collect_params(path_params, queries, headers, cookies, body)
    with _make_client(base_url, config_path) as client:
        try:
            req = client.build(method, path, params, consume, produce)
        except ApiClientError as e:
            raise click.ClickException(str(e))
    click.echo(req.model_dump_json(indent=2))


@main.command()
@request_options
def call(path: str, base_url: str, method: str, path_params, queries, headers, cookies,
         body: str | None, consume: str, produce: str, config_path: Path | None):
    """Send the request and print the decoded response."""
    params = _collect_params(path_params, queries, headers, cookies, body)
    with _make_client(base_url, config_path) as client:
        try:
            result: Any = client.invoke(Any, method, path, params, consume, produce)
        except ApiClientError as e:
            raise click.ClickException(str(e))
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))

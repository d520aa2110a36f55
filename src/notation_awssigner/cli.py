"""
Notation plugin executable

Implements the plugin's command-line surface: Notation invokes
``notation-com.amazonaws.signer.notation.plugin <command>`` with a JSON
request on stdin and reads the JSON response from stdout. Failures are
written to stderr as a contract error body with exit code 1.
"""

import json
import sys
from typing import Callable, Optional, Type, TypeVar

import click
import pydantic

from notation_awssigner.contract import (
    PLUGIN_NAME,
    ContractModel,
    GenerateEnvelopeRequest,
    VerifySignatureRequest,
)
from notation_awssigner.debuglog import close_debug_logging, configure_debug_logging, debug_enabled
from notation_awssigner.exceptions import GenericError, PluginError, ValidationError
from notation_awssigner.plugin import AWSSignerPlugin
from notation_awssigner.version import __version__

RequestT = TypeVar("RequestT", bound=ContractModel)


def _read_request(model: Type[RequestT]) -> RequestT:
    """Parse the JSON request on stdin."""
    data = sys.stdin.read()
    try:
        return model.model_validate_json(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"failed to parse {model.__name__}: {exc}") from exc


def _run(operation: Callable[[], Optional[ContractModel]]) -> None:
    """Run an operation and write its response or error in contract form."""
    try:
        response = operation()
    except PluginError as exc:
        click.echo(json.dumps(exc.to_dict()), err=True)
        click.get_current_context().exit(1)
    except Exception as exc:
        click.echo(json.dumps(GenericError(str(exc)).to_dict()), err=True)
        click.get_current_context().exit(1)
    if response is not None:
        click.echo(json.dumps(response.to_wire()))


@click.group()
@click.version_option(__version__, prog_name=PLUGIN_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """AWS Signer plugin for Notation."""
    if ctx.obj is None:
        ctx.obj = AWSSignerPlugin()
    if debug_enabled():
        handler = configure_debug_logging()
        ctx.call_on_close(lambda: close_debug_logging(handler))


@cli.command("get-plugin-metadata")
@click.pass_obj
def get_plugin_metadata(plugin: AWSSignerPlugin) -> None:
    """Print the plugin descriptor."""
    _run(plugin.get_metadata)


@cli.command("generate-envelope")
@click.pass_obj
def generate_envelope(plugin: AWSSignerPlugin) -> None:
    """Sign a payload with AWS Signer."""
    _run(lambda: plugin.generate_envelope(_read_request(GenerateEnvelopeRequest)))


@cli.command("verify-signature")
@click.pass_obj
def verify_signature(plugin: AWSSignerPlugin) -> None:
    """Check trusted identity and revocation status of a signature."""
    _run(lambda: plugin.verify_signature(_read_request(VerifySignatureRequest)))


@cli.command("generate-signature")
@click.pass_obj
def generate_signature(plugin: AWSSignerPlugin) -> None:
    """Not supported by this plugin."""
    _run(plugin.generate_signature)


@cli.command("describe-key")
@click.pass_obj
def describe_key(plugin: AWSSignerPlugin) -> None:
    """Not supported by this plugin."""
    _run(plugin.describe_key)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

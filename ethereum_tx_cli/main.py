"""
Command line tools to decode, encode and inspect Ethereum transactions.
"""

import json
from pathlib import Path
from typing import Any, Optional, TextIO

import click

from ethereum_tx_config import EnvConfig, apply_config, create_default_config
from ethereum_tx_exceptions import TransactionFieldError
from ethereum_tx_logging import LogLevel, configure_logging, get_logger
from ethereum_tx_types import Capability, TransactionType, from_json, from_serialized, supports

logger = get_logger(__name__)


def values_to_json(values: Any) -> Any:
    """Render a values array with every byte string as a hex string."""
    if isinstance(values, (list, tuple)):
        return [values_to_json(value) for value in values]
    return "0x" + bytes(values).hex()


def load_transaction(json_file: TextIO):
    """Read a JSON transaction from `json_file` and build it."""
    try:
        data = json.load(json_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {json_file.name}: {e}") from e
    try:
        return from_json(data)
    except TransactionFieldError as e:
        raise click.ClickException(str(e)) from e


def echo_json(data: Any) -> None:
    """Print `data` as indented JSON."""
    click.echo(json.dumps(data, indent=2))


def parse_enum(enum_class, value: str):
    """Parse an enum member given by name (case insensitive) or by number."""
    try:
        return enum_class(int(value, 0))
    except ValueError:
        pass
    try:
        return enum_class[value.upper()]
    except KeyError:
        names = ", ".join(member.name for member in enum_class)
        raise click.BadParameter(f"'{value}' is not one of: {names} or a number.") from None


@click.group("ethtx", context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (env.yaml) providing transaction defaults and logging.",
)
@click.option(
    "--log-level",
    default=None,
    help="Log level (DEBUG, VERBOSE, INFO, WARNING, ERROR or a number).",
)
def ethtx(config_path: Optional[Path], log_level: Optional[str]):
    """
    Decode, encode and inspect legacy, access list (EIP-2930) and fee market
    (EIP-1559) transactions.
    """
    if log_level is not None:
        try:
            LogLevel.from_cli(log_level)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level") from e
    if config_path is not None:
        try:
            config = EnvConfig(config_path)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        if log_level is not None:
            config.logging.log_level = log_level
        apply_config(config)
    else:
        configure_logging(log_level=log_level or "WARNING")


@ethtx.command(short_help="Decode a serialized transaction into JSON.")
@click.argument("hex_string")
def decode(hex_string: str):
    """
    Decode HEX_STRING, a legacy RLP list or a typed transaction envelope, and
    print the transaction as JSON along with its hash.

    Example:

        ethtx decode 0xe9808504a817c800825208943535353535353535353535353535353535353535880de0b6b3a764000080
    """
    try:
        transaction = from_serialized(hex_string)
    except TransactionFieldError as e:
        raise click.ClickException(str(e)) from e
    logger.verbose(f"decoded {transaction.transaction_type.name} transaction")
    echo_json({"transaction": transaction.to_json(), "hash": transaction.hash.hex()})


@ethtx.command(short_help="Serialize a JSON transaction.")
@click.argument("json_file", type=click.File("r"))
def encode(json_file: TextIO):
    """
    Build the transaction in JSON_FILE (use `-` for stdin) and print its
    serialized form as a hex string.
    """
    transaction = load_transaction(json_file)
    click.echo(transaction.serialized.hex())


@ethtx.command(short_help="Print the values array of a JSON transaction.")
@click.argument("json_file", type=click.File("r"))
def values(json_file: TextIO):
    """
    Build the transaction in JSON_FILE (use `-` for stdin) and print its
    values array, the ordered fields handed to the wire codec.
    """
    transaction = load_transaction(json_file)
    echo_json(values_to_json(transaction.to_values_array()))


@ethtx.command("supports", short_help="Check whether a transaction type supports a capability.")
@click.argument("transaction_type")
@click.argument("capability")
def supports_command(transaction_type: str, capability: str):
    """
    Print `true` if TRANSACTION_TYPE supports CAPABILITY, `false` otherwise.

    Both can be given by name or by number, e.g. `ethtx supports 2 1559` or
    `ethtx supports fee_market eip1559_fee_market`.
    """
    ty = parse_enum(TransactionType, transaction_type)
    cap = parse_enum(Capability, capability)
    click.echo("true" if supports(ty, cap) else "false")


@ethtx.command("make-config", short_help="Generate the default configuration file (env.yaml).")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
def make_config(path: Optional[Path]):
    """
    Generate the default configuration file at PATH (default: `env.yaml`, or
    the `ETHEREUM_TX_CONFIG` environment variable).

    An existing file is not overridden.
    """
    try:
        created = create_default_config(path)
    except FileExistsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(click.style(f"Configuration file created at: {created}", fg="green"))

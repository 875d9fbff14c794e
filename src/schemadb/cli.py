"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from schemadb.configuration import ConfigurationError, load_configuration
from schemadb.database import Database
from schemadb.document_import import DocumentImportError, read_documents
from schemadb.document_normalization import DocumentShapeError, NotNullConstraintError
from schemadb.document_store import DocumentStoreError
from schemadb.model_compilation import ReservedFieldError
from schemadb.model_registry import RedefinitionError
from schemadb.property_rules import PropertyDeclarationError

_DEFINITION_ERRORS = (
    ConfigurationError,
    PropertyDeclarationError,
    RedefinitionError,
    ReservedFieldError,
    DocumentStoreError,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schemadb")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Schema-enforcing document store utility."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="check-config")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON model configuration file",
)
def check_config(config_path: str) -> None:
    """Validate the configuration by declaring every model on an empty database."""
    database = _load_database(config_path)
    for model_name in database.models:
        model = database.get_model(model_name)
        assert model is not None
        properties = ", ".join(model.definition.property_names)
        mode = "strict" if model.definition.strict else "non-strict"
        click.echo(f"{model_name} ({mode}): {properties}")


@cli.command(name="import")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON model configuration file",
)
@click.option("--model", "model_name", required=True, help="Name of the model to insert into")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="JSON file (object or array) or .xlsx workbook with one document per row",
)
@click.option("--sheet", "sheet_name", required=False, help="Worksheet to read from a workbook")
@click.option(
    "--snapshot",
    "snapshot_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path for writing the serialized database snapshot",
)
def import_documents(
    config_path: str,
    model_name: str,
    input_path: str,
    sheet_name: str | None,
    snapshot_path: str | None,
) -> None:
    """Insert documents into one model as a single all-or-nothing batch."""
    database = _load_database(config_path)
    model = database.get_model(model_name)
    if model is None:
        raise CliError(f"Model '{model_name}' is not declared in {config_path}.")

    try:
        documents = read_documents(input_path, sheet_name=sheet_name)
        model.insert(list(documents))
    except (
        DocumentImportError,
        DocumentShapeError,
        NotNullConstraintError,
        DocumentStoreError,
    ) as exc:
        raise CliError(str(exc)) from exc

    if snapshot_path is not None:
        try:
            Path(snapshot_path).write_text(database.serialize(), encoding="utf-8")
        except OSError as exc:
            raise CliError(str(exc)) from exc
    click.echo(f"inserted {len(documents)} document(s) into {model_name}")


def _load_database(config_path: str) -> Database:
    try:
        configuration = load_configuration(config_path)
        database = Database(configuration.database.filename, configuration.database.options)
        database.define_from_configuration(configuration)
    except _DEFINITION_ERRORS as exc:
        raise CliError(str(exc)) from exc
    return database


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

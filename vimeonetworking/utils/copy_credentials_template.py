"""
Command line utility writing Vimeo credentials templates to user-defined paths
"""

import json
from pathlib import Path

import click
import dotenv
import toml

default_path = Path.home() / ".vimeo/credentials.toml"

default_configuration = {
    "VIMEO_CLIENT_ID": "",
    "VIMEO_CLIENT_SECRET": "",
    "VIMEO_ACCESS_TOKEN": "",
    "VIMEO_API_VERSION": "3.4",
    "VIMEO_SCOPES": "public",
}


def _should_write(path: Path) -> bool:
    click.echo(f"Try to write credentials template to {path}")

    if path.exists():
        click.echo(f"{path} already exists")
        return False
    return True


def _written(path: Path) -> None:
    click.echo(f"Credentials file written to {path}")
    click.echo("Please edit it to insert your credentials")


def write_json(json_path: Path) -> None:
    """
    Write template JSON credentials file.

    Parameters
    ----------
    json_path : Path
        Path to output JSON file.
    """
    if not _should_write(json_path):
        return

    with json_path.open("w") as f:
        json.dump(default_configuration, f, indent=2)

    _written(json_path)


def write_toml(toml_path: Path) -> None:
    """
    Write template TOML credentials file.

    Parameters
    ----------
    toml_path : Path
        Path to output TOML file.
    """
    if not _should_write(toml_path):
        return

    with toml_path.open("w") as f:
        toml.dump(default_configuration, f)

    _written(toml_path)


def write_env(env_path: Path) -> None:
    """
    Write template .env credentials file.

    Parameters
    ----------
    env_path : Path
        Path to output .env file.
    """
    if not _should_write(env_path):
        return

    env_path.touch()
    for key, value in default_configuration.items():
        dotenv.set_key(str(env_path), key, value, quote_mode="always")

    _written(env_path)


@click.command(help="Copy Vimeo credentials templates in all accepted formats")
@click.option(
    "--json",
    "json_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output JSON file containing the credentials keys (but no values)",
)
@click.option(
    "--toml",
    "toml_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output TOML file containing the credentials keys (but no values)",
)
@click.option(
    "--env",
    "env_path",
    type=click.Path(path_type=Path, exists=False),
    required=False,
    help="Path to the output .env file containing the credentials keys (but no values)",
)
@click.option(
    "--default",
    "default",
    is_flag=True,
    show_default=True,
    default=False,
    help=f"Copy the TOML template to {default_path}, with credential keys (and no values)",
)
def cli(json_path: Path, toml_path: Path, env_path: Path, default: bool) -> None:
    if json_path is not None:
        write_json(json_path=json_path)

    if toml_path is not None:
        write_toml(toml_path=toml_path)

    if env_path is not None:
        write_env(env_path=env_path)

    if default:
        default_path.parent.mkdir(exist_ok=True, parents=True)
        write_toml(toml_path=default_path)


if __name__ == "__main__":
    cli()

# cli.py
import json
import logging
import sys

import click

from uploads_api.config.settings import get_settings
from uploads_api.errors import NotFound, StorageUnavailable
from uploads_api.storage.artifacts import UploadDirectory
from uploads_api.storage.deletion import delete_file
from uploads_api.storage.listing import list_files

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Uploads API"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        print(f"  {key}: {value}")


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST setting)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT setting)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the API server"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info(f"Server is running on http://localhost:{port}")
    logger.info(f"Upload endpoint: http://localhost:{port}{settings.upload_path}")
    uvicorn.run(
        "uploads_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("list-files")
def list_files_command():
    """List uploaded files, hiding upload bookkeeping artifacts"""
    settings = get_settings()
    directory = UploadDirectory.from_settings(settings)

    try:
        files = list_files(directory, settings.api_prefix)
    except StorageUnavailable as e:
        click.echo(f"❌ {e.message}", err=True)
        sys.exit(1)

    for file in files:
        click.echo(json.dumps(file.model_dump(mode="json", by_alias=True)))


@cli.command("delete-file")
@click.argument("name")
def delete_file_command(name):
    """Delete a file and its upload bookkeeping artifacts"""
    settings = get_settings()
    directory = UploadDirectory.from_settings(settings)

    try:
        result = delete_file(directory, name)
    except NotFound:
        click.echo(f"❌ File not found: {name}", err=True)
        sys.exit(1)

    for removed in result.removed:
        click.echo(f"Deleted {removed}")
    for warning in result.warnings:
        click.echo(f"⚠️  Could not delete {warning.artifact}: {warning.error}", err=True)
    if result.clean:
        click.echo("✅ File deleted successfully")


if __name__ == "__main__":
    cli()

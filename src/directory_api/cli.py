# cli.py
import json
import logging
from pathlib import Path

import click
import pydantic

from directory_api.aws.clients import get_s3_client
from directory_api.config.settings import get_settings
from directory_api.database.local import add_user, init_db
from directory_api.s3.bucket_setup import apply_browser_cors, ensure_bucket
from directory_api.schemas import CreateUserRequest

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the User Directory API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  S3 Backend: {'LocalStack' if settings.is_localstack else 'AWS'}")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  S3 Endpoint: {settings.s3_endpoint}")
    click.echo(f"  S3 Public Endpoint: {settings.s3_public_endpoint}")
    click.echo(f"  Upload URL Expiry: {settings.upload_url_expires_in}s")
    click.echo(f"  View URL Expiry: {settings.view_url_expires_in}s")
    click.echo(f"  Max File Size: {settings.max_file_size_bytes} bytes")
    click.echo(f"  Database: {settings.database_path}")


@cli.command()
def init_bucket():
    """Create the photo bucket if needed and allow browser uploads (CORS)"""
    settings = get_settings()
    s3_client = get_s3_client(settings)

    created = ensure_bucket(settings.s3_bucket_name, settings.aws_region, s3_client=s3_client)
    if created:
        click.echo(f"Bucket '{settings.s3_bucket_name}' created.")
    else:
        click.echo(f"Bucket '{settings.s3_bucket_name}' already exists.")

    apply_browser_cors(settings.s3_bucket_name, s3_client=s3_client)
    click.echo("CORS configuration applied.")
    click.echo(f"S3 bucket '{settings.s3_bucket_name}' ready!")


@cli.command()
@click.argument("users_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def seed_users(users_file: Path):
    """Load users from a JSON array into the directory database"""
    settings = get_settings()
    init_db(settings.database_path)

    records = json.loads(users_file.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise click.BadParameter("expected a JSON array of users", param_hint="USERS_FILE")

    # Validate the whole file before writing anything
    users = []
    for index, record in enumerate(records):
        try:
            users.append(CreateUserRequest.model_validate(record))
        except pydantic.ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
                for error in e.errors()
            )
            raise click.BadParameter(f"invalid user record #{index + 1}: {problems}", param_hint="USERS_FILE")

    for user in users:
        user_id = add_user(
            name=user.name,
            email=user.email,
            address=user.address,
            phone_country_code=user.phone_number_country_code,
            phone_number=user.phone_number,
            document_photo=user.document_photo,
            db_path=settings.database_path,
        )
        logger.debug(f"Seeded user {user_id}")

    click.echo(f"Seeded {len(users)} users into {settings.database_path}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=9000, show_default=True, type=int, help="Port to listen on")
def serve(host: str, port: int):
    """Run the API server with uvicorn"""
    import uvicorn
    from directory_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


if __name__ == "__main__":
    cli()

"""
Lambda handler for the Directory API using Mangum.

Only /tmp is writable on Lambda, so the user database defaults to
/tmp/directory.db there unless DATABASE_PATH is set.
"""
from mangum import Mangum

from directory_api.config.settings import Settings, get_settings
from directory_api.main import create_app

LAMBDA_DATABASE_PATH = "/tmp/directory.db"


def lambda_settings() -> Settings:
    """Settings from the environment, with the database moved under /tmp when not configured."""
    settings = get_settings()
    if "database_path" not in settings.model_fields_set:
        settings = settings.model_copy(update={"database_path": LAMBDA_DATABASE_PATH})
    return settings


# Create FastAPI app
app = create_app(lambda_settings())

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")

# Export handler for Lambda runtime
lambda_handler = handler

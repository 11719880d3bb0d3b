import asyncio
import os

import click
from dotenv import load_dotenv

__version__ = "0.3.0"

from .logging_config import log_operation, setup_logger
from .utils.env import is_env_truthy

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for HTTP transports",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for HTTP transports",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option(
    "--youtrack-url",
    help="YouTrack URL (e.g., https://your-company.youtrack.cloud)",
)
@click.option("--youtrack-token", help="YouTrack permanent token")
@click.option(
    "--project-id",
    help="Restrict every project-scoped operation to this project (e.g., PROJ)",
)
@click.option(
    "--strict-scope/--no-strict-scope",
    default=None,
    help="Reject requests for other projects instead of overriding them",
)
@click.option(
    "--read-only",
    is_flag=True,
    default=False,
    help="Refuse every operation that changes YouTrack data",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    youtrack_url: str | None,
    youtrack_token: str | None,
    project_id: str | None,
    strict_scope: bool | None,
    read_only: bool,
) -> None:
    """YouTrack MCP Server - YouTrack issue tracking for MCP

    Exposes projects, issues, agile boards, the knowledge base and time
    tracking of a YouTrack instance as MCP tools.
    """
    # Load environment variables from file if specified, otherwise try default .env
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    logging_level = os.getenv("LOG_LEVEL", "INFO")
    if verbose >= 2:
        logging_level = "DEBUG"
    elif verbose == 1 or is_env_truthy("MCP_VERBOSE"):
        logging_level = "INFO"

    setup_logger(
        name="youtrack-mcp",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loaded environment from file: {env_file}")

        # Set environment variables from command line arguments if provided
        if youtrack_url:
            os.environ["YOUTRACK_URL"] = youtrack_url
        if youtrack_token:
            os.environ["YOUTRACK_TOKEN"] = youtrack_token
        if project_id:
            os.environ["PROJECT_ID"] = project_id
        if strict_scope is not None:
            os.environ["YOUTRACK_STRICT_SCOPE"] = str(strict_scope).lower()
        if read_only:
            os.environ["READ_ONLY_MODE"] = "true"
        if log_dir:
            os.environ["LOG_DIR"] = log_dir

        from .servers import main_mcp

        run_kwargs: dict = {"transport": transport}
        if transport != "stdio":
            run_kwargs.update({"host": host, "port": port})

        logger.info(f"Starting YouTrack MCP v{__version__} with {transport} transport")

    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer

from config.settings import settings

from .core.logs import setup_logging
from .plugins.plugin import Plugin

app = typer.Typer(
    name="bastion",
    help="Guild moderation and utility bot",
    add_completion=False,
)

ENV_TEMPLATE = """# Bastion configuration
DISCORD_TOKEN=your_discord_bot_token_here
DATABASE_URL=sqlite:///data/bot.db
ENVIRONMENT=development
LOG_LEVEL=INFO
LOG_DIR=log
READY_TIMEOUT_SECONDS=10
"""


@app.command()
def run(
    dev: bool = typer.Option(False, "--dev", help="Run in development mode"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Run the bot."""
    if dev:
        os.environ["ENVIRONMENT"] = "development"
        settings.environment = "development"

    setup_logging(log_level or ("DEBUG" if dev else settings.log_level))

    from .core.bot import BastionBot

    BastionBot().run()


@app.command()
def commands() -> None:
    """Print every command with its plugin, cooldown and aliases."""
    from plugins import COMMAND_TABLE

    for descriptor in sorted(COMMAND_TABLE, key=lambda d: (d.plugin.value, d.name)):
        aliases = f" (aliases: {', '.join(descriptor.aliases)})" if descriptor.aliases else ""
        cooldown = f" [{descriptor.cooldown_secs}s]" if descriptor.cooldown_secs else ""
        typer.echo(f"/{descriptor.name}{aliases}{cooldown} - {descriptor.plugin.display_name}")


@app.command()
def plugins() -> None:
    """List plugins and whether they are enabled by default."""
    typer.echo("📦 Plugins:")
    for plugin in Plugin:
        marker = "✅ default" if plugin.is_default else "➕ optional"
        typer.echo(f"  {plugin.value}: {marker}")


@app.command()
def db(
    action: str = typer.Argument(help="Action: create, reset"),
) -> None:
    """Database management commands."""

    async def run_db_command() -> None:
        from .database import db_manager

        try:
            if action == "create":
                await db_manager.create_tables()
                typer.echo("✅ Database tables created")
            elif action == "reset":
                if typer.confirm("⚠️  This will delete all data. Continue?"):
                    await db_manager.drop_tables()
                    await db_manager.create_tables()
                    typer.echo("✅ Database reset completed")
            else:
                typer.echo(f"Unknown action: {action}")
                raise typer.Exit(code=1)
        finally:
            await db_manager.close()

    asyncio.run(run_db_command())


@app.command()
def init(
    directory: Optional[str] = typer.Option(None, help="Directory to initialize"),
) -> None:
    """Write a .env template and create the data and log directories."""
    target_dir = Path(directory) if directory else Path.cwd()
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / "data").mkdir(exist_ok=True)
    (target_dir / "log").mkdir(exist_ok=True)

    env_file = target_dir / ".env"
    if env_file.exists():
        typer.echo(f"⚠️  {env_file} already exists, leaving it untouched")
    else:
        env_file.write_text(ENV_TEMPLATE)
        typer.echo(f"✅ Bot project initialized in {target_dir}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Database management script for the consulting desk.
Handles migrations, table creation and seeding of the demo user.
"""

import sys
from pathlib import Path

from alembic.config import Config
from alembic import command

from consultdesk.infrastructure.db.database import engine, SessionLocal
from consultdesk.infrastructure.db.models import create_all_tables
from consultdesk.infrastructure.db.seed import seed_demo_user


ALEMBIC_INI = Path(__file__).parent / "alembic.ini"


def alembic_config() -> Config:
    return Config(str(ALEMBIC_INI))


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Resetting database...")
        command.downgrade(alembic_config(), "base")
        command.upgrade(alembic_config(), "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(alembic_config())


def show_history():
    """Show migration history."""
    command.history(alembic_config())


def create_tables():
    """Create missing tables straight from the models, without Alembic."""
    create_all_tables(engine)
    print("Tables created.")


def seed():
    """Insert or refresh the demo user."""
    session = SessionLocal()
    try:
        user = seed_demo_user(session)
    finally:
        session.close()
    print(f"Demo user {user.id} ({user.name}) ready.")


COMMANDS = {
    "migrate": (run_migrations, "Run pending migrations"),
    "rollback": (rollback_migration, "Rollback last migration"),
    "reset": (reset_database, "Reset database (WARNING: drops all data)"),
    "current": (show_current_revision, "Show current revision"),
    "history": (show_history, "Show migration history"),
    "create-tables": (create_tables, "Create tables from the models"),
    "seed": (seed, "Seed the demo user"),
}


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print(f"  {'create [msg]':<15}- Create new migration")
        for name, (_, help_text) in COMMANDS.items():
            print(f"  {name:<15}- {help_text}")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        message = " ".join(sys.argv[2:]) if len(sys.argv) > 2 else "Auto-generated migration"
        create_migration(message)
    elif command_name in COMMANDS:
        COMMANDS[command_name][0]()
    else:
        print(f"Unknown command: {command_name}")
        sys.exit(1)


if __name__ == "__main__":
    main()

from __future__ import annotations

import importlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import AttendanceRules, Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_default_admin, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(app: Flask, settings) -> None:
    level = getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO)
    package_logger = logging.getLogger("attendance_hub")
    package_logger.setLevel(level)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    log_file = getattr(settings, "LOG_FILE", "")
    if log_file and not app.debug and not app.testing:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10240000, backupCount=10)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT + " [in %(pathname)s:%(lineno)d]"))
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)


def register_cli(app: Flask, container: Container, db_config: dict) -> None:
    @app.cli.command("init-db")
    @click.option("--seed/--no-seed", default=True, help="Create the default administrator.")
    def init_db_command(seed: bool):
        """Apply the schema and optionally create the default administrator."""
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        apply_schema(conn)
        click.echo(f"Schema ready ({len(list_tables(conn))} tables).")
        if seed:
            created = ensure_default_admin(conn)
            click.echo("Default administrator created." if created else "Administrator already present.")

    @app.cli.command("send-reminders")
    def send_reminders_command():
        """Send today's check-in reminder to every active employee without a record."""
        sent = container.reminder_policy.sweep(container.auth_service.list_active_ids())
        click.echo(f"{sent} reminder(s) sent.")


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(app, settings)
    logger = logging.getLogger(__name__)
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_default_admin(conn)

        container = build_container(db_config=db_config, rules=AttendanceRules.from_settings(settings))

    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_notifications(app, container)
    register_dashboard(app, container)
    register_cli(app, container, db_config)

    return app

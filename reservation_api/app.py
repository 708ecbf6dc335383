import logging
import random
from datetime import timedelta
import click
from flask import Flask, jsonify
from flask.cli import with_appcontext
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate
from .config import Config
from .errors import ServiceError
from .http import jerror
from .blueprints.reservations import bp as reservations_bp
from .blueprints.blacklist import bp as blacklist_bp
from .models import BlacklistEntry, Reservation, ReservationStatus
from .services.blacklist import MatchPolicy
from .utils.time import utc_now

logger = logging.getLogger(__name__)

def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Fail at startup rather than on the first reservation.
    MatchPolicy(app.config["BLACKLIST_MATCH_POLICY"])

    configure_logging(app)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(reservations_bp, url_prefix="/api/reservations")
    app.register_blueprint(blacklist_bp, url_prefix="/api/blacklist")

    register_error_handlers(app)

    @app.get("/")
    def index():
        return jsonify(content="The server is running!")

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    app.cli.add_command(seed_command)

    return app


def configure_logging(app):
    """Attaches a single stream handler to the package logger."""
    pkg_logger = logging.getLogger("reservation_api")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))
        pkg_logger.addHandler(handler)
    pkg_logger.setLevel(app.config["LOG_LEVEL"])


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(e: ServiceError):
        return jerror(e.status, e.code, e.message, e.details)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e: SQLAlchemyError):
        db.session.rollback()
        logger.error("Database operation failed: %s", e)
        return jerror(400, "DATABASE_ERROR", "The database rejected the operation.", str(e))

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "error").upper().replace(" ", "_")
        return jerror(e.code or 500, code, e.description or e.name)


_FIRST_NAMES = ["alice", "bruno", "carla", "dmitri", "elena", "farid", "grace", "hiro"]
_LAST_NAMES = ["doe", "garcia", "nguyen", "okafor", "rossi", "smith", "tanaka", "weber"]

@click.command("seed")
@click.option("--reservations", "reservation_count", default=35, show_default=True)
@click.option("--blacklist", "blacklist_count", default=5, show_default=True)
@with_appcontext
def seed_command(reservation_count, blacklist_count):
    """Creates sample data for the database."""
    db.session.query(Reservation).delete()
    db.session.query(BlacklistEntry).delete()
    db.session.commit()
    print("Cleared existing data.")

    entries = []
    for i in range(blacklist_count):
        entries.append(BlacklistEntry(
            email=f"barred{i+1}@example.com",
            phone_number=f"1555000{i:04d}",
        ))
    db.session.add_all(entries)
    db.session.commit()
    print(f"Created {len(entries)} blacklist entries.")

    reservations = []
    today = utc_now().replace(hour=0, minute=0, second=0)
    for i in range(reservation_count):
        day_offset = random.randint(0, 13)
        hour = random.randint(17, 22)
        minute = random.choice([0, 30])
        reservations.append(Reservation(
            first_name=random.choice(_FIRST_NAMES),
            last_name=random.choice(_LAST_NAMES),
            email=f"guest{i+1}@example.com",
            phone_number=f"1444{random.randint(0, 9999999):07d}" if random.random() < 0.5 else None,
            date=today + timedelta(days=day_offset, hours=hour, minutes=minute),
            table_id=random.randint(0, 19),
            seats=random.randint(1, 8),
            status=random.choice([
                ReservationStatus.RESERVED.value,
                ReservationStatus.REQUIRES_APPROVAL.value,
            ]),
        ))
    db.session.add_all(reservations)
    db.session.commit()
    print(f"Created {len(reservations)} reservations.")
    print("Database seeded!")

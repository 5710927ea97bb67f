#!/usr/bin/env python3
"""
Sehaty Database Setup Script
============================

Simple script to set up database tables before starting the server.
Run this script before starting the FastAPI server.

Usage:
    python scripts/setup_database.py [--check-only]
"""

import sys
import logging
import argparse
from sqlalchemy import inspect, text

from sehaty.db.session import engine
from sehaty.db.base import Base
from sehaty.core.database_utils import get_db_session, get_missing_tables
from sehaty.core.security import create_access_token
from sehaty import crud
from sehaty.models.user import UserRole

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("admin@sehaty.local", "Demo Admin", UserRole.ADMIN),
    ("patient@sehaty.local", "Demo Patient", UserRole.USER),
]


def test_connection():
    """Test database connection"""
    logger.info("Testing database connection...")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def check_tables_exist():
    """Check if all required tables exist"""
    try:
        missing_tables = get_missing_tables()
        if missing_tables:
            logger.warning(f"Missing tables: {missing_tables}")
            return False
        logger.info("All required tables exist")
        return True
    except Exception as e:
        logger.error(f"Failed to check tables: {e}")
        return False


def create_tables():
    """Create all required tables"""
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        created_tables = inspect(engine).get_table_names()
        logger.info(f"Created tables: {', '.join(created_tables)}")
        return True
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        return False


def create_demo_users():
    """Create demo users and log a bearer token for each"""
    logger.info("Creating demo users...")
    try:
        with get_db_session() as db:
            for email, full_name, role in DEMO_USERS:
                user = crud.user.get_by_email(db, email=email)
                if user:
                    logger.info(f"Demo user already exists: {email}")
                else:
                    user = crud.user.create(db, email=email, full_name=full_name, role=role)
                    logger.info(f"Created demo user: {email} ({role.value})")
                logger.info(f"  Bearer token: {create_access_token(user.id)}")
        return True
    except Exception as e:
        logger.error(f"Error creating demo users: {e}")
        return False


def main():
    """Main setup function"""
    parser = argparse.ArgumentParser(description='Sehaty Database Setup')
    parser.add_argument('--check-only', action='store_true',
                        help='Only check if tables exist, do not create')
    args = parser.parse_args()

    logger.info("Sehaty Database Setup")
    logger.info("=" * 40)

    if not test_connection():
        logger.error("Cannot proceed without database connection")
        sys.exit(1)

    tables_exist = check_tables_exist()

    if args.check_only:
        sys.exit(0 if tables_exist else 1)

    if not tables_exist and not create_tables():
        logger.error("Failed to create tables")
        sys.exit(1)

    if not create_demo_users():
        logger.warning("Failed to create demo users (tables created successfully)")

    if check_tables_exist():
        logger.info("Database setup completed successfully!")
        logger.info("You can now start the server with:")
        logger.info("  python -m uvicorn sehaty.main:app --host 0.0.0.0 --port 8000")
    else:
        logger.error("Setup verification failed")
        sys.exit(1)


if __name__ == "__main__":
    main()

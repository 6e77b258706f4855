"""
Create any job board tables missing from DATABASE_URL; existing tables are left alone.
Usage: python -m jobboard.scripts.ensure_tables
"""
from jobboard.database import ensure_tables_exist
from jobboard.logging_config import setup_logging


def main():
    setup_logging()
    ensure_tables_exist()
    print("Job board table check complete: created only missing tables.")


if __name__ == "__main__":
    main()

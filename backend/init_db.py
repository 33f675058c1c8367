#!/usr/bin/env python3
"""
Creates the tables and loads the sample data.
Run with: python init_db.py
"""
import sys

from sqlmodel import Session

from hospital.config import settings
from hospital.core.database import build_engine, create_db_and_tables
from hospital.utils.init_data import initialize_data, SAMPLE_ROOMS, SAMPLE_PATIENTS


def main():
    """Initialize the database with sample data."""
    print("=" * 60)
    print("INITIALIZING DATABASE")
    print("=" * 60)
    print(f"\nDatabase: {settings.DATABASE_URL}")

    engine = build_engine()
    try:
        create_db_and_tables(engine)
        with Session(engine) as session:
            created = initialize_data(session)
        if created:
            print(f"\nCreated {len(SAMPLE_ROOMS)} rooms and {len(SAMPLE_PATIENTS)} patients")
        else:
            print("\nRooms already exist, nothing to do")
        print("\n" + "=" * 60)
    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()

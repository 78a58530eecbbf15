#!/usr/bin/env python3
"""
Schema Setup Script

Creates the job portal tables (idempotent). With --reset, drops them first.
Usage: python scripts/init_db.py [--reset]
"""
import argparse
import logging

from jobportal.db.schema import drop_schema, init_schema


def main():
    parser = argparse.ArgumentParser(description="Create the job portal schema")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    if args.reset:
        drop_schema()
    init_schema()
    print("✅ Schema ready")


if __name__ == "__main__":
    main()

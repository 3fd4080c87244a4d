"""
Test script to verify the vector index is reachable.
Prints collection statistics; exits non-zero on failure.
    python check_index.py
"""
import json
import sys

from talkrag.core.config import settings
from talkrag.services.vector_store import ChromaIndex


def check_index() -> bool:
    print("Connecting to ChromaDB...")
    try:
        index = ChromaIndex.from_settings(settings)
        print("Fetching index statistics...")
        stats = index.describe()
    except Exception as e:
        print("\n[FAIL] Index check failed!")
        print(f"  - Error: {e}")
        return False

    print("\n[OK] Index connection successful!")
    print(json.dumps(stats, indent=2))
    return True


if __name__ == "__main__":
    if not check_index():
        sys.exit(1)

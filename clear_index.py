"""
Utility script to delete ALL vectors from the index.
Run this script and type 'yes' to confirm:
    python clear_index.py
"""
import sys

from talkrag.core.config import settings
from talkrag.services.vector_store import ChromaIndex


def clear_index() -> bool:
    """Drop every vector in the configured collection."""
    try:
        index = ChromaIndex.from_settings(settings)
        print("Clearing index...")
        index.delete_all()
        print("✓ Index cleared successfully!")
        return True
    except Exception as e:
        print("\nClearing failed!")
        print(f"Error: {e}")
        return False


if __name__ == "__main__":
    print("=" * 50)
    print("WARNING: This will delete ALL vectors in the index.")
    print(f"Collection: {settings.chroma_collection}")
    print("=" * 50)

    answer = input("Type 'yes' to confirm deletion: ").strip().lower()
    if answer != "yes":
        print("Aborted.")
        sys.exit(0)

    if not clear_index():
        sys.exit(1)

"""
Initialize the database and seed the demo links.

Run this script once to set up the database:
    python init_db.py
"""

from linkpulse.config import settings
from linkpulse.database import SessionLocal, init_db
from linkpulse.services.store import LinkStore


def init_database():
    """Create all database tables"""
    print("Creating database tables...")
    init_db()
    print("Database tables created successfully!")


def load_links():
    """Load the link snapshot, seeding demo links if none exists"""
    store = LinkStore(SessionLocal)

    if store.last_save_error:
        print(f"Error saving links: {store.last_save_error}")
        return

    print(f"\n{len(store)} links available under '{settings.STORAGE_KEY}':")
    for link in store.query():
        print(f"  {link.short_code:<10} {link.original_url}")


if __name__ == "__main__":
    print("="*50)
    print("LinkPulse - Database Initialization")
    print("="*50)

    init_database()
    load_links()

    print("\n✅ Database initialization complete!")
    print("\nYou can now start the server with:")
    print("    uvicorn linkpulse.main:app --reload")

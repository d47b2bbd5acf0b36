import sys
import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Add the parent directory to sys.path to allow imports from backend
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, SessionLocal, engine
import models  # noqa: F401
from crud.accounts import initialize_default_accounts

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger("seed_accounts")


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = initialize_default_accounts(db)
        logger.info(f"Default chart of accounts seeded: {created} account(s) created.")
    except Exception:
        logger.exception("Seeding the chart of accounts failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()

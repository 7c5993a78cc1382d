import logging
from sqlalchemy.orm import sessionmaker
from models.index import Base, engine as default_engine
from api.rewards.rewards_service import RewardService

logger = logging.getLogger(__name__)


def init_db(engine=None) -> None:
    """Create missing tables and seed the gift catalog."""
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)

    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        RewardService(session).seed_gifts()
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    print("✅ Database initialized!")

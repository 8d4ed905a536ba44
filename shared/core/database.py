from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import WAREHOUSE_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2

# Warehouse DB (created lazily by the driver, so importing never connects)
warehouse_engine = create_engine(
    WAREHOUSE_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=POOL_SIZE,          # max idle connections
    max_overflow=MAX_OVERFLOW,      # max temporary extra connections
    pool_timeout=30       # wait time before failing
)
WarehouseSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=warehouse_engine)


# Dependency


def get_warehouse_db():
    db = WarehouseSessionLocal()
    try:
        yield db
    finally:
        db.close()

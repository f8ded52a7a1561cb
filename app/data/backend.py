# app/data/backend.py
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy.engine import Engine

from app.data.database import Base, make_engine, make_session_factory, wait_for_database
from app.data import models  # noqa: F401  registers tables in Base.metadata
from app.data.migrate import migrate_catalog
from app.data.seed import seed
from app.repos.base import Stores
from app.repos.json_store import JsonOrderRepo, JsonProductRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.utils import settings
from app.utils.logging import get_logger

logger = get_logger(__name__)


class JsonBackend:
    """Flat-file backend: products.json and orders.json in one directory."""

    name = "json"

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.products_file = self.data_dir / "products.json"
        self.orders_file = self.data_dir / "orders.json"

    def init(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using JSON file database in {self.data_dir}")
        with self.stores() as stores:
            seed(stores.products, stores.orders)

    @contextmanager
    def stores(self) -> Iterator[Stores]:
        yield Stores(
            products=JsonProductRepo(self.products_file),
            orders=JsonOrderRepo(self.orders_file),
        )

    def close(self) -> None:
        pass


class SqlBackend:
    """SQLAlchemy backend, one session per unit of work."""

    name = "sql"

    def __init__(self, engine: Optional[Engine] = None, url: str = settings.DATABASE_URL,
                 migrate_catalog_on_start: bool = False, backup_dir: Optional[Path] = None):
        self.engine = engine if engine is not None else make_engine(url)
        self.SessionLocal = make_session_factory(self.engine)
        self.migrate_catalog_on_start = migrate_catalog_on_start
        self.backup_dir = Path(backup_dir) if backup_dir else settings.DATA_DIR / "backups"

    def init(self) -> None:
        wait_for_database(self.engine)
        logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready")

        db = self.SessionLocal()
        try:
            if self.migrate_catalog_on_start:
                migrate_catalog(db, self.backup_dir)
            seed(ProductRepo(db))
        finally:
            db.close()

    @contextmanager
    def stores(self) -> Iterator[Stores]:
        db = self.SessionLocal()
        try:
            yield Stores(products=ProductRepo(db), orders=OrderRepo(db))
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")


def build_backend(name: Optional[str] = None):
    name = (name or settings.STORAGE_BACKEND).lower()
    if name == "json":
        return JsonBackend(settings.DATA_DIR)
    if name == "sql":
        return SqlBackend(migrate_catalog_on_start=settings.CATALOG_MIGRATION)
    raise ValueError(f"Unknown STORAGE_BACKEND '{name}', expected 'json' or 'sql'")

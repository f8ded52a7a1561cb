# app/data/migrate.py
"""
Explicit catalog migration for the relational backend.

Databases seeded with the first catalog carry a "Drinks" category row that
the current catalog no longer has. Replacing that catalog deletes every
product and category, so it only runs on request, always writes a backup
first, and can be undone with `restore`.

    python -m app.data.migrate check
    python -m app.data.migrate migrate [--backup-dir DIR]
    python -m app.data.migrate restore BACKUP_FILE
"""
import argparse
import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Optional

from sqlalchemy import delete, func, select, text
from sqlalchemy.orm import Session

from app.data.database import make_engine, make_session_factory
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.seed import SAMPLE_CATEGORIES, SAMPLE_PRODUCTS
from app.domain.errors import ValidationError
from app.repos.product_repo import ProductRepo
from app.repos.sql_errors import storage_errors
from app.utils.logging import get_logger, setup_logging
from app.utils.settings import DATA_DIR, DATABASE_URL

logger = get_logger(__name__)

LEGACY_SENTINEL_CATEGORY = "Drinks"

_PRODUCT_COLUMNS = [c.name for c in ProductModel.__table__.columns]
_CATEGORY_COLUMNS = [c.name for c in CategoryModel.__table__.columns]


def detect_legacy_catalog(db: Session) -> bool:
    with storage_errors(db, "checking catalog"):
        found = db.execute(
            select(CategoryModel.id).where(CategoryModel.name == LEGACY_SENTINEL_CATEGORY)
        ).first()
    return found is not None


def _row_to_dict(row, columns) -> dict:
    data = {}
    for name in columns:
        value = getattr(row, name)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif name in ("price", "rating"):
            value = str(value)
        data[name] = value
    return data


def backup_catalog(db: Session, backup_dir: Path) -> Path:
    """Dump all products and categories to a timestamped JSON file."""
    with storage_errors(db, "reading catalog for backup"):
        products = db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        categories = db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars().all()

    backup_dir = Path(backup_dir)
    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    path = backup_dir / f"catalog-{stamp}.json"
    payload = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "products": [_row_to_dict(p, _PRODUCT_COLUMNS) for p in products],
        "categories": [_row_to_dict(c, _CATEGORY_COLUMNS) for c in categories],
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Catalog backup written to {path} ({len(products)} products, {len(categories)} categories)")
    return path


def _wipe_catalog(db: Session) -> None:
    db.execute(delete(ProductModel))
    db.execute(delete(CategoryModel))


def migrate_catalog(db: Session, backup_dir: Path) -> Optional[Path]:
    """
    Replace a legacy catalog with the current sample catalog.
    Returns the backup path, or None when the catalog is not legacy.
    Orders are never touched.
    """
    if not detect_legacy_catalog(db):
        logger.info("Catalog is current, no migration needed")
        return None

    backup = backup_catalog(db, backup_dir)
    logger.warning(
        f"Legacy category '{LEGACY_SENTINEL_CATEGORY}' found: replacing products and categories "
        f"(restore with: python -m app.data.migrate restore {backup})"
    )
    with storage_errors(db, "migrating catalog"):
        _wipe_catalog(db)
        db.flush()
    ProductRepo(db).seed_records(SAMPLE_PRODUCTS, SAMPLE_CATEGORIES)
    return backup


def _from_backup(data: dict) -> dict:
    row = {}
    for k, v in data.items():
        if k.endswith("_at") and isinstance(v, str):
            v = datetime.fromisoformat(v)
        elif k in ("price", "rating") and v is not None:
            v = Decimal(v)
        row[k] = v
    return row


def _sync_sequence(db: Session, table: str) -> None:
    # explicit ids bypass the postgres sequence, move it past the restored rows
    if db.get_bind().dialect.name != "postgresql":
        return
    db.execute(
        text(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), COALESCE(MAX(id), 1)) FROM {table}")
    )


def restore_catalog(db: Session, backup_path: Path) -> int:
    """Put back products and categories from a backup file. Returns restored product count."""
    backup_path = Path(backup_path)
    try:
        payload = json.loads(backup_path.read_text(encoding="utf-8"))
        products = payload["products"]
        categories = payload["categories"]
    except (OSError, ValueError, KeyError) as e:
        raise ValidationError(f"Invalid catalog backup {backup_path}", detail=str(e)) from e

    with storage_errors(db, "restoring catalog"):
        _wipe_catalog(db)
        db.flush()
        for c in categories:
            db.add(CategoryModel(**_from_backup(c)))
        for p in products:
            db.add(ProductModel(**_from_backup(p)))
        db.flush()
        _sync_sequence(db, "products")
        _sync_sequence(db, "categories")
        db.commit()
        restored = db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    logger.warning(f"Catalog restored from {backup_path}: {restored} products")
    return restored


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="python -m app.data.migrate", description="Catalog migration")
    parser.add_argument("--database-url", default=DATABASE_URL)
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("check", help="report whether the legacy catalog is present")
    run = sub.add_parser("migrate", help="back up and replace a legacy catalog")
    run.add_argument("--backup-dir", type=Path, default=DATA_DIR / "backups")
    restore = sub.add_parser("restore", help="restore products and categories from a backup")
    restore.add_argument("backup_file", type=Path)
    args = parser.parse_args(argv)

    setup_logging()
    session_factory = make_session_factory(make_engine(args.database_url))
    with session_factory() as db:
        if args.command == "check":
            legacy = detect_legacy_catalog(db)
            print("legacy catalog present" if legacy else "catalog is current")
            return 1 if legacy else 0
        if args.command == "migrate":
            migrate_catalog(db, args.backup_dir)
            return 0
        restore_catalog(db, args.backup_file)
        return 0


if __name__ == "__main__":
    raise SystemExit(main())

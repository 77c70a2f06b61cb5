from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
from app.db.models.product import Product
from app.db.models.order import OrderItem

def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()

def get_products_by_ids(db: Session, product_ids: List[int]) -> List[Product]:
    return db.query(Product).filter(Product.id.in_(product_ids)).all()

def filter_products(
    query,
    store_id: Optional[int] = None,
    category: Optional[str] = None,
    in_stock: Optional[bool] = None,
    low_stock: bool = False,
    search: Optional[str] = None,
):
    if store_id is not None:
        query = query.filter(Product.store_id == store_id)
    if category:
        query = query.filter(Product.category == category)
    if in_stock is not None:
        query = query.filter(Product.in_stock == in_stock)
    if low_stock:
        query = query.filter(Product.stock_quantity <= Product.min_stock_level)
    if search:
        query = query.filter(or_(Product.name.ilike(f"%{search}%"), Product.sku.ilike(f"%{search}%")))
    return query

def category_counts(query) -> List[Dict[str, Any]]:
    rows = (
        query.with_entities(Product.category, func.count(Product.id))
        .group_by(Product.category)
        .order_by(Product.category)
        .all()
    )
    return [{"category": category, "count": count} for category, count in rows]

def create_product(db: Session, db_product: Product) -> Product:
    db.add(db_product)
    db.flush()
    return db_product

def update_product(db: Session, db_product: Product, data: Dict[str, Any]) -> Product:
    for field, value in data.items():
        setattr(db_product, field, value)
    db.flush()
    return db_product

def bulk_update_products(db: Session, product_ids: List[int], values: Dict[str, Any]) -> int:
    """Apply the same values to every product in one UPDATE statement."""
    return (
        db.query(Product)
        .filter(Product.id.in_(product_ids))
        .update(values, synchronize_session="fetch")
    )

def count_order_items(db: Session, product_id: int) -> int:
    return db.query(OrderItem).filter(OrderItem.product_id == product_id).count()

def delete_product(db: Session, db_product: Product) -> None:
    db.delete(db_product)
    db.flush()

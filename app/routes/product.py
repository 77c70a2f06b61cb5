import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app import audit
from app.authz import Action, authorize, can, scope_to_owned_stores
from app.constants.enums import AuditAction
from app.database import get_db, transaction
from app.db.crud import product as product_crud
from app.db.models.product import Product as ProductModel
from app.db.schemas.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    ProductBulkUpdate,
    ProductBulkUpdateResult,
    ProductCategoryCount,
)
from app.dependencies import CurrentUser, store_managers
from app.errors import AccessDeniedError, ConflictError, NotFoundError
from app.routes.store import load_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/stores",
    tags=["products"]
)

def load_product(db: Session, product_id: int) -> ProductModel:
    product = product_crud.get_product(db, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product

def _scoped_products(db: Session, current_user: CurrentUser, store_id: Optional[int]):
    if store_id is not None:
        authorize(current_user, Action.READ, load_store(db, store_id))
    return scope_to_owned_stores(db.query(ProductModel), current_user, ProductModel.store_id)

@router.post("/products", response_model=Product, status_code=201)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Add a product to a store"""
    load_store(db, product_in.store_id)
    product = ProductModel(**product_in.model_dump())
    authorize(current_user, Action.CREATE, product)

    with transaction(db):
        product_crud.create_product(db, product)
        audit.record(db, current_user, AuditAction.CREATE, "Product", product.id, None, audit.snapshot(product))
    return product

@router.get("/products", response_model=List[Product])
def list_products(
    store_id: Optional[int] = None,
    category: Optional[str] = None,
    in_stock: Optional[bool] = None,
    low_stock: bool = False,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """List products in the caller's stores"""
    query = product_crud.filter_products(
        _scoped_products(db, current_user, store_id),
        store_id=store_id,
        category=category,
        in_stock=in_stock,
        low_stock=low_stock,
        search=search,
    )
    return query.order_by(ProductModel.category, ProductModel.name).all()

@router.get("/product-categories", response_model=List[ProductCategoryCount])
def list_product_categories(
    store_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Product categories with the number of products in each"""
    query = product_crud.filter_products(_scoped_products(db, current_user, store_id), store_id=store_id)
    return product_crud.category_counts(query)

@router.put("/products/bulk", response_model=ProductBulkUpdateResult)
def bulk_update_products(
    bulk_in: ProductBulkUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Apply one set of changes to many products; all products must be accessible"""
    product_ids = list(dict.fromkeys(bulk_in.product_ids))
    products = product_crud.get_products_by_ids(db, product_ids)

    missing = sorted(set(product_ids) - {p.id for p in products})
    if missing:
        raise NotFoundError(f"Products not found: {', '.join(str(i) for i in missing)}")
    if not all(can(current_user, Action.UPDATE, product) for product in products):
        logger.warning(f"User {current_user.id} attempted bulk update on products outside their stores")
        raise AccessDeniedError("Access denied to one or more products")

    before = {product.id: audit.snapshot(product) for product in products}
    values = bulk_in.updates.model_dump(exclude_unset=True)
    with transaction(db):
        updated_count = product_crud.bulk_update_products(db, product_ids, values)
        for product in products:
            db.refresh(product)
            audit.record(
                db, current_user, AuditAction.BULK_UPDATE, "Product", product.id,
                before[product.id], audit.snapshot(product),
            )

    logger.info(f"Bulk updated {updated_count} products for user {current_user.id}")
    return {"updated_count": updated_count, "products": sorted(products, key=lambda p: p.id)}

@router.get("/products/{product_id}", response_model=Product)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Get a specific product"""
    product = load_product(db, product_id)
    authorize(current_user, Action.READ, product)
    return product

@router.put("/products/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Update a product"""
    product = load_product(db, product_id)
    authorize(current_user, Action.UPDATE, product)

    before = audit.snapshot(product)
    with transaction(db):
        product_crud.update_product(db, product, product_in.model_dump(exclude_unset=True))
        audit.record(db, current_user, AuditAction.UPDATE, "Product", product.id, before, audit.snapshot(product))
    return product

@router.delete("/products/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Delete a product that no order references"""
    product = load_product(db, product_id)
    authorize(current_user, Action.DELETE, product)

    item_count = product_crud.count_order_items(db, product.id)
    if item_count:
        raise ConflictError(f"Cannot delete product referenced by {item_count} order items")

    before = audit.snapshot(product)
    with transaction(db):
        product_crud.delete_product(db, product)
        audit.record(db, current_user, AuditAction.DELETE, "Product", product_id, before, None)
    return {"message": "Product deleted successfully"}

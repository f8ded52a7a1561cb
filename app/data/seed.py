# app/data/seed.py
from typing import Optional

from app.repos.base import ProductStore
from app.repos.json_store import JsonOrderRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_CATEGORIES = [
    {"name": "Appetizers", "description": "Tasty starters and sides"},
    {"name": "Asian", "description": "Stir fries and noodle dishes"},
    {"name": "BBQ", "description": "Slow cooked and grilled meats"},
    {"name": "Burgers", "description": "Delicious beef and chicken burgers"},
    {"name": "Desserts", "description": "Sweet treats and desserts"},
    {"name": "Mexican", "description": "Tacos and other Mexican favourites"},
    {"name": "Pizza", "description": "Fresh baked pizzas with various toppings"},
    {"name": "Salads", "description": "Fresh and healthy salad options"},
]

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Beef Burger",
        "description": "Juicy beef patty with lettuce, tomato, onion, and our special sauce",
        "price": "12.99",
        "category": "Burgers",
        "image": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=300",
        "stock": 50,
        "prep_time": 15,
        "rating": "4.5",
    },
    {
        "name": "Margherita Pizza",
        "description": "Fresh mozzarella, tomato sauce, and basil on thin crust",
        "price": "16.99",
        "category": "Pizza",
        "image": "https://images.unsplash.com/photo-1604382355076-af4b0eb60143?w=300",
        "stock": 30,
        "prep_time": 20,
        "rating": "4.7",
    },
    {
        "name": "Caesar Salad",
        "description": "Crispy romaine lettuce with parmesan, croutons, and caesar dressing",
        "price": "9.99",
        "category": "Salads",
        "image": "https://images.unsplash.com/photo-1546793665-c74683f339c1?w=300",
        "stock": 25,
        "prep_time": 10,
        "rating": "4.2",
    },
    {
        "name": "Chicken Wings (8pcs)",
        "description": "Crispy chicken wings with your choice of buffalo or BBQ sauce",
        "price": "13.99",
        "category": "Appetizers",
        "image": "https://images.unsplash.com/photo-1567620832903-9fc6debc209f?w=300",
        "stock": 40,
        "prep_time": 18,
        "rating": "4.6",
    },
    {
        "name": "Pepperoni Pizza",
        "description": "Classic pepperoni with mozzarella cheese and tomato sauce",
        "price": "18.99",
        "category": "Pizza",
        "image": "https://images.unsplash.com/photo-1565299624946-b28f40a0ca4b?w=300",
        "stock": 35,
        "prep_time": 22,
        "rating": "4.8",
    },
    {
        "name": "Fish Tacos (3pcs)",
        "description": "Grilled fish with cabbage slaw and chipotle mayo in corn tortillas",
        "price": "14.99",
        "category": "Mexican",
        "image": "https://images.unsplash.com/photo-1565299585323-38174c26d82b?w=300",
        "stock": 20,
        "prep_time": 16,
        "rating": "4.4",
    },
    {
        "name": "Chocolate Brownie",
        "description": "Warm chocolate brownie served with vanilla ice cream",
        "price": "7.99",
        "category": "Desserts",
        "image": "https://images.unsplash.com/photo-1606313564200-e75d5e30476c?w=300",
        "stock": 15,
        "prep_time": 5,
        "rating": "4.3",
    },
    {
        "name": "Grilled Chicken Salad",
        "description": "Mixed greens with grilled chicken, cherry tomatoes, and balsamic dressing",
        "price": "11.99",
        "category": "Salads",
        "image": "https://images.unsplash.com/photo-1540420773420-3366772f4999?w=300",
        "stock": 28,
        "prep_time": 12,
        "rating": "4.1",
    },
    {
        "name": "BBQ Ribs",
        "description": "Tender pork ribs with our house BBQ sauce and coleslaw",
        "price": "19.99",
        "category": "BBQ",
        "image": "https://images.unsplash.com/photo-1544025162-d76694265947?w=300",
        "stock": 12,
        "prep_time": 25,
        "rating": "4.9",
    },
    {
        "name": "Vegetable Stir Fry",
        "description": "Fresh mixed vegetables stir-fried with teriyaki sauce over rice",
        "price": "10.99",
        "category": "Asian",
        "image": "https://images.unsplash.com/photo-1512058564366-18510be2db19?w=300",
        "stock": 22,
        "prep_time": 14,
        "rating": "4.0",
    },
]

# item ids refer to SAMPLE_PRODUCTS positions (1-based)
SAMPLE_ORDERS = [
    {
        "customer_name": "John Smith",
        "customer_phone": "+1-555-0123",
        "customer_email": "john@example.com",
        "delivery_address": "123 Main St, Apt 4B, New York, NY 10001",
        "items": [
            {"product_id": 1, "name": "Classic Beef Burger", "price": 12.99, "quantity": 2},
            {"product_id": 4, "name": "Chicken Wings (8pcs)", "price": 13.99, "quantity": 1},
        ],
        "total": "39.97",
        "status": "preparing",
        "payment_status": "paid",
        "delivery_time": 25,
        "special_instructions": "No onions on the burger please",
    },
    {
        "customer_name": "Sarah Johnson",
        "customer_phone": "+1-555-0456",
        "customer_email": "sarah@example.com",
        "delivery_address": "456 Oak Avenue, Brooklyn, NY 11201",
        "items": [
            {"product_id": 2, "name": "Margherita Pizza", "price": 16.99, "quantity": 1},
            {"product_id": 7, "name": "Chocolate Brownie", "price": 7.99, "quantity": 2},
        ],
        "total": "32.97",
        "status": "delivered",
        "payment_status": "paid",
        "delivery_time": 30,
        "special_instructions": "Leave at door",
    },
]


def seed(products: ProductStore, orders: Optional[JsonOrderRepo] = None) -> bool:
    """
    Populate empty stores with the sample catalog (and sample orders when the
    file backend passes its order store). Non-empty stores are left alone.
    Returns True if anything was written.
    """
    seeded = False

    # not forcing: only seed if empty
    if products.count() == 0:
        logger.info(f"Seeding {len(SAMPLE_PRODUCTS)} sample products")
        products.seed_records(SAMPLE_PRODUCTS, SAMPLE_CATEGORIES)
        seeded = True
    else:
        logger.info("Products already present, skipping seed")

    if orders is not None:
        if orders.count() == 0:
            logger.info(f"Seeding {len(SAMPLE_ORDERS)} sample orders")
            orders.seed_records(SAMPLE_ORDERS)
            seeded = True
        else:
            logger.info("Orders already present, skipping seed")

    return seeded

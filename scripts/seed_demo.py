#!/usr/bin/env python3
"""
Seed script to create demo restaurants, menus and a customer account
"""

import asyncio

from sqlalchemy import select

from food_delivery import database
from food_delivery.config import settings
from food_delivery.models import (
    DeliveryPartner,
    MenuCategory,
    MenuItem,
    Restaurant,
    User,
)
from food_delivery.security import get_password_hash
from food_delivery.services import addresses


RESTAURANTS = [
    {
        "name": "Spice Route",
        "description": "North Indian curries and tandoor classics",
        "cuisine_types": ["North Indian", "Mughlai"],
        "address_line1": "12 MG Road",
        "city": "Bangalore",
        "phone": "+919800000001",
        "latitude": 12.9716,
        "longitude": 77.5946,
        "delivery_fee_cents": 4000,
        "min_order_amount_cents": 20000,
        "avg_preparation_time": 30,
        "menu": {
            "Starters": [
                ("Paneer Tikka", "Char-grilled cottage cheese", 22000, True),
                ("Chicken Seekh Kebab", "Minced chicken skewers", 26000, False),
            ],
            "Mains": [
                ("Butter Chicken", "Creamy tomato gravy", 32000, False),
                ("Dal Makhani", "Slow-cooked black lentils", 24000, True),
                ("Garlic Naan", "Tandoor bread with garlic", 6000, True),
            ],
        },
    },
    {
        "name": "Green Bowl",
        "description": "Salads, bowls and smoothies",
        "cuisine_types": ["Healthy", "Continental"],
        "address_line1": "4 Indiranagar 100ft Road",
        "city": "Bangalore",
        "phone": "+919800000002",
        "latitude": 12.9784,
        "longitude": 77.6408,
        "is_veg_only": True,
        "delivery_fee_cents": 3000,
        "min_order_amount_cents": 15000,
        "avg_preparation_time": 15,
        "menu": {
            "Bowls": [
                ("Quinoa Power Bowl", "Quinoa, chickpeas, greens", 28000, True),
                ("Burrito Bowl", "Rice, beans, salsa, guacamole", 30000, True),
            ],
            "Drinks": [
                ("Mango Smoothie", "Fresh mango and yoghurt", 15000, True),
            ],
        },
    },
    {
        "name": "Dragon Wok",
        "description": "Indo-Chinese favourites",
        "cuisine_types": ["Chinese", "Asian"],
        "address_line1": "88 Koramangala 5th Block",
        "city": "Bangalore",
        "phone": "+919800000003",
        "latitude": 12.9352,
        "longitude": 77.6245,
        "delivery_fee_cents": 3500,
        "min_order_amount_cents": 25000,
        "avg_preparation_time": 25,
        "menu": {
            "Noodles & Rice": [
                ("Hakka Noodles", "Wok-tossed noodles with vegetables", 18000, True),
                ("Chicken Fried Rice", "Egg, chicken and spring onion", 22000, False),
            ],
            "Starters": [
                ("Chilli Paneer", "Crispy paneer in chilli sauce", 24000, True),
            ],
        },
    },
]


async def seed_demo_data():
    """Seed demo data for development"""
    database.init_db(settings.database_url, echo=False)
    await database.create_schema()

    try:
        async with database.SessionLocal() as db:
            # Check if demo data already exists
            result = await db.execute(select(User).where(User.email == "demo@example.com"))
            if result.scalar_one_or_none():
                print("Demo data already exists. Skipping...")
                return

            print("Creating demo restaurants...")
            item_count = 0

            for data in RESTAURANTS:
                data = dict(data)
                menu = data.pop("menu")
                restaurant = Restaurant(**data)
                db.add(restaurant)
                await db.flush()

                for order, (category_name, items) in enumerate(menu.items()):
                    category = MenuCategory(
                        restaurant_id=restaurant.id,
                        name=category_name,
                        display_order=order,
                    )
                    db.add(category)
                    await db.flush()

                    for name, description, price_cents, is_veg in items:
                        db.add(
                            MenuItem(
                                restaurant_id=restaurant.id,
                                category_id=category.id,
                                name=name,
                                description=description,
                                price_cents=price_cents,
                                is_veg=is_veg,
                            )
                        )
                        item_count += 1

                print(f"Created restaurant: {restaurant.name} (ID: {restaurant.id})")

            db.add(DeliveryPartner(name="Ravi Kumar", phone="+919811111111"))

            user = User(
                name="Demo Customer",
                email="demo@example.com",
                phone="+919822222222",
                hashed_password=get_password_hash("demo1234"),
            )
            db.add(user)
            await db.commit()

            await addresses.add_address(
                db,
                user.id,
                {
                    "type": "home",
                    "address_line1": "221 Residency Road",
                    "city": "Bangalore",
                    "state": "Karnataka",
                    "pincode": "560025",
                    "latitude": 12.9650,
                    "longitude": 77.6010,
                },
            )

        print(f"""
Demo data created successfully!

Restaurants: {len(RESTAURANTS)} with {item_count} menu items

Customer:
  Email: demo@example.com
  Password: demo1234
""")
    finally:
        await database.close_db()


if __name__ == "__main__":
    asyncio.run(seed_demo_data())

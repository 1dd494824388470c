"""Builders shared by the test modules"""

from food_delivery.models.restaurant import MenuItem, Restaurant
from food_delivery.models.user import User
from food_delivery.security import get_password_hash
from food_delivery.services import addresses, cart, checkout

TEST_PASSWORD = "testpass123"

# bcrypt is slow, hash once per run
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

RESTAURANT_LAT = 12.9716
RESTAURANT_LNG = 77.5946

# 0.025 degrees north of the restaurant, 2.78 km away
NEARBY_LAT = RESTAURANT_LAT + 0.025


def address_data(**overrides):
    data = {
        "type": "home",
        "address_line1": "221 Residency Road",
        "address_line2": "Flat 4B",
        "city": "Bangalore",
        "state": "Karnataka",
        "pincode": "560025",
        "latitude": NEARBY_LAT,
        "longitude": RESTAURANT_LNG,
    }
    data.update(overrides)
    return data


async def create_user(db, email="test@example.com", name="Test User", is_active=True):
    user = User(
        name=name,
        email=email,
        phone="+919800000000",
        hashed_password=TEST_PASSWORD_HASH,
        is_active=is_active,
    )
    db.add(user)
    await db.commit()
    return user


async def create_restaurant(db, name="Spice Route", **overrides):
    fields = dict(
        name=name,
        description="North Indian curries",
        cuisine_types=["North Indian", "Mughlai"],
        address_line1="12 MG Road",
        city="Bangalore",
        phone="+919811111111",
        email="hello@spiceroute.test",
        latitude=RESTAURANT_LAT,
        longitude=RESTAURANT_LNG,
        opening_time="00:00",
        closing_time="23:59",
        is_open=True,
        delivery_fee_cents=4000,
        min_order_amount_cents=10000,
        avg_preparation_time=30,
        rating=4.2,
    )
    fields.update(overrides)
    restaurant = Restaurant(**fields)
    db.add(restaurant)
    await db.commit()
    return restaurant


async def place_order(db, user_id, restaurant_id, menu_item_id, address_id, quantity=2, now=None):
    """Fill the cart and check out"""
    await cart.add_to_cart(db, user_id, restaurant_id, menu_item_id, quantity=quantity)
    return await checkout.create_order(db, user_id, address_id, "cash", now=now)


async def seed_cart(db):
    """User with an address and two Paneer Tikka in the cart; returns (user_id, address_id)"""
    user = await create_user(db)
    restaurant = await create_restaurant(db)
    item = MenuItem(restaurant_id=restaurant.id, name="Paneer Tikka", price_cents=20000, is_veg=True)
    db.add(item)
    await db.commit()

    address = await addresses.add_address(db, user.id, address_data())
    await cart.add_to_cart(db, user.id, restaurant.id, item.id, quantity=2)
    return user.id, address.id

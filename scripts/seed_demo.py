#!/usr/bin/env python3
"""
Seed script to create a demo restaurant floor
"""

import asyncio
import uuid

# (label, capacity, pos_x, pos_y)
DEMO_TABLES = [
    ("T1", 2, 60, 60),
    ("T2", 2, 240, 60),
    ("T3", 4, 420, 60),
    ("T4", 4, 60, 220),
    ("T5", 6, 240, 220),
    ("T6", 8, 420, 220),
]


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from host_console.database import SessionLocal, engine, Base
    from host_console.models import Restaurant, DiningTable
    from host_console.booking.guard import get_or_create_guest_customer
    
    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        result = await db.execute(
            select(Restaurant).where(Restaurant.name == "Lahore Grill House")
        )
        existing = result.scalar_one_or_none()
        
        if existing:
            print("Demo data already exists. Skipping...")
            return
        
        print("Creating demo restaurant...")
        
        restaurant = Restaurant(
            id=uuid.uuid4(),
            name="Lahore Grill House",
            timezone="Asia/Karachi",
        )
        db.add(restaurant)
        await db.flush()
        
        print(f"Created restaurant: {restaurant.name} (ID: {restaurant.id})")
        
        for label, capacity, pos_x, pos_y in DEMO_TABLES:
            db.add(DiningTable(
                restaurant_id=restaurant.id,
                label=label,
                capacity=capacity,
                pos_x=pos_x,
                pos_y=pos_y,
                is_active=True,
            ))
        
        await get_or_create_guest_customer(db, restaurant.id)
        await db.commit()
        
        print(f"""
Demo data created successfully!

Restaurant: {restaurant.name}
  ID: {restaurant.id}
  Timezone: {restaurant.timezone}

Tables: {len(DEMO_TABLES)} created
Guest customer: ready
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())

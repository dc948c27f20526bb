from datetime import datetime, timedelta
from decimal import Decimal
import random
import uuid

from faker import Faker

from app.core.database import Base, SessionLocal, engine
from app.models.transaction import TransactionKind
from app.services.business_settings_service import upsert_business_settings
from app.services.category_service import get_categories
from app.services.customer_service import create_customer
from app.services.hpp_service import create_hpp_calculation
from app.services.transaction_service import create_transaction
from app.services.user_service import register_user

fake = Faker()

Base.metadata.create_all(bind=engine)
db = SessionLocal()

try:
    print("🔄 Creating demo user...")
    user, created = register_user(
        db,
        external_auth_id=f"demo-{uuid.uuid4().hex[:12]}",
        email=fake.unique.email(),
        name=fake.name(),
        business_name=fake.company(),
    )
    print(f"✅ User {user.id} ({user.email})")

    print("🔄 Creating customers...")
    customers = [
        create_customer(
            db,
            owner_id=user.id,
            name=fake.name(),
            email=fake.email(),
            phone=''.join(filter(str.isdigit, fake.phone_number()))[:20],
            address=fake.address().replace('\n', ', '),
        )
        for _ in range(random.randint(10, 20))
    ]
    print(f"✅ Seeded {len(customers)} customers")

    print("🔄 Creating transactions...")
    income_categories = get_categories(db, user.id, kind=TransactionKind.income)
    expense_categories = get_categories(db, user.id, kind=TransactionKind.expense)
    now = datetime.now()
    count = 0
    for _ in range(random.randint(80, 120)):
        kind = random.choice([TransactionKind.income, TransactionKind.income, TransactionKind.expense])
        if kind == TransactionKind.income:
            category = random.choice(income_categories)
            amount = Decimal(random.randrange(50_000, 2_000_000, 5_000))
            customer_id = random.choice(customers).id
        else:
            category = random.choice(expense_categories)
            amount = Decimal(random.randrange(20_000, 800_000, 5_000))
            customer_id = None
        create_transaction(
            db,
            owner_id=user.id,
            kind=kind,
            amount=amount,
            description=fake.sentence(nb_words=4),
            occurred_at=now - timedelta(days=random.randint(0, 180), minutes=random.randint(0, 1440)),
            category_id=category.id,
            customer_id=customer_id,
        )
        count += 1
    print(f"✅ Seeded {count} transactions")

    print("🔄 Creating HPP calculations and business settings...")
    for _ in range(3):
        create_hpp_calculation(
            db,
            owner_id=user.id,
            product_name=fake.word().capitalize(),
            raw_material_cost=Decimal(random.randrange(100_000, 1_000_000, 10_000)),
            labor_cost=Decimal(random.randrange(50_000, 500_000, 10_000)),
            overhead_cost=Decimal(random.randrange(10_000, 200_000, 10_000)),
            total_units=random.randint(10, 100),
        )
    upsert_business_settings(
        db,
        user.id,
        fixed_costs=Decimal("5000000"),
        target_profit=Decimal("2000000"),
        average_selling_price=Decimal("50000"),
    )
    print(f"🎉 Demo data ready. Use user_id={user.id}")
finally:
    db.close()

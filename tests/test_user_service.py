import pytest

from app.core.config import DefaultCategory, settings
from app.core.exceptions import ValidationError
from app.models.transaction import TransactionCategory, TransactionKind
from app.models.user import User
from app.services.user_service import register_user, update_user_profile


def test_register_seeds_default_categories(db, owner):
    categories = db.query(TransactionCategory).filter(TransactionCategory.user_id == owner.id).all()
    assert len(categories) == len(settings.DEFAULT_CATEGORIES)
    assert {c.name for c in categories if c.kind == TransactionKind.expense} == {"Operational", "Marketing"}


def test_register_is_idempotent(db, owner):
    again, created = register_user(db, "auth-owner", "owner@tokobaru.co.id", "Siti")

    assert created is False
    assert again.id == owner.id
    assert db.query(User).count() == 1
    assert db.query(TransactionCategory).count() == len(settings.DEFAULT_CATEGORIES)


def test_register_with_custom_defaults(db):
    user, created = register_user(
        db,
        "auth-warung",
        "warung@tokobaru.co.id",
        "Dewi",
        default_categories=[
            DefaultCategory(name="Catering", kind="income"),
            DefaultCategory(name="Ingredients", kind="expense", color="#EF4444"),
        ],
    )
    assert created is True
    assert sorted((c.name, c.kind.value) for c in user.categories) == [
        ("Catering", "income"),
        ("Ingredients", "expense"),
    ]


def test_email_taken_by_another_identity(db, owner):
    with pytest.raises(ValidationError):
        register_user(db, "auth-someone-else", "owner@tokobaru.co.id", "Siti")


def test_update_profile_keeps_email(db, owner):
    user = update_user_profile(db, owner.id, business_name="Toko Baru Jaya")
    assert user.business_name == "Toko Baru Jaya"
    assert user.name == "Siti"
    assert user.email == "owner@tokobaru.co.id"


def test_update_unknown_user(db):
    assert update_user_profile(db, 999, name="Nobody") is None


def test_duplicate_defaults_are_seeded_once(db):
    user, _ = register_user(
        db,
        "auth-dupes",
        "dupes@tokobaru.co.id",
        "Eka",
        default_categories=[
            DefaultCategory(name="Sales", kind="income"),
            DefaultCategory(name="Sales", kind="income", color="#000000"),
        ],
    )
    assert len(user.categories) == 1
    assert user.categories[0].color == "#059669"
